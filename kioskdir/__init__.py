# encoding: utf-8

__version__ = '1.0.0'

__description__ = 'Kiosk directory administration backend'
__long_description__ = \
'''
Backend for administering kiosk directories: advertisements shown on the
kiosks and the floor plans visitors browse.

Both catalogs are ordered collections whose members always occupy the
dense positions 0..N-1, whatever sequence of creates, moves, deletes and
bulk reorders is applied to them.
'''
__license__ = 'AGPL'
