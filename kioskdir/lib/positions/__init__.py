# encoding: utf-8
'''Dense ordering of the ads and floor plans catalogs.'''

from kioskdir.lib.positions.collection import (
    ADS, FLOOR_PLANS, Collection, get_collection, collection_names,
)
from kioskdir.lib.positions.manager import OrderedCollectionManager

__all__ = [
    'ADS', 'FLOOR_PLANS', 'Collection', 'get_collection',
    'collection_names', 'OrderedCollectionManager',
]
