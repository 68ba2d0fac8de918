# encoding: utf-8

pytest_plugins = [
    u'kioskdir.tests.pytest_kioskdir.kioskdir_setup',
    u'kioskdir.tests.pytest_kioskdir.fixtures',
]
