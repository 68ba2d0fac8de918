# encoding: utf-8
'''Identity of the ordered collections.

Every collection is an independent ordering domain: its members hold the
positions ``origin .. origin + N - 1`` and nothing done to one collection
affects the positions of another.
'''
from __future__ import annotations

import threading
from typing import Any, Optional

import sqlalchemy as sa

import kioskdir.model as model
from kioskdir.logic import ValidationError

__all__ = ['Collection', 'get_collection', 'collection_names',
           'ADS', 'FLOOR_PLANS', 'ORIGIN']

ADS = 'ads'
FLOOR_PLANS = 'floor_plans'

# first position of every collection
ORIGIN = 0


class Collection(object):
    name: str
    model_class: Any
    origin: int
    unique_field: Optional[str]
    file_field: Optional[str]
    mutex: threading.RLock

    def __init__(self, name: str, model_class: Any,
                 unique_field: Optional[str] = None,
                 file_field: Optional[str] = None,
                 origin: int = ORIGIN) -> None:
        self.name = name
        self.model_class = model_class
        self.unique_field = unique_field
        self.file_field = file_field
        self.origin = origin
        self.mutex = threading.RLock()

    @property
    def table(self) -> sa.Table:
        return sa.inspect(self.model_class).persist_selectable

    @property
    def label(self) -> str:
        return self.model_class.__name__

    def __repr__(self):
        return '<Collection %s>' % self.name


_collections: dict[str, Collection] = {
    ADS: Collection(ADS, model.Ad, file_field='file_url'),
    FLOOR_PLANS: Collection(
        FLOOR_PLANS, model.FloorPlan,
        unique_field='name', file_field='image_url'),
}


def collection_names() -> list[str]:
    return sorted(_collections)


def get_collection(collection: 'str | Collection') -> Collection:
    '''Return the registered collection with the given name.

    :raises: :py:exc:`~kioskdir.logic.ValidationError` for an unknown name
    '''
    if isinstance(collection, Collection):
        return collection
    try:
        return _collections[collection]
    except KeyError:
        raise ValidationError({'collection': [
            'Unknown collection "{}", expected one of: {}'.format(
                collection, ', '.join(collection_names()))
        ]})
