# encoding: utf-8
from __future__ import annotations

from typing import Any, Optional

from sqlalchemy.orm import class_mapper
from typing_extensions import Self

import kioskdir.model.meta as meta

__all__ = ['DomainObject']


class DomainObject(object):

    Session = meta.Session

    def __init__(self, **kwargs: Any) -> None:
        for k, v in kwargs.items():
            setattr(self, k, v)

    @classmethod
    def get(cls, reference: str) -> Optional[Self]:
        '''Returns an object referenced by its id.'''
        if not reference:
            return None
        return meta.Session.get(cls, reference)

    @classmethod
    def count(cls) -> int:
        return cls.Session.query(cls).count()

    @classmethod
    def get_columns(cls) -> list[str]:
        return class_mapper(cls).persist_selectable.columns.keys()

    def add(self) -> None:
        self.Session.add(self)

    def delete(self) -> None:
        self.Session.delete(self)

    def as_dict(self) -> dict[str, Any]:
        return {key: getattr(self, key) for key in self.get_columns()}

    def __repr__(self):
        return '<%s id=%s name=%s position=%s>' % (
            self.__class__.__name__,
            getattr(self, 'id', None),
            getattr(self, 'name', None),
            getattr(self, 'position', None),
        )
