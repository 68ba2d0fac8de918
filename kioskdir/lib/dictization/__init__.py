# encoding: utf-8
'''Turning rows and mapped objects into JSON friendly dicts.'''
from __future__ import annotations

import datetime
from typing import Any

from sqlalchemy.engine import Row  # type: ignore
from sqlalchemy.orm import class_mapper

from kioskdir.types import Context


def _plain(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int)):
        return value
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return str(value)


def _field_names(obj: Any) -> list[str]:
    if isinstance(obj, Row):
        return list(obj._fields)
    return [column.name
            for column in class_mapper(type(obj)).persist_selectable.c]


def table_dictize(obj: Any, context: Context, **kw: Any) -> dict[str, Any]:
    '''Return every column of ``obj``, a result row or a mapped object,
    as plain values. Keyword arguments are added to the result.'''
    dictized = {name: _plain(getattr(obj, name))
                for name in _field_names(obj)}
    dictized.update(kw)
    return dictized
