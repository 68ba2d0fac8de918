# encoding: utf-8
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

import sqlalchemy as sa

from kioskdir.common import config
from kioskdir.lib.positions.collection import Collection
from kioskdir.lib.positions.policy import Shift

log = logging.getLogger(__name__)

__all__ = ['PositionAccessor']


class PositionAccessor(object):
    '''Reads and writes the ``position`` column of one collection through
    the session of the surrounding transaction.

    Only :py:class:`~kioskdir.lib.positions.manager.OrderedCollectionManager`
    creates accessors; nothing else is allowed to write positions.
    '''
    session: Any
    collection: Collection

    def __init__(self, session: Any, collection: Collection) -> None:
        self.session = session
        self.collection = collection

    @property
    def _model(self) -> Any:
        return self.collection.model_class

    def lock(self) -> None:
        '''Serialise writers of this collection until the transaction ends.

        PostgreSQL gets a table lock that conflicts with itself but not with
        plain reads; other backends rely on the collection mutex held by the
        manager.
        '''
        if not config.get('kioskdir.positions.lock_collection'):
            return
        dialect = self.session.get_bind().dialect.name
        if dialect not in ('postgres', 'postgresql'):
            return

        timeout = config.get('kioskdir.positions.lock_timeout')
        if timeout:
            self.session.execute(
                sa.text("SET LOCAL lock_timeout = '{:d}ms'".format(timeout)))
        log.debug('Locking table %s', self.collection.table.name)
        self.session.execute(sa.text(
            'LOCK TABLE "{}" IN SHARE ROW EXCLUSIVE MODE'.format(
                self.collection.table.name)))

    def count(self) -> int:
        return self.session.query(
            sa.func.count(self._model.id)).scalar() or 0

    def get(self, id_: str) -> Optional[Any]:
        if not id_:
            return None
        return self.session.get(self._model, id_)

    def ids(self) -> list[str]:
        return [row[0] for row in self.session.query(self._model.id)]

    def list(self, **filters: Any) -> list[Any]:
        q = self.session.query(self._model)
        if filters:
            q = q.filter_by(**filters)
        return q.order_by(self._model.position).all()

    def members(self) -> list[tuple[str, Optional[int]]]:
        '''Return ``(id, position)`` of every member, nulls last, ties broken
        by name then id.'''
        position = self._model.position
        q = self.session.query(self._model.id, position).order_by(
            position.is_(None), position, self._model.name, self._model.id)
        return [(row[0], row[1]) for row in q]

    def shift(self, shift: Shift) -> int:
        '''Apply one range shift, returns the number of rows moved.'''
        position = self._model.position
        criteria = [position >= shift.start]
        if shift.stop is not None:
            criteria.append(position < shift.stop)
        stmt = sa.update(self._model).where(*criteria).values(
            position=position + shift.delta
        ).execution_options(synchronize_session='fetch')
        result = self.session.execute(stmt)
        log.debug('Shifted %s rows of %s in [%s, %s) by %+d',
                  result.rowcount, self.collection.name,
                  shift.start, shift.stop, shift.delta)
        return result.rowcount

    def apply_shifts(self, shifts: Iterable[Shift]) -> None:
        for shift in shifts:
            self.shift(shift)

    def insert(self, obj: Any) -> Any:
        self.session.add(obj)
        self.session.flush()
        return obj

    def set_position(self, obj: Any, position: int) -> None:
        obj.position = position

    def assign(self, assignments: Sequence[tuple[str, int]]) -> None:
        '''Write the given ``(id, position)`` pairs in one batch.'''
        if not assignments:
            return
        objs = {
            obj.id: obj for obj in self.session.query(self._model).filter(
                self._model.id.in_([id_ for id_, _ in assignments]))
        }
        for id_, position in assignments:
            objs[id_].position = position
        self.session.flush()

    def delete(self, obj: Any) -> None:
        self.session.delete(obj)
        self.session.flush()

    def flush(self) -> None:
        self.session.flush()
