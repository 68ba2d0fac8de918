# encoding: utf-8
'''Runs every change to a collection's ordering as one transaction.

Each public operation locks the collection, reads the little state it
needs, asks :py:mod:`~kioskdir.lib.positions.policy` for a plan, applies
the plan's shifts and the primary write through a
:py:class:`~kioskdir.lib.positions.accessor.PositionAccessor` and commits.
Any error rolls the whole transaction back, so a half applied shift is never
visible to anybody.

Work that must not be undone by a failure elsewhere (e.g. removing the
uploaded file of a deleted row) is registered with ``after_commit`` and only
runs once the transaction is committed.
'''
from __future__ import annotations

import contextlib
import logging
from typing import Any, Callable, Iterator, Optional, Sequence, Union

import sqlalchemy.exc

import kioskdir.model as model
import kioskdir.lib.positions.policy as policy
from kioskdir.lib.positions.accessor import PositionAccessor
from kioskdir.lib.positions.collection import Collection, get_collection
from kioskdir.logic import Conflict, NotFound, ValidationError

log = logging.getLogger(__name__)

__all__ = ['OrderedCollectionManager', 'Transaction']

CollectionRef = Union[str, Collection]


class Transaction(object):
    '''State of one running manager operation.'''
    accessor: PositionAccessor
    collection: Collection
    _callbacks: list[tuple[Callable[..., Any], tuple[Any, ...]]]

    def __init__(self, accessor: PositionAccessor) -> None:
        self.accessor = accessor
        self.collection = accessor.collection
        self._callbacks = []

    def after_commit(self, func: Callable[..., Any], *args: Any) -> None:
        '''Run ``func(*args)`` once the transaction has been committed.

        Failures are logged and ignored: the committed change stays.
        '''
        self._callbacks.append((func, args))

    def run_callbacks(self) -> None:
        for func, args in self._callbacks:
            try:
                func(*args)
            except Exception:
                log.exception(
                    'Post-commit cleanup %s%r failed for %s',
                    getattr(func, '__name__', func), args,
                    self.collection.name)


class OrderedCollectionManager(object):
    '''The only writer of the ``position`` column.

    Usage::

        manager = OrderedCollectionManager()
        ad = manager.create('ads', {'name': 'Summer sale',
                                    'file_url': 'ads/sale.png'}, position=0)
        manager.move('ads', ad.id, 3)
        manager.reorder('ads', [ad.id for ad in reversed(manager.list('ads'))])

    '''
    session: Any

    def __init__(self, session: Any = None) -> None:
        self.session = session if session is not None else model.Session

    @contextlib.contextmanager
    def transaction(self, collection: CollectionRef) -> Iterator[Transaction]:
        '''Open a transaction holding the lock of ``collection``.

        Commits when the block exits normally, rolls back on any exception
        and re-raises it. Post-commit callbacks run after the lock has been
        released.
        '''
        coll = get_collection(collection)
        with coll.mutex:
            # a transaction left open by the caller must not leak into ours
            self.session.rollback()
            txn = Transaction(PositionAccessor(self.session, coll))
            try:
                txn.accessor.lock()
                yield txn
                self.session.commit()
            except sqlalchemy.exc.IntegrityError as e:
                self.session.rollback()
                log.info('Rolled back %s operation: %s', coll.name, e.orig)
                raise self._conflict(coll, e) from e
            except Exception:
                self.session.rollback()
                raise
        txn.run_callbacks()

    def _conflict(self, collection: Collection,
                  error: sqlalchemy.exc.IntegrityError) -> Conflict:
        if collection.unique_field:
            return Conflict(
                'A {} with this {} already exists.'.format(
                    collection.label, collection.unique_field))
        return Conflict(str(error.orig))

    def _get_or_404(self, txn: Transaction, id_: str) -> Any:
        obj = txn.accessor.get(id_)
        if obj is None:
            raise NotFound('{} with ID "{}" not found'.format(
                txn.collection.label, id_))
        return obj

    def _check_fields(self, collection: Collection,
                      fields: dict[str, Any]) -> None:
        columns = set(collection.model_class.get_columns())
        errors = {}
        for key in fields:
            if key in ('id', 'position'):
                errors[key] = ['Can not be set directly']
            elif key not in columns:
                errors[key] = ['Unknown field']
        if errors:
            raise ValidationError(errors)

    def _check_required(self, collection: Collection,
                        fields: dict[str, Any], partial: bool) -> None:
        errors = {}
        for column in collection.table.columns:
            if (column.nullable or column.primary_key
                    or column.name == 'position'):
                continue
            if column.name in fields:
                missing = fields[column.name] is None
            else:
                # column defaults only fill in values that were not given
                missing = not partial and column.default is None \
                    and column.server_default is None
            if missing:
                errors[column.name] = ['Missing value']
        if errors:
            raise ValidationError(errors)

    def _schedule_file_removal(self, txn: Transaction, old: Optional[str],
                               new: Optional[str] = None) -> None:
        # imported here, uploader needs the config loaded
        from kioskdir.lib.uploader import delete_file
        if old and old != new:
            txn.after_commit(delete_file, old)

    def get(self, collection: CollectionRef, id_: str) -> Any:
        coll = get_collection(collection)
        obj = PositionAccessor(self.session, coll).get(id_)
        if obj is None:
            raise NotFound('{} with ID "{}" not found'.format(coll.label, id_))
        return obj

    def list(self, collection: CollectionRef, **filters: Any) -> list[Any]:
        '''Return the members of ``collection`` in ascending position.'''
        coll = get_collection(collection)
        return PositionAccessor(self.session, coll).list(**filters)

    def create(self, collection: CollectionRef, fields: dict[str, Any],
               position: Optional[int] = None) -> Any:
        '''Insert a new member, appended unless ``position`` is given.'''
        coll = get_collection(collection)
        self._check_fields(coll, fields)
        self._check_required(coll, fields, partial=False)
        with self.transaction(coll) as txn:
            plan = policy.plan_create(
                txn.accessor.count(), position, coll.origin)
            log.debug('%s create plan: %r', coll.name, plan)
            txn.accessor.apply_shifts(plan.shifts)
            obj = coll.model_class(position=plan.position, **fields)
            txn.accessor.insert(obj)
        log.info('Created %s %s at position %s',
                 coll.label, obj.id, obj.position)
        return obj

    def move(self, collection: CollectionRef, id_: str, position: int) -> Any:
        '''Move a member to ``position``, shifting the members in between.'''
        return self.update(collection, id_, {}, position=position)

    def update(self, collection: CollectionRef, id_: str,
               fields: dict[str, Any],
               position: Optional[int] = None) -> Any:
        '''Change the fields of a member and optionally move it, atomically.

        A replaced file reference is deleted from storage after commit.
        '''
        coll = get_collection(collection)
        self._check_fields(coll, fields)
        self._check_required(coll, fields, partial=True)
        with self.transaction(coll) as txn:
            obj = self._get_or_404(txn, id_)
            if position is not None:
                plan = policy.plan_move(
                    txn.accessor.count(), obj.position, position, coll.origin)
                log.debug('%s move plan: %r', coll.name, plan)
                if not plan.is_noop:
                    txn.accessor.apply_shifts(plan.shifts)
                    txn.accessor.set_position(obj, plan.position)

            if coll.file_field and coll.file_field in fields:
                self._schedule_file_removal(
                    txn, getattr(obj, coll.file_field),
                    fields[coll.file_field])
            for key, value in fields.items():
                setattr(obj, key, value)
            txn.accessor.flush()
        log.info('Updated %s %s, position %s', coll.label, obj.id, obj.position)
        return obj

    def delete(self, collection: CollectionRef, id_: str) -> None:
        '''Remove a member and close the gap it leaves behind.'''
        coll = get_collection(collection)
        with self.transaction(coll) as txn:
            obj = self._get_or_404(txn, id_)
            plan = policy.plan_delete(
                txn.accessor.count(), obj.position, coll.origin)
            log.debug('%s delete plan: %r', coll.name, plan)
            txn.accessor.apply_shifts(plan.shifts)
            if coll.file_field:
                self._schedule_file_removal(
                    txn, getattr(obj, coll.file_field))
            txn.accessor.delete(obj)
        log.info('Deleted %s %s from position %s',
                 coll.label, id_, plan.position)

    def reorder(self, collection: CollectionRef,
                ordered_ids: Sequence[str]) -> list[str]:
        '''Rewrite every position from ``ordered_ids``, which must list each
        member exactly once. Returns the new order.'''
        coll = get_collection(collection)
        with self.transaction(coll) as txn:
            plan = policy.plan_reorder(
                txn.accessor.ids(), ordered_ids, coll.origin)
            log.debug('%s reorder plan: %r', coll.name, plan)
            txn.accessor.assign(plan.assignments)
        log.info('Reordered %s %s', len(plan.assignments), coll.name)
        return [id_ for id_, _ in plan.assignments]

    def check(self, collection: CollectionRef) -> list[str]:
        '''Return a description of every way the collection's positions
        differ from ``origin .. origin + N - 1``. Empty when they don't.'''
        coll = get_collection(collection)
        members = PositionAccessor(self.session, coll).members()
        problems = []
        seen: dict[int, str] = {}
        for id_, position in members:
            if position is None:
                problems.append('{} has no position'.format(id_))
            elif position in seen:
                problems.append('{} and {} share position {}'.format(
                    seen[position], id_, position))
            else:
                seen[position] = id_
        expected = set(range(coll.origin, coll.origin + len(members)))
        for position in sorted(expected - set(seen)):
            problems.append('position {} is unused'.format(position))
        for position in sorted(set(seen) - expected):
            problems.append('position {} is out of range'.format(position))
        return problems

    def compact(self, collection: CollectionRef) -> int:
        '''Renumber the collection to a dense sequence, keeping the current
        relative order (nulls last, ties broken by name).

        Returns the number of members whose position changed.
        '''
        coll = get_collection(collection)
        with self.transaction(coll) as txn:
            plan = policy.plan_compact(
                txn.accessor.members(), coll.origin)
            txn.accessor.assign(plan.assignments)
        if plan.assignments:
            log.info('Compacted %s: %s positions changed',
                     coll.name, len(plan.assignments))
        return len(plan.assignments)
