# encoding: utf-8
'''Decides which rows of a collection shift, and by how much.

Nothing here touches the database: every function takes the collection's
current size (and the positions involved) and returns a plan, or raises
:py:exc:`~kioskdir.logic.ValidationError` when the request would break
the dense ordering. The plans are applied by
:py:class:`~kioskdir.lib.positions.manager.OrderedCollectionManager`.
'''
from __future__ import annotations

import dataclasses
from collections import Counter
from typing import Any, Hashable, Iterable, Optional, Sequence, Union

from kioskdir.logic import ValidationError

__all__ = [
    'Shift', 'CreatePlan', 'MovePlan', 'DeletePlan', 'ReorderPlan',
    'CompactPlan', 'Plan', 'plan_create', 'plan_move', 'plan_delete',
    'plan_reorder', 'plan_compact',
]


@dataclasses.dataclass(frozen=True)
class Shift:
    '''Add ``delta`` to every position in ``[start, stop)``.

    ``stop`` of ``None`` leaves the range open-ended.
    '''
    start: int
    stop: Optional[int]
    delta: int

    def contains(self, position: int) -> bool:
        if position < self.start:
            return False
        return self.stop is None or position < self.stop

    def apply(self, position: int) -> int:
        return position + self.delta if self.contains(position) else position


@dataclasses.dataclass(frozen=True)
class CreatePlan:
    position: int
    shifts: tuple[Shift, ...] = ()


@dataclasses.dataclass(frozen=True)
class MovePlan:
    current: int
    position: int
    shifts: tuple[Shift, ...] = ()

    @property
    def is_noop(self) -> bool:
        return self.current == self.position


@dataclasses.dataclass(frozen=True)
class DeletePlan:
    position: int
    shifts: tuple[Shift, ...] = ()


@dataclasses.dataclass(frozen=True)
class ReorderPlan:
    # (id, new position) for every member of the collection
    assignments: tuple[tuple[Any, int], ...]

    def position_of(self, id_: Any) -> int:
        return dict(self.assignments)[id_]


@dataclasses.dataclass(frozen=True)
class CompactPlan:
    # only the members whose position changes
    assignments: tuple[tuple[Any, int], ...]


Plan = Union[CreatePlan, MovePlan, DeletePlan, ReorderPlan, CompactPlan]


def _check_position(value: Any, key: str = 'position') -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError({key: ['Must be an integer']})
    return value


def _out_of_range(position: int, lowest: int, highest: int) -> ValidationError:
    if highest < lowest:
        msg = 'Position {} is out of range, the collection is empty'.format(
            position)
    else:
        msg = 'Position {} is out of range [{}, {}]'.format(
            position, lowest, highest)
    return ValidationError({'position': [msg]})


def plan_create(size: int,
                position: Optional[int] = None,
                origin: int = 0) -> CreatePlan:
    '''Plan the insertion of a new member into a collection of ``size``.

    Without a requested position the member is appended. Otherwise every
    member at or after ``position`` moves up by one; requesting a position
    past the end is refused instead of leaving a gap.
    '''
    end = origin + size
    if position is None:
        return CreatePlan(position=end)

    position = _check_position(position)
    if not origin <= position <= end:
        raise _out_of_range(position, origin, end)
    if position == end:
        return CreatePlan(position=end)
    return CreatePlan(
        position=position, shifts=(Shift(position, None, 1),))


def plan_move(size: int, current: int, position: int,
              origin: int = 0) -> MovePlan:
    '''Plan moving the member at ``current`` to ``position``.

    Moving towards the front pushes ``[position, current)`` up by one,
    moving towards the back pulls ``(current, position]`` down by one.
    Moving a member onto its own position is a no-op.
    '''
    position = _check_position(position)
    last = origin + size - 1
    if not origin <= position <= last:
        raise _out_of_range(position, origin, last)

    if position < current:
        shifts: tuple[Shift, ...] = (Shift(position, current, 1),)
    elif position > current:
        shifts = (Shift(current + 1, position + 1, -1),)
    else:
        shifts = ()
    return MovePlan(current=current, position=position, shifts=shifts)


def plan_delete(size: int, position: int, origin: int = 0) -> DeletePlan:
    '''Plan removing the member at ``position``: everything after it moves
    down by one to close the gap.
    '''
    last = origin + size - 1
    if not origin <= position <= last:
        raise _out_of_range(position, origin, last)
    if position == last:
        return DeletePlan(position=position)
    return DeletePlan(
        position=position, shifts=(Shift(position + 1, None, -1),))


def plan_reorder(member_ids: Iterable[Hashable],
                 ordered_ids: Sequence[Hashable],
                 origin: int = 0) -> ReorderPlan:
    '''Plan rewriting every position from a caller supplied ordering.

    ``ordered_ids`` must name each member of the collection exactly once.
    '''
    if not isinstance(ordered_ids, (list, tuple)):
        raise ValidationError({'order': ['Must supply order as a list']})

    errors: list[str] = []
    duplicates = [
        id_ for id_, count in Counter(ordered_ids).items() if count > 1]
    if duplicates:
        errors.append('No duplicates allowed in order: {}'.format(
            ', '.join(str(id_) for id_ in duplicates)))

    members = set(member_ids)
    unknown = [id_ for id_ in dict.fromkeys(ordered_ids) if id_ not in members]
    if unknown:
        errors.append('Not members of the collection: {}'.format(
            ', '.join(str(id_) for id_ in unknown)))

    listed = set(ordered_ids)
    missing = sorted(str(id_) for id_ in members if id_ not in listed)
    if missing:
        errors.append('Order must list every member, missing: {}'.format(
            ', '.join(missing)))

    if errors:
        raise ValidationError({'order': errors})

    return ReorderPlan(assignments=tuple(
        (id_, origin + index) for index, id_ in enumerate(ordered_ids)))


def plan_compact(members: Sequence[tuple[Hashable, Optional[int]]],
                 origin: int = 0) -> CompactPlan:
    '''Plan renumbering ``members`` to a dense sequence.

    ``members`` are ``(id, position)`` pairs already sorted in the order
    they should end up in. Only the members whose position changes are
    part of the plan.
    '''
    return CompactPlan(assignments=tuple(
        (id_, origin + index)
        for index, (id_, position) in enumerate(members)
        if position != origin + index))
