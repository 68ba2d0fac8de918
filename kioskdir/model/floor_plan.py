# encoding: utf-8
from __future__ import annotations

from typing import Optional

import sqlalchemy as sa
from sqlalchemy.orm import Mapped
from typing_extensions import Self

import kioskdir.model.meta as meta
import kioskdir.model.types as _types
import kioskdir.model.domain_object as domain_object

__all__ = ['FloorPlan', 'floor_plan_table']


floor_plan_table = sa.Table(
    'floor_plan', meta.metadata,
    sa.Column('id', sa.types.UnicodeText, primary_key=True,
              default=_types.make_uuid),
    sa.Column('name', sa.types.UnicodeText, nullable=False, unique=True),
    sa.Column('image_url', sa.types.UnicodeText, nullable=False),
    sa.Column('position', sa.types.Integer, nullable=False),
    sa.Index('idx_floor_plan_position', 'position'),
)


class FloorPlan(domain_object.DomainObject):
    id: Mapped[str]
    name: Mapped[str]
    image_url: Mapped[str]
    position: Mapped[int]

    @classmethod
    def by_name(cls, name: str) -> Optional[Self]:
        return meta.Session.query(cls).filter_by(name=name).first()


meta.registry.map_imperatively(FloorPlan, floor_plan_table)
