# encoding: utf-8
from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.orm import Mapped

import kioskdir.model.meta as meta
import kioskdir.model.types as _types
import kioskdir.model.domain_object as domain_object

__all__ = ['Ad', 'ad_table', 'AD_TYPES', 'AD_TYPE_IMAGE', 'AD_TYPE_VIDEO']

AD_TYPE_IMAGE = 'image'
AD_TYPE_VIDEO = 'video'
AD_TYPES = (AD_TYPE_IMAGE, AD_TYPE_VIDEO)


ad_table = sa.Table(
    'ad', meta.metadata,
    sa.Column('id', sa.types.UnicodeText, primary_key=True,
              default=_types.make_uuid),
    sa.Column('name', sa.types.UnicodeText, nullable=False),
    sa.Column('type', sa.types.UnicodeText, nullable=False,
              default=AD_TYPE_IMAGE),
    sa.Column('file_url', sa.types.UnicodeText, nullable=False),
    sa.Column('is_active', sa.types.Boolean, nullable=False, default=True),
    sa.Column('position', sa.types.Integer, nullable=False),
    sa.Index('idx_ad_position', 'position'),
)


class Ad(domain_object.DomainObject):
    '''An advertisement shown on the kiosks.

    Ads are shown in ascending ``position`` order; inactive ads keep their
    slot in the ordering but are left out of the kiosk listing.
    '''
    id: Mapped[str]
    name: Mapped[str]
    type: Mapped[str]
    file_url: Mapped[str]
    is_active: Mapped[bool]
    position: Mapped[int]


meta.registry.map_imperatively(Ad, ad_table)
