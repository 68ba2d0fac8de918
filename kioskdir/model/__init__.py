# encoding: utf-8
from __future__ import annotations

import warnings
import logging
import os
from typing import Any, Optional

import sqlalchemy as sa
from sqlalchemy import MetaData

from alembic.command import (
    upgrade as alembic_upgrade,
    downgrade as alembic_downgrade,
)
from alembic.config import Config as AlembicConfig
from alembic.runtime.migration import MigrationContext

import kioskdir.model.meta as meta

from kioskdir.model.meta import Session, registry
from kioskdir.exceptions import KioskConfigurationException
from kioskdir.model.ad import (
    Ad,
    ad_table,
    AD_TYPES,
    AD_TYPE_IMAGE,
    AD_TYPE_VIDEO,
)
from kioskdir.model.floor_plan import (
    FloorPlan,
    floor_plan_table,
)
from kioskdir.model.domain_object import (
    DomainObject,
)

import kioskdir.migration
from sqlalchemy.engine import Engine

__all__ = [
    "registry", "Session", "Ad", "ad_table", "AD_TYPES", "AD_TYPE_IMAGE",
    "AD_TYPE_VIDEO",
    "FloorPlan", "floor_plan_table", "DomainObject",
    "init_model", "ensure_engine", "Repository", "repo",
]

log = logging.getLogger(__name__)

SUPPORTED_ENGINES = ('postgres', 'postgresql', 'sqlite')


def init_model(engine: Engine) -> None:
    '''Call me before using any of the tables or classes in the model'''
    meta.Session.remove()
    meta.Session.configure(bind=engine)
    meta.engine = engine


def ensure_engine() -> Engine:
    """Return initialized SQLAlchemy engine or raise an error.

    This function guarantees that engine is initialized and provides a hint
    when someone attempts to use the database before model is properly
    initialized.

    """
    if not meta.engine:
        log.error(
            "%s:%s must be called before any interaction with the database",
            init_model.__module__, init_model.__name__

        )
        raise KioskConfigurationException("Model is not initialized")
    return meta.engine


class Repository():
    metadata: MetaData
    session: Any
    commit: Any

    _alembic_ini: str = os.path.join(
        os.path.dirname(kioskdir.migration.__file__),
        u"alembic.ini"
    )

    # note: tables_created value is not sustained between instantiations
    #       so only useful for tests. The alternative is to use
    #       are_tables_created().
    tables_created_and_initialised: bool = False

    def __init__(self, metadata: MetaData, session: Any) -> None:
        self.metadata = metadata
        self.session = session
        self.commit = session.commit

    def commit_and_remove(self) -> None:
        self.session.commit()
        self.session.remove()

    def init_db(self) -> None:
        '''Ensures tables are created.
        This method MUST be run before using kioskdir for the first time.
        Before this method is run, you can either have a clean db or tables
        that may have been setup with either upgrade_db or a previous run of
        init_db.
        '''
        self.session.rollback()
        self.session.remove()

        if not self.tables_created_and_initialised:
            self.upgrade_db()
            self.tables_created_and_initialised = True
        log.info('Database initialised')

    def clean_db(self) -> None:
        self.commit_and_remove()
        engine = ensure_engine()

        reflected = MetaData()
        with warnings.catch_warnings():
            warnings.filterwarnings('ignore', '.*reflection.*')
            reflected.reflect(engine)

        with engine.begin() as conn:
            reflected.drop_all(conn)

        self.tables_created_and_initialised = False
        log.info('Database tables dropped')

    def create_db(self) -> None:
        '''Create the tables straight from the model metadata, bypassing
        migrations.
        '''
        with ensure_engine().begin() as conn:
            self.metadata.create_all(conn)

        log.info('Database tables created')

    def rebuild_db(self) -> None:
        '''Clean and init the db'''
        if self.tables_created_and_initialised:
            # just delete data, leaving tables - this is faster
            self.delete_all()
        else:
            # delete tables and data
            self.clean_db()
        self.session.remove()
        self.init_db()
        log.info('Database rebuilt')

    def delete_all(self) -> None:
        '''Delete all data from all tables.'''
        self.session.remove()
        connection: Any = self.session.connection()
        inspector = sa.inspect(connection)
        for table in reversed(self.metadata.sorted_tables):
            # if custom model imported without migrations applied,
            # corresponding table can be missing from DB
            if not inspector.has_table(table.name):
                continue
            connection.execute(sa.delete(table))
        self.session.commit()
        log.info('Database table data deleted')

    def _alembic_config(self) -> AlembicConfig:
        alembic_config = AlembicConfig(self._alembic_ini)
        alembic_config.set_main_option(
            "script_location",
            os.path.dirname(kioskdir.migration.__file__)
        )
        alembic_config.set_main_option(
            "sqlalchemy.url",
            ensure_engine().url.render_as_string(hide_password=False)
        )
        return alembic_config

    def _check_engine(self) -> Engine:
        engine = ensure_engine()
        if engine.name not in SUPPORTED_ENGINES:
            log.error(
                'Only Postgresql and SQLite engines supported (not %s).',
                engine.name,
            )
            raise KioskConfigurationException(engine.name)
        return engine

    def current_version(self) -> Optional[str]:
        """Returns current revision of the migration repository or None
        when no migration was applied yet.
        """
        with ensure_engine().connect() as conn:
            return MigrationContext.configure(conn).get_current_revision()

    def upgrade_db(self, version: str = 'head') -> None:
        '''Upgrade db using alembic migrations.

        @param version: version to upgrade to (if None upgrade to latest)
        '''
        engine = self._check_engine()
        version_before = self.current_version()

        alembic_config = self._alembic_config()
        with engine.begin() as connection:
            alembic_config.attributes['connection'] = connection
            alembic_upgrade(alembic_config, version)

        version_after = self.current_version()
        if version_after != version_before:
            log.info(
                u'kioskdir database version upgraded: %s -> %s',
                version_before,
                version_after
            )
        else:
            log.info(
                u'kioskdir database version remains as: %s', version_after)

    def downgrade_db(self, version: str = 'base') -> None:
        engine = self._check_engine()
        alembic_config = self._alembic_config()
        with engine.begin() as connection:
            alembic_config.attributes['connection'] = connection
            alembic_downgrade(alembic_config, version)
        self.tables_created_and_initialised = False
        log.info(u'kioskdir database version set to: %s', version)

    def are_tables_created(self) -> bool:
        if not meta.engine:
            return False
        inspector = sa.inspect(meta.engine)
        return all(
            inspector.has_table(table.name)
            for table in self.metadata.sorted_tables)


repo = Repository(meta.metadata, meta.Session)
