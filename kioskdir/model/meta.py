# encoding: utf-8

"""SQLAlchemy Metadata and Session object"""
from typing import Optional
from sqlalchemy import MetaData
import sqlalchemy.orm as orm
from sqlalchemy.engine import Engine


__all__ = ['Session']


# SQLAlchemy database engine. Updated by model.init_model()
engine: Optional[Engine] = None


Session = orm.scoped_session(orm.sessionmaker(
    autoflush=False,
    expire_on_commit=False,
))


# Global metadata. If you have multiple databases with overlapping table
# names, you'll need a metadata for each database
metadata = MetaData()

registry = orm.registry(metadata=metadata)
