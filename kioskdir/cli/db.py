# encoding: utf-8
from __future__ import annotations

import logging
from typing import Callable

import click

import kioskdir.model as model
from . import error_shout

log = logging.getLogger(__name__)


def _run(step: str, func: Callable[[], None]) -> None:
    try:
        func()
    except Exception as e:
        log.debug(u'%s failed', step, exc_info=True)
        error_shout(e)
        raise click.Abort()
    click.secho(u'{}: SUCCESS'.format(step), fg=u'green', bold=True)


@click.group(short_help=u"Create, migrate and drop the kioskdir tables.")
def db():
    """Manage the ad and floor plan tables.
    """
    pass


@db.command()
def init():
    """Create the tables, or bring existing ones up to date.
    """
    _run(u'Initialising DB', model.repo.init_db)


@db.command()
@click.confirmation_option(
    prompt=u'Every ad and floor plan will be deleted. Continue?')
def clean():
    """Drop every table.
    """
    _run(u'Cleaning DB', model.repo.clean_db)


@db.command()
@click.option(u'-v', u'--version', default=u'head',
              help=u'Revision to upgrade to (default: head)')
def upgrade(version: str):
    """Apply the migrations up to VERSION.
    """
    _run(u'Upgrading DB', lambda: model.repo.upgrade_db(version))


@db.command()
@click.option(u'-v', u'--version', default=u'base',
              help=u'Revision to downgrade to (default: base, no tables)')
def downgrade(version: str):
    """Revert the migrations down to VERSION.
    """
    _run(u'Downgrading DB', lambda: model.repo.downgrade_db(version))


@db.command()
def version():
    """Print the revision the database is at, ``base`` when empty.
    """
    click.secho(model.repo.current_version() or u'base', bold=True)
