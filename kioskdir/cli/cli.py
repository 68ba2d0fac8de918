# encoding: utf-8
from __future__ import annotations

import logging
from typing import Optional

import click

import kioskdir.cli as kioskdir_cli
from kioskdir.config.environment import load_environment
from kioskdir.exceptions import KioskConfigurationException
from . import db, positions, error_shout

log = logging.getLogger(__name__)


class CtxObject(object):

    def __init__(self, conf: Optional[str] = None):
        # Don't import `load_config` by itself, rather call it using
        # module so that it can be patched during tests
        raw_config = kioskdir_cli.load_config(conf)
        load_environment(raw_config)

        # Attach the actual kioskdir config object to the context
        from kioskdir.common import config
        self.config = config


def _init_kioskdir_config(ctx: click.Context, param: str, value: str):
    if ctx.resilient_parsing:
        return
    _add_ctx_object(ctx, value)


def _add_ctx_object(ctx: click.Context, path: Optional[str] = None):
    """Initialize kioskdir environment using config file available under
    provided path.

    """
    try:
        ctx.obj = CtxObject(path)
    except KioskConfigurationException as e:
        error_shout(e)
        ctx.abort()


@click.group()
@click.option(
    u'-c', u'--config', metavar=u'CONFIG',
    is_eager=True, callback=_init_kioskdir_config, expose_value=False,
    help=u'Config file to use (default: kioskdir.ini)')
@click.help_option(u'-h', u'--help')
def kioskdir():
    pass


kioskdir.add_command(db.db)
kioskdir.add_command(positions.positions)
