# encoding: utf-8
from __future__ import annotations

import logging

import click

from kioskdir.lib.positions import OrderedCollectionManager, collection_names

log = logging.getLogger(__name__)

collection_argument = click.argument(
    u'collection', type=click.Choice(collection_names()))


@click.group(short_help=u"Inspect and repair collection positions.")
def positions():
    """Inspect and repair the ordering of ads and floor plans.
    """
    pass


@positions.command(u'list')
@collection_argument
def list_(collection: str):
    """List the members of COLLECTION in display order.
    """
    for obj in OrderedCollectionManager().list(collection):
        click.echo(u'{:>4}  {}  {}'.format(obj.position, obj.id, obj.name))


@positions.command()
@collection_argument
def check(collection: str):
    """Verify that COLLECTION uses the positions 0..N-1 exactly once.
    """
    problems = OrderedCollectionManager().check(collection)
    for problem in problems:
        click.secho(problem, fg=u'red', err=True)
    if problems:
        raise click.ClickException(
            u'{} has {} position problem(s), run `kioskdir positions '
            u'compact {}` to repair'.format(
                collection, len(problems), collection))
    click.secho(u'{}: OK'.format(collection), fg=u'green', bold=True)


@positions.command()
@collection_argument
def compact(collection: str):
    """Renumber COLLECTION to 0..N-1, keeping its current order.
    """
    changed = OrderedCollectionManager().compact(collection)
    click.secho(
        u'{}: {} position(s) changed'.format(collection, changed),
        fg=u'green', bold=True)
