# encoding: utf-8
'''This is a collection of helper functions for use in tests.

We want to avoid sharing test helper functions between test modules as
much as possible, and we definitely don't want to share test fixtures
between test modules, or to introduce a complex hierarchy of test class
subclasses, etc.

We want to reduce the amount of "travel" that a reader needs to undertake
to understand a test method -- reducing the number of other files they need
to go and read to understand what the test code does. And we want to
avoid tightly coupling test modules to each other by having them share
code.

But some test helper functions just increase the readability of tests so
much and make writing tests so much easier, that it's worth having them
despite the potential drawbacks.

This module is reserved for these very useful functions.

'''
from __future__ import annotations

from click.testing import CliRunner
from sqlalchemy.orm import close_all_sessions

import kioskdir.model as model
import kioskdir.logic as logic


def reset_db():
    """Reset kioskdir's database.

    Rather than use this function directly, use the ``clean_db`` fixture
    either for all tests in a class::

        @pytest.mark.usefixtures("clean_db")
        class TestExample(object):

            def test_example(self):

    or for a single test::

        class TestExample(object):

            @pytest.mark.usefixtures("clean_db")
            def test_example(self):

    :returns: ``None``

    """
    # Close any database connections that have been left open.
    close_all_sessions()

    model.repo.rebuild_db()


def call_action(action_name, context=None, **kwargs):
    """Call the named ``kioskdir.logic.action`` function and return the
    result.

    This is just a nicer way for user code to call action functions, nicer
    than either calling the action function directly or via
    :py:func:`kioskdir.logic.get_action`.

    For example::

        ad_dict = call_action('ad_create', name='Summer sale',
                              file_url='ads/summer.png', position=0)

    Any keyword arguments given will be wrapped in a dict and passed to the
    action function as its ``data_dict`` argument.

    :param action_name: the name of the action function to call, e.g.
        ``'ad_update'``
    :type action_name: string
    :param context: the context dict to pass to the action function
        (optional, if no context is given a default one will be supplied)
    :type context: dict
    :returns: the dict or other value that the action function returns

    """
    if context is None:
        context = {}
    context.setdefault("user", "127.0.0.1")
    return logic.get_action(action_name)(context=context, data_dict=kwargs)


def positions(collection_model):
    """Return ``{name: position}`` of every row of a collection, read
    straight from the database."""
    model.Session.expire_all()
    return {
        obj.name: obj.position
        for obj in model.Session.query(collection_model)
    }


def names_in_order(collection_model):
    """Return the names of a collection's rows sorted by position."""
    model.Session.expire_all()
    return [
        obj.name for obj in model.Session.query(collection_model).order_by(
            collection_model.position)
    ]


class KioskCliRunner(CliRunner):
    def invoke(self, *args, **kwargs):
        # prevent cli runner from str/bytes exceptions
        kwargs.setdefault(u'complete_var', u'_KIOSKDIR_COMPLETE')
        return super(KioskCliRunner, self).invoke(*args, **kwargs)
