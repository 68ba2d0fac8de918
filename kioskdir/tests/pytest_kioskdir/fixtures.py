"""This is a collection of pytest fixtures for use in tests.

There are three type of fixtures available in kioskdir:

* Fixtures that have some side-effect. They don't return any useful
  value and generally should be injected via
  ``pytest.mark.usefixtures``. Ex.: `clean_db`.

* Fixtures that provide value. Ex. `manager`, `ad`

* Fixtures that provide factory function. They are rarely needed, so
  prefer using 'side-effect' or 'value' fixtures. Main use-case when
  one may use function-fixture - late initialization or repeatable
  execution(ex.: cleaning database more than once in a single
  test).

Deeper explanation can be found in `official documentation
<https://docs.pytest.org/en/latest/fixture.html>`_

"""
from __future__ import annotations

import copy

import pytest
from pytest_factoryboy import register

import kioskdir.tests.helpers as test_helpers
import kioskdir.tests.factories as factories

import kioskdir.cli
import kioskdir.model as model
from kioskdir.common import config
from kioskdir.lib.positions import OrderedCollectionManager


@register
class AdFactory(factories.Ad):
    pass


@register
class FloorPlanFactory(factories.FloorPlan):
    pass


@pytest.fixture
def kioskdir_config(request, monkeypatch):
    """Allows to override the configuration object used by tests

    Takes into account config patches introduced by the ``kioskdir_config``
    mark.

    If you just want to set one or more configuration options for the
    scope of a test (or a test class), use the ``kioskdir_config`` mark::

        @pytest.mark.kioskdir_config('kioskdir.positions.lock_timeout', 500)
        def test_lock_timeout():

            # ...

    To use the custom config inside a test, apply the
    ``kioskdir_config`` mark to it and inject the ``kioskdir_config``
    fixture.

    If the change only needs to be applied locally, use the
    ``monkeypatch`` fixture

    """
    _original = copy.deepcopy(config)
    for mark in request.node.iter_markers(u"kioskdir_config"):
        monkeypatch.setitem(config, *mark.args)

    yield config
    config.clear()
    config.update(_original)


@pytest.fixture
def cli(kioskdir_config, monkeypatch):
    """Provides object for invoking CLI commands from tests.

    This is subclass of `click.testing.CliRunner`, so all examples
    from `Click docs
    <https://click.palletsprojects.com/en/master/testing/>`_ are valid
    for it.

    """
    # logging is configured once for the whole test session
    monkeypatch.setattr(
        kioskdir.cli, u"loggingFileConfig", lambda *args, **kwargs: None)
    env = {
        u'KIOSKDIR_INI': kioskdir_config[u'__file__']
    }
    return test_helpers.KioskCliRunner(env=env)


@pytest.fixture(scope=u"session")
def reset_db():
    """Callable for resetting the database to the initial state.

    If possible use the ``clean_db`` fixture instead.

    """
    factories.fake.unique.clear()
    return test_helpers.reset_db


@pytest.fixture
def clean_db(reset_db):
    """Resets the database to the initial state.

    This can be used either for all tests in a class::

        @pytest.mark.usefixtures("clean_db")
        class TestExample(object):

            def test_example(self):

    or for a single test::

        class TestExample(object):

            @pytest.mark.usefixtures("clean_db")
            def test_example(self):

    Every collection starts empty, so tests can assert exact positions.
    """
    reset_db()


@pytest.fixture(scope="session")
def reset_db_once(reset_db):
    """Internal fixture that cleans DB only the first time it's used.
    """
    reset_db()


@pytest.fixture
def non_clean_db(reset_db_once):
    """Guarantees that DB is initialized.

    This fixture either initializes DB if it hasn't been done yet or does
    nothing otherwise. If there is some data in DB, it stays intact. If your
    tests need empty database, use `clean_db` instead, which is much slower,
    but guarantees that there are no data left from the previous test session.

    """
    model.repo.init_db()


@pytest.fixture
def manager():
    """The positioning engine bound to the scoped session."""
    return OrderedCollectionManager()


@pytest.fixture
def storage(tmp_path, monkeypatch):
    """Points ``kioskdir.storage_path`` at a fresh temporary directory and
    returns it."""
    monkeypatch.setitem(config, u"kioskdir.storage_path", str(tmp_path))
    return tmp_path
