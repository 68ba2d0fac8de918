# encoding: utf-8
from unittest import mock

import pytest

import kioskdir.model as model
from kioskdir.lib.positions import ADS, FLOOR_PLANS, get_collection
from kioskdir.lib.positions.accessor import PositionAccessor
from kioskdir.lib.positions.policy import Shift


def _postgres_session():
    session = mock.Mock()
    session.get_bind.return_value.dialect.name = "postgresql"
    return session


def _statements(session):
    return [str(c.args[0]) for c in session.execute.call_args_list]


class TestLock(object):
    def test_locks_the_collection_table(self):
        session = _postgres_session()
        PositionAccessor(session, get_collection(FLOOR_PLANS)).lock()
        assert _statements(session) == [
            'LOCK TABLE "floor_plan" IN SHARE ROW EXCLUSIVE MODE']

    @pytest.mark.kioskdir_config("kioskdir.positions.lock_timeout", 250)
    def test_lock_timeout(self):
        session = _postgres_session()
        PositionAccessor(session, get_collection(ADS)).lock()
        assert _statements(session) == [
            "SET LOCAL lock_timeout = '250ms'",
            'LOCK TABLE "ad" IN SHARE ROW EXCLUSIVE MODE',
        ]

    @pytest.mark.kioskdir_config("kioskdir.positions.lock_collection", False)
    def test_locking_disabled(self):
        session = _postgres_session()
        PositionAccessor(session, get_collection(ADS)).lock()
        session.execute.assert_not_called()

    def test_sqlite_relies_on_the_mutex(self):
        session = mock.Mock()
        session.get_bind.return_value.dialect.name = "sqlite"
        PositionAccessor(session, get_collection(ADS)).lock()
        session.execute.assert_not_called()


@pytest.mark.usefixtures("clean_db")
class TestReadWrite(object):
    def _accessor(self):
        return PositionAccessor(model.Session, get_collection(ADS))

    def test_count_and_ids(self, ad_factory):
        ads = [ad_factory() for _ in range(3)]
        accessor = self._accessor()
        assert accessor.count() == 3
        assert sorted(accessor.ids()) == sorted(ad["id"] for ad in ads)

    def test_count_of_empty_collection(self):
        assert self._accessor().count() == 0

    def test_get_without_id(self):
        assert self._accessor().get("") is None

    def test_shift_moves_only_the_range(self, ad_factory):
        ads = [ad_factory() for _ in range(5)]
        accessor = self._accessor()
        assert accessor.shift(Shift(1, 3, 1)) == 2
        assert [accessor.get(ad["id"]).position for ad in ads] == [
            0, 2, 3, 3, 4]
        model.Session.rollback()

    def test_open_ended_shift(self, ad_factory):
        ads = [ad_factory() for _ in range(4)]
        accessor = self._accessor()
        assert accessor.shift(Shift(2, None, -1)) == 2
        assert [accessor.get(ad["id"]).position for ad in ads] == [
            0, 1, 1, 2]
        model.Session.rollback()

    def test_members_in_position_order(self, ad_factory):
        first = ad_factory(name="b")
        second = ad_factory(name="a")
        members = self._accessor().members()
        assert members == [(first["id"], 0), (second["id"], 1)]
