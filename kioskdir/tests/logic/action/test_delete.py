# encoding: utf-8
'''Unit tests for kioskdir/logic/action/delete.py.'''
import pytest

import kioskdir.logic as logic
import kioskdir.model as model
import kioskdir.tests.helpers as helpers
from kioskdir.tests.helpers import call_action


@pytest.mark.usefixtures("clean_db")
class TestAdDelete(object):
    def test_delete(self, ad_factory):
        ads = [ad_factory(name=name) for name in "abc"]
        assert call_action("ad_delete", id=ads[0]["id"]) is None
        assert helpers.positions(model.Ad) == {"b": 0, "c": 1}

    def test_file_is_removed(self, storage, ad_factory):
        (storage / "ads").mkdir()
        (storage / "ads" / "sale.png").write_bytes(b"data")
        ad = ad_factory(file_url="ads/sale.png")
        call_action("ad_delete", id=ad["id"])
        assert not (storage / "ads" / "sale.png").exists()

    def test_not_found(self):
        with pytest.raises(logic.NotFound):
            call_action("ad_delete", id="missing")

    def test_id_required(self):
        with pytest.raises(logic.ValidationError):
            call_action("ad_delete")


@pytest.mark.usefixtures("clean_db")
class TestFloorPlanDelete(object):
    def test_delete(self, floor_plan_factory):
        plans = [floor_plan_factory(name=name) for name in "abc"]
        call_action("floor_plan_delete", id=plans[1]["id"])
        assert helpers.positions(model.FloorPlan) == {"a": 0, "c": 1}

    def test_ads_are_untouched(self, ad_factory, floor_plan_factory):
        ad_factory(name="ad")
        plan = floor_plan_factory(name="plan")
        call_action("floor_plan_delete", id=plan["id"])
        assert helpers.positions(model.Ad) == {"ad": 0}
