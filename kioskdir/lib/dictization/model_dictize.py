# encoding: utf-8
'''
These dictize functions generally take a domain object (such as Ad) and
convert it to a dictionary, including related objects.

The basic recipe is to call:

    dictized = kioskdir.lib.dictization.table_dictize(domain_object)

which builds the dictionary by iterating over the table columns.
'''
from __future__ import annotations

from typing import Any

import kioskdir.lib.dictization as d
import kioskdir.model as model
from kioskdir.types import Context


def ad_dictize(ad: model.Ad, context: Context) -> dict[str, Any]:
    return d.table_dictize(ad, context)


def ad_list_dictize(ads: list[model.Ad],
                    context: Context) -> list[dict[str, Any]]:
    return [ad_dictize(ad, context) for ad in ads]


def floor_plan_dictize(floor_plan: model.FloorPlan,
                       context: Context) -> dict[str, Any]:
    dictized = d.table_dictize(floor_plan, context)
    # stored paths written on windows hosts use backslashes
    dictized['image_url'] = dictized['image_url'].replace('\\', '/')
    return dictized


def floor_plan_list_dictize(floor_plans: list[model.FloorPlan],
                            context: Context) -> list[dict[str, Any]]:
    return [floor_plan_dictize(fp, context) for fp in floor_plans]
