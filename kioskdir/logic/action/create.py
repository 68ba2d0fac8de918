# encoding: utf-8

'''API functions for adding data to kioskdir.'''
from __future__ import annotations

import logging
from typing import Any

import kioskdir.logic.schema as schema
import kioskdir.lib.dictization.model_dictize as model_dictize
from kioskdir.lib.positions import ADS, FLOOR_PLANS, OrderedCollectionManager
from kioskdir.types import Context, DataDict

log = logging.getLogger(__name__)


def ad_create(context: Context, data_dict: DataDict) -> dict[str, Any]:
    '''Create a new ad.

    :param name: the name of the ad
    :type name: string
    :param file_url: reference of the uploaded image or video
    :type file_url: string
    :param type: ``'image'`` (default) or ``'video'``
    :type type: string
    :param is_active: whether the kiosks play the ad (optional,
        default: ``True``)
    :type is_active: bool
    :param position: where to insert the ad; the ads at and after it move
        back by one. Appended after the last ad when omitted.
    :type position: int

    :returns: the newly created ad
    :rtype: dictionary

    :raises: :py:exc:`~kioskdir.logic.ValidationError` if ``position`` is
        past the end of the ads
    '''
    fields = schema.ad_fields(data_dict)
    position = schema.position(data_dict)

    manager = OrderedCollectionManager(context['session'])
    ad = manager.create(ADS, fields, position)
    return model_dictize.ad_dictize(ad, context)


def floor_plan_create(context: Context, data_dict: DataDict) -> dict[str, Any]:
    '''Create a new floor plan.

    :param name: the name of the floor plan, unique among floor plans
    :type name: string
    :param image_url: reference of the uploaded floor plan image
    :type image_url: string
    :param position: where to insert the floor plan (optional, appended
        when omitted)
    :type position: int

    :returns: the newly created floor plan
    :rtype: dictionary

    :raises: :py:exc:`~kioskdir.logic.Conflict` if the name is taken
    '''
    fields = schema.floor_plan_fields(data_dict)
    position = schema.position(data_dict)

    manager = OrderedCollectionManager(context['session'])
    floor_plan = manager.create(FLOOR_PLANS, fields, position)
    return model_dictize.floor_plan_dictize(floor_plan, context)
