# encoding: utf-8

'''API functions for searching for and getting data from kioskdir.'''
from __future__ import annotations

import logging
from typing import Any

import kioskdir.logic as logic
import kioskdir.lib.dictization.model_dictize as model_dictize
from kioskdir.lib.positions import ADS, FLOOR_PLANS, OrderedCollectionManager
from kioskdir.types import Context, DataDict

log = logging.getLogger(__name__)

# Define some shortcuts
# Ensure they are module-private so that they don't get loaded as available
# actions in the action API.
_get_or_bust = logic.get_or_bust


def ad_list(context: Context, data_dict: DataDict) -> list[dict[str, Any]]:
    '''Return every ad, active or not, in display order.

    Used by the admin dashboard.

    :rtype: list of dictionaries
    '''
    manager = OrderedCollectionManager(context['session'])
    return model_dictize.ad_list_dictize(manager.list(ADS), context)


def ad_list_active(context: Context,
                   data_dict: DataDict) -> list[dict[str, Any]]:
    '''Return the ads the kiosks should play, in display order.

    :rtype: list of dictionaries
    '''
    manager = OrderedCollectionManager(context['session'])
    return model_dictize.ad_list_dictize(
        manager.list(ADS, is_active=True), context)


def ad_show(context: Context, data_dict: DataDict) -> dict[str, Any]:
    '''Return a single ad.

    :param id: the id of the ad
    :type id: string

    :rtype: dictionary
    '''
    id = _get_or_bust(data_dict, 'id')
    manager = OrderedCollectionManager(context['session'])
    return model_dictize.ad_dictize(manager.get(ADS, id), context)


def floor_plan_list(context: Context,
                    data_dict: DataDict) -> list[dict[str, Any]]:
    '''Return every floor plan in display order.

    :rtype: list of dictionaries
    '''
    manager = OrderedCollectionManager(context['session'])
    return model_dictize.floor_plan_list_dictize(
        manager.list(FLOOR_PLANS), context)


def floor_plan_show(context: Context, data_dict: DataDict) -> dict[str, Any]:
    '''Return a single floor plan.

    :param id: the id of the floor plan
    :type id: string

    :rtype: dictionary
    '''
    id = _get_or_bust(data_dict, 'id')
    manager = OrderedCollectionManager(context['session'])
    return model_dictize.floor_plan_dictize(
        manager.get(FLOOR_PLANS, id), context)
