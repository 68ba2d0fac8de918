# encoding: utf-8

'''API functions for updating existing data in kioskdir.'''
from __future__ import annotations

import logging
from typing import Any

import kioskdir.logic as logic
import kioskdir.logic.schema as schema
import kioskdir.lib.dictization.model_dictize as model_dictize
from kioskdir.lib.positions import ADS, FLOOR_PLANS, OrderedCollectionManager
from kioskdir.types import Context, DataDict

log = logging.getLogger(__name__)

# Define some shortcuts
# Ensure they are module-private so that they don't get loaded as available
# actions in the action API.
_get_or_bust = logic.get_or_bust


def ad_update(context: Context, data_dict: DataDict) -> dict[str, Any]:
    '''Update an ad.

    Only the fields given are changed. Giving ``position`` moves the ad
    there, the ads in between shift by one to make room. When ``file_url``
    changes, the previous file is removed from storage once the update has
    been committed.

    For further parameters see
    :py:func:`~kioskdir.logic.action.create.ad_create`.

    :param id: the id of the ad to update
    :type id: string

    :returns: the updated ad
    :rtype: dictionary
    '''
    id = _get_or_bust(data_dict, 'id')
    fields = schema.ad_fields(data_dict, partial=True)
    position = schema.position(data_dict)

    manager = OrderedCollectionManager(context['session'])
    ad = manager.update(ADS, id, fields, position)
    return model_dictize.ad_dictize(ad, context)


def ad_reorder(context: Context, data_dict: DataDict) -> dict[str, Any]:
    '''Reorder all the ads.

    :param order: the id of every ad, in the order they should be shown
    :type order: list of strings

    :returns: the new order
    :rtype: dictionary
    '''
    order = schema.order(data_dict)
    manager = OrderedCollectionManager(context['session'])
    return {'order': manager.reorder(ADS, order)}


def floor_plan_update(context: Context, data_dict: DataDict) -> dict[str, Any]:
    '''Update a floor plan.

    Only the fields given are changed; see
    :py:func:`~kioskdir.logic.action.update.ad_update` for how
    ``position`` and file replacement behave.

    :param id: the id of the floor plan to update
    :type id: string

    :returns: the updated floor plan
    :rtype: dictionary

    :raises: :py:exc:`~kioskdir.logic.Conflict` if the new name is taken
    '''
    id = _get_or_bust(data_dict, 'id')
    fields = schema.floor_plan_fields(data_dict, partial=True)
    position = schema.position(data_dict)

    manager = OrderedCollectionManager(context['session'])
    floor_plan = manager.update(FLOOR_PLANS, id, fields, position)
    return model_dictize.floor_plan_dictize(floor_plan, context)


def floor_plan_reorder(context: Context, data_dict: DataDict) -> dict[str, Any]:
    '''Reorder all the floor plans.

    :param order: the id of every floor plan, in the order they should be
        shown
    :type order: list of strings

    :returns: the new order
    :rtype: dictionary
    '''
    order = schema.order(data_dict)
    manager = OrderedCollectionManager(context['session'])
    return {'order': manager.reorder(FLOOR_PLANS, order)}
