# encoding: utf-8

'''API functions for deleting data from kioskdir.'''
from __future__ import annotations

import logging

import kioskdir.logic as logic
from kioskdir.lib.positions import ADS, FLOOR_PLANS, OrderedCollectionManager
from kioskdir.types import Context, DataDict

log = logging.getLogger(__name__)

# Define some shortcuts
# Ensure they are module-private so that they don't get loaded as available
# actions in the action API.
_get_or_bust = logic.get_or_bust


def ad_delete(context: Context, data_dict: DataDict) -> None:
    '''Delete an ad and remove its file from storage.

    The ads after it move forward by one.

    :param id: the id of the ad
    :type id: string
    '''
    id = _get_or_bust(data_dict, 'id')
    OrderedCollectionManager(context['session']).delete(ADS, id)


def floor_plan_delete(context: Context, data_dict: DataDict) -> None:
    '''Delete a floor plan and remove its image from storage.

    :param id: the id of the floor plan
    :type id: string
    '''
    id = _get_or_bust(data_dict, 'id')
    OrderedCollectionManager(context['session']).delete(FLOOR_PLANS, id)
