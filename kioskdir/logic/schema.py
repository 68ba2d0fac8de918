# encoding: utf-8
'''Field checks for the data dicts accepted by the action functions.

Each function returns the fields to write, converted to the types the
model expects, and raises :py:exc:`~kioskdir.logic.ValidationError`
listing every problem found.
'''
from __future__ import annotations

from typing import Any, Optional

import kioskdir.model as model
from kioskdir.common import asbool
from kioskdir.logic import ValidationError, int_or_bust
from kioskdir.types import DataDict, ErrorDict


def _text(data_dict: DataDict, key: str, fields: dict[str, Any],
          errors: ErrorDict, required: bool) -> None:
    if key not in data_dict:
        if required:
            errors[key] = ['Missing value']
        return
    value = data_dict[key]
    if not isinstance(value, str) or not value.strip():
        errors[key] = ['Must be a non-empty string']
        return
    fields[key] = value.strip()


def ad_fields(data_dict: DataDict, partial: bool = False) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    errors: ErrorDict = {}
    _text(data_dict, 'name', fields, errors, required=not partial)
    _text(data_dict, 'file_url', fields, errors, required=not partial)

    if 'type' in data_dict:
        if data_dict['type'] not in model.AD_TYPES:
            errors['type'] = ['Must be one of: {}'.format(
                ', '.join(model.AD_TYPES))]
        else:
            fields['type'] = data_dict['type']

    if 'is_active' in data_dict:
        try:
            fields['is_active'] = asbool(data_dict['is_active'])
        except ValueError:
            errors['is_active'] = ['Must be a boolean']

    if errors:
        raise ValidationError(errors)
    return fields


def floor_plan_fields(data_dict: DataDict,
                      partial: bool = False) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    errors: ErrorDict = {}
    _text(data_dict, 'name', fields, errors, required=not partial)
    _text(data_dict, 'image_url', fields, errors, required=not partial)
    if 'image_url' in fields:
        fields['image_url'] = fields['image_url'].replace('\\', '/')

    if errors:
        raise ValidationError(errors)
    return fields


def position(data_dict: DataDict) -> Optional[int]:
    '''Return the requested position, ``None`` when not given.'''
    value = data_dict.get('position')
    if value is None or value == '':
        return None
    return int_or_bust(value, 'position')


def order(data_dict: DataDict) -> list[str]:
    value = data_dict.get('order')
    if not isinstance(value, list):
        raise ValidationError({'order': ['Must supply order as a list']})
    if not all(isinstance(id_, str) for id_ in value):
        raise ValidationError({'order': ['Must be a list of ids']})
    return value
