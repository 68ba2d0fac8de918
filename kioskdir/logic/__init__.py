# encoding: utf-8
from __future__ import annotations

import functools
import importlib
import inspect
import logging
import re
from typing import Any, Iterable, Optional, Union, cast, overload

import kioskdir.model as model

from kioskdir.types import Action, Context, DataDict, ErrorDict

log = logging.getLogger(__name__)

_actions: dict[str, Action] = {}


class ActionError(Exception):
    message: Optional[str]

    def __init__(self, message: Optional[str] = '') -> None:
        self.message = message
        super(ActionError, self).__init__(message)

    def __str__(self):
        msg = self.message
        if not isinstance(msg, str):
            msg = str(msg)
        return msg


class NotFound(ActionError):
    '''Exception raised by logic functions when a given object is not found.

    For example :py:func:`~kioskdir.logic.action.get.ad_show` raises
    :py:exc:`NotFound` if no ad with the given ``id`` exists.

    '''
    pass


class Conflict(ActionError):
    '''Exception raised when the primary write of an action violates a
    uniqueness constraint, e.g. a floor plan name that is already taken.

    '''
    pass


class ValidationError(ActionError):
    '''Exception raised by action functions when validating their given
    ``data_dict`` fails, or when a requested position is out of range.

    '''
    error_dict: ErrorDict

    def __init__(self,
                 errors: Union[str, ErrorDict],
                 error_summary: Optional[dict[str, str]] = None,
                 extra_msg: Optional[str] = None) -> None:
        if not isinstance(errors, dict):
            error_dict: ErrorDict = {'message': [errors]}
        else:
            error_dict = errors
        self.error_dict = error_dict
        self._error_summary = error_summary
        super(ValidationError, self).__init__(extra_msg)

    @property
    def error_summary(self) -> dict[str, str]:
        ''' autogenerate the summary if not supplied '''
        def summarise(error_dict: ErrorDict) -> dict[str, str]:

            def prettify(field_name: str):
                return field_name.replace('_', ' ').capitalize()

            summary = {}
            for key, error in error_dict.items():
                summary[prettify(key)] = error[0]
            return summary

        if self._error_summary:
            return self._error_summary
        return summarise(self.error_dict)

    def __str__(self):
        err_msgs = (super(ValidationError, self).__str__(),
                    self.error_dict)
        return ' - '.join([str(err_msg) for err_msg in err_msgs if err_msg])


@overload
def get_or_bust(data_dict: dict[str, Any], keys: str) -> Any:
    ...


@overload
def get_or_bust(
        data_dict: dict[str, Any], keys: Iterable[str]) -> tuple[Any, ...]:
    ...


def get_or_bust(
        data_dict: dict[str, Any],
        keys: Union[str, Iterable[str]]) -> Union[Any, tuple[Any, ...]]:
    '''Return the value(s) from the given data_dict for the given key(s).

    Usage::

        single_value = get_or_bust(data_dict, 'a_key')
        value_1, value_2 = get_or_bust(data_dict, ['key1', 'key2'])

    :param data_dict: the dictionary to return the values from
    :type data_dict: dictionary

    :param keys: the key(s) for the value(s) to return
    :type keys: either a string or a list

    :returns: a single value from the dict if a single key was given,
        or a tuple of values if a list of keys was given

    :raises: :py:exc:`kioskdir.logic.ValidationError` if one of the given
        keys is not in the given dictionary

    '''
    if isinstance(keys, str):
        keys = [keys]

    errors: ErrorDict = {}
    for key in keys:
        if data_dict.get(key) in (None, '', []):
            errors[key] = ['Missing value']
    if errors:
        raise ValidationError(errors)

    # preserve original key order
    values = [data_dict[key] for key in keys]
    if len(values) == 1:
        return values[0]
    return tuple(values)


def _get_local_functions(module: Any) -> list[tuple[str, Action]]:
    return [
        (name, func) for name, func in inspect.getmembers(
            module, inspect.isfunction)
        if not name.startswith('_') and func.__module__ == module.__name__
    ]


def get_action(action: str) -> Action:
    '''Return the named :py:mod:`kioskdir.logic.action` function.

    For example ``get_action('ad_create')`` will return the
    :py:func:`kioskdir.logic.action.create.ad_create()` function.

    An action function returned by ``get_action()`` will automatically add
    the ``model`` and ``session`` parameters to the context if they are not
    defined.

    :param action: name of the action function to return,
        eg. ``'floor_plan_reorder'``
    :type action: string

    :returns: the named action function
    :rtype: callable

    '''
    if not _actions:
        for action_module_name in ['get', 'create', 'update', 'delete']:
            module = importlib.import_module(
                '.' + action_module_name, 'kioskdir.logic.action')
            for k, v in _get_local_functions(module):
                _actions[k] = _wrap_action(v, k)

    if action not in _actions:
        raise KeyError("Action '%s' not found" % action)
    return _actions[action]


def _wrap_action(_action: Action, action_name: str) -> Action:
    @functools.wraps(_action)
    def wrapped(context: Optional[Context] = None,
                data_dict: Optional[DataDict] = None, **kw: Any):
        if kw:
            log.critical('%s was passed extra keywords %r',
                         action_name, kw)

        context = _get_context(context)
        log.debug('Calling action %s', action_name)
        return _action(context, data_dict or {}, **kw)

    return cast(Action, wrapped)


def _get_context(context: Optional[Context]) -> Context:
    if context is None:
        context = cast(Context, {})
    context.setdefault('model', model)
    context.setdefault('session', model.Session)
    return context


def clear_actions_cache() -> None:
    _actions.clear()


_int_re = re.compile(r'^-?\d+$')


def int_or_bust(value: Any, key: str) -> int:
    '''Coerce an integer given as an int or a decimal string.

    Booleans and floats are refused, so ``True`` never turns into
    position ``1``.
    '''
    if isinstance(value, bool):
        raise ValidationError({key: ['Must be an integer']})
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _int_re.match(value.strip()):
        return int(value.strip())
    raise ValidationError({key: ['Must be an integer']})
