# encoding: utf-8

# This file contains commonly used parts of the project that many modules
# need, e.g. the global config object and the value converters used by the
# config declaration.
#
# NOTE:  This file is specificaly created for
# from kioskdir.common import x, y, z to be allowed
from __future__ import annotations

import logging
from collections.abc import MutableMapping

from typing import Any, TYPE_CHECKING

from kioskdir.config.declaration import Declaration

if TYPE_CHECKING:
    MutableMapping = MutableMapping[str, Any]

SENTINEL = {}

log = logging.getLogger(__name__)


class KioskConfig(MutableMapping):
    '''Main kioskdir configuration object

    The actual `config` instance in this module is initialized in the
    `load_environment` method with the values of the ini file or env vars.

    '''
    store: dict[str, Any]

    def __init__(self, *args: Any, **kwargs: Any):
        self.store = dict()
        self.update(dict(*args, **kwargs))

    def __getitem__(self, key: str):
        return self.store[key]

    def __iter__(self):
        return iter(self.store)

    def __len__(self):
        return len(self.store)

    def __repr__(self):
        return self.store.__repr__()

    def copy(self) -> dict[str, Any]:
        return self.store.copy()

    def clear(self) -> None:
        self.store.clear()

    def __setitem__(self, key: str, value: Any):
        self.store[key] = value

    def __delitem__(self, key: str):
        del self.store[key]

    def get(self, key: str, default: Any = SENTINEL) -> Any:
        """Return the value for key if key is in the config, else default.

        Without an explicit default, declared options fall back to their
        declared default value.
        """
        if default is SENTINEL:
            option = config_declaration.get(key)
            default = option.default if option else None
            is_strict = super().get("config.mode") == "strict"
            if is_strict and option is None:
                log.warning("Option %s is not declared", key)

        return super().get(key, default)


def asbool(obj: Any) -> bool:
    """Convert a string (e.g. 1, true, True) into a boolean.

    Example::

        assert asbool("yes") is True

    """

    if isinstance(obj, str):
        obj = obj.strip().lower()
        if obj in truthy:
            return True
        elif obj in falsy:
            return False
        else:
            raise ValueError(u"String is not true/false: {}".format(obj))
    return bool(obj)


def asint(obj: Any) -> int:
    """Convert a string into an int.

    Example::

        assert asint("111") == 111

    """
    try:
        return int(obj)
    except (TypeError, ValueError):
        raise ValueError(u"Bad integer value: {}".format(obj))


truthy = frozenset([u'true', u'yes', u'on', u'y', u't', u'1'])
falsy = frozenset([u'false', u'no', u'off', u'n', u'f', u'0'])

config_declaration = Declaration()
config = KioskConfig()
