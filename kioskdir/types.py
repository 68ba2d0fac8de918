# encoding: utf-8
from __future__ import annotations

from typing import Any, Callable, Mapping, TYPE_CHECKING

from typing_extensions import TypeAlias, TypedDict

if TYPE_CHECKING:
    import kioskdir.model as model_  # noqa


Config: TypeAlias = "dict[str, Any]"
DataDict: TypeAlias = "dict[str, Any]"
ErrorDict: TypeAlias = "dict[str, list[str]]"


class Context(TypedDict, total=False):
    """Mutable object passed to every action function.

    Holds the model module and session used by the action, plus flags
    that tweak its behaviour.
    """
    model: Any
    session: Any
    user: str


Action = Callable[[Context, DataDict], Any]
ActionMapping = Mapping[str, Action]
