"""Field mask for sparse updates.

A field holding ``UNSET`` means "leave unchanged"; any other value,
``None`` included, is an explicit new value.
"""

from __future__ import annotations

from enum import Enum
from typing import Final, Literal, TypeVar, Union


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset.UNSET

T = TypeVar("T")

Maybe = Union[T, Literal[_Unset.UNSET]]


def is_set(value: object) -> bool:
    return value is not UNSET
