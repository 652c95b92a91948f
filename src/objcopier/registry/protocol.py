"""Typed converter protocol for custom type-pair conversions.

Usage:
    class CentsToDecimal:
        def pairs(self) -> Iterable[TypePair]:
            return [TypePair(int, Decimal)]

        def copy(self, dst: Slot, value: Any) -> None:
            dst.set(Decimal(value) / 100)

    copier = Copier()
    copier.register(CentsToDecimal())
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from objcopier.core.slots import Slot


@dataclass(slots=True, frozen=True)
class TypePair:
    """Exact (source type, destination annotation) key of a converter."""

    src_type: Any
    dst_type: Any


@runtime_checkable
class TypedConverter(Protocol):
    """Handles copying between specific source and destination types."""

    def pairs(self) -> Iterable[TypePair]:
        """Type pairs this converter is consulted for."""
        ...

    def copy(self, dst: Slot, value: Any) -> None:
        """Write the converted value into the destination slot; raise on failure."""
        ...
