"""Shape models: kinds, field descriptors and type shapes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

TAG_KEY = "copier"
"""Metadata key holding the copier tag string on a field."""

EMBED_KEY = "copier_embedded"
"""Metadata key marking a field as embedded (its fields are promoted)."""


class Kind(Enum):
    """Structural kind of a type as seen by the copy engine."""

    SCALAR = auto()  # Anything copied by assignment or conversion
    POINTER = auto()  # Optional[T]; None is the nil pointer
    SLICE = auto()  # list[T]
    MAP = auto()  # dict[K, V]
    STRUCT = auto()  # dataclass or Pydantic model
    INTERFACE = auto()  # Any, object, unions, unannotated

    @property
    def is_container(self) -> bool:
        """True for kinds that are copied field by field or item by item."""
        return self in (Kind.SLICE, Kind.MAP, Kind.STRUCT)


@dataclass(slots=True, frozen=True)
class FieldInfo:
    """One field of a struct, possibly promoted from an embedded struct."""

    name: str
    annotation: Any
    tag: str = ""
    embedded: bool = False
    path: tuple[str, ...] = ()
    """Attribute chain from the owning struct; longer than 1 when promoted."""

    @property
    def depth(self) -> int:
        return len(self.path) - 1

    @property
    def is_private(self) -> bool:
        return self.name.startswith("_")


@dataclass(slots=True, frozen=True)
class TypeShape:
    """Immutable structural description of an annotation."""

    kind: Kind
    annotation: Any
    origin: type | None = None
    """Concrete class to instantiate or check against, when there is one."""
    elem: TypeShape | None = None
    """Element shape for POINTER, SLICE and MAP kinds."""
    key: TypeShape | None = None
    """Key shape for MAP kinds."""
    fields: tuple[FieldInfo, ...] = ()
    """Declared fields (embedded fields not yet flattened) for STRUCT kinds."""
    frozen: bool = False
