"""Shape functionality: type normalization, field enumeration, allocation."""

from objcopier.core.shape.core import (
    copier_field,
    embedded,
    find_field,
    flatten,
    is_empty,
    is_struct_type,
    is_writable,
    new_instance,
    normalize_type,
    normalize_value,
    read_path,
    resolve_interface,
    shape_of,
    value_kind,
    zero_value,
)
from objcopier.core.shape.models import EMBED_KEY, TAG_KEY, FieldInfo, Kind, TypeShape

__all__ = [
    # Models
    "Kind",
    "FieldInfo",
    "TypeShape",
    "TAG_KEY",
    "EMBED_KEY",
    # Core
    "copier_field",
    "embedded",
    "shape_of",
    "normalize_type",
    "normalize_value",
    "resolve_interface",
    "value_kind",
    "flatten",
    "find_field",
    "read_path",
    "zero_value",
    "new_instance",
    "is_empty",
    "is_struct_type",
    "is_writable",
]
