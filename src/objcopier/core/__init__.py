"""Core functionalities: stateless building blocks of the copy engine.

Architecture Note:
    core/ contains pure functions and immutable models: type shapes, tag
    parsing, name resolution and conversion rules. The stateful pieces (the
    converter registry and the Copier that walks values) live in registry/
    and copier/.
"""

from objcopier.core.convert import (
    Scanner,
    Valuer,
    convert,
    convertible,
    fits,
)
from objcopier.core.errors import (
    CopierError,
    FatalObligationViolation,
    InvalidDestinationError,
    InvalidSourceError,
    KeyTypeMismatchError,
    ObligationUnmetError,
    ParserError,
    ScannerError,
    TagParseError,
    UnsupportedConversionError,
)
from objcopier.core.shape import (
    FieldInfo,
    Kind,
    TypeShape,
    copier_field,
    embedded,
    find_field,
    flatten,
    normalize_type,
    normalize_value,
    shape_of,
)
from objcopier.core.slots import AttributeSlot, ItemSlot, Ref, Slot
from objcopier.core.tags import (
    FieldTag,
    NameMapping,
    build_name_mapping,
    parse_tag,
    resolve_names,
)
from objcopier.core.types import HookFunc, ParseFunc

__all__ = [
    # Types
    "HookFunc",
    "ParseFunc",
    # Slots
    "Slot",
    "Ref",
    "AttributeSlot",
    "ItemSlot",
    # Shape
    "Kind",
    "FieldInfo",
    "TypeShape",
    "copier_field",
    "embedded",
    "shape_of",
    "normalize_type",
    "normalize_value",
    "flatten",
    "find_field",
    # Tags
    "FieldTag",
    "NameMapping",
    "parse_tag",
    "build_name_mapping",
    "resolve_names",
    # Convert
    "Scanner",
    "Valuer",
    "convertible",
    "convert",
    "fits",
    # Errors
    "CopierError",
    "InvalidDestinationError",
    "InvalidSourceError",
    "KeyTypeMismatchError",
    "UnsupportedConversionError",
    "ObligationUnmetError",
    "FatalObligationViolation",
    "ParserError",
    "ScannerError",
    "TagParseError",
]
