"""objcopier: copy field values between arbitrary Python objects.

Usage:
    from dataclasses import dataclass
    from objcopier import copier_field, copy

    @dataclass
    class User:
        name: str
        role: str = copier_field("Role")

    @dataclass
    class Employee:
        name: str = copier_field("must", default="")
        title: str = copier_field("Role", default="")
        salary: int = copier_field("-", default=0)

    employee = Employee(salary=500)
    copy(employee, User(name="Ann", role="admin"))
    # Employee(name="Ann", title="admin", salary=500)
"""

__version__ = "0.1.0"

# Core primitives
from objcopier.core import (
    AttributeSlot,
    CopierError,
    FatalObligationViolation,
    FieldInfo,
    FieldTag,
    HookFunc,
    InvalidDestinationError,
    InvalidSourceError,
    ItemSlot,
    KeyTypeMismatchError,
    Kind,
    ObligationUnmetError,
    ParseFunc,
    ParserError,
    Ref,
    Scanner,
    ScannerError,
    Slot,
    TagParseError,
    UnsupportedConversionError,
    Valuer,
    copier_field,
    embedded,
    flatten,
    parse_tag,
)

# Configuration
from objcopier.config import CopierSettings, configure_logging

# Engine
from objcopier.copier import Copier, CopyConfiguration, copy, copy_with_configuration

# Converter registry
from objcopier.registry import ConverterRegistry, TypedConverter, TypePair

__all__ = [
    # Version
    "__version__",
    # Engine
    "copy",
    "copy_with_configuration",
    "Copier",
    "CopyConfiguration",
    # Declarations
    "copier_field",
    "embedded",
    "flatten",
    "parse_tag",
    "FieldInfo",
    "FieldTag",
    "Kind",
    # Slots
    "Slot",
    "Ref",
    "AttributeSlot",
    "ItemSlot",
    # Extension points
    "HookFunc",
    "ParseFunc",
    "Scanner",
    "Valuer",
    "TypedConverter",
    "TypePair",
    "ConverterRegistry",
    # Configuration
    "CopierSettings",
    "configure_logging",
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
