"""Conversion functionality: capability protocols and pure conversion rules."""

from objcopier.core.convert.models import Scanner, Valuer
from objcopier.core.convert.operations import (
    convert,
    convertible,
    extract_value,
    fits,
    is_scanner_type,
    scan_value,
    type_name,
)

__all__ = [
    # Models
    "Scanner",
    "Valuer",
    # Operations
    "convertible",
    "convert",
    "fits",
    "is_scanner_type",
    "extract_value",
    "scan_value",
    "type_name",
]
