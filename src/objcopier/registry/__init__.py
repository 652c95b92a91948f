"""Custom type-pair converters consulted before default conversions."""

from objcopier.registry.protocol import TypedConverter, TypePair
from objcopier.registry.registry import DEFAULT_MAX_ENTRIES, ConverterRegistry

__all__ = [
    "TypePair",
    "TypedConverter",
    "ConverterRegistry",
    "DEFAULT_MAX_ENTRIES",
]
