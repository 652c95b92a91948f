"""Pure conversion functions.

Assignability is checked on values (containers are checked element-wise),
convertibility on types. Convertible pairs are: subclasses, the numeric
tower (int, float, Decimal, Fraction and their enum subclasses), str and
bytes in either direction, and anything into an interface slot.
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from typing import Any

from objcopier.core.convert.models import Scanner, Valuer
from objcopier.core.errors import ParserError, ScannerError, UnsupportedConversionError
from objcopier.core.shape import Kind, shape_of

_NONE_TYPE = type(None)
_NUMERIC = (int, float, Decimal, Fraction)
_TEXT = (str, bytes)


def type_name(annotation: Any) -> str:
    """Readable name of an annotation for error messages."""
    if isinstance(annotation, type):
        return annotation.__qualname__
    return repr(annotation)


def _numeric_convertible(src_type: type, target: type) -> bool:
    if issubclass(src_type, bool) or issubclass(target, bool):
        return False
    if not (issubclass(src_type, _NUMERIC) and issubclass(target, _NUMERIC)):
        return False
    # Decimal() rejects Fraction
    return not (issubclass(target, Decimal) and issubclass(src_type, Fraction))


def convertible(src_type: type, annotation: Any) -> bool:
    """Check whether values of src_type can be converted to the annotation.

    Args:
        src_type: Runtime type of the source value.
        annotation: Declared destination annotation.

    Returns:
        True if convert() is expected to succeed for values of src_type.
    """
    shape = shape_of(annotation)
    if shape.kind is Kind.INTERFACE:
        return True
    if shape.kind is Kind.POINTER and shape.elem is not None:
        return src_type is _NONE_TYPE or convertible(src_type, shape.elem.annotation)
    target = shape.origin
    if target is None:
        return False
    if issubclass(src_type, target):
        return True
    if shape.kind is not Kind.SCALAR:
        return False
    if _numeric_convertible(src_type, target):
        return True
    return issubclass(src_type, _TEXT) and issubclass(target, _TEXT)


def convert(value: Any, annotation: Any) -> Any:
    """Convert a value to the annotation's concrete type.

    Raises:
        UnsupportedConversionError: If the target type rejects the value.
    """
    shape = shape_of(annotation)
    if shape.kind is Kind.POINTER and shape.elem is not None:
        if value is None:
            return None
        shape = shape.elem
    target = shape.origin
    if shape.kind is Kind.INTERFACE or target is None or isinstance(value, target):
        return value
    try:
        if issubclass(target, bytes) and isinstance(value, str):
            return target(value.encode())
        if issubclass(target, str) and isinstance(value, (bytes, bytearray)):
            return target(value.decode())
        return target(value)
    except (TypeError, ValueError, ArithmeticError) as exc:
        raise UnsupportedConversionError(
            f"cannot convert {type(value).__qualname__} to {type_name(annotation)}",
            source_type=type(value),
            target=annotation,
        ) from exc


def fits(value: Any, annotation: Any) -> bool:
    """Whether a value can be assigned to the annotation as is."""
    shape = shape_of(annotation)
    match shape.kind:
        case Kind.INTERFACE:
            return True
        case Kind.POINTER:
            return value is None or (shape.elem is not None and fits(value, shape.elem.annotation))
        case Kind.SLICE:
            elem = shape.elem.annotation if shape.elem else Any
            return isinstance(value, shape.origin or list) and all(fits(e, elem) for e in value)
        case Kind.MAP:
            key = shape.key.annotation if shape.key else Any
            elem = shape.elem.annotation if shape.elem else Any
            return isinstance(value, shape.origin or dict) and all(
                fits(k, key) and fits(v, elem) for k, v in value.items()
            )
    return shape.origin is not None and isinstance(value, shape.origin)


def is_scanner_type(annotation: Any) -> bool:
    """Whether the annotation's concrete class implements Scanner."""
    target = shape_of(annotation).origin
    return isinstance(target, type) and issubclass(target, Scanner)


def extract_value(valuer: Valuer) -> Any:
    """Call __value__, wrapping failures.

    Raises:
        ParserError: If the valuer raises.
    """
    try:
        return valuer.__value__()
    except Exception as exc:
        raise ParserError(f"{type(valuer).__qualname__}.__value__ failed: {exc}") from exc


def scan_value(scanner: Scanner, value: Any) -> None:
    """Call __scan__, wrapping failures.

    Raises:
        ScannerError: If the scanner rejects the value.
    """
    try:
        scanner.__scan__(value)
    except Exception as exc:
        raise ScannerError(
            f"{type(scanner).__qualname__} cannot scan {type(value).__qualname__}: {exc}"
        ) from exc
