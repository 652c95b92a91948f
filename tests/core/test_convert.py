"""Tests for conversion rules, assignability and the Scanner/Valuer protocols."""

from decimal import Decimal
from enum import IntEnum
from fractions import Fraction
from typing import Any

import pytest

from objcopier import ParserError, Scanner, ScannerError, UnsupportedConversionError, Valuer
from objcopier.core.convert import (
    convert,
    convertible,
    extract_value,
    fits,
    is_scanner_type,
    scan_value,
)


class Level(IntEnum):
    LOW = 1
    HIGH = 2


class NullString:
    """Nullable string binding, valid only after scanning a str."""

    def __init__(self, string: str = "", valid: bool = False):
        self.string = string
        self.valid = valid

    def __scan__(self, value):
        if value is None:
            self.string, self.valid = "", False
            return
        if not isinstance(value, str):
            raise TypeError(f"cannot scan {type(value).__name__}")
        self.string, self.valid = value, True

    def __value__(self):
        return self.string if self.valid else None


class Broken:
    def __value__(self):
        raise RuntimeError("connection lost")


# ---------------------------------------------------------------------------
# convertible / convert
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("src_type", "annotation"),
    [
        (int, float),
        (float, int),
        (int, Decimal),
        (Decimal, float),
        (Fraction, float),
        (int, Level),
        (str, bytes),
        (bytes, str),
        (bool, int),
        (NullString, Any),
        (type(None), int | None),
        (int, float | None),
        (Level, int),
    ],
)
def test_convertible(src_type, annotation):
    assert convertible(src_type, annotation)


@pytest.mark.parametrize(
    ("src_type", "annotation"),
    [
        (str, int),
        (int, str),
        (int, bool),
        (Fraction, Decimal),
        (int, list[int]),
        (list, dict[str, int]),
        (str, NullString),
    ],
)
def test_not_convertible(src_type, annotation):
    assert not convertible(src_type, annotation)


def test_dict_is_convertible_to_own_class():
    """Subclass relation holds for container classes too."""
    assert convertible(dict, dict)


def test_convert_numeric():
    assert convert(3.9, int) == 3
    assert convert(3, float) == 3.0
    assert isinstance(convert(3, float), float)
    assert convert(6, Decimal) == Decimal(6)


def test_convert_text():
    assert convert("ab", bytes) == b"ab"
    assert convert(b"ab", str) == "ab"


def test_convert_enum():
    assert convert(2, Level) is Level.HIGH


def test_convert_optional():
    assert convert(None, int | None) is None
    assert convert(3.0, int | None) == 3


def test_convert_passes_through_matching_values():
    value = [1, 2]

    assert convert(value, Any) is value
    assert convert(value, list) is value


def test_convert_rejected_value():
    """Convertible types can still reject a concrete value."""
    with pytest.raises(UnsupportedConversionError) as exc_info:
        convert(99, Level)

    assert exc_info.value.source_type is int
    assert exc_info.value.target is Level
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_convert_bytes_decoding_error():
    with pytest.raises(UnsupportedConversionError):
        convert(b"\xff", str)


# ---------------------------------------------------------------------------
# fits
# ---------------------------------------------------------------------------


def test_fits_scalars():
    assert fits(1, int)
    assert fits(True, int)
    assert not fits(1.0, int)
    assert fits("x", Any)


def test_fits_optional():
    assert fits(None, int | None)
    assert fits(1, int | None)
    assert not fits("x", int | None)


def test_fits_containers_element_wise():
    assert fits([1, 2], list[int])
    assert not fits([1, "a"], list[int])
    assert fits({"a": 1}, dict[str, int])
    assert not fits({"a": 1.5}, dict[str, int])
    assert fits([[1], [2]], list[list[int]])
    assert not fits((1, 2), list[int])


# ---------------------------------------------------------------------------
# Scanner / Valuer
# ---------------------------------------------------------------------------


def test_protocols_detect_dunder_methods():
    assert isinstance(NullString(), Scanner)
    assert isinstance(NullString(), Valuer)
    assert not isinstance("x", Valuer)
    assert is_scanner_type(NullString)
    assert is_scanner_type(NullString | None)
    assert not is_scanner_type(str)
    assert not is_scanner_type(list[int])


def test_scan_value():
    target = NullString()

    scan_value(target, "hello")

    assert target.valid
    assert target.string == "hello"


def test_scan_value_wraps_errors():
    with pytest.raises(ScannerError, match="NullString cannot scan int") as exc_info:
        scan_value(NullString(), 5)

    assert isinstance(exc_info.value.__cause__, TypeError)


def test_extract_value():
    assert extract_value(NullString("x", True)) == "x"
    assert extract_value(NullString()) is None


def test_extract_value_wraps_errors():
    with pytest.raises(ParserError, match="connection lost"):
        extract_value(Broken())
