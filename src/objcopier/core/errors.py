"""Exceptions raised by the copy engine.

Every recoverable failure derives from CopierError. An unmet ``must`` obligation
without ``nopanic`` raises FatalObligationViolation instead, which derives from
BaseException so that generic ``except Exception`` handlers do not swallow it.
"""

from __future__ import annotations


class CopierError(Exception):
    """Base class for all recoverable copy failures."""

    pass


class InvalidDestinationError(CopierError):
    """Raised when the destination cannot be written to."""

    pass


class InvalidSourceError(CopierError):
    """Raised when the source is None or an empty Ref."""

    pass


class KeyTypeMismatchError(CopierError):
    """Raised when source map keys do not convert to the destination key type."""

    pass


class UnsupportedConversionError(CopierError):
    """Raised when no conversion path exists for a concrete value."""

    def __init__(self, message: str, source_type: type | None = None, target: object = None):
        super().__init__(message)
        self.source_type = source_type
        self.target = target


class ParserError(CopierError):
    """Raised when a Valuer, ParseFunc or TypedConverter reports failure."""

    pass


class ScannerError(CopierError):
    """Raised when a Scanner rejects the value it was asked to scan."""

    pass


class TagParseError(CopierError, ValueError):
    """Raised when a field tag carries a malformed alias."""

    pass


class ObligationUnmetError(CopierError):
    """Raised when a ``must,nopanic`` field was never copied to."""

    def __init__(self, field_name: str):
        super().__init__(f"field {field_name} has must tag but was not copied")
        self.field_name = field_name


class FatalObligationViolation(BaseException):  # noqa: N818
    """Raised when a ``must`` field was never copied to and ``nopanic`` is absent.

    Analogous to a failed assertion: the copy contract was broken and the
    caller is not expected to recover.
    """

    def __init__(self, field_name: str):
        super().__init__(f"Field {field_name} has must tag but was not copied")
        self.field_name = field_name
