"""Conversion capability protocols.

Optional interfaces a type can implement to take part in conversions it could
not otherwise support, typically database binding types:

    class NullString:
        def __init__(self, string: str = "", valid: bool = False): ...

        def __scan__(self, value: Any) -> None:
            self.string, self.valid = (value, True) if value is not None else ("", False)

        def __value__(self) -> Any:
            return self.string if self.valid else None
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Scanner(Protocol):
    """Populates itself from an arbitrary value; raises on mismatch."""

    def __scan__(self, value: Any) -> None: ...


@runtime_checkable
class Valuer(Protocol):
    """Produces a plain value representing itself (None for null); raises on failure."""

    def __value__(self) -> Any: ...
