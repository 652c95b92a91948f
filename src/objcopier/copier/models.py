"""Copy configuration.

Per-call options, passed unchanged through the whole recursive copy.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from objcopier.core.types import HookFunc, ParseFunc

if TYPE_CHECKING:
    from objcopier.config import CopierSettings


@dataclass(frozen=True, slots=True)
class CopyConfiguration:
    """Options for one copy invocation.

    Hooks and parsers may be given as any iterable; they are stored as tuples.
    """

    ignore_empty: bool = False
    """Skip empty source values: None, 0, "", empty containers, all-empty structs."""

    deep_copy: bool = False
    """Detach nested structs, dicts and lists from the source instead of sharing them."""

    ignore_private_fields: bool = False
    """Skip fields whose name starts with an underscore."""

    hooks: tuple[HookFunc, ...] = ()
    """Field vetoes, consulted in order before a source field is copied."""

    parsers: tuple[ParseFunc, ...] = ()
    """Conversion overrides, consulted in order before default conversion."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "hooks", tuple(self.hooks))
        object.__setattr__(self, "parsers", tuple(self.parsers))

    @classmethod
    def from_settings(cls, settings: CopierSettings, **overrides: Any) -> CopyConfiguration:
        """Build a configuration from settings defaults.

        Args:
            settings: Source of the boolean defaults.
            **overrides: Explicit values taking precedence over settings.

        Returns:
            New configuration.
        """
        values: dict[str, Any] = {
            "ignore_empty": settings.ignore_empty,
            "deep_copy": settings.deep_copy,
            "ignore_private_fields": settings.ignore_private_fields,
        }
        values.update(overrides)
        return cls(**values)

    def with_hooks(self, *hooks: HookFunc) -> CopyConfiguration:
        """Return a copy with hooks prepended to the existing ones."""
        if not hooks:
            return self
        return dataclasses.replace(self, hooks=(*hooks, *self.hooks))
