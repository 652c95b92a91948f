"""Core type definitions for objcopier."""

from collections.abc import Callable
from typing import Any

from objcopier.core.shape.models import FieldInfo
from objcopier.core.slots import Slot

type HookFunc = Callable[[Any, FieldInfo], bool]
"""Field veto: ``hook(source_value, source_field) -> proceed``.

Values read from a source accessor method are passed with the destination field.

Returning False skips the field; hooks run in registration order and the first
veto wins.
"""

type ParseFunc = Callable[[Slot, Any], bool]
"""Conversion override: ``parser(destination_slot, source_value) -> handled``.

Runs before any default conversion. Returning True means the parser wrote (or
deliberately skipped) the slot; raising aborts the copy.
"""
