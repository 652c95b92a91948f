"""Writable destination locations.

A Slot is anything the engine can read from and write to: an attribute on a
struct instance, an index in a list, a key in a dict, or a Ref box. Slots carry
the declared annotation of the location so conversions know their target type.

Usage:
    ref = Ref(0)
    objcopier.copy(ref, 3.9)
    ref.value  # 3

    ref = Ref(annotation=dict[float, Decimal])
    objcopier.copy(ref, {3: 6, 4: 8})
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Slot(Protocol):
    """Readable and writable location with a declared annotation."""

    @property
    def annotation(self) -> Any: ...

    def get(self) -> Any: ...

    def set(self, value: Any) -> None: ...


class Ref[T]:
    """Mutable box standing in for a pointer.

    A Ref is the only destination that can receive a bare scalar, since Python
    cannot rebind the caller's variable. When no annotation is given, the type
    of the initial value is used, and Any when the initial value is None.
    """

    __slots__ = ("value", "_annotation")

    def __init__(self, value: T | None = None, annotation: Any = None) -> None:
        self.value = value
        self._annotation = annotation

    @property
    def annotation(self) -> Any:
        """Declared type of the boxed value."""
        if self._annotation is not None:
            return self._annotation
        if self.value is None:
            return Any
        return type(self.value)

    def get(self) -> T | None:
        return self.value

    def set(self, value: T | None) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Ref({self.value!r})"


class AttributeSlot:
    """Attribute of a struct instance."""

    __slots__ = ("owner", "name", "_annotation")

    def __init__(self, owner: Any, name: str, annotation: Any) -> None:
        self.owner = owner
        self.name = name
        self._annotation = annotation

    @property
    def annotation(self) -> Any:
        return self._annotation

    def get(self) -> Any:
        return getattr(self.owner, self.name, None)

    def set(self, value: Any) -> None:
        setattr(self.owner, self.name, value)


class ItemSlot:
    """Index of a list or key of a dict."""

    __slots__ = ("container", "key", "_annotation")

    def __init__(self, container: Any, key: Any, annotation: Any) -> None:
        self.container = container
        self.key = key
        self._annotation = annotation

    @property
    def annotation(self) -> Any:
        return self._annotation

    def get(self) -> Any:
        try:
            return self.container[self.key]
        except (IndexError, KeyError):
            return None

    def set(self, value: Any) -> None:
        self.container[self.key] = value


class RetypedSlot:
    """View of another slot under a narrower annotation (Optional[T] -> T)."""

    __slots__ = ("inner", "_annotation")

    def __init__(self, inner: Slot, annotation: Any) -> None:
        self.inner = inner
        self._annotation = annotation

    @property
    def annotation(self) -> Any:
        return self._annotation

    def get(self) -> Any:
        return self.inner.get()

    def set(self, value: Any) -> None:
        self.inner.set(value)


def unwrap(value: Any) -> Any:
    """Follow Ref boxes until a plain value (or None) is reached."""
    while isinstance(value, Ref):
        value = value.value
    return value
