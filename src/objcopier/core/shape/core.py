"""Type normalization and field enumeration.

Shapes are derived on demand from annotations (or from runtime classes) and
memoized; nothing here mutates the types it inspects.

Usage:
    @dataclass
    class Base:
        id: int

    @dataclass
    class User:
        base: Base = embedded()
        name: str = copier_field("must", default="")

    flatten(User)               # (id, name): Base.id is promoted
    normalize_type(list[User])  # (shape of User, True)
"""

from __future__ import annotations

import dataclasses
import functools
import logging
import types
from collections.abc import Mapping, MutableMapping, MutableSequence, Sized
from decimal import Decimal
from enum import Enum
from numbers import Number
from typing import Annotated, Any, Literal, TypeVar, Union, get_args, get_origin, get_type_hints

from objcopier.core.shape.models import EMBED_KEY, TAG_KEY, FieldInfo, Kind, TypeShape
from objcopier.core.slots import Ref, unwrap

logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)


def copier_field(tag: str, **kwargs: Any) -> Any:
    """Declare a dataclass field carrying a copier tag.

    Args:
        tag: Comma separated tag: ``-``, ``must``, ``nopanic`` or an alias.
        **kwargs: Forwarded to dataclasses.field (default, default_factory, ...).

    Returns:
        A dataclasses.Field with the tag stored in its metadata.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[TAG_KEY] = tag
    return dataclasses.field(metadata=metadata, **kwargs)


def embedded(**kwargs: Any) -> Any:
    """Declare a dataclass field whose own fields are promoted to the owner."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[EMBED_KEY] = True
    if "default_factory" not in kwargs:
        kwargs.setdefault("default", None)
    return dataclasses.field(metadata=metadata, **kwargs)


def _is_pydantic(cls: type) -> bool:
    """Check if class is a Pydantic model without importing pydantic."""
    for base in cls.__mro__:
        if base.__module__.startswith("pydantic") and base.__name__ == "BaseModel":
            return True
    return False


def is_struct_type(tp: Any) -> bool:
    """True for dataclass classes and Pydantic model classes."""
    return isinstance(tp, type) and (dataclasses.is_dataclass(tp) or _is_pydantic(tp))


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls)
    except (NameError, TypeError):
        logger.debug("Could not resolve annotations of %s", cls.__qualname__, exc_info=True)
        return {}


def _declared_fields(cls: type) -> tuple[FieldInfo, ...]:
    if dataclasses.is_dataclass(cls):
        hints = _type_hints(cls)
        fields = []
        for f in dataclasses.fields(cls):
            annotation = hints.get(f.name, f.type)
            if isinstance(annotation, str):
                annotation = Any
            fields.append(
                FieldInfo(
                    name=f.name,
                    annotation=annotation,
                    tag=f.metadata.get(TAG_KEY, ""),
                    embedded=bool(f.metadata.get(EMBED_KEY)),
                    path=(f.name,),
                )
            )
        return tuple(fields)

    fields = []
    for name, info in cls.model_fields.items():  # type: ignore[attr-defined]
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        fields.append(
            FieldInfo(
                name=name,
                annotation=info.annotation,
                tag=str(extra.get(TAG_KEY, "")),
                embedded=bool(extra.get(EMBED_KEY)),
                path=(name,),
            )
        )
    return tuple(fields)


def _is_frozen(cls: type) -> bool:
    if dataclasses.is_dataclass(cls):
        return bool(cls.__dataclass_params__.frozen)  # type: ignore[attr-defined]
    return bool(cls.model_config.get("frozen"))  # type: ignore[attr-defined]


def _build_shape(annotation: Any) -> TypeShape:
    if annotation is None or annotation is _NONE_TYPE:
        return TypeShape(Kind.SCALAR, _NONE_TYPE, origin=_NONE_TYPE)
    if annotation is Any or annotation is object or isinstance(annotation, (str, TypeVar)):
        return TypeShape(Kind.INTERFACE, annotation)

    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:  # NewType
        return shape_of(supertype)

    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin is Annotated:
        return shape_of(args[0])

    if origin is Union or origin is types.UnionType:
        members = [a for a in args if a is not _NONE_TYPE]
        if len(members) == 1:
            inner = shape_of(members[0])
            if len(members) == len(args):
                return inner
            return TypeShape(Kind.POINTER, annotation, origin=inner.origin, elem=inner)
        return TypeShape(Kind.INTERFACE, annotation)

    if origin is Literal:
        return TypeShape(Kind.SCALAR, annotation, origin=type(args[0]) if args else None)

    if origin is not None:
        if origin is MutableSequence or (isinstance(origin, type) and issubclass(origin, list)):
            elem = shape_of(args[0] if args else Any)
            cls = origin if isinstance(origin, type) and issubclass(origin, list) else list
            return TypeShape(Kind.SLICE, annotation, origin=cls, elem=elem)
        if origin in (Mapping, MutableMapping) or (
            isinstance(origin, type) and issubclass(origin, dict)
        ):
            key = shape_of(args[0] if args else Any)
            elem = shape_of(args[1] if len(args) > 1 else Any)
            cls = origin if isinstance(origin, type) and issubclass(origin, dict) else dict
            return TypeShape(Kind.MAP, annotation, origin=cls, elem=elem, key=key)
        return TypeShape(
            Kind.SCALAR, annotation, origin=origin if isinstance(origin, type) else None
        )

    if not isinstance(annotation, type):
        return TypeShape(Kind.INTERFACE, annotation)
    if getattr(annotation, "_is_protocol", False):
        return TypeShape(Kind.INTERFACE, annotation)
    if issubclass(annotation, list):
        return TypeShape(Kind.SLICE, annotation, origin=annotation, elem=shape_of(Any))
    if issubclass(annotation, dict):
        any_shape = shape_of(Any)
        return TypeShape(Kind.MAP, annotation, origin=annotation, elem=any_shape, key=any_shape)
    if is_struct_type(annotation):
        return TypeShape(
            Kind.STRUCT,
            annotation,
            origin=annotation,
            fields=_declared_fields(annotation),
            frozen=_is_frozen(annotation),
        )
    return TypeShape(Kind.SCALAR, annotation, origin=annotation)


@functools.lru_cache(maxsize=1024)
def _cached_shape(annotation: Any) -> TypeShape:
    return _build_shape(annotation)


def shape_of(annotation: Any) -> TypeShape:
    """Describe an annotation (or a runtime class) structurally.

    Args:
        annotation: Any annotation: classes, generics, unions, Any.

    Returns:
        Memoized TypeShape for hashable annotations.
    """
    try:
        hash(annotation)
    except TypeError:
        return _build_shape(annotation)
    return _cached_shape(annotation)


def normalize_value(value: Any) -> Any:
    """Dereference Ref boxes; None propagates unchanged."""
    return unwrap(value)


def normalize_type(annotation: Any) -> tuple[TypeShape, bool]:
    """Strip Optional and list indirection down to the base shape.

    A list of optional structs therefore normalizes to the struct shape, which
    is what the struct-to-list copy path matches against.

    Args:
        annotation: Annotation to normalize.

    Returns:
        (base shape, True if at least one level of indirection was stripped).
    """
    shape = shape_of(annotation)
    stripped = False
    while shape.kind in (Kind.POINTER, Kind.SLICE) and shape.elem is not None:
        shape = shape.elem
        stripped = True
    return shape, stripped


def resolve_interface(shape: TypeShape, value: Any) -> TypeShape:
    """Replace an interface shape by the shape of the value's concrete type."""
    value = unwrap(value)
    if shape.kind is Kind.INTERFACE and value is not None:
        return shape_of(type(value))
    return shape


def value_kind(value: Any) -> Kind:
    """Kind of a runtime value. None reports as a nil POINTER."""
    value = unwrap(value)
    if value is None:
        return Kind.POINTER
    if isinstance(value, (list, tuple)):
        return Kind.SLICE
    if isinstance(value, dict):
        return Kind.MAP
    if is_struct_type(type(value)):
        return Kind.STRUCT
    return Kind.SCALAR


def _walk(annotation: Any, prefix: tuple[str, ...]) -> list[FieldInfo]:
    """All fields including embedded ones themselves, with full paths."""
    shape, _ = normalize_type(annotation)
    if shape.kind is not Kind.STRUCT:
        return []
    result: list[FieldInfo] = []
    for f in shape.fields:
        full = dataclasses.replace(f, path=prefix + f.path)
        result.append(full)
        if f.embedded:
            result.extend(_walk(f.annotation, full.path))
    return result


@functools.lru_cache(maxsize=512)
def _flatten_cached(annotation: Any) -> tuple[FieldInfo, ...]:
    return tuple(f for f in _walk(annotation, ()) if not f.embedded)


def flatten(annotation: Any) -> tuple[FieldInfo, ...]:
    """Flatten a struct's fields, promoting the fields of embedded structs.

    Declaration order is kept within each nesting level. Non-struct types
    yield an empty tuple.
    """
    shape, _ = normalize_type(annotation)
    if shape.kind is not Kind.STRUCT:
        return ()
    return _flatten_cached(shape.annotation)


@functools.lru_cache(maxsize=512)
def _field_index(annotation: Any) -> dict[str, FieldInfo]:
    index: dict[str, FieldInfo] = {}
    for f in _walk(annotation, ()):
        current = index.get(f.name)
        if current is None or f.depth < current.depth:
            index[f.name] = f
    return index


def find_field(annotation: Any, name: str) -> FieldInfo | None:
    """Look a field up by name; the shallowest match wins.

    Embedded fields are addressable by their own name as well as through
    their promoted fields.
    """
    shape, _ = normalize_type(annotation)
    if shape.kind is not Kind.STRUCT:
        return None
    return _field_index(shape.annotation).get(name)


def read_path(obj: Any, path: tuple[str, ...]) -> tuple[bool, Any]:
    """Follow an attribute path.

    Returns:
        (found, value); found is False when an attribute is missing or an
        intermediate embedded value is None.
    """
    current = obj
    for depth, name in enumerate(path):
        if current is None:
            return False, None
        try:
            current = getattr(current, name)
        except AttributeError:
            return False, None
        if depth < len(path) - 1:
            current = unwrap(current)
    return True, current


def zero_value(annotation: Any) -> Any:
    """Zero value for an annotation: None, empty container, or a fresh instance."""
    shape = shape_of(annotation)
    match shape.kind:
        case Kind.POINTER | Kind.INTERFACE:
            return None
        case Kind.SLICE:
            return (shape.origin or list)()
        case Kind.MAP:
            return (shape.origin or dict)()
        case Kind.STRUCT:
            return new_instance(annotation)
    cls = shape.origin
    if cls is None or cls is _NONE_TYPE:
        return None
    if issubclass(cls, Enum):
        return next(iter(cls), None)
    try:
        return cls()
    except (TypeError, ValueError):
        return None


def new_instance(annotation: Any) -> Any:
    """Allocate a new value of the (Optional-stripped) annotation.

    Structs are built with their declared defaults; required fields receive
    the zero value of their annotation.
    """
    shape = shape_of(annotation)
    if shape.kind is Kind.POINTER and shape.elem is not None:
        shape = shape.elem
    if shape.kind is not Kind.STRUCT:
        return zero_value(shape.annotation)

    cls = shape.origin
    annotations = {f.name: f.annotation for f in shape.fields}
    if dataclasses.is_dataclass(cls):
        kwargs = {
            f.name: zero_value(annotations.get(f.name, Any))
            for f in dataclasses.fields(cls)
            if f.init
            and f.default is dataclasses.MISSING
            and f.default_factory is dataclasses.MISSING
        }
        return cls(**kwargs)
    required = {
        name: zero_value(info.annotation)
        for name, info in cls.model_fields.items()  # type: ignore[union-attr]
        if info.is_required()
    }
    return cls.model_construct(**required)  # type: ignore[union-attr]


def is_empty(value: Any) -> bool:
    """Zero-value test: None, falsy scalars, empty containers, all-empty structs."""
    value = unwrap(value)
    if value is None:
        return True
    if is_struct_type(type(value)):
        return all(is_empty(getattr(value, f.name, None)) for f in shape_of(type(value)).fields)
    if isinstance(value, (Number, Decimal, str, bytes, bytearray)):
        return not value
    if isinstance(value, Enum):
        return False
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def is_writable(value: Any) -> bool:
    """Whether a destination can be modified in place."""
    if isinstance(value, (Ref, MutableSequence, MutableMapping)):
        return True
    if is_struct_type(type(value)):
        return not shape_of(type(value)).frozen
    return False
