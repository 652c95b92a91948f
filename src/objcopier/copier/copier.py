"""The copy engine.

Copier walks a (destination, source) pair recursively: scalars are assigned or
converted, dicts and lists are rebuilt item by item, and structs are filled
field by field, pairing fields by name, alias tag or accessor method.

Usage:
    @dataclass
    class User:
        name: str
        age: int

    @dataclass
    class Employee:
        name: str = ""
        age: float = 0.0
        bonus: int = copier_field("-", default=0)

    employee = Employee(bonus=500)
    copy(employee, User("Ann", 30))
    # Employee(name="Ann", age=30.0, bonus=500)

    copier = Copier()
    copier.register(MyConverter())
    copier.copy_with_configuration(dst, src, CopyConfiguration(deep_copy=True))
"""

from __future__ import annotations

import copy as cp
import functools
import inspect
import logging
from collections.abc import Callable
from typing import Any, get_type_hints

from objcopier.config import CopierSettings
from objcopier.copier.models import CopyConfiguration
from objcopier.copier.obligations import check_obligations, mark_copied, track_obligations
from objcopier.core.convert import (
    Valuer,
    convert,
    convertible,
    extract_value,
    fits,
    is_scanner_type,
    scan_value,
    type_name,
)
from objcopier.core.errors import (
    CopierError,
    InvalidDestinationError,
    InvalidSourceError,
    KeyTypeMismatchError,
    ParserError,
    UnsupportedConversionError,
)
from objcopier.core.shape import (
    FieldInfo,
    Kind,
    TypeShape,
    find_field,
    flatten,
    is_empty,
    is_struct_type,
    is_writable,
    new_instance,
    normalize_type,
    normalize_value,
    read_path,
    resolve_interface,
    shape_of,
    value_kind,
    zero_value,
)
from objcopier.core.slots import AttributeSlot, ItemSlot, Ref, RetypedSlot, Slot
from objcopier.core.tags import build_tag_index, resolve_names
from objcopier.core.types import HookFunc
from objcopier.registry import ConverterRegistry, TypedConverter, TypePair

logger = logging.getLogger(__name__)


class Copier:
    """Copies values between arbitrary structs, dicts, lists and scalars.

    Args:
        registry: Converter registry consulted before default conversions.
            A private registry sized from settings is created when omitted.
        settings: Defaults for copy() (environment driven when omitted).
    """

    def __init__(
        self,
        registry: ConverterRegistry | None = None,
        settings: CopierSettings | None = None,
    ) -> None:
        """Initialize copier.

        Args:
            registry: Converter registry, shared with the caller.
            settings: Default copy options.
        """
        self._settings = settings if settings is not None else CopierSettings()
        self._registry = (
            registry
            if registry is not None
            else ConverterRegistry(max_entries=self._settings.registry_size)
        )
        self._hooks: list[HookFunc] = []

    @property
    def registry(self) -> ConverterRegistry:
        return self._registry

    def register(self, *converters: TypedConverter) -> None:
        """Register typed converters with this copier's registry."""
        self._registry.register(*converters)

    def add_hook(self, hook: HookFunc) -> None:
        """Add a field veto applied to every copy made by this copier."""
        self._hooks.append(hook)

    def copy(self, dst: Any, src: Any) -> None:
        """Copy src into dst with the settings' default options.

        Raises:
            CopierError: See copy_with_configuration.
        """
        self.copy_with_configuration(dst, src, CopyConfiguration.from_settings(self._settings))

    def copy_with_configuration(self, dst: Any, src: Any, config: CopyConfiguration) -> None:
        """Copy src into dst.

        Args:
            dst: Writable destination: a mutable struct instance, dict, list or Ref.
            src: Source value; Refs are dereferenced.
            config: Copy options.

        Raises:
            InvalidDestinationError: If dst cannot be written to.
            InvalidSourceError: If src is None or an empty Ref.
            KeyTypeMismatchError: If dict keys do not convert to the destination key type.
            UnsupportedConversionError: If a value has no conversion path.
            ObligationUnmetError: If a ``must,nopanic`` field was not copied to.
            FatalObligationViolation: If a ``must`` field was not copied to.
            ParserError: If a parser, converter or Valuer fails.
            ScannerError: If a Scanner rejects a value.
            TagParseError: If a tag carries a malformed alias.
        """
        config = config.with_hooks(*self._hooks)
        self._copy(self._root_slot(dst), src, config)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    @staticmethod
    def _root_slot(dst: Any) -> Slot:
        if isinstance(dst, Ref):
            return dst
        if dst is None or not is_writable(dst):
            raise InvalidDestinationError(
                f"cannot copy into {type(dst).__qualname__}: destination is not writable"
            )
        return Ref(dst)

    def _copy(self, slot: Slot, source: Any, config: CopyConfiguration) -> None:
        source = normalize_value(source)
        if source is None:
            raise InvalidSourceError("cannot copy from None")
        while isinstance(slot.get(), Ref):
            slot = slot.get()
        target = slot.get()

        declared = shape_of(slot.annotation)
        if declared.kind is Kind.POINTER and declared.elem is not None:
            declared = declared.elem
        dst_shape = resolve_interface(declared, target)
        src_kind = value_kind(source)

        if not src_kind.is_container and (
            fits(source, declared.annotation) or convertible(type(source), declared.annotation)
        ):
            value = convert(source, declared.annotation)
            slot.set(cp.deepcopy(value) if config.deep_copy else value)
            return

        if src_kind is Kind.MAP and dst_shape.kind is Kind.MAP:
            self._copy_map(slot, target, source, dst_shape, config)
            return

        if (
            src_kind is Kind.SLICE
            and dst_shape.kind is Kind.SLICE
            and self._elements_convertible(source, dst_shape)
        ):
            self._copy_slice(slot, target, source, dst_shape, config)
            return

        dst_base, _ = normalize_type(dst_shape.annotation)
        if dst_base.kind is not Kind.STRUCT or src_kind not in (Kind.STRUCT, Kind.SLICE):
            logger.debug(
                "Skipping unsupported copy of %s into %s",
                type(source).__qualname__,
                type_name(dst_shape.annotation),
            )
            return

        if dst_shape.kind is Kind.SLICE:
            self._copy_structs_into_list(slot, target, source, dst_shape, dst_base, config)
            return

        if src_kind is not Kind.STRUCT:
            logger.debug("Skipping copy of a list into single struct %s", type_name(dst_base))
            return

        if target is None:
            target = new_instance(dst_base.annotation)
            slot.set(target)

        if declared.kind is Kind.INTERFACE:
            fresh = new_instance(type(target))
            try:
                self._copy_struct(fresh, shape_of(type(fresh)), source, config)
            finally:
                slot.set(fresh)
            return

        self._copy_struct(target, dst_base, source, config)

    def _transfer(self, slot: Slot, value: Any, config: CopyConfiguration) -> None:
        if not self._set(slot, value, config):
            self._copy(slot, value, config)

    # ------------------------------------------------------------------
    # Dicts and lists
    # ------------------------------------------------------------------

    def _copy_map(
        self,
        slot: Slot,
        target: Any,
        source: dict[Any, Any],
        dst_shape: TypeShape,
        config: CopyConfiguration,
    ) -> None:
        key_ann = dst_shape.key.annotation if dst_shape.key else Any
        elem_ann = dst_shape.elem.annotation if dst_shape.elem else Any

        for key in source:
            key_type = type(normalize_value(key))
            if not convertible(key_type, key_ann):
                raise KeyTypeMismatchError(
                    f"map key {key_type.__qualname__} does not convert to {type_name(key_ann)}"
                )

        if target is None:
            target = (dst_shape.origin or dict)()
            slot.set(target)

        for key, value in source.items():
            key_slot: Ref[Any] = Ref(annotation=key_ann)
            if not self._set(key_slot, key, config):
                raise UnsupportedConversionError(
                    f"map key {type(key).__qualname__} cannot be set as {type_name(key_ann)}",
                    source_type=type(key),
                    target=key_ann,
                )
            # Values that cannot be transferred leave the element's zero value.
            value_slot: Ref[Any] = Ref(zero_value(elem_ann), annotation=elem_ann)
            if normalize_value(value) is not None:
                self._transfer(value_slot, value, config)
            target[key_slot.value] = value_slot.value

    @staticmethod
    def _elements_convertible(source: Any, dst_shape: TypeShape) -> bool:
        elem_base, _ = normalize_type(dst_shape.elem.annotation if dst_shape.elem else Any)
        if elem_base.kind is Kind.INTERFACE:
            return True
        for item in source:
            item = normalize_value(item)
            while isinstance(item, (list, tuple)):
                item = normalize_value(item[0]) if item else None
            if item is None:
                continue
            if elem_base.kind is Kind.STRUCT:
                if not isinstance(item, elem_base.origin):  # type: ignore[arg-type]
                    return False
            elif not convertible(type(item), elem_base.annotation):
                return False
        return True

    def _copy_slice(
        self,
        slot: Slot,
        target: Any,
        source: Any,
        dst_shape: TypeShape,
        config: CopyConfiguration,
    ) -> None:
        if target is None:
            target = (dst_shape.origin or list)()
            slot.set(target)
        elem_ann = dst_shape.elem.annotation if dst_shape.elem else Any
        for i, item in enumerate(source):
            if len(target) <= i:
                target.append(zero_value(elem_ann))
            self._transfer(ItemSlot(target, i, elem_ann), item, config)

    def _copy_structs_into_list(
        self,
        slot: Slot,
        target: Any,
        source: Any,
        dst_shape: TypeShape,
        dst_base: TypeShape,
        config: CopyConfiguration,
    ) -> None:
        if target is None:
            target = (dst_shape.origin or list)()
            slot.set(target)
        items = source if value_kind(source) is Kind.SLICE else [source]
        for i, item in enumerate(items):
            item = normalize_value(item)
            dest = new_instance(dst_base.annotation)
            if item is not None and is_struct_type(type(item)):
                self._copy_struct(dest, dst_base, item, config)
            if i < len(target):
                target[i] = dest
            else:
                target.append(dest)

    # ------------------------------------------------------------------
    # Structs
    # ------------------------------------------------------------------

    def _copy_struct(
        self,
        dest: Any,
        dst_shape: TypeShape,
        source: Any,
        config: CopyConfiguration,
    ) -> None:
        src_type = type(source)
        dst_type = dst_shape.annotation
        src_index = build_tag_index(src_type)
        dst_index = build_tag_index(dst_type)
        obligations = track_obligations(dst_index)
        resolved: set[str] = set()

        for field in flatten(src_type):
            src_name, dst_name = resolve_names(field.name, src_index.names, dst_index.names)
            if dst_index.tag_for(dst_name).ignore:
                continue
            src_field = find_field(src_type, src_name)
            if src_field is None:
                continue
            found, value = read_path(source, src_field.path)
            if not found or self._should_skip(value, src_field, config):
                continue

            dst_field = find_field(dst_type, dst_name)
            if dst_field is None:
                self._call_setter(dest, dst_name, value)
                continue
            if config.ignore_private_fields and dst_field.is_private:
                continue
            owner = self._prepare_path(dest, dst_field)
            if owner is None:
                logger.debug("Skipping %s: embedded path is not writable", dst_field.name)
                continue
            self._transfer(AttributeSlot(owner, dst_field.name, dst_field.annotation), value, config)
            resolved.add(dst_field.name)
            mark_copied(obligations, dst_field.name)

        for dst_field in flatten(dst_type):
            if dst_field.name in resolved or dst_index.tag_for(dst_field.name).ignore:
                continue
            src_name, _ = resolve_names(dst_field.name, src_index.names, dst_index.names)
            accessor = _accessor(source, src_name)
            if accessor is None:
                continue
            value = accessor()
            if self._should_skip(value, dst_field, config):
                continue
            owner = self._prepare_path(dest, dst_field)
            if owner is None:
                continue
            self._transfer(AttributeSlot(owner, dst_field.name, dst_field.annotation), value, config)
            mark_copied(obligations, dst_field.name)

        check_obligations(obligations.values())

    @staticmethod
    def _should_skip(value: Any, field: FieldInfo, config: CopyConfiguration) -> bool:
        if config.ignore_private_fields and field.is_private:
            return True
        if config.ignore_empty and is_empty(value):
            return True
        return not all(hook(value, field) for hook in config.hooks)

    @staticmethod
    def _prepare_path(dest: Any, field: FieldInfo) -> Any:
        """Owner of the field, allocating None embedded structs on the way.

        Returns None when the owner, or a struct that needs allocating, is frozen.
        """
        owner = dest
        for name in field.path[:-1]:
            current = normalize_value(getattr(owner, name, None))
            if current is None:
                declared = next((f for f in shape_of(type(owner)).fields if f.name == name), None)
                if declared is None or not is_writable(owner):
                    return None
                current = new_instance(declared.annotation)
                if current is None:
                    return None
                setattr(owner, name, current)
            owner = current
        if not is_writable(owner):
            return None
        return owner

    @staticmethod
    def _call_setter(dest: Any, name: str, value: Any) -> None:
        method = getattr(dest, name, None)
        if not inspect.ismethod(method):
            return
        params = list(inspect.signature(method).parameters.values())
        if len(params) != 1:
            return
        annotation = params[0].annotation
        if annotation is inspect.Parameter.empty:
            annotation = Any
        elif isinstance(annotation, str):
            annotation = _resolved_hints(method.__func__).get(params[0].name, Any)
        if fits(value, annotation):
            method(value)

    # ------------------------------------------------------------------
    # Single value transfer
    # ------------------------------------------------------------------

    def _set(self, slot: Slot, value: Any, config: CopyConfiguration) -> bool:
        """Assign one value without walking struct fields.

        Returns:
            True if the slot was handled (written or deliberately left alone),
            False if the caller should fall back to a full recursive copy.
        """
        for parser in config.parsers:
            if _call_collaborator(parser, slot, value):
                return True

        converter = self._registry.lookup(TypePair(type(value), slot.annotation))
        if converter is not None:
            _call_collaborator(converter.copy, slot, value)
            return True

        shape = shape_of(slot.annotation)
        if shape.kind is Kind.POINTER and shape.elem is not None:
            if normalize_value(value) is None:
                slot.set(None)
                return True
            if slot.get() is None:
                if isinstance(value, Valuer) and extract_value(value) is None:
                    return True
                slot.set(new_instance(shape.elem.annotation))
            shape = shape.elem
            slot = RetypedSlot(slot, shape.annotation)
        return self._assign(slot, shape, value, config)

    def _assign(self, slot: Slot, shape: TypeShape, value: Any, config: CopyConfiguration) -> bool:
        value = normalize_value(value)
        if value is None:
            return True

        if config.deep_copy:
            source_shape = shape_of(type(value))
            detachable = source_shape.kind.is_container and not source_shape.frozen
            if shape.kind is Kind.INTERFACE and detachable:
                slot.set(new_instance(type(value)))
                return False
            if shape.kind.is_container and not shape.frozen:
                return False

        if fits(value, shape.annotation):
            slot.set(cp.deepcopy(value) if config.deep_copy else value)
            return True
        if shape.kind is Kind.SCALAR and convertible(type(value), shape.annotation):
            slot.set(convert(value, shape.annotation))
            return True

        if is_scanner_type(shape.annotation):
            scanner = slot.get()
            if not isinstance(scanner, shape.origin):  # type: ignore[arg-type]
                scanner = new_instance(shape.annotation)
            scan_value(scanner, value)
            slot.set(scanner)
            return True

        if isinstance(value, Valuer):
            raw = extract_value(value)
            if raw is None:
                return True
            if fits(raw, shape.annotation):
                slot.set(raw)
            elif shape.kind is Kind.SCALAR and convertible(type(raw), shape.annotation):
                slot.set(convert(raw, shape.annotation))
            return True

        return False


def _call_collaborator(func: Callable[[Slot, Any], Any], slot: Slot, value: Any) -> Any:
    """Invoke a parser or converter, wrapping foreign failures in ParserError."""
    try:
        return func(slot, value)
    except CopierError:
        raise
    except Exception as exc:
        name = getattr(func, "__qualname__", type(func).__qualname__)
        raise ParserError(f"{name} failed for {type(value).__qualname__}: {exc}") from exc


@functools.lru_cache(maxsize=256)
def _resolved_hints(func: Callable[..., Any]) -> dict[str, Any]:
    try:
        return get_type_hints(func)
    except (NameError, TypeError):
        return {}


def _accessor(source: Any, name: str) -> Callable[[], Any] | None:
    """Zero-argument method or property of the source's class, if any."""
    attr = inspect.getattr_static(type(source), name, None)
    if isinstance(attr, (property, functools.cached_property)):
        return lambda: getattr(source, name)
    if not inspect.isfunction(attr):
        return None
    bound = getattr(source, name)
    for param in inspect.signature(bound).parameters.values():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        if param.default is param.empty:
            return None
    return bound


@functools.cache
def default_copier() -> Copier:
    """Process-wide Copier behind copy() and copy_with_configuration().

    Settings are read from the environment once, on first use.
    """
    return Copier()


def copy(dst: Any, src: Any) -> None:
    """Copy src into dst with default options. See Copier.copy_with_configuration."""
    default_copier().copy(dst, src)


def copy_with_configuration(dst: Any, src: Any, config: CopyConfiguration) -> None:
    """Copy src into dst with explicit options. See Copier.copy_with_configuration."""
    default_copier().copy_with_configuration(dst, src, config)
