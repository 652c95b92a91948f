"""Tests for writable destination slots."""

from dataclasses import dataclass
from typing import Any

from objcopier import AttributeSlot, ItemSlot, Ref, Slot
from objcopier.core.slots import RetypedSlot, unwrap


@dataclass
class Box:
    size: int = 0


def test_ref_annotation_from_value():
    """Without an explicit annotation, a Ref is typed by its initial value."""
    assert Ref(0).annotation is int
    assert Ref().annotation is Any
    assert Ref(annotation=float).annotation is float
    assert Ref(1, annotation=float).annotation is float


def test_ref_get_set():
    ref = Ref(1)

    ref.set(2)

    assert ref.get() == 2
    assert ref.value == 2
    assert repr(ref) == "Ref(2)"


def test_attribute_slot():
    box = Box()
    slot = AttributeSlot(box, "size", int)

    slot.set(5)

    assert box.size == 5
    assert slot.get() == 5
    assert slot.annotation is int


def test_attribute_slot_missing_attribute_reads_none():
    assert AttributeSlot(Box(), "weight", int).get() is None


def test_item_slot_list_and_dict():
    items = [1, 2]
    mapping = {}

    ItemSlot(items, 1, int).set(9)
    ItemSlot(mapping, "k", int).set(3)

    assert items == [1, 9]
    assert mapping == {"k": 3}
    assert ItemSlot(items, 5, int).get() is None
    assert ItemSlot(mapping, "missing", int).get() is None


def test_retyped_slot_writes_through():
    box = Box()
    slot = RetypedSlot(AttributeSlot(box, "size", int | None), int)

    slot.set(4)

    assert slot.annotation is int
    assert box.size == 4


def test_all_slots_implement_protocol():
    box = Box()
    slots = [
        Ref(),
        AttributeSlot(box, "size", int),
        ItemSlot([], 0, int),
        RetypedSlot(Ref(), int),
    ]

    assert all(isinstance(slot, Slot) for slot in slots)


def test_unwrap():
    assert unwrap(Ref(Ref("x"))) == "x"
    assert unwrap(None) is None
