"""Property-based tests for copy invariants."""

from dataclasses import dataclass, field

from hypothesis import given
from hypothesis import strategies as st

from objcopier import CopyConfiguration, Ref, copier_field, copy, copy_with_configuration


@dataclass
class Profile:
    name: str = ""
    age: int = 0
    score: float = 0.0
    tags: list[str] = field(default_factory=list)
    active: bool = False


@dataclass
class ProfileMirror:
    name: str = ""
    age: int = 0
    score: float = 0.0
    tags: list[str] = field(default_factory=list)
    active: bool = False


@dataclass
class Payroll:
    name: str = ""
    bonus: int = 0


@dataclass
class Staff:
    name: str = ""
    bonus: int = copier_field("-", default=0)


@st.composite
def profile_strategy(draw):
    """Generate random profiles."""
    return Profile(
        name=draw(st.text(max_size=20)),
        age=draw(st.integers()),
        score=draw(st.floats(allow_nan=False)),
        tags=draw(st.lists(st.text(max_size=5), max_size=5)),
        active=draw(st.booleans()),
    )


configurations = st.builds(
    CopyConfiguration,
    ignore_empty=st.booleans(),
    deep_copy=st.booleans(),
    ignore_private_fields=st.booleans(),
)


@given(profile=profile_strategy(), deep_copy=st.booleans())
def test_round_trip_restores_source(profile, deep_copy):
    """Copying A -> B -> A' between structurally identical types gives A' == A."""
    config = CopyConfiguration(deep_copy=deep_copy)
    mirror = ProfileMirror()
    restored = Profile()

    copy_with_configuration(mirror, profile, config)
    copy_with_configuration(restored, mirror, config)

    assert restored == profile


@given(profile=profile_strategy())
def test_copy_is_idempotent(profile):
    """Copying the same source twice gives the same result as once."""
    once = ProfileMirror()
    twice = ProfileMirror()

    copy(once, profile)
    copy(twice, profile)
    copy(twice, profile)

    assert once == twice


@given(profile=profile_strategy())
def test_deep_copy_never_aliases_lists(profile):
    mirror = ProfileMirror()

    copy_with_configuration(mirror, profile, CopyConfiguration(deep_copy=True))

    assert mirror.tags == profile.tags
    assert mirror.tags is not profile.tags


@given(bonus=st.integers(), config=configurations)
def test_ignored_field_never_written(bonus, config):
    """CRITICAL: '-' holds under every configuration.

    Why: Options change how values travel, never which fields may be written.
    """
    staff = Staff(bonus=500)

    copy_with_configuration(staff, Payroll(name="x", bonus=bonus), config)

    assert staff.bonus == 500


@given(profile=profile_strategy())
def test_ignore_empty_keeps_destination_for_empty_values(profile):
    mirror = ProfileMirror(name="keep", age=7)

    copy_with_configuration(mirror, profile, CopyConfiguration(ignore_empty=True))

    assert mirror.name == (profile.name or "keep")
    assert mirror.age == (profile.age or 7)


@given(value=st.integers(min_value=-(2**53), max_value=2**53))
def test_int_to_float_ref(value):
    ref = Ref(0.0)

    copy(ref, value)

    assert ref.value == float(value)
    assert isinstance(ref.value, float)


@given(mapping=st.dictionaries(st.text(max_size=5), st.integers(), max_size=10))
def test_dict_copy_matches_source(mapping):
    ref = Ref(annotation=dict[str, int])

    copy(ref, mapping)

    assert ref.value == mapping
