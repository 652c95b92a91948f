"""Tests for tag parsing and alias resolution."""

from dataclasses import dataclass

import pytest
from hypothesis import given
from hypothesis import strategies as st

from objcopier import FieldTag, TagParseError, copier_field, parse_tag
from objcopier.core.tags import (
    NameMapping,
    build_name_mapping,
    build_tag_index,
    resolve_names,
)


@dataclass
class EmployeeTags:
    Name: str = copier_field("must", default="")
    ID: int = copier_field("-", default=0)
    FieldDifferA: str = copier_field("Differ1", default="")
    FieldDifferB: str = copier_field("must,nopanic,Differ2", default="")
    Plain: str = ""


@dataclass
class BadTags:
    field_a: str = copier_field("differ1", default="")


# ---------------------------------------------------------------------------
# parse_tag
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("", FieldTag()),
        ("-", FieldTag(ignore=True)),
        ("must", FieldTag(must=True)),
        ("nopanic", FieldTag(no_panic=True)),
        ("must,nopanic", FieldTag(must=True, no_panic=True)),
        ("Differ1", FieldTag(alias="Differ1")),
        ("must, Alias ", FieldTag(must=True, alias="Alias")),
        ("First,Second", FieldTag(alias="Second")),
        ("must,,nopanic", FieldTag(must=True, no_panic=True)),
    ],
)
def test_parse_tag(tag, expected):
    assert parse_tag(tag) == expected


def test_ignore_ends_parsing():
    """CRITICAL: '-' wins over everything that follows it.

    Why: An ignored field must never be written, whatever else is tagged.
    """
    parsed = parse_tag("-,must,Alias")

    assert parsed == FieldTag(ignore=True)
    assert not parsed.must
    assert parsed.alias is None


def test_ignore_after_other_tokens():
    assert parse_tag("must,-") == FieldTag(ignore=True)


def test_lowercase_alias_rejected():
    with pytest.raises(TagParseError, match="upper case"):
        parse_tag("differ1")


def test_tag_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_tag("1abc")


def test_has_flags():
    assert parse_tag("must").has_flags
    assert parse_tag("-").has_flags
    assert not parse_tag("Alias").has_flags


@given(alias=st.from_regex(r"[A-Z][A-Za-z0-9_]{0,15}", fullmatch=True))
def test_uppercase_tokens_become_aliases(alias):
    """Any token starting with an uppercase letter is taken as the alias."""
    assert parse_tag(alias).alias == alias
    assert parse_tag(f"must,{alias}") == FieldTag(must=True, alias=alias)


@given(
    token=st.from_regex(r"[a-z0-9_][a-z0-9_]{0,15}", fullmatch=True).filter(
        lambda t: t not in ("must", "nopanic")
    )
)
def test_other_tokens_rejected(token):
    """Tokens that are neither flags nor aliases are errors."""
    with pytest.raises(TagParseError):
        parse_tag(token)


# ---------------------------------------------------------------------------
# Tag index / name mapping
# ---------------------------------------------------------------------------


def test_build_tag_index():
    index = build_tag_index(EmployeeTags)

    assert index.tag_for("Name").must
    assert index.tag_for("ID").ignore
    assert index.tag_for("FieldDifferB") == FieldTag(must=True, no_panic=True, alias="Differ2")
    assert index.tag_for("Plain") == FieldTag()
    assert "Plain" not in index.tags


def test_build_name_mapping_is_bidirectional():
    mapping = build_name_mapping(EmployeeTags)

    assert mapping.field_to_alias == {"FieldDifferA": "Differ1", "FieldDifferB": "Differ2"}
    assert mapping.alias_to_field == {"Differ1": "FieldDifferA", "Differ2": "FieldDifferB"}


def test_build_tag_index_fails_on_bad_alias():
    with pytest.raises(TagParseError):
        build_tag_index(BadTags)


def test_build_tag_index_non_struct():
    assert build_tag_index(int).tags == {}


# ---------------------------------------------------------------------------
# resolve_names
# ---------------------------------------------------------------------------


def _mapping(**pairs):
    mapping = NameMapping()
    for field_name, alias in pairs.items():
        mapping.add(field_name, alias)
    return mapping


def test_resolve_untagged_names():
    assert resolve_names("Name", NameMapping(), NameMapping()) == ("Name", "Name")


def test_resolve_source_alias_to_destination_alias():
    """Both sides tag the same alias: fields pair although named differently."""
    src = _mapping(message="CommentField")
    dst = _mapping(comment="CommentField")

    assert resolve_names("message", src, dst) == ("message", "comment")


def test_resolve_source_alias_to_plain_destination_field():
    src = _mapping(FieldDiffer2="Differ2")

    assert resolve_names("FieldDiffer2", src, NameMapping()) == ("FieldDiffer2", "Differ2")


def test_resolve_destination_alias_matching_source_name():
    dst = _mapping(FieldDifferA="Differ1")

    assert resolve_names("Differ1", NameMapping(), dst) == ("Differ1", "FieldDifferA")


def test_resolve_destination_field_name():
    """Resolving a destination field yields the source field to read from."""
    src = _mapping(message="CommentField")
    dst = _mapping(comment="CommentField")

    src_name, _ = resolve_names("comment", src, dst)

    assert src_name == "message"


def test_resolve_destination_alias_without_source_counterpart():
    dst = _mapping(FieldDifferA="Differ1")

    src_name, _ = resolve_names("FieldDifferA", NameMapping(), dst)

    assert src_name == "Differ1"
