"""Tag parsing and cross-type name resolution.

Tags are comma separated strings stored under the ``copier`` metadata key:

    @dataclass
    class Employee:
        name: str = copier_field("must")
        salary: int = copier_field("-", default=0)
        comment: str = copier_field("CommentField", default="")
"""

from __future__ import annotations

import functools
from typing import Any

from objcopier.core.errors import TagParseError
from objcopier.core.shape import flatten
from objcopier.core.tags.models import FieldTag, NameMapping, TagIndex

_IGNORE = "-"
_MUST = "must"
_NO_PANIC = "nopanic"


@functools.lru_cache(maxsize=1024)
def parse_tag(tag: str) -> FieldTag:
    """Parse a tag string into flags and an optional alias.

    Args:
        tag: Raw tag, e.g. ``"must,nopanic"`` or ``"Differ1"``.

    Returns:
        Parsed FieldTag. An empty tag yields all flags off and no alias.

    Raises:
        TagParseError: If an alias token does not start with an uppercase letter.
    """
    must = no_panic = False
    alias: str | None = None
    for raw in tag.split(","):
        token = raw.strip()
        if not token:
            continue
        if token == _IGNORE:
            return FieldTag(ignore=True)
        if token == _MUST:
            must = True
        elif token == _NO_PANIC:
            no_panic = True
        elif token[0].isupper():
            alias = token
        else:
            raise TagParseError(
                f"copier field name tag must start with an upper case letter: {token!r}"
            )
    return FieldTag(must=must, no_panic=no_panic, alias=alias)


def build_tag_index(annotation: Any) -> TagIndex:
    """Parse every tagged field of a struct type.

    Fails fast on the first malformed tag.
    """
    index = TagIndex()
    for f in flatten(annotation):
        if not f.tag:
            continue
        parsed = parse_tag(f.tag)
        index.tags[f.name] = parsed
        if parsed.alias:
            index.names.add(f.name, parsed.alias)
    return index


def build_name_mapping(annotation: Any) -> NameMapping:
    """Field name <-> alias mapping of a struct type."""
    return build_tag_index(annotation).names


def resolve_names(field_name: str, src: NameMapping, dst: NameMapping) -> tuple[str, str]:
    """Pair a field name with its source and destination counterparts.

    Destination side: a source alias redirects to that alias, and further to
    the destination field declaring the same alias. Without a source alias, a
    destination field aliased to the name itself wins. Source side is the
    mirror image, starting from the destination's aliases.

    Args:
        field_name: Name being resolved.
        src: Alias mapping of the source type.
        dst: Alias mapping of the destination type.

    Returns:
        (source field name, destination field name).
    """
    if field_name in src.field_to_alias:
        alias = src.field_to_alias[field_name]
        dst_name = dst.alias_to_field.get(alias, alias)
    else:
        dst_name = dst.alias_to_field.get(field_name, field_name)

    if field_name in dst.field_to_alias:
        alias = dst.field_to_alias[field_name]
        src_name = src.alias_to_field.get(alias, alias)
    else:
        src_name = src.alias_to_field.get(field_name, field_name)

    return src_name, dst_name
