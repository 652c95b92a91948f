"""Tag models: parsed field tags, alias mappings and copy obligations."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class FieldTag:
    """Parsed ``copier`` tag of one field.

    ``ignore`` never coexists with the other flags: a ``-`` token ends parsing.
    """

    must: bool = False
    """The field has to receive a value during a struct-level copy."""

    no_panic: bool = False
    """An unmet ``must`` is reported as an ordinary error instead of a fatal one."""

    ignore: bool = False
    """The field is never written."""

    alias: str | None = None
    """Alternate name used to pair the field with a differently named one."""

    @property
    def has_flags(self) -> bool:
        return self.must or self.no_panic or self.ignore


@dataclass(slots=True)
class NameMapping:
    """Bidirectional field name <-> alias association for one type."""

    field_to_alias: dict[str, str] = field(default_factory=dict)
    alias_to_field: dict[str, str] = field(default_factory=dict)

    def add(self, field_name: str, alias: str) -> None:
        """Record a pair; later pairs overwrite earlier ones."""
        self.field_to_alias[field_name] = alias
        self.alias_to_field[alias] = field_name


@dataclass(slots=True)
class TagIndex:
    """Parsed tags and alias mapping of one struct type."""

    tags: dict[str, FieldTag] = field(default_factory=dict)
    names: NameMapping = field(default_factory=NameMapping)

    def tag_for(self, field_name: str) -> FieldTag:
        return self.tags.get(field_name, _EMPTY_TAG)


_EMPTY_TAG = FieldTag()


@dataclass(slots=True)
class ObligationState:
    """Destination field tag plus whether the field has been copied to."""

    field_name: str
    tag: FieldTag
    copied: bool = False

    @property
    def unmet(self) -> bool:
        return self.tag.must and not self.copied
