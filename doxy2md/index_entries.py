"""Entries listed on the per-initial index pages."""

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from doxy2md.compound_base import CompoundBase
    from doxy2md.members import EnumValue, Member


@dataclass(frozen=True)
class IndexEntry:
    """One line of an index page: a symbol and the compound that lists it."""

    id: str
    name: str
    long_name: str
    kind: str
    permalink: str
    link_kind: str = ""
    link_name: str = ""
    comparable_link_name: str = ""


def compound_entry(compound: "CompoundBase") -> IndexEntry:
    """Entry for a class or namespace page."""
    return IndexEntry(
        id=compound.id,
        name=compound.tree_entry_name,
        long_name=compound.long_name,
        kind=compound.kind,
        permalink=compound.context.get_permalink(compound.id, "compound") or "",
        link_kind=compound.kind,
        link_name=compound.long_name,
    )


def member_entry(member: "Member") -> IndexEntry:
    """Build the index entry of a member."""
    name = member.name
    if member.kind == "function":
        name += "()"
    return IndexEntry(
        id=member.id,
        name=name,
        long_name=member.qualified_name or "???",
        kind=member.kind,
        permalink=member.compound.context.get_permalink(member.id, "member") or "",
    )


def enum_value_entry(enum_value: "EnumValue") -> IndexEntry:
    """Build the index entry of an enum value."""
    return IndexEntry(
        id=enum_value.id,
        name=enum_value.name,
        long_name=enum_value.name,
        kind="enumvalue",
        permalink=enum_value.member.compound.context.get_permalink(
            enum_value.id, "member"
        )
        or "",
    )


def linked_to(
    entry: IndexEntry, link_kind: str, link_name: str, comparable_link_name: str = ""
) -> IndexEntry:
    """Return a copy of the entry attributed to the compound that lists it."""
    return replace(
        entry,
        link_kind=link_kind,
        link_name=link_name,
        comparable_link_name=comparable_link_name,
    )


def compound_members_entries(compound: "CompoundBase") -> list[IndexEntry]:
    """Return the entries of all members and enum values defined by a compound."""
    entries: list[IndexEntry] = []
    for member in compound.iter_definition_members():
        entries.append(member_entry(member))
        entries.extend(enum_value_entry(value) for value in member.enum_values)
    return entries
