"""View-model sections, members, member references and enum values."""

import re
from typing import TYPE_CHECKING

from doxy2md.member_models import MemberDefDataModel
from doxy2md.param_models import EnumValueDataModel
from doxy2md.permalinks import get_permalink_anchor, sanitize_anonymous_namespace
from doxy2md.reference_models import MemberRefDataModel
from doxy2md.section_reclassification import (
    ReclassifiedSection,
    section_header_name,
    section_priority,
)

if TYPE_CHECKING:
    from doxy2md.compound_base import CompoundBase

_WHITESPACE_RE = re.compile(r"\s+")


class Member:
    """One member definition, placed in its reclassified section."""

    def __init__(self, section: "Section", member_def: MemberDefDataModel) -> None:
        self.section = section
        self.member_def = member_def
        self.id: str = member_def.id
        self.kind: str = member_def.kind
        self.name: str = member_def.name
        self.anchor = get_permalink_anchor(self.id)
        self.qualified_name = (
            sanitize_anonymous_namespace(member_def.qualified_name)
            if member_def.qualified_name is not None
            else None
        )
        self.definition = (
            sanitize_anonymous_namespace(member_def.definition)
            if member_def.definition is not None
            else None
        )
        self.argsstring = member_def.argsstring
        self.enum_values = [EnumValue(self, value) for value in member_def.enum_values]
        self.labels = compute_member_labels(member_def)

    @property
    def compound(self) -> "CompoundBase":
        """Return the compound whose page shows this member."""
        return self.section.compound

    @property
    def is_static(self) -> bool:
        return self.member_def.flag("static")

    def __repr__(self) -> str:
        return f"Member({self.kind} {self.name!r}, {self.id})"


class MemberRef:
    """A `<member>` pointer to a member defined in another compound."""

    def __init__(self, section: "Section", member_ref: MemberRefDataModel) -> None:
        self.section = section
        self.refid: str = member_ref.refid
        self.kind: str = member_ref.kind
        self.name: str = member_ref.name


class EnumValue:
    """One value of an enum member."""

    def __init__(self, member: Member, enum_value: EnumValueDataModel) -> None:
        self.member = member
        self.enum_value = enum_value
        self.id: str = enum_value.id
        self.name: str = enum_value.name
        self.anchor = get_permalink_anchor(self.id)
        self.brief_description = enum_value.brief_description
        self.initializer = enum_value.initializer


class Section:
    """A reclassified section of one compound page."""

    def __init__(
        self, compound: "CompoundBase", reclassified: ReclassifiedSection
    ) -> None:
        self.compound = compound
        self.kind = reclassified.kind
        self.header_name = section_header_name(reclassified.kind, reclassified.header)
        self.priority = section_priority(reclassified.kind)
        self.description = reclassified.description
        self.index_members: list[Member | MemberRef] = []
        for member in reclassified.members:
            if isinstance(member, MemberDefDataModel):
                self.index_members.append(Member(self, member))
            else:
                self.index_members.append(MemberRef(self, member))
        self.definition_members: list[Member] = [
            member for member in self.index_members if isinstance(member, Member)
        ]

    def has_definition_members(self) -> bool:
        """Return True when the section defines members on this page."""
        return len(self.definition_members) > 0

    def __repr__(self) -> str:
        return f"Section({self.kind!r}, {len(self.index_members)} members)"


def _args_ends_with(argsstring: str | None, suffix: str) -> bool:
    """Match an argument string suffix, ignoring whitespace."""
    if argsstring is None:
        return False
    return _WHITESPACE_RE.sub("", argsstring).endswith(suffix)


def compute_member_labels(member_def: MemberDefDataModel) -> list[str]:
    """Return the badges shown next to a member definition.

    `delete` and `default` have no attribute in the XML and are inferred
    from the argument string, which is an approximation.
    """
    labels: list[str] = []
    for flag in ("inline", "explicit", "nodiscard", "constexpr", "noexcept"):
        if member_def.flag(flag):
            labels.append(flag)
    if member_def.prot == "protected":
        labels.append("protected")
    if member_def.flag("static"):
        labels.append("static")
    if member_def.virt in ("virtual", "pure-virtual"):
        labels.append("virtual")
    if _args_ends_with(member_def.argsstring, "=delete"):
        labels.append("delete")
    if _args_ends_with(member_def.argsstring, "=default"):
        labels.append("default")
    for flag in ("strong", "mutable", "final"):
        if member_def.flag(flag):
            labels.append(flag)
    return labels
