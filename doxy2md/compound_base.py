"""Common view-model state shared by classes, namespaces, files, groups and pages."""

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from doxy2md.compound_models import INNER_REF_ELEMENTS, CompoundDefDataModel
from doxy2md.description_model import (
    DocKind,
    DocNode,
    collect_anchor_ids,
    is_empty_description,
)
from doxy2md.members import Member, Section
from doxy2md.permalinks import sanitize_anonymous_namespace
from doxy2md.reference_models import InnerRefDataModel
from doxy2md.section_reclassification import reclassify_sections

if TYPE_CHECKING:
    from doxy2md.collection_base import CollectionBase
    from doxy2md.resolution_context import ResolutionContext

logger = logging.getLogger(__name__)


def member_anchor_ids(member: Member) -> list[str]:
    """Return the anchors defined in the descriptions of a member and its values."""
    member_def = member.member_def
    anchor_ids: list[str] = []
    for description in (
        member_def.brief_description,
        member_def.detailed_description,
        member_def.inbody_description,
    ):
        anchor_ids.extend(collect_anchor_ids(description))
    for enum_value in member.enum_values:
        anchor_ids.extend(collect_anchor_ids(enum_value.enum_value.brief_description))
        anchor_ids.extend(
            collect_anchor_ids(enum_value.enum_value.detailed_description)
        )
    return anchor_ids


class CompoundBase:
    """View-model node for one `<compounddef>`.

    Subclasses fill in the names and the permalink in their constructors;
    the hierarchy links are set by the collection in a second pass.
    """

    def __init__(
        self, collection: "CollectionBase", compound_def: CompoundDefDataModel
    ) -> None:
        self.collection = collection
        self.compound_def = compound_def

        self.id: str = compound_def.id
        self.kind: str = compound_def.kind
        self.compound_name = sanitize_anonymous_namespace(compound_def.compound_name)
        self.title = compound_def.title
        self.location = compound_def.location

        self.parent: CompoundBase | None = None
        self.children: list[CompoundBase] = []
        self.children_ids: list[str] = []

        self.relative_permalink: str | None = None
        self.sidebar_id: str | None = None
        self.sidebar_label: str | None = None
        self.long_name = self.compound_name
        self.index_name = "???"
        self.tree_entry_name = "???"
        self.page_title = "???"

        self.brief_description: DocNode | None = compound_def.brief_description
        self.detailed_description: DocNode | None = compound_def.detailed_description
        self.includes = compound_def.includes
        self.template_parameter_list = compound_def.template_param_list
        self.sections: list[Section] = []

        self.inner_compounds: dict[str, list[InnerRefDataModel]] = {}
        self.location_set: set[str] = set()
        self.anchor_ids: list[str] = []

    @property
    def context(self) -> "ResolutionContext":
        return self.collection.context

    def create_sections(self, class_unqualified_name: str | None = None) -> None:
        """Build the reclassified sections from the compound section definitions."""
        self.sections = [
            Section(self, reclassified)
            for reclassified in reclassify_sections(
                self.compound_def.section_defs, class_unqualified_name
            )
        ]

    def iter_definition_members(self) -> Iterator[Member]:
        """Yield the members defined on this page, section by section."""
        for section in self.sections:
            yield from section.definition_members

    def has_inner_compounds(self) -> bool:
        return len(self.inner_compounds) > 0

    def has_sect1_in_description(self) -> bool:
        """Return True when the detailed description carries its own top sections."""
        if self.detailed_description is None:
            return False
        return any(
            node.kind == DocKind.SECT and node.section_level() == 1
            for node in self.detailed_description.child_nodes()
        )

    def has_any_content(self) -> bool:
        """Return True when the compound deserves a page of its own."""
        if not is_empty_description(self.brief_description):
            return True
        if not is_empty_description(self.detailed_description):
            return True
        if self.sections:
            return True
        return self.has_inner_compounds()

    def initialize_late(self) -> None:
        """Collect the data that needs the whole hierarchy to be in place."""
        for attribute_name in INNER_REF_ELEMENTS.values():
            refs = getattr(self.compound_def, attribute_name)
            if refs:
                self.inner_compounds[attribute_name] = refs

        self.anchor_ids.extend(collect_anchor_ids(self.brief_description))
        self.anchor_ids.extend(collect_anchor_ids(self.detailed_description))
        if self.compound_def.table_of_contents is not None:
            self.anchor_ids.extend(self.compound_def.table_of_contents.references())

        if self.location is not None:
            self.location_set.add(self.location.file)
        for member in self.iter_definition_members():
            if member.member_def.location is not None:
                self.location_set.add(member.member_def.location.file)
            self.anchor_ids.extend(member_anchor_ids(member))

        if not self.has_any_content():
            logger.debug("%s %s has no content, no page generated", self.kind, self.id)
            self.clear_permalink()

    def clear_permalink(self) -> None:
        """Drop the page of a compound that has nothing to show."""
        self.relative_permalink = None
        self.sidebar_id = None
        self.sidebar_label = None

    def has_page(self) -> bool:
        """Return True when the compound gets a page of its own."""
        return self.relative_permalink is not None and self.sidebar_id is not None

    def find_member(self, member_id: str) -> Member | None:
        """Return the member defined on this page with the given id."""
        for member in self.iter_definition_members():
            if member.id == member_id:
                return member
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!r})"
