"""Registries of compounds, members and anchors, and the permalink resolver.

The context is filled once by `build()` and then frozen; rendering only
reads from it.
"""

import logging
import posixpath
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from doxy2md.classes import Classes
from doxy2md.collection_base import CollectionBase
from doxy2md.compound_base import CompoundBase
from doxy2md.errors import DataIntegrityError
from doxy2md.files_and_folders import FilesAndFolders
from doxy2md.groups import Groups
from doxy2md.members import Member
from doxy2md.namespaces import Namespaces
from doxy2md.pages import Pages
from doxy2md.permalinks import (
    get_permalink_anchor,
    strip_permalink_hex_anchor,
    strip_permalink_text_anchor,
)

if TYPE_CHECKING:
    from doxy2md.data_model import DataModel

logger = logging.getLogger(__name__)


class ResolutionContext:
    """Registries and lookups shared by all compounds of one export."""

    def __init__(self, options: dict[str, Any], page_base_url: str) -> None:
        self.options = options
        self.page_base_url = page_base_url

        self.compounds_by_id: dict[str, CompoundBase] = {}
        self.members_by_id: dict[str, Member] = {}
        # Members listed by a compound other than the one their id names.
        self.member_owners_by_id: dict[str, CompoundBase] = {}
        self.anchors_by_id: dict[str, CompoundBase] = {}
        self.files_by_path: dict[str, CompoundBase] = {}
        self.main_page: CompoundBase | None = None
        # Compounds of unsupported kinds; references to them render as text.
        self.skipped_ids: set[str] = set()
        self.frozen = False

        # Sidebar order.
        self.collections: list[CollectionBase] = [
            Groups(self),
            Namespaces(self),
            Classes(self),
            FilesAndFolders(self),
            Pages(self),
        ]

    def collection(self, name: str) -> CollectionBase:
        """Return the collection with the given name."""
        for collection in self.collections:
            if collection.name == name:
                return collection
        raise KeyError(name)

    def _ensure_mutable(self) -> None:
        if self.frozen:
            raise DataIntegrityError("Resolution context is frozen")

    def register_file(self, path: str, file: CompoundBase) -> None:
        """Register a file compound under its normalized path."""
        self._ensure_mutable()
        self.files_by_path[posixpath.normpath(path)] = file

    def find_file(self, path: str) -> CompoundBase | None:
        """Return the file compound of a location path, if documented."""
        return self.files_by_path.get(posixpath.normpath(path))

    def set_main_page(self, page: CompoundBase) -> None:
        """Remember the compound rendered as the top index page."""
        self._ensure_mutable()
        self.main_page = page

    def _collection_for_kind(self, kind: str) -> CollectionBase | None:
        """Return the collection that holds compounds of a kind."""
        for collection in self.collections:
            if kind in collection.compound_kinds:
                return collection
        return None

    def build(self, data_model: "DataModel") -> None:
        """Create the view-model graph and freeze the registries."""
        self._ensure_mutable()

        for compound_def in data_model.compound_defs:
            collection = self._collection_for_kind(compound_def.kind)
            if collection is None:
                logger.warning(
                    "Compound kind %s not supported, %s skipped",
                    compound_def.kind,
                    compound_def.id,
                )
                self.skipped_ids.add(compound_def.id)
                continue
            compound = collection.add_child(compound_def)
            if compound is not None:
                self.compounds_by_id[compound.id] = compound
            else:
                self.skipped_ids.add(compound_def.id)

        for collection in self.collections:
            collection.create_compounds_hierarchies()

        self._create_members_map()

        for compound in self.compounds_by_id.values():
            compound.initialize_late()

        for compound in self.compounds_by_id.values():
            for anchor_id in compound.anchor_ids:
                self.anchors_by_id.setdefault(anchor_id, compound)

        self.validate_permalinks()
        self.freeze()

    def _create_members_map(self) -> None:
        """Index the members by id, and their listing owners."""
        for compound in self.compounds_by_id.values():
            for member in compound.iter_definition_members():
                if strip_permalink_hex_anchor(member.id) == compound.id:
                    self.members_by_id[member.id] = member
                else:
                    self.member_owners_by_id.setdefault(member.id, compound)

    def validate_permalinks(self) -> None:
        """Make permalinks and page identifiers unique, suffixing `-1`, `-2`..."""
        self._ensure_mutable()
        used_permalinks: set[str] = set()
        used_sidebar_ids: set[str] = set()
        for compound_id in sorted(self.compounds_by_id):
            compound = self.compounds_by_id[compound_id]
            if not compound.has_page():
                continue
            permalink = compound.relative_permalink
            sidebar_id = compound.sidebar_id
            if permalink in used_permalinks or sidebar_id in used_sidebar_ids:
                suffix = 1
                while (
                    f"{permalink}-{suffix}" in used_permalinks
                    or f"{sidebar_id}-{suffix}" in used_sidebar_ids
                ):
                    suffix += 1
                logger.warning(
                    "Permalink %s of %s already in use, renamed with suffix -%d",
                    permalink,
                    compound_id,
                    suffix,
                )
                compound.relative_permalink = f"{permalink}-{suffix}"
                compound.sidebar_id = f"{sidebar_id}-{suffix}"
            used_permalinks.add(compound.relative_permalink)
            used_sidebar_ids.add(compound.sidebar_id)

    def freeze(self) -> None:
        """Make all registries read only."""
        self.compounds_by_id = MappingProxyType(self.compounds_by_id)
        self.members_by_id = MappingProxyType(self.members_by_id)
        self.member_owners_by_id = MappingProxyType(self.member_owners_by_id)
        self.anchors_by_id = MappingProxyType(self.anchors_by_id)
        self.files_by_path = MappingProxyType(self.files_by_path)
        self.frozen = True

    def find_member(self, member_id: str) -> Member | None:
        """Return the member definition for an id, wherever it is listed."""
        member = self.members_by_id.get(member_id)
        if member is not None:
            return member
        owner = self.member_owners_by_id.get(member_id)
        if owner is not None:
            return owner.find_member(member_id)
        return None

    def _find_anchor_owner(self, refid: str) -> CompoundBase | None:
        """Return the compound whose page shows an anchor or member."""
        compound = self.compounds_by_id.get(strip_permalink_hex_anchor(refid))
        if compound is not None and (
            compound.has_page() or compound is self.main_page
        ):
            return compound

        for candidate in (
            self.member_owners_by_id.get(refid),
            self.anchors_by_id.get(refid),
            self.compounds_by_id.get(strip_permalink_text_anchor(refid)),
        ):
            if candidate is not None and (
                candidate.has_page() or candidate is self.main_page
            ):
                return candidate

        if compound is not None:
            return compound
        if strip_permalink_hex_anchor(refid) not in self.skipped_ids:
            logger.error("Unknown permalink for %s, rendered as text", refid)
        return None

    def get_permalink(
        self, refid: str, kindref: str, current_compound_id: str | None = None
    ) -> str | None:
        """Return the URL of a compound page or of an anchor in a page.

        Returns None for known compounds that have no page; same page
        references collapse to a bare `#anchor`.
        """
        if kindref == "compound":
            compound = self.compounds_by_id.get(refid)
            if compound is None and refid in self.skipped_ids:
                return None
            if compound is None:
                msg = f"Reference to unknown compound {refid}"
                raise DataIntegrityError(msg)
            if compound is self.main_page:
                return self.page_base_url
            if not compound.has_page():
                return None
            return f"{self.page_base_url}{compound.relative_permalink}"

        if kindref == "member":
            compound = self._find_anchor_owner(refid)
            if compound is None:
                return None
            anchor = get_permalink_anchor(refid)
            if compound.id == current_compound_id:
                return f"#{anchor}"
            if compound is self.main_page:
                return f"{self.page_base_url}#{anchor}"
            if not compound.has_page():
                return None
            return f"{self.page_base_url}{compound.relative_permalink}/#{anchor}"

        msg = f"Reference {refid} has unsupported kindref {kindref}"
        raise DataIntegrityError(msg)

    def get_xref_permalink(self, xref_id: str) -> str | None:
        """Return the link to an entry of a generated list page (todo, bug, ...)."""
        page = self.compounds_by_id.get(strip_permalink_text_anchor(xref_id))
        if page is None or not page.has_page():
            return None
        anchor = get_permalink_anchor(xref_id)
        return f"{self.page_base_url}{page.relative_permalink}/#{anchor}"
