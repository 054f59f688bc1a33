"""Base class of the per-kind compound collections."""

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from doxy2md.compound_base import CompoundBase
from doxy2md.compound_models import CompoundDefDataModel
from doxy2md.description_renderer import escape_html
from doxy2md.index_entries import IndexEntry

if TYPE_CHECKING:
    from doxy2md.resolution_context import ResolutionContext
    from doxy2md.workspace import Workspace

logger = logging.getLogger(__name__)

# Per-initial index file kind -> sidebar label.
INDEX_KIND_LABELS = {
    "all": "All",
    "classes": "Classes",
    "namespaces": "Namespaces",
    "functions": "Functions",
    "variables": "Variables",
    "typedefs": "Typedefs",
    "enums": "Enums",
    "enumvalues": "Enum Values",
    "defines": "Macro Definitions",
}

CLASS_KINDS = frozenset({"class", "struct", "union", "interface", "exception"})


class CollectionBase:
    """All compounds of one family, keyed by id, in insertion order."""

    name = ""
    compound_kinds: frozenset[str] = frozenset()

    def __init__(self, context: "ResolutionContext") -> None:
        self.context = context
        self.collection_compounds_by_id: dict[str, CompoundBase] = {}

    def add_child(self, compound_def: CompoundDefDataModel) -> CompoundBase | None:
        """Wrap a compound definition into its view-model object."""
        raise NotImplementedError

    def create_compounds_hierarchies(self) -> None:
        """Link parents and children once every compound is known."""
        raise NotImplementedError

    def add_sidebar_items(self, workspace: "Workspace", items: list[Any]) -> None:
        """Append this collection's category to the sidebar items."""
        raise NotImplementedError

    def create_menu_items(self, workspace: "Workspace") -> list[dict[str, str]]:
        """Return the navbar dropdown items of this collection."""
        raise NotImplementedError

    def generate_index_md_file(self, workspace: "Workspace") -> None:
        """Write the `indices/<collection>/index.md` hierarchy page."""
        raise NotImplementedError

    def generate_per_initials_index_md_files(self, workspace: "Workspace") -> None:
        """Write the alphabetical index pages; most collections have none."""
        return None

    def is_visible_in_sidebar(self) -> bool:
        """Return True when at least one compound of the collection has a page."""
        return any(
            compound.has_page()
            for compound in self.collection_compounds_by_id.values()
        )

    def compounds_with_pages(self) -> list[CompoundBase]:
        """Return the compounds that get a page, in export order."""
        return [
            compound
            for compound in self.collection_compounds_by_id.values()
            if compound.has_page()
        ]

    def order_per_initials(
        self, entries: Iterable[IndexEntry]
    ) -> dict[str, list[IndexEntry]]:
        """Group entries by lowercase initial and sort each group.

        A leading `~` is ignored, so destructors sort with their class.
        """
        per_initial: dict[str, list[IndexEntry]] = {}
        for entry in entries:
            initial = entry.name.removeprefix("~")[:1].lower()
            if initial:
                per_initial.setdefault(initial, []).append(entry)

        ordered: dict[str, list[IndexEntry]] = {}
        for initial in sorted(per_initial):
            ordered[initial] = sorted(
                per_initial[initial],
                key=lambda e: (
                    e.name.removeprefix("~").lower(),
                    e.long_name.lower(),
                ),
            )
        return ordered

    def output_entries(self, per_initial: dict[str, list[IndexEntry]]) -> list[str]:
        """Return the HTML lines of an index grouped by initial."""
        lines: list[str] = []
        total_count = 0
        for initial, entries in per_initial.items():
            lines.append("")
            lines.append(f"## - {initial.upper()} -")
            lines.append("")
            lines.append("<ul>")
            for entry in entries:
                kind = entry.kind.replace("enumvalue", "enum value").replace(
                    "define", "macro definition"
                )
                text = f"<li><b>{escape_html(entry.name)}</b>: as "
                if entry.name != entry.comparable_link_name:
                    text += f"{kind} in "
                if entry.link_kind:
                    text += f"{entry.link_kind} "
                link_name = escape_html(entry.link_name)
                if entry.permalink:
                    text += f'<a href="{entry.permalink}">{link_name}</a>'
                else:
                    text += link_name
                text += "</li>"
                lines.append(text)
            lines.append("</ul>")
            if len(entries) > 1:
                lines.append(f"<p>{len(entries)} entries</p>")
            total_count += len(entries)
        lines.append("<br/>")
        lines.append(f"<p>Total: {total_count} entries.</p>")
        return lines

    def generate_index_file(
        self,
        workspace: "Workspace",
        *,
        group: str,
        file_kind: str,
        title: str,
        description: str,
        entries: dict[str, IndexEntry],
        accept: Callable[[str], bool],
    ) -> None:
        """Write one per-initial index page; index kinds without entries are skipped."""
        filtered = [entry for entry in entries.values() if accept(entry.kind)]
        if not filtered:
            return

        workspace.indices_maps.setdefault(group, set()).add(file_kind)

        permalink = f"indices/{group}/{file_kind}"
        front_matter = {
            "title": title,
            "slug": f"{workspace.urls.slug_base_url}{permalink}",
            "custom_edit_url": None,
            "keywords": ["doxygen", group, "index"],
        }
        lines = [f"<p>{description}</p>"]
        lines.extend(self.output_entries(self.order_per_initials(filtered)))

        logger.info("Writing %s index file %s.md", group, permalink)
        workspace.write_md_file(f"{permalink}.md", front_matter, lines)

    def add_index_doc_items(
        self, workspace: "Workspace", group: str, items: list[Any]
    ) -> None:
        """Append one doc item per index page written for the group."""
        written = workspace.indices_maps.get(group, set())
        for file_kind, label in INDEX_KIND_LABELS.items():
            if file_kind in written:
                items.append(
                    {
                        "type": "doc",
                        "label": label,
                        "id": f"{workspace.sidebar_base_id}indices/{group}/{file_kind}",
                    }
                )
