"""Doxygen pages: the main page plus the free standing `@page` documents."""

import logging
from typing import TYPE_CHECKING, Any

from doxy2md.collection_base import CollectionBase
from doxy2md.compound_base import CompoundBase
from doxy2md.compound_models import CompoundDefDataModel
from doxy2md.permalinks import flatten_path, sanitize_hierarchical_path

if TYPE_CHECKING:
    from doxy2md.workspace import Workspace

logger = logging.getLogger(__name__)

MAIN_PAGE_ID = "indexpage"

# Generated lists Doxygen maintains itself.
NON_TOP_PAGE_IDS = frozenset({"deprecated", "todo"})


class Pages(CollectionBase):
    """Collection of pages written with `@page`."""

    name = "pages"
    compound_kinds = frozenset({"page"})

    def add_child(self, compound_def: CompoundDefDataModel) -> "Page":
        """Create the view-model page, remembering the main page."""
        page = Page(self, compound_def)
        self.collection_compounds_by_id[page.id] = page
        if page.id == MAIN_PAGE_ID:
            self.context.set_main_page(page)
        return page

    def create_compounds_hierarchies(self) -> None:
        pass

    def _pages_at_top(self, workspace: "Workspace") -> bool:
        """Return True when pages are listed ahead of the collections."""
        return bool(workspace.options.get("list_pages_at_top", True))

    def add_top_pages_sidebar_items(
        self, workspace: "Workspace", items: list[Any]
    ) -> None:
        """Append the regular pages, ahead of the collection categories."""
        if not self._pages_at_top(workspace):
            return
        for page in self.collection_compounds_by_id.values():
            if page.is_top_page() and page.has_page():
                items.append(self._doc_item(workspace, page))

    def add_sidebar_items(self, workspace: "Workspace", items: list[Any]) -> None:
        """Append the Pages category."""
        category: dict[str, Any] = {
            "type": "category",
            "label": "Pages",
            "collapsed": True,
            "items": [],
        }
        pages_at_top = self._pages_at_top(workspace)
        for page in self.collection_compounds_by_id.values():
            if pages_at_top and page.is_top_page():
                continue
            if page.has_page():
                category["items"].append(self._doc_item(workspace, page))

        if category["items"]:
            items.append(category)

    def _doc_item(self, workspace: "Workspace", page: "Page") -> dict[str, Any]:
        """Return the sidebar entry of a page."""
        return {
            "type": "doc",
            "label": page.sidebar_label,
            "id": f"{workspace.sidebar_base_id}{page.sidebar_id}",
        }

    def create_menu_items(self, workspace: "Workspace") -> list[dict[str, str]]:
        """Pages have no navbar entry."""
        return []

    def generate_index_md_file(self, workspace: "Workspace") -> None:
        """Pages have no index page of their own."""
        pass


class Page(CompoundBase):
    """One page."""

    def __init__(self, collection: Pages, compound_def: CompoundDefDataModel) -> None:
        super().__init__(collection, compound_def)

        label = (self.title or self.compound_name).strip().removesuffix(".")
        self.sidebar_label = label
        self.index_name = label
        self.tree_entry_name = label
        self.page_title = label

        # The main page is rendered into the top index page.
        if self.id != MAIN_PAGE_ID:
            sanitized_path = sanitize_hierarchical_path(self.compound_name)
            self.relative_permalink = f"pages/{sanitized_path}"
            self.sidebar_id = f"pages/{flatten_path(sanitized_path)}"
        else:
            self.sidebar_label = None

        if compound_def.section_defs:
            logger.warning("Page %s has member sections, ignored", self.id)

    def is_top_page(self) -> bool:
        """Return True for regular pages, not the main or generated pages."""
        return self.id != MAIN_PAGE_ID and self.id not in NON_TOP_PAGE_IDS
