"""Groups (Doxygen topics) and their hierarchy."""

import logging
from typing import TYPE_CHECKING, Any

from doxy2md.collection_base import CollectionBase
from doxy2md.compound_base import CompoundBase
from doxy2md.compound_models import CompoundDefDataModel
from doxy2md.errors import DataIntegrityError
from doxy2md.permalinks import flatten_path, sanitize_hierarchical_path

if TYPE_CHECKING:
    from doxy2md.resolution_context import ResolutionContext
    from doxy2md.workspace import Workspace

logger = logging.getLogger(__name__)


class Groups(CollectionBase):
    """Collection of topics, nested by `@ingroup`."""

    name = "groups"
    compound_kinds = frozenset({"group"})

    def __init__(self, context: "ResolutionContext") -> None:
        super().__init__(context)
        self.top_level_groups: list[Group] = []

    def add_child(self, compound_def: CompoundDefDataModel) -> "Group":
        """Create the view-model group for a compound definition."""
        group = Group(self, compound_def)
        self.collection_compounds_by_id[group.id] = group
        return group

    def create_compounds_hierarchies(self) -> None:
        """Link groups to their subgroups."""
        for group in self.collection_compounds_by_id.values():
            for child_id in group.children_ids:
                child = self.collection_compounds_by_id.get(child_id)
                if child is None:
                    msg = f"Group {group.id} references missing child group {child_id}"
                    raise DataIntegrityError(msg)
                child.parent = group
                group.children.append(child)

        for group in self.collection_compounds_by_id.values():
            if group.parent is None:
                self.top_level_groups.append(group)

    def has_topics_index(self) -> bool:
        """Several top level groups get their own Topics category and index."""
        return len(self.top_level_groups) > 1

    def add_sidebar_items(self, workspace: "Workspace", items: list[Any]) -> None:
        """Append the Topics category, or the bare groups without a topics index."""
        if not self.is_visible_in_sidebar():
            return

        group_items: list[Any] = []
        for group in self.top_level_groups:
            item = self._create_sidebar_item_recursively(workspace, group)
            if item is not None:
                group_items.append(item)

        if self.has_topics_index():
            items.append(
                {
                    "type": "category",
                    "label": "Topics",
                    "link": {
                        "type": "doc",
                        "id": f"{workspace.sidebar_base_id}indices/groups/index",
                    },
                    "collapsed": True,
                    "items": group_items,
                }
            )
        else:
            items.extend(group_items)

    def _create_sidebar_item_recursively(
        self, workspace: "Workspace", group: CompoundBase
    ) -> dict[str, Any] | None:
        """Return the sidebar entry of a group and of its subgroups."""
        if group.sidebar_label is None or group.sidebar_id is None:
            return None

        doc_id = f"{workspace.sidebar_base_id}{group.sidebar_id}"
        if not group.children:
            return {
                "type": "doc",
                "label": group.sidebar_label,
                "className": "doxyEllipsis",
                "id": doc_id,
            }

        category: dict[str, Any] = {
            "type": "category",
            "label": group.sidebar_label,
            "link": {"type": "doc", "id": doc_id},
            "className": "doxyEllipsis",
            "collapsed": True,
            "items": [],
        }
        for child in group.children:
            item = self._create_sidebar_item_recursively(workspace, child)
            if item is not None:
                category["items"].append(item)
        return category

    def create_menu_items(self, workspace: "Workspace") -> list[dict[str, str]]:
        """Return the navbar entries of the top level topics."""
        menu_base_url = workspace.urls.menu_base_url
        menu_items = []
        for group in self.top_level_groups:
            if group.has_page():
                menu_items.append(
                    {
                        "label": group.sidebar_label,
                        "to": f"{menu_base_url}{group.relative_permalink}/",
                    }
                )
        return menu_items

    def render_topics_lines(self, workspace: "Workspace") -> list[str]:
        """Return the tree table rows of all groups, top level first."""
        content_lines: list[str] = []
        for group in self.top_level_groups:
            content_lines.extend(
                self._generate_index_lines_recursively(workspace, group, 1)
            )
        return content_lines

    def generate_index_md_file(self, workspace: "Workspace") -> None:
        """Write the topics index page."""
        if not self.has_topics_index():
            return

        content_lines = self.render_topics_lines(workspace)
        if not content_lines:
            return

        front_matter = {
            "title": "Topics",
            "slug": f"{workspace.urls.slug_base_url}groups",
            "custom_edit_url": None,
            "keywords": ["doxygen", "topics", "reference"],
        }
        lines = ["The topics with brief descriptions are:"]
        lines.extend(workspace.render_tree_table(content_lines))

        logger.info("Writing groups index file")
        workspace.write_md_file("indices/groups/index.md", front_matter, lines)

    def _generate_index_lines_recursively(
        self, workspace: "Workspace", group: CompoundBase, depth: int
    ) -> list[str]:
        """Return the tree table rows of a group and of its subgroups."""
        if not group.has_page():
            return []

        lines = [""]
        lines.extend(
            workspace.render_tree_table_row(
                label=group.tree_entry_name,
                link=self.context.get_permalink(group.id, "compound") or "",
                depth=depth,
                description=workspace.render_brief_for_index(group),
            )
        )
        for child in group.children:
            lines.extend(
                self._generate_index_lines_recursively(workspace, child, depth + 1)
            )
        return lines


class Group(CompoundBase):
    """One topic."""

    def __init__(self, collection: Groups, compound_def: CompoundDefDataModel) -> None:
        super().__init__(collection, compound_def)

        for ref in compound_def.inner_groups:
            self.children_ids.append(ref.refid)

        # Group titles are short phrases; drop the sentence period.
        label = (self.title or "?").strip().removesuffix(".")
        self.sidebar_label = label
        self.index_name = label
        self.tree_entry_name = label
        self.page_title = label

        sanitized_path = sanitize_hierarchical_path(self.compound_name)
        self.relative_permalink = f"groups/{sanitized_path}"
        self.sidebar_id = f"groups/{flatten_path(sanitized_path)}"

        self.create_sections()
