"""Namespaces, including the anonymous ones Doxygen names after their file."""

import logging
import posixpath
import re
from typing import TYPE_CHECKING, Any

from doxy2md.classes import Class
from doxy2md.collection_base import CLASS_KINDS, CollectionBase
from doxy2md.compound_base import CompoundBase
from doxy2md.compound_models import CompoundDefDataModel
from doxy2md.description_renderer import escape_html
from doxy2md.errors import DataIntegrityError
from doxy2md.index_entries import (
    IndexEntry,
    compound_entry,
    compound_members_entries,
    linked_to,
)
from doxy2md.permalinks import (
    flatten_path,
    sanitize_hierarchical_path,
    short_hash,
)

if TYPE_CHECKING:
    from doxy2md.resolution_context import ResolutionContext
    from doxy2md.workspace import Workspace

logger = logging.getLogger(__name__)

# Doxygen 1.9+ ids for unnamed namespaces.
_ANONYMOUS_ID_RE = re.compile(r"^namespace.*_0d\d{48}")
_ANONYMOUS_NAME_RE = re.compile(r"anonymous\{[^}]*\}$")


def is_anonymous_namespace(compound_id: str, name: str) -> bool:
    """Return True for unnamed namespaces, old or new style."""
    if _ANONYMOUS_ID_RE.match(compound_id):
        return True
    return name == "" or _ANONYMOUS_NAME_RE.search(name) is not None


class Namespaces(CollectionBase):
    """Collection of namespaces."""

    name = "namespaces"
    compound_kinds = frozenset({"namespace"})

    def __init__(self, context: "ResolutionContext") -> None:
        super().__init__(context)
        self.top_level_namespaces: list[Namespace] = []
        self.skipped_ids: set[str] = set()

    def add_child(self, compound_def: CompoundDefDataModel) -> "Namespace | None":
        """Create the view-model namespace, skipping unnamed ones."""
        namespace = Namespace(self, compound_def)
        if not namespace.compound_name:
            logger.debug("Skipping unnamed namespace %s", namespace.id)
            if namespace.children_ids:
                logger.error("Anonymous namespace %s with children?", namespace.id)
            self.skipped_ids.add(namespace.id)
            return None
        self.collection_compounds_by_id[namespace.id] = namespace
        return namespace

    def create_compounds_hierarchies(self) -> None:
        """Link nested namespaces."""
        for namespace in self.collection_compounds_by_id.values():
            for child_id in namespace.children_ids:
                if child_id in self.skipped_ids:
                    continue
                child = self.collection_compounds_by_id.get(child_id)
                if child is None:
                    msg = (
                        f"Namespace {namespace.id} references missing child "
                        f"namespace {child_id}"
                    )
                    raise DataIntegrityError(msg)
                child.parent = namespace
                namespace.children.append(child)

        for namespace in self.collection_compounds_by_id.values():
            if namespace.parent is None:
                self.top_level_namespaces.append(namespace)

    def add_sidebar_items(self, workspace: "Workspace", items: list[Any]) -> None:
        """Append the Namespaces category with its hierarchy and index pages."""
        if not self.is_visible_in_sidebar():
            return

        hierarchy: dict[str, Any] = {
            "type": "category",
            "label": "Hierarchy",
            "collapsed": True,
            "items": [],
        }
        for namespace in self.top_level_namespaces:
            item = self._create_sidebar_item_recursively(workspace, namespace)
            if item is not None:
                hierarchy["items"].append(item)

        category: dict[str, Any] = {
            "type": "category",
            "label": "Namespaces",
            "link": {
                "type": "doc",
                "id": f"{workspace.sidebar_base_id}indices/namespaces/index",
            },
            "collapsed": True,
            "items": [hierarchy],
        }
        self.add_index_doc_items(workspace, "namespaces", category["items"])
        items.append(category)

    def _create_sidebar_item_recursively(
        self, workspace: "Workspace", namespace: CompoundBase
    ) -> dict[str, Any] | None:
        """Return the sidebar entry of a namespace, nesting its children."""
        if namespace.sidebar_label is None or namespace.sidebar_id is None:
            return None

        doc_id = f"{workspace.sidebar_base_id}{namespace.sidebar_id}"
        if not namespace.children:
            return {"type": "doc", "label": namespace.sidebar_label, "id": doc_id}

        category: dict[str, Any] = {
            "type": "category",
            "label": namespace.sidebar_label,
            "link": {"type": "doc", "id": doc_id},
            "collapsed": True,
            "items": [],
        }
        for child in namespace.children:
            item = self._create_sidebar_item_recursively(workspace, child)
            if item is not None:
                category["items"].append(item)
        return category

    def create_menu_items(self, workspace: "Workspace") -> list[dict[str, str]]:
        """Return the navbar entry of the namespaces index."""
        return [
            {"label": "Namespaces", "to": f"{workspace.urls.menu_base_url}namespaces/"}
        ]

    def generate_index_md_file(self, workspace: "Workspace") -> None:
        """Write the namespaces hierarchy index page."""
        if not self.top_level_namespaces:
            return

        content_lines: list[str] = []
        for namespace in self.top_level_namespaces:
            content_lines.extend(
                self._generate_index_lines_recursively(workspace, namespace, 1)
            )
        if not content_lines:
            return

        front_matter = {
            "title": "The Namespaces Reference",
            "slug": f"{workspace.urls.slug_base_url}namespaces",
            "custom_edit_url": None,
            "keywords": ["doxygen", "namespaces", "reference"],
        }
        lines = ["The namespaces used by this project are:"]
        lines.extend(workspace.render_tree_table(content_lines))

        logger.info("Writing namespaces index file")
        workspace.write_md_file("indices/namespaces/index.md", front_matter, lines)

    def _generate_index_lines_recursively(
        self, workspace: "Workspace", namespace: CompoundBase, depth: int
    ) -> list[str]:
        """Return the tree table rows of a namespace and of its children."""
        if not namespace.has_page():
            return []

        lines = [""]
        lines.extend(
            workspace.render_tree_table_row(
                icon_letter="N",
                label=escape_html(namespace.tree_entry_name),
                link=self.context.get_permalink(namespace.id, "compound") or "",
                depth=depth,
                description=workspace.render_brief_for_index(namespace),
            )
        )
        for child in namespace.children:
            lines.extend(
                self._generate_index_lines_recursively(workspace, child, depth + 1)
            )
        return lines

    def generate_per_initials_index_md_files(self, workspace: "Workspace") -> None:
        """Write the per-initial index pages of namespace definitions."""
        if not self.top_level_namespaces:
            return

        entries: dict[str, IndexEntry] = {}
        for namespace in self.compounds_with_pages():
            link_name = namespace.compound_name
            comparable = namespace.tree_entry_name
            entry = compound_entry(namespace)
            entries[entry.id] = linked_to(entry, "namespace", link_name, comparable)

            for ref in namespace.inner_compounds.get("inner_classes", []):
                classs = self.context.compounds_by_id.get(ref.refid)
                if isinstance(classs, Class) and classs.has_page():
                    entry = compound_entry(classs)
                    entries[entry.id] = linked_to(
                        entry, "namespace", link_name, comparable
                    )

            for entry in compound_members_entries(namespace):
                entries[entry.id] = linked_to(entry, "namespace", link_name, comparable)

        index_files = [
            (
                "all",
                "The Namespaces Definitions Index",
                "The definitions part of the namespaces are:",
                lambda kind: True,
            ),
            (
                "namespaces",
                "The Namespaces Index",
                "The namespaces defined in the project are:",
                lambda kind: kind == "namespace",
            ),
            (
                "classes",
                "The Namespaces Classes Index",
                "The classes, structs, unions defined in the namespaces are:",
                lambda kind: kind in CLASS_KINDS,
            ),
            (
                "functions",
                "The Namespaces Functions Index",
                "The functions defined in the namespaces are:",
                lambda kind: kind == "function",
            ),
            (
                "variables",
                "The Namespaces Variables Index",
                "The variables defined in the namespaces are:",
                lambda kind: kind == "variable",
            ),
            (
                "typedefs",
                "The Namespaces Type Definitions Index",
                "The typedefs defined in the namespaces are:",
                lambda kind: kind == "typedef",
            ),
            (
                "enums",
                "The Namespaces Enums Index",
                "The enums defined in the namespaces are:",
                lambda kind: kind == "enum",
            ),
            (
                "enumvalues",
                "The Namespaces Enum Values Index",
                "The enum values defined in the namespaces are:",
                lambda kind: kind == "enumvalue",
            ),
            (
                "defines",
                "The Namespaces Macro Definitions Index",
                "The macros defined in the namespaces are:",
                lambda kind: kind == "define",
            ),
        ]
        for file_kind, title, description, accept in index_files:
            self.generate_index_file(
                workspace,
                group="namespaces",
                file_kind=file_kind,
                title=title,
                description=description,
                entries=entries,
                accept=accept,
            )


class Namespace(CompoundBase):
    """One namespace; anonymous ones get a file based name and a hashed path."""

    def __init__(
        self, collection: Namespaces, compound_def: CompoundDefDataModel
    ) -> None:
        super().__init__(collection, compound_def)

        for ref in compound_def.inner_namespaces:
            self.children_ids.append(ref.refid)

        self.is_anonymous = is_anonymous_namespace(self.id, self.compound_name)
        file_path = self.location.file if self.location is not None else ""
        file_name = posixpath.basename(file_path)

        if _ANONYMOUS_ID_RE.match(self.id) and self.compound_name:
            anonymous_name = f"anonymous{{{file_name}}}"
            if self.compound_name.startswith("::"):
                # Nested in the anonymous namespace: `::CU`.
                self.unqualified_name = self.compound_name.rsplit("::", 1)[-1]
                self.index_name = f"{anonymous_name}{self.compound_name}"
            else:
                # The compound name holds the enclosing scope only.
                self.unqualified_name = anonymous_name
                self.index_name = f"{self.compound_name}::{anonymous_name}"
        else:
            self.unqualified_name = self.compound_name.rsplit("::", 1)[-1]
            self.index_name = self.compound_name

        self.long_name = self.unqualified_name
        self.tree_entry_name = self.index_name
        self.page_title = f"The `{self.index_name}` Namespace Reference"

        if self.compound_name:
            sanitized_path = sanitize_hierarchical_path(
                self.index_name.replace("::", "/")
            )
            if self.is_anonymous:
                # Same named files in different folders must not collide.
                sanitized_path += "-" + short_hash(
                    compound_def.compound_name + file_path
                )
            self.relative_permalink = f"namespaces/{sanitized_path}"
            self.sidebar_id = f"namespaces/{flatten_path(sanitized_path)}"
            self.sidebar_label = self.unqualified_name

        self.create_sections()
