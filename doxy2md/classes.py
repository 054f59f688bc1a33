"""Classes, structs, unions and their inheritance hierarchy."""

import logging
import re
from typing import TYPE_CHECKING, Any

from doxy2md.collection_base import CLASS_KINDS, CollectionBase
from doxy2md.compound_base import CompoundBase
from doxy2md.compound_models import CompoundDefDataModel
from doxy2md.description_renderer import escape_html
from doxy2md.index_entries import (
    IndexEntry,
    compound_entry,
    compound_members_entries,
    linked_to,
)
from doxy2md.permalinks import (
    flatten_path,
    sanitize_anonymous_namespace,
    sanitize_hierarchical_path,
    short_hash,
)

if TYPE_CHECKING:
    from doxy2md.resolution_context import ResolutionContext
    from doxy2md.workspace import Workspace

logger = logging.getLogger(__name__)

KINDS_PLURALS = {
    "class": "Classes",
    "struct": "Structs",
    "union": "Unions",
    "interface": "Interfaces",
    "exception": "Exceptions",
}

ICON_LETTERS = {
    "class": "C",
    "struct": "S",
    "union": "U",
    "interface": "I",
    "exception": "E",
}

_TEMPLATE_ARGUMENTS_RE = re.compile(r"<.*>")

# Longer names are abbreviated in tree tables.
MAX_TREE_ENTRY_NAME_LENGTH = 42


class Classes(CollectionBase):
    """Collection of classes, structs and unions with their inheritance tree."""

    name = "classes"
    compound_kinds = CLASS_KINDS

    def __init__(self, context: "ResolutionContext") -> None:
        super().__init__(context)
        self.top_level_classes: list[Class] = []

    def add_child(self, compound_def: CompoundDefDataModel) -> "Class":
        """Create the view-model class for a compound definition."""
        classs = Class(self, compound_def)
        self.collection_compounds_by_id[classs.id] = classs
        return classs

    def create_compounds_hierarchies(self) -> None:
        """Link derived classes to the bases documented in the same export."""
        for class_id, classs in self.collection_compounds_by_id.items():
            for base_class_id in classs.base_class_ids:
                base_class = self.collection_compounds_by_id.get(base_class_id)
                if isinstance(base_class, Class):
                    base_class.children.append(classs)
                    base_class.children_ids.append(classs.id)
                    classs.base_classes.append(base_class)
                else:
                    logger.debug(
                        "%s ignored as base class for %s", base_class_id, class_id
                    )

        for classs in self.collection_compounds_by_id.values():
            if not classs.base_classes:
                self.top_level_classes.append(classs)

        self._disambiguate_specializations()

    def _disambiguate_specializations(self) -> None:
        """Append a template arguments hash to specializations sharing a path.

        The primary template keeps the bare path; specializations get their
        hash only when another class already claims the same path.
        """
        by_path: dict[str, list[Class]] = {}
        for classs in self.collection_compounds_by_id.values():
            by_path.setdefault(classs.base_path, []).append(classs)

        for classes in by_path.values():
            if len(classes) < 2:
                continue
            for classs in classes:
                if classs.template_parameters:
                    classs.set_path(
                        f"{classs.base_path}-{short_hash(classs.template_parameters)}"
                    )

    def add_sidebar_items(self, workspace: "Workspace", items: list[Any]) -> None:
        """Append the Classes category with its hierarchy and index pages."""
        if not self.is_visible_in_sidebar():
            return

        hierarchy: dict[str, Any] = {
            "type": "category",
            "label": "Hierarchy",
            "collapsed": True,
            "items": [],
        }
        for classs in self.top_level_classes:
            item = self._create_sidebar_item_recursively(workspace, classs)
            if item is not None:
                hierarchy["items"].append(item)

        category: dict[str, Any] = {
            "type": "category",
            "label": "Classes",
            "link": {
                "type": "doc",
                "id": f"{workspace.sidebar_base_id}indices/classes/index",
            },
            "collapsed": True,
            "items": [hierarchy],
        }
        self.add_index_doc_items(workspace, "classes", category["items"])
        items.append(category)

    def _create_sidebar_item_recursively(
        self, workspace: "Workspace", classs: "Class"
    ) -> dict[str, Any] | None:
        """Return the sidebar entry of a class, nesting its derived classes."""
        if classs.sidebar_label is None or classs.sidebar_id is None:
            return None

        doc_id = f"{workspace.sidebar_base_id}{classs.sidebar_id}"
        if not classs.children:
            return {
                "type": "doc",
                "label": classs.sidebar_label,
                "className": "doxyEllipsis",
                "id": doc_id,
            }

        category: dict[str, Any] = {
            "type": "category",
            "label": classs.sidebar_label,
            "link": {"type": "doc", "id": doc_id},
            "className": "doxyEllipsis",
            "collapsed": True,
            "items": [],
        }
        for child in classs.children:
            item = self._create_sidebar_item_recursively(workspace, child)
            if item is not None:
                category["items"].append(item)
        return category

    def create_menu_items(self, workspace: "Workspace") -> list[dict[str, str]]:
        """Return the navbar entry of the classes index."""
        return [{"label": "Classes", "to": f"{workspace.urls.menu_base_url}classes/"}]

    def generate_index_md_file(self, workspace: "Workspace") -> None:
        """Write the classes hierarchy index page."""
        if not self.top_level_classes:
            return

        content_lines: list[str] = []
        for classs in self.top_level_classes:
            content_lines.extend(
                self._generate_index_lines_recursively(workspace, classs, 1)
            )
        if not content_lines:
            return

        front_matter = {
            "title": "Classes",
            "slug": f"{workspace.urls.slug_base_url}classes",
            "custom_edit_url": None,
            "keywords": ["doxygen", "classes", "reference"],
        }
        lines = ["The classes, structs, union and interfaces used by this project are:"]
        lines.extend(workspace.render_tree_table(content_lines))

        logger.info("Writing classes index file")
        workspace.write_md_file("indices/classes/index.md", front_matter, lines)

    def _generate_index_lines_recursively(
        self, workspace: "Workspace", classs: "Class", depth: int
    ) -> list[str]:
        """Return the tree table rows of a class and of its derived classes."""
        if not classs.has_page():
            return []

        icon_letter = ICON_LETTERS.get(classs.kind)
        if icon_letter is None:
            logger.error("Icon kind %s not supported yet in Classes", classs.kind)
            icon_letter = "?"

        lines = [""]
        lines.extend(
            workspace.render_tree_table_row(
                icon_letter=icon_letter,
                label=escape_html(classs.tree_entry_name),
                link=self.context.get_permalink(classs.id, "compound") or "",
                depth=depth,
                description=workspace.render_brief_for_index(classs),
            )
        )
        for child in classs.children:
            lines.extend(
                self._generate_index_lines_recursively(workspace, child, depth + 1)
            )
        return lines

    def generate_per_initials_index_md_files(self, workspace: "Workspace") -> None:
        """Write the per-initial index pages of classes and their members."""
        if not self.top_level_classes:
            return

        entries: dict[str, IndexEntry] = {}
        for classs in self.compounds_with_pages():
            link_kind = classs.kind
            link_name = classs.class_full_name
            comparable = classs.tree_entry_name
            entry = compound_entry(classs)
            entries[entry.id] = linked_to(entry, link_kind, link_name, comparable)
            for member_entry in compound_members_entries(classs):
                entries[member_entry.id] = linked_to(
                    member_entry, link_kind, link_name, comparable
                )

        index_files = [
            (
                "all",
                "Classes and Members Index",
                "The classes, structs, unions and their members are:",
                lambda kind: True,
            ),
            (
                "classes",
                "Classes Index",
                "The classes, structs, unions defined in the project are:",
                lambda kind: kind in CLASS_KINDS,
            ),
            (
                "functions",
                "Class Functions Index",
                "The class member functions defined in the project are:",
                lambda kind: kind == "function",
            ),
            (
                "variables",
                "Class Variables Index",
                "The class member variables defined in the project are:",
                lambda kind: kind == "variable",
            ),
            (
                "typedefs",
                "Class Type Definitions Index",
                "The class member typedefs defined in the project are:",
                lambda kind: kind == "typedef",
            ),
            (
                "enums",
                "Class Enums Index",
                "The class member enums defined in the project are:",
                lambda kind: kind == "enum",
            ),
            (
                "enumvalues",
                "Class Enum Values Index",
                "The class member enum values defined in the project are:",
                lambda kind: kind == "enumvalue",
            ),
        ]
        for file_kind, title, description, accept in index_files:
            self.generate_index_file(
                workspace,
                group="classes",
                file_kind=file_kind,
                title=title,
                description=description,
                entries=entries,
                accept=accept,
            )


class Class(CompoundBase):
    """One class, struct, union, interface or exception."""

    def __init__(self, collection: Classes, compound_def: CompoundDefDataModel) -> None:
        super().__init__(collection, compound_def)

        self.base_class_ids: list[str] = []
        for ref in compound_def.base_compound_refs:
            if ref.refid is not None and ref.refid not in self.base_class_ids:
                self.base_class_ids.append(ref.refid)
        self.base_classes: list[Class] = []

        self.full_name = sanitize_anonymous_namespace(
            _TEMPLATE_ARGUMENTS_RE.sub("", compound_def.compound_name)
        )
        self.unqualified_name = self.full_name.rsplit("::", 1)[-1]
        self.long_name = self.full_name

        # Specializations carry their arguments in the compound name.
        self.template_parameters = ""
        index = compound_def.compound_name.find("<")
        if index >= 0:
            parameters = compound_def.compound_name[index:]
            if parameters.startswith("< "):
                parameters = "<" + parameters[2:]
            if parameters.endswith(" >"):
                parameters = parameters[:-2] + ">"
            self.template_parameters = parameters
            name_template_parameters = self.template_parameters
        elif self.template_parameter_list is not None:
            name_template_parameters = render_template_parameter_names(
                self.template_parameter_list.parameter_names()
            )
        else:
            name_template_parameters = ""

        self.class_full_name = self.full_name + name_template_parameters
        self.index_name = self.unqualified_name + name_template_parameters
        self.sidebar_label = self.index_name
        if len(self.index_name) < MAX_TREE_ENTRY_NAME_LENGTH:
            self.tree_entry_name = self.index_name
        else:
            self.tree_entry_name = f"{self.unqualified_name}<...>"

        self.page_title = f"`{self.unqualified_name}` {self.kind.capitalize()}"
        if self.template_parameter_list is not None:
            self.page_title += " Template"

        if self.kind not in KINDS_PLURALS:
            logger.error("class kind %s not supported yet in Class", self.kind)
        self.plural_kind = KINDS_PLURALS.get(self.kind, "Classes").lower()
        self.base_path = sanitize_hierarchical_path(self.full_name.replace("::", "/"))
        self.set_path(self.base_path)

        self.create_sections(self.unqualified_name)

    def set_path(self, sanitized_path: str) -> None:
        """Set the permalink and the sidebar id from a sanitized path."""
        self.relative_permalink = f"{self.plural_kind}/{sanitized_path}"
        self.sidebar_id = f"{self.plural_kind}/{flatten_path(sanitized_path)}"

    def has_any_content(self) -> bool:
        """Return True when the class has derived classes, includes or a description."""
        if self.children:
            return True
        if self.includes:
            return True
        return super().has_any_content()


def render_template_parameter_names(names: list[str]) -> str:
    """Format template parameter names as `<A, B>`."""
    if not names:
        return ""
    return f"<{', '.join(names)}>"
