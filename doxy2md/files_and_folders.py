"""Source files and the folders that contain them."""

import logging
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
from doxy2md.namespaces import Namespace
from doxy2md.permalinks import flatten_path, sanitize_hierarchical_path

if TYPE_CHECKING:
    from doxy2md.resolution_context import ResolutionContext
    from doxy2md.workspace import Workspace

logger = logging.getLogger(__name__)


class FilesAndFolders(CollectionBase):
    """Collection of source files and the folders holding them."""

    name = "files"
    compound_kinds = frozenset({"file", "dir"})

    def __init__(self, context: "ResolutionContext") -> None:
        super().__init__(context)
        self.compound_folders_by_id: dict[str, Folder] = {}
        self.compound_files_by_id: dict[str, File] = {}
        self.top_level_folders: list[Folder] = []
        self.top_level_files: list[File] = []

    def add_child(self, compound_def: CompoundDefDataModel) -> CompoundBase:
        """Create the view-model file or folder for a compound definition."""
        if compound_def.kind == "file":
            file = File(self, compound_def)
            self.collection_compounds_by_id[file.id] = file
            self.compound_files_by_id[file.id] = file
            return file
        if compound_def.kind == "dir":
            folder = Folder(self, compound_def)
            self.collection_compounds_by_id[folder.id] = folder
            self.compound_folders_by_id[folder.id] = folder
            return folder
        msg = f"kind {compound_def.kind} not implemented in FilesAndFolders"
        raise DataIntegrityError(msg)

    def create_compounds_hierarchies(self) -> None:
        """Link folders and files, compute relative paths and permalinks."""
        for folder in self.compound_folders_by_id.values():
            for child_folder_id in folder.children_folder_ids:
                child_folder = self.compound_folders_by_id.get(child_folder_id)
                if child_folder is None:
                    msg = f"Folder {folder.id} references missing folder {child_folder_id}"
                    raise DataIntegrityError(msg)
                child_folder.parent = folder
                folder.children.append(child_folder)

            for child_file_id in folder.children_file_ids:
                child_file = self.compound_files_by_id.get(child_file_id)
                if child_file is None:
                    logger.warning("%s not a child of %s", child_file_id, folder.id)
                    continue
                child_file.parent = folder
                folder.children.append(child_file)

        for folder in self.compound_folders_by_id.values():
            if folder.parent is None:
                self.top_level_folders.append(folder)

        for file in self.compound_files_by_id.values():
            if file.parent is None:
                self.top_level_files.append(file)
            if file.location is not None:
                self.context.register_file(file.location.file, file)

        for folder in self.compound_folders_by_id.values():
            folder.relative_path = relative_path_of(folder)
            sanitized_path = sanitize_hierarchical_path(folder.relative_path)
            folder.relative_permalink = f"folders/{sanitized_path}"
            folder.sidebar_id = f"folders/{flatten_path(sanitized_path)}"

        for file in self.compound_files_by_id.values():
            file.relative_path = relative_path_of(file)
            sanitized_path = sanitize_hierarchical_path(file.relative_path)
            file.relative_permalink = f"files/{sanitized_path}"
            file.sidebar_id = f"files/{flatten_path(sanitized_path)}"

    def is_visible_in_sidebar(self) -> bool:
        """Return True when a file has content to show."""
        for compound in self.collection_compounds_by_id.values():
            if isinstance(compound, File) and compound.has_any_content():
                return True
            if isinstance(compound, Folder) and compound.children:
                return True
        return False

    def add_sidebar_items(self, workspace: "Workspace", items: list[Any]) -> None:
        """Append the Files category with the folder tree and index pages."""
        if not self.is_visible_in_sidebar():
            return

        hierarchy: dict[str, Any] = {
            "type": "category",
            "label": "Hierarchy",
            "collapsed": True,
            "items": [],
        }
        for folder in self.top_level_folders:
            item = self._create_folder_sidebar_item_recursively(workspace, folder)
            if item is not None:
                hierarchy["items"].append(item)
        for file in self.top_level_files:
            item = self._create_file_sidebar_item(workspace, file)
            if item is not None:
                hierarchy["items"].append(item)

        category: dict[str, Any] = {
            "type": "category",
            "label": "Files",
            "link": {
                "type": "doc",
                "id": f"{workspace.sidebar_base_id}indices/files/index",
            },
            "collapsed": True,
            "items": [hierarchy],
        }
        self.add_index_doc_items(workspace, "files", category["items"])
        items.append(category)

    def _create_folder_sidebar_item_recursively(
        self, workspace: "Workspace", folder: "Folder"
    ) -> dict[str, Any] | None:
        """Return the sidebar entry of a folder and of its content."""
        if folder.sidebar_label is None or folder.sidebar_id is None:
            return None

        category: dict[str, Any] = {
            "type": "category",
            "label": folder.sidebar_label,
            "link": {
                "type": "doc",
                "id": f"{workspace.sidebar_base_id}{folder.sidebar_id}",
            },
            "className": "doxyEllipsis",
            "collapsed": True,
            "items": [],
        }
        # Sub-folders first, then files.
        for child in folder.children:
            if isinstance(child, Folder):
                item = self._create_folder_sidebar_item_recursively(workspace, child)
                if item is not None:
                    category["items"].append(item)
        for child in folder.children:
            if isinstance(child, File):
                item = self._create_file_sidebar_item(workspace, child)
                if item is not None:
                    category["items"].append(item)
        return category

    def _create_file_sidebar_item(
        self, workspace: "Workspace", file: "File"
    ) -> dict[str, Any] | None:
        """Return the sidebar entry of a file."""
        if file.sidebar_label is None or file.sidebar_id is None:
            return None
        return {
            "type": "doc",
            "label": file.sidebar_label,
            "className": "doxyEllipsis",
            "id": f"{workspace.sidebar_base_id}{file.sidebar_id}",
        }

    def create_menu_items(self, workspace: "Workspace") -> list[dict[str, str]]:
        """Return the navbar entry of the files index."""
        return [{"label": "Files", "to": f"{workspace.urls.menu_base_url}files/"}]

    def generate_index_md_file(self, workspace: "Workspace") -> None:
        """Write the files and folders index page."""
        if not self.top_level_folders and not self.top_level_files:
            return

        content_lines: list[str] = []
        for folder in self.top_level_folders:
            content_lines.extend(self._generate_folder_lines(workspace, folder, 0))
        for file in self.top_level_files:
            content_lines.extend(self._generate_file_lines(workspace, file, 0))
        if not content_lines:
            return

        front_matter = {
            "title": "Files & Folders",
            "slug": f"{workspace.urls.slug_base_url}files",
            "custom_edit_url": None,
            "keywords": ["doxygen", "files", "folders", "reference"],
        }
        lines = ["The files & folders that contributed content to this site are:"]
        lines.extend(workspace.render_tree_table(content_lines))

        logger.info("Writing files index file")
        workspace.write_md_file("indices/files/index.md", front_matter, lines)

    def _generate_folder_lines(
        self, workspace: "Workspace", folder: "Folder", depth: int
    ) -> list[str]:
        """Return the tree table rows of a folder and of its content."""
        if not folder.has_page():
            return []

        lines = [""]
        lines.extend(
            workspace.render_tree_table_row(
                icon_class="doxyIconFolder",
                label=escape_html(folder.compound_name),
                link=self.context.get_permalink(folder.id, "compound") or "",
                depth=depth,
                description=workspace.render_brief_for_index(folder),
            )
        )
        for child in folder.children:
            if isinstance(child, Folder):
                lines.extend(self._generate_folder_lines(workspace, child, depth + 1))
        for child in folder.children:
            if isinstance(child, File):
                lines.extend(self._generate_file_lines(workspace, child, depth + 1))
        return lines

    def _generate_file_lines(
        self, workspace: "Workspace", file: "File", depth: int
    ) -> list[str]:
        """Return the tree table row of a file."""
        if not file.has_page():
            return []

        lines = [""]
        lines.extend(
            workspace.render_tree_table_row(
                icon_class="doxyIconFile",
                label=escape_html(file.compound_name),
                link=self.context.get_permalink(file.id, "compound") or "",
                depth=depth,
                description=workspace.render_brief_for_index(file),
            )
        )
        return lines

    def generate_per_initials_index_md_files(self, workspace: "Workspace") -> None:
        """Write the per-initial index pages of file level definitions."""
        if not self.top_level_files and not self.top_level_folders:
            return

        entries: dict[str, IndexEntry] = {}
        for file in self.compound_files_by_id.values():
            if not file.has_page():
                continue

            for attribute_name, compound_type in (
                ("inner_classes", Class),
                ("inner_namespaces", Namespace),
            ):
                for ref in file.inner_compounds.get(attribute_name, []):
                    compound = self.context.compounds_by_id.get(ref.refid)
                    if isinstance(compound, compound_type) and compound.has_page():
                        entry = compound_entry(compound)
                        entries[entry.id] = linked_to(entry, "file", file.relative_path)

            for entry in compound_members_entries(file):
                entries[entry.id] = linked_to(entry, "file", file.relative_path)

        index_files = [
            (
                "all",
                "Files Definitions Index",
                "The definitions part of the files are:",
                lambda kind: True,
            ),
            (
                "classes",
                "Files Classes Index",
                "The classes, structs, unions defined in the project are:",
                lambda kind: kind in CLASS_KINDS,
            ),
            (
                "namespaces",
                "Files Namespaces Index",
                "The namespaces defined in the project are:",
                lambda kind: kind == "namespace",
            ),
            (
                "functions",
                "Files Functions Index",
                "The functions defined in the project are:",
                lambda kind: kind == "function",
            ),
            (
                "variables",
                "Files Variables Index",
                "The variables defined in the project are:",
                lambda kind: kind == "variable",
            ),
            (
                "typedefs",
                "Files Type Definitions Index",
                "The typedefs defined in the project are:",
                lambda kind: kind == "typedef",
            ),
            (
                "enums",
                "Files Enums Index",
                "The enums defined in the project are:",
                lambda kind: kind == "enum",
            ),
            (
                "enumvalues",
                "Files Enum Values Index",
                "The enum values defined in the project are:",
                lambda kind: kind == "enumvalue",
            ),
            (
                "defines",
                "Files Macro Definitions Index",
                "The macros defined in the project are:",
                lambda kind: kind == "define",
            ),
        ]
        for file_kind, title, description, accept in index_files:
            self.generate_index_file(
                workspace,
                group="files",
                file_kind=file_kind,
                title=title,
                description=description,
                entries=entries,
                accept=accept,
            )


class Folder(CompoundBase):
    """One source folder."""

    def __init__(
        self, collection: FilesAndFolders, compound_def: CompoundDefDataModel
    ) -> None:
        super().__init__(collection, compound_def)
        self.children_folder_ids = [ref.refid for ref in compound_def.inner_dirs]
        self.children_file_ids = [ref.refid for ref in compound_def.inner_files]
        self.children_ids = self.children_folder_ids + self.children_file_ids
        self.relative_path = ""

        self.sidebar_label = self.compound_name
        self.index_name = self.compound_name
        self.tree_entry_name = self.compound_name
        self.page_title = f"`{self.compound_name}` Folder"
        self.create_sections()

    def has_children(self) -> bool:
        """Return True when some file lives below this folder."""
        for child in self.children:
            if isinstance(child, File):
                return True
            if isinstance(child, Folder) and child.has_children():
                return True
        return False

    def has_any_content(self) -> bool:
        """Return True when the folder holds files with content."""
        if self.has_children():
            return True
        return super().has_any_content()


class File(CompoundBase):
    """One source file, with its optional program listing."""

    def __init__(
        self, collection: FilesAndFolders, compound_def: CompoundDefDataModel
    ) -> None:
        super().__init__(collection, compound_def)
        self.relative_path = ""
        self.program_listing = compound_def.program_listing
        self.listing_line_numbers: set[int] = set()

        self.sidebar_label = self.compound_name
        self.index_name = self.compound_name
        self.tree_entry_name = self.compound_name
        self.page_title = f"`{self.compound_name}` File"
        self.create_sections()

    def initialize_late(self) -> None:
        """Collect the listing line numbers, used to link locations."""
        if self.program_listing is not None and self.context.options.get(
            "render_program_listing", True
        ):
            for codeline in self.program_listing.child_nodes():
                lineno = codeline.get("lineno")
                if lineno is not None:
                    self.listing_line_numbers.add(int(lineno))
        super().initialize_late()

    def has_any_content(self) -> bool:
        """Return True when the file has includes, a listing or a description."""
        if self.includes:
            return True
        if self.listing_line_numbers:
            return True
        return super().has_any_content()


def relative_path_of(compound: CompoundBase) -> str:
    """Join the folder chain above a file or folder with its own name."""
    if isinstance(compound.parent, Folder):
        return f"{relative_path_of(compound.parent)}/{compound.compound_name}"
    return compound.compound_name
