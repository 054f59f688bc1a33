"""Tests for the compound collections: hierarchies, paths and index pages."""

from pathlib import Path

import pytest

from doxy2md.classes import Classes
from doxy2md.collection_base import CollectionBase
from doxy2md.files_and_folders import FilesAndFolders
from doxy2md.groups import Groups
from doxy2md.index_entries import IndexEntry
from doxy2md.load_config import load_config
from doxy2md.resolution_context import ResolutionContext
from doxy2md.workspace import Workspace


@pytest.fixture
def workspace(tmp_path: Path, sample_context: ResolutionContext) -> Workspace:
    """Fixture providing a synchronous workspace writing below tmp_path."""
    options = load_config()
    options["docs_folder_path"] = str(tmp_path / "docs")
    options["debug"] = True
    workspace = Workspace(options, sample_context, project_brief="Demo")
    workspace.prepare_output_folder()
    return workspace


def entry(name: str, long_name: str = "") -> IndexEntry:
    return IndexEntry(
        id=name, name=name, long_name=long_name or name, kind="function", permalink=""
    )


def test_class_hierarchy(sample_context: ResolutionContext) -> None:
    """Verify that derived classes hang below their base class."""
    classes = sample_context.collection("classes")
    assert isinstance(classes, Classes)
    widget = sample_context.compounds_by_id["classdemo_1_1_widget"]
    gadget = sample_context.compounds_by_id["classdemo_1_1_gadget"]
    assert classes.top_level_classes == [widget]
    assert widget.children == [gadget]
    assert gadget.base_classes == [widget]
    assert widget.class_full_name == "demo::Widget"
    assert widget.page_title == "`Widget` Class"


def test_classes_with_external_bases_are_top_level(
    make_xml_folder, context_builder
) -> None:
    """Verify that bases missing from the export leave a class at the top level."""
    xml = """
<compounddef id="classdemo_1_1_error" kind="class" language="C++">
  <compoundname>demo::Error</compoundname>
  <basecompoundref prot="public" virt="non-virtual">std::exception</basecompoundref>
  <basecompoundref refid="classext_1_1_base" prot="public" virt="non-virtual">ext::Base</basecompoundref>
  <briefdescription><para>An error.</para></briefdescription>
  <location file="error.h" line="3"/>
</compounddef>"""
    context = context_builder(
        make_xml_folder([("classdemo_1_1_error", "class", "demo::Error", xml)])
    )
    error = context.compounds_by_id["classdemo_1_1_error"]
    assert error.base_class_ids == ["classext_1_1_base"]
    assert error.base_classes == []
    assert context.collection("classes").top_level_classes == [error]


def test_files_and_folders(sample_context: ResolutionContext) -> None:
    """Verify the folder chain, relative paths and the file registry."""
    files = sample_context.collection("files")
    assert isinstance(files, FilesAndFolders)
    folder = sample_context.compounds_by_id["dir_include"]
    file = sample_context.compounds_by_id["widget_8h"]
    assert files.top_level_folders == [folder]
    assert files.top_level_files == []
    assert file.parent is folder
    assert file.relative_path == "include/widget.h"
    assert sample_context.files_by_path["include/widget.h"] is file
    assert sample_context.find_file("include/./widget.h") is file
    assert sample_context.find_file("src/../include/widget.h") is file
    assert sample_context.find_file("include/other.h") is None
    assert file.listing_line_numbers == {1, 2}


def test_listing_line_numbers_disabled(sample_xml_folder: Path, context_builder) -> None:
    """Verify that program listings are ignored when rendering them is off."""
    options = load_config()
    options["render_program_listing"] = False
    context = context_builder(sample_xml_folder, options)
    assert context.compounds_by_id["widget_8h"].listing_line_numbers == set()


def test_groups(sample_context: ResolutionContext) -> None:
    """Verify group labels and the topics index for several top level groups."""
    groups = sample_context.collection("groups")
    assert isinstance(groups, Groups)
    core = sample_context.compounds_by_id["group__core"]
    assert core.sidebar_label == "Core utilities"
    assert [g.id for g in groups.top_level_groups] == ["group__core", "group__extra"]
    assert groups.has_topics_index()


def test_main_page(sample_context: ResolutionContext) -> None:
    """Verify that the main page is registered and has no page of its own."""
    main_page = sample_context.main_page
    assert main_page is sample_context.compounds_by_id["indexpage"]
    assert main_page.sidebar_label is None
    assert not main_page.is_top_page()
    assert sample_context.anchors_by_id["indexpage_1_intro"] is main_page


def test_order_per_initials_ignores_tilde(sample_context: ResolutionContext) -> None:
    """Verify that destructors sort with their class and initials are grouped."""
    collection = sample_context.collection("classes")
    ordered = collection.order_per_initials(
        [
            entry("~Widget()", "demo::Widget::~Widget"),
            entry("apple"),
            entry("Widget()", "demo::Widget::Widget"),
            entry("Beta"),
        ]
    )
    assert list(ordered) == ["a", "b", "w"]
    assert [e.name for e in ordered["w"]] == ["Widget()", "~Widget()"]


def test_output_entries_counts(sample_context: ResolutionContext) -> None:
    """Verify the per-initial counters and the total."""
    collection: CollectionBase = sample_context.collection("classes")
    lines = collection.output_entries(
        collection.order_per_initials([entry("alpha"), entry("apex"), entry("beta")])
    )
    assert "## - A -" in lines
    assert "<p>2 entries</p>" in lines
    assert lines[-1] == "<p>Total: 3 entries.</p>"


def test_classes_per_initial_indices(workspace: Workspace) -> None:
    """Verify that only the index kinds with entries are written."""
    classes = workspace.context.collection("classes")
    classes.generate_per_initials_index_md_files(workspace)
    assert workspace.indices_maps["classes"] == {"all", "classes", "functions"}

    functions = workspace.output_folder_path / "indices/classes/functions.md"
    text = functions.read_text(encoding="utf-8")
    assert "title: Class Functions Index" in text
    assert "<li><b>size()</b>: as function in class " in text
    assert 'href="/docs/api/classes/demo/widget/#a04"' in text
    assert not (workspace.output_folder_path / "indices/classes/variables.md").exists()


def test_namespaces_per_initial_indices(workspace: Workspace) -> None:
    """Verify that namespace indices list classes, functions and enum values."""
    namespaces = workspace.context.collection("namespaces")
    namespaces.generate_per_initials_index_md_files(workspace)
    assert {"all", "namespaces", "classes", "functions", "enums", "enumvalues"} == (
        workspace.indices_maps["namespaces"]
    )
    text = (workspace.output_folder_path / "indices/namespaces/enumvalues.md").read_text(
        encoding="utf-8"
    )
    assert "<b>red</b>" in text
    assert "<b>green</b>" in text


def test_hierarchy_index_files(workspace: Workspace) -> None:
    """Verify the tree table index pages of every collection."""
    for collection in workspace.context.collections:
        collection.generate_index_md_file(workspace)

    classes = (workspace.output_folder_path / "indices/classes/index.md").read_text(
        encoding="utf-8"
    )
    assert '<table class="doxyTreeTable">' in classes
    assert '<a href="/docs/api/classes/demo/widget">Widget</a>' in classes
    assert "A widget\n</td></tr>" in classes

    topics = (workspace.output_folder_path / "indices/groups/index.md").read_text(
        encoding="utf-8"
    )
    assert "Core utilities" in topics
    assert "Extras" in topics
    assert (workspace.output_folder_path / "indices/files/index.md").exists()
    assert (workspace.output_folder_path / "indices/namespaces/index.md").exists()
