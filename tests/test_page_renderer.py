"""Tests for rendering compound pages."""

from pathlib import Path

import pytest

from doxy2md.load_config import load_config
from doxy2md.page_renderer import PageRenderer, render_main_page_lines
from doxy2md.resolution_context import ResolutionContext
from doxy2md.workspace import Workspace

WIDGET_FILE_LINK = '<a href="/docs/api/files/include/widget-h">include/widget.h</a>'


def make_workspace(tmp_path: Path, context: ResolutionContext, **options) -> Workspace:
    config = load_config()
    config.update(docs_folder_path=str(tmp_path / "docs"), debug=True, **options)
    return Workspace(config, context, project_brief="Demo", doxygen_version="1.10.0")


@pytest.fixture
def workspace(tmp_path: Path, sample_context: ResolutionContext) -> Workspace:
    """Fixture providing a synchronous workspace over the sample project."""
    return make_workspace(tmp_path, sample_context)


def render(workspace: Workspace, compound_id: str) -> str:
    compound = workspace.context.compounds_by_id[compound_id]
    return "\n".join(PageRenderer(workspace, compound).render_lines())


def test_class_front_matter(workspace: Workspace) -> None:
    """Verify title, slug and description of a class page."""
    widget = workspace.context.compounds_by_id["classdemo_1_1_widget"]
    assert PageRenderer(workspace, widget).front_matter() == {
        "title": "`Widget` Class",
        "slug": "/api/classes/demo/widget",
        "description": "A widget.",
        "custom_edit_url": None,
        "toc_max_heading_level": 4,
        "keywords": ["doxygen", "reference", "class"],
    }


def test_class_page_blocks(workspace: Workspace) -> None:
    """Verify the brief, includes, derived classes and member indices."""
    text = render(workspace, "classdemo_1_1_widget")
    assert '<p>A widget. <a href="#details">More...</a></p>' in text
    assert (
        '#include <a href="/docs/api/files/include/widget-h">&lt;widget.h&gt;</a>'
        in text
    )
    assert "## Derived Classes" in text
    assert '<a href="/docs/api/classes/demo/gadget">demo::Gadget</a>' in text
    for header in (
        "## Public Constructors Index",
        "## Public Destructor Index",
        "## Public Operators Index",
        "## Public Member Functions Index",
        "## Description {#details}",
    ):
        assert header in text
    assert text.index("## Public Constructors Index") < text.index(
        "## Public Member Functions Index"
    )
    assert text.index("## Description {#details}") < text.index("### Widget() {#a01}")


def test_class_member_definitions(workspace: Workspace) -> None:
    """Verify headings, prototypes, labels, links and locations of members."""
    text = render(workspace, "classdemo_1_1_widget")
    assert "### ~Widget() {#a02}" in text
    assert "### operator==() {#a03}" in text
    assert "### size() {#a04}" in text
    assert '<td class="doxyMemberName">int demo::Widget::size () const</td>' in text
    assert '<span class="doxyMemberLabel virtual">virtual</span>' in text
    assert 'Same as <a href="#a01">Widget</a> sizes' in text
    assert '<a href="/docs/api/namespaces/demo/#a10">make_widget</a>' in text
    assert f"Definition at line 15 of file {WIDGET_FILE_LINK}." in text
    assert "generated from the following file:" in text
    assert f"<li>{WIDGET_FILE_LINK}</li>" in text


def test_base_class_table(workspace: Workspace) -> None:
    """Verify the base class table of a derived class."""
    text = render(workspace, "classdemo_1_1_gadget")
    assert "## Base class" in text
    assert '<a href="/docs/api/classes/demo/widget">demo::Widget</a>' in text
    assert '<td class="doxyMemberIndexDescriptionRight">A widget</td>' in text


def test_namespace_page(workspace: Workspace) -> None:
    """Verify enum and function blocks of a namespace page."""
    text = render(workspace, "namespacedemo")
    assert "## Classes Index" in text
    assert "## Enumerations Index" in text
    assert "## Functions Index" in text
    assert (
        '<td class="doxyMemberIndexItemType" align="left" valign="top">enum class</td>'
        in text
    )
    assert '<a href="#a11">Color</a> &#123; ... &#125;' in text
    assert (
        '<td class="doxyMemberIndexItemType" align="left" valign="top">'
        '<a href="/docs/api/classes/demo/widget">Widget</a></td>' in text
    )
    assert "### make_widget() {#a10}" in text
    assert "### Color {#a11}" in text
    assert '<td class="doxyEnumItemName">red<a id="a11a20"></a></td>' in text
    assert '<td class="doxyEnumItemDescription">The red one (1)</td>' in text
    assert '<span class="doxyMemberLabel strong">strong</span>' in text


def test_file_page(workspace: Workspace) -> None:
    """Verify the inner indices and the listing of a file page."""
    text = render(workspace, "widget_8h")
    assert "## Namespaces Index" in text
    assert "## Classes Index" in text
    assert "## File Listing" in text
    assert '<a id="l00001"></a>1' in text


def test_folder_and_group_pages(workspace: Workspace) -> None:
    """Verify the inner file index of a folder and the classes of a group."""
    folder = render(workspace, "dir_include")
    assert "## Files Index" in folder
    assert '<a href="/docs/api/files/include/widget-h">widget.h</a>' in folder

    group = render(workspace, "group__core")
    assert "<p>The core.</p>" in group
    assert "## Classes Index" in group
    assert '<a href="/docs/api/classes/demo/widget">Widget</a>' in group


def test_todo_suggestions(tmp_path: Path, sample_context: ResolutionContext) -> None:
    """Verify the placeholders for missing descriptions, only on request."""
    quiet = make_workspace(tmp_path / "a", sample_context)
    assert "TODO" not in render(quiet, "classdemo_1_1_gadget")

    verbose = make_workspace(
        tmp_path / "b", sample_context, suggest_todo_descriptions=True
    )
    text = render(verbose, "classdemo_1_1_gadget")
    assert "TODO: add <code>@details</code> to <code>@class demo::Gadget</code>" in text


def test_template_declaration(make_xml_folder, context_builder, tmp_path: Path) -> None:
    """Verify the declaration block of a class template."""
    xml = """
<compounddef id="classdemo_1_1_box" kind="class" language="C++">
  <compoundname>demo::Box</compoundname>
  <templateparamlist><param><type>typename T</type></param></templateparamlist>
  <briefdescription><para>A box.</para></briefdescription>
  <location file="box.h" line="3"/>
</compounddef>"""
    context = context_builder(
        make_xml_folder([("classdemo_1_1_box", "class", "demo::Box", xml)])
    )
    workspace = make_workspace(tmp_path, context)
    box = context.compounds_by_id["classdemo_1_1_box"]
    assert box.page_title == "`Box` Class Template"
    text = render(workspace, box.id)
    assert "## Declaration" in text
    assert "template &lt;typename T&gt;<br/>class demo::Box&lt;T&gt;;" in text


def test_main_page_lines(tmp_path: Path, sample_context: ResolutionContext) -> None:
    """Verify topics, main page text and the original pages note."""
    workspace = make_workspace(
        tmp_path, sample_context, original_pages_note="Also see the HTML pages."
    )
    text = "\n".join(render_main_page_lines(workspace))
    assert "The Demo topics with brief descriptions are:" in text
    assert '<a href="/docs/api/groups/core">Core utilities</a>' in text
    assert 'Welcome to <b>Demo</b>.<a id="_intro"></a>' in text
    assert text.endswith(":::note\nAlso see the HTML pages.\n:::")


def test_write_page(workspace: Workspace) -> None:
    """Verify that a page lands at its page identifier."""
    workspace.prepare_output_folder()
    widget = workspace.context.compounds_by_id["classdemo_1_1_widget"]
    PageRenderer(workspace, widget).write()
    text = (workspace.output_folder_path / "classes/demo-widget.md").read_text(
        encoding="utf-8"
    )
    assert "slug: /api/classes/demo/widget" in text
    assert "/docs/api/classes/demo/widget/#" not in text
