"""Tests for the sidebar, navbar and redirect stub outputs."""

import json
import logging
from pathlib import Path

import pytest

from doxy2md.load_config import load_config
from doxy2md.menu import create_navbar_item, write_navbar_file
from doxy2md.redirects import StubGenerator, generate_compatibility_redirects
from doxy2md.resolution_context import ResolutionContext
from doxy2md.sidebar import create_sidebar_category, write_sidebar_file
from doxy2md.workspace import Workspace


@pytest.fixture
def workspace(tmp_path: Path, sample_context: ResolutionContext) -> Workspace:
    """Fixture providing a workspace whose side files land in tmp_path."""
    options = load_config()
    options.update(
        docs_folder_path=str(tmp_path / "docs"),
        sidebar_category_file_path=str(tmp_path / "sidebar.json"),
        navbar_file_path=str(tmp_path / "navbar.json"),
        compatibility_redirects_output_folder_path=str(tmp_path / "static/api"),
        debug=True,
    )
    return Workspace(options, sample_context)


def test_sidebar_category(workspace: Workspace) -> None:
    """Verify the collection categories and their order."""
    category = create_sidebar_category(workspace)
    assert category["label"] == "API Reference (Doxygen)"
    assert category["link"] == {"type": "doc", "id": "api/index"}
    assert category["collapsed"] is False
    assert [item["label"] for item in category["items"]] == [
        "Topics",
        "Namespaces",
        "Classes",
        "Files",
    ]
    topics = category["items"][0]
    assert [item["id"] for item in topics["items"]] == [
        "api/groups/core",
        "api/groups/extra",
    ]


def test_sidebar_class_hierarchy(workspace: Workspace) -> None:
    """Verify that derived classes are nested below their base."""
    classes = create_sidebar_category(workspace)["items"][2]
    hierarchy = classes["items"][0]
    widget = hierarchy["items"][0]
    assert widget["link"] == {"type": "doc", "id": "api/classes/demo-widget"}
    assert widget["items"] == [
        {
            "type": "doc",
            "label": "Gadget",
            "className": "doxyEllipsis",
            "id": "api/classes/demo-gadget",
        }
    ]


def test_sidebar_lists_written_indices(workspace: Workspace) -> None:
    """Verify that per-initial index pages appear once written."""
    workspace.prepare_output_folder()
    workspace.context.collection("classes").generate_per_initials_index_md_files(
        workspace
    )
    classes = create_sidebar_category(workspace)["items"][2]
    assert [item["label"] for item in classes["items"]] == [
        "Hierarchy",
        "All",
        "Classes",
        "Functions",
    ]


def test_write_sidebar_file(workspace: Workspace, tmp_path: Path) -> None:
    """Verify that the sidebar JSON is written where configured."""
    path = write_sidebar_file(workspace)
    assert path == tmp_path / "sidebar.json"
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["type"] == "category"


def test_write_sidebar_file_disabled(workspace: Workspace) -> None:
    """Verify that an empty path disables the sidebar file."""
    workspace.options["sidebar_category_file_path"] = ""
    assert write_sidebar_file(workspace) is None


def test_navbar_dropdown(workspace: Workspace) -> None:
    """Verify one navbar entry per top level group and collection."""
    item = create_navbar_item(workspace)
    assert item["type"] == "dropdown"
    assert item["label"] == "Reference"
    assert item["to"] == "/docs/api/"
    assert item["position"] == "left"
    assert item["items"] == [
        {"label": "Core utilities", "to": "/docs/api/groups/core/"},
        {"label": "Extras", "to": "/docs/api/groups/extra/"},
        {"label": "Namespaces", "to": "/docs/api/namespaces/"},
        {"label": "Classes", "to": "/docs/api/classes/"},
        {"label": "Files", "to": "/docs/api/files/"},
    ]


def test_navbar_plain_link(make_xml_folder, context_builder, tmp_path: Path) -> None:
    """Verify that a project with no visible pages gets a plain link."""
    main_page = """
<compounddef id="indexpage" kind="page">
  <compoundname>index</compoundname>
  <title>Empty</title>
</compounddef>"""
    context = context_builder(make_xml_folder([("indexpage", "page", "index", main_page)]))
    options = load_config()
    options.update(navbar_file_path=str(tmp_path / "navbar.json"), debug=True)
    workspace = Workspace(options, context)
    path = write_navbar_file(workspace)
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "label": "Reference",
        "to": "/docs/api/",
        "position": "left",
    }


def test_stub_generator(tmp_path: Path) -> None:
    """Verify the redirect page content."""
    content = StubGenerator(tmp_path).generate_stub("a.html", "/docs/api/a/")
    assert content is not None
    assert '<meta http-equiv="refresh" content="0; url=/docs/api/a/">' in content
    assert '<link rel="canonical" href="/docs/api/a/">' in content
    assert (tmp_path / "a.html").read_text(encoding="utf-8") == content


def test_stub_generator_never_overwrites(tmp_path: Path) -> None:
    """Verify that existing files are kept."""
    (tmp_path / "a.html").write_text("keep", encoding="utf-8")
    assert StubGenerator(tmp_path).generate_stub("a.html", "/x/") is None
    assert (tmp_path / "a.html").read_text(encoding="utf-8") == "keep"


def test_stub_generator_stays_inside(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Verify that paths escaping the output folder are refused."""
    base = tmp_path / "out"
    base.mkdir()
    with caplog.at_level(logging.WARNING):
        assert StubGenerator(base).generate_stub("../evil.html", "/x/") is None
    assert not (tmp_path / "evil.html").exists()
    assert "refused" in caplog.text


def test_compatibility_redirects(workspace: Workspace, tmp_path: Path) -> None:
    """Verify the per-compound and index redirect stubs."""
    folder = tmp_path / "static/api"
    folder.mkdir(parents=True)
    (folder / "stale.html").write_text("old", encoding="utf-8")

    written = generate_compatibility_redirects(workspace)

    assert not (folder / "stale.html").exists()
    widget = (folder / "classdemo_1_1_widget.html").read_text(encoding="utf-8")
    assert "url=/docs/api/classes/demo/widget/" in widget
    assert (folder / "classdemo_1_1_widget-members.html").exists()
    assert (folder / "widget_8h_source.html").exists()
    assert not (folder / "indexpage.html").exists()
    index = (folder / "index.html").read_text(encoding="utf-8")
    assert 'href="/docs/api/"' in index
    topics = (folder / "topics.html").read_text(encoding="utf-8")
    assert "url=/docs/api/indices/groups/" in topics
    assert written == len(list(folder.iterdir()))


def test_compatibility_redirects_disabled(workspace: Workspace) -> None:
    """Verify that nothing is written without an output folder."""
    workspace.options["compatibility_redirects_output_folder_path"] = None
    assert generate_compatibility_redirects(workspace) == 0
