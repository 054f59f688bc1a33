"""Tests for page assembly and writing."""

from pathlib import Path

import pytest

from doxy2md.errors import DataIntegrityError
from doxy2md.front_matter import render_front_matter, render_page
from doxy2md.load_config import load_config
from doxy2md.resolution_context import ResolutionContext
from doxy2md.workspace import SiteUrls, Workspace


def test_front_matter_keeps_key_order() -> None:
    """Verify the banner, the key order and YAML null for unset values."""
    lines = render_front_matter(
        {
            "title": "The `demo` Namespace Reference",
            "slug": "/api/namespaces/demo",
            "custom_edit_url": None,
            "keywords": ["doxygen", "namespace"],
        }
    )
    assert lines[:3] == ["---", "", "# DO NOT EDIT!"]
    body = lines[5:-3]
    assert body == [
        "title: The `demo` Namespace Reference",
        "slug: /api/namespaces/demo",
        "custom_edit_url: null",
        "keywords:",
        "- doxygen",
        "- namespace",
    ]
    assert lines[-3:] == ["", "---", ""]


def test_front_matter_quotes_special_values() -> None:
    """Verify that YAML sensitive titles survive a round trip."""
    lines = render_front_matter({"title": "operator: the colon", "toc_max_heading_level": 4})
    assert "title: 'operator: the colon'" in lines
    assert "toc_max_heading_level: 4" in lines


def test_render_page_shortens_self_links() -> None:
    """Verify that links into the page itself become bare anchors."""
    text = render_page(
        {"title": "Widget"},
        ['<a href="/docs/api/classes/demo/widget/#a04">size</a>'],
        page_url="/docs/api/classes/demo/widget",
        doxygen_version="1.10.0",
    )
    assert '<a href="#a04">size</a>' in text
    assert '<div class="doxyPage">' in text
    assert "Generated via doxygen2md 0.1.0 by Doxygen 1.10.0." in text
    assert text.endswith("</div>\n")


def test_site_urls() -> None:
    """Verify the URL prefixes derived from the site options."""
    urls = SiteUrls.from_options(load_config())
    assert urls.page_base_url == "/docs/api/"
    assert urls.slug_base_url == "/api/"
    assert urls.menu_base_url == "/docs/api/"

    options = load_config()
    options.update(base_url="/site", docs_base_url="/reference/", api_base_url="")
    urls = SiteUrls.from_options(options)
    assert urls.page_base_url == "/site/reference/"
    assert urls.slug_base_url == "/"


def test_write_md_file_adds_keywords(
    tmp_path: Path, sample_context: ResolutionContext
) -> None:
    """Verify that configured keywords are appended once to every page."""
    options = load_config()
    options.update(docs_folder_path=str(tmp_path), debug=True, keywords=["demo", "api"])
    workspace = Workspace(options, sample_context)
    workspace.write_md_file(
        "pages/x.md", {"title": "X", "keywords": ["doxygen", "demo"]}, ["Body"]
    )
    text = (tmp_path / "api" / "pages" / "x.md").read_text(encoding="utf-8")
    assert "keywords:\n- doxygen\n- demo\n- api\n" in text
    assert workspace.written_files_count == 1


def test_write_md_file_twice_fails(
    tmp_path: Path, sample_context: ResolutionContext
) -> None:
    """Verify that a second write to the same page is an integrity error."""
    options = load_config()
    options.update(docs_folder_path=str(tmp_path), debug=True)
    workspace = Workspace(options, sample_context)
    workspace.write_md_file("a.md", {"title": "A"}, [])
    with pytest.raises(DataIntegrityError, match="written twice"):
        workspace.write_md_file("a.md", {"title": "A"}, [])


def test_threaded_writes(tmp_path: Path, sample_context: ResolutionContext) -> None:
    """Verify that pool writes are complete after waiting."""
    options = load_config()
    options.update(docs_folder_path=str(tmp_path), max_parallel_writes=4)
    with Workspace(options, sample_context) as workspace:
        for index in range(10):
            workspace.write_md_file(f"p/{index}.md", {"title": str(index)}, [])
        workspace.wait_for_writes()
    assert len(list((tmp_path / "api" / "p").glob("*.md"))) == 10
