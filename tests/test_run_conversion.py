"""Tests for the command line entry points and the full conversion run."""

import json
import logging
import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

import main as pipeline
from doxy2md.convert import main
from tests.conftest import SAMPLE_COMPOUNDS, write_xml_folder


def test_full_conversion(
    sample_xml_folder: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Verify the pages, indices and side files of a complete run."""
    monkeypatch.chdir(tmp_path)
    out = tmp_path / "site/docs"
    test_args = [
        "doxygen2md",
        "--input",
        str(sample_xml_folder),
        "--output",
        str(out),
    ]
    with patch.object(sys, "argv", test_args):
        ret = main()
    assert ret == 0

    api = out / "api"
    for page in (
        "index.md",
        "classes/demo-widget.md",
        "classes/demo-gadget.md",
        "namespaces/demo.md",
        "files/include-widget-h.md",
        "folders/include.md",
        "groups/core.md",
        "groups/extra.md",
        "indices/classes/index.md",
        "indices/classes/functions.md",
        "indices/namespaces/enumvalues.md",
        "indices/files/index.md",
        "indices/groups/index.md",
    ):
        assert (api / page).exists(), page

    index = (api / "index.md").read_text(encoding="utf-8")
    assert "title: Demo API Reference" in index
    assert "slug: /api/" in index
    assert 'Welcome to <b>Demo</b>.<a id="_intro"></a>' in index

    sidebar = json.loads(
        (tmp_path / "sidebar-category-doxygen.json").read_text(encoding="utf-8")
    )
    assert sidebar["link"]["id"] == "api/index"
    classes = next(item for item in sidebar["items"] if item["label"] == "Classes")
    assert "Functions" in [item["label"] for item in classes["items"]]

    navbar = json.loads(
        (tmp_path / "docusaurus-config-navbar-doxygen.json").read_text(encoding="utf-8")
    )
    assert navbar["type"] == "dropdown"


def test_rerun_replaces_output(
    sample_xml_folder: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Verify that a second run starts from a clean output folder."""
    monkeypatch.chdir(tmp_path)
    args = ["--input", str(sample_xml_folder), "--output", str(tmp_path / "docs")]
    assert main(args) == 0
    stale = tmp_path / "docs/api/stale.md"
    stale.write_text("old", encoding="utf-8")
    assert main(args) == 0
    assert not stale.exists()


def test_config_file_instance(
    sample_xml_folder: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Verify that an instance of a configuration file drives the run."""
    monkeypatch.chdir(tmp_path)
    config_file = tmp_path / "doxygen2md.yml"
    config_file.write_text(
        yaml.safe_dump(
            {
                "demo": {
                    "doxygen_xml_input_folder_path": str(sample_xml_folder),
                    "docs_folder_path": str(tmp_path / "docs"),
                    "main_page_title": "Demo Reference",
                    "compatibility_redirects_output_folder_path": str(
                        tmp_path / "static/demo"
                    ),
                    "navbar_file_path": "",
                }
            }
        ),
        encoding="utf-8",
    )
    assert main(["--config", str(config_file), "--id", "demo", "--debug"]) == 0

    index = (tmp_path / "docs/demo/index.md").read_text(encoding="utf-8")
    assert "title: Demo Reference" in index
    assert "slug: /demo/" in index
    assert (tmp_path / "sidebar-category-doxygen-demo.json").exists()
    assert not (tmp_path / "docusaurus-config-navbar-doxygen-demo.json").exists()
    assert (tmp_path / "static/demo/classdemo_1_1_widget.html").exists()


def test_missing_index_exits(tmp_path: Path) -> None:
    """Verify that a folder without index.xml stops the run."""
    with pytest.raises(SystemExit, match="No index.xml"):
        main(["--input", str(tmp_path), "--output", str(tmp_path / "docs")])


def test_integrity_error_returns_1(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """Verify that conversion errors are logged and give exit code 1."""
    monkeypatch.chdir(tmp_path)
    _, kind, name, xml = SAMPLE_COMPOUNDS[0]
    # A second file holding a compound with an id already in use.
    folder = write_xml_folder(
        tmp_path / "xml", SAMPLE_COMPOUNDS + [("namespacedemo_copy", kind, name, xml)]
    )
    with caplog.at_level(logging.ERROR):
        ret = main(["--input", str(folder), "--output", str(tmp_path / "docs")])
    assert ret == 1
    assert "Duplicate compound id namespacedemo" in caplog.text


def test_pipeline_runs_doxygen_first() -> None:
    """Verify that the pipeline script runs doxygen, then the converter."""
    test_args = ["main.py", "--run-doxygen", "--config", "site.yml", "--verbose"]
    with (
        patch.object(sys, "argv", test_args),
        patch("main.subprocess.run") as run,
        patch("main.convert_main", return_value=0) as convert,
    ):
        ret = pipeline.main()
    assert ret == 0
    run.assert_called_once_with(["doxygen", "Doxyfile"], check=True, cwd=None)
    convert.assert_called_once_with(["--config", "site.yml", "--verbose"])


def test_pipeline_stops_on_doxygen_failure() -> None:
    """Verify that a failing doxygen run exits with its return code."""
    with (
        patch.object(sys, "argv", ["main.py", "--run-doxygen"]),
        patch(
            "main.subprocess.run",
            side_effect=subprocess.CalledProcessError(2, ["doxygen"]),
        ),
        patch("main.convert_main") as convert,
        pytest.raises(SystemExit) as excinfo,
    ):
        pipeline.main()
    assert excinfo.value.code == 2
    convert.assert_not_called()
