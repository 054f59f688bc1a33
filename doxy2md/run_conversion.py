"""Orchestration logic for converting a Doxygen XML export to Docusaurus pages."""

import argparse
import logging
from pathlib import Path
from typing import Any

from doxy2md.data_model import DataModel, load_data_model
from doxy2md.load_config import load_config
from doxy2md.menu import write_navbar_file
from doxy2md.page_renderer import PageRenderer, render_main_page_lines
from doxy2md.redirects import generate_compatibility_redirects
from doxy2md.resolution_context import ResolutionContext
from doxy2md.sidebar import write_sidebar_file
from doxy2md.workspace import SiteUrls, Workspace

logger = logging.getLogger(__name__)


def run_conversion(args: argparse.Namespace) -> int:
    """Execute the full conversion pipeline."""
    options = _init_options(args)

    input_folder = Path(options["doxygen_xml_input_folder_path"])
    if not (input_folder / "index.xml").is_file():
        msg = f"No index.xml found under: {input_folder}"
        raise SystemExit(msg)

    data_model = load_data_model(input_folder, verbose=options["verbose"])
    workspace = _init_infra(options, data_model)

    with workspace:
        workspace.prepare_output_folder()
        _render_all_pages(workspace)
        _write_top_index(workspace)
        _write_indices(workspace)
        workspace.wait_for_writes()

    write_sidebar_file(workspace)
    write_navbar_file(workspace)
    redirects_count = generate_compatibility_redirects(workspace)
    if redirects_count:
        logger.info("%d redirect files written", redirects_count)

    print(
        f"Generated {workspace.written_files_count} Markdown pages into: "
        f"{workspace.output_folder_path}"
    )
    return 0


def _init_options(args: argparse.Namespace) -> dict[str, Any]:
    """Load the configuration and apply the command line overrides."""
    options = load_config(args.config, args.id)
    if args.input:
        options["doxygen_xml_input_folder_path"] = str(args.input)
    if args.output:
        options["docs_folder_path"] = str(args.output)
    if args.verbose:
        options["verbose"] = True
    if args.debug:
        options["debug"] = True
    if args.suggest_todo:
        options["suggest_todo_descriptions"] = True

    if options["debug"]:
        logging.getLogger().setLevel(logging.DEBUG)
    elif options["verbose"]:
        logging.getLogger().setLevel(logging.INFO)
    return options


def _init_infra(options: dict[str, Any], data_model: DataModel) -> Workspace:
    """Build the frozen resolution context and the output workspace."""
    urls = SiteUrls.from_options(options)
    context = ResolutionContext(options, urls.page_base_url)
    context.build(data_model)

    return Workspace(
        options,
        context,
        project_brief=data_model.doxyfile.get_option_cdata_value("PROJECT_BRIEF"),
        doxygen_version=data_model.doxygen_version,
    )


def _render_all_pages(workspace: Workspace) -> int:
    """Render every compound page; the main page goes into the top index."""
    compounds = [
        compound
        for compound in workspace.context.compounds_by_id.values()
        if compound.has_page()
    ]
    print(f"Writing {len(compounds)} pages...")
    for compound in compounds:
        PageRenderer(workspace, compound).write()
    return len(compounds)


def _write_top_index(workspace: Workspace) -> None:
    """Write the top index page."""
    options = workspace.options
    title = options.get("main_page_title") or ""
    if not title:
        if workspace.project_brief:
            title = f"{workspace.project_brief} API Reference"
        else:
            title = "API Reference"

    front_matter = {
        "title": title,
        "slug": workspace.urls.slug_base_url,
        "custom_edit_url": None,
        "keywords": ["doxygen", "reference"],
    }
    logger.info("Writing top index file")
    workspace.write_md_file(
        "index.md",
        front_matter,
        render_main_page_lines(workspace),
        page_url=workspace.urls.page_base_url.rstrip("/"),
    )


def _write_indices(workspace: Workspace) -> None:
    """Write the collection index pages."""
    for collection in workspace.context.collections:
        collection.generate_index_md_file(workspace)
        collection.generate_per_initials_index_md_files(workspace)
