"""Logic for writing the Docusaurus sidebar category file."""

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from doxy2md.pages import Pages

if TYPE_CHECKING:
    from doxy2md.workspace import Workspace

logger = logging.getLogger(__name__)


def create_sidebar_category(workspace: "Workspace") -> dict[str, Any]:
    """Build the category that holds the whole API reference."""
    items: list[Any] = []
    pages = workspace.context.collection("pages")
    if isinstance(pages, Pages):
        pages.add_top_pages_sidebar_items(workspace, items)

    for collection in workspace.context.collections:
        collection.add_sidebar_items(workspace, items)

    return {
        "type": "category",
        "label": workspace.options.get("sidebar_category_label", ""),
        "link": {
            "type": "doc",
            "id": f"{workspace.sidebar_base_id}index",
        },
        "collapsed": False,
        "items": items,
    }


def write_sidebar_file(workspace: "Workspace") -> Path | None:
    """Write the sidebar JSON; an empty path in the options disables it."""
    file_path = workspace.options.get("sidebar_category_file_path")
    if not file_path:
        logger.info("No sidebar file configured")
        return None

    category = create_sidebar_category(workspace)
    path = Path(file_path)
    print(f"Writing sidebar file {path}...")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(category, indent=2) + "\n", encoding="utf-8")
    return path
