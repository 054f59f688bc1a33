"""Logic for writing the Docusaurus navbar entry."""

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from doxy2md.workspace import Workspace

logger = logging.getLogger(__name__)


def create_navbar_item(workspace: "Workspace") -> dict[str, Any]:
    """Build a dropdown with one entry per collection, or a plain link."""
    items: list[dict[str, str]] = []
    for collection in workspace.context.collections:
        if collection.is_visible_in_sidebar():
            items.extend(collection.create_menu_items(workspace))

    navbar_item: dict[str, Any] = {
        "label": workspace.options.get("navbar_label", "Reference"),
        "to": workspace.urls.menu_base_url,
        "position": workspace.options.get("navbar_position", "left"),
    }
    if items:
        navbar_item = {"type": "dropdown", **navbar_item, "items": items}
    return navbar_item


def write_navbar_file(workspace: "Workspace") -> Path | None:
    """Write the navbar JSON file, unless disabled."""
    file_path = workspace.options.get("navbar_file_path")
    if not file_path:
        logger.info("No navbar file configured")
        return None

    navbar_item = create_navbar_item(workspace)
    path = Path(file_path)
    print(f"Writing navbar file {path}...")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(navbar_item, indent=2) + "\n", encoding="utf-8")
    return path
