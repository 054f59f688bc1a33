"""Logic for loading and merging configuration files."""

import logging
from pathlib import Path
from typing import Any

import yaml

from doxy2md.deep_merge import deep_merge
from doxy2md.errors import InputFileError

logger = logging.getLogger(__name__)

DEFAULT_INSTANCE_ID = "default"

DEFAULT_CONFIG: dict[str, Any] = {
    "doxygen_xml_input_folder_path": "doxygen/xml",
    "docs_folder_path": "docs",
    "api_folder_path": "api",
    "base_url": "/",
    "docs_base_url": "docs",
    "api_base_url": "api",
    "compatibility_redirects_output_folder_path": None,
    "main_page_title": "",
    "original_pages_note": "",
    "sidebar_category_file_path": "sidebar-category-doxygen.json",
    "sidebar_category_label": "API Reference (Doxygen)",
    "navbar_file_path": "docusaurus-config-navbar-doxygen.json",
    "navbar_label": "Reference",
    "navbar_position": "left",
    "verbose": False,
    "debug": False,
    "suggest_todo_descriptions": False,
    "list_pages_at_top": True,
    "render_program_listing": True,
    "render_program_listing_inline": True,
    "max_parallel_writes": 42,
    "keywords": [],
}


def instance_defaults(instance_id: str) -> dict[str, Any]:
    """Return the defaults for one instance of a multi-instance site."""
    config = DEFAULT_CONFIG.copy()
    config["keywords"] = list(DEFAULT_CONFIG["keywords"])
    if instance_id != DEFAULT_INSTANCE_ID:
        config["api_folder_path"] = instance_id
        config["api_base_url"] = instance_id
        config["sidebar_category_file_path"] = (
            f"sidebar-category-doxygen-{instance_id}.json"
        )
        config["navbar_file_path"] = (
            f"docusaurus-config-navbar-doxygen-{instance_id}.json"
        )
    config["id"] = instance_id
    return config


def _is_multi_instance(user_config: dict[str, Any]) -> bool:
    """Return True when the file holds several named configurations."""
    if "doxygen_xml_input_folder_path" in user_config:
        return False
    return any(isinstance(value, dict) for value in user_config.values())


def load_config(
    path: str | None = None, instance_id: str | None = None
) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults.

    A file may describe several instances keyed by id; `instance_id` picks
    one of them.
    """
    instance_id = instance_id or DEFAULT_INSTANCE_ID
    config = instance_defaults(instance_id)
    if not path:
        return config

    p = Path(path)
    if not p.exists():
        logger.warning("Configuration file %s not found, using defaults", path)
        return config

    user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(user_config, dict):
        msg = f"Configuration file {path} must hold a mapping"
        raise InputFileError(msg)

    if _is_multi_instance(user_config):
        if instance_id not in user_config:
            msg = f"Configuration file {path} has no instance {instance_id!r}"
            raise InputFileError(msg)
        user_config = user_config[instance_id] or {}

    return deep_merge(config, user_config)
