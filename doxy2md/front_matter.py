"""Utility for assembling a Docusaurus page: YAML front matter, body and footer."""

from typing import Any

import yaml

TOOL_NAME = "doxygen2md"
TOOL_VERSION = "0.1.0"


def render_front_matter(front_matter: dict[str, Any]) -> list[str]:
    """Render the front matter block, keys in insertion order."""
    lines = [
        "---",
        "",
        "# DO NOT EDIT!",
        f"# Automatically generated via {TOOL_NAME} by Doxygen.",
        "",
    ]
    text = yaml.safe_dump(
        front_matter,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=1000,
    )
    lines.extend(text.rstrip("\n").split("\n"))
    lines.extend(["", "---", ""])
    return lines


def render_page(
    front_matter: dict[str, Any],
    body_lines: list[str],
    *,
    page_url: str | None = None,
    doxygen_version: str = "",
) -> str:
    """Return the full text of a page.

    Links to anchors of the page itself are shortened to `#anchor`.
    """
    lines = render_front_matter(front_matter)
    lines.append('<div class="doxyPage">')
    lines.append("")
    lines.extend(body_lines)
    lines.append("")
    lines.append("<hr/>")
    lines.append("")
    footer = f"Generated via {TOOL_NAME} {TOOL_VERSION} by Doxygen"
    if doxygen_version:
        footer += f" {doxygen_version}"
    lines.append(f'<p class="doxyGeneratedBy">{footer}.</p>')
    lines.append("")
    lines.append("</div>")
    lines.append("")

    text = "\n".join(lines)
    if page_url:
        text = text.replace(f'"{page_url}/#', '"#')
    return text
