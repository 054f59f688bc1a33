"""Logic for writing HTML redirect stubs at the legacy Doxygen URLs."""

import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from doxy2md.classes import Class

if TYPE_CHECKING:
    from doxy2md.workspace import Workspace

logger = logging.getLogger(__name__)

# Doxygen index page -> permalink of the page that replaces it.
INDEX_REDIRECTS = {
    "classes.html": "indices/classes",
    "files.html": "indices/files",
    "index.html": "",
    "namespaces.html": "indices/namespaces",
    "pages.html": "",
    "topics.html": "indices/groups",
}


class StubGenerator:
    """Writes one small HTML page per legacy URL."""

    def __init__(self, base_output_dir: str | Path) -> None:
        self.base_dir = Path(base_output_dir)

    def generate_stub(self, old_path_str: str, new_url: str) -> str | None:
        """
        Generates an HTML stub at old_path_str redirecting to new_url.
        Returns the content if generated, or None if skipped.
        """
        old_path = self.base_dir / old_path_str

        # Stubs must stay inside the output folder.
        try:
            target = old_path.resolve()
            target.relative_to(self.base_dir.resolve())
        except (ValueError, RuntimeError):
            logger.warning("Redirect %s outside %s refused", old_path_str, self.base_dir)
            return None

        if old_path.exists():
            return None  # Never overwrite existing files

        content = self._create_stub_content(new_url)
        old_path.parent.mkdir(parents=True, exist_ok=True)
        with open(old_path, "w", encoding="utf-8") as f:
            f.write(content)
        return content

    def _create_stub_content(self, new_url: str) -> str:
        """Return the HTML of one redirect page."""
        return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta http-equiv="refresh" content="0; url={new_url}">
<link rel="canonical" href="{new_url}">
<script>window.location.replace("{new_url}" + window.location.hash);</script>
<title>Page moved</title>
</head>
<body>
<p>This page has moved to <a href="{new_url}">{new_url}</a>.</p>
</body>
</html>
"""


def generate_compatibility_redirects(workspace: "Workspace") -> int:
    """Write the redirect stubs; returns the number of files written."""
    folder = workspace.options.get("compatibility_redirects_output_folder_path")
    if not folder:
        return 0

    base_dir = Path(folder)
    if base_dir.exists():
        logger.info("Removing existing folder %s", base_dir)
        shutil.rmtree(base_dir)
    base_dir.mkdir(parents=True)

    stub_gen = StubGenerator(base_dir)
    page_base_url = workspace.urls.absolute_base_url
    redirects: dict[str, str] = {}

    for compound in workspace.context.compounds_by_id.values():
        if not compound.has_page():
            continue
        new_url = f"{page_base_url}{compound.relative_permalink}/"
        redirects[f"{compound.id}.html"] = new_url
        if compound.kind == "file":
            redirects[f"{compound.id}_source.html"] = new_url
        elif isinstance(compound, Class) and compound.kind in ("class", "struct"):
            redirects[f"{compound.id}-members.html"] = new_url

    for file_name, permalink in INDEX_REDIRECTS.items():
        redirects[file_name] = (
            f"{page_base_url}{permalink}/" if permalink else page_base_url
        )

    print(f"Writing {len(redirects)} redirect files...")
    written = 0
    for file_name, new_url in sorted(redirects.items()):
        if stub_gen.generate_stub(file_name, new_url) is not None:
            written += 1
    return written
