"""Output side of a conversion: site URLs, page writing and tree tables."""

import logging
import shutil
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from doxy2md.description_model import DocNode
from doxy2md.description_renderer import DescriptionRenderer
from doxy2md.errors import DataIntegrityError
from doxy2md.front_matter import render_page

if TYPE_CHECKING:
    from doxy2md.compound_base import CompoundBase
    from doxy2md.resolution_context import ResolutionContext

logger = logging.getLogger(__name__)


def _strip_slashes(path: str) -> str:
    """Strip leading and trailing slashes."""
    return path.strip("/")


@dataclass(frozen=True)
class SiteUrls:
    """URL prefixes derived from the site configuration.

    `page_base_url` is used in links, `slug_base_url` in front matter slugs
    (relative to the docs plugin) and `menu_base_url` in navbar entries.
    """

    page_base_url: str
    absolute_base_url: str
    slug_base_url: str
    menu_base_url: str

    @classmethod
    def from_options(cls, options: dict[str, Any]) -> "SiteUrls":
        """Derive the URL prefixes from the site options."""
        base_url = options.get("base_url") or "/"
        if not base_url.endswith("/"):
            base_url += "/"
        docs_base_url = _strip_slashes(options.get("docs_base_url", "docs"))
        api_base_url = _strip_slashes(options.get("api_base_url", "api"))
        if api_base_url:
            api_base_url += "/"

        page_base_url = f"{base_url}{docs_base_url}/{api_base_url}"
        return cls(
            page_base_url=page_base_url,
            absolute_base_url=page_base_url,
            slug_base_url=f"/{api_base_url}",
            menu_base_url=f"/{docs_base_url}/{api_base_url}",
        )


class Workspace:
    """Writes pages below `<docs_folder>/<api_folder>/`.

    Pages are rendered by the caller and handed over as lines; the file
    writes run on a thread pool unless debugging.
    """

    def __init__(
        self,
        options: dict[str, Any],
        context: "ResolutionContext",
        *,
        project_brief: str = "",
        doxygen_version: str = "",
    ) -> None:
        self.options = options
        self.context = context
        self.project_brief = project_brief
        self.doxygen_version = doxygen_version
        self.urls = SiteUrls.from_options(options)

        api_folder = _strip_slashes(options.get("api_folder_path", "api"))
        self.output_folder_path = Path(options.get("docs_folder_path", "docs")) / api_folder
        self.sidebar_base_id = f"{api_folder}/"

        # Collection name -> per-initial index kinds written.
        self.indices_maps: dict[str, set[str]] = {}
        self.written_files_count = 0

        self._executor: ThreadPoolExecutor | None = None
        if not options.get("debug"):
            self._executor = ThreadPoolExecutor(
                max_workers=int(options.get("max_parallel_writes", 42))
            )
        self._futures: list[Future] = []

    def __enter__(self) -> "Workspace":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True, cancel_futures=exc_type is not None)

    def prepare_output_folder(self) -> None:
        """Remove the previous output and recreate the folder."""
        if self.output_folder_path.exists():
            logger.info("Removing existing folder %s", self.output_folder_path)
            shutil.rmtree(self.output_folder_path)
        self.output_folder_path.mkdir(parents=True)

    def description_renderer(
        self, current_compound_id: str | None = None
    ) -> DescriptionRenderer:
        """Return a description renderer bound to a page."""
        return DescriptionRenderer(self.context, current_compound_id)

    def write_md_file(
        self,
        relative_path: str,
        front_matter: dict[str, Any],
        body_lines: list[str],
        *,
        page_url: str | None = None,
    ) -> None:
        """Render a page and schedule it for writing."""
        keywords = list(front_matter.get("keywords", []))
        for keyword in self.options.get("keywords", []):
            if keyword not in keywords:
                keywords.append(keyword)
        if keywords:
            front_matter = {**front_matter, "keywords": keywords}

        text = render_page(
            front_matter,
            body_lines,
            page_url=page_url,
            doxygen_version=self.doxygen_version,
        )
        file_path = self.output_folder_path / relative_path
        self.written_files_count += 1
        if self._executor is None:
            _write_new_file(file_path, text)
        else:
            self._futures.append(self._executor.submit(_write_new_file, file_path, text))

    def wait_for_writes(self) -> None:
        """Block until scheduled writes finish; the first failure is raised."""
        futures, self._futures = self._futures, []
        for future in futures:
            future.result()

    def render_tree_table(self, content_lines: list[str]) -> list[str]:
        """Wrap tree rows in the tree table markup."""
        lines = ["", '<table class="doxyTreeTable">']
        lines.extend(content_lines)
        lines.append("")
        lines.append("</table>")
        return lines

    def render_tree_table_row(
        self,
        *,
        label: str,
        link: str,
        depth: int,
        description: str = "",
        icon_letter: str | None = None,
        icon_class: str | None = None,
    ) -> list[str]:
        """Return the rows of one tree table entry."""
        lines = ['<tr class="doxyTreeItem">']
        lines.append('<td class="doxyTreeItemLeft" align="left" valign="top">')
        lines.append(f'<span style="width: {depth * 12}px; display: inline-block;"></span>')
        if icon_letter:
            lines.append(
                '<span class="doxyTreeIconBox">'
                f'<span class="doxyTreeIcon">{icon_letter}</span></span>'
            )
        if icon_class:
            lines.append(f'<a href="{link}"><span class="{icon_class}">{label}</span></a>')
        else:
            lines.append(f'<a href="{link}">{label}</a>')
        lines.append("</td>")
        lines.append('<td class="doxyTreeItemRight" align="left" valign="top">')
        if description:
            lines.append(description)
        lines.append("</td></tr>")
        return lines

    def render_brief_for_index(self, compound: "CompoundBase") -> str:
        """Render a brief description for a table cell, without the final period."""
        return self.render_brief_text(compound.brief_description).removesuffix(".")

    def render_brief_text(self, brief: DocNode | None) -> str:
        """Render a brief description as inline text."""
        return self.description_renderer().render(brief)


def _write_new_file(file_path: Path, text: str) -> None:
    """Create a file, failing when it already exists."""
    file_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with open(file_path, "x", encoding="utf-8") as f:
            f.write(text)
    except FileExistsError as e:
        msg = f"Page {file_path} written twice, permalinks collide"
        raise DataIntegrityError(msg) from e
