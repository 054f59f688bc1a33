"""Logic for rendering the body of compound pages.

A page is assembled from the same blocks for every kind (brief, indices,
detailed description, member sections, locations); the kind only selects
which blocks appear and in which order.
"""

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from doxy2md.classes import KINDS_PLURALS, Class
from doxy2md.compound_base import CompoundBase
from doxy2md.description_model import DocNode, is_empty_description
from doxy2md.description_renderer import DescriptionRenderer, escape_html
from doxy2md.files_and_folders import File, Folder
from doxy2md.groups import Group
from doxy2md.location_model import LocationDataModel
from doxy2md.members import EnumValue, Member, MemberRef, Section
from doxy2md.namespaces import Namespace
from doxy2md.pages import Page
from doxy2md.param_models import ParamDataModel, TemplateParamListDataModel
from doxy2md.permalinks import join_with_last
from doxy2md.reference_models import (
    CompoundRefDataModel,
    ReferenceDataModel,
    ReimplementDataModel,
)

if TYPE_CHECKING:
    from doxy2md.workspace import Workspace

logger = logging.getLogger(__name__)

INNER_INDEX_HEADERS = {
    "inner_groups": "Topics",
    "inner_namespaces": "Namespaces",
    "inner_classes": "Classes",
    "inner_dirs": "Folders",
    "inner_files": "Files",
    "inner_pages": "Pages",
}

# Sections whose members are printed with `()` in the heading.
FUNCTION_SECTION_KINDS = frozenset({"function", "slot", "signal", "event"})

# Initializers longer than this are not shown in member indices.
MAX_INDEX_INITIALIZER_LENGTH = 40


def render_template_parameters(
    template_param_list: TemplateParamListDataModel | None,
    renderer: DescriptionRenderer,
    *,
    with_defaults: bool = True,
) -> str:
    """Render a `template <...>` line."""
    if template_param_list is None or not template_param_list.params:
        return ""
    parameters = []
    for param in template_param_list.params:
        parameters.append(_render_param(param, renderer, with_defaults=with_defaults))
    return f"template &lt;{', '.join(parameters)}&gt;"


def _render_param(
    param: ParamDataModel, renderer: DescriptionRenderer, *, with_defaults: bool
) -> str:
    text = renderer.render_linked_text(param.type)
    name = param.declname or param.defname
    if name:
        text = f"{text} {escape_html(name)}" if text else escape_html(name)
    if param.array:
        text += escape_html(param.array)
    if with_defaults and param.defval is not None:
        text += f" = {renderer.render_linked_text(param.defval)}"
    return text


class PageRenderer:
    """Renders the page of one compound."""

    def __init__(self, workspace: "Workspace", compound: CompoundBase) -> None:
        self.workspace = workspace
        self.compound = compound
        self.context = workspace.context
        self.options = workspace.options
        self.renderer = workspace.description_renderer(compound.id)

    @property
    def page_url(self) -> str:
        """Return the absolute URL of the page."""
        return f"{self.workspace.urls.page_base_url}{self.compound.relative_permalink}"

    def write(self) -> None:
        """Render the page and hand it to the workspace."""
        compound = self.compound
        self.workspace.write_md_file(
            f"{compound.sidebar_id}.md",
            self.front_matter(),
            self.render_lines(),
            page_url=self.page_url,
        )

    def front_matter(self) -> dict[str, Any]:
        """Return the front matter of the page."""
        compound = self.compound
        front_matter: dict[str, Any] = {
            "title": compound.page_title,
            "slug": f"{self.workspace.urls.slug_base_url}{compound.relative_permalink}",
        }
        if compound.brief_description is not None:
            description = " ".join(compound.brief_description.text_content().split())
            if description:
                front_matter["description"] = description
        front_matter["custom_edit_url"] = None
        front_matter["toc_max_heading_level"] = 4
        front_matter["keywords"] = ["doxygen", "reference", compound.kind]
        return front_matter

    def render_lines(self) -> list[str]:
        """Return the body lines, selected by compound kind."""
        compound = self.compound
        if isinstance(compound, Class):
            return self._class_lines(compound)
        if isinstance(compound, Namespace):
            return self._namespace_lines(compound)
        if isinstance(compound, Folder):
            return self._folder_lines(compound)
        if isinstance(compound, File):
            return self._file_lines(compound)
        if isinstance(compound, Group):
            return self._group_lines(compound)
        if isinstance(compound, Page):
            return self._page_lines(compound)
        logger.error("%s pages not rendered yet", compound.kind)
        return []

    # Per kind bodies.

    def _class_lines(self, classs: Class) -> list[str]:
        """Return the body of a class page."""
        todo = f"@{classs.kind} {escape_html(classs.compound_name)}"
        lines = self.render_brief_lines(todo=todo)

        if classs.template_parameter_list is not None:
            lines.append("")
            lines.append("## Declaration")
            lines.append("")
            lines.append(
                "<div class=\"doxyDeclaration\">"
                + render_template_parameters(
                    classs.template_parameter_list, self.renderer
                )
                + f"<br/>{classs.kind} {escape_html(classs.class_full_name)};</div>"
            )

        lines.extend(self.render_includes_lines())
        lines.extend(self._base_classes_lines(classs))
        lines.extend(self._derived_classes_lines(classs))
        lines.extend(self.render_inner_indices_lines(["inner_classes"]))
        lines.extend(self.render_sections_index_lines())
        lines.extend(self.render_detailed_description_lines(todo=todo))
        lines.extend(self.render_sections_lines())
        lines.extend(self.render_generated_from_lines())
        return lines

    def _base_classes_lines(self, classs: Class) -> list[str]:
        """Return the base class table."""
        refs = classs.compound_def.base_compound_refs
        if not refs:
            return []
        if len(refs) > 1:
            header = f"## Base {KINDS_PLURALS.get(classs.kind, 'Classes').lower()}"
        else:
            header = f"## Base {classs.kind}"
        return self._compound_refs_lines(header, refs)

    def _derived_classes_lines(self, classs: Class) -> list[str]:
        """Return the derived class table."""
        refs = classs.compound_def.derived_compound_refs
        if not refs:
            return []
        header = f"## Derived {KINDS_PLURALS.get(classs.kind, 'Classes')}"
        return self._compound_refs_lines(header, refs)

    def _compound_refs_lines(
        self, header: str, refs: list[CompoundRefDataModel]
    ) -> list[str]:
        """Return a table of linked base or derived classes."""
        lines = ["", header, "", '<table class="doxyMembersIndex">']
        for ref in refs:
            name = escape_html(ref.text)
            brief = ""
            permalink = None
            if ref.refid is not None:
                permalink = self.renderer.permalink(ref.refid, "compound")
                target = self.context.compounds_by_id.get(ref.refid)
                if target is not None:
                    brief = self.workspace.render_brief_for_index(target)
            if permalink:
                name = f'<a href="{permalink}">{name}</a>'
            item_type = ref.virt if ref.virt == "virtual" else ""
            item_type = " ".join(
                part for part in (ref.prot or "", item_type) if part
            )
            lines.extend(self.render_members_index_item(item_type, name, brief))
        lines.append("")
        lines.append("</table>")
        return lines

    def _namespace_lines(self, namespace: Namespace) -> list[str]:
        """Return the body of a namespace page."""
        todo = f"@namespace {escape_html(namespace.compound_name)}"
        lines = self.render_brief_lines(todo=todo)
        lines.extend(
            self.render_inner_indices_lines(["inner_namespaces", "inner_classes"])
        )
        lines.extend(self.render_sections_index_lines())
        lines.extend(self.render_detailed_description_lines(todo=todo))
        lines.extend(self.render_sections_lines())
        return lines

    def _folder_lines(self, folder: Folder) -> list[str]:
        """Return the body of a folder page."""
        todo = f"@dir {escape_html(folder.relative_path)}"
        lines = self.render_brief_lines(todo=todo)
        lines.extend(self.render_inner_indices_lines(["inner_dirs", "inner_files"]))
        lines.extend(self.render_detailed_description_lines(todo=todo))
        return lines

    def _file_lines(self, file: File) -> list[str]:
        """Return the body of a file page."""
        todo = f"@file {escape_html(file.relative_path)}"
        lines = self.render_brief_lines(todo=todo)
        lines.extend(self.render_includes_lines())
        lines.extend(
            self.render_inner_indices_lines(["inner_namespaces", "inner_classes"])
        )
        lines.extend(self.render_sections_index_lines())
        lines.extend(self.render_detailed_description_lines(todo=todo))
        lines.extend(self.render_sections_lines())

        if file.program_listing is not None and file.listing_line_numbers:
            lines.append("")
            lines.append("## File Listing")
            lines.append("")
            lines.append(
                "The file content with the documentation metadata removed is:"
            )
            lines.append(
                self.renderer.render_program_listing(
                    file.program_listing, show_anchors=True
                )
            )
        return lines

    def _group_lines(self, group: Group) -> list[str]:
        """Return the body of a topic page."""
        todo = f"@defgroup {escape_html(group.compound_name)}"
        lines = self.render_brief_lines(todo=todo)
        lines.extend(
            self.render_inner_indices_lines(
                [
                    "inner_groups",
                    "inner_namespaces",
                    "inner_classes",
                    "inner_files",
                    "inner_pages",
                ]
            )
        )
        lines.extend(self.render_sections_index_lines())
        lines.extend(self.render_detailed_description_lines(todo=todo))
        lines.extend(self.render_sections_lines())
        return lines

    def _page_lines(self, page: Page) -> list[str]:
        """Return the body of a regular page."""
        lines = self.render_detailed_description_lines(
            show_header=False, show_brief=not page.has_sect1_in_description()
        )
        lines.extend(self.render_inner_indices_lines(["inner_pages"]))
        return lines

    # Descriptions.

    def render_brief_lines(self, *, todo: str = "", more_link: bool = True) -> list[str]:
        """Return the brief paragraph, with a link to the details."""
        brief = self.renderer.render(self.compound.brief_description)
        if brief:
            text = brief
            if more_link and not is_empty_description(
                self.compound.detailed_description
            ):
                text += ' <a href="#details">More...</a>'
            return ["", f"<p>{text}</p>"]
        if todo and self.options.get("suggest_todo_descriptions"):
            return ["", f"TODO: add <code>@brief</code> to <code>{todo}</code>"]
        return []

    def render_detailed_description_lines(
        self,
        *,
        todo: str = "",
        show_header: bool = True,
        show_brief: bool = False,
    ) -> list[str]:
        """Return the detailed description, under a Description header."""
        compound = self.compound
        detailed = self.renderer.render(compound.detailed_description)
        brief = self.renderer.render(compound.brief_description) if show_brief else ""

        lines: list[str] = []
        if not detailed and not brief:
            if todo and self.options.get("suggest_todo_descriptions"):
                lines.append("")
                lines.append("## Description {#details}")
                lines.append("")
                lines.append(f"TODO: add <code>@details</code> to <code>{todo}</code>")
            return lines

        if show_header:
            lines.append("")
            lines.append("## Description {#details}")
        if brief:
            lines.append("")
            lines.append(brief)
        if detailed:
            lines.append("")
            lines.append(detailed)
        return lines

    # Indices.

    def render_inner_indices_lines(self, attribute_names: list[str]) -> list[str]:
        """Return the index tables of inner namespaces, classes, files..."""
        lines: list[str] = []
        for attribute_name in attribute_names:
            refs = self.compound.inner_compounds.get(attribute_name)
            if not refs:
                continue
            rows: list[str] = []
            for ref in refs:
                inner = self.context.compounds_by_id.get(ref.refid)
                if inner is None:
                    logger.debug("%s not in the inner indices of %s", ref.refid, self.compound.id)
                    continue
                permalink = self.renderer.permalink(inner.id, "compound")
                if not permalink:
                    continue
                name = f'<a href="{permalink}">{escape_html(inner.index_name)}</a>'
                if inner.kind == "dir":
                    item_type = "folder"
                elif inner.kind in ("group", "page"):
                    item_type = "&nbsp;"
                else:
                    item_type = inner.kind
                rows.extend(
                    self.render_members_index_item(
                        item_type, name, self.workspace.render_brief_for_index(inner)
                    )
                )
            if not rows:
                continue
            lines.append("")
            lines.append(f"## {INNER_INDEX_HEADERS[attribute_name]} Index")
            lines.append("")
            lines.append('<table class="doxyMembersIndex">')
            lines.extend(rows)
            lines.append("")
            lines.append("</table>")
        return lines

    def render_members_index_item(
        self,
        item_type: str,
        name: str,
        brief: str = "",
        template: str = "",
    ) -> list[str]:
        """Return the two rows of one member index entry."""
        lines = [""]
        if template:
            lines.append('<tr class="doxyMemberIndexTemplate">')
            lines.append(
                f'<td class="doxyMemberIndexTemplate" colspan="2">{template}</td>'
            )
            lines.append("</tr>")
        lines.append('<tr class="doxyMemberIndexItem">')
        lines.append(
            f'<td class="doxyMemberIndexItemType" align="left" valign="top">{item_type}</td>'
        )
        lines.append(
            f'<td class="doxyMemberIndexItemName" align="left" valign="top">{name}</td>'
        )
        lines.append("</tr>")
        if brief:
            lines.append('<tr class="doxyMemberIndexDescription">')
            lines.append('<td class="doxyMemberIndexDescriptionLeft"></td>')
            lines.append(f'<td class="doxyMemberIndexDescriptionRight">{brief}</td>')
            lines.append("</tr>")
        return lines

    def render_sections_index_lines(self) -> list[str]:
        """Return one index table per section."""
        lines: list[str] = []
        for section in self.compound.sections:
            rows: list[str] = []
            for index_member in section.index_members:
                if isinstance(index_member, MemberRef):
                    member = self.context.find_member(index_member.refid)
                    if member is None:
                        logger.debug("Member %s not defined anywhere", index_member.refid)
                        continue
                else:
                    member = index_member
                rows.extend(self.render_member_index_item(member))
            if not rows:
                continue
            lines.append("")
            lines.append(f"## {section.header_name} Index")
            lines.append("")
            lines.append('<table class="doxyMembersIndex">')
            lines.extend(rows)
            lines.append("")
            lines.append("</table>")
        return lines

    def render_member_index_item(self, member: Member) -> list[str]:
        """Return the index rows of one member."""
        member_def = member.member_def
        permalink = self.renderer.permalink(member.id, "member")
        name = escape_html(member.name)
        if permalink:
            name = f'<a href="{permalink}">{name}</a>'
        rendered_type = self.renderer.render_linked_text(member_def.type)
        argsstring = escape_html(member.argsstring or "")

        if member.kind == "typedef":
            if (member.definition or "").startswith("typedef"):
                item_type = "typedef"
                item_name = f"{rendered_type} {name}{argsstring}"
            else:
                item_type = "using"
                item_name = f"{name} = {rendered_type}"
        elif member.kind in ("function", "signal", "slot"):
            item_type = self._storage_prefix(member) + rendered_type
            item_name = f"{name} {argsstring}".rstrip()
        elif member.kind in ("variable", "property"):
            item_type = self._storage_prefix(member) + rendered_type
            item_name = f"{name}{argsstring}"
            initializer = self.renderer.render_linked_text(member_def.initializer)
            if initializer and len(initializer) < MAX_INDEX_INITIALIZER_LENGTH:
                item_name += f" {initializer}"
        elif member.kind == "enum":
            item_type = "enum class" if member_def.flag("strong") else "enum"
            item_name = f"{name} &#123; ... &#125;".lstrip()
        elif member.kind == "define":
            item_type = "#define"
            if member_def.params:
                params = ", ".join(
                    escape_html(param.defname or param.declname or "")
                    for param in member_def.params
                )
                item_name = f"{name}({params})"
            else:
                item_name = name
        elif member.kind == "friend":
            item_type = rendered_type or "friend"
            item_name = f"{name}{argsstring}"
        else:
            item_type = member.kind
            item_name = name

        brief = self.renderer.render(member_def.brief_description).removesuffix(".")
        template = render_template_parameters(
            member_def.template_param_list, self.renderer, with_defaults=False
        )
        return self.render_members_index_item(
            item_type or "&nbsp;", item_name, brief, template
        )

    def _storage_prefix(self, member: Member) -> str:
        """Return the `static` / `constexpr` prefix of a member type."""
        prefix = ""
        if member.is_static:
            prefix += "static "
        if member.member_def.flag("constexpr"):
            prefix += "constexpr "
        return prefix

    # Member definitions.

    def render_sections_lines(self) -> list[str]:
        """Return the member definitions, section by section."""
        lines: list[str] = []
        for section in self.compound.sections:
            if not section.has_definition_members():
                continue
            lines.append("")
            lines.append('<div class="doxySectionDef">')
            lines.append("")
            lines.append(f"## {section.header_name}")
            description = self.renderer.render(section.description)
            if description:
                lines.append("")
                lines.append(description)
            for member in section.definition_members:
                lines.extend(self.render_member_lines(section, member))
            lines.append("")
            lines.append("</div>")
        return lines

    def render_member_lines(self, section: Section, member: Member) -> list[str]:
        """Return the heading and definition block of one member."""
        member_def = member.member_def
        heading_name = escape_html(member.name) if member.name else "anonymous"
        if section.kind in FUNCTION_SECTION_KINDS or member.kind == "function":
            heading_name += "()"
        lines = ["", f"### {heading_name} {{#{member.anchor}}}", ""]

        children: list[str] = []
        brief = self.renderer.render(member_def.brief_description)
        if brief:
            children.append(brief)
        if member.enum_values:
            children.extend(self.render_enum_values_lines(member.enum_values))
        detailed = self.renderer.render(member_def.detailed_description)
        if detailed:
            children.append(detailed)
        inbody = self.renderer.render(member_def.inbody_description)
        if inbody:
            children.append(inbody)
        children.extend(self.render_reimplements_lines(member))
        children.extend(self.render_references_lines(member))
        location = self.render_location_text(member_def.location, member.kind)
        if location:
            children.append(location)
        children.extend(self.render_inline_listing_lines(member_def.location))

        template = render_template_parameters(
            member_def.template_param_list, self.renderer
        )
        lines.extend(
            self.render_member_definition_lines(
                template=template,
                prototype=self.render_prototype(member),
                labels=member.labels,
                children_lines=children,
            )
        )
        return lines

    def render_prototype(self, member: Member) -> str:
        """Return the full prototype of a member."""
        member_def = member.member_def
        if member.kind == "enum":
            prototype = "enum class" if member_def.flag("strong") else "enum"
            if member.qualified_name:
                prototype += f" {escape_html(member.qualified_name)}"
            if member_def.type is not None and member_def.type.plain_text():
                prototype += f" : {self.renderer.render_linked_text(member_def.type)}"
            return prototype
        if member.kind == "define":
            prototype = f"#define {escape_html(member.name)}"
            if member_def.params:
                params = ", ".join(
                    escape_html(param.defname or param.declname or "")
                    for param in member_def.params
                )
                prototype += f"({params})"
            initializer = self.renderer.render_linked_text(member_def.initializer)
            if initializer and "\n" not in initializer:
                prototype += f"&nbsp;&nbsp;&nbsp;{initializer}"
            return prototype
        if member.kind == "friend":
            return (
                f"friend {self.renderer.render_linked_text(member_def.type)} "
                f"{escape_html(member.name)}{escape_html(member.argsstring or '')}"
            )

        definition = member.definition or escape_html(member.name)
        if member.is_static:
            definition = definition.removeprefix("static ")
        prototype = escape_html(definition)
        if member.argsstring:
            prototype += f" {escape_html(member.argsstring)}"
        if member.kind in ("variable", "property"):
            initializer = self.renderer.render_linked_text(member_def.initializer)
            if initializer and "\n" not in initializer:
                prototype += f" {initializer}"
        return prototype

    def render_member_definition_lines(
        self,
        *,
        template: str,
        prototype: str,
        labels: list[str],
        children_lines: list[str],
    ) -> list[str]:
        """Return the definition table, labels and description of a member."""
        lines = ['<div class="doxyMemberItem">', '<div class="doxyMemberProto">']
        if template:
            lines.append(f'<div class="doxyMemberTemplate">{template}</div>')
        lines.append(
            '<table class="doxyMemberLabels"><tr class="doxyMemberLabels">'
            '<td class="doxyMemberLabelsLeft"><table class="doxyMemberName"><tr>'
            f'<td class="doxyMemberName">{prototype}</td></tr></table></td>'
        )
        if labels:
            spans = "".join(
                f'<span class="doxyMemberLabel {label}">{label}</span>'
                for label in labels
            )
            lines.append(
                '<td class="doxyMemberLabelsRight">'
                f'<span class="doxyMemberLabels">{spans}</span></td>'
            )
        lines.append("</tr></table>")
        lines.append("</div>")
        lines.append('<div class="doxyMemberDoc">')
        for child in children_lines:
            lines.append("")
            lines.append(child)
        lines.append("")
        lines.append("</div>")
        lines.append("</div>")
        return lines

    def render_enum_values_lines(self, enum_values: list[EnumValue]) -> list[str]:
        """Return the enumeration values table."""
        lines = [
            '<dl class="doxyEnumList">',
            '<dt class="doxyEnumTableTitle">Enumeration values</dt>',
            "<dd>",
            '<table class="doxyEnumTable">',
        ]
        for enum_value in enum_values:
            description = self.renderer.render(
                enum_value.brief_description
            ).removesuffix(".")
            initializer = self.renderer.render_linked_text(enum_value.initializer)
            if initializer:
                initializer = initializer.lstrip("= ").strip()
                description += f" ({initializer})" if description else f"({initializer})"
            lines.append('<tr class="doxyEnumItem">')
            lines.append(
                f'<td class="doxyEnumItemName">{escape_html(enum_value.name)}'
                f'<a id="{enum_value.anchor}"></a></td>'
            )
            lines.append(f'<td class="doxyEnumItemDescription">{description}</td>')
            lines.append("</tr>")
        lines.append("</table>")
        lines.append("</dd>")
        lines.append("</dl>")
        return ["\n".join(lines)]

    def render_reimplements_lines(self, member: Member) -> list[str]:
        """Return the reimplements / reimplemented by lines."""
        lines: list[str] = []
        member_def = member.member_def
        if member_def.reimplements:
            links = self._reference_links(member_def.reimplements)
            lines.append(f"Reimplements {join_with_last(links, ', ', ' and ')}.")
        if member_def.reimplemented_by:
            links = self._reference_links(member_def.reimplemented_by)
            lines.append(f"Reimplemented by {join_with_last(links, ', ', ' and ')}.")
        return lines

    def render_references_lines(self, member: Member) -> list[str]:
        """Return the call graph reference lines."""
        lines: list[str] = []
        member_def = member.member_def
        if member_def.references:
            links = self._reference_links(member_def.references)
            lines.append(f"References {join_with_last(links, ', ', ' and ')}.")
        if member_def.referenced_by:
            links = self._reference_links(member_def.referenced_by)
            lines.append(f"Referenced by {join_with_last(links, ', ', ' and ')}.")
        return lines

    def _reference_links(
        self, references: Sequence[ReferenceDataModel | ReimplementDataModel]
    ) -> list[str]:
        """Return the linked names of referenced or reimplemented members."""
        links = []
        for reference in references:
            text = escape_html(reference.text)
            permalink = self.renderer.permalink(reference.refid, "member")
            links.append(f'<a href="{permalink}">{text}</a>' if permalink else text)
        return links

    # Locations.

    def _file_line_link(self, file_path: str, line: int | None) -> tuple[str, str]:
        """Return the rendered file and line, linked when the file has a page."""
        file_text = escape_html(file_path)
        line_text = str(line) if line is not None else ""
        file = self.context.find_file(file_path)
        if file is None or not file.has_page():
            return file_text, line_text
        permalink = self.renderer.permalink(file.id, "compound")
        if not permalink:
            return file_text, line_text
        file_text = f'<a href="{permalink}">{file_text}</a>'
        if (
            line is not None
            and isinstance(file, File)
            and line in file.listing_line_numbers
        ):
            line_text = f'<a href="{permalink}/#l{line:05d}">{line}</a>'
        return file_text, line_text

    def render_location_text(
        self, location: LocationDataModel | None, kind: str = ""
    ) -> str:
        """Return the `Definition at line ...` text of a location."""
        if location is None or location.file is None:
            return ""
        file_text, line_text = self._file_line_link(location.file, location.line)

        if location.bodyfile and location.bodystart is not None:
            if location.bodyfile == location.file and (
                location.line is None or location.bodystart == location.line
            ):
                body_file, body_line = self._file_line_link(
                    location.bodyfile, location.bodystart
                )
                return f"Definition at line {body_line} of file {body_file}."
            body_file, body_line = self._file_line_link(
                location.bodyfile, location.bodystart
            )
            if kind == "function" or location.line is not None:
                return (
                    f"Declaration at line {line_text} of file {file_text}, "
                    f"definition at line {body_line} of file {body_file}."
                )
        if line_text:
            return f"Definition at line {line_text} of file {file_text}."
        return f"Definition in file {file_text}."

    def render_inline_listing_lines(
        self, location: LocationDataModel | None
    ) -> list[str]:
        """Render the body lines of a member out of its file listing."""
        if not self.options.get("render_program_listing_inline", True):
            return []
        if (
            location is None
            or location.bodyfile is None
            or location.bodystart is None
            or location.bodyend is None
            or location.bodyend < location.bodystart
        ):
            return []
        file = self.context.find_file(location.bodyfile)
        if not isinstance(file, File) or file.program_listing is None:
            return []

        codelines = [
            codeline
            for codeline in file.program_listing.child_nodes()
            if codeline.get("lineno") is not None
            and location.bodystart <= int(codeline.get("lineno")) <= location.bodyend
        ]
        if not codelines:
            return []
        listing = DocNode(
            kind=file.program_listing.kind,
            element_name=file.program_listing.element_name,
            attributes=dict(file.program_listing.attributes),
            children=codelines,
        )
        return [self.renderer.render_program_listing(listing, show_anchors=False)]

    def render_generated_from_lines(self) -> list[str]:
        """Return the list of files the page was generated from."""
        location_set = sorted(self.compound.location_set)
        if not location_set:
            return []
        plural = "s" if len(location_set) > 1 else ""
        lines = [
            "",
            "<hr/>",
            "",
            f"The documentation for this {self.compound.kind} was generated "
            f"from the following file{plural}:",
            "",
            "<ul>",
        ]
        for file_path in location_set:
            file_text, _ = self._file_line_link(file_path, None)
            lines.append(f"<li>{file_text}</li>")
        lines.append("</ul>")
        return lines

    def render_includes_lines(self) -> list[str]:
        """Return the `#include` lines of a class."""
        includes = self.compound.includes
        if not includes:
            return []
        lines = ["", "## Included Headers", "", '<div class="doxyIncludesList">']
        for include in includes:
            if include.local:
                text = f"&quot;{escape_html(include.text)}&quot;"
            else:
                text = f"&lt;{escape_html(include.text)}&gt;"
            permalink = None
            if include.refid is not None:
                permalink = self.renderer.permalink(include.refid, "compound")
            if permalink:
                text = f'<a href="{permalink}">{text}</a>'
            lines.append(
                f'<div class="doxyIncludesItem">#include {text}</div>'
            )
        lines.append("</div>")
        return lines


def render_main_page_lines(workspace: "Workspace") -> list[str]:
    """Render the body of the top `index.md` page."""
    context = workspace.context
    lines: list[str] = []
    brief = escape_html(workspace.project_brief)

    groups = context.collection("groups")
    topics_lines = groups.render_topics_lines(workspace)
    if topics_lines:
        lines.append("")
        if brief:
            lines.append(f"The {brief} topics with brief descriptions are:")
        else:
            lines.append("The topics with brief descriptions are:")
        lines.extend(workspace.render_tree_table(topics_lines))

    main_page = context.main_page
    if main_page is not None:
        renderer = PageRenderer(workspace, main_page)
        lines.extend(
            renderer.render_detailed_description_lines(
                show_header=False,
                show_brief=not main_page.has_sect1_in_description(),
            )
        )

    note = workspace.options.get("original_pages_note", "")
    if note:
        lines.append("")
        lines.append(":::note")
        lines.append(note)
        lines.append(":::")
    return lines
