"""Renders DocNode trees and linked text to Markdown with inline HTML.

Rendering is dispatched on `DocKind` through `DescriptionRenderer.RENDERERS`,
the counterpart of the parsing table in `description_model`.
"""

import logging
from typing import TYPE_CHECKING

from doxy2md.description_model import DocContent, DocKind, DocNode
from doxy2md.linked_text_model import LinkedTextDataModel
from doxy2md.permalinks import get_permalink_anchor

if TYPE_CHECKING:
    from doxy2md.resolution_context import ResolutionContext

logger = logging.getLogger(__name__)

# Braces are escaped too, since Docusaurus parses .md pages as MDX.
_HTML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
        "{": "&#123;",
        "}": "&#125;",
    }
)


def escape_html(text: str) -> str:
    """Escape text for HTML, including the braces MDX would evaluate."""
    return text.translate(_HTML_ESCAPES)


def md_codeblock(lang: str, code: str) -> str:
    """Generate a Markdown code block."""
    return f"""```{lang}
{code.rstrip()}
```"""


# Translated like Doxygen's English output.
SIMPLE_SECT_TITLES = {
    "see": "See Also",
    "return": "Returns",
    "author": "Author",
    "authors": "Authors",
    "version": "Version",
    "since": "Since",
    "date": "Date",
    "pre": "Precondition",
    "post": "Postcondition",
    "copyright": "Copyright",
    "invariant": "Invariant",
    "remark": "Remarks",
}

SIMPLE_SECT_ADMONITIONS = {
    "note": "info",
    "warning": "warning",
    "attention": "danger",
    "important": "tip",
}

PARAMETER_LIST_TITLES = {
    "param": "Parameters",
    "retval": "Return Values",
    "exception": "Exceptions",
    "templateparam": "Template Parameters",
}

HIGHLIGHT_CLASSES = {
    "normal": "doxyHighlight",
    "charliteral": "doxyHighlightCharLiteral",
    "comment": "doxyHighlightComment",
    "preprocessor": "doxyHighlightPreprocessor",
    "keyword": "doxyHighlightKeyword",
    "keywordtype": "doxyHighlightKeywordType",
    "keywordflow": "doxyHighlightKeywordFlow",
    "token": "doxyHighlightToken",
    "stringliteral": "doxyHighlightStringLiteral",
    "vhdlchar": "doxyHighlightVhdlChar",
    "vhdlkeyword": "doxyHighlightVhdlKeyword",
    "vhdllogic": "doxyHighlightVhdlLogic",
}

_INLINE_TAGS = {
    DocKind.BOLD: "b",
    DocKind.EMPHASIS: "em",
    DocKind.COMPUTEROUTPUT: "code",
    DocKind.UNDERLINE: "u",
    DocKind.STRIKE: "s",
    DocKind.SUBSCRIPT: "sub",
    DocKind.SUPERSCRIPT: "sup",
    DocKind.SMALL: "small",
    DocKind.CENTER: "center",
    DocKind.BLOCKQUOTE: "blockquote",
    DocKind.PREFORMATTED: "pre",
    DocKind.DETAILS: "details",
    DocKind.SUMMARY: "summary",
}


class DescriptionRenderer:
    """Renders markup for one page; links back into that page stay local."""

    def __init__(
        self, context: "ResolutionContext", current_compound_id: str | None = None
    ) -> None:
        self.context = context
        self.current_compound_id = current_compound_id

    def render(self, node: DocNode | None) -> str:
        """Render a whole description, without surrounding blank lines."""
        if node is None:
            return ""
        return self.render_node(node).strip()

    def render_children(self, children: list[DocContent]) -> str:
        """Render a list of text runs and nodes."""
        return "".join(
            escape_html(child) if isinstance(child, str) else self.render_node(child)
            for child in children
        )

    def render_node(self, node: DocNode) -> str:
        """Render one node through the dispatch table."""
        method_name = self.RENDERERS.get(node.kind)
        if method_name is None:
            logger.error("%s not rendered yet in DescriptionRenderer", node.kind)
            return self.render_children(node.children)
        return getattr(self, method_name)(node)

    def render_linked_text(self, linked_text: LinkedTextDataModel | None) -> str:
        """Render a type or initializer, linking the embedded references."""
        if linked_text is None:
            return ""
        parts: list[str] = []
        for child in linked_text.children:
            if isinstance(child, str):
                parts.append(escape_html(child))
                continue
            permalink = self.permalink(child.refid, child.kindref)
            if permalink:
                parts.append(f'<a href="{permalink}">{escape_html(child.text)}</a>')
            else:
                parts.append(escape_html(child.text))
        return "".join(parts)

    def permalink(self, refid: str | None, kindref: str | None) -> str | None:
        """Return the URL of a reference, relative to the current page."""
        if not refid or not kindref:
            return None
        return self.context.get_permalink(refid, kindref, self.current_compound_id)

    # Block structure.

    def _description(self, node: DocNode) -> str:
        return self.render_children(node.children)

    def _para(self, node: DocNode) -> str:
        return self.render_children(node.children).strip() + "\n\n"

    def _sect(self, node: DocNode) -> str:
        """Render a section heading with its anchor, then the section body."""
        titles = node.child_nodes(DocKind.TITLE)
        title = self.render_children(titles[0].children).strip() if titles else ""
        body = self.render_children(
            [child for child in node.children if child not in titles]
        )
        lines = [""]
        heading = "#" * (node.section_level() + 1)
        anchor = get_permalink_anchor(node.get("id", ""))
        if anchor:
            lines.append(f"{heading} {title} {{#{anchor}}}")
        else:
            lines.append(f"{heading} {title}")
        lines.append("")
        lines.append(body.strip())
        lines.append("")
        return "\n".join(lines) + "\n"

    def _heading(self, node: DocNode) -> str:
        level = int(node.get("level", "1"))
        return f"\n{'#' * level} {self.render_children(node.children).strip()}\n\n"

    def _simplesect(self, node: DocNode) -> str:
        """Render notes and warnings as admonitions, other kinds as titled lists."""
        kind = node.get("kind", "")
        titles = node.child_nodes(DocKind.TITLE)
        body = self.render_children(
            [child for child in node.children if child not in titles]
        ).strip()

        if kind in SIMPLE_SECT_ADMONITIONS:
            return f"\n:::{SIMPLE_SECT_ADMONITIONS[kind]}\n{body}\n:::\n\n"
        if kind == "par":
            title = self.render_children(titles[0].children) if titles else ""
            title = title.strip().removesuffix(".")
        elif kind in SIMPLE_SECT_TITLES:
            title = SIMPLE_SECT_TITLES[kind]
        elif kind == "rcs":
            return ""
        else:
            logger.error("simplesect kind %s not rendered yet", kind)
            title = kind.capitalize()
        return (
            f'\n<dl class="doxySectionUser">\n<dt>{title}</dt>\n'
            f"<dd>{body}</dd>\n</dl>\n\n"
        )

    def _itemizedlist(self, node: DocNode) -> str:
        return f"\n<ul>\n{self.render_children(node.children)}</ul>\n\n"

    def _orderedlist(self, node: DocNode) -> str:
        attributes = ""
        for name in ("type", "start"):
            value = node.get(name)
            if value is not None:
                attributes += f' {name}="{escape_html(value)}"'
        return f"\n<ol{attributes}>\n{self.render_children(node.children)}</ol>\n\n"

    def _listitem(self, node: DocNode) -> str:
        return f"<li>{self.render_children(node.children).strip()}</li>\n"

    def _variablelist(self, node: DocNode) -> str:
        lines = ["", "<dl>"]
        for child in node.child_nodes():
            if child.kind == DocKind.VARLISTENTRY:
                lines.append(f"<dt>{self.render_children(child.children).strip()}</dt>")
            else:
                lines.append(f"<dd>{self.render_children(child.children).strip()}</dd>")
        lines.append("</dl>")
        return "\n".join(lines) + "\n\n"

    def _internal(self, node: DocNode) -> str:
        return self.render_children(node.children)

    # Inline markup.

    def _inline(self, node: DocNode) -> str:
        tag = _INLINE_TAGS[node.kind]
        return f"<{tag}>{self.render_children(node.children)}</{tag}>"

    def _ref(self, node: DocNode) -> str:
        """Render a reference as a link, or as text when it has no page."""
        text = self.render_children(node.children)
        permalink = self.permalink(node.get("refid"), node.get("kindref"))
        if permalink:
            return f'<a href="{permalink}">{text}</a>'
        return text

    def _ulink(self, node: DocNode) -> str:
        url = escape_html(node.get("url", ""))
        return f'<a href="{url}">{self.render_children(node.children)}</a>'

    def _anchor(self, node: DocNode) -> str:
        return f'<a id="{get_permalink_anchor(node.get("id", ""))}"></a>'

    def _linebreak(self, node: DocNode) -> str:
        return "<br/>\n"

    def _hruler(self, node: DocNode) -> str:
        return "\n<hr/>\n\n"

    def _emoji(self, node: DocNode) -> str:
        # The unicode attribute already holds an HTML character reference.
        return node.get("unicode") or f":{node.get('name', '')}:"

    # Tables and media.

    def _table(self, node: DocNode) -> str:
        """Render a Doxygen table as an HTML table."""
        lines = ["", '<table class="markdownTable">']
        for child in node.child_nodes():
            lines.append(self.render_node(child))
        lines.append("</table>")
        return "\n".join(lines) + "\n\n"

    def _caption(self, node: DocNode) -> str:
        return f"<caption>{self.render_children(node.children).strip()}</caption>"

    def _row(self, node: DocNode) -> str:
        cells = [self.render_node(entry) for entry in node.child_nodes()]
        return '<tr class="markdownTableRow">\n' + "\n".join(cells) + "\n</tr>"

    def _entry(self, node: DocNode) -> str:
        tag = "th" if node.get("thead") == "yes" else "td"
        attributes = ""
        for name in ("colspan", "rowspan", "align", "valign", "width"):
            value = node.get(name)
            if value is not None:
                attributes += f' {name}="{escape_html(value)}"'
        content = self.render_children(node.children).strip()
        return f'<{tag} class="markdownTableColumn"{attributes}>{content}</{tag}>'

    def _image(self, node: DocNode) -> str:
        """Render an HTML image, ignoring other output formats."""
        if node.get("type") != "html":
            logger.debug("image type %s ignored", node.get("type"))
            return ""
        attributes = ""
        for name, attribute in (
            ("name", "src"),
            ("width", "width"),
            ("height", "height"),
            ("alt", "alt"),
        ):
            value = node.get(name)
            if value is not None:
                attributes += f' {attribute}="{escape_html(value)}"'
        if node.get("inline") == "yes":
            attributes += ' class="inline"'
        text = f"\n<figure>\n  <img{attributes} />"
        caption = node.get("caption") or self.render_children(node.children).strip()
        if caption:
            text += f"\n  <figcaption>{caption}</figcaption>"
        return text + "\n</figure>\n"

    def _formula(self, node: DocNode) -> str:
        return f"<code>{escape_html(node.text_content())}</code>"

    def _verbatim(self, node: DocNode) -> str:
        """Render verbatim text as a fenced code block."""
        return "\n\n" + md_codeblock("", node.text_content()) + "\n\n"

    # Code.

    def render_program_listing(self, node: DocNode, show_anchors: bool = True) -> str:
        """Render a program listing with optional line anchors."""
        lines = ["", '<div class="doxyProgramListing">', ""]
        for codeline in node.child_nodes(DocKind.CODELINE):
            lines.append(self._render_codeline(codeline, show_anchors))
        lines.extend(["", "</div>", ""])
        return "\n".join(lines) + "\n"

    def _programlisting(self, node: DocNode) -> str:
        return self.render_program_listing(node, show_anchors=False)

    def _render_codeline(self, node: DocNode, show_anchors: bool) -> str:
        """Render one line of a program listing."""
        text = '<div class="doxyCodeLine">'
        lineno = node.get("lineno")
        if lineno is not None:
            text += '<span class="doxyLineNumber">'
            if show_anchors:
                text += f'<a id="l{int(lineno):05d}"></a>'
            permalink = self.permalink(node.get("refid"), node.get("refkind"))
            if permalink:
                text += f'<a href="{permalink}">{lineno}</a>'
            else:
                text += lineno
            text += "</span>"
        else:
            text += '<span class="doxyNoLineNumber">&nbsp;</span>'
        content = self.render_children(node.children)
        if content:
            text += f'<span class="doxyLineContent">{content}</span>'
        return text + "</div>"

    def _codeline(self, node: DocNode) -> str:
        return self._render_codeline(node, show_anchors=False)

    def _highlight(self, node: DocNode) -> str:
        """Render highlighted code as a span with the highlight class."""
        highlight_class = node.get("class", "normal")
        span_class = HIGHLIGHT_CLASSES.get(highlight_class)
        if span_class is None:
            logger.error("highlight class %s not rendered yet", highlight_class)
            span_class = "doxyHighlight"
        if not node.children:
            return ""
        return f'<span class="{span_class}">{self.render_children(node.children)}</span>'

    # Parameters and cross references.

    def _parameterlist(self, node: DocNode) -> str:
        """Render a parameter, template parameter or exception list."""
        kind = node.get("kind", "param")
        title = PARAMETER_LIST_TITLES.get(kind)
        if title is None:
            logger.error("parameterlist kind %s not rendered yet", kind)
            title = kind.capitalize()

        lines = ["", '<dl class="doxyParamsList">', f"<dt>{title}</dt>", "<dd>"]
        lines.append('<table class="doxyParamsTable">')
        for item in node.child_nodes(DocKind.PARAMETERITEM):
            names: list[str] = []
            for name_list in item.child_nodes(DocKind.PARAMETERNAMELIST):
                for name_node in name_list.child_nodes(DocKind.PARAMETERNAME):
                    name = self.render_children(name_node.children).strip()
                    direction = name_node.get("direction")
                    names.append(f"[{direction}] {name}" if direction else name)
            descriptions = item.child_nodes(DocKind.DESCRIPTION)
            description = self.render(descriptions[0]) if descriptions else ""
            lines.append(
                '<tr class="doxyParamItem">'
                f'<td class="doxyParamItemName">{", ".join(names)}</td>'
                f'<td class="doxyParamItemDescription">{description}</td></tr>'
            )
        lines.extend(["</table>", "</dd>", "</dl>"])
        return "\n".join(lines) + "\n\n"

    def _xrefsect(self, node: DocNode) -> str:
        """Render a cross-reference section (todo, bug, deprecated...)."""
        titles = node.child_nodes(DocKind.XREFTITLE)
        title = self.render_children(titles[0].children).strip() if titles else "?"
        descriptions = node.child_nodes(DocKind.DESCRIPTION)
        description = self.render(descriptions[0]) if descriptions else ""
        permalink = self.context.get_xref_permalink(node.get("id", ""))
        if permalink:
            title = f'<a href="{permalink}">{title}</a>'
        return (
            f'\n<dl class="doxyXrefSect">\n<dt>{title}</dt>\n'
            f"<dd>{description}</dd>\n</dl>\n\n"
        )

    def _toclist(self, node: DocNode) -> str:
        return f"\n<ul>\n{self.render_children(node.children)}</ul>\n\n"

    def _tocitem(self, node: DocNode) -> str:
        anchor = get_permalink_anchor(node.get("id", ""))
        text = self.render_children(node.children).strip()
        return f'<li><a href="#{anchor}">{text}</a></li>\n'

    def _htmlonly(self, node: DocNode) -> str:
        return node.text_content()

    def _output_only(self, node: DocNode) -> str:
        return ""

    def _onlyfor(self, node: DocNode) -> str:
        if node.get("format") == "html":
            return self.render_children(node.children)
        return ""

    RENDERERS: dict[DocKind, str] = {
        DocKind.DESCRIPTION: "_description",
        DocKind.PARA: "_para",
        DocKind.SECT: "_sect",
        DocKind.TITLE: "_description",
        DocKind.INTERNAL: "_internal",
        DocKind.SIMPLESECT: "_simplesect",
        DocKind.ITEMIZEDLIST: "_itemizedlist",
        DocKind.ORDEREDLIST: "_orderedlist",
        DocKind.LISTITEM: "_listitem",
        DocKind.VARIABLELIST: "_variablelist",
        DocKind.VARLISTENTRY: "_description",
        DocKind.TERM: "_description",
        DocKind.REF: "_ref",
        DocKind.ULINK: "_ulink",
        DocKind.ANCHOR: "_anchor",
        DocKind.TABLE: "_table",
        DocKind.ROW: "_row",
        DocKind.ENTRY: "_entry",
        DocKind.CAPTION: "_caption",
        DocKind.IMAGE: "_image",
        DocKind.FORMULA: "_formula",
        DocKind.PROGRAMLISTING: "_programlisting",
        DocKind.CODELINE: "_codeline",
        DocKind.HIGHLIGHT: "_highlight",
        DocKind.VERBATIM: "_verbatim",
        DocKind.PARAMETERLIST: "_parameterlist",
        DocKind.PARAMETERNAME: "_description",
        DocKind.PARAMETERTYPE: "_description",
        DocKind.XREFSECT: "_xrefsect",
        DocKind.XREFTITLE: "_description",
        DocKind.HEADING: "_heading",
        DocKind.LINEBREAK: "_linebreak",
        DocKind.HRULER: "_hruler",
        DocKind.EMOJI: "_emoji",
        DocKind.TOCLIST: "_toclist",
        DocKind.TOCITEM: "_tocitem",
        DocKind.HTMLONLY: "_htmlonly",
        DocKind.OUTPUT_ONLY: "_output_only",
        DocKind.ONLYFOR: "_onlyfor",
        **{kind: "_inline" for kind in _INLINE_TAGS},
    }
