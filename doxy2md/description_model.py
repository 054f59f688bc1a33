"""Description and markup trees (`descriptionType` and friends).

Each markup element becomes a `DocNode`, a tagged variant whose `kind`
discriminator selects both the parsing rule (`DOC_ELEMENT_RULES`) and the
rendering rule (see `description_renderer`). Children keep document order,
mixing plain strings and nested nodes.
"""

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from doxy2md.xml_node import XmlElement

logger = logging.getLogger(__name__)


class DocKind(StrEnum):
    """Discriminator of the description node variants."""

    DESCRIPTION = "description"
    PARA = "para"
    SECT = "sect"
    TITLE = "title"
    INTERNAL = "internal"
    SIMPLESECT = "simplesect"
    ITEMIZEDLIST = "itemizedlist"
    ORDEREDLIST = "orderedlist"
    LISTITEM = "listitem"
    VARIABLELIST = "variablelist"
    VARLISTENTRY = "varlistentry"
    TERM = "term"
    BOLD = "bold"
    EMPHASIS = "emphasis"
    COMPUTEROUTPUT = "computeroutput"
    UNDERLINE = "underline"
    STRIKE = "strike"
    SUBSCRIPT = "subscript"
    SUPERSCRIPT = "superscript"
    SMALL = "small"
    CENTER = "center"
    REF = "ref"
    ULINK = "ulink"
    ANCHOR = "anchor"
    TABLE = "table"
    ROW = "row"
    ENTRY = "entry"
    CAPTION = "caption"
    IMAGE = "image"
    FORMULA = "formula"
    PROGRAMLISTING = "programlisting"
    CODELINE = "codeline"
    HIGHLIGHT = "highlight"
    VERBATIM = "verbatim"
    PREFORMATTED = "preformatted"
    PARAMETERLIST = "parameterlist"
    PARAMETERITEM = "parameteritem"
    PARAMETERNAMELIST = "parameternamelist"
    PARAMETERTYPE = "parametertype"
    PARAMETERNAME = "parametername"
    XREFSECT = "xrefsect"
    XREFTITLE = "xreftitle"
    BLOCKQUOTE = "blockquote"
    HEADING = "heading"
    LINEBREAK = "linebreak"
    HRULER = "hruler"
    EMOJI = "emoji"
    TOCLIST = "toclist"
    TOCITEM = "tocitem"
    DETAILS = "details"
    SUMMARY = "summary"
    HTMLONLY = "htmlonly"
    OUTPUT_ONLY = "outputonly"
    ONLYFOR = "onlyfor"


class Content(StrEnum):
    """What an element may contain."""

    MIXED = "mixed"  # text and any markup
    ELEMENTS = "elements"  # only the listed child elements
    TEXT = "text"  # plain text only
    EMPTY = "empty"


@dataclass(frozen=True)
class DocElementRule:
    """How one XML element name maps onto a DocNode."""

    kind: DocKind
    content: Content = Content.MIXED
    attributes: frozenset[str] = frozenset()
    children: frozenset[str] = frozenset()


def _rule(
    kind: DocKind,
    content: Content = Content.MIXED,
    attributes: tuple[str, ...] = (),
    children: tuple[str, ...] = (),
) -> DocElementRule:
    return DocElementRule(kind, content, frozenset(attributes), frozenset(children))


_INLINE = Content.MIXED

DOC_ELEMENT_RULES: dict[str, DocElementRule] = {
    "briefdescription": _rule(DocKind.DESCRIPTION),
    "detaileddescription": _rule(DocKind.DESCRIPTION),
    "inbodydescription": _rule(DocKind.DESCRIPTION),
    "description": _rule(DocKind.DESCRIPTION),
    "xrefdescription": _rule(DocKind.DESCRIPTION),
    "parameterdescription": _rule(DocKind.DESCRIPTION),
    "para": _rule(DocKind.PARA),
    "sect1": _rule(DocKind.SECT, attributes=("id",)),
    "sect2": _rule(DocKind.SECT, attributes=("id",)),
    "sect3": _rule(DocKind.SECT, attributes=("id",)),
    "sect4": _rule(DocKind.SECT, attributes=("id",)),
    "sect5": _rule(DocKind.SECT, attributes=("id",)),
    "sect6": _rule(DocKind.SECT, attributes=("id",)),
    "title": _rule(DocKind.TITLE),
    "internal": _rule(DocKind.INTERNAL),
    "simplesect": _rule(DocKind.SIMPLESECT, attributes=("kind",)),
    "itemizedlist": _rule(
        DocKind.ITEMIZEDLIST, Content.ELEMENTS, children=("listitem",)
    ),
    "orderedlist": _rule(
        DocKind.ORDEREDLIST,
        Content.ELEMENTS,
        attributes=("type", "start"),
        children=("listitem",),
    ),
    "listitem": _rule(DocKind.LISTITEM, attributes=("override", "value")),
    "variablelist": _rule(
        DocKind.VARIABLELIST, Content.ELEMENTS, children=("varlistentry", "listitem")
    ),
    "varlistentry": _rule(DocKind.VARLISTENTRY, Content.ELEMENTS, children=("term",)),
    "term": _rule(DocKind.TERM),
    "bold": _rule(DocKind.BOLD, _INLINE),
    "emphasis": _rule(DocKind.EMPHASIS, _INLINE),
    "computeroutput": _rule(DocKind.COMPUTEROUTPUT, _INLINE),
    "underline": _rule(DocKind.UNDERLINE, _INLINE),
    "ins": _rule(DocKind.UNDERLINE, _INLINE),
    "strike": _rule(DocKind.STRIKE, _INLINE),
    "s": _rule(DocKind.STRIKE, _INLINE),
    "del": _rule(DocKind.STRIKE, _INLINE),
    "subscript": _rule(DocKind.SUBSCRIPT, _INLINE),
    "superscript": _rule(DocKind.SUPERSCRIPT, _INLINE),
    "small": _rule(DocKind.SMALL, _INLINE),
    "center": _rule(DocKind.CENTER, _INLINE),
    "ref": _rule(DocKind.REF, attributes=("refid", "kindref", "external")),
    "ulink": _rule(DocKind.ULINK, attributes=("url",)),
    "anchor": _rule(DocKind.ANCHOR, attributes=("id",)),
    "table": _rule(
        DocKind.TABLE,
        Content.ELEMENTS,
        attributes=("rows", "cols", "width"),
        children=("row", "caption"),
    ),
    "row": _rule(DocKind.ROW, Content.ELEMENTS, children=("entry",)),
    "entry": _rule(
        DocKind.ENTRY,
        attributes=(
            "thead",
            "colspan",
            "rowspan",
            "align",
            "valign",
            "width",
            "class",
        ),
    ),
    "caption": _rule(DocKind.CAPTION, attributes=("id",)),
    "image": _rule(
        DocKind.IMAGE,
        attributes=("type", "name", "width", "height", "alt", "inline", "caption"),
    ),
    "formula": _rule(DocKind.FORMULA, Content.TEXT, attributes=("id",)),
    "programlisting": _rule(
        DocKind.PROGRAMLISTING,
        Content.ELEMENTS,
        attributes=("filename",),
        children=("codeline",),
    ),
    "codeline": _rule(
        DocKind.CODELINE,
        Content.ELEMENTS,
        attributes=("lineno", "refid", "refkind", "external"),
        children=("highlight",),
    ),
    "highlight": _rule(DocKind.HIGHLIGHT, attributes=("class",)),
    "verbatim": _rule(DocKind.VERBATIM, Content.TEXT),
    "preformatted": _rule(DocKind.PREFORMATTED),
    "parameterlist": _rule(
        DocKind.PARAMETERLIST,
        Content.ELEMENTS,
        attributes=("kind",),
        children=("parameteritem",),
    ),
    "parameteritem": _rule(
        DocKind.PARAMETERITEM,
        Content.ELEMENTS,
        children=("parameternamelist", "parameterdescription"),
    ),
    "parameternamelist": _rule(
        DocKind.PARAMETERNAMELIST,
        Content.ELEMENTS,
        children=("parametertype", "parametername"),
    ),
    "parametertype": _rule(DocKind.PARAMETERTYPE),
    "parametername": _rule(DocKind.PARAMETERNAME, attributes=("direction",)),
    "xrefsect": _rule(
        DocKind.XREFSECT,
        Content.ELEMENTS,
        attributes=("id",),
        children=("xreftitle", "xrefdescription"),
    ),
    "xreftitle": _rule(DocKind.XREFTITLE),
    "blockquote": _rule(DocKind.BLOCKQUOTE),
    "heading": _rule(DocKind.HEADING, attributes=("level",)),
    "linebreak": _rule(DocKind.LINEBREAK, Content.EMPTY),
    "hruler": _rule(DocKind.HRULER, Content.EMPTY),
    "emoji": _rule(DocKind.EMOJI, Content.EMPTY, attributes=("name", "unicode")),
    "toclist": _rule(DocKind.TOCLIST, Content.ELEMENTS, children=("tocitem",)),
    "tocitem": _rule(DocKind.TOCITEM, attributes=("id",)),
    "details": _rule(DocKind.DETAILS),
    "summary": _rule(DocKind.SUMMARY),
    "javadocliteral": _rule(DocKind.COMPUTEROUTPUT, Content.TEXT),
    "javadoccode": _rule(DocKind.COMPUTEROUTPUT, Content.TEXT),
    "htmlonly": _rule(DocKind.HTMLONLY, Content.TEXT, attributes=("block",)),
    "manonly": _rule(DocKind.OUTPUT_ONLY, Content.TEXT),
    "rtfonly": _rule(DocKind.OUTPUT_ONLY, Content.TEXT),
    "latexonly": _rule(DocKind.OUTPUT_ONLY, Content.TEXT),
    "xmlonly": _rule(DocKind.OUTPUT_ONLY, Content.TEXT),
    "docbookonly": _rule(DocKind.OUTPUT_ONLY, Content.TEXT),
    "onlyfor": _rule(DocKind.ONLYFOR, attributes=("format",)),
}

# Character entity elements are folded into the surrounding text.
DOC_CHARACTER_ENTITIES: dict[str, str] = {
    "sp": " ",
    "nonbreakablespace": " ",
    "ndash": "–",
    "mdash": "—",
    "lsquo": "‘",
    "rsquo": "’",
    "ldquo": "“",
    "rdquo": "”",
    "zwj": "‍",
    "zwnj": "‌",
    "lrm": "‎",
    "rlm": "‏",
    "copy": "©",
    "registered": "®",
    "trademark": "™",
    "laquo": "«",
    "raquo": "»",
    "deg": "°",
    "plusmn": "±",
    "times": "×",
    "divide": "÷",
    "middot": "·",
    "hellip": "…",
    "bull": "•",
    "larr": "←",
    "rarr": "→",
    "uarr": "↑",
    "darr": "↓",
    "le": "≤",
    "ge": "≥",
    "ne": "≠",
    "infin": "∞",
}


@dataclass(frozen=True)
class DocNode:
    """One markup element, with its children in document order."""

    kind: DocKind
    element_name: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list["DocContent"] = field(default_factory=list)

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return an attribute value."""
        return self.attributes.get(name, default)

    def child_nodes(self, kind: DocKind | None = None) -> list["DocNode"]:
        """Return the direct DocNode children, optionally of one kind."""
        return [
            child
            for child in self.children
            if isinstance(child, DocNode) and (kind is None or child.kind == kind)
        ]

    def walk(self):
        """Yield this node and all nested nodes, depth first."""
        yield self
        for child in self.children:
            if isinstance(child, DocNode):
                yield from child.walk()

    def text_content(self) -> str:
        """Return the concatenated text of the subtree."""
        return "".join(
            child if isinstance(child, str) else child.text_content()
            for child in self.children
        )

    def section_level(self) -> int:
        """Return N for a `sectN` node."""
        return int(self.element_name.removeprefix("sect"))


DocContent = str | DocNode


def _append_text(children: list[DocContent], text: str) -> None:
    """Append text, merging with a previous text run."""
    if children and isinstance(children[-1], str):
        children[-1] += text
    else:
        children.append(text)


def parse_doc_node(element: XmlElement, parent_name: str = "") -> DocNode | str | None:
    """Build the DocNode (or folded text) for one markup element.

    Returns None, after logging, for element names with no rule.
    """
    if element.name in DOC_CHARACTER_ENTITIES:
        return DOC_CHARACTER_ENTITIES[element.name]

    rule = DOC_ELEMENT_RULES.get(element.name)
    if rule is None:
        logger.error(
            "%s element: <%s> not implemented yet in DocNode",
            parent_name or "description",
            element.name,
        )
        return None

    attributes: dict[str, str] = {}
    for name, value in element.attributes.items():
        if name in rule.attributes:
            attributes[name] = value
        else:
            logger.error(
                "%s element: attribute '%s' not implemented yet in DocNode[%s]",
                element.name,
                name,
                rule.kind,
            )

    children: list[DocContent] = []
    for child in element.children:
        if isinstance(child, str):
            if rule.content == Content.ELEMENTS and not child.strip():
                continue
            if rule.content == Content.EMPTY:
                continue
            _append_text(children, child)
            continue
        if rule.content in (Content.TEXT, Content.EMPTY):
            if child.name in DOC_CHARACTER_ENTITIES and rule.content == Content.TEXT:
                _append_text(children, DOC_CHARACTER_ENTITIES[child.name])
                continue
            logger.error(
                "%s element: <%s> not implemented yet in DocNode[%s]",
                element.name,
                child.name,
                rule.kind,
            )
            continue
        if rule.content == Content.ELEMENTS and child.name not in rule.children:
            logger.error(
                "%s element: <%s> not implemented yet in DocNode[%s]",
                element.name,
                child.name,
                rule.kind,
            )
            continue
        parsed = parse_doc_node(child, element.name)
        if isinstance(parsed, str):
            _append_text(children, parsed)
        elif parsed is not None:
            children.append(parsed)

    return DocNode(rule.kind, element.name, attributes, children)


def parse_description(element: XmlElement) -> DocNode:
    """Parse one of the description wrapper elements."""
    node = parse_doc_node(element)
    if not isinstance(node, DocNode):
        msg = f"<{element.name}> is not a description element"
        raise ValueError(msg)
    return node


def is_empty_description(node: DocNode | None) -> bool:
    """Return True if the description has no text and no markup."""
    if node is None:
        return True
    for child in node.children:
        if isinstance(child, DocNode):
            if child.kind == DocKind.PARA and is_empty_description(child):
                continue
            return False
        if child.strip():
            return False
    return True


def collect_anchor_ids(node: DocNode | None) -> list[str]:
    """Return the ids of anchors and sections defined inside a description."""
    if node is None:
        return []
    return [
        n.attributes["id"]
        for n in node.walk()
        if n.kind in (DocKind.ANCHOR, DocKind.SECT) and "id" in n.attributes
    ]
