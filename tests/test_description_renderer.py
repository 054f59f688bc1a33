"""Tests for rendering descriptions and linked text to Markdown."""

from lxml import etree

from doxy2md.description_model import DocNode, parse_description
from doxy2md.description_renderer import DescriptionRenderer, escape_html, md_codeblock
from doxy2md.resolution_context import ResolutionContext
from doxy2md.xml_parser import convert_element


def description(text: str) -> DocNode:
    """Parse a detaileddescription snippet."""
    return parse_description(
        convert_element(etree.fromstring(f"<detaileddescription>{text}</detaileddescription>"))
    )


def test_escape_html_escapes_mdx_braces() -> None:
    """Verify that markup characters and braces are escaped."""
    assert escape_html("a < b && {c}") == "a &lt; b &amp;&amp; &#123;c&#125;"


def test_md_codeblock() -> None:
    """Verify the fenced block shape."""
    assert md_codeblock("cpp", "int x;\n\n") == "```cpp\nint x;\n```"


def test_inline_markup(sample_context: ResolutionContext) -> None:
    """Verify inline tags and the escaping of plain text."""
    renderer = DescriptionRenderer(sample_context)
    node = description(
        "<para>Call <bold>now</bold>, <computeroutput>f()</computeroutput> &amp; {x}</para>"
    )
    assert renderer.render(node) == (
        "Call <b>now</b>, <code>f()</code> &amp; &#123;x&#125;"
    )


def test_same_page_and_cross_page_refs(sample_context: ResolutionContext) -> None:
    """Verify that references into the current page become bare anchors."""
    node = description(
        '<para><ref refid="classdemo_1_1_widget_1a04" kindref="member">size</ref></para>'
    )
    on_widget = DescriptionRenderer(sample_context, "classdemo_1_1_widget")
    elsewhere = DescriptionRenderer(sample_context, "namespacedemo")
    assert on_widget.render(node) == '<a href="#a04">size</a>'
    assert elsewhere.render(node) == (
        '<a href="/docs/api/classes/demo/widget/#a04">size</a>'
    )


def test_admonition(sample_context: ResolutionContext) -> None:
    """Verify that notes become Docusaurus admonitions."""
    node = description(
        '<para><simplesect kind="note"><para>Be careful.</para></simplesect></para>'
    )
    assert DescriptionRenderer(sample_context).render(node) == ":::info\nBe careful.\n:::"


def test_titled_simplesect(sample_context: ResolutionContext) -> None:
    """Verify that return sections get the translated title."""
    node = description(
        '<para><simplesect kind="return"><para>The size.</para></simplesect></para>'
    )
    assert DescriptionRenderer(sample_context).render(node) == (
        '<dl class="doxySectionUser">\n<dt>Returns</dt>\n<dd>The size.</dd>\n</dl>'
    )


def test_parameter_list(sample_context: ResolutionContext) -> None:
    """Verify parameter names, directions and descriptions."""
    node = description(
        '<para><parameterlist kind="param"><parameteritem><parameternamelist>'
        '<parametername direction="in">count</parametername></parameternamelist>'
        "<parameterdescription><para>How many.</para></parameterdescription>"
        "</parameteritem></parameterlist></para>"
    )
    text = DescriptionRenderer(sample_context).render(node)
    assert "<dt>Parameters</dt>" in text
    assert '<td class="doxyParamItemName">[in] count</td>' in text
    assert '<td class="doxyParamItemDescription">How many.</td>' in text


def test_lists_and_sections(sample_context: ResolutionContext) -> None:
    """Verify itemized lists and section headings with anchors."""
    node = description(
        '<sect1 id="indexpage_1s1"><title>Usage</title>'
        "<para><itemizedlist><listitem><para>one</para></listitem>"
        "<listitem><para>two</para></listitem></itemizedlist></para></sect1>"
    )
    text = DescriptionRenderer(sample_context).render(node)
    assert text.startswith("## Usage {#s1}")
    assert "<ul>\n<li>one</li>\n<li>two</li>\n</ul>" in text


def test_verbatim(sample_context: ResolutionContext) -> None:
    """Verify that verbatim text becomes a fenced code block."""
    node = description("<para><verbatim>a &lt; b\n</verbatim></para>")
    assert DescriptionRenderer(sample_context).render(node) == "```\na < b\n```"


def test_linked_text(sample_context: ResolutionContext) -> None:
    """Verify that references inside a type are linked."""
    member = sample_context.members_by_id["namespacedemo_1a10"]
    renderer = DescriptionRenderer(sample_context, "namespacedemo")
    assert renderer.render_linked_text(member.member_def.type) == (
        '<a href="/docs/api/classes/demo/widget">Widget</a>'
    )
    assert renderer.render_linked_text(None) == ""


def test_program_listing(sample_context: ResolutionContext) -> None:
    """Verify line anchors and highlight spans of a file listing."""
    file = sample_context.compounds_by_id["widget_8h"]
    text = DescriptionRenderer(sample_context, file.id).render_program_listing(
        file.program_listing
    )
    assert '<div class="doxyProgramListing">' in text
    assert '<a id="l00001"></a>1</span>' in text
    assert '<span class="doxyHighlightPreprocessor">#pragma once</span>' in text
    assert '<span class="doxyHighlightKeyword">namespace</span>' in text
