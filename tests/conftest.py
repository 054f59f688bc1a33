"""Shared fixtures: a small Doxygen XML export written into tmp_path."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from doxy2md.data_model import load_data_model
from doxy2md.load_config import load_config
from doxy2md.resolution_context import ResolutionContext
from doxy2md.workspace import SiteUrls

DOXYGEN_VERSION = "1.10.0"


def memberdef(
    kind: str,
    member_id: str,
    name: str,
    *,
    type_: str = "",
    definition: str = "",
    argsstring: str = "",
    body: str = "",
    attributes: str = 'prot="public" static="no"',
    file: str = "include/widget.h",
    line: int = 1,
) -> str:
    """Return the XML text of one memberdef."""
    return f"""
<memberdef kind="{kind}" id="{member_id}" {attributes}>
  <type>{type_}</type>
  <definition>{definition}</definition>
  <argsstring>{argsstring}</argsstring>
  <name>{name}</name>
  <briefdescription></briefdescription>
  <detaileddescription></detaileddescription>
  {body}
  <location file="{file}" line="{line}" column="1"/>
</memberdef>"""


def compounddef(
    kind: str,
    compound_id: str,
    name: str,
    body: str = "",
    *,
    location: str = "include/widget.h",
) -> str:
    location_xml = f'<location file="{location}"/>' if location else ""
    return f"""
<compounddef id="{compound_id}" kind="{kind}" language="C++">
  <compoundname>{name}</compoundname>
  {body}
  {location_xml}
</compounddef>"""


def write_xml_folder(
    folder: Path,
    compounds: list[tuple[str, str, str, str]],
    project_brief: str = "Demo",
) -> Path:
    """Write index.xml, one file per compound and Doxyfile.xml.

    `compounds` holds (refid, kind, name, compounddef xml) tuples.
    """
    folder.mkdir(parents=True, exist_ok=True)
    index_lines = [
        "<?xml version='1.0' encoding='UTF-8' standalone='no'?>",
        f'<doxygenindex version="{DOXYGEN_VERSION}" xml:lang="en-US">',
    ]
    for refid, kind, name, xml in compounds:
        index_lines.append(
            f'  <compound refid="{refid}" kind="{kind}"><name>{name}</name></compound>'
        )
        (folder / f"{refid}.xml").write_text(
            "<?xml version='1.0' encoding='UTF-8' standalone='no'?>\n"
            f'<doxygen version="{DOXYGEN_VERSION}" xml:lang="en-US">{xml}\n'
            "</doxygen>\n",
            encoding="utf-8",
        )
    index_lines.append("</doxygenindex>")
    (folder / "index.xml").write_text("\n".join(index_lines) + "\n", encoding="utf-8")

    (folder / "Doxyfile.xml").write_text(
        "<?xml version='1.0' encoding='UTF-8' standalone='no'?>\n"
        f'<doxyfile version="{DOXYGEN_VERSION}" xml:lang="en-US">\n'
        '  <option id="PROJECT_BRIEF" default="no" type="string">'
        f"<value><![CDATA[{project_brief}]]></value></option>\n"
        "</doxyfile>\n",
        encoding="utf-8",
    )
    return folder


WIDGET_MEMBERS = "".join(
    [
        memberdef(
            "function",
            "classdemo_1_1_widget_1a01",
            "Widget",
            definition="demo::Widget::Widget",
            argsstring="()",
            line=12,
        ),
        memberdef(
            "function",
            "classdemo_1_1_widget_1a02",
            "~Widget",
            definition="demo::Widget::~Widget",
            argsstring="()",
            attributes='prot="public" static="no" virt="virtual"',
            line=13,
        ),
        memberdef(
            "function",
            "classdemo_1_1_widget_1a03",
            "operator==",
            type_="bool",
            definition="bool demo::Widget::operator==",
            argsstring="(const Widget &amp;other) const",
            line=14,
        ),
        memberdef(
            "function",
            "classdemo_1_1_widget_1a04",
            "size",
            type_="int",
            definition="int demo::Widget::size",
            argsstring="() const",
            body="""
  <inbodydescription>
    <para>Same as <ref refid="classdemo_1_1_widget_1a01" kindref="member">Widget</ref> sizes, see <ref refid="namespacedemo_1a10" kindref="member">make_widget</ref>.</para>
  </inbodydescription>""",
            line=15,
        ),
    ]
)

MAKE_WIDGET = memberdef(
    "function",
    "namespacedemo_1a10",
    "make_widget",
    type_='<ref refid="classdemo_1_1_widget" kindref="compound">Widget</ref>',
    definition="Widget demo::make_widget",
    argsstring="()",
    line=40,
)

COLOR_ENUM = memberdef(
    "enum",
    "namespacedemo_1a11",
    "Color",
    body="""
  <enumvalue id="namespacedemo_1a11a20" prot="public">
    <name>red</name>
    <initializer>= 1</initializer>
    <briefdescription><para>The red one.</para></briefdescription>
    <detaileddescription></detaileddescription>
  </enumvalue>
  <enumvalue id="namespacedemo_1a11a21" prot="public">
    <name>green</name>
    <briefdescription></briefdescription>
    <detaileddescription></detaileddescription>
  </enumvalue>""",
    attributes='prot="public" static="no" strong="yes"',
    line=44,
)

SAMPLE_COMPOUNDS: list[tuple[str, str, str, str]] = [
    (
        "namespacedemo",
        "namespace",
        "demo",
        compounddef(
            "namespace",
            "namespacedemo",
            "demo",
            f"""
  <innerclass refid="classdemo_1_1_widget" prot="public">demo::Widget</innerclass>
  <innerclass refid="classdemo_1_1_gadget" prot="public">demo::Gadget</innerclass>
  <sectiondef kind="func">
    {MAKE_WIDGET}
  </sectiondef>
  <sectiondef kind="enum">
    {COLOR_ENUM}
  </sectiondef>
  <briefdescription><para>Demo namespace.</para></briefdescription>
  <detaileddescription></detaileddescription>""",
        ),
    ),
    (
        "classdemo_1_1_widget",
        "class",
        "demo::Widget",
        compounddef(
            "class",
            "classdemo_1_1_widget",
            "demo::Widget",
            f"""
  <derivedcompoundref refid="classdemo_1_1_gadget" prot="public" virt="non-virtual">demo::Gadget</derivedcompoundref>
  <includes refid="widget_8h" local="no">widget.h</includes>
  <sectiondef kind="public-func">{WIDGET_MEMBERS}
  </sectiondef>
  <briefdescription><para>A widget.</para></briefdescription>
  <detaileddescription><para>Widgets are drawn.</para></detaileddescription>""",
        ),
    ),
    (
        "classdemo_1_1_gadget",
        "class",
        "demo::Gadget",
        compounddef(
            "class",
            "classdemo_1_1_gadget",
            "demo::Gadget",
            """
  <basecompoundref refid="classdemo_1_1_widget" prot="public" virt="non-virtual">demo::Widget</basecompoundref>
  <briefdescription><para>A gadget.</para></briefdescription>
  <detaileddescription></detaileddescription>""",
        ),
    ),
    (
        "widget_8h",
        "file",
        "widget.h",
        compounddef(
            "file",
            "widget_8h",
            "widget.h",
            """
  <innerclass refid="classdemo_1_1_widget" prot="public">demo::Widget</innerclass>
  <innerclass refid="classdemo_1_1_gadget" prot="public">demo::Gadget</innerclass>
  <innernamespace refid="namespacedemo">demo</innernamespace>
  <briefdescription><para>Widget declarations.</para></briefdescription>
  <detaileddescription></detaileddescription>
  <programlisting>
<codeline lineno="1"><highlight class="preprocessor">#pragma<sp/>once</highlight></codeline>
<codeline lineno="2"><highlight class="keyword">namespace</highlight><highlight class="normal"><sp/>demo<sp/>{}</highlight></codeline>
  </programlisting>""",
        ),
    ),
    (
        "dir_include",
        "dir",
        "include",
        compounddef(
            "dir",
            "dir_include",
            "include",
            """
  <innerfile refid="widget_8h">widget.h</innerfile>
  <briefdescription></briefdescription>
  <detaileddescription></detaileddescription>""",
            location="include/",
        ),
    ),
    (
        "group__core",
        "group",
        "core",
        compounddef(
            "group",
            "group__core",
            "core",
            """
  <title>Core utilities.</title>
  <innerclass refid="classdemo_1_1_widget" prot="public">demo::Widget</innerclass>
  <briefdescription><para>The core.</para></briefdescription>
  <detaileddescription></detaileddescription>""",
            location="",
        ),
    ),
    (
        "group__extra",
        "group",
        "extra",
        compounddef(
            "group",
            "group__extra",
            "extra",
            """
  <title>Extras</title>
  <briefdescription><para>Extra things.</para></briefdescription>
  <detaileddescription></detaileddescription>""",
            location="",
        ),
    ),
    (
        "indexpage",
        "page",
        "index",
        compounddef(
            "page",
            "indexpage",
            "index",
            """
  <title>Demo</title>
  <briefdescription></briefdescription>
  <detaileddescription><para>Welcome to <bold>Demo</bold>.<anchor id="indexpage_1_intro"/></para></detaileddescription>""",
            location="",
        ),
    ),
]


@pytest.fixture
def sample_xml_folder(tmp_path: Path) -> Path:
    """Fixture writing the sample project export."""
    return write_xml_folder(tmp_path / "xml", SAMPLE_COMPOUNDS)


@pytest.fixture
def make_xml_folder(tmp_path: Path) -> Callable[..., Path]:
    """Fixture returning a writer for ad hoc exports."""

    def make(compounds: list[tuple[str, str, str, str]], name: str = "xml") -> Path:
        return write_xml_folder(tmp_path / name, compounds)

    return make


def build_context(
    xml_folder: Path, options: dict[str, Any] | None = None
) -> ResolutionContext:
    """Load an export and build its frozen resolution context."""
    options = options or load_config()
    data_model = load_data_model(xml_folder)
    context = ResolutionContext(options, SiteUrls.from_options(options).page_base_url)
    context.build(data_model)
    return context


@pytest.fixture
def sample_context(sample_xml_folder: Path) -> ResolutionContext:
    """Fixture providing the built context of the sample project."""
    return build_context(sample_xml_folder)


@pytest.fixture
def context_builder() -> Callable[..., ResolutionContext]:
    """Fixture returning the context builder for ad hoc exports."""
    return build_context
