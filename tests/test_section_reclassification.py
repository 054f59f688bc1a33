"""Tests for the re-bucketing of Doxygen sections."""

from lxml import etree

from doxy2md.member_models import MemberDefDataModel, SectionDefDataModel
from doxy2md.members import compute_member_labels
from doxy2md.resolution_context import ResolutionContext
from doxy2md.section_reclassification import (
    USER_DEFINED_PRIORITY,
    adjust_section_kind,
    is_operator,
    reclassify_sections,
    section_header_name,
    section_priority,
)
from doxy2md.xml_parser import convert_element
from tests.conftest import memberdef


def section(kind: str, members: str, header: str = "") -> SectionDefDataModel:
    header_xml = f"<header>{header}</header>" if header else ""
    return SectionDefDataModel(
        convert_element(
            etree.fromstring(f'<sectiondef kind="{kind}">{header_xml}{members}</sectiondef>')
        )
    )


def function(member_id: str, name: str, **kwargs) -> str:
    return memberdef("function", member_id, name, **kwargs)


def test_is_operator() -> None:
    """Verify that only operator overloads are detected as operators."""
    assert is_operator("operator==")
    assert is_operator("operator()")
    assert is_operator("operator new")
    assert not is_operator("operators")
    assert not is_operator("operator_count")


def test_adjust_section_kind_keeps_visibility() -> None:
    """Verify that the visibility prefix survives the re-bucketing."""
    assert adjust_section_kind("public-func", "function", "Widget", "Widget") == (
        "public-constructorr"
    )
    assert adjust_section_kind("protected-func", "function", "~Widget", "Widget") == (
        "protected-destructor"
    )
    assert adjust_section_kind("public-static-func", "function", "operator<") == (
        "public-static-operator"
    )
    assert adjust_section_kind("func", "function", "make") == "function"
    assert adjust_section_kind("var", "variable", "count") == "variable"
    assert adjust_section_kind("private-attrib", "variable", "count") == (
        "private-attrib"
    )
    assert adjust_section_kind("user-defined", "typedef", "T") == "typedef"
    assert adjust_section_kind("enum", "enum", "Color") == "enum"


def test_widget_sections(sample_context: ResolutionContext) -> None:
    """Verify the constructor, destructor, operator and method buckets."""
    widget = sample_context.compounds_by_id["classdemo_1_1_widget"]
    assert [s.kind for s in widget.sections] == [
        "public-constructorr",
        "public-destructor",
        "public-operator",
        "public-func",
    ]
    assert [s.header_name for s in widget.sections] == [
        "Public Constructors",
        "Public Destructor",
        "Public Operators",
        "Public Member Functions",
    ]
    assert [m.name for m in widget.sections[3].definition_members] == ["size"]


def test_namespace_sections(sample_context: ResolutionContext) -> None:
    """Verify that namespace functions get the plain Functions bucket."""
    namespace = sample_context.compounds_by_id["namespacedemo"]
    assert [(s.kind, s.header_name) for s in namespace.sections] == [
        ("enum", "Enumerations"),
        ("function", "Functions"),
    ]


def test_every_member_in_exactly_one_bucket() -> None:
    """Verify that re-bucketing neither drops nor duplicates members."""
    section_defs = [
        section(
            "public-func",
            function("c_1a1", "C")
            + function("c_1a2", "operator+")
            + function("c_1a3", "run"),
        ),
        section(
            "public-static-func",
            function("c_1a4", "create") + function("c_1a5", "operator new"),
        ),
        section(
            "public-attrib",
            memberdef("variable", "c_1a6", "count"),
        ),
    ]
    sections = reclassify_sections(section_defs, "C")
    ids = [member.id for s in sections for member in s.members]
    assert sorted(ids) == ["c_1a1", "c_1a2", "c_1a3", "c_1a4", "c_1a5", "c_1a6"]
    assert len(ids) == len(set(ids))


def test_sections_sorted_by_priority() -> None:
    """Verify that the output order follows the section priorities."""
    section_defs = [
        section("public-attrib", memberdef("variable", "c_1a6", "count")),
        section("public-func", function("c_1a3", "run")),
        section("public-type", memberdef("typedef", "c_1a7", "value_type")),
    ]
    sections = reclassify_sections(section_defs, "C")
    assert [s.kind for s in sections] == ["public-type", "public-func", "public-attrib"]
    priorities = [section_priority(s.kind) for s in sections]
    assert priorities == sorted(priorities)


def test_titled_user_defined_sections_last() -> None:
    """Verify that titled user-defined sections keep their members and go last."""
    section_defs = [
        section("user-defined", function("c_1a8", "helper"), header=" Helpers "),
        section("public-func", function("c_1a3", "run")),
    ]
    sections = reclassify_sections(section_defs, "C")
    assert [s.kind for s in sections] == ["public-func", "user-defined"]
    assert sections[-1].header == " Helpers "
    assert section_header_name(sections[-1].kind, sections[-1].header) == "Helpers"
    assert section_priority("user-defined") == USER_DEFINED_PRIORITY


def test_unknown_section_kind() -> None:
    """Verify that unknown kinds sort with the user-defined sections."""
    assert section_priority("public-sparkle") == USER_DEFINED_PRIORITY
    assert section_header_name("public-sparkle") == "Unknown"


def test_compute_member_labels() -> None:
    """Verify the badges derived from flags and the argument string."""
    member = MemberDefDataModel(
        convert_element(
            etree.fromstring(
                function(
                    "c_1a9",
                    "C",
                    argsstring="(const C &amp;other)= delete",
                    attributes='prot="protected" static="no" inline="yes" explicit="yes"',
                )
            )
        )
    )
    assert compute_member_labels(member) == ["inline", "explicit", "protected", "delete"]

    member = MemberDefDataModel(
        convert_element(
            etree.fromstring(
                function(
                    "c_1a10",
                    "~C",
                    argsstring="()=default",
                    attributes='prot="public" static="no" virt="pure-virtual"',
                )
            )
        )
    )
    assert compute_member_labels(member) == ["virtual", "default"]


def test_strong_enum_label(sample_context: ResolutionContext) -> None:
    """Verify that a scoped enum gets the strong label."""
    member = sample_context.members_by_id["namespacedemo_1a11"]
    assert member.labels == ["strong"]
