"""Re-buckets Doxygen sections into constructors, destructor, operators, ...

Doxygen groups members by visibility only (`public-func`, `private-attrib`).
Pages want a finer taxonomy, derived here from the member kind and name.
"""

import logging
from dataclasses import dataclass, field

from doxy2md.description_model import DocNode
from doxy2md.member_models import MemberDefDataModel, SectionDefDataModel
from doxy2md.reference_models import MemberRefDataModel

logger = logging.getLogger(__name__)

USER_DEFINED_KIND = "user-defined"
USER_DEFINED_PRIORITY = 1000

# Adjusted section kind -> (header, priority). Lower priority comes first.
SECTION_HEADERS: dict[str, tuple[str, int]] = {
    "typedef": ("Typedefs", 100),
    "public-type": ("Public Member Typedefs", 110),
    "protected-type": ("Protected Member Typedefs", 120),
    "private-type": ("Private Member Typedefs", 130),
    "package-type": ("Package Member Typedefs", 140),
    "enum": ("Enumerations", 150),
    "friend": ("Friends", 160),
    "interface": ("Interfaces", 170),
    "constructorr": ("Constructors", 200),
    "public-constructorr": ("Public Constructors", 200),
    "protected-constructorr": ("Protected Constructors", 210),
    "private-constructorr": ("Private Constructors", 220),
    "destructor": ("Destructor", 230),
    "public-destructor": ("Public Destructor", 230),
    "protected-destructor": ("Protected Destructor", 240),
    "private-destructor": ("Private Destructor", 250),
    "operator": ("Operators", 300),
    "public-operator": ("Public Operators", 310),
    "protected-operator": ("Protected Operators", 320),
    "private-operator": ("Private Operators", 330),
    "package-operator": ("Package Operators", 340),
    "func": ("Functions", 350),
    "function": ("Functions", 350),
    "public-func": ("Public Member Functions", 360),
    "protected-func": ("Protected Member Functions", 370),
    "private-func": ("Private Member Functions", 380),
    "package-func": ("Package Member Functions", 390),
    "var": ("Variables", 400),
    "variable": ("Variables", 400),
    "public-attrib": ("Public Member Attributes", 410),
    "protected-attrib": ("Protected Member Attributes", 420),
    "private-attrib": ("Private Member Attributes", 430),
    "package-attrib": ("Package Member Attributes", 440),
    "public-static-operator": ("Public Operators", 450),
    "protected-static-operator": ("Protected Operators", 460),
    "private-static-operator": ("Private Operators", 470),
    "package-static-operator": ("Package Operators", 480),
    "public-static-func": ("Public Static Functions", 500),
    "protected-static-func": ("Protected Static Functions", 510),
    "private-static-func": ("Private Static Functions", 520),
    "package-static-func": ("Package Static Functions", 530),
    "public-static-attrib": ("Public Static Attributes", 600),
    "protected-static-attrib": ("Protected Static Attributes", 610),
    "private-static-attrib": ("Private Static Attributes", 620),
    "package-static-attrib": ("Package Static Attributes", 630),
    "slot": ("Slots", 700),
    "public-slot": ("Public Slots", 700),
    "protected-slot": ("Protected Slot", 710),
    "private-slot": ("Private Slot", 720),
    "related": ("Related", 800),
    "define": ("Macro Definitions", 810),
    "prototype": ("Prototypes", 820),
    "signal": ("Signals", 830),
    "dcop": ("DCOP Functions", 840),
    "property": ("Properties", 850),
    "event": ("Events", 860),
    "service": ("Services", 870),
    USER_DEFINED_KIND: ("Definitions", USER_DEFINED_PRIORITY),
}

OPERATOR_SUFFIX_CHARACTERS = ' =!<>+-*/%&|^~,"(['


@dataclass
class ReclassifiedSection:
    """A section after re-bucketing; members keep their source order."""

    kind: str
    header: str | None = None
    description: DocNode | None = None
    members: list[MemberDefDataModel | MemberRefDataModel] = field(
        default_factory=list
    )


def is_operator(name: str) -> bool:
    """Return True for operator overload names (`operator==`, `operator()`, ...)."""
    return name.startswith("operator") and name[8:9] in OPERATOR_SUFFIX_CHARACTERS


def compute_adjusted_kind(
    section_kind: str, section_suffix: str, member_suffix: str | None = None
) -> str:
    """Replace the last word of a section kind, keeping its visibility prefix.

    `public-static-func` with `operator` gives `public-static-operator`;
    kinds without a prefix and user-defined sections take the member suffix.
    """
    if member_suffix is None:
        member_suffix = section_suffix
    if section_kind == USER_DEFINED_KIND:
        return member_suffix
    if "-" in section_kind:
        return section_kind[: section_kind.rindex("-") + 1] + section_suffix
    return member_suffix


def adjust_section_kind(
    section_kind: str,
    member_kind: str,
    member_name: str,
    class_unqualified_name: str | None = None,
) -> str:
    """Return the bucket key of one member."""
    if member_kind == "function":
        if is_operator(member_name):
            return compute_adjusted_kind(section_kind, "operator")
        if class_unqualified_name is not None:
            if member_name == class_unqualified_name:
                return compute_adjusted_kind(section_kind, "constructorr")
            if member_name.replace("~", "", 1) == class_unqualified_name:
                return compute_adjusted_kind(section_kind, "destructor")
        return compute_adjusted_kind(section_kind, "func", "function")
    if member_kind == "variable":
        return compute_adjusted_kind(section_kind, "attrib", "variable")
    if member_kind == "typedef":
        return compute_adjusted_kind(section_kind, "type", "typedef")
    if member_kind == "slot":
        return compute_adjusted_kind(section_kind, "slot")
    return member_kind


def section_header_name(kind: str, header: str | None = None) -> str:
    """Return the title shown for a section."""
    if kind == USER_DEFINED_KIND:
        if header is not None:
            return header.strip()
        return "User Defined"
    if header is not None:
        logger.warning("header %r ignored in sectiondef of kind %s", header, kind)
    entry = SECTION_HEADERS.get(kind)
    if entry is None:
        logger.error("section kind %s not yet rendered", kind)
        return "Unknown"
    return entry[0]


def section_priority(kind: str) -> int:
    """Return the sort key of a section kind; user-defined sections come last."""
    if kind == USER_DEFINED_KIND:
        return USER_DEFINED_PRIORITY
    entry = SECTION_HEADERS.get(kind)
    if entry is None:
        return USER_DEFINED_PRIORITY
    return entry[1]


def reclassify_sections(
    section_defs: list[SectionDefDataModel],
    class_unqualified_name: str | None = None,
) -> list[ReclassifiedSection]:
    """Merge the members of all sections into kind buckets and sort them.

    Titled user-defined sections pass through unchanged. Every other member
    lands in exactly one bucket, so no member is lost or duplicated.
    """
    result: list[ReclassifiedSection] = []
    by_kind: dict[str, ReclassifiedSection] = {}

    for section_def in section_defs:
        if section_def.kind == USER_DEFINED_KIND and section_def.header is not None:
            result.append(
                ReclassifiedSection(
                    kind=section_def.kind,
                    header=section_def.header,
                    description=section_def.description,
                    members=list(section_def.members),
                )
            )
            continue

        for member in section_def.members:
            adjusted_kind = adjust_section_kind(
                section_def.kind,
                member.kind,
                member.name,
                class_unqualified_name,
            )
            bucket = by_kind.get(adjusted_kind)
            if bucket is None:
                bucket = ReclassifiedSection(kind=adjusted_kind)
                by_kind[adjusted_kind] = bucket
            bucket.members.append(member)

    result.extend(by_kind.values())
    return sorted(result, key=lambda section: section_priority(section.kind))
