"""`<memberdef>` and `<sectiondef>`."""

from doxy2md.description_model import DocNode, parse_description
from doxy2md.linked_text_model import LinkedTextDataModel
from doxy2md.location_model import LocationDataModel
from doxy2md.model_base import DataModelBase
from doxy2md.param_models import (
    EnumValueDataModel,
    ParamDataModel,
    TemplateParamListDataModel,
)
from doxy2md.reference_models import (
    MemberRefDataModel,
    ReferenceDataModel,
    ReimplementDataModel,
)
from doxy2md.xml_accessors import (
    get_attribute_boolean_value,
    get_attribute_string_value,
    get_attributes_names,
    get_inner_text,
    has_inner_element,
    is_inner_element_text,
)
from doxy2md.xml_node import XmlElement

# DoxBool attributes, stored as booleans under the same name.
MEMBER_BOOLEAN_ATTRIBUTES = frozenset(
    {
        "static",
        "extern",
        "strong",
        "const",
        "explicit",
        "inline",
        "volatile",
        "mutable",
        "noexcept",
        "nodiscard",
        "constexpr",
        "consteval",
        "constinit",
        "final",
        "sealed",
        "new",
        "optional",
        "required",
        "initonly",
        "attribute",
        "property",
        "readonly",
        "bound",
        "removable",
        "constrained",
        "transient",
        "maybevoid",
        "maybedefault",
        "maybeambiguous",
        "readable",
        "writable",
        "gettable",
        "privategettable",
        "protectedgettable",
        "settable",
        "privatesettable",
        "protectedsettable",
        "add",
        "remove",
        "raise",
    }
)
MEMBER_STRING_ATTRIBUTES = frozenset(
    {"kind", "id", "prot", "refqual", "virt", "noexceptexpression", "accessor"}
)


class MemberDefDataModel(DataModelBase):
    """`<memberdef>`: one documented symbol.

    kind, id, prot, name and location are mandatory; every DoxBool flag
    defaults to False.
    """

    def __init__(self, element: XmlElement, element_name: str = "memberdef") -> None:
        super().__init__(element_name)
        self.kind: str | None = None
        self.id: str | None = None
        self.prot: str | None = None
        self.refqual: str | None = None
        self.virt: str | None = None
        self.noexceptexpression: str | None = None
        self.accessor: str | None = None
        self.flags: dict[str, bool] = {}

        self.name: str | None = None
        self.qualified_name: str | None = None
        self.definition: str | None = None
        self.argsstring: str | None = None
        self.bitfield: str | None = None
        self.read: str | None = None
        self.write: str | None = None
        self.type: LinkedTextDataModel | None = None
        self.initializer: LinkedTextDataModel | None = None
        self.exceptions: LinkedTextDataModel | None = None
        self.location: LocationDataModel | None = None
        self.template_param_list: TemplateParamListDataModel | None = None
        self.params: list[ParamDataModel] = []
        self.enum_values: list[EnumValueDataModel] = []
        self.reimplements: list[ReimplementDataModel] = []
        self.reimplemented_by: list[ReimplementDataModel] = []
        self.references: list[ReferenceDataModel] = []
        self.referenced_by: list[ReferenceDataModel] = []
        self.brief_description: DocNode | None = None
        self.detailed_description: DocNode | None = None
        self.inbody_description: DocNode | None = None

        for child in element.children:
            if is_inner_element_text(child):
                continue
            if has_inner_element(child, "name"):
                self.name = get_inner_text(child)
            elif has_inner_element(child, "location"):
                self.location = LocationDataModel(child)
            elif has_inner_element(child, "templateparamlist"):
                self.template_param_list = TemplateParamListDataModel(child)
            elif has_inner_element(child, "type"):
                self.type = LinkedTextDataModel(child, "type")
            elif has_inner_element(child, "definition"):
                self.definition = get_inner_text(child)
            elif has_inner_element(child, "argsstring"):
                self.argsstring = get_inner_text(child)
            elif has_inner_element(child, "qualifiedname"):
                self.qualified_name = get_inner_text(child)
            elif has_inner_element(child, "bitfield"):
                self.bitfield = get_inner_text(child)
            elif has_inner_element(child, "read"):
                self.read = get_inner_text(child)
            elif has_inner_element(child, "write"):
                self.write = get_inner_text(child)
            elif has_inner_element(child, "reimplements"):
                self.reimplements.append(ReimplementDataModel(child, "reimplements"))
            elif has_inner_element(child, "reimplementedby"):
                self.reimplemented_by.append(
                    ReimplementDataModel(child, "reimplementedby")
                )
            elif has_inner_element(child, "param"):
                self.params.append(ParamDataModel(child))
            elif has_inner_element(child, "enumvalue"):
                self.enum_values.append(EnumValueDataModel(child))
            elif has_inner_element(child, "initializer"):
                self.initializer = LinkedTextDataModel(child, "initializer")
            elif has_inner_element(child, "exceptions"):
                self.exceptions = LinkedTextDataModel(child, "exceptions")
            elif has_inner_element(child, "briefdescription"):
                self.brief_description = parse_description(child)
            elif has_inner_element(child, "detaileddescription"):
                self.detailed_description = parse_description(child)
            elif has_inner_element(child, "inbodydescription"):
                self.inbody_description = parse_description(child)
            elif has_inner_element(child, "references"):
                self.references.append(ReferenceDataModel(child, "references"))
            elif has_inner_element(child, "referencedby"):
                self.referenced_by.append(ReferenceDataModel(child, "referencedby"))
            else:
                self.unknown_child(child)

        for name in get_attributes_names(element):
            if name in MEMBER_STRING_ATTRIBUTES:
                setattr(self, name, get_attribute_string_value(element, name))
            elif name in MEMBER_BOOLEAN_ATTRIBUTES:
                self.flags[name] = get_attribute_boolean_value(element, name)
            else:
                self.unknown_attribute(name)

        self.require(self.location, "location element")
        self.require(self.kind, "kind attribute")
        self.require(self.id, "id attribute")
        self.require(self.prot, "prot attribute")
        self.require(self.name, "name element")

    def flag(self, name: str) -> bool:
        """Return a DoxBool attribute, False when absent."""
        return self.flags.get(name, False)


class SectionDefDataModel(DataModelBase):
    """`<sectiondef>`: a kind, an optional header and its members."""

    def __init__(self, element: XmlElement, element_name: str = "sectiondef") -> None:
        super().__init__(element_name)
        self.kind: str | None = None
        self.header: str | None = None
        self.description: DocNode | None = None
        # Definitions and references, in document order.
        self.members: list[MemberDefDataModel | MemberRefDataModel] = []

        for child in element.children:
            if is_inner_element_text(child):
                continue
            if has_inner_element(child, "header"):
                self.header = get_inner_text(child)
            elif has_inner_element(child, "description"):
                self.description = parse_description(child)
            elif has_inner_element(child, "memberdef"):
                self.members.append(MemberDefDataModel(child))
            elif has_inner_element(child, "member"):
                self.members.append(MemberRefDataModel(child))
            else:
                self.unknown_child(child)

        for name in get_attributes_names(element):
            if name == "kind":
                self.kind = get_attribute_string_value(element, name)
            else:
                self.unknown_attribute(name)

        self.require(self.kind, "kind attribute")

    @property
    def member_defs(self) -> list[MemberDefDataModel]:
        """Return only the member definitions."""
        return [m for m in self.members if isinstance(m, MemberDefDataModel)]
