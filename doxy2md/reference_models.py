"""Lightweight reference elements pointing at other compounds or members."""

from doxy2md.model_base import DataModelBase
from doxy2md.xml_accessors import (
    get_attribute_boolean_value,
    get_attribute_number_value,
    get_attribute_string_value,
    get_attributes_names,
    get_inner_text,
    has_inner_element,
    is_inner_element_text,
)
from doxy2md.xml_node import XmlElement


class CompoundRefDataModel(DataModelBase):
    """`<basecompoundref>` / `<derivedcompoundref>`; refid is absent for undocumented bases."""

    def __init__(self, element: XmlElement, element_name: str) -> None:
        super().__init__(element_name)
        self.text = get_inner_text(element)
        self.refid: str | None = None
        self.prot: str | None = None
        self.virt: str | None = None

        for name in get_attributes_names(element):
            if name in ("refid", "prot", "virt"):
                setattr(self, name, get_attribute_string_value(element, name))
            else:
                self.unknown_attribute(name)

        self.require(self.prot, "prot attribute")
        self.require(self.virt, "virt attribute")


class InnerRefDataModel(DataModelBase):
    """`<innerclass>`, `<innernamespace>`, `<innerfile>`, `<innerdir>`, ... (refType)."""

    def __init__(self, element: XmlElement, element_name: str) -> None:
        super().__init__(element_name)
        self.text = get_inner_text(element)
        self.refid: str | None = None
        self.prot: str | None = None
        self.inline = False

        for name in get_attributes_names(element):
            if name == "refid":
                self.refid = get_attribute_string_value(element, name)
            elif name == "prot":
                self.prot = get_attribute_string_value(element, name)
            elif name == "inline":
                self.inline = get_attribute_boolean_value(element, name)
            else:
                self.unknown_attribute(name)

        self.require(self.refid, "refid attribute")


class IncludeDataModel(DataModelBase):
    """`<includes>` / `<includedby>`; `local` tells quotes from angle brackets."""

    def __init__(self, element: XmlElement, element_name: str) -> None:
        super().__init__(element_name)
        self.text = get_inner_text(element)
        self.refid: str | None = None
        self.local = False

        for name in get_attributes_names(element):
            if name == "refid":
                self.refid = get_attribute_string_value(element, name)
            elif name == "local":
                self.local = get_attribute_boolean_value(element, name)
            else:
                self.unknown_attribute(name)


class ReferenceDataModel(DataModelBase):
    """`<references>` / `<referencedby>` call-graph entries."""

    def __init__(self, element: XmlElement, element_name: str) -> None:
        super().__init__(element_name)
        self.text = get_inner_text(element)
        self.refid: str | None = None
        self.compoundref: str | None = None
        self.startline: int | None = None
        self.endline: int | None = None

        for name in get_attributes_names(element):
            if name in ("refid", "compoundref"):
                setattr(self, name, get_attribute_string_value(element, name))
            elif name in ("startline", "endline"):
                setattr(self, name, get_attribute_number_value(element, name))
            else:
                self.unknown_attribute(name)

        self.require(self.refid, "refid attribute")


class ReimplementDataModel(DataModelBase):
    """`<reimplements>` / `<reimplementedby>`."""

    def __init__(self, element: XmlElement, element_name: str) -> None:
        super().__init__(element_name)
        self.text = get_inner_text(element)
        self.refid: str | None = None

        for name in get_attributes_names(element):
            if name == "refid":
                self.refid = get_attribute_string_value(element, name)
            else:
                self.unknown_attribute(name)

        self.require(self.refid, "refid attribute")


class MemberRefDataModel(DataModelBase):
    """`<member>` inside a sectiondef: a pointer to a member defined elsewhere."""

    def __init__(self, element: XmlElement, element_name: str = "member") -> None:
        super().__init__(element_name)
        self.name: str | None = None
        self.refid: str | None = None
        self.kind: str | None = None

        for child in element.children:
            if is_inner_element_text(child):
                continue
            if has_inner_element(child, "name"):
                self.name = get_inner_text(child)
            else:
                self.unknown_child(child)

        for name in get_attributes_names(element):
            if name in ("refid", "kind"):
                setattr(self, name, get_attribute_string_value(element, name))
            else:
                self.unknown_attribute(name)

        self.require(self.name, "name element")
        self.require(self.refid, "refid attribute")
        self.require(self.kind, "kind attribute")


class ListMemberRefDataModel(DataModelBase):
    """`<member>` inside `<listofallmembers>`."""

    def __init__(self, element: XmlElement, element_name: str = "member") -> None:
        super().__init__(element_name)
        self.scope: str | None = None
        self.name: str | None = None
        self.refid: str | None = None
        self.prot: str | None = None
        self.virt: str | None = None
        self.ambiguityscope: str | None = None

        for child in element.children:
            if is_inner_element_text(child):
                continue
            if has_inner_element(child, "scope"):
                self.scope = get_inner_text(child)
            elif has_inner_element(child, "name"):
                self.name = get_inner_text(child)
            else:
                self.unknown_child(child)

        for name in get_attributes_names(element):
            if name in ("refid", "prot", "virt", "ambiguityscope"):
                setattr(self, name, get_attribute_string_value(element, name))
            else:
                self.unknown_attribute(name)

        self.require(self.scope, "scope element")
        self.require(self.name, "name element")
        self.require(self.refid, "refid attribute")


class ListOfAllMembersDataModel(DataModelBase):
    """`<listofallmembers>` of a class, inherited members included."""

    def __init__(
        self, element: XmlElement, element_name: str = "listofallmembers"
    ) -> None:
        super().__init__(element_name)
        self.members: list[ListMemberRefDataModel] = []

        for child in element.children:
            if is_inner_element_text(child):
                continue
            if has_inner_element(child, "member"):
                self.members.append(ListMemberRefDataModel(child))
            else:
                self.unknown_child(child)
