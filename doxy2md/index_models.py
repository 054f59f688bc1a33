"""`index.xml`: the table of contents of a Doxygen XML export."""

from doxy2md.model_base import DataModelBase
from doxy2md.xml_accessors import (
    get_attribute_string_value,
    get_attributes_names,
    get_inner_text,
    has_inner_element,
    is_inner_element_text,
)
from doxy2md.xml_node import XmlElement


class IndexMemberDataModel(DataModelBase):
    """`<member>` entry listed under an index compound."""

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


class IndexCompoundDataModel(DataModelBase):
    """`<compound>` entry: refid, kind and name of one compound file."""

    def __init__(self, element: XmlElement, element_name: str = "compound") -> None:
        super().__init__(element_name)
        self.name: str | None = None
        self.refid: str | None = None
        self.kind: str | None = None
        self.members: list[IndexMemberDataModel] = []

        for child in element.children:
            if is_inner_element_text(child):
                continue
            if has_inner_element(child, "name"):
                self.name = get_inner_text(child)
            elif has_inner_element(child, "member"):
                self.members.append(IndexMemberDataModel(child))
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


class DoxygenIndexDataModel(DataModelBase):
    """Root `<doxygenindex>` element."""

    def __init__(self, element: XmlElement, element_name: str = "doxygenindex") -> None:
        super().__init__(element_name)
        self.version: str | None = None
        self.lang: str | None = None
        self.compounds: list[IndexCompoundDataModel] = []

        for child in element.children:
            if is_inner_element_text(child):
                continue
            if has_inner_element(child, "compound"):
                self.compounds.append(IndexCompoundDataModel(child))
            else:
                self.unknown_child(child)

        for name in get_attributes_names(element):
            if name in ("version", "lang"):
                setattr(self, name, get_attribute_string_value(element, name))
            elif name == "noNamespaceSchemaLocation":
                continue
            else:
                self.unknown_attribute(name)
