"""Function parameters, template parameter lists and enum values."""

from doxy2md.description_model import DocNode, parse_description
from doxy2md.linked_text_model import LinkedTextDataModel
from doxy2md.model_base import DataModelBase
from doxy2md.xml_accessors import (
    get_attribute_string_value,
    get_attributes_names,
    get_inner_text,
    has_inner_element,
    is_inner_element_text,
)
from doxy2md.xml_node import XmlElement


class ParamDataModel(DataModelBase):
    """`<param>`; every child is optional."""

    def __init__(self, element: XmlElement, element_name: str = "param") -> None:
        super().__init__(element_name)
        self.attributes: str | None = None
        self.type: LinkedTextDataModel | None = None
        self.declname: str | None = None
        self.defname: str | None = None
        self.array: str | None = None
        self.defval: LinkedTextDataModel | None = None
        self.typeconstraint: LinkedTextDataModel | None = None
        self.brief_description: DocNode | None = None

        for child in element.children:
            if is_inner_element_text(child):
                continue
            if has_inner_element(child, "attributes"):
                self.attributes = get_inner_text(child)
            elif has_inner_element(child, "type"):
                self.type = LinkedTextDataModel(child, "type")
            elif has_inner_element(child, "declname"):
                self.declname = get_inner_text(child)
            elif has_inner_element(child, "defname"):
                self.defname = get_inner_text(child)
            elif has_inner_element(child, "array"):
                self.array = get_inner_text(child)
            elif has_inner_element(child, "defval"):
                self.defval = LinkedTextDataModel(child, "defval")
            elif has_inner_element(child, "typeconstraint"):
                self.typeconstraint = LinkedTextDataModel(child, "typeconstraint")
            elif has_inner_element(child, "briefdescription"):
                self.brief_description = parse_description(child)
            else:
                self.unknown_child(child)

        for name in get_attributes_names(element):
            self.unknown_attribute(name)


class TemplateParamListDataModel(DataModelBase):
    """`<templateparamlist>`: the ordered `<param>` list of a template."""

    def __init__(
        self, element: XmlElement, element_name: str = "templateparamlist"
    ) -> None:
        super().__init__(element_name)
        self.params: list[ParamDataModel] = []

        for child in element.children:
            if is_inner_element_text(child):
                continue
            if has_inner_element(child, "param"):
                self.params.append(ParamDataModel(child))
            else:
                self.unknown_child(child)

        for name in get_attributes_names(element):
            self.unknown_attribute(name)

    def parameter_names(self) -> list[str]:
        """Return the names used in `Name<A, B>` style labels."""
        names: list[str] = []
        for param in self.params:
            if param.declname:
                names.append(param.declname)
            elif param.defname:
                names.append(param.defname)
            elif param.type is not None:
                # `typename T` without a declname puts the name in the type.
                words = param.type.plain_text().split()
                if words:
                    names.append(words[-1])
        return names


class EnumValueDataModel(DataModelBase):
    """`<enumvalue>`: id, prot and name are mandatory."""

    def __init__(self, element: XmlElement, element_name: str = "enumvalue") -> None:
        super().__init__(element_name)
        self.name: str | None = None
        self.initializer: LinkedTextDataModel | None = None
        self.brief_description: DocNode | None = None
        self.detailed_description: DocNode | None = None
        self.id: str | None = None
        self.prot: str | None = None

        for child in element.children:
            if is_inner_element_text(child):
                continue
            if has_inner_element(child, "name"):
                self.name = get_inner_text(child)
            elif has_inner_element(child, "initializer"):
                self.initializer = LinkedTextDataModel(child, "initializer")
            elif has_inner_element(child, "briefdescription"):
                self.brief_description = parse_description(child)
            elif has_inner_element(child, "detaileddescription"):
                self.detailed_description = parse_description(child)
            else:
                self.unknown_child(child)

        for name in get_attributes_names(element):
            if name in ("id", "prot"):
                setattr(self, name, get_attribute_string_value(element, name))
            else:
                self.unknown_attribute(name)

        self.require(self.name, "name element")
        self.require(self.id, "id attribute")
        self.require(self.prot, "prot attribute")
