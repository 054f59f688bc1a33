"""`Doxyfile.xml`: the configuration Doxygen ran with."""

from doxy2md.model_base import DataModelBase
from doxy2md.xml_accessors import (
    get_attribute_string_value,
    get_attributes_names,
    get_inner_text,
    has_inner_element,
    is_inner_element_text,
)
from doxy2md.xml_node import XmlElement


class DoxyfileOptionDataModel(DataModelBase):
    """`<option id=... default=... type=...>` with its `<value>` list."""

    def __init__(self, element: XmlElement, element_name: str = "option") -> None:
        super().__init__(element_name)
        self.id: str | None = None
        self.default: str | None = None
        self.type: str | None = None
        self.values: list[str] = []

        for child in element.children:
            if is_inner_element_text(child):
                continue
            if has_inner_element(child, "value"):
                self.values.append(get_inner_text(child))
            else:
                self.unknown_child(child)

        for name in get_attributes_names(element):
            if name in ("id", "default", "type"):
                setattr(self, name, get_attribute_string_value(element, name))
            else:
                self.unknown_attribute(name)

        self.require(self.id, "id attribute")


class DoxyfileDataModel(DataModelBase):
    """Root `<doxyfile>` element."""

    def __init__(self, element: XmlElement, element_name: str = "doxyfile") -> None:
        super().__init__(element_name)
        self.version: str | None = None
        self.lang: str | None = None
        self.options: dict[str, DoxyfileOptionDataModel] = {}

        for child in element.children:
            if is_inner_element_text(child):
                continue
            if has_inner_element(child, "option"):
                option = DoxyfileOptionDataModel(child)
                self.options[option.id] = option
            else:
                self.unknown_child(child)

        for name in get_attributes_names(element):
            if name in ("version", "lang"):
                setattr(self, name, get_attribute_string_value(element, name))
            elif name == "noNamespaceSchemaLocation":
                continue
            else:
                self.unknown_attribute(name)

    def get_option_values(self, option_id: str) -> list[str]:
        """Return the values of an option, empty when not set."""
        option = self.options.get(option_id)
        return option.values if option is not None else []

    def get_option_cdata_value(self, option_id: str) -> str:
        """Return the first value of an option, or ''."""
        values = self.get_option_values(option_id)
        return values[0] if values else ""
