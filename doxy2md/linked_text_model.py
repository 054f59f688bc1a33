"""Linked text: type expressions and initializers that embed references."""

from doxy2md.model_base import DataModelBase
from doxy2md.xml_accessors import (
    get_attribute_string_value,
    get_attributes_names,
    get_inner_text,
    has_inner_element,
    is_inner_element_text,
)
from doxy2md.xml_node import XmlElement


class RefTextDataModel(DataModelBase):
    """A `<ref>` inside linked text; `kindref` is `compound` or `member`."""

    def __init__(self, element: XmlElement, element_name: str = "ref") -> None:
        super().__init__(element_name)
        self.text = get_inner_text(element)
        self.refid: str | None = None
        self.kindref: str | None = None
        self.external: str | None = None
        self.tooltip: str | None = None

        for name in get_attributes_names(element):
            if name in ("refid", "kindref", "external", "tooltip"):
                setattr(self, name, get_attribute_string_value(element, name))
            else:
                self.unknown_attribute(name)

        self.require(self.refid, "refid attribute")
        self.require(self.kindref, "kindref attribute")


class LinkedTextDataModel(DataModelBase):
    """Ordered mix of text and references (`<type>`, `<initializer>`, `<defval>`, ...)."""

    def __init__(self, element: XmlElement, element_name: str) -> None:
        super().__init__(element_name)
        self.children: list[str | RefTextDataModel] = []

        for child in element.children:
            if is_inner_element_text(child):
                self.children.append(child)
            elif has_inner_element(child, "ref"):
                self.children.append(RefTextDataModel(child))
            else:
                self.unknown_child(child)

        for name in get_attributes_names(element):
            self.unknown_attribute(name)

    def plain_text(self) -> str:
        """Return the text with the references flattened to their labels."""
        return "".join(
            child if isinstance(child, str) else child.text for child in self.children
        )
