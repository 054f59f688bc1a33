"""The `<location>` element: where an entity is declared and defined."""

from doxy2md.model_base import DataModelBase
from doxy2md.xml_accessors import (
    get_attribute_number_value,
    get_attribute_string_value,
    get_attributes_names,
)
from doxy2md.xml_node import XmlElement

_STRING_ATTRIBUTES = ("file", "declfile", "bodyfile")
_NUMBER_ATTRIBUTES = (
    "line",
    "column",
    "declline",
    "declcolumn",
    "bodystart",
    "bodyend",
)


class LocationDataModel(DataModelBase):
    """Attribute-only element; `file` is mandatory."""

    def __init__(self, element: XmlElement, element_name: str = "location") -> None:
        super().__init__(element_name)
        self.reject_children(element)

        self.file: str | None = None
        self.line: int | None = None
        self.column: int | None = None
        self.declfile: str | None = None
        self.declline: int | None = None
        self.declcolumn: int | None = None
        self.bodyfile: str | None = None
        self.bodystart: int | None = None
        self.bodyend: int | None = None

        for name in get_attributes_names(element):
            if name in _STRING_ATTRIBUTES:
                setattr(self, name, get_attribute_string_value(element, name))
            elif name in _NUMBER_ATTRIBUTES:
                setattr(self, name, get_attribute_number_value(element, name))
            else:
                self.unknown_attribute(name)

        self.require(self.file, "file attribute")
