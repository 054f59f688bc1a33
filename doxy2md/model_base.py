"""Common base for the typed Doxygen data model classes."""

import logging

from doxy2md.errors import DataIntegrityError
from doxy2md.xml_node import XmlElement

logger = logging.getLogger(__name__)


class DataModelBase:
    """Base class of every typed node built from a generic XmlElement.

    Subclasses walk the element children with an if/elif chain. Anything
    they do not recognize is reported through `unknown_child` or
    `unknown_attribute` and skipped, so a newer Doxygen does not stop the
    conversion.
    """

    def __init__(self, element_name: str) -> None:
        self.element_name = element_name

    def unknown_child(self, child: XmlElement) -> None:
        """Report an inner element the model does not handle."""
        logger.error(
            "%s element: <%s> not implemented yet in %s",
            self.element_name,
            child.name,
            type(self).__name__,
        )

    def unknown_attribute(self, name: str) -> None:
        """Report an attribute the model does not handle."""
        logger.error(
            "%s element: attribute '%s' not implemented yet in %s",
            self.element_name,
            name,
            type(self).__name__,
        )

    def require(self, value: object, what: str) -> None:
        """Fail when a mandatory field was not found in the element."""
        if value is None:
            msg = f"{self.element_name} element: missing mandatory {what} in {type(self).__name__}"
            raise DataIntegrityError(msg)

    def reject_children(self, element: XmlElement) -> None:
        """Fail when an attribute-only element has inner nodes."""
        if element.children:
            msg = f"{self.element_name} element: unexpected children in {type(self).__name__}"
            raise DataIntegrityError(msg)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.element_name!r})"
