"""Predicates and getters over the generic XmlElement representation.

Every getter checks its precondition and raises XmlAccessError when the
element does not have the expected shape; a well formed Doxygen export never
triggers them.
"""

from doxy2md.errors import XmlAccessError
from doxy2md.xml_node import XmlElement, XmlNode


def has_attributes(element: XmlElement) -> bool:
    """Return True if the element carries any attribute."""
    return len(element.attributes) > 0


def get_attributes_names(element: XmlElement) -> list[str]:
    """Return the attribute names in document order."""
    return list(element.attributes.keys())


def has_attribute(element: XmlElement, name: str) -> bool:
    """Return True if the element has the named attribute."""
    return name in element.attributes


def get_attribute_string_value(element: XmlElement, name: str) -> str:
    """Return the raw value of a mandatory attribute."""
    if name not in element.attributes:
        msg = f"<{element.name}> has no attribute '{name}'"
        raise XmlAccessError(msg)
    return element.attributes[name]


def get_attribute_number_value(element: XmlElement, name: str) -> int:
    """Return the value of a mandatory integer attribute."""
    value = get_attribute_string_value(element, name)
    try:
        return int(value)
    except ValueError as e:
        msg = f"<{element.name}> attribute '{name}' is not a number: {value!r}"
        raise XmlAccessError(msg) from e


def get_attribute_boolean_value(element: XmlElement, name: str) -> bool:
    """Return True when a mandatory attribute is `yes` (Doxygen's DoxBool)."""
    return get_attribute_string_value(element, name).lower() == "yes"


def has_inner_element(node: XmlNode, name: str) -> bool:
    """Return True if the child node is an element with the given name."""
    return isinstance(node, XmlElement) and node.name == name


def is_inner_element_text(node: XmlNode) -> bool:
    """Return True if the child node is plain text."""
    return isinstance(node, str)


def has_inner_text(element: XmlElement) -> bool:
    """Return True if the element contains at least one text child."""
    return any(isinstance(child, str) for child in element.children)


def get_inner_elements(element: XmlElement, name: str) -> list[XmlElement]:
    """Return all direct children with the given name."""
    return [
        child
        for child in element.children
        if isinstance(child, XmlElement) and child.name == name
    ]


def get_inner_text(element: XmlElement) -> str:
    """Return the text of an element that must contain only text."""
    parts: list[str] = []
    for child in element.children:
        if not isinstance(child, str):
            msg = f"<{element.name}> has a <{child.name}> child, text expected"
            raise XmlAccessError(msg)
        parts.append(child)
    return "".join(parts)


def _single_inner_element(element: XmlElement, name: str) -> XmlElement:
    """Return the single child element with a name."""
    matches = get_inner_elements(element, name)
    if len(matches) != 1:
        msg = f"<{element.name}> has {len(matches)} <{name}> children, 1 expected"
        raise XmlAccessError(msg)
    return matches[0]


def get_inner_element_text(element: XmlElement, name: str) -> str:
    """Return the text of the single named child; an empty child gives ''."""
    return get_inner_text(_single_inner_element(element, name))


def get_inner_element_number(element: XmlElement, name: str) -> int:
    """Return the integer value of the single named child."""
    text = get_inner_element_text(element, name)
    try:
        return int(text.strip())
    except ValueError as e:
        msg = f"<{element.name}><{name}> is not a number: {text!r}"
        raise XmlAccessError(msg) from e


def get_inner_element_boolean(element: XmlElement, name: str) -> bool:
    """Return True when the single named child contains `yes`."""
    return get_inner_element_text(element, name).strip().lower() == "yes"
