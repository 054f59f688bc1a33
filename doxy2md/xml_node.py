"""Generic, order-preserving representation of a parsed XML element."""

from dataclasses import dataclass, field


@dataclass
class XmlElement:
    """One XML element with its attributes and its mixed children.

    Children are either plain strings (text and tail text, untouched) or
    nested elements, in document order.
    """

    name: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list["XmlNode"] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"XmlElement({self.name!r}, {len(self.children)} children)"


XmlNode = str | XmlElement
