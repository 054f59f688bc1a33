"""Reads the Doxygen XML export into generic XmlElement trees."""

import logging
from pathlib import Path

from lxml import etree

from doxy2md.errors import InputFileError
from doxy2md.xml_node import XmlElement, XmlNode

logger = logging.getLogger(__name__)

INDEX_FILE_NAME = "index.xml"
DOXYFILE_FILE_NAME = "Doxyfile.xml"


def _local_name(name: str) -> str:
    """Drop the lxml `{namespace}` prefix from a tag or attribute name."""
    if name.startswith("{"):
        return etree.QName(name).localname
    return name


def _append_text(children: list[XmlNode], text: str | None) -> None:
    """Append text, merging with a previous text run."""
    if not text:
        return
    if children and isinstance(children[-1], str):
        children[-1] += text
    else:
        children.append(text)


def convert_element(element: etree._Element) -> XmlElement:
    """Convert an lxml element into the generic node, keeping text order."""
    attributes = {_local_name(key): value for key, value in element.attrib.items()}
    node = XmlElement(name=_local_name(element.tag), attributes=attributes)
    _append_text(node.children, element.text)
    for child in element:
        if isinstance(child.tag, str):
            node.children.append(convert_element(child))
        # Comments and processing instructions vanish, their tail stays.
        _append_text(node.children, child.tail)
    return node


class DoxygenXmlParser:
    """Parses the files of one Doxygen XML output folder."""

    def __init__(self, folder_path: Path | str, *, verbose: bool = False) -> None:
        """Initialize the parser for the given XML folder."""
        self.folder_path = Path(folder_path)
        self.verbose = verbose
        self.parsed_files_counter = 0
        self._xml_parser = etree.XMLParser(
            remove_blank_text=False,
            remove_comments=True,
            remove_pis=True,
            resolve_entities=False,
            huge_tree=True,
        )

    def parse_file(self, file_name: str) -> XmlElement:
        """Parse one file from the folder and return its root element."""
        file_path = self.folder_path / file_name
        if not file_path.is_file():
            msg = f"Required Doxygen XML file not found: {file_path}"
            raise InputFileError(msg)
        if self.verbose:
            print(f"Parsing {file_name}...")
        try:
            tree = etree.parse(str(file_path), self._xml_parser)
        except (etree.XMLSyntaxError, OSError) as e:
            msg = f"Cannot parse {file_path}: {e}"
            raise InputFileError(msg) from e
        self.parsed_files_counter += 1
        return convert_element(tree.getroot())

    def parse_index(self) -> XmlElement:
        """Parse `index.xml`, the table of contents of the export."""
        return self.parse_file(INDEX_FILE_NAME)

    def parse_compound(self, refid: str) -> XmlElement:
        """Parse the `{refid}.xml` file of one compound."""
        return self.parse_file(f"{refid}.xml")

    def parse_doxyfile(self) -> XmlElement:
        """Parse the `Doxyfile.xml` configuration dump."""
        return self.parse_file(DOXYFILE_FILE_NAME)
