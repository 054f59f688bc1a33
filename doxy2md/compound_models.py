"""`<compounddef>` and the other elements of a per-compound XML file."""

from doxy2md.description_model import DocNode, parse_description, parse_doc_node
from doxy2md.location_model import LocationDataModel
from doxy2md.member_models import SectionDefDataModel
from doxy2md.model_base import DataModelBase
from doxy2md.param_models import TemplateParamListDataModel
from doxy2md.reference_models import (
    CompoundRefDataModel,
    IncludeDataModel,
    InnerRefDataModel,
    ListOfAllMembersDataModel,
)
from doxy2md.xml_accessors import (
    get_attribute_boolean_value,
    get_attribute_string_value,
    get_attributes_names,
    get_inner_text,
    has_inner_element,
    is_inner_element_text,
)
from doxy2md.xml_node import XmlElement

# Inner reference element -> attribute holding the list.
INNER_REF_ELEMENTS = {
    "innerdir": "inner_dirs",
    "innerfile": "inner_files",
    "innerclass": "inner_classes",
    "innernamespace": "inner_namespaces",
    "innerpage": "inner_pages",
    "innergroup": "inner_groups",
    "innermodule": "inner_modules",
    "innerconcept": "inner_concepts",
}

# Graphs and details no page renders.
IGNORED_COMPOUND_ELEMENTS = frozenset(
    {
        "incdepgraph",
        "invincdepgraph",
        "inheritancegraph",
        "collaborationgraph",
        "qualifier",
        "exports",
        "initializer",
        "requiresclause",
    }
)


class TocSectDataModel(DataModelBase):
    """`<tocsect>`: one entry of a page table of contents."""

    def __init__(self, element: XmlElement, element_name: str = "tocsect") -> None:
        super().__init__(element_name)
        self.name: str | None = None
        self.reference: str | None = None
        self.table_of_contents: list[TableOfContentsDataModel] = []

        for child in element.children:
            if is_inner_element_text(child):
                continue
            if has_inner_element(child, "name"):
                self.name = get_inner_text(child)
            elif has_inner_element(child, "reference"):
                self.reference = get_inner_text(child)
            elif has_inner_element(child, "tableofcontents"):
                self.table_of_contents.append(TableOfContentsDataModel(child))
            else:
                self.unknown_child(child)

        self.require(self.name, "name element")
        self.require(self.reference, "reference element")


class TableOfContentsDataModel(DataModelBase):
    """`<tableofcontents>`: nested `<tocsect>` entries."""

    def __init__(
        self, element: XmlElement, element_name: str = "tableofcontents"
    ) -> None:
        super().__init__(element_name)
        self.sections: list[TocSectDataModel] = []
        self.nested: list[TableOfContentsDataModel] = []

        for child in element.children:
            if is_inner_element_text(child):
                continue
            if has_inner_element(child, "tocsect"):
                self.sections.append(TocSectDataModel(child))
            elif has_inner_element(child, "tableofcontents"):
                self.nested.append(TableOfContentsDataModel(child))
            else:
                self.unknown_child(child)

    def references(self) -> list[str]:
        """Return every anchor reference, depth first."""
        refs: list[str] = []
        for sect in self.sections:
            if sect.reference:
                refs.append(sect.reference)
            for toc in sect.table_of_contents:
                refs.extend(toc.references())
        for toc in self.nested:
            refs.extend(toc.references())
        return refs


class CompoundDefDataModel(DataModelBase):
    """`<compounddef>`: one class, namespace, file, folder, group or page.

    id and kind are mandatory, and so is compoundname except for the
    unnamed namespaces Doxygen emits for anonymous scopes.
    """

    def __init__(self, element: XmlElement, element_name: str = "compounddef") -> None:
        super().__init__(element_name)
        self.id: str | None = None
        self.kind: str | None = None
        self.language: str | None = None
        self.prot: str | None = None
        self.final = False
        self.inline = False
        self.sealed = False
        self.abstract = False

        self.compound_name: str | None = None
        self.title: str | None = None
        self.brief_description: DocNode | None = None
        self.detailed_description: DocNode | None = None
        self.base_compound_refs: list[CompoundRefDataModel] = []
        self.derived_compound_refs: list[CompoundRefDataModel] = []
        self.includes: list[IncludeDataModel] = []
        self.included_by: list[IncludeDataModel] = []
        self.template_param_list: TemplateParamListDataModel | None = None
        self.section_defs: list[SectionDefDataModel] = []
        self.table_of_contents: TableOfContentsDataModel | None = None
        self.program_listing: DocNode | None = None
        self.location: LocationDataModel | None = None
        self.list_of_all_members: ListOfAllMembersDataModel | None = None
        self.inner_dirs: list[InnerRefDataModel] = []
        self.inner_files: list[InnerRefDataModel] = []
        self.inner_classes: list[InnerRefDataModel] = []
        self.inner_namespaces: list[InnerRefDataModel] = []
        self.inner_pages: list[InnerRefDataModel] = []
        self.inner_groups: list[InnerRefDataModel] = []
        self.inner_modules: list[InnerRefDataModel] = []
        self.inner_concepts: list[InnerRefDataModel] = []

        for child in element.children:
            if is_inner_element_text(child):
                continue
            if has_inner_element(child, "compoundname"):
                self.compound_name = get_inner_text(child)
            elif has_inner_element(child, "title"):
                self.title = get_inner_text(child)
            elif has_inner_element(child, "briefdescription"):
                self.brief_description = parse_description(child)
            elif has_inner_element(child, "detaileddescription"):
                self.detailed_description = parse_description(child)
            elif has_inner_element(child, "basecompoundref"):
                self.base_compound_refs.append(
                    CompoundRefDataModel(child, "basecompoundref")
                )
            elif has_inner_element(child, "derivedcompoundref"):
                self.derived_compound_refs.append(
                    CompoundRefDataModel(child, "derivedcompoundref")
                )
            elif has_inner_element(child, "includes"):
                self.includes.append(IncludeDataModel(child, "includes"))
            elif has_inner_element(child, "includedby"):
                self.included_by.append(IncludeDataModel(child, "includedby"))
            elif has_inner_element(child, "templateparamlist"):
                self.template_param_list = TemplateParamListDataModel(child)
            elif has_inner_element(child, "sectiondef"):
                self.section_defs.append(SectionDefDataModel(child))
            elif has_inner_element(child, "tableofcontents"):
                self.table_of_contents = TableOfContentsDataModel(child)
            elif has_inner_element(child, "programlisting"):
                listing = parse_doc_node(child, element_name)
                if isinstance(listing, DocNode):
                    self.program_listing = listing
            elif has_inner_element(child, "location"):
                self.location = LocationDataModel(child)
            elif has_inner_element(child, "listofallmembers"):
                self.list_of_all_members = ListOfAllMembersDataModel(child)
            elif child.name in INNER_REF_ELEMENTS:
                getattr(self, INNER_REF_ELEMENTS[child.name]).append(
                    InnerRefDataModel(child, child.name)
                )
            elif child.name in IGNORED_COMPOUND_ELEMENTS:
                continue
            else:
                self.unknown_child(child)

        for name in get_attributes_names(element):
            if name in ("id", "kind", "language", "prot"):
                setattr(self, name, get_attribute_string_value(element, name))
            elif name in ("final", "inline", "sealed", "abstract"):
                setattr(self, name, get_attribute_boolean_value(element, name))
            else:
                self.unknown_attribute(name)

        self.require(self.id, "id attribute")
        self.require(self.kind, "kind attribute")
        if self.kind != "namespace":
            self.require(self.compound_name, "compoundname element")
        if self.compound_name is None:
            self.compound_name = ""


class DoxygenFileDataModel(DataModelBase):
    """Root `<doxygen>` element of a per-compound file."""

    def __init__(self, element: XmlElement, element_name: str = "doxygen") -> None:
        super().__init__(element_name)
        self.version: str | None = None
        self.lang: str | None = None
        self.compound_defs: list[CompoundDefDataModel] = []

        for child in element.children:
            if is_inner_element_text(child):
                continue
            if has_inner_element(child, "compounddef"):
                self.compound_defs.append(CompoundDefDataModel(child))
            else:
                self.unknown_child(child)

        for name in get_attributes_names(element):
            if name in ("version", "lang"):
                setattr(self, name, get_attribute_string_value(element, name))
            elif name == "noNamespaceSchemaLocation":
                continue
            else:
                self.unknown_attribute(name)
