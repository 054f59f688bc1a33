"""Loads the whole Doxygen XML export into the typed data model."""

import logging
from dataclasses import dataclass
from pathlib import Path

from doxy2md.compound_models import CompoundDefDataModel, DoxygenFileDataModel
from doxy2md.doxyfile_model import DoxyfileDataModel
from doxy2md.errors import DataIntegrityError
from doxy2md.index_models import DoxygenIndexDataModel
from doxy2md.xml_parser import DoxygenXmlParser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataModel:
    """The ingestion result: index, compound definitions and Doxyfile."""

    index: DoxygenIndexDataModel
    compound_defs: list[CompoundDefDataModel]
    doxyfile: DoxyfileDataModel

    @property
    def doxygen_version(self) -> str:
        """Return the Doxygen version recorded in index.xml."""
        return self.index.version or ""


def load_data_model(folder_path: Path | str, *, verbose: bool = False) -> DataModel:
    """Parse index.xml, every compound file it lists, and Doxyfile.xml."""
    parser = DoxygenXmlParser(folder_path, verbose=verbose)
    index = DoxygenIndexDataModel(parser.parse_index())

    compound_defs: list[CompoundDefDataModel] = []
    seen_refids: set[str] = set()
    for compound in index.compounds:
        if compound.refid in seen_refids:
            continue
        seen_refids.add(compound.refid)
        doxygen_file = DoxygenFileDataModel(parser.parse_compound(compound.refid))
        compound_defs.extend(doxygen_file.compound_defs)

    doxyfile = DoxyfileDataModel(parser.parse_doxyfile())

    ids: set[str] = set()
    for compound_def in compound_defs:
        if compound_def.id in ids:
            msg = f"Duplicate compound id {compound_def.id}"
            raise DataIntegrityError(msg)
        ids.add(compound_def.id)

    print(
        f"Parsed {parser.parsed_files_counter} XML files, "
        f"{len(compound_defs)} compounds"
    )
    return DataModel(index=index, compound_defs=compound_defs, doxyfile=doxyfile)
