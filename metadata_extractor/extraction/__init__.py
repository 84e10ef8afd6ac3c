# ==============================================
# EXTRACTION
# ==============================================
#
# This package turns one catalog RDF file into the
# MaskedMetadata record that gets persisted.
#
# Modules:
# --------
# - rdf_document.py   → Namespaces, ParsedDocument, raw node form
# - date_parser.py    → Tolerant publication date parsing
# - rdf_extractor.py  → RdfMetadataExtractor (parse + mask)
#
# ==============================================

from .date_parser import DateParser, InvalidDate, parse_date
from .rdf_document import ParsedDocument, load_document
from .rdf_extractor import (
    MaskedMetadata,
    MaskResult,
    NotReady,
    RdfMetadataExtractor,
    Ready,
)

__all__ = [
    "DateParser",
    "InvalidDate",
    "parse_date",
    "ParsedDocument",
    "load_document",
    "MaskedMetadata",
    "MaskResult",
    "NotReady",
    "RdfMetadataExtractor",
    "Ready",
]
