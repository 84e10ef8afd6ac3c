# ==============================================
# RdfMetadataExtractor
# ==============================================
#
# PURPOSE:
#   Parse one catalog RDF file and mask it down to the fixed
#   subset of fields we persist (MaskedMetadata).
#
# CLASS: RdfMetadataExtractor
# ---------------------------
#   Constructor:
#   ------------
#   - __init__(rdf_path)
#
#   Methods:
#   --------
#   - parse() -> RdfMetadataExtractor
#       Read + parse the file. Raises ParseError. Returns self.
#
#   - mask() -> Ready | NotReady
#       NotReady if parse() never succeeded (logged as a warning,
#       never raised). Otherwise Ready(MaskedMetadata).
#
# FIELD RULES (first pgterms:ebook node):
# ---------------------------------------
#   id               rdf:about minus "ebooks/", numeric (nan if not)
#   language         text of dcterms:language/rdf:Description/rdf:value
#   title            first dcterms:title, raw node
#   subjects         every dcterms:subject → rdf:Description/rdf:value, falsy dropped
#   authors          first dcterms:creator → every pgterms:agent → pgterms:name, falsy dropped
#   rights           every dcterms:rights, raw node, unfiltered
#   publicationDate  dcterms:issued text → datetime | InvalidDate | None
#   publisher        first dcterms:publisher, raw node
#
# ==============================================

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from metadata_extractor.errors import PARSED_XML_NOT_FOUND, MISSING_ID, ValidationError
from metadata_extractor.extraction.date_parser import InvalidDate, parse_date
from metadata_extractor.extraction.rdf_document import (
    RDF_NS,
    ParsedDocument,
    RawNode,
    clark,
    element_text,
    load_document,
    raw_node,
)

logger = logging.getLogger(__name__)

ID_PREFIX = "ebooks/"


@dataclass(frozen=True)
class MaskedMetadata:
    """The normalized subset of one catalog entry."""
    id: Union[int, float]
    language: Optional[str] = None
    title: Optional[RawNode] = None
    subjects: List[RawNode] = field(default_factory=list)
    authors: List[RawNode] = field(default_factory=list)
    rights: List[RawNode] = field(default_factory=list)
    publication_date: Union[datetime, InvalidDate, None] = None
    publisher: Optional[RawNode] = None

    def to_document(self) -> dict:
        """Mongo document form. An InvalidDate is stored as its source text."""
        publication_date = self.publication_date
        if isinstance(publication_date, InvalidDate):
            publication_date = publication_date.source

        return {
            "id": self.id,
            "language": self.language,
            "title": self.title,
            "subjects": list(self.subjects),
            "authors": list(self.authors),
            "rights": list(self.rights),
            "publicationDate": publication_date,
            "publisher": self.publisher,
        }


@dataclass(frozen=True)
class Ready:
    metadata: MaskedMetadata


@dataclass(frozen=True)
class NotReady:
    path: Path


MaskResult = Union[Ready, NotReady]


def to_number(text: str) -> Union[int, float]:
    """Blank → 0, integer → int, decimal → float, anything else → nan."""
    stripped = text.strip()
    if not stripped:
        return 0
    if not stripped.isascii() or "_" in stripped:
        return math.nan
    try:
        return int(stripped)
    except ValueError:
        pass
    try:
        return float(stripped)
    except ValueError:
        return math.nan


def extract_id(document: ParsedDocument) -> Optional[Union[int, float]]:
    entry = document.entry()
    if entry is None:
        return None
    about = entry.get(clark('rdf:about'))
    if about is None:
        return None
    return to_number(about.replace(ID_PREFIX, "", 1))


def extract_language(document: ParsedDocument) -> Optional[str]:
    language = document.first('dcterms:language')
    if language is None:
        return None
    return element_text(language.find('rdf:Description/rdf:value', RDF_NS))


def extract_title(document: ParsedDocument) -> Optional[RawNode]:
    title = document.first('dcterms:title')
    return raw_node(title) if title is not None else None


def extract_publisher(document: ParsedDocument) -> Optional[RawNode]:
    publisher = document.first('dcterms:publisher')
    return raw_node(publisher) if publisher is not None else None


def extract_subjects(document: ParsedDocument) -> List[RawNode]:
    subjects = []
    for subject in document.entry_children('dcterms:subject'):
        value = subject.find('rdf:Description/rdf:value', RDF_NS)
        subjects.append(raw_node(value) if value is not None else None)
    return [subject for subject in subjects if subject]


def extract_authors(document: ParsedDocument) -> List[RawNode]:
    creator = document.first('dcterms:creator')
    if creator is None:
        return []
    authors = []
    for agent in creator.findall('pgterms:agent', RDF_NS):
        name = agent.find('pgterms:name', RDF_NS)
        authors.append(raw_node(name) if name is not None else None)
    return [author for author in authors if author]


def extract_rights(document: ParsedDocument) -> List[RawNode]:
    return [raw_node(rights) for rights in document.entry_children('dcterms:rights')]


def extract_publication_date(document: ParsedDocument) -> Union[datetime, InvalidDate, None]:
    return parse_date(element_text(document.first('dcterms:issued')))


class RdfMetadataExtractor:
    """
    Parses a single catalog RDF file and masks its metadata.
    """

    def __init__(self, rdf_path: Union[str, Path]):
        """
        Args:
            rdf_path: Path of the target RDF file
        """
        if not isinstance(rdf_path, (str, Path)):
            raise TypeError("rdf_path must be a str or Path")

        self.rdf_path = Path(rdf_path)
        self._document: Optional[ParsedDocument] = None

    @property
    def document(self) -> Optional[ParsedDocument]:
        return self._document

    def parse(self) -> "RdfMetadataExtractor":
        """
        Parse the RDF file into a document.

        Returns:
            This extractor, holding the parsed document

        Raises:
            ParseError: the file is unreadable or not well-formed
        """
        self._document = load_document(self.rdf_path)
        return self

    def mask(self) -> MaskResult:
        """
        Extract the masked metadata from the parsed document.

        Returns:
            Ready(MaskedMetadata), or NotReady if parse() did not succeed

        Raises:
            ValidationError: the document has no catalog entry id
        """
        if self._document is None:
            logger.warning("Warning: %s %s", PARSED_XML_NOT_FOUND, self.rdf_path)
            return NotReady(self.rdf_path)

        document = self._document
        entry_id = extract_id(document)
        if entry_id is None:
            raise ValidationError(f"{MISSING_ID} ({self.rdf_path})")

        return Ready(MaskedMetadata(
            id=entry_id,
            language=extract_language(document),
            title=extract_title(document),
            subjects=extract_subjects(document),
            authors=extract_authors(document),
            rights=extract_rights(document),
            publication_date=extract_publication_date(document),
            publisher=extract_publisher(document),
        ))
