# ==============================================
# RDF Document Model
# ==============================================
#
# PURPOSE:
#   Typed view over one parsed catalog RDF/XML file.
#   Knows the Dublin Core + Gutenberg namespaces and how to
#   turn an element into its "raw node" structural form.
#
# RAW NODE FORM:
# --------------
#   <dcterms:title>Bible</dcterms:title>           → "Bible"
#   <dcterms:issued rdf:datatype="...">1989</...>  → {"@": {"rdf:datatype": "..."},
#                                                      "#text": "1989"}
#   <rdf:Description><rdf:value>BS</rdf:value>     → {"rdf:value": ["BS"]}
#   Element with no attributes and no children     → its text ("" if none)
#
# ==============================================

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from xml.etree import ElementTree as ET

from metadata_extractor.errors import ParseError


RDF_NS = {
    'rdf': 'http://www.w3.org/1999/02/22-rdf-syntax-ns#',
    'dcterms': 'http://purl.org/dc/terms/',
    'pgterms': 'http://www.gutenberg.org/2009/pgterms/',
    'dcam': 'http://purl.org/dc/dcam/',
    'rdfs': 'http://www.w3.org/2000/01/rdf-schema#',
    'cc': 'http://web.resource.org/cc/',
    'marcrel': 'http://id.loc.gov/vocabulary/relators/',
}

_PREFIX_BY_URI = {uri: prefix for prefix, uri in RDF_NS.items()}

ATTRIBUTES_KEY = "@"
TEXT_KEY = "#text"

RawNode = Union[str, Dict[str, Any]]


def qualify(name: str) -> str:
    """Turn Clark notation ("{uri}local") into "prefix:local" for known namespaces."""
    if not name.startswith('{'):
        return name
    uri, local = name[1:].split('}', 1)
    prefix = _PREFIX_BY_URI.get(uri)
    return f"{prefix}:{local}" if prefix else name


def clark(qualified_name: str) -> str:
    """Inverse of qualify(): "rdf:about" → "{http://...#}about"."""
    prefix, local = qualified_name.split(':', 1)
    return f"{{{RDF_NS[prefix]}}}{local}"


def raw_node(element: ET.Element) -> RawNode:
    children = list(element)
    text = element.text or ""
    for child in children:
        text += child.tail or ""

    if not element.attrib and not children:
        return text

    node: Dict[str, Any] = {}
    if element.attrib:
        node[ATTRIBUTES_KEY] = {qualify(k): v for k, v in element.attrib.items()}
    if text.strip():
        node[TEXT_KEY] = text
    for child in children:
        node.setdefault(qualify(child.tag), []).append(raw_node(child))
    return node


def element_text(element: Optional[ET.Element]) -> Optional[str]:
    if element is None:
        return None
    # blank text reads as absent
    if element.text is None or not element.text.strip():
        return None
    return element.text


@dataclass
class ParsedDocument:
    """One parsed RDF file."""
    path: Path
    root: ET.Element

    def entry(self) -> Optional[ET.Element]:
        """First catalog-entry (pgterms:ebook) node, if any."""
        if self.root.tag == clark('pgterms:ebook'):
            return self.root
        return self.root.find('pgterms:ebook', RDF_NS)

    def entry_children(self, qualified_name: str) -> List[ET.Element]:
        entry = self.entry()
        if entry is None:
            return []
        return entry.findall(qualified_name, RDF_NS)

    def first(self, qualified_name: str) -> Optional[ET.Element]:
        children = self.entry_children(qualified_name)
        return children[0] if children else None


def load_document(path: Union[str, Path]) -> ParsedDocument:
    """
    Read and parse one RDF file.

    Raises:
        ParseError: file unreadable or not well-formed XML
    """
    path = Path(path)
    try:
        with open(path, 'rb') as f:
            root = ET.parse(f).getroot()
    except ET.ParseError as e:
        raise ParseError(f"Malformed RDF document {path}: {e}", path=path) from e
    except OSError as e:
        raise ParseError(f"Could not read RDF document {path}: {e}", path=path) from e
    return ParsedDocument(path=path, root=root)
