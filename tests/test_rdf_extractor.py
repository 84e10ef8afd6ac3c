# ==============================================
# Tests for RdfMetadataExtractor
# ==============================================

import logging
import math
from datetime import datetime

import pytest

from conftest import make_rdf
from metadata_extractor.errors import ParseError, ValidationError
from metadata_extractor.extraction.date_parser import InvalidDate
from metadata_extractor.extraction.rdf_extractor import (
    MaskedMetadata,
    NotReady,
    RdfMetadataExtractor,
    Ready,
    to_number,
)


def mask_of(write_rdf, body="", about="ebooks/10"):
    result = RdfMetadataExtractor(write_rdf(make_rdf(about=about, body=body))).parse().mask()
    assert isinstance(result, Ready)
    return result.metadata


def subject(value):
    return (
        "<dcterms:subject><rdf:Description>"
        f"<rdf:value>{value}</rdf:value>"
        "</rdf:Description></dcterms:subject>"
    )


# ==============================================
# Constructor / parse
# ==============================================

class TestParse:

    def test_rejects_non_path(self):
        with pytest.raises(TypeError):
            RdfMetadataExtractor(None)

    def test_parse_returns_self_with_document(self, pg10_path):
        extractor = RdfMetadataExtractor(pg10_path)
        assert extractor.document is None
        assert extractor.parse() is extractor
        assert extractor.document is not None
        assert extractor.document.path == pg10_path

    def test_malformed_xml_raises_parse_error(self, write_rdf):
        path = write_rdf("<rdf:RDF><pgterms:ebook></rdf:RDF>")
        with pytest.raises(ParseError) as excinfo:
            RdfMetadataExtractor(path).parse()
        assert excinfo.value.path == path

    def test_missing_file_raises_parse_error(self, tmp_path):
        with pytest.raises(ParseError):
            RdfMetadataExtractor(tmp_path / "missing.rdf").parse()


# ==============================================
# Mask
# ==============================================

class TestMaskNotReady:

    def test_mask_without_parse_is_not_ready(self, pg10_path, caplog):
        extractor = RdfMetadataExtractor(pg10_path)
        with caplog.at_level(logging.WARNING):
            result = extractor.mask()
        assert result == NotReady(pg10_path)
        assert "parsed xml was not found" in caplog.text

    def test_mask_after_failed_parse_is_not_ready(self, write_rdf):
        extractor = RdfMetadataExtractor(write_rdf("not xml"))
        with pytest.raises(ParseError):
            extractor.parse()
        assert isinstance(extractor.mask(), NotReady)


class TestMaskKingJamesBible:

    def test_masked_properties(self, pg10_path):
        result = RdfMetadataExtractor(pg10_path).parse().mask()

        assert result == Ready(MaskedMetadata(
            id=10,
            language="en",
            title="The King James Version of the Bible",
            subjects=["Bible", "BS"],
            authors=[],
            rights=["Public domain in the USA."],
            publication_date=datetime(1989, 8, 1),
            publisher="Project Gutenberg",
        ))

    def test_document_form(self, pg10_path):
        metadata = RdfMetadataExtractor(pg10_path).parse().mask().metadata
        assert metadata.to_document() == {
            "id": 10,
            "language": "en",
            "title": "The King James Version of the Bible",
            "subjects": ["Bible", "BS"],
            "authors": [],
            "rights": ["Public domain in the USA."],
            "publicationDate": datetime(1989, 8, 1),
            "publisher": "Project Gutenberg",
        }


class TestMaskId:

    def test_numeric_suffix(self, write_rdf):
        assert mask_of(write_rdf, about="ebooks/1342").id == 1342

    def test_non_numeric_suffix_is_nan(self, write_rdf):
        assert math.isnan(mask_of(write_rdf, about="ebooks/abc").id)

    def test_missing_about_raises_validation_error(self, write_rdf):
        path = write_rdf(make_rdf(about=None))
        with pytest.raises(ValidationError):
            RdfMetadataExtractor(path).parse().mask()

    def test_missing_entry_raises_validation_error(self, write_rdf):
        path = write_rdf('<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"/>')
        with pytest.raises(ValidationError):
            RdfMetadataExtractor(path).parse().mask()

    @pytest.mark.parametrize("text, expected", [
        ("10", 10),
        (" 42 ", 42),
        ("", 0),
        ("1.5", 1.5),
    ])
    def test_to_number(self, text, expected):
        assert to_number(text) == expected

    @pytest.mark.parametrize("text", ["1_0", "\u0661\u0660", "ten"])
    def test_to_number_rejects_non_decimal_literals(self, text):
        assert math.isnan(to_number(text))

    def test_underscored_suffix_is_nan(self, write_rdf):
        assert math.isnan(mask_of(write_rdf, about="ebooks/1_0").id)


class TestMaskFields:

    def test_empty_entry_has_absent_fields(self, write_rdf):
        metadata = mask_of(write_rdf)
        assert metadata == MaskedMetadata(id=10)
        assert metadata.subjects == []
        assert metadata.authors == []
        assert metadata.rights == []

    def test_title_with_attributes_stays_a_raw_node(self, write_rdf):
        body = '<dcterms:title rdf:datatype="x">Emma</dcterms:title>'
        assert mask_of(write_rdf, body).title == {"@": {"rdf:datatype": "x"}, "#text": "Emma"}

    def test_first_title_and_publisher_win(self, write_rdf):
        body = (
            "<dcterms:title>First</dcterms:title><dcterms:title>Second</dcterms:title>"
            "<dcterms:publisher>PG</dcterms:publisher><dcterms:publisher>Other</dcterms:publisher>"
        )
        metadata = mask_of(write_rdf, body)
        assert metadata.title == "First"
        assert metadata.publisher == "PG"

    def test_subjects_drop_falsy_and_keep_order(self, write_rdf):
        body = (
            subject("Zoology")
            + "<dcterms:subject><rdf:Description/></dcterms:subject>"
            + subject("")
            + subject("Astronomy")
        )
        assert mask_of(write_rdf, body).subjects == ["Zoology", "Astronomy"]

    def test_authors_from_first_creator_drop_falsy_and_keep_order(self, write_rdf):
        body = (
            "<dcterms:creator>"
            "<pgterms:agent><pgterms:name>Shelley, Mary</pgterms:name></pgterms:agent>"
            "<pgterms:agent><pgterms:alias>Anon</pgterms:alias></pgterms:agent>"
            "<pgterms:agent><pgterms:name>Austen, Jane</pgterms:name></pgterms:agent>"
            "</dcterms:creator>"
            "<dcterms:creator>"
            "<pgterms:agent><pgterms:name>Ignored, Second</pgterms:name></pgterms:agent>"
            "</dcterms:creator>"
        )
        assert mask_of(write_rdf, body).authors == ["Shelley, Mary", "Austen, Jane"]

    def test_rights_are_unfiltered(self, write_rdf):
        body = "<dcterms:rights>Public domain in the USA.</dcterms:rights><dcterms:rights/>"
        assert mask_of(write_rdf, body).rights == ["Public domain in the USA.", ""]

    def test_language_reads_nested_value(self, write_rdf):
        body = (
            "<dcterms:language><rdf:Description>"
            '<rdf:value rdf:datatype="http://purl.org/dc/terms/RFC4646">fr</rdf:value>'
            "</rdf:Description></dcterms:language>"
        )
        assert mask_of(write_rdf, body).language == "fr"

    def test_language_without_value_is_absent(self, write_rdf):
        body = "<dcterms:language><rdf:Description/></dcterms:language>"
        assert mask_of(write_rdf, body).language is None


class TestMaskPublicationDate:

    def test_absent_issued_is_none(self, write_rdf):
        assert mask_of(write_rdf).publication_date is None

    def test_unparsable_issued_is_invalid_date(self, write_rdf):
        metadata = mask_of(write_rdf, "<dcterms:issued>someday</dcterms:issued>")
        assert metadata.publication_date == InvalidDate("someday")
        assert metadata.to_document()["publicationDate"] == "someday"

    def test_parsable_issued(self, write_rdf):
        metadata = mask_of(write_rdf, "<dcterms:issued>2004-01-01</dcterms:issued>")
        assert metadata.publication_date == datetime(2004, 1, 1)

    def test_empty_attributed_issued_is_none(self, write_rdf):
        body = '<dcterms:issued rdf:datatype="http://www.w3.org/2001/XMLSchema#date"/>'
        metadata = mask_of(write_rdf, body)
        assert metadata.publication_date is None
        assert metadata.to_document()["publicationDate"] is None


class TestMaskLanguageEmpty:

    def test_empty_language_value_is_absent(self, write_rdf):
        body = (
            "<dcterms:language><rdf:Description>"
            '<rdf:value rdf:datatype="http://purl.org/dc/terms/RFC4646"/>'
            "</rdf:Description></dcterms:language>"
        )
        assert mask_of(write_rdf, body).language is None
