# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# - MongoDB is replaced by mongomock, injected through
#   MetadataStore(client=...).
# - The catalog download is served by FakeHttpSession, which
#   hands back prepared bytes the way requests streams them.
# - build_catalog() produces a real zip → tar → rdf archive.
#
# ==============================================

import io
import tarfile
import zipfile
from pathlib import Path

import mongomock
import pytest
import requests

from metadata_extractor.fetch.archive_fetcher import ArchiveFetcher
from metadata_extractor.fetch.file_discoverer import FileDiscoverer
from metadata_extractor.pipeline import PipelineOrchestrator
from metadata_extractor.storage.metadata_store import MetadataStore


FIXTURES_DIR = Path(__file__).parent / "fixtures"

RDF_HEADER = (
    '<?xml version="1.0" encoding="utf-8"?>\n'
    '<rdf:RDF xmlns:dcam="http://purl.org/dc/dcam/"'
    ' xmlns:dcterms="http://purl.org/dc/terms/"'
    ' xmlns:pgterms="http://www.gutenberg.org/2009/pgterms/"'
    ' xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#">\n'
)


def make_rdf(about="ebooks/10", body=""):
    """Wrap body in a pgterms:ebook entry inside an rdf:RDF document."""
    about_attr = f' rdf:about="{about}"' if about is not None else ""
    return f'{RDF_HEADER}<pgterms:ebook{about_attr}>{body}</pgterms:ebook>\n</rdf:RDF>\n'


def build_tar(files):
    """files: {relative path: bytes} → tar archive bytes."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w") as archive:
        for name, data in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            archive.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


def build_catalog(files, inner_name="rdf-files.tar", inner_bytes=None):
    """Zip container holding a tar of the given files, like the Gutenberg feed."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, mode="w") as container:
        container.writestr(inner_name, inner_bytes if inner_bytes is not None else build_tar(files))
    return buffer.getvalue()


class FakeResponse:
    def __init__(self, payload=b"", status_code=200, error=None):
        self.payload = payload
        self.status_code = status_code
        self.error = error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def iter_content(self, chunk_size=1):
        if self.error is not None:
            raise self.error
        for start in range(0, len(self.payload), chunk_size):
            yield self.payload[start:start + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False


class FakeHttpSession:
    """Stands in for requests.Session, records every requested URL."""

    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.requests = []

    def get(self, url, stream=False, timeout=None):
        self.requests.append({"url": url, "stream": stream, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def pg10_path():
    return FIXTURES_DIR / "pg10.rdf"


@pytest.fixture
def pg10_bytes(pg10_path):
    return pg10_path.read_bytes()


@pytest.fixture
def write_rdf(tmp_path):
    """Write an RDF document into tmp_path and return its path."""
    def _write(content, name="pg.rdf"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def store(mongo_client):
    """A connected MetadataStore backed by mongomock."""
    metadata_store = MetadataStore(
        url="mongodb://unused",
        database="test_db",
        collection="metadata",
        client=mongo_client
    )
    metadata_store.connect()
    yield metadata_store
    metadata_store.disconnect()


@pytest.fixture
def make_orchestrator(tmp_path, store):
    """Build an orchestrator whose download is served from the given payload."""
    def _make(payload=b"", http_session=None):
        http_session = http_session or FakeHttpSession(FakeResponse(payload))
        fetcher = ArchiveFetcher(timeout=5, chunk_size=64, session=http_session)
        return PipelineOrchestrator(
            temp_path=tmp_path / "temp",
            feed_url="http://feeds.test/rdf-files.tar.zip",
            fetcher=fetcher,
            discoverer=FileDiscoverer(),
            store=store
        )
    return _make
