# ==============================================
# PipelineOrchestrator — Extraction Run
# ==============================================
#
# PURPOSE:
#   Ties fetch, extraction and storage together into one run.
#   Callers (HTTP trigger, CLI) only talk to this class.
#
# HOW ONE RUN FLOWS:
#
#   run(feed_url)
#     │  new Session (uuid, archive_path, expansion_dir)
#     ▼
#   ArchiveFetcher.fetch_and_expand   (download → outer → inner)
#     │
#     ▼
#   FileDiscoverer.discover            (lazy walk of expansion_dir)
#     │  for every file, one at a time
#     ▼
#   RdfMetadataExtractor.parse → mask → MetadataStore.upsert
#     │
#     ▼
#   {"ok": True, "n": <files discovered>}
#
#   The first error aborts the loop and propagates unchanged.
#   Records upserted before it stay in the store, and the
#   session's temp files are never removed.
#
# ==============================================

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from metadata_extractor.config import AppConfig, get_config
from metadata_extractor.errors import NotInitializedError
from metadata_extractor.extraction.rdf_extractor import RdfMetadataExtractor, Ready
from metadata_extractor.fetch.archive_fetcher import ArchiveFetcher
from metadata_extractor.fetch.file_discoverer import FileDiscoverer
from metadata_extractor.storage.metadata_store import MetadataStore

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 1000


@dataclass(frozen=True)
class Session:
    """Identity and temp-path scope of one run."""
    id: str
    archive_path: Path
    expansion_dir: Path

    @classmethod
    def create(cls, temp_path: Union[str, Path]) -> "Session":
        session_id = str(uuid.uuid1())
        temp_path = Path(temp_path)
        return cls(
            id=session_id,
            archive_path=temp_path / f"{session_id}.archive",
            expansion_dir=temp_path / session_id,
        )


class PipelineOrchestrator:
    """
    Runs one catalog extraction end to end.
    """

    def __init__(
        self,
        temp_path: Union[str, Path],
        feed_url: str,
        fetcher: ArchiveFetcher,
        discoverer: FileDiscoverer,
        store: MetadataStore,
        extractor_factory: Callable[[Path], RdfMetadataExtractor] = RdfMetadataExtractor
    ):
        """
        Args:
            temp_path: Root directory for session downloads and expansions
            feed_url: Default catalog URL, used when run() gets none
            fetcher: Downloads and expands the archive
            discoverer: Lists record files
            store: Connected metadata store
            extractor_factory: Builds an extractor for one record file
        """
        self.temp_path = Path(temp_path)
        self.feed_url = feed_url
        self._fetcher = fetcher
        self._discoverer = discoverer
        self._store = store
        self._extractor_factory = extractor_factory

    @classmethod
    def from_config(cls, config: Optional[AppConfig] = None) -> "PipelineOrchestrator":
        """
        Build the orchestrator and its components from configuration.
        The store is created but not connected.
        """
        config = config or get_config()
        inner_archive_name = config.feed.inner_archive_name
        fetcher = ArchiveFetcher(
            timeout=config.feed.download_timeout_seconds,
            chunk_size=config.feed.chunk_size,
            inner_archive_name=inner_archive_name
        )
        discoverer = FileDiscoverer(
            excluded_suffix=Path(inner_archive_name).suffix,
            excluded_name=Path(inner_archive_name).name
        )
        store = MetadataStore(
            url=config.mongo.url,
            database=config.mongo.database,
            collection=config.mongo.collection
        )
        return cls(
            temp_path=config.feed.temp_path,
            feed_url=config.feed.feed_url,
            fetcher=fetcher,
            discoverer=discoverer,
            store=store
        )

    @property
    def store(self) -> MetadataStore:
        return self._store

    def run(self, feed_url: Optional[str] = None) -> dict:
        """
        Fetch, expand, extract and store the whole catalog.

        Args:
            feed_url: Catalog URL, defaults to the configured one

        Returns:
            {"ok": True, "n": <number of discovered files>}

        Raises:
            NotInitializedError: the store is not connected
            MetadataExtractorError: whatever stage failed first
        """
        if not self._store.is_ready:
            raise NotInitializedError("manager")

        feed_url = feed_url or self.feed_url
        session = Session.create(self.temp_path)
        logger.info("Starting session %s for %s", session.id, feed_url)

        processed = 0
        try:
            self._fetcher.fetch_and_expand(feed_url, session.archive_path, session.expansion_dir)

            for rdf_path in self._discoverer.discover(session.expansion_dir):
                result = self._extractor_factory(rdf_path).parse().mask()
                if isinstance(result, Ready):
                    self._store.upsert(result.metadata)
                processed += 1

                if processed % PROGRESS_EVERY == 0:
                    logger.info("Session %s: %d files processed", session.id, processed)
        except Exception:
            logger.exception("Session %s failed after %d files", session.id, processed)
            raise

        logger.info("Session %s finished: %d files processed", session.id, processed)
        return {"ok": True, "n": processed}
