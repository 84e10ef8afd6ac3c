# ==============================================
# ArchiveFetcher
# ==============================================
#
# PURPOSE:
#   Download the catalog archive and expand it twice:
#     1. outer container (zip, or gzip) → inner tape archive
#     2. inner tape archive (tar)       → tree of RDF files
#
#   Stages run one after another. Every failure is fatal and
#   surfaces as a FetchError subclass; nothing is retried and
#   nothing written so far is removed.
#
# CLASS: ArchiveFetcher
# ---------------------
#   Constructor:
#   ------------
#   - __init__(timeout, chunk_size, inner_archive_name, session=None)
#
#   Methods:
#   --------
#   - fetch_and_expand(feed_url, archive_path, expansion_dir) -> Path
#   - download(feed_url, archive_path) -> Path
#   - expand_outer(archive_path, expansion_dir) -> Path
#   - expand_inner(inner_archive_path, expansion_dir) -> Path
#
# ==============================================

import gzip
import logging
import shutil
import tarfile
import zipfile
from pathlib import Path
from typing import Optional, Union

import requests

from metadata_extractor.errors import ArchiveError, NetworkError

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


class ArchiveFetcher:
    def __init__(
        self,
        timeout: float = 60.0,
        chunk_size: int = 1024 * 1024,
        inner_archive_name: str = "rdf-files.tar",
        session: Optional[requests.Session] = None
    ):
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.inner_archive_name = inner_archive_name
        self.session = session or requests.Session()

    def fetch_and_expand(
        self,
        feed_url: str,
        archive_path: Union[str, Path],
        expansion_dir: Union[str, Path]
    ) -> Path:
        """
        Download the archive and expand both layers into expansion_dir.

        Args:
            feed_url: URL of the compressed catalog
            archive_path: Where the downloaded bytes are written
            expansion_dir: Directory receiving the expanded tree

        Returns:
            expansion_dir

        Raises:
            NetworkError: download failed
            ArchiveError: a layer is corrupt or the disk write failed
        """
        archive_path = Path(archive_path)
        expansion_dir = Path(expansion_dir)

        self.download(feed_url, archive_path)
        inner_archive = self.expand_outer(archive_path, expansion_dir)
        self.expand_inner(inner_archive, expansion_dir)

        return expansion_dir

    def download(self, feed_url: str, archive_path: Path) -> Path:
        logger.info("Downloading %s to %s", feed_url, archive_path)
        written = 0

        try:
            archive_path.parent.mkdir(parents=True, exist_ok=True)
            with self.session.get(feed_url, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                with open(archive_path, 'wb') as f:
                    for chunk in response.iter_content(chunk_size=self.chunk_size):
                        if chunk:
                            f.write(chunk)
                            written += len(chunk)
        except requests.RequestException as e:
            raise NetworkError(f"Failed to download {feed_url}: {e}") from e
        except OSError as e:
            raise ArchiveError(f"Failed to write {archive_path}: {e}") from e

        logger.info("Downloaded %d bytes from %s", written, feed_url)
        return archive_path

    def expand_outer(self, archive_path: Path, expansion_dir: Path) -> Path:
        """
        Decompress the outer container.

        Returns:
            Path of the inner tape archive inside expansion_dir
        """
        inner_archive = expansion_dir / self.inner_archive_name

        try:
            expansion_dir.mkdir(parents=True, exist_ok=True)
            if zipfile.is_zipfile(archive_path):
                with zipfile.ZipFile(archive_path) as container:
                    container.extractall(expansion_dir)
            elif self._is_gzip(archive_path):
                with gzip.open(archive_path, 'rb') as source, open(inner_archive, 'wb') as target:
                    shutil.copyfileobj(source, target)
            else:
                raise ArchiveError(f"Unsupported outer archive format: {archive_path}")
        except (zipfile.BadZipFile, gzip.BadGzipFile, EOFError, OSError) as e:
            raise ArchiveError(f"Failed to decompress {archive_path}: {e}") from e

        if not inner_archive.is_file():
            raise ArchiveError(
                f"Inner archive {self.inner_archive_name} not found in {archive_path}"
            )

        logger.info("Expanded outer archive %s", archive_path)
        return inner_archive

    def expand_inner(self, inner_archive_path: Path, expansion_dir: Path) -> Path:
        try:
            with tarfile.open(inner_archive_path, mode='r:') as archive:
                archive.extractall(expansion_dir, filter='data')
        except (tarfile.TarError, OSError) as e:
            raise ArchiveError(f"Failed to extract {inner_archive_path}: {e}") from e

        logger.info("Expanded inner archive %s into %s", inner_archive_path, expansion_dir)
        return expansion_dir

    def _is_gzip(self, path: Path) -> bool:
        with open(path, 'rb') as f:
            return f.read(2) == GZIP_MAGIC
