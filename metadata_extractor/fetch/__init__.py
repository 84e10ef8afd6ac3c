# ==============================================
# FETCH
# ==============================================
#
# This package gets the catalog from the network onto disk
# and enumerates the record files it contains.
#
# Modules:
# --------
# - archive_fetcher.py  → Streaming download + two-stage decompression
# - file_discoverer.py  → Recursive listing of expanded record files
#
# ==============================================

from .archive_fetcher import ArchiveFetcher
from .file_discoverer import FileDiscoverer

__all__ = ["ArchiveFetcher", "FileDiscoverer"]
