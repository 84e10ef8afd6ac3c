# ==============================================
# Errors
# ==============================================
#
# PURPOSE:
#   One exception per failure category of the pipeline.
#   Components wrap library exceptions once, at their own
#   boundary, and everything above just lets them propagate.
#
# HIERARCHY:
# ----------
#   MetadataExtractorError
#   ├── NotInitializedError   → component used before it is ready
#   ├── FetchError            → anything in the fetch + expand stage
#   │   ├── NetworkError      → download failed
#   │   └── ArchiveError      → corrupt outer/inner archive, disk write
#   ├── ParseError            → malformed RDF document
#   ├── ValidationError       → record offered to the store has no id
#   └── StoreError            → MongoDB connection or write failure
#
# ==============================================

NOT_INITIALIZED = "The {component} has not been initialized."
PARSED_XML_NOT_FOUND = "The parsed xml was not found."
MISSING_ID = "The metadata record has no id."


class MetadataExtractorError(RuntimeError):
    """Base class for every error raised by the pipeline."""


class NotInitializedError(MetadataExtractorError):
    """Raised when a component is used before reaching its ready state."""

    def __init__(self, component: str):
        super().__init__(NOT_INITIALIZED.format(component=component))
        self.component = component


class FetchError(MetadataExtractorError):
    """Raised by any stage of archive retrieval and decompression."""


class NetworkError(FetchError):
    """Raised when the remote archive cannot be downloaded."""


class ArchiveError(FetchError):
    """Raised when the outer or inner archive cannot be expanded."""


class ParseError(MetadataExtractorError):
    """Raised when a record file is not a well-formed RDF document."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path


class ValidationError(MetadataExtractorError):
    """Raised when a record lacks its required id."""


class StoreError(MetadataExtractorError):
    """Raised when MongoDB cannot be reached or written to."""
