# ==============================================
# MetadataStore
# ==============================================
#
# PURPOSE:
#   Manages the MongoDB connection and the metadata collection.
#   Upserts one MaskedMetadata document at a time, keyed by id.
#   Creates the indexes downstream queries rely on.
#
# CLASS: MetadataStore
# --------------------
#   Stateful: UNINITIALIZED until connect() succeeds, then READY.
#   Every operation other than connect() requires READY.
#
#   Constructor:
#   ------------
#   - __init__(url, database, collection, client=None)
#       client: an already built pymongo-compatible client to adopt
#       instead of creating one from url.
#
#   Methods:
#   --------
#   - connect() -> None
#       Ping, ensure indexes, become READY.
#
#   - disconnect() -> None
#       Close connection (only if we created it), back to UNINITIALIZED.
#
#   - ensure_indexes() -> None
#       Unique index on id; non-unique on title, authors, publicationDate.
#
#   - upsert(metadata) -> None
#       Replace the document with the same id, or insert it.
#
#   - get(id) -> dict | None
#   - count() -> int
#
#   Context Manager:
#   ----------------
#   - __enter__ / __exit__ for `with MetadataStore(...) as store:` usage.
#
# ==============================================

import logging
from enum import Enum
from typing import Any, Mapping, Optional, Union

from pymongo import MongoClient as PyMongoClient
from pymongo.errors import PyMongoError

from metadata_extractor.errors import MISSING_ID, NotInitializedError, StoreError, ValidationError
from metadata_extractor.extraction.rdf_extractor import MaskedMetadata

logger = logging.getLogger(__name__)

UNIQUE_INDEX = "id"
QUERY_INDEXES = ("title", "authors", "publicationDate")


class StoreState(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class MetadataStore:
    def __init__(self, url, database, collection, client=None):
        # Store connection params. Don't connect yet.
        self.url = url
        self.database = database
        self.collection_name = collection
        self.client = client
        self._owns_client = client is None
        self.collection = None
        self.state = StoreState.UNINITIALIZED

    @property
    def is_ready(self) -> bool:
        return self.state is StoreState.READY

    def connect(self):
        # Establish connection to MongoDB and prepare the collection.
        try:
            if self.client is None:
                self.client = PyMongoClient(self.url)
            # Test connection
            self.client.admin.command('ping')
            self.collection = self.client[self.database][self.collection_name]
            self.ensure_indexes()
        except PyMongoError as e:
            raise StoreError(f"Could not connect to MongoDB: {e}") from e

        self.state = StoreState.READY
        logger.info("Connected to MongoDB collection '%s.%s'", self.database, self.collection_name)

    def disconnect(self):
        # Close connection.
        if self.client is not None and self._owns_client:
            self.client.close()
            self.client = None
            logger.info("Disconnected from MongoDB.")
        self.collection = None
        self.state = StoreState.UNINITIALIZED

    def ensure_indexes(self):
        if self.collection is None:
            raise NotInitializedError("db")
        self.collection.create_index(UNIQUE_INDEX, unique=True)
        for field_name in QUERY_INDEXES:
            self.collection.create_index(field_name)

    def upsert(self, metadata: Union[MaskedMetadata, Mapping[str, Any]]) -> None:
        # Full replace keyed by id. No field-level merge.
        self._require_ready()

        document = metadata.to_document() if isinstance(metadata, MaskedMetadata) else dict(metadata)
        if document.get("id") is None:
            raise ValidationError(MISSING_ID)

        try:
            self.collection.replace_one({"id": document["id"]}, document, upsert=True)
        except PyMongoError as e:
            raise StoreError(f"MongoDB upsert failed for id {document['id']}: {e}") from e

    def get(self, entry_id) -> Optional[dict]:
        self._require_ready()
        try:
            return self.collection.find_one({"id": entry_id}, {"_id": False})
        except PyMongoError as e:
            raise StoreError(f"MongoDB lookup failed for id {entry_id}: {e}") from e

    def count(self) -> int:
        self._require_ready()
        try:
            return self.collection.count_documents({})
        except PyMongoError as e:
            raise StoreError(f"MongoDB count failed: {e}") from e

    def _require_ready(self):
        if not self.is_ready:
            raise NotInitializedError("db")

    def __enter__(self):
        # For `with MetadataStore(...) as store:` usage.
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
