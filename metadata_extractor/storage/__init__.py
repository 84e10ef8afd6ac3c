# ==============================================
# STORAGE (MongoDB)
# ==============================================
#
# This package handles all database operations:
# connecting, creating indexes, and upserting metadata.
#
# Modules:
# --------
# - metadata_store.py  → MongoDB connection and keyed upserts
#
# ==============================================

from .metadata_store import MetadataStore, StoreState

__all__ = [
    "MetadataStore",
    "StoreState"
]
