# ==============================================
# Catalog Metadata Extractor
# ==============================================
#
# Package Structure:
#
# metadata_extractor/
# ├── fetch/          # Download + expand the catalog, list record files
# ├── extraction/     # Parse one RDF file, mask it to MaskedMetadata
# ├── storage/        # Idempotent upsert into MongoDB
# ├── errors.py       # Error taxonomy
# ├── config.py       # Configuration management
# ├── pipeline.py     # PipelineOrchestrator (one extraction run)
# ├── api.py          # HTTP trigger (FastAPI)
# └── cli.py          # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
