# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - MongoConfig (dataclass)
#     url: str           (default "mongodb://localhost:27017")
#     database: str      (default "metadata_extractor")
#     collection: str    (default "metadata")
#
# - FeedConfig (dataclass)
#     feed_url: str                    (default Gutenberg rdf-files.tar.zip)
#     temp_path: str                   (default "<tmp>/metadata-extractor")
#     inner_archive_name: str          (default "rdf-files.tar")
#     download_timeout_seconds: float  (default 60.0)
#     chunk_size: int                  (default 1 MiB)
#
# - ServerConfig (dataclass)
#     host: str          (default "127.0.0.1")
#     port: int | str    (default 3000, a non-numeric value is a named pipe)
#
# - AppConfig (dataclass)
#     mongo: MongoConfig
#     feed: FeedConfig
#     server: ServerConfig
#     log_level: str     (default "INFO")
#
# FUNCTIONS:
# ----------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Forget the singleton (tests).
#
# - normalize_port(value) -> int | str | None
#
# USAGE:
# ------
#   from metadata_extractor.config import get_config
#   config = get_config()
#   print(config.mongo.url)
#   print(config.feed.temp_path)
#
# ==============================================

import os
import tempfile
from dataclasses import dataclass
from typing import Optional, Union
from pathlib import Path

from dotenv import load_dotenv


DEFAULT_FEED_URL = "https://www.gutenberg.org/cache/epub/feeds/rdf-files.tar.zip"


@dataclass
class MongoConfig:
    """MongoDB connection configuration."""
    url: str = "mongodb://localhost:27017"
    database: str = "metadata_extractor"
    collection: str = "metadata"


@dataclass
class FeedConfig:
    """Where the catalog comes from and where it is expanded."""
    feed_url: str = DEFAULT_FEED_URL
    temp_path: str = os.path.join(tempfile.gettempdir(), "metadata-extractor")
    inner_archive_name: str = "rdf-files.tar"
    download_timeout_seconds: float = 60.0
    chunk_size: int = 1024 * 1024


@dataclass
class ServerConfig:
    """HTTP trigger configuration."""
    host: str = "127.0.0.1"
    port: Union[int, str] = 3000


@dataclass
class AppConfig:
    """Main application configuration."""
    mongo: MongoConfig
    feed: FeedConfig
    server: ServerConfig
    log_level: str = "INFO"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def normalize_port(value) -> Union[int, str, None]:
    """
    Normalize a port into a number or a named pipe.

    Returns:
        The port number, the original value when it is not numeric
        (named pipe), or None for a negative port.
    """
    try:
        port = int(value)
    except (TypeError, ValueError):
        return value

    if port >= 0:
        return port

    return None


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    mongo_config = MongoConfig(
        url=os.getenv("MONGO_URL", "mongodb://localhost:27017"),
        database=os.getenv("MONGO_DATABASE", "metadata_extractor"),
        collection=os.getenv("MONGO_COLLECTION", "metadata")
    )

    feed_config = FeedConfig(
        feed_url=os.getenv("FEED_URL", DEFAULT_FEED_URL),
        temp_path=os.getenv("TEMP_PATH") or FeedConfig.temp_path,
        inner_archive_name=os.getenv("INNER_ARCHIVE_NAME", "rdf-files.tar"),
        download_timeout_seconds=float(os.getenv("DOWNLOAD_TIMEOUT_SECONDS", "60")),
        chunk_size=int(os.getenv("DOWNLOAD_CHUNK_SIZE", str(1024 * 1024)))
    )

    server_config = ServerConfig(
        host=os.getenv("HOST", "127.0.0.1"),
        port=normalize_port(os.getenv("PORT", "3000"))
    )

    _config_instance = AppConfig(
        mongo=mongo_config,
        feed=feed_config,
        server=server_config,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper()
    )

    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config_instance
    _config_instance = None
