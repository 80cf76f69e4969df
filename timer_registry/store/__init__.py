"""Storage gateways for timer documents.

- base.py: gateway protocol and filter/update helpers
- mongo.py: MongoDB collection (production)
- sqlite.py: single-file SQLite document table (local development, tests)
"""
from ..config import Settings
from .base import Document, StorageGateway
from .mongo import MongoGateway
from .sqlite import SqliteGateway


def connect_gateway(settings: Settings) -> StorageGateway:
    """Open the gateway selected by ``settings.store_backend``."""
    if settings.store_backend == "mongo":
        return MongoGateway.connect(
            settings.mongo_uri,
            database=settings.mongo_database,
            collection=settings.mongo_collection,
        )
    elif settings.store_backend == "sqlite":
        return SqliteGateway(settings.sqlite_path)
    else:
        raise ValueError(f"Unknown store backend: {settings.store_backend}")


__all__ = [
    "Document",
    "StorageGateway",
    "MongoGateway",
    "SqliteGateway",
    "connect_gateway",
]
