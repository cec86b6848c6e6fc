"""
Database layer for MDB_INDEXER.

Collection gateways: the narrow index-creation capability the indexer
depends on, with a Motor adapter and an in-memory implementation.
"""

from .gateway import CollectionGateway, MongoCollectionGateway
from .memory import InMemoryCollectionGateway

__all__ = [
    "CollectionGateway",
    "MongoCollectionGateway",
    "InMemoryCollectionGateway",
]
