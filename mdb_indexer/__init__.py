"""
MDB_INDEXER - Annotation-driven MongoDB indexes

Declare indexes next to the fields of a record type and create them on a
collection in one call.
"""

# Configuration
from .config import IndexerConfig
# Database layer
from .database import CollectionGateway, InMemoryCollectionGateway, MongoCollectionGateway
# Errors
from .exceptions import (AnnotationParseError, ConfigurationError,
                         ConflictingDirectionError, ConflictingOptionsError,
                         FieldIndexError, IndexerError, IndexPlanningError,
                         InvalidNameError, InvalidTTLValueError,
                         RecordDescriptorError, UnknownOptionError)
# Index management
from .indexes import (AnnotationIndexer, FieldDescriptor, IndexDirection,
                      IndexOption, IndexPlan, IndexSpec, create_indexes,
                      describe_record, ensure_indexes, parse_index_annotation,
                      plan_indexes)

__version__ = "0.1.0"

__all__ = [
    # Indexes
    "AnnotationIndexer",
    "create_indexes",
    "ensure_indexes",
    "parse_index_annotation",
    "plan_indexes",
    "describe_record",
    "IndexDirection",
    "IndexOption",
    "IndexSpec",
    "IndexPlan",
    "FieldDescriptor",
    # Database
    "CollectionGateway",
    "MongoCollectionGateway",
    "InMemoryCollectionGateway",
    # Config
    "IndexerConfig",
    # Errors
    "IndexerError",
    "AnnotationParseError",
    "ConflictingDirectionError",
    "InvalidTTLValueError",
    "InvalidNameError",
    "UnknownOptionError",
    "ConflictingOptionsError",
    "FieldIndexError",
    "IndexPlanningError",
    "RecordDescriptorError",
    "ConfigurationError",
]
