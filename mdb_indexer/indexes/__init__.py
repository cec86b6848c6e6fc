"""
Index Management Module

Parses per-field index annotations, plans the resulting index documents and
creates them on a collection.

This module is part of MDB_INDEXER.
"""

from .annotation import IndexDirection, IndexOption, parse_index_annotation
from .descriptor import FieldDescriptor, describe_record
from .manager import AnnotationIndexer, create_indexes, ensure_indexes
from .planner import IndexPlan, IndexSpec, plan_indexes

__all__ = [
    # Parsing
    "IndexDirection",
    "IndexOption",
    "parse_index_annotation",
    # Record descriptors
    "FieldDescriptor",
    "describe_record",
    # Planning
    "IndexPlan",
    "IndexSpec",
    "plan_indexes",
    # Orchestration
    "AnnotationIndexer",
    "create_indexes",
    "ensure_indexes",
]
