"""
Constants for MDB_INDEXER.

This module contains the shared constants of the annotation grammar and the
index documents built from it, to avoid magic strings and numbers.
"""

from typing import Final

from pymongo import ASCENDING, DESCENDING

# ============================================================================
# ANNOTATION GRAMMAR
# ============================================================================

DEFAULT_ANNOTATION_KEY: Final[str] = "index"
"""Metadata key holding the raw index annotation on a record field."""

STORAGE_NAME_KEY: Final[str] = "bson"
"""Dataclass field metadata key holding the persisted document key."""

TOKEN_SEPARATOR: Final[str] = ","
"""Separator between annotation tokens."""

VALUE_SEPARATOR: Final[str] = "="
"""Separator between a token key and its value."""

TOKEN_ASC: Final[str] = "asc"
"""Ascending sort direction token."""

TOKEN_DESC: Final[str] = "desc"
"""Descending sort direction token."""

TOKEN_UNIQUE: Final[str] = "unique"
"""Unique index token."""

TOKEN_TTL: Final[str] = "ttl"
"""Expiring (TTL) index token key, used as ``ttl=<seconds>``."""

TOKEN_NAME: Final[str] = "name"
"""Explicit index name token key, used as ``name=<identifier>``."""

# ============================================================================
# INDEX DOCUMENT CONSTANTS
# ============================================================================

DIRECTION_ASCENDING: Final[int] = ASCENDING
"""Sort direction value of an ascending key."""

DIRECTION_DESCENDING: Final[int] = DESCENDING
"""Sort direction value of a descending key."""

# TTL index constraints
MIN_TTL_SECONDS: Final[int] = 0
"""Minimum TTL value in seconds (0 expires documents at their timestamp)."""

MAX_TTL_SECONDS: Final[int] = 2147483647
"""Maximum TTL value in seconds accepted by MongoDB for expireAfterSeconds."""

# Server error codes raised on conflicting index definitions
INDEX_OPTIONS_CONFLICT_CODE: Final[int] = 85
"""Server error code for an existing index with the same name and other options."""

INDEX_KEY_SPECS_CONFLICT_CODE: Final[int] = 86
"""Server error code for an existing index with the same name and other keys."""

INVALID_INDEX_SPECIFICATION_OPTION_CODE: Final[int] = 197
"""Server error code for options an index (such as the _id index) does not accept."""

# ============================================================================
# CONFIGURATION ENVIRONMENT VARIABLES
# ============================================================================

ENV_ANNOTATION_KEY: Final[str] = "MDB_INDEXER_ANNOTATION_KEY"
"""Environment variable overriding the annotation metadata key."""

ENV_FAIL_FAST: Final[str] = "MDB_INDEXER_FAIL_FAST"
"""Environment variable toggling fail-fast planning ("true"/"false")."""
