"""
Index Annotation Parser

Turns the raw index annotation of a record field (for example
``"unique,asc,name=email_idx"`` or ``"ttl=3600"``) into a validated
IndexOption.

Grammar: comma-separated tokens from ``asc``, ``desc``, ``unique``,
``ttl=<seconds>`` and ``name=<identifier>``. Tokens are case-sensitive and
never trimmed. An empty annotation still asks for a plain ascending index.

This module is part of MDB_INDEXER.
"""

import re
from dataclasses import dataclass
from enum import IntEnum

from ..constants import (
    DIRECTION_ASCENDING,
    DIRECTION_DESCENDING,
    MAX_TTL_SECONDS,
    MIN_TTL_SECONDS,
    TOKEN_ASC,
    TOKEN_DESC,
    TOKEN_NAME,
    TOKEN_SEPARATOR,
    TOKEN_TTL,
    TOKEN_UNIQUE,
    VALUE_SEPARATOR,
)
from ..exceptions import (
    ConflictingDirectionError,
    ConflictingOptionsError,
    InvalidNameError,
    InvalidTTLValueError,
    UnknownOptionError,
)

_TTL_VALUE_RE = re.compile(r"[0-9]+")


class IndexDirection(IntEnum):
    """Sort direction of an index key, valued as MongoDB expects."""

    ASCENDING = DIRECTION_ASCENDING
    DESCENDING = DIRECTION_DESCENDING


@dataclass(frozen=True)
class IndexOption:
    """
    Parsed index annotation of a single field.

    A TTL option (``ttl_seconds`` set) is always ascending and non-unique;
    the parser never produces any other combination.
    """

    direction: IndexDirection = IndexDirection.ASCENDING
    unique: bool = False
    ttl_seconds: int | None = None
    name: str | None = None

    @property
    def is_ttl(self) -> bool:
        return self.ttl_seconds is not None


def _parse_ttl(raw: str, token: str, value: str | None) -> int:
    if value is None or not _TTL_VALUE_RE.fullmatch(value):
        raise InvalidTTLValueError(
            "TTL must be a non-negative integer number of seconds",
            annotation=raw,
            token=token,
        )
    seconds = int(value)
    if not MIN_TTL_SECONDS <= seconds <= MAX_TTL_SECONDS:
        raise InvalidTTLValueError(
            f"TTL must be between {MIN_TTL_SECONDS} and {MAX_TTL_SECONDS} seconds",
            annotation=raw,
            token=token,
        )
    return seconds


def _parse_name(raw: str, token: str, value: str | None) -> str:
    if not value:
        raise InvalidNameError("Index name must not be empty", annotation=raw, token=token)
    if value != value.strip():
        raise InvalidNameError(
            "Index name must not have surrounding whitespace",
            annotation=raw,
            token=token,
        )
    return value


def parse_index_annotation(raw: str) -> IndexOption:
    """
    Parse a raw index annotation into an IndexOption.

    Args:
        raw: Annotation string, e.g. ``"unique,asc,name=email_idx"``

    Returns:
        The validated IndexOption. ``""`` yields the default option
        (ascending, non-unique, no TTL, no name).

    Raises:
        ConflictingDirectionError: Both ``asc`` and ``desc`` are present
        InvalidTTLValueError: A ``ttl`` value is missing, malformed or out of range
        InvalidNameError: A ``name`` value is empty or padded with whitespace
        UnknownOptionError: A token is outside the grammar
        ConflictingOptionsError: ``ttl`` is combined with ``desc`` or ``unique``,
            or ``ttl``/``name`` is repeated with a different value
    """
    if raw == "":
        return IndexOption()

    ascending = False
    descending = False
    unique = False
    ttl_seconds: int | None = None
    name: str | None = None

    for token in raw.split(TOKEN_SEPARATOR):
        key, sep, value = token.partition(VALUE_SEPARATOR)
        has_value = bool(sep)

        if token == TOKEN_ASC:
            ascending = True
        elif token == TOKEN_DESC:
            descending = True
        elif token == TOKEN_UNIQUE:
            unique = True
        elif key == TOKEN_TTL:
            seconds = _parse_ttl(raw, token, value if has_value else None)
            if ttl_seconds is not None and ttl_seconds != seconds:
                raise ConflictingOptionsError(
                    "TTL given more than once with different values",
                    annotation=raw,
                    token=token,
                )
            ttl_seconds = seconds
        elif key == TOKEN_NAME:
            index_name = _parse_name(raw, token, value if has_value else None)
            if name is not None and name != index_name:
                raise ConflictingOptionsError(
                    "Index name given more than once with different values",
                    annotation=raw,
                    token=token,
                )
            name = index_name
        else:
            raise UnknownOptionError(
                f"Unknown index option '{token}'", annotation=raw, token=token
            )

    if ascending and descending:
        raise ConflictingDirectionError(
            "Index direction cannot be both ascending and descending",
            annotation=raw,
        )

    if ttl_seconds is not None and (descending or unique):
        raise ConflictingOptionsError(
            "TTL indexes cannot be unique or descending",
            annotation=raw,
        )

    direction = IndexDirection.DESCENDING if descending else IndexDirection.ASCENDING
    return IndexOption(direction=direction, unique=unique, ttl_seconds=ttl_seconds, name=name)
