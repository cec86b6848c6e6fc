"""
Index Planner

Walks the fields of a record type in declaration order, parses each index
annotation and assembles the IndexPlan submitted to a collection.

One annotated field maps to exactly one single-field index; fields without
an annotation are skipped.

This module is part of MDB_INDEXER.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from pymongo.operations import IndexModel

from ..constants import DEFAULT_ANNOTATION_KEY
from ..exceptions import AnnotationParseError, FieldIndexError, IndexPlanningError
from ..observability.logging import get_logger
from .annotation import IndexDirection, IndexOption, parse_index_annotation
from .descriptor import FieldDescriptor, describe_record

logger = get_logger(__name__)


@dataclass(frozen=True)
class IndexSpec:
    """
    Store-facing definition of one index.

    Attributes:
        field: Persisted document key the index is built on
        direction: Sort direction of the key
        unique: Whether the index enforces uniqueness
        expire_after_seconds: TTL of the index, or None for a regular index
        name: Explicit index name, or None for the store's default naming
    """

    field: str
    direction: IndexDirection = IndexDirection.ASCENDING
    unique: bool = False
    expire_after_seconds: int | None = None
    name: str | None = None

    @classmethod
    def from_option(cls, storage_name: str, option: IndexOption) -> "IndexSpec":
        """Build the spec of a field from its parsed annotation."""
        if option.is_ttl:
            return cls(
                field=storage_name,
                direction=IndexDirection.ASCENDING,
                expire_after_seconds=option.ttl_seconds,
                name=option.name,
            )
        return cls(
            field=storage_name,
            direction=option.direction,
            unique=option.unique,
            name=option.name,
        )

    @property
    def key(self) -> dict[str, int]:
        return {self.field: int(self.direction)}

    @property
    def keys(self) -> list[tuple[str, int]]:
        return [(self.field, int(self.direction))]

    def index_options(self) -> dict[str, Any]:
        """Return the driver keyword options of this index (unset ones omitted)."""
        options: dict[str, Any] = {}
        if self.unique:
            options["unique"] = True
        if self.expire_after_seconds is not None:
            options["expireAfterSeconds"] = self.expire_after_seconds
        if self.name is not None:
            options["name"] = self.name
        return options

    def document(self) -> dict[str, Any]:
        """Return the index document, e.g. ``{"key": {"email": 1}, "unique": True}``."""
        return {"key": self.key, **self.index_options()}

    def to_index_model(self) -> IndexModel:
        return IndexModel(self.keys, **self.index_options())


@dataclass(frozen=True)
class IndexPlan:
    """Ordered index specs of a record type, in field declaration order."""

    specs: tuple[IndexSpec, ...] = ()

    def __iter__(self) -> Iterator[IndexSpec]:
        return iter(self.specs)

    def __len__(self) -> int:
        return len(self.specs)

    def __bool__(self) -> bool:
        return bool(self.specs)

    def __getitem__(self, index: int) -> IndexSpec:
        return self.specs[index]

    def documents(self) -> list[dict[str, Any]]:
        return [spec.document() for spec in self.specs]

    def index_models(self) -> list[IndexModel]:
        return [spec.to_index_model() for spec in self.specs]


def _plan_field(descriptor: FieldDescriptor) -> IndexSpec:
    try:
        option = parse_index_annotation(descriptor.annotation)
    except AnnotationParseError as e:
        raise FieldIndexError(
            field=descriptor.name,
            storage_field=descriptor.storage_name,
            cause=e,
        ) from e
    return IndexSpec.from_option(descriptor.storage_name, option)


def plan_indexes(
    record: Any,
    *,
    annotation_key: str = DEFAULT_ANNOTATION_KEY,
    fail_fast: bool = True,
) -> IndexPlan:
    """
    Build the IndexPlan of a record type.

    Args:
        record: Record type accepted by ``describe_record``
        annotation_key: Metadata key holding the index annotation
        fail_fast: Stop at the first invalid field (default). When False,
            every field is checked and all failures are reported together.

    Returns:
        IndexPlan with one IndexSpec per annotated field, possibly empty

    Raises:
        FieldIndexError: First field with an invalid annotation (fail_fast)
        IndexPlanningError: All fields with invalid annotations (not fail_fast)
        RecordDescriptorError: If the record cannot be described
    """
    specs: list[IndexSpec] = []
    errors: list[FieldIndexError] = []

    for descriptor in describe_record(record, annotation_key=annotation_key):
        if descriptor.annotation is None:
            continue
        try:
            spec = _plan_field(descriptor)
        except FieldIndexError as e:
            if fail_fast:
                raise
            logger.debug(f"Collected invalid index annotation: {e}")
            errors.append(e)
            continue
        logger.debug(
            f"Planned index on '{spec.field}' from annotation "
            f"'{descriptor.annotation}': {spec.document()}"
        )
        specs.append(spec)

    if errors:
        raise IndexPlanningError(errors)

    return IndexPlan(tuple(specs))
