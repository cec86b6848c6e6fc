"""
Record descriptors.

Reads, per field of a record type, the persisted document key and the raw
index annotation. Supported records:

- pydantic models: ``Field(alias="created_at", json_schema_extra={"index": "ttl=3600"})``;
  a callable json_schema_extra is applied to an empty schema and the
  annotation read from the result
- dataclasses: ``field(metadata={"bson": "created_at", "index": "ttl=3600"})``
- already-described records: an iterable of FieldDescriptor, a mapping of
  storage name to annotation, or ``(storage_name, annotation)`` pairs

This module is part of MDB_INDEXER.
"""

import dataclasses
import inspect
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from ..constants import DEFAULT_ANNOTATION_KEY, STORAGE_NAME_KEY
from ..exceptions import RecordDescriptorError
from ..observability.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FieldDescriptor:
    """
    One field of a record type as seen by the planner.

    Attributes:
        name: Attribute name of the field on the record type
        storage_name: Persisted document key of the field
        annotation: Raw index annotation, or None if the field has none
    """

    name: str
    storage_name: str
    annotation: str | None = None


def _check_annotation(record: Any, field_name: str, annotation: Any) -> str | None:
    if annotation is None or isinstance(annotation, str):
        return annotation
    raise RecordDescriptorError(
        f"Index annotation on field '{field_name}' must be a string, "
        f"got {type(annotation).__name__}",
        record=record,
    )


def _schema_extra(model: type[BaseModel], extra: Any) -> dict[str, Any]:
    """Resolve a field's json_schema_extra, calling it on a scratch schema if callable."""
    if isinstance(extra, dict):
        return extra
    if callable(extra):
        schema: dict[str, Any] = {}
        if len(inspect.signature(extra).parameters) > 1:
            extra(schema, model)
        else:
            extra(schema)
        return schema
    return {}


def _describe_pydantic(model: type[BaseModel], annotation_key: str) -> list[FieldDescriptor]:
    descriptors = []
    for field_name, info in model.model_fields.items():
        storage_name = info.serialization_alias or info.alias or field_name
        extra = _schema_extra(model, info.json_schema_extra)
        annotation = _check_annotation(model, field_name, extra.get(annotation_key))
        descriptors.append(FieldDescriptor(field_name, storage_name, annotation))
    return descriptors


def _describe_dataclass(record: Any, annotation_key: str) -> list[FieldDescriptor]:
    descriptors = []
    for f in dataclasses.fields(record):
        storage_name = f.metadata.get(STORAGE_NAME_KEY) or f.name
        annotation = _check_annotation(record, f.name, f.metadata.get(annotation_key))
        descriptors.append(FieldDescriptor(f.name, storage_name, annotation))
    return descriptors


def _describe_items(record: Iterable[Any]) -> list[FieldDescriptor]:
    items = record.items() if isinstance(record, Mapping) else record
    descriptors = []
    for item in items:
        if isinstance(item, FieldDescriptor):
            _check_annotation(record, item.name, item.annotation)
            descriptors.append(item)
            continue
        if not isinstance(item, tuple) or len(item) != 2 or not isinstance(item[0], str):
            raise RecordDescriptorError(
                f"Expected FieldDescriptor or (storage_name, annotation) pair, got {item!r}",
                record=record,
            )
        storage_name, annotation = item
        annotation = _check_annotation(record, storage_name, annotation)
        descriptors.append(FieldDescriptor(storage_name, storage_name, annotation))
    return descriptors


def describe_record(
    record: Any,
    annotation_key: str = DEFAULT_ANNOTATION_KEY,
) -> list[FieldDescriptor]:
    """
    Describe the fields of a record type in declaration order.

    Args:
        record: A pydantic model or dataclass (class or instance), or an
            iterable of already-described fields
        annotation_key: Metadata key holding the index annotation

    Returns:
        List of FieldDescriptor, one per field, annotated or not

    Raises:
        RecordDescriptorError: If the record kind is not supported or an
            annotation is not a string
    """
    if isinstance(record, BaseModel):
        record = type(record)
    if isinstance(record, type) and issubclass(record, BaseModel):
        descriptors = _describe_pydantic(record, annotation_key)
    elif dataclasses.is_dataclass(record):
        descriptors = _describe_dataclass(record, annotation_key)
    elif isinstance(record, Iterable) and not isinstance(record, (str, bytes, type)):
        descriptors = _describe_items(record)
    else:
        raise RecordDescriptorError(
            "Record must be a pydantic model, a dataclass or an iterable of field descriptors",
            record=record,
        )

    logger.debug(
        f"Described {len(descriptors)} field(s) of "
        f"{getattr(record, '__name__', type(record).__name__)}"
    )
    return descriptors
