"""
Index Creation Orchestration

Plans the indexes of a record type from its field annotations and submits
the plan to a collection in a single call.

No retries, no partial plans and no reconciliation with existing indexes:
re-running against an unchanged record relies on the store treating an
identical index as already present.

This module is part of MDB_INDEXER.
"""

import logging
import time
from typing import TYPE_CHECKING, Any

from ..config import IndexerConfig
from ..database.gateway import CollectionGateway, MongoCollectionGateway
from ..exceptions import IndexerError
from ..observability.logging import get_logger, indexing_context, log_operation
from .planner import IndexPlan, plan_indexes

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorCollection

logger = get_logger(__name__)


def _record_name(record: Any) -> str:
    return getattr(record, "__name__", type(record).__name__)


class AnnotationIndexer:
    """
    Creates the indexes declared on a record type.

    Stateless apart from its configuration: one instance can be shared by
    concurrent callers, and every call plans from scratch.

    Example:
        class User(BaseModel):
            email: str = Field(json_schema_extra={"index": "unique,asc,name=email_idx"})
            created_at: int = Field(json_schema_extra={"index": "ttl=3600"})

        names = await AnnotationIndexer().create_indexes(
            MongoCollectionGateway(db["users"]), User
        )
    """

    def __init__(self, config: IndexerConfig | None = None) -> None:
        """
        Initialize the indexer.

        Args:
            config: Optional configuration (defaults to IndexerConfig())
        """
        self._config = config or IndexerConfig()
        self._config.validate()

    @property
    def config(self) -> IndexerConfig:
        return self._config

    def plan(self, record: Any) -> IndexPlan:
        """Plan the indexes of a record type without submitting them."""
        return plan_indexes(
            record,
            annotation_key=self._config.annotation_key,
            fail_fast=self._config.fail_fast,
        )

    async def create_indexes(self, gateway: CollectionGateway, record: Any) -> list[str]:
        """
        Plan and create the indexes of a record type.

        Args:
            gateway: Collection to create the indexes on (borrowed, not closed)
            record: Record type accepted by ``describe_record``

        Returns:
            Names of the created indexes in field declaration order; empty if
            the record has no annotated fields (the gateway is not called)

        Raises:
            FieldIndexError: A field has an invalid annotation
            IndexPlanningError: Fields have invalid annotations (collect-all mode)
            RecordDescriptorError: The record cannot be described
            Exception: Any error raised by the gateway, unchanged
        """
        collection_name = getattr(gateway, "name", None) or getattr(
            getattr(gateway, "collection", None), "name", None
        )
        log_prefix = self._config.log_prefix or f"[{collection_name or _record_name(record)}]"
        start = time.perf_counter()
        with indexing_context(collection_name, _record_name(record)):
            logger.debug(f"{log_prefix} Planning indexes for {_record_name(record)}...")
            try:
                plan = self.plan(record)
            except IndexerError as e:
                logger.error(f"{log_prefix} ❌ Index planning failed: {e}")
                log_operation(
                    logger,
                    "create_indexes",
                    level=logging.ERROR,
                    success=False,
                    duration_ms=(time.perf_counter() - start) * 1000,
                    stage="planning",
                )
                raise

            if not plan:
                logger.info(f"{log_prefix} No annotated fields; nothing to create.")
                return []

            logger.info(f"{log_prefix} Creating {len(plan)} index(es): {plan.documents()}")
            try:
                names = await gateway.create_indexes(plan.specs)
            except Exception as e:
                logger.error(
                    f"{log_prefix} ❌ Failed to create indexes: {e}",
                    exc_info=True,
                )
                log_operation(
                    logger,
                    "create_indexes",
                    level=logging.ERROR,
                    success=False,
                    duration_ms=(time.perf_counter() - start) * 1000,
                    stage="submitting",
                )
                raise

            logger.info(f"{log_prefix} ✔️ Created index(es) {names}.")
            log_operation(
                logger,
                "create_indexes",
                duration_ms=(time.perf_counter() - start) * 1000,
                index_count=len(names),
            )
            return list(names)


async def create_indexes(
    gateway: CollectionGateway,
    record: Any,
    config: IndexerConfig | None = None,
) -> list[str]:
    """
    Plan and create the indexes of a record type through a gateway.

    See ``AnnotationIndexer.create_indexes``.
    """
    return await AnnotationIndexer(config).create_indexes(gateway, record)


async def ensure_indexes(
    collection: "AsyncIOMotorCollection",
    record: Any,
    config: IndexerConfig | None = None,
    **create_kwargs: Any,
) -> list[str]:
    """
    Plan and create the indexes of a record type on a Motor collection.

    Args:
        collection: Motor collection (borrowed, not closed)
        record: Record type accepted by ``describe_record``
        config: Optional indexer configuration
        **create_kwargs: Driver options for MongoCollectionGateway
            (``session``, ``comment``, ...)

    Returns:
        Names of the created indexes
    """
    gateway = MongoCollectionGateway(collection, **create_kwargs)
    return await create_indexes(gateway, record, config)
