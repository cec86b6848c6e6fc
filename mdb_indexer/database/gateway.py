"""
Collection Gateway

The single capability the indexer needs from a document store: create a
batch of indexes and report their names. Any collection binding adapts to
this shape; MongoCollectionGateway adapts a Motor (or PyMongo async)
collection.

This module is part of MDB_INDEXER.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pymongo.errors import (
    ConnectionFailure,
    OperationFailure,
    ServerSelectionTimeoutError,
)

from ..observability.logging import get_logger

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorClientSession, AsyncIOMotorCollection

    from ..indexes.planner import IndexSpec

logger = get_logger(__name__)


@runtime_checkable
class CollectionGateway(Protocol):
    """
    Minimal index-creation capability of a collection.

    ``create_indexes`` submits all specs in one call and returns the created
    index names in order. It raises whatever the store raises when any spec
    is rejected; already-applied specs are not rolled back. An empty
    sequence is a no-op returning ``[]``.
    """

    async def create_indexes(self, specs: Sequence["IndexSpec"]) -> list[str]: ...


class MongoCollectionGateway:
    """
    CollectionGateway over a Motor collection.

    The collection is borrowed: the gateway never closes it or its client.

    Example:
        gateway = MongoCollectionGateway(db["users"])
        names = await gateway.create_indexes(plan_indexes(User))
    """

    def __init__(
        self,
        collection: "AsyncIOMotorCollection",
        *,
        session: "AsyncIOMotorClientSession | None" = None,
        **create_kwargs: Any,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            collection: Motor collection (or any collection with an awaitable
                ``create_indexes(list[IndexModel], ...)``)
            session: Optional client session passed to every call
            **create_kwargs: Extra driver options forwarded unchanged
                (``comment``, ``maxTimeMS``, ...)
        """
        self._collection = collection
        self._session = session
        self._create_kwargs = create_kwargs

    @property
    def collection(self) -> "AsyncIOMotorCollection":
        return self._collection

    async def create_indexes(self, specs: Sequence["IndexSpec"]) -> list[str]:
        if not specs:
            return []

        log_prefix = f"[{getattr(self._collection, 'name', '?')}]"
        models = [spec.to_index_model() for spec in specs]
        kwargs = dict(self._create_kwargs)
        if self._session is not None:
            kwargs["session"] = self._session

        logger.debug(f"{log_prefix} Submitting {len(models)} index model(s) to the driver")
        try:
            names = await self._collection.create_indexes(models, **kwargs)
        except (OperationFailure, ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(
                f"{log_prefix} ❌ Driver rejected index creation: {e}",
                exc_info=True,
            )
            raise
        return list(names)
