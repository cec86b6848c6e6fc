"""
In-memory Collection Gateway.

A CollectionGateway that keeps index documents in a dict and follows the
server's createIndexes rules closely enough for tests and dry runs:

- an index without an explicit name is named ``<field>_<direction>``
- re-creating an identical index is a no-op
- a plain ascending ``_id`` key is the built-in ``_id_`` index; options on
  it are rejected
- a name or key clash with a different definition raises OperationFailure
  (code 85 IndexOptionsConflict / 86 IndexKeySpecsConflict)

Every submitted batch is recorded in ``calls`` for assertions.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from pymongo.errors import OperationFailure

from ..constants import (
    INDEX_KEY_SPECS_CONFLICT_CODE,
    INDEX_OPTIONS_CONFLICT_CODE,
    INVALID_INDEX_SPECIFICATION_OPTION_CODE,
)
from ..indexes.helpers import (
    default_index_name,
    index_options_match,
    is_id_index,
    keys_to_dict,
)
from ..observability.logging import get_logger

if TYPE_CHECKING:
    from ..indexes.planner import IndexSpec

logger = get_logger(__name__)

_ID_INDEX: dict[str, Any] = {"key": {"_id": 1}, "name": "_id_"}


class InMemoryCollectionGateway:
    """
    Dict-backed CollectionGateway.

    A batch is validated in full before any of it is applied, so a rejected
    batch leaves the stored indexes untouched.
    """

    def __init__(self, name: str = "in_memory", error: Exception | None = None) -> None:
        """
        Initialize the gateway.

        Args:
            name: Collection name used in log messages
            error: Exception raised by every non-empty create_indexes call,
                to simulate store failures
        """
        self.name = name
        self.error = error
        self.calls: list[list["IndexSpec"]] = []
        self._indexes: dict[str, dict[str, Any]] = {_ID_INDEX["name"]: dict(_ID_INDEX)}

    def list_indexes(self) -> list[dict[str, Any]]:
        return [dict(doc) for doc in self._indexes.values()]

    def get_index(self, name: str) -> dict[str, Any] | None:
        doc = self._indexes.get(name)
        return dict(doc) if doc is not None else None

    def _check_id_index(self, doc: dict[str, Any]) -> str:
        """Resolve an ascending ``_id`` request to the built-in index, or reject its options."""
        options = set(doc) - {"key"}
        if doc.get("name") == _ID_INDEX["name"]:
            options.discard("name")
        if options:
            raise OperationFailure(
                f"The _id index cannot be customized. Requested index: {doc}",
                code=INVALID_INDEX_SPECIFICATION_OPTION_CODE,
            )
        logger.info(
            f"[{self.name}] Skipping '_id' index. MongoDB creates it on every "
            f"collection; no action needed."
        )
        return _ID_INDEX["name"]

    def _check_conflicts(
        self, staged: dict[str, dict[str, Any]], name: str, doc: dict[str, Any]
    ) -> bool:
        """Return True if an identical index exists, raise on a conflicting one."""
        existing = staged.get(name)
        if existing is not None:
            if index_options_match(existing, doc):
                return True
            if keys_to_dict(existing["key"]) != keys_to_dict(doc["key"]):
                raise OperationFailure(
                    f"An existing index has the same name as the requested index "
                    f"but different keys. Requested index: {doc}, existing index: {existing}",
                    code=INDEX_KEY_SPECS_CONFLICT_CODE,
                )
            raise OperationFailure(
                f"An existing index has the same name as the requested index "
                f"but different options. Requested index: {doc}, existing index: {existing}",
                code=INDEX_OPTIONS_CONFLICT_CODE,
            )

        for other_name, other in staged.items():
            if keys_to_dict(other["key"]) == keys_to_dict(doc["key"]):
                raise OperationFailure(
                    f"Index already exists with a different name: {other_name}. "
                    f"Requested index: {doc}",
                    code=INDEX_OPTIONS_CONFLICT_CODE,
                )
        return False

    async def create_indexes(self, specs: Sequence["IndexSpec"]) -> list[str]:
        if not specs:
            return []

        self.calls.append(list(specs))
        if self.error is not None:
            raise self.error

        staged = dict(self._indexes)
        names = []
        for spec in specs:
            doc = spec.document()
            if is_id_index(doc["key"]) and doc["key"]["_id"] == 1:
                names.append(self._check_id_index(doc))
                continue
            name = doc.setdefault("name", default_index_name(doc["key"]))
            if self._check_conflicts(staged, name, doc):
                logger.debug(f"[{self.name}] Index '{name}' already exists; no-op.")
            else:
                staged[name] = doc
            names.append(name)

        self._indexes = staged
        return names
