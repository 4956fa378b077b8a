"""Generic async Firestore repository for board-scoped collections."""

from __future__ import annotations

from typing import Any, Generic, Type, TypeVar

from tripboard.contracts.common import FirestoreModel
from tripboard.persistence.firestore_client import get_firestore_client

T = TypeVar("T", bound=FirestoreModel)

# Firestore caps a write batch at 500 operations.
BATCH_LIMIT = 450


class BaseRepository(Generic[T]):
    """Ordered collection under ``/boards/{board_id}/{collection}``.

    Serialization relies on the contract's ``to_firestore()`` and
    ``from_firestore()``. List order is kept in a ``position`` field
    since Firestore streams documents by ID.
    """

    def __init__(self, model_class: Type[T], collection_name: str, board_id: str):
        self._model_class = model_class
        self._collection_name = collection_name
        self.board_id = board_id

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _board_ref(self):
        return get_firestore_client().collection("boards").document(self.board_id)

    def _collection_ref(self):
        return self._board_ref().collection(self._collection_name)

    def _hydrate(self, data: dict[str, Any]) -> T:
        """Build a model from a stored document dict."""
        return self._model_class.from_firestore(data)

    async def _commit(self, ops: list[tuple[str, Any, dict | None]]) -> None:
        db = get_firestore_client()
        for start in range(0, len(ops), BATCH_LIMIT):
            batch = db.batch()
            for op, ref, data in ops[start:start + BATCH_LIMIT]:
                if op == "set":
                    batch.set(ref, data)
                else:
                    batch.delete(ref)
            await batch.commit()

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def list_ids(self) -> list[str]:
        return [doc.id async for doc in self._collection_ref().stream()]

    async def ordered_documents(self) -> list[dict[str, Any]]:
        """Raw document dicts (with ``id``), in stored list order."""
        rows: list[tuple[int, dict[str, Any]]] = []
        async for doc in self._collection_ref().stream():
            data = doc.to_dict()
            data["id"] = doc.id
            position = data.pop("position", None)
            rows.append((position if isinstance(position, int) else len(rows), data))
        rows.sort(key=lambda row: row[0])
        return [data for _, data in rows]

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def replace_all(self, entities: list[T]) -> int:
        """Make the collection hold exactly *entities*, in order.

        Documents whose ID is no longer present are deleted. Returns the
        number of documents written.
        """
        collection = self._collection_ref()
        existing = set(await self.list_ids())
        ops: list[tuple[str, Any, dict | None]] = []
        kept: set[str] = set()
        for position, entity in enumerate(entities):
            data = entity.to_firestore()
            doc_id = data.pop("id")
            data["position"] = position
            ops.append(("set", collection.document(doc_id), data))
            kept.add(doc_id)
        for doc_id in sorted(existing - kept):
            ops.append(("delete", collection.document(doc_id), None))
        await self._commit(ops)
        return len(entities)

    async def delete_all(self) -> None:
        collection = self._collection_ref()
        ops = [("delete", collection.document(doc_id), None) for doc_id in await self.list_ids()]
        await self._commit(ops)
