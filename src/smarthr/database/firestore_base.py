from __future__ import annotations

from typing import Any, Dict, List, Optional

from google.api_core.exceptions import NotFound
from google.cloud.firestore_v1.base_query import FieldFilter

from .connection import FirebaseConnection

# Firestore rejects batches with more than 500 writes.
BATCH_LIMIT = 500


def snapshot_to_dict(snap) -> Dict[str, Any]:
    data = snap.to_dict() or {}
    data["id"] = snap.id
    return data


class FirestoreRepository:
    """Shared plumbing for one collection; subclasses map dicts to models."""

    collection: str = ""

    def __init__(self, conn: FirebaseConnection):
        self._conn = conn

    def _col(self):
        return self._conn.db().collection(self.collection)

    def _add(self, data: Dict[str, Any]) -> str:
        _, ref = self._col().add(data)
        return ref.id

    def _set(self, doc_id: str, data: Dict[str, Any], *, merge: bool = False) -> None:
        self._col().document(doc_id).set(data, merge=merge)

    def _fetch(self, doc_id: str) -> Optional[Dict[str, Any]]:
        if not doc_id:
            return None
        snap = self._col().document(doc_id).get()
        if not snap.exists:
            return None
        return snapshot_to_dict(snap)

    def _update(self, doc_id: str, fields: Dict[str, Any]) -> bool:
        try:
            self._col().document(doc_id).update(fields)
        except NotFound:
            return False
        return True

    def _delete(self, doc_id: str) -> bool:
        ref = self._col().document(doc_id)
        if not ref.get().exists:
            return False
        ref.delete()
        return True

    def _where(self, limit: Optional[int] = None, **equals: Any) -> List[Dict[str, Any]]:
        """Equality-only queries; ordering is done by callers to avoid composite indexes."""
        query = self._col()
        for field, value in equals.items():
            query = query.where(filter=FieldFilter(field, "==", value))
        if limit is not None:
            query = query.limit(limit)
        return [snapshot_to_dict(s) for s in query.stream()]

    def _delete_where(self, **equals: Any) -> List[str]:
        query = self._col()
        for field, value in equals.items():
            query = query.where(filter=FieldFilter(field, "==", value))
        snaps = list(query.stream())

        db = self._conn.db()
        for start in range(0, len(snaps), BATCH_LIMIT):
            batch = db.batch()
            for snap in snaps[start:start + BATCH_LIMIT]:
                batch.delete(snap.reference)
            batch.commit()
        return [s.id for s in snaps]
