"""
Document collections on top of the SQL database.

Each collection stores JSON documents keyed by their own `id` field. Queries are
simple equality matches; listings are newest-first by insertion order. Every
write is a single commit, so a document is never left half-written.
"""
import copy
import logging
import time
from typing import Any, Iterable
from uuid import uuid4

from sqlalchemy.orm import Session

from ..models.document import Document

logger = logging.getLogger(__name__)

JOBS = "jobs"
APPLICATIONS = "applications"
ARTICLES = "articles"


def new_document_id() -> str:
    """Opaque id: millisecond timestamp plus a random suffix so same-millisecond inserts differ."""
    return f"{int(time.time() * 1000)}{uuid4().hex[:6]}"


def _matches(doc: dict, query: dict) -> bool:
    return all(doc.get(k) == v for k, v in query.items())


class Collection:
    def __init__(self, db: Session, name: str):
        self.db = db
        self.name = name

    def _rows(self, query: dict):
        q = self.db.query(Document).filter(Document.collection == self.name)
        if "id" in query:
            q = q.filter(Document.doc_id == str(query["id"]))
        rest = {k: v for k, v in query.items() if k != "id"}
        for key, value in rest.items():
            # String keys (e.g. jobId) filter in SQL; every key is re-checked below.
            if isinstance(value, str):
                q = q.filter(Document.data[key].as_string() == value)
        for row in q.order_by(Document.seq.desc()).all():
            if _matches(row.data or {}, rest):
                yield row

    def find(self, query: dict | None = None, *, exclude: Iterable[str] = ()) -> list[dict]:
        """All matching documents, newest first. `exclude` drops keys from each result."""
        dropped = set(exclude)
        out = []
        for row in self._rows(query or {}):
            doc = copy.deepcopy(row.data)
            for key in dropped:
                doc.pop(key, None)
            out.append(doc)
        return out

    def find_one(self, query: dict) -> dict | None:
        row = next(self._rows(query), None)
        return copy.deepcopy(row.data) if row is not None else None

    def insert_one(self, doc: dict) -> dict:
        if not doc.get("id"):
            raise ValueError("Document requires an 'id'")
        stored = copy.deepcopy(doc)
        row = Document(collection=self.name, doc_id=str(stored["id"]), data=stored)
        try:
            self.db.add(row)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return copy.deepcopy(stored)

    def update_one(self, query: dict, patch: dict[str, Any]) -> int:
        """Shallow-merge `patch` into the first match. Returns the matched count (0 or 1)."""
        row = next(self._rows(query), None)
        if row is None:
            return 0
        data = dict(row.data or {})
        data.update(copy.deepcopy(patch))
        data["id"] = row.doc_id
        # Reassign so SQLAlchemy sees the JSON column as dirty.
        row.data = data
        try:
            self.db.add(row)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return 1

    def delete_one(self, query: dict) -> int:
        row = next(self._rows(query), None)
        if row is None:
            return 0
        try:
            self.db.delete(row)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return 1


def get_collection(db: Session, name: str) -> Collection:
    return Collection(db, name)
