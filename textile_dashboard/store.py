"""
Document store access.

Every collection is a Supabase table with rows of the form
``{id, account_id, data}`` where ``data`` is the JSONB document body.
Per-account collections filter on ``account_id``; global collections
(books) keep it null. See supabase_schema.sql for the tables and the
counter-increment function.

The in-memory store implements the same interface for tests and for the
offline demo when no Supabase credentials are configured.
"""

import copy
import itertools
import json
import logging
from typing import Any, Protocol

from .config import GLOBAL_COLLECTIONS, SUPABASE_KEY, SUPABASE_URL

logger = logging.getLogger(__name__)

PAGE_SIZE = 1000


class DocumentStore(Protocol):
    def fetch(self, collection: str, account_id: str | None = None) -> list[dict]:
        """Return every document in the collection, each including its `id`."""
        ...

    def add(self, collection: str, document: dict, account_id: str | None = None) -> str:
        """Insert a document and return its new id."""
        ...

    def increment(self, collection: str, doc_id: str, field: str, amount: int = 1) -> None:
        """Atomically add `amount` to a numeric field of one document."""
        ...


def get_supabase_client(url: str = SUPABASE_URL, key: str = SUPABASE_KEY):
    """Return a Supabase client, or None if credentials are missing."""
    if not url or not key or "YOUR_PROJECT" in url:
        return None

    from supabase import create_client
    return create_client(url, key)


def _document_from_row(row: dict) -> dict:
    data = row.get("data") or {}
    # supabase-py usually auto-parses JSONB, but handle string case too
    if isinstance(data, str):
        data = json.loads(data)
    return {"id": str(row["id"]), **data}


class SupabaseDocumentStore:
    """DocumentStore backed by Supabase tables with a JSONB `data` column."""

    def __init__(self, client) -> None:
        self.client = client

    def fetch(self, collection: str, account_id: str | None = None) -> list[dict]:
        """Fetch all documents, paginating past the 1000-row limit."""
        rows: list[dict] = []
        offset = 0
        while True:
            query = self.client.table(collection).select("*")
            if collection not in GLOBAL_COLLECTIONS:
                query = query.eq("account_id", account_id)
            resp = query.order("id").range(offset, offset + PAGE_SIZE - 1).execute()
            batch = resp.data
            rows.extend(batch)
            if len(batch) < PAGE_SIZE:
                break
            offset += PAGE_SIZE

        logger.info("Fetched %d documents from %s", len(rows), collection)
        return [_document_from_row(row) for row in rows]

    def add(self, collection: str, document: dict, account_id: str | None = None) -> str:
        row: dict[str, Any] = {"data": document}
        if collection not in GLOBAL_COLLECTIONS:
            row["account_id"] = account_id
        resp = self.client.table(collection).insert(row).execute()
        new_id = str(resp.data[0]["id"])
        logger.info("Inserted document %s into %s", new_id, collection)
        return new_id

    def increment(self, collection: str, doc_id: str, field: str, amount: int = 1) -> None:
        self.client.rpc(
            "increment_document_counter",
            {
                "table_name": collection,
                "doc_id": doc_id,
                "field_name": field,
                "amount": amount,
            },
        ).execute()


class InMemoryDocumentStore:
    """DocumentStore holding documents in process memory.

    Documents are deep-copied on the way in and out so callers can never
    mutate stored state through a returned record.
    """

    def __init__(self) -> None:
        self._collections: dict[tuple[str, str | None], dict[str, dict]] = {}
        self._ids = itertools.count(1)

    def _key(self, collection: str, account_id: str | None) -> tuple[str, str | None]:
        if collection in GLOBAL_COLLECTIONS:
            return collection, None
        return collection, account_id

    def fetch(self, collection: str, account_id: str | None = None) -> list[dict]:
        docs = self._collections.get(self._key(collection, account_id), {})
        return [{"id": doc_id, **copy.deepcopy(doc)} for doc_id, doc in docs.items()]

    def add(self, collection: str, document: dict, account_id: str | None = None) -> str:
        doc = copy.deepcopy(document)
        doc_id = str(doc.pop("id", None) or f"doc-{next(self._ids)}")
        self._collections.setdefault(self._key(collection, account_id), {})[doc_id] = doc
        return doc_id

    def increment(self, collection: str, doc_id: str, field: str, amount: int = 1) -> None:
        for (name, _), docs in self._collections.items():
            if name == collection and doc_id in docs:
                doc = docs[doc_id]
                doc[field] = (doc.get(field) or 0) + amount
                return
        raise KeyError(f"No document {doc_id!r} in {collection!r}")
