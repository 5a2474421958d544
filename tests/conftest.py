import pytest

from textile_dashboard.models import parse_production_entry
from textile_dashboard.store import InMemoryDocumentStore


class FailingStore(InMemoryDocumentStore):
    """Store whose reads, writes or counter updates raise on demand."""

    def __init__(self, fail_fetch=(), fail_add=False, fail_increment=False):
        super().__init__()
        self.fail_fetch = set(fail_fetch)
        self.fail_add = fail_add
        self.fail_increment = fail_increment
        self.calls = []

    def fetch(self, collection, account_id=None):
        self.calls.append(("fetch", collection))
        if collection in self.fail_fetch:
            raise ConnectionError(f"fetch {collection} failed")
        return super().fetch(collection, account_id)

    def add(self, collection, document, account_id=None):
        self.calls.append(("add", collection))
        if self.fail_add:
            raise ConnectionError("write failed")
        return super().add(collection, document, account_id)

    def increment(self, collection, doc_id, field, amount=1):
        self.calls.append(("increment", collection, field))
        if self.fail_increment:
            raise ConnectionError("increment failed")
        return super().increment(collection, doc_id, field, amount)


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def failing_store():
    """Factory for stores that raise on the named operations."""
    return FailingStore


@pytest.fixture
def knitting_entries():
    """Three knitting entries: two in Jan 2024, one in Feb 2024."""
    records = [
        {"id": "k1", "date": "2024-01-05", "fabricType": "Single Jersey", "actualProduction": 10},
        {"id": "k2", "date": "2024-01-20", "fabricType": "Rib", "actualProduction": 20},
        {"id": "k3", "date": "2024-02-02", "fabricType": "Single Jersey", "actualProduction": 5},
    ]
    return [parse_production_entry(r, "knitting") for r in records]
