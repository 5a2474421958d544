"""
Loaders for per-account records: inventory, orders, recipes and production
entries from the three departments.

Errors from the store propagate unchanged. Dashboard entry points decide
how to degrade.
"""

import logging

from ..config import (
    INVENTORY_COLLECTION,
    ORDERS_COLLECTION,
    PRODUCTION_TYPES,
    RECIPES_COLLECTION,
)
from ..models import (
    DashboardRecords,
    InventoryItem,
    Order,
    ProductionEntry,
    Recipe,
    parse_production_entry,
)
from ..store import DocumentStore

logger = logging.getLogger(__name__)


def fetch_collection(
    store: DocumentStore,
    collection: str,
    account_id: str | None = None,
) -> list[dict]:
    """Return the raw documents of one collection, in no particular order."""
    records = store.fetch(collection, account_id)
    logger.info("Loaded %d records from %s", len(records), collection)
    return records


def load_inventory(store: DocumentStore, account_id: str) -> list[InventoryItem]:
    return [
        InventoryItem.from_record(r)
        for r in fetch_collection(store, INVENTORY_COLLECTION, account_id)
    ]


def load_orders(store: DocumentStore, account_id: str) -> list[Order]:
    return [Order.from_record(r) for r in fetch_collection(store, ORDERS_COLLECTION, account_id)]


def load_recipes(store: DocumentStore, account_id: str) -> list[Recipe]:
    return [Recipe.from_record(r) for r in fetch_collection(store, RECIPES_COLLECTION, account_id)]


def load_production_entries(
    store: DocumentStore,
    account_id: str,
    production_type: str,
) -> list[ProductionEntry]:
    """Load one department's entries, typed by `production_type`."""
    if production_type not in PRODUCTION_TYPES:
        raise ValueError(f"Unknown production type: {production_type!r}")
    collection = PRODUCTION_TYPES[production_type]["collection"]
    return [
        parse_production_entry(r, production_type, collection)
        for r in fetch_collection(store, collection, account_id)
    ]


def load_dashboard_records(store: DocumentStore, account_id: str) -> DashboardRecords:
    """Load everything the comprehensive dashboard needs.

    Collections are read one after another; the first failure aborts the
    whole load.
    """
    inventory = load_inventory(store, account_id)
    orders = load_orders(store, account_id)
    recipes = load_recipes(store, account_id)

    production: list[ProductionEntry] = []
    for production_type in PRODUCTION_TYPES:
        production.extend(load_production_entries(store, account_id, production_type))

    return DashboardRecords(
        inventory=inventory,
        orders=orders,
        recipes=recipes,
        production=production,
    )
