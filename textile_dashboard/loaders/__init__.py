"""Record loaders reading textile-mill collections from a document store."""

from .records import fetch_collection, load_dashboard_records
from .records import load_inventory, load_orders, load_recipes
from .records import load_production_entries

__all__ = [
    "fetch_collection",
    "load_dashboard_records",
    "load_inventory",
    "load_orders",
    "load_recipes",
    "load_production_entries",
]
