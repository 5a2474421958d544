"""
Dashboard-ready output functions.

These are the primary entry points for the Streamlit front end. Each
function returns plain dicts suitable for rendering cards and charts.
The `load_*` variants fetch from the document store first and fall back
to an empty result when any fetch fails.
"""

import logging
from typing import Callable

from .config import PRODUCTION_TYPES
from .kpis import (
    get_dashboard_stats,
    inventory_category_distribution,
    order_status_distribution,
    production_distribution,
    summarise_monthly_activity,
    summarise_monthly_production,
)
from .loaders import load_dashboard_records, load_production_entries
from .models import DashboardRecords, ProductionEntry
from .store import DocumentStore
from .transforms import (
    build_fact_inventory,
    build_fact_orders,
    build_fact_production,
    build_fact_recipes,
)

logger = logging.getLogger(__name__)


def empty_stats() -> dict:
    return {
        "totalInventoryValue": 0.0,
        "lowStockItems": 0,
        "inventoryItems": 0,
        "activeOrders": 0,
        "completedOrders": 0,
        "cancelledOrders": 0,
        "totalOrders": 0,
        "totalRevenue": 0.0,
        "pendingRevenue": 0.0,
        "totalProduction": 0,
        "totalRecipes": 0,
    }


def empty_overview() -> dict:
    """The overview shown when nothing could be loaded."""
    return {
        "stats": empty_stats(),
        "order_status": [],
        "inventory_categories": [],
        "production_trend": [],
        "has_data": False,
    }


def get_production_analytics(
    entries: list[ProductionEntry],
    production_type: str,
) -> dict:
    """Monthly trend and distribution for a single department.

    Returns
    -------
    {
        "production_type": "knitting",
        "monthly": [{"name": "Jan 2024", "entries": 2, "production": 30.0}, ...],
        "distribution": [{"name": "Single Jersey", "value": 4}, ...],
        "distribution_label": "Fabric Type Distribution",
        "production_label": "Production (kg)",
    }
    """
    registry = PRODUCTION_TYPES[production_type]
    fact = build_fact_production(entries)

    return {
        "production_type": production_type,
        "monthly": summarise_monthly_production(fact),
        "distribution": production_distribution(fact),
        "distribution_label": registry["distribution_label"],
        "production_label": registry["production_label"],
    }


def get_comprehensive_overview(records: DashboardRecords) -> dict:
    """Cards and charts for the all-departments dashboard.

    Returns
    -------
    {
        "stats": {...scalar rollups...},
        "order_status": [{"name": "Pending", "value": 3}, ...],   # top 5
        "inventory_categories": [{"name": "Yarn", "value": 7}, ...],  # top 6
        "production_trend": [{"month": "2024-01", "name": "Jan", "batches": 4, "recipes": 1}, ...],
        "has_data": True,
    }
    """
    fact_inventory = build_fact_inventory(records.inventory)
    fact_orders = build_fact_orders(records.orders)
    fact_production = build_fact_production(records.production)
    fact_recipes = build_fact_recipes(records.recipes)

    stats = get_dashboard_stats(fact_inventory, fact_orders, fact_production, fact_recipes)
    has_data = (
        stats["inventoryItems"] > 0
        or stats["activeOrders"] > 0
        or stats["totalProduction"] > 0
    )

    return {
        "stats": stats,
        "order_status": order_status_distribution(fact_orders),
        "inventory_categories": inventory_category_distribution(fact_inventory),
        "production_trend": summarise_monthly_activity(fact_production, fact_recipes),
        "has_data": has_data,
    }


def load_production_analytics(
    store: DocumentStore,
    account_id: str,
    production_type: str,
) -> dict:
    """Fetch one department's entries and summarise them; empty on failure."""
    try:
        entries = load_production_entries(store, account_id, production_type)
    except Exception:
        logger.exception("Error fetching %s entries for %s", production_type, account_id)
        entries = []
    return get_production_analytics(entries, production_type)


def load_comprehensive_dashboard(store: DocumentStore, account_id: str) -> dict:
    """Fetch every collection and build the overview; empty on any failure."""
    try:
        records = load_dashboard_records(store, account_id)
    except Exception:
        logger.exception("Error fetching dashboard data for %s", account_id)
        return empty_overview()
    return get_comprehensive_overview(records)


class DashboardCache:
    """Holds the latest overview for one view of the dashboard.

    Each `refresh` replaces the cached overview wholesale. Once `dispose` has
    been called, results from loads still in flight are discarded.
    """

    def __init__(
        self,
        store: DocumentStore,
        account_id: str,
        loader: Callable[[DocumentStore, str], dict] = load_comprehensive_dashboard,
    ) -> None:
        self.store = store
        self.account_id = account_id
        self.loader = loader
        self.overview = empty_overview()
        self.loading = False
        self._disposed = False
        self._generation = 0

    @property
    def disposed(self) -> bool:
        return self._disposed

    def refresh(self) -> dict | None:
        """Load and cache a fresh overview.

        Returns the new overview, or None when the cache was disposed or a
        newer refresh started while this one was loading.
        """
        if self._disposed:
            return None

        self._generation += 1
        generation = self._generation
        self.loading = True
        try:
            overview = self.loader(self.store, self.account_id)
        finally:
            if generation == self._generation:
                self.loading = False

        if self._disposed or generation != self._generation:
            logger.info("Discarding stale dashboard load for %s", self.account_id)
            return None

        self.overview = overview
        return overview

    def dispose(self) -> None:
        self._disposed = True
        self.loading = False
