"""
KPI computation functions — pure functions with no side effects.

Provides production efficiency, monthly trend bucketing, categorical
distributions and the scalar rollups behind the dashboard cards. Every
function accepts empty fact tables and returns zeroed or empty results.
"""

import logging
from typing import Any

import pandas as pd

from .config import (
    COMPREHENSIVE_TREND_MONTHS,
    DISTRIBUTION_TOP_N,
    ORDER_STATUS_TOP_N,
    SINGLE_TYPE_TREND_MONTHS,
)
from .utils import month_label, round_half_up, safe_float

logger = logging.getLogger(__name__)


def calc_efficiency(actual: Any, target: Any) -> int:
    """Return actual output as a rounded percentage of target.

    Returns 0 when target is zero, negative or not a number. Missing or
    non-numeric actual values count as 0.
    """
    target_val = safe_float(target)
    if target_val <= 0:
        return 0
    return round_half_up(safe_float(actual) / target_val * 100)


def summarise_monthly_production(
    fact_production: pd.DataFrame,
    months: int = SINGLE_TYPE_TREND_MONTHS,
) -> list[dict]:
    """Bucket one department's entries by month.

    Rules
    -----
    - entries: number of entries dated in the month
    - production: sum of the department's quantity field
    - Buckets sorted by "YYYY-MM" ascending; only the last `months` kept.
    - Entries without a usable date are left out.

    Returns
    -------
    List of dicts: {"name": "Jan 2024", "entries": 2, "production": 30.0}
    """
    dated = fact_production.dropna(subset=["month"])
    if dated.empty:
        return []

    grouped = (
        dated.groupby("month", sort=True)
        .agg(entries=("id", "size"), production=("quantity", "sum"))
        .tail(months)
    )

    return [
        {
            "name": month_label(month_key),
            "entries": int(row["entries"]),
            "production": float(row["production"]),
        }
        for month_key, row in grouped.iterrows()
    ]


def summarise_monthly_activity(
    fact_production: pd.DataFrame,
    fact_recipes: pd.DataFrame,
    months: int = COMPREHENSIVE_TREND_MONTHS,
) -> list[dict]:
    """Merge production-entry counts and recipe counts into monthly buckets.

    Production entries are bucketed by their `date`, recipes by their
    creation `timestamp`. A month present in either source gets a bucket.

    Returns
    -------
    List of dicts: {"month": "2024-01", "name": "Jan", "batches": 3, "recipes": 1}
    """
    batches = fact_production.dropna(subset=["month"]).groupby("month").size()
    recipes = fact_recipes.dropna(subset=["month"]).groupby("month").size()

    if batches.empty and recipes.empty:
        return []

    combined = (
        pd.DataFrame({"batches": batches, "recipes": recipes})
        .fillna(0)
        .sort_index()
        .tail(months)
    )

    return [
        {
            "month": month_key,
            "name": month_label(month_key, with_year=False),
            "batches": int(row["batches"]),
            "recipes": int(row["recipes"]),
        }
        for month_key, row in combined.iterrows()
    ]


def count_distribution(labels: pd.Series, top_n: int = DISTRIBUTION_TOP_N) -> list[dict]:
    """Count occurrences of each label, most frequent first, top `top_n` only.

    Labels with equal counts keep the order in which they were first seen.
    """
    if labels.empty:
        return []

    counts = labels.groupby(labels, sort=False).size()
    counts = counts.sort_values(ascending=False, kind="stable").head(top_n)
    return [{"name": str(name), "value": int(value)} for name, value in counts.items()]


def production_distribution(
    fact_production: pd.DataFrame,
    top_n: int = DISTRIBUTION_TOP_N,
) -> list[dict]:
    """Fabric type / colour / style distribution for one department."""
    return count_distribution(fact_production["category"], top_n)


def inventory_category_distribution(
    fact_inventory: pd.DataFrame,
    top_n: int = DISTRIBUTION_TOP_N,
) -> list[dict]:
    return count_distribution(fact_inventory["category_label"], top_n)


def order_status_distribution(
    fact_orders: pd.DataFrame,
    top_n: int = ORDER_STATUS_TOP_N,
) -> list[dict]:
    return count_distribution(fact_orders["status_label"], top_n)


def get_inventory_stats(fact_inventory: pd.DataFrame) -> dict:
    """Total stock value, low-stock count and item count."""
    return {
        "totalInventoryValue": float(fact_inventory["value"].sum()),
        "lowStockItems": int(fact_inventory["low_stock"].sum()),
        "inventoryItems": len(fact_inventory),
    }


def get_order_stats(fact_orders: pd.DataFrame) -> dict:
    """Order counts by lifecycle state plus delivered and pending revenue.

    totalRevenue sums delivered orders; pendingRevenue sums orders still
    active (neither delivered nor cancelled).
    """
    active = fact_orders[fact_orders["is_active"].astype(bool)]
    completed = fact_orders[fact_orders["is_completed"].astype(bool)]
    cancelled = fact_orders[fact_orders["is_cancelled"].astype(bool)]

    return {
        "activeOrders": len(active),
        "completedOrders": len(completed),
        "cancelledOrders": len(cancelled),
        "totalOrders": len(fact_orders),
        "totalRevenue": float(completed["total_amount"].sum()),
        "pendingRevenue": float(active["total_amount"].sum()),
    }


def get_dashboard_stats(
    fact_inventory: pd.DataFrame,
    fact_orders: pd.DataFrame,
    fact_production: pd.DataFrame,
    fact_recipes: pd.DataFrame,
) -> dict:
    """Return the scalar rollups for the comprehensive dashboard cards.

    Returns
    -------
    Dict with keys:
        totalInventoryValue, lowStockItems, inventoryItems,
        activeOrders, completedOrders, cancelledOrders, totalOrders,
        totalRevenue, pendingRevenue, totalProduction, totalRecipes
    """
    stats = {}
    stats.update(get_inventory_stats(fact_inventory))
    stats.update(get_order_stats(fact_orders))
    stats["totalProduction"] = len(fact_production)
    stats["totalRecipes"] = len(fact_recipes)
    return stats
