"""
Data transforms: turn typed record snapshots into flat fact tables.

Each builder returns a DataFrame with a fixed schema, even when given no
records, so the aggregation functions can group and sum without checking
for missing columns.
"""

import logging

import pandas as pd

from .config import CANCELLED_ORDER_STATUS, COMPLETED_ORDER_STATUS, TERMINAL_ORDER_STATUSES
from .models import InventoryItem, Order, ProductionEntry, Recipe
from .utils import capitalize_first, format_status_label, to_month_key

logger = logging.getLogger(__name__)

PRODUCTION_COLUMNS = ["id", "type", "collection", "date", "month", "quantity", "category"]
INVENTORY_COLUMNS = [
    "id", "name", "category", "category_label",
    "current_stock", "min_stock", "unit_price", "value", "low_stock",
]
ORDER_COLUMNS = [
    "id", "status", "status_label", "total_amount",
    "is_active", "is_completed", "is_cancelled",
]
RECIPE_COLUMNS = ["id", "timestamp", "month"]


def build_fact_production(entries: list[ProductionEntry]) -> pd.DataFrame:
    """Flatten production entries of any department into one table.

    Returns
    -------
    fact_production DataFrame with columns:
        id, type, collection, date, month, quantity, category

    `month` is the "YYYY-MM" bucket key, None when the date is unusable.
    `category` is the department's distribution key (fabric type, colour
    or style).
    """
    rows = [
        {
            "id": entry.id,
            "type": entry.type,
            "collection": entry.collection,
            "date": entry.date,
            "month": to_month_key(entry.date),
            "quantity": entry.quantity,
            "category": entry.distribution_key,
        }
        for entry in entries
    ]
    df = pd.DataFrame(rows, columns=PRODUCTION_COLUMNS)
    df["quantity"] = pd.to_numeric(df["quantity"], errors="coerce").fillna(0.0)

    undated = df["month"].isna().sum()
    if undated:
        logger.warning("%d production entries have no usable date", undated)

    logger.info("Built fact_production with %d rows", len(df))
    return df


def build_fact_inventory(items: list[InventoryItem]) -> pd.DataFrame:
    """Inventory table with stock value and low-stock flag per item."""
    rows = [
        {
            "id": item.id,
            "name": item.name,
            "category": item.category,
            "category_label": capitalize_first(item.category),
            "current_stock": item.current_stock,
            "min_stock": item.min_stock,
            "unit_price": item.unit_price,
            "value": item.value,
            "low_stock": item.is_low_stock,
        }
        for item in items
    ]
    df = pd.DataFrame(rows, columns=INVENTORY_COLUMNS)
    logger.info("Built fact_inventory with %d rows", len(df))
    return df


def build_fact_orders(orders: list[Order]) -> pd.DataFrame:
    """Order table with display label and lifecycle flags.

    Active orders are those not yet delivered or cancelled.
    """
    rows = [
        {
            "id": order.id,
            "status": order.status,
            "status_label": format_status_label(order.status),
            "total_amount": order.total_amount,
            "is_active": order.status not in TERMINAL_ORDER_STATUSES,
            "is_completed": order.status == COMPLETED_ORDER_STATUS,
            "is_cancelled": order.status == CANCELLED_ORDER_STATUS,
        }
        for order in orders
    ]
    df = pd.DataFrame(rows, columns=ORDER_COLUMNS)
    logger.info("Built fact_orders with %d rows", len(df))
    return df


def build_fact_recipes(recipes: list[Recipe]) -> pd.DataFrame:
    rows = [
        {"id": r.id, "timestamp": r.timestamp, "month": to_month_key(r.timestamp)}
        for r in recipes
    ]
    df = pd.DataFrame(rows, columns=RECIPE_COLUMNS)
    logger.info("Built fact_recipes with %d rows", len(df))
    return df
