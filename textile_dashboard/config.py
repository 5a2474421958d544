"""
Configuration: collection names, production-type registry, constants.

PRODUCTION_TYPES maps each production variant to the collection it lives
in, the fields holding its quantities, and the field used for its
distribution chart.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Environment: SUPABASE_URL / SUPABASE_KEY may come from a .env file
# ---------------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")

SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_KEY = os.environ.get("SUPABASE_KEY", "")
DEFAULT_ACCOUNT_ID = os.environ.get("TEXTILE_ACCOUNT_ID", "demo-account")
ACTIVITY_FILE = Path(
    os.environ.get("TEXTILE_ACTIVITY_FILE", BASE_DIR / ".activity_history.json")
)

APP_NAME = "Textile Mill Dashboard"

# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------
INVENTORY_COLLECTION = "inventory"
ORDERS_COLLECTION = "orders"
RECIPES_COLLECTION = "saved_recipes"
KNITTING_COLLECTION = "knitting_entries"
DYEING_COLLECTION = "dyeing_entries"
GARMENTS_COLLECTION = "garments_entries"
BOOKS_COLLECTION = "books"

# Books are shared across accounts; everything else is per account.
GLOBAL_COLLECTIONS = {BOOKS_COLLECTION}

# ---------------------------------------------------------------------------
# Production type registry
# ---------------------------------------------------------------------------
# collection: source collection for entries of this type
# quantity_field / target_field: inputs to the efficiency calculation
# distribution_field: key for the distribution pie chart
PRODUCTION_TYPES: dict[str, dict] = {
    "knitting": {
        "collection": KNITTING_COLLECTION,
        "quantity_field": "actualProduction",
        "target_field": "targetProduction",
        "distribution_field": "fabricType",
        "distribution_label": "Fabric Type Distribution",
        "production_label": "Production (kg)",
    },
    "dyeing": {
        "collection": DYEING_COLLECTION,
        "quantity_field": "actualProduction",
        "target_field": "targetProduction",
        "distribution_field": "color",
        "distribution_label": "Color Distribution",
        "production_label": "Production (kg)",
    },
    "garments": {
        "collection": GARMENTS_COLLECTION,
        "quantity_field": "completedQuantity",
        "target_field": "targetQuantity",
        "distribution_field": "style",
        "distribution_label": "Style Distribution",
        "production_label": "Production (pcs)",
    },
}

PRODUCTION_COLLECTIONS = [entry["collection"] for entry in PRODUCTION_TYPES.values()]

# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
ORDER_STATUSES = [
    "pending",
    "confirmed",
    "in-production",
    "quality-check",
    "ready-to-ship",
    "shipped",
    "delivered",
    "cancelled",
]
COMPLETED_ORDER_STATUS = "delivered"
CANCELLED_ORDER_STATUS = "cancelled"
TERMINAL_ORDER_STATUSES = {COMPLETED_ORDER_STATUS, CANCELLED_ORDER_STATUS}

# ---------------------------------------------------------------------------
# Aggregation windows
# ---------------------------------------------------------------------------
SINGLE_TYPE_TREND_MONTHS = 6
COMPREHENSIVE_TREND_MONTHS = 7
DISTRIBUTION_TOP_N = 6
ORDER_STATUS_TOP_N = 5
UNKNOWN_LABEL = "Unknown"

# ---------------------------------------------------------------------------
# Hosted-file (Google Drive) links
# ---------------------------------------------------------------------------
DRIVE_PREVIEW_URL = "https://drive.google.com/file/d/{file_id}/preview"
DRIVE_THUMBNAIL_URL = "https://drive.google.com/thumbnail?id={file_id}&sz=w1000"
DRIVE_DOWNLOAD_URL = "https://drive.google.com/uc?export=download&id={file_id}"
DRIVE_VIEW_URL = "https://drive.google.com/uc?export=view&id={file_id}"

# ---------------------------------------------------------------------------
# Activity history
# ---------------------------------------------------------------------------
ACTIVITY_STORAGE_KEY = "user_activity_history"
MAX_ACTIVITIES = 10
ACTIVITY_DEBOUNCE_SECONDS = 10.0

ACTIVITY_CONFIG: dict[str, dict] = {
    "/": {
        "title": "Visited Homepage",
        "description": "Viewed dashboard and quick actions",
        "icon": "Home",
        "gradient": "bg-gradient-to-br from-blue-500 to-blue-600",
    },
    "/dyeing-calculator": {
        "title": "Used Dyeing Calculator",
        "description": "Calculated chemical quantities",
        "icon": "Beaker",
        "gradient": "bg-gradient-to-br from-blue-500 to-blue-600",
    },
    "/proforma-invoice": {
        "title": "Generated Invoice",
        "description": "Created proforma invoice",
        "icon": "FileText",
        "gradient": "bg-gradient-to-br from-orange-500 to-orange-600",
    },
    "/inventory": {
        "title": "Managed Inventory",
        "description": "Viewed inventory items",
        "icon": "Package",
        "gradient": "bg-gradient-to-br from-teal-500 to-teal-600",
    },
    "/order-management": {
        "title": "Managed Orders",
        "description": "Viewed order pipeline",
        "icon": "ShoppingCart",
        "gradient": "bg-gradient-to-br from-cyan-500 to-cyan-600",
    },
    "/production-data": {
        "title": "Production Data",
        "description": "Recorded production data",
        "icon": "BarChart3",
        "gradient": "bg-gradient-to-br from-purple-500 to-purple-600",
    },
    "/settings": {
        "title": "Updated Settings",
        "description": "Modified application preferences",
        "icon": "Settings",
        "gradient": "bg-gradient-to-br from-green-500 to-emerald-600",
    },
    "/social-portal": {
        "title": "Visited Community",
        "description": "Explored community hub",
        "icon": "Users",
        "gradient": "bg-gradient-to-br from-teal-500 to-cyan-600",
    },
    "/book-library": {
        "title": "Browsed Library",
        "description": "Explored book library",
        "icon": "Book",
        "gradient": "bg-gradient-to-br from-emerald-500 to-green-600",
    },
}

# ---------------------------------------------------------------------------
# Chart colours
# ---------------------------------------------------------------------------
DASHBOARD_COLORS = ["#10b981", "#3b82f6", "#f59e0b", "#ef4444", "#8b5cf6", "#06b6d4"]
ANALYTICS_COLORS = ["#0088FE", "#00C49F", "#FFBB28", "#FF8042", "#8884D8", "#82CA9D"]
