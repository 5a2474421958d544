"""
Simulated data generator for the textile mill dashboard.

Generates realistic raw documents (inventory, orders, recipes, production
entries and books) shaped exactly like the stored collections. All values
are synthetic. Used by the smoke pipeline and by the Streamlit app when no
Supabase credentials are configured.
"""

import numpy as np
import pandas as pd

from .config import (
    BOOKS_COLLECTION,
    INVENTORY_COLLECTION,
    ORDER_STATUSES,
    ORDERS_COLLECTION,
    PRODUCTION_TYPES,
    RECIPES_COLLECTION,
)
from .store import InMemoryDocumentStore

# ---------------------------------------------------------------------------
# Typical mill parameters (realistic ranges)
# ---------------------------------------------------------------------------
_INVENTORY = [
    ("Cotton yarn 30s", "yarn", 1_800, 500, 3.2),
    ("Polyester yarn 150D", "yarn", 950, 400, 2.6),
    ("Spandex 40D", "yarn", 120, 150, 9.5),
    ("Reactive Red RR", "dyes", 85, 50, 14.0),
    ("Reactive Navy", "dyes", 40, 50, 15.5),
    ("Glauber salt", "chemicals", 2_400, 800, 0.3),
    ("Soda ash", "chemicals", 600, 700, 0.4),
    ("Wetting agent", "chemicals", 150, 60, 2.1),
    ("Knitting needles VO", "spare parts", 3_000, 1_000, 0.25),
    ("Poly bags", "packaging", 12_000, 5_000, 0.02),
    ("Carton 5-ply", "packaging", 380, 400, 0.9),
]

_FABRIC_TYPES = ["Single Jersey", "Rib 1x1", "Interlock", "Pique", "Fleece"]
_COLORS = ["Navy", "Black", "White", "Heather Grey", "Red", "Olive"]
_STYLES = ["T-Shirt", "Polo", "Hoodie", "Tank Top", "Joggers"]

# (quantity low, quantity high) per production type
_OUTPUT_RANGES = {
    "knitting": (300.0, 900.0),
    "dyeing": (400.0, 1_200.0),
    "garments": (500, 2_000),
}

_BOOKS = [
    ("Knitting Technology", "David J. Spencer", "Comprehensive guide to weft and warp knitting."),
    ("Textile Dyeing", "Arthur D. Broadbent", "Principles of colouration for textile fibres."),
    ("Garment Manufacturing", "Ruth E. Glock", "Processes, practices and technology."),
]


def generate_inventory(rng: np.random.Generator) -> list[dict]:
    """Inventory items with stock jittered around typical levels."""
    docs = []
    for i, (name, category, stock, min_stock, price) in enumerate(_INVENTORY, start=1):
        current = max(0, round(stock * rng.uniform(0.7, 1.2)))
        docs.append({
            "id": f"inv-{i:03d}",
            "name": name,
            "category": category,
            "currentStock": current,
            "minStock": min_stock,
            "unitPrice": price,
        })
    return docs


def generate_orders(rng: np.random.Generator, n_orders: int = 24) -> list[dict]:
    """Orders spread across the status pipeline, weighted towards delivery."""
    weights = np.array([3, 2, 3, 1, 1, 2, 6, 1], dtype=float)
    weights /= weights.sum()
    statuses = rng.choice(ORDER_STATUSES, size=n_orders, p=weights)
    return [
        {
            "id": f"ord-{i:03d}",
            "status": str(status),
            "totalAmount": round(float(rng.uniform(800, 25_000)), 2),
        }
        for i, status in enumerate(statuses, start=1)
    ]


def generate_recipes(
    rng: np.random.Generator,
    end_month: str = "2024-06-01",
    n_months: int = 9,
) -> list[dict]:
    """Saved dyeing recipes, a few per month."""
    months = pd.date_range(end=end_month, periods=n_months, freq="MS")
    docs = []
    for month in months:
        for _ in range(int(rng.integers(0, 4))):
            day = int(rng.integers(0, 28))
            ts = month + pd.Timedelta(days=day, hours=int(rng.integers(8, 18)))
            docs.append({"id": f"rcp-{len(docs) + 1:03d}", "timestamp": ts.isoformat()})
    return docs


def generate_production_entries(
    rng: np.random.Generator,
    production_type: str,
    end_month: str = "2024-06-01",
    n_months: int = 9,
) -> list[dict]:
    """Daily-ish production entries for one department."""
    registry = PRODUCTION_TYPES[production_type]
    low, high = _OUTPUT_RANGES[production_type]
    months = pd.date_range(end=end_month, periods=n_months, freq="MS")

    docs = []
    for month in months:
        for _ in range(int(rng.integers(3, 9))):
            day = month + pd.Timedelta(days=int(rng.integers(0, 28)))
            target = round(float(rng.uniform(low, high)), 1)
            actual = round(target * float(rng.normal(0.92, 0.08)), 1)
            doc = {
                "id": f"{production_type[:3]}-{len(docs) + 1:03d}",
                "type": production_type,
                "date": day.strftime("%Y-%m-%d"),
                "shift": str(rng.choice(["morning", "evening", "night"])),
                "operator": f"Operator {int(rng.integers(1, 12))}",
                registry["target_field"]: target,
                registry["quantity_field"]: max(actual, 0.0),
            }
            if production_type == "knitting":
                doc["fabricType"] = str(rng.choice(_FABRIC_TYPES))
            elif production_type == "dyeing":
                doc["color"] = str(rng.choice(_COLORS))
            else:
                doc["style"] = str(rng.choice(_STYLES))
                doc["color"] = str(rng.choice(_COLORS))
                doc["targetQuantity"] = int(target)
                doc["completedQuantity"] = int(max(actual, 0))
            docs.append(doc)
    return docs


def generate_books() -> list[dict]:
    docs = []
    for i, (name, author, description) in enumerate(_BOOKS, start=1):
        file_id = f"1SampleDriveFileId{i:02d}abcdefghijklmnop"
        docs.append({
            "id": f"book-{i:03d}",
            "bookName": name,
            "author": author,
            "description": description,
            "coverPhotoUrl": f"https://drive.google.com/uc?export=view&id={file_id}c",
            "pdfUrl": f"https://drive.google.com/uc?export=view&id={file_id}",
            "uploaderId": "demo-user",
            "uploaderName": "Demo User",
            "uploaderEmail": "demo@example.com",
            "uploadDate": f"2024-0{i}-15T09:30:00.000Z",
            "fileSize": int(2_500_000 * i),
            "downloads": 0,
            "views": 0,
        })
    return docs


def build_sample_store(account_id: str, seed: int = 42) -> InMemoryDocumentStore:
    """In-memory store populated with one account's worth of sample data."""
    rng = np.random.default_rng(seed)
    store = InMemoryDocumentStore()

    for doc in generate_inventory(rng):
        store.add(INVENTORY_COLLECTION, doc, account_id)
    for doc in generate_orders(rng):
        store.add(ORDERS_COLLECTION, doc, account_id)
    for doc in generate_recipes(rng):
        store.add(RECIPES_COLLECTION, doc, account_id)
    for production_type, registry in PRODUCTION_TYPES.items():
        for doc in generate_production_entries(rng, production_type):
            store.add(registry["collection"], doc, account_id)
    for doc in generate_books():
        store.add(BOOKS_COLLECTION, doc)

    return store
