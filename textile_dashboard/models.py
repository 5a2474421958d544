"""Record snapshots read from the document store.

Raw documents arrive as plain dicts with loosely-typed fields. The
`from_record` constructors apply the defaults (0 for numbers, "Unknown" for
labels) so downstream aggregation never has to probe for missing keys.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Union

from .config import PRODUCTION_TYPES
from .utils import safe_float, safe_label

ProductionType = Literal["knitting", "dyeing", "garments"]


@dataclass(frozen=True)
class InventoryItem:
    id: str
    name: str
    category: str
    current_stock: float
    min_stock: float
    unit_price: float

    @property
    def value(self) -> float:
        return self.current_stock * self.unit_price

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.min_stock

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> InventoryItem:
        return cls(
            id=str(record.get("id") or ""),
            name=safe_label(record.get("name")),
            category=safe_label(record.get("category")),
            current_stock=safe_float(record.get("currentStock")),
            min_stock=safe_float(record.get("minStock")),
            unit_price=safe_float(record.get("unitPrice")),
        )


@dataclass(frozen=True)
class Order:
    id: str
    status: str
    total_amount: float

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Order:
        return cls(
            id=str(record.get("id") or ""),
            status=safe_label(record.get("status")),
            total_amount=safe_float(record.get("totalAmount")),
        )


@dataclass(frozen=True)
class Recipe:
    id: str
    timestamp: Any

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Recipe:
        return cls(id=str(record.get("id") or ""), timestamp=record.get("timestamp"))


@dataclass(frozen=True)
class KnittingEntry:
    id: str
    date: Any
    fabric_type: str
    actual_production: float
    target_production: float
    collection: str
    type: Literal["knitting"] = "knitting"

    @property
    def quantity(self) -> float:
        return self.actual_production

    @property
    def distribution_key(self) -> str:
        return self.fabric_type


@dataclass(frozen=True)
class DyeingEntry:
    id: str
    date: Any
    color: str
    actual_production: float
    target_production: float
    collection: str
    type: Literal["dyeing"] = "dyeing"

    @property
    def quantity(self) -> float:
        return self.actual_production

    @property
    def distribution_key(self) -> str:
        return self.color


@dataclass(frozen=True)
class GarmentsEntry:
    id: str
    date: Any
    style: str
    completed_quantity: float
    target_quantity: float
    collection: str
    type: Literal["garments"] = "garments"

    @property
    def quantity(self) -> float:
        return self.completed_quantity

    @property
    def distribution_key(self) -> str:
        return self.style


ProductionEntry = Union[KnittingEntry, DyeingEntry, GarmentsEntry]


def parse_production_entry(
    record: dict[str, Any],
    production_type: ProductionType,
    collection: str | None = None,
) -> ProductionEntry:
    """Build the typed entry for `production_type` from a raw document.

    The variant is chosen by the collection the record was read from, not
    by the record's own `type` field, which older documents may lack.
    """
    if production_type not in PRODUCTION_TYPES:
        raise ValueError(f"Unknown production type: {production_type!r}")
    if collection is None:
        collection = PRODUCTION_TYPES[production_type]["collection"]

    entry_id = str(record.get("id") or "")
    date = record.get("date")

    if production_type == "knitting":
        return KnittingEntry(
            id=entry_id,
            date=date,
            fabric_type=safe_label(record.get("fabricType")),
            actual_production=safe_float(record.get("actualProduction")),
            target_production=safe_float(record.get("targetProduction")),
            collection=collection,
        )
    if production_type == "dyeing":
        return DyeingEntry(
            id=entry_id,
            date=date,
            color=safe_label(record.get("color")),
            actual_production=safe_float(record.get("actualProduction")),
            target_production=safe_float(record.get("targetProduction")),
            collection=collection,
        )
    return GarmentsEntry(
        id=entry_id,
        date=date,
        style=safe_label(record.get("style")),
        completed_quantity=safe_float(record.get("completedQuantity")),
        target_quantity=safe_float(record.get("targetQuantity")),
        collection=collection,
    )


@dataclass(frozen=True)
class DashboardRecords:
    """Everything the comprehensive dashboard reads for one account."""
    inventory: list[InventoryItem]
    orders: list[Order]
    recipes: list[Recipe]
    production: list[ProductionEntry]


@dataclass(frozen=True)
class Book:
    id: str
    book_name: str
    author: str
    description: str
    cover_photo_url: str
    pdf_url: str
    uploader_id: str
    uploader_name: str
    uploader_email: str
    upload_date: str
    file_size: int
    downloads: int
    views: int

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Book:
        return cls(
            id=str(record.get("id") or ""),
            book_name=str(record.get("bookName") or ""),
            author=str(record.get("author") or ""),
            description=str(record.get("description") or ""),
            cover_photo_url=str(record.get("coverPhotoUrl") or ""),
            pdf_url=str(record.get("pdfUrl") or ""),
            uploader_id=str(record.get("uploaderId") or ""),
            uploader_name=str(record.get("uploaderName") or ""),
            uploader_email=str(record.get("uploaderEmail") or ""),
            upload_date=str(record.get("uploadDate") or ""),
            file_size=int(safe_float(record.get("fileSize"))),
            downloads=int(safe_float(record.get("downloads"))),
            views=int(safe_float(record.get("views"))),
        )


@dataclass(frozen=True)
class BookUploadData:
    book_name: str = ""
    author: str = ""
    description: str = ""
    cover_photo_url: str = ""
    pdf_url: str = ""
    file_size: int = 0


@dataclass(frozen=True)
class Uploader:
    id: str
    display_name: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class ActivityItem:
    id: str
    icon: str
    title: str
    description: str
    timestamp: int
    path: str
    gradient: str
