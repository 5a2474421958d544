"""
Book library: shared collection of PDF books hosted on Google Drive.

Books live in the global `books` collection. Uploads store direct-view
Drive links; views and downloads are counted with atomic increments.
"""

import dataclasses
import logging
import math
from datetime import datetime, timezone

import pandas as pd

from .config import BOOKS_COLLECTION
from .links import to_direct_view_url, to_download_url
from .models import Book, BookUploadData, Uploader
from .store import DocumentStore
from .utils import normalise_date, round_half_up

logger = logging.getLogger(__name__)

SORT_OPTIONS = ("date", "name", "views", "downloads")

_REQUIRED_FIELDS = {
    "book_name": "bookName",
    "author": "author",
    "cover_photo_url": "coverPhotoUrl",
    "pdf_url": "pdfUrl",
}

_FILE_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


class BookValidationError(ValueError):
    """Raised when an upload is missing required fields."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Please fill all required fields: {', '.join(missing)}")


def _upload_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-01-15T10:00:00.000Z."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def _date_sort_key(book: Book) -> pd.Timestamp:
    ts = normalise_date(book.upload_date)
    return ts if ts is not None else pd.Timestamp.min


def load_books(store: DocumentStore) -> list[Book]:
    """All books, newest upload first. Returns [] if the fetch fails."""
    try:
        records = store.fetch(BOOKS_COLLECTION)
    except Exception:
        logger.exception("Error loading books")
        return []

    books = [Book.from_record(r) for r in records]
    books.sort(key=_date_sort_key, reverse=True)
    logger.info("Loaded %d books", len(books))
    return books


def filter_books(books: list[Book], query: str = "", sort_by: str = "date") -> list[Book]:
    """Search by name, author or description, then sort.

    sort_by
    -------
    - "date": newest upload first (default, also used for unknown values)
    - "name": alphabetical, case-insensitive
    - "views" / "downloads": most first
    """
    needle = (query or "").strip().lower()
    if needle:
        books = [
            b for b in books
            if needle in b.book_name.lower()
            or needle in b.author.lower()
            or needle in b.description.lower()
        ]

    if sort_by == "name":
        return sorted(books, key=lambda b: b.book_name.casefold())
    if sort_by == "views":
        return sorted(books, key=lambda b: b.views, reverse=True)
    if sort_by == "downloads":
        return sorted(books, key=lambda b: b.downloads, reverse=True)
    return sorted(books, key=_date_sort_key, reverse=True)


def validate_upload(data: BookUploadData) -> None:
    """Raise BookValidationError listing any required field left blank."""
    missing = [
        label for attr, label in _REQUIRED_FIELDS.items()
        if not str(getattr(data, attr) or "").strip()
    ]
    if missing:
        raise BookValidationError(missing)


def upload_book(
    store: DocumentStore,
    data: BookUploadData,
    uploader: Uploader,
    now: datetime | None = None,
) -> Book:
    """Validate and store a new book; returns it with its new id.

    Validation failures raise before the store is touched. Store failures
    are logged and re-raised so the caller can roll back its UI.
    """
    validate_upload(data)

    document = {
        "bookName": data.book_name,
        "author": data.author,
        "description": data.description,
        "coverPhotoUrl": to_direct_view_url(data.cover_photo_url),
        "pdfUrl": to_direct_view_url(data.pdf_url),
        "uploaderId": uploader.id,
        "uploaderName": uploader.display_name or uploader.email or "Anonymous",
        "uploaderEmail": uploader.email or "",
        "uploadDate": _upload_timestamp(now),
        "fileSize": data.file_size or 0,
        "downloads": 0,
        "views": 0,
    }

    try:
        book_id = store.add(BOOKS_COLLECTION, document)
    except Exception:
        logger.exception("Error uploading book %r", data.book_name)
        raise

    logger.info("Uploaded book %s (%s)", book_id, data.book_name)
    return Book.from_record({"id": book_id, **document})


def record_view(store: DocumentStore, book: Book) -> Book:
    """Count a view. Returns the book with its view count bumped on success."""
    try:
        store.increment(BOOKS_COLLECTION, book.id, "views", 1)
    except Exception:
        logger.exception("Error updating views for book %s", book.id)
        return book
    return dataclasses.replace(book, views=book.views + 1)


def record_download(store: DocumentStore, book: Book) -> tuple[Book, str]:
    """Count a download and return (updated book, URL to open).

    A failed counter update still returns the download URL.
    """
    try:
        store.increment(BOOKS_COLLECTION, book.id, "downloads", 1)
    except Exception:
        logger.exception("Error updating downloads for book %s", book.id)
    else:
        book = dataclasses.replace(book, downloads=book.downloads + 1)
    return book, to_download_url(book.pdf_url)


def format_file_size(num_bytes) -> str:
    """Human-readable size: 0 -> "0 Bytes", 1536 -> "1.5 KB"."""
    size = float(num_bytes or 0)
    if size <= 0:
        return "0 Bytes"
    i = min(int(math.floor(math.log(size) / math.log(1024))), len(_FILE_SIZE_UNITS) - 1)
    i = max(i, 0)
    value = round_half_up(size / 1024 ** i * 100) / 100
    return f"{value:g} {_FILE_SIZE_UNITS[i]}"


def format_upload_date(value: str) -> str:
    """Format an ISO date as "Jan 15, 2024"; unparseable input is returned as-is."""
    ts = normalise_date(value)
    if ts is None:
        return value or ""
    return f"{ts.strftime('%b')} {ts.day}, {ts.year}"
