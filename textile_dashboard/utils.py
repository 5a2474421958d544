"""
Shared utilities for record ingestion and aggregation: number coercion,
date normalisation, month keys and display labels.
"""

import logging
import math
import re
from typing import Any

import pandas as pd

from .config import UNKNOWN_LABEL

logger = logging.getLogger(__name__)

_WORD_START = re.compile(r"\b\w")


def safe_float(val: Any, default: float = 0.0) -> float:
    """Coerce a value to float, returning `default` for non-numeric values.

    Booleans, NaN and infinities are treated as missing.
    """
    if val is None or isinstance(val, bool):
        return default
    if isinstance(val, str):
        val = val.strip()
        if not val:
            return default
    try:
        result = float(val)
    except (ValueError, TypeError):
        return default
    if math.isnan(result) or math.isinf(result):
        return default
    return result


def safe_label(val: Any) -> str:
    """Return a non-empty display string, or "Unknown"."""
    if val is None:
        return UNKNOWN_LABEL
    if isinstance(val, float) and math.isnan(val):
        return UNKNOWN_LABEL
    text = str(val).strip()
    return text or UNKNOWN_LABEL


def normalise_date(val: Any) -> pd.Timestamp | None:
    """Convert an ISO string, datetime or epoch-millisecond number to pd.Timestamp.

    Timezone information is dropped after conversion so month keys follow
    the wall-clock date recorded on the document. Returns None for missing
    or unparseable values.
    """
    if val is None or val == "" or isinstance(val, bool):
        return None
    try:
        if isinstance(val, (int, float)):
            if math.isnan(val):
                return None
            ts = pd.Timestamp(int(val), unit="ms")
        else:
            ts = pd.Timestamp(val)
    except (ValueError, TypeError, OverflowError):
        logger.warning("Could not parse date value: %s", val)
        return None
    if pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts


def to_month_key(val: Any) -> str | None:
    """Return the "YYYY-MM" bucket key for a date-like value, or None."""
    ts = normalise_date(val)
    if ts is None:
        return None
    return f"{ts.year:04d}-{ts.month:02d}"


def month_label(month_key: str, with_year: bool = True) -> str:
    """Format "2024-01" as "Jan 2024" (or "Jan" when with_year is False)."""
    ts = pd.Timestamp(f"{month_key}-01")
    return ts.strftime("%b %Y") if with_year else ts.strftime("%b")


def capitalize_first(val: Any) -> str:
    """Upper-case only the first character ("raw material" -> "Raw material")."""
    text = safe_label(val)
    return text[0].upper() + text[1:]


def format_status_label(val: Any) -> str:
    """Turn an order status into a display label ("in-production" -> "In Production")."""
    text = safe_label(val).replace("-", " ")
    return _WORD_START.sub(lambda m: m.group(0).upper(), text)


def round_half_up(val: float) -> int:
    """Round to the nearest integer with .5 always rounding up (2.5 -> 3)."""
    return int(math.floor(val + 0.5))
