"""
Production data-entry form state.

A form is a plain dict of document fields. Updates return a new dict;
editing the actual or target quantity of the active production type
recomputes `efficiency`.
"""

import copy
import logging
from datetime import date, datetime, timezone

from .config import PRODUCTION_TYPES
from .kpis import calc_efficiency
from .store import DocumentStore

logger = logging.getLogger(__name__)

SHIFTS = ("morning", "evening", "night")
QUALITY_GRADES = ("A", "B", "C", "D")

_NOT_SAVED_FIELDS = ("id", "userId", "timestamp")


def _base_form(today: date) -> dict:
    return {
        "date": today.isoformat(),
        "shift": "morning",
        "operator": "",
        "supervisor": "",
        "machineNo": "",
        "startTime": "",
        "endTime": "",
        "totalHours": 0,
        "notes": "",
    }


def initial_form_data(production_type: str, today: date | None = None) -> dict:
    """Blank form for `production_type`, dated today."""
    if production_type not in PRODUCTION_TYPES:
        raise ValueError(f"Unknown production type: {production_type!r}")
    form = _base_form(today or date.today())

    if production_type == "knitting":
        form.update({
            "type": "knitting",
            "fabricType": "",
            "yarnType": "",
            "yarnLot": "",
            "gauge": "",
            "gsm": 0,
            "width": 0,
            "targetProduction": 0,
            "actualProduction": 0,
            "efficiency": 0,
            "defects": {"holes": 0, "dropStitches": 0, "yarnBreaks": 0, "other": 0},
            "qualityGrade": "A",
            "rpm": 0,
            "needleBreaks": 0,
        })
    elif production_type == "dyeing":
        form.update({
            "type": "dyeing",
            "fabricType": "",
            "color": "",
            "dyeType": "",
            "batchWeight": 0,
            "liquorRatio": 0,
            "temperature": 0,
            "pH": 0,
            "processTime": 0,
            "targetProduction": 0,
            "actualProduction": 0,
            "efficiency": 0,
            "qualityGrade": "A",
            "chemicalConsumption": {"dyes": 0, "salt": 0, "soda": 0, "auxiliaries": 0},
            "qualityResults": {
                "colorMatch": "excellent",
                "fastness": "excellent",
                "uniformity": "excellent",
            },
            "waterConsumption": 0,
            "energyConsumption": 0,
            "wasteGenerated": 0,
        })
    else:
        form.update({
            "type": "garments",
            "style": "",
            "size": "",
            "color": "",
            "targetQuantity": 0,
            "completedQuantity": 0,
            "efficiency": 0,
            "defects": {
                "stitchingDefects": 0,
                "measurementDefects": 0,
                "fabricDefects": 0,
                "other": 0,
            },
            "operations": {"cutting": 0, "sewing": 0, "finishing": 0, "packing": 0},
            "qualityGrade": "A",
            "rework": 0,
        })
    return form


def handle_input_change(form: dict, production_type: str, field: str, value) -> dict:
    """Return a copy of `form` with `field` set to `value`.

    When `field` is the quantity or target field of `production_type`,
    `efficiency` is recalculated from the updated pair.
    """
    registry = PRODUCTION_TYPES[production_type]
    updated = {**form, field: value}

    quantity_field = registry["quantity_field"]
    target_field = registry["target_field"]
    if field in (quantity_field, target_field):
        updated["efficiency"] = calc_efficiency(
            updated.get(quantity_field) or 0,
            updated.get(target_field) or 0,
        )
    return updated


def prepare_entry_for_save(form: dict) -> dict:
    """Strip the fields the store assigns itself."""
    return {k: copy.deepcopy(v) for k, v in form.items() if k not in _NOT_SAVED_FIELDS}


def submit_entry(
    store: DocumentStore,
    account_id: str,
    production_type: str,
    form: dict,
    now: datetime | None = None,
) -> str:
    """Save a completed form to its department's collection; returns the new id."""
    collection = PRODUCTION_TYPES[production_type]["collection"]
    now = now or datetime.now(timezone.utc)

    document = prepare_entry_for_save(form)
    document["type"] = production_type
    document["userId"] = account_id
    document["timestamp"] = now.isoformat()

    try:
        entry_id = store.add(collection, document, account_id)
    except Exception:
        logger.exception("Error saving %s entry for %s", production_type, account_id)
        raise

    logger.info("Saved %s entry %s", production_type, entry_id)
    return entry_id
