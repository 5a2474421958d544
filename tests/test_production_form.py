"""Tests for production entry form state and submission."""
from datetime import date, datetime, timezone

import pytest

from textile_dashboard.production_form import (
    handle_input_change,
    initial_form_data,
    prepare_entry_for_save,
    submit_entry,
)

ACCOUNT = "acct-1"
TODAY = date(2024, 3, 15)


class TestInitialForm:

    @pytest.mark.parametrize("production_type", ["knitting", "dyeing", "garments"])
    def test_common_fields(self, production_type):
        form = initial_form_data(production_type, today=TODAY)
        assert form["type"] == production_type
        assert form["date"] == "2024-03-15"
        assert form["shift"] == "morning"
        assert form["efficiency"] == 0
        assert form["qualityGrade"] == "A"

    def test_variant_fields(self):
        assert "fabricType" in initial_form_data("knitting", TODAY)
        assert "chemicalConsumption" in initial_form_data("dyeing", TODAY)
        garments = initial_form_data("garments", TODAY)
        assert garments["completedQuantity"] == 0
        assert "actualProduction" not in garments

    def test_nested_defaults_are_independent(self):
        a = initial_form_data("knitting", TODAY)
        b = initial_form_data("knitting", TODAY)
        a["defects"]["holes"] = 5
        assert b["defects"]["holes"] == 0

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            initial_form_data("weaving", TODAY)


class TestEfficiencyRecompute:

    @pytest.mark.parametrize("production_type, quantity, target", [
        ("knitting", "actualProduction", "targetProduction"),
        ("dyeing", "actualProduction", "targetProduction"),
        ("garments", "completedQuantity", "targetQuantity"),
    ])
    def test_quantity_and_target_edits(self, production_type, quantity, target):
        form = initial_form_data(production_type, TODAY)
        form = handle_input_change(form, production_type, target, 200)
        assert form["efficiency"] == 0
        form = handle_input_change(form, production_type, quantity, 150)
        assert form["efficiency"] == 75
        form = handle_input_change(form, production_type, target, 0)
        assert form["efficiency"] == 0

    def test_other_field_leaves_efficiency(self):
        form = {**initial_form_data("knitting", TODAY), "efficiency": 42}
        updated = handle_input_change(form, "knitting", "operator", "Ravi")
        assert updated["operator"] == "Ravi"
        assert updated["efficiency"] == 42

    def test_garments_ignore_actual_production(self):
        form = initial_form_data("garments", TODAY)
        form = handle_input_change(form, "garments", "targetQuantity", 100)
        form = handle_input_change(form, "garments", "actualProduction", 90)
        assert form["efficiency"] == 0

    def test_returns_new_dict(self):
        form = initial_form_data("dyeing", TODAY)
        updated = handle_input_change(form, "dyeing", "color", "Navy")
        assert form["color"] == ""
        assert updated is not form


class TestSubmit:

    def test_prepare_strips_store_fields(self):
        form = {"id": "x", "userId": "u", "timestamp": "t", "color": "Red"}
        assert prepare_entry_for_save(form) == {"color": "Red"}

    def test_submit_writes_to_department_collection(self, store):
        form = initial_form_data("dyeing", TODAY)
        form = handle_input_change(form, "dyeing", "targetProduction", 400)
        form = handle_input_change(form, "dyeing", "actualProduction", 300)
        now = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)

        entry_id = submit_entry(store, ACCOUNT, "dyeing", {**form, "id": "stale"}, now=now)

        docs = store.fetch("dyeing_entries", ACCOUNT)
        assert [d["id"] for d in docs] == [entry_id]
        doc = docs[0]
        assert entry_id != "stale"
        assert doc["type"] == "dyeing"
        assert doc["userId"] == ACCOUNT
        assert doc["timestamp"] == "2024-03-15T12:00:00+00:00"
        assert doc["efficiency"] == 75
        assert store.fetch("dyeing_entries", "other-account") == []

    def test_submit_failure_is_reraised(self, failing_store):
        store = failing_store(fail_add=True)
        with pytest.raises(ConnectionError):
            submit_entry(store, ACCOUNT, "knitting", initial_form_data("knitting", TODAY))
