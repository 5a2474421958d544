"""
Tests for the dashboard entry points: fetching, fail-soft loading and the
result cache.
"""
from textile_dashboard.config import PRODUCTION_COLLECTIONS
from textile_dashboard.dashboard import (
    DashboardCache,
    empty_overview,
    get_production_analytics,
    load_comprehensive_dashboard,
    load_production_analytics,
)
from textile_dashboard.loaders import load_dashboard_records
from textile_dashboard.simulator import build_sample_store

ACCOUNT = "acct-1"


def _seed(store):
    store.add("inventory", {"category": "yarn", "currentStock": 10, "minStock": 20, "unitPrice": 2}, ACCOUNT)
    store.add("inventory", {"category": "dyes", "currentStock": 50, "minStock": 5, "unitPrice": 1}, ACCOUNT)
    store.add("orders", {"status": "pending", "totalAmount": 100}, ACCOUNT)
    store.add("orders", {"status": "delivered", "totalAmount": 400}, ACCOUNT)
    store.add("saved_recipes", {"timestamp": "2024-02-10T09:00:00Z"}, ACCOUNT)
    store.add("knitting_entries", {"date": "2024-01-10", "actualProduction": 10}, ACCOUNT)
    store.add("dyeing_entries", {"date": "2024-02-11", "actualProduction": 20}, ACCOUNT)
    store.add("garments_entries", {"date": "2024-02-12", "completedQuantity": 30}, ACCOUNT)


class TestProductionAnalytics:

    def test_scenario_and_labels(self, knitting_entries):
        result = get_production_analytics(knitting_entries, "knitting")
        assert result["monthly"] == [
            {"name": "Jan 2024", "entries": 2, "production": 30},
            {"name": "Feb 2024", "entries": 1, "production": 5},
        ]
        assert result["distribution"] == [
            {"name": "Single Jersey", "value": 2},
            {"name": "Rib", "value": 1},
        ]
        assert result["distribution_label"] == "Fabric Type Distribution"
        assert result["production_label"] == "Production (kg)"

    def test_load_reads_department_collection(self, store):
        store.add("garments_entries", {"date": "2024-04-01", "style": "Polo", "completedQuantity": 12}, ACCOUNT)
        store.add("garments_entries", {"date": "2024-04-02", "style": "Polo"}, "someone-else")
        result = load_production_analytics(store, ACCOUNT, "garments")
        assert result["monthly"] == [{"name": "Apr 2024", "entries": 1, "production": 12}]
        assert result["production_label"] == "Production (pcs)"

    def test_load_failure_gives_empty_series(self, failing_store):
        store = failing_store(fail_fetch={"dyeing_entries"})
        result = load_production_analytics(store, ACCOUNT, "dyeing")
        assert result["monthly"] == []
        assert result["distribution"] == []


class TestComprehensiveDashboard:

    def test_overview(self, store):
        _seed(store)
        overview = load_comprehensive_dashboard(store, ACCOUNT)
        stats = overview["stats"]

        assert stats["totalInventoryValue"] == 70
        assert stats["lowStockItems"] == 1
        assert stats["inventoryItems"] == 2
        assert stats["activeOrders"] == 1
        assert stats["completedOrders"] == 1
        assert stats["totalRevenue"] == 400
        assert stats["pendingRevenue"] == 100
        assert stats["totalProduction"] == 3
        assert stats["totalRecipes"] == 1
        assert overview["has_data"] is True

        assert overview["production_trend"] == [
            {"month": "2024-01", "name": "Jan", "batches": 1, "recipes": 0},
            {"month": "2024-02", "name": "Feb", "batches": 2, "recipes": 1},
        ]
        assert overview["order_status"] == [
            {"name": "Pending", "value": 1},
            {"name": "Delivered", "value": 1},
        ]

    def test_entries_tagged_with_source_collection(self, store):
        _seed(store)
        records = load_dashboard_records(store, ACCOUNT)
        assert sorted(e.collection for e in records.production) == sorted(PRODUCTION_COLLECTIONS)

    def test_empty_account_has_no_data(self, store):
        overview = load_comprehensive_dashboard(store, ACCOUNT)
        assert overview == empty_overview()

    def test_any_fetch_failure_falls_back_to_defaults(self, failing_store):
        store = failing_store(fail_fetch={"garments_entries"})
        _seed(store)
        overview = load_comprehensive_dashboard(store, ACCOUNT)
        assert overview == empty_overview()

    def test_first_failure_stops_further_fetches(self, failing_store):
        store = failing_store(fail_fetch={"orders"})
        load_comprehensive_dashboard(store, ACCOUNT)
        fetched = [c[1] for c in store.calls if c[0] == "fetch"]
        assert fetched == ["inventory", "orders"]

    def test_sample_store_loads(self):
        overview = load_comprehensive_dashboard(build_sample_store(ACCOUNT), ACCOUNT)
        assert overview["has_data"]
        assert len(overview["production_trend"]) <= 7
        assert len(overview["order_status"]) <= 5
        assert len(overview["inventory_categories"]) <= 6


class TestDashboardCache:

    def test_refresh_replaces_overview(self, store):
        cache = DashboardCache(store, ACCOUNT)
        assert cache.overview == empty_overview()

        _seed(store)
        result = cache.refresh()
        assert result is cache.overview
        assert cache.overview["stats"]["inventoryItems"] == 2
        assert cache.loading is False

    def test_dispose_during_load_discards_result(self, store):
        _seed(store)
        cache = None

        def loader(s, account_id):
            cache.dispose()
            return load_comprehensive_dashboard(s, account_id)

        cache = DashboardCache(store, ACCOUNT, loader=loader)
        assert cache.refresh() is None
        assert cache.overview == empty_overview()
        assert cache.disposed

    def test_disposed_cache_does_not_load(self, store):
        calls = []
        cache = DashboardCache(store, ACCOUNT, loader=lambda s, a: calls.append(a) or {})
        cache.dispose()
        assert cache.refresh() is None
        assert calls == []

    def test_newer_refresh_wins(self, store):
        results = iter([{"n": 2}])
        cache = None

        def loader(s, account_id):
            if not results_started:
                results_started.append(True)
                cache.refresh()
                return {"n": 1}
            return next(results)

        results_started = []
        cache = DashboardCache(store, ACCOUNT, loader=loader)
        assert cache.refresh() is None
        assert cache.overview == {"n": 2}
