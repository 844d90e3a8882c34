"""
Tests for the HTTP service over the seeded store.
"""

import pytest
from fastapi.testclient import TestClient

from sales_report.main import app


@pytest.fixture(scope="module")
def client():
    # entering the context runs the lifespan, which seeds the store
    with TestClient(app) as c:
        yield c


def scenario() -> dict:
    return {
        "sellers": [
            {"id": "S1", "first_name": "A", "last_name": "B"},
            {"id": "S2", "first_name": "C", "last_name": "D"},
        ],
        "products": [
            {"sku": "SKU1", "purchase_price": 10},
            {"sku": "SKU2", "purchase_price": 5},
        ],
        "purchase_records": [
            {"seller_id": "S1", "total_amount": 100,
             "items": [{"sku": "SKU1", "quantity": 2, "sale_price": 20, "discount": 10}]},
            {"seller_id": "S2", "total_amount": 50,
             "items": [{"sku": "SKU2", "quantity": 5, "sale_price": 10, "discount": 0}]},
        ],
        "customers": [{"id": "C1"}],
    }


class TestSellers:
    def test_list_sellers(self, client):
        resp = client.get("/api/v1/sellers")
        assert resp.status_code == 200
        assert len(resp.json()["sellers"]) == 5

    def test_unknown_seller_404(self, client):
        assert client.get("/api/v1/sellers/nobody").status_code == 404


class TestStoredReport:
    def test_report_ranked_by_profit(self, client):
        resp = client.get("/api/v1/report")
        assert resp.status_code == 200
        rows = resp.json()["report"]
        assert len(rows) == 5
        profits = [r["profit"] for r in rows]
        assert profits == sorted(profits, reverse=True)
        assert rows[-1]["bonus"] == 0
        for row in rows:
            assert len(row["top_products"]) <= 10

    def test_seller_report_matches_full_report(self, client):
        rows = client.get("/api/v1/report").json()["report"]
        resp = client.get(f"/api/v1/sellers/{rows[1]['seller_id']}/report")
        assert resp.status_code == 200
        body = resp.json()
        assert body["rank"] == 1
        assert body["total"] == 5
        assert body["profit"] == rows[1]["profit"]

    def test_seller_report_unknown_404(self, client):
        assert client.get("/api/v1/sellers/nobody/report").status_code == 404

    def test_reseed_is_deterministic(self, client):
        before = client.get("/api/v1/report").json()
        resp = client.post("/api/v1/admin/seed")
        assert resp.status_code == 200
        assert resp.json()["purchase_records"] == 200
        assert client.get("/api/v1/report").json() == before


class TestPostedReport:
    def test_scenario(self, client):
        resp = client.post("/api/v1/report", json=scenario())
        assert resp.status_code == 200
        rows = resp.json()["report"]
        assert [r["seller_id"] for r in rows] == ["S2", "S1"]
        assert rows[0]["bonus"] == 3.75
        assert rows[1]["bonus"] == 1.6
        assert rows[0]["top_products"] == [{"sku": "SKU2", "quantity": 5}]

    def test_empty_customers_400(self, client):
        data = scenario()
        data["customers"] = []
        resp = client.post("/api/v1/report", json=data)
        assert resp.status_code == 400
        assert "customers" in resp.json()["detail"]

    def test_unknown_sku_422(self, client):
        data = scenario()
        data["purchase_records"][0]["items"][0]["sku"] = "GHOST"
        resp = client.post("/api/v1/report", json=data)
        assert resp.status_code == 422
        assert "GHOST" in resp.json()["detail"]
