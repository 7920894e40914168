import pytest
from fastapi.testclient import TestClient

from immo_analyzer.api.app import app


@pytest.fixture
def client(serial_sweeps):
    return TestClient(app)


START = "2025-01-01"


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


class TestProjectionRoute:
    def test_defaults(self, client):
        resp = client.post("/api/v1/projection", json={"start_date": START})
        assert resp.status_code == 200
        body = resp.json()
        assert len(body["yearly_projections"]) == 40
        assert [h["years"] for h in body["horizons"]] == [10, 20, 40]
        assert body["yearly_projections"][0]["date"] == START
        # Decimals serialize as strings
        assert body["loan_amount"] == "280210.00"
        assert body["issues"] == []

    def test_issues_reported(self, client):
        resp = client.post(
            "/api/v1/projection",
            json={"inputs": {"equity": "500000"}, "start_date": START},
        )
        assert resp.status_code == 200
        assert resp.json()["issues"] == ["equity_exceeds_cost"]

    def test_validation(self, client):
        resp = client.post("/api/v1/projection", json={"inputs": {"vacancy_rate": "150"}})
        assert resp.status_code == 422


class TestSensitivityRoutes:
    def test_variables(self, client):
        body = client.get("/api/v1/sensitivity/variables").json()
        assert len(body) == 8
        assert body[0]["key"] == "interest_rate"
        assert body[0]["current_value"] == "3.75"

    def test_tornado(self, client):
        resp = client.post(
            "/api/v1/sensitivity/tornado",
            json={"metric": "networth", "horizon": 20, "start_date": START},
        )
        assert resp.status_code == 200
        points = resp.json()["points"]
        assert len(points) == 8
        assert max(float(p["max_width_pct"]) for p in points) == 100.0

    def test_tornado_custom_variables(self, client):
        resp = client.post("/api/v1/sensitivity/tornado", json={
            "metric": "cashflow",
            "start_date": START,
            "variables": [
                {"key": "monthly_rent", "name": "Rent", "min": "1000", "max": "1400", "step": "50"},
            ],
        })
        assert resp.status_code == 200
        assert [p["key"] for p in resp.json()["points"]] == ["monthly_rent"]

    def test_tornado_bad_horizon(self, client):
        resp = client.post("/api/v1/sensitivity/tornado", json={"horizon": 15})
        assert resp.status_code == 400

    def test_heatmap(self, client):
        resp = client.post("/api/v1/sensitivity/heatmap", json={
            "x": "interest_rate", "y": "vacancy_rate", "metric": "networth", "start_date": START,
        })
        assert resp.status_code == 200
        cells = resp.json()["cells"]
        assert len(cells) == 25
        assert all(c["color"].startswith("rgb(") for c in cells)

    def test_heatmap_same_axes(self, client):
        resp = client.post("/api/v1/sensitivity/heatmap", json={"x": "vacancy_rate", "y": "vacancy_rate"})
        assert resp.status_code == 400

    def test_heatmap_unknown_axis(self, client):
        resp = client.post("/api/v1/sensitivity/heatmap", json={"x": "purchase_price"})
        assert resp.status_code == 400


class TestScenarioRoutes:
    def test_compare(self, client):
        resp = client.post("/api/v1/scenarios/compare", json={
            "start_date": START,
            "scenarios": [
                {"name": "Good", "kind": "optimistic"},
                {"name": "Cheap loan", "kind": "custom", "overrides": {"interest_rate": "2.5"}},
            ],
        })
        assert resp.status_code == 200
        scenarios = resp.json()["scenarios"]
        assert [s["name"] for s in scenarios] == ["Base", "Good", "Cheap loan"]
        assert scenarios[0]["overrides"] == {}
        assert scenarios[2]["overrides"] == {"interest_rate": "2.5"}

    def test_duplicate_name(self, client):
        resp = client.post("/api/v1/scenarios/compare", json={
            "scenarios": [{"name": "Good", "kind": "optimistic"}, {"name": "Good", "kind": "pessimistic"}],
        })
        assert resp.status_code == 400

    def test_wrong_direction(self, client):
        resp = client.post("/api/v1/scenarios/compare", json={
            "scenarios": [{"name": "Sunny", "kind": "optimistic", "overrides": {"vacancy_rate": "9"}}],
        })
        assert resp.status_code == 400


class TestNotAvailableMetrics:
    """No rent and a loan far above the property value: no 10-year IRR."""

    INPUTS = {"monthly_rent": "0", "renovation_costs": "500000"}

    def test_projection_irr_not_converged(self, client):
        resp = client.post("/api/v1/projection", json={"inputs": self.INPUTS, "start_date": START})
        assert resp.status_code == 200
        ten = resp.json()["horizons"][0]
        assert ten["irr_converged"] is False

    def test_tornado_reports_null(self, client):
        resp = client.post("/api/v1/sensitivity/tornado", json={
            "inputs": self.INPUTS, "metric": "irr10", "start_date": START,
        })
        assert resp.status_code == 200
        for point in resp.json()["points"]:
            assert point["base_value"] is None
            assert point["min_width_pct"] is None

    def test_heatmap_cells_null(self, client):
        resp = client.post("/api/v1/sensitivity/heatmap", json={
            "inputs": self.INPUTS, "x": "vacancy_rate", "y": "cost_increase_rate",
            "metric": "irr10", "start_date": START,
        })
        assert resp.status_code == 200
        cells = resp.json()["cells"]
        assert all(c["value"] is None and c["color"] is None for c in cells)
