import pytest
from fastapi.testclient import TestClient

from loancalc.api.app import app

client = TestClient(app)


class TestSolveRoute:
    def test_repayment(self):
        resp = client.post("/api/v1/solve", json={
            "target": "repayment", "capital": 10000, "periods": 24, "annual_rate": 0.12,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["value"] == pytest.approx(470.7347, abs=1e-3)
        assert data["converged"] is True
        assert data["status"] == "converged"

    def test_rate(self):
        resp = client.post("/api/v1/solve", json={
            "target": "rate", "capital": 10000, "repayment": 470.734722, "periods": 24,
        })
        assert resp.status_code == 200
        assert resp.json()["value"] == pytest.approx(0.12, abs=1e-6)

    def test_missing_field(self):
        resp = client.post("/api/v1/solve", json={"target": "capital", "periods": 24})
        assert resp.status_code == 400
        assert "Missing value" in resp.json()["detail"]

    def test_undefined(self):
        resp = client.post("/api/v1/solve", json={
            "target": "duration", "capital": 100000, "repayment": 500, "annual_rate": 0.12,
        })
        assert resp.status_code == 400

    def test_unknown_target(self):
        resp = client.post("/api/v1/solve", json={"target": "fees", "capital": 1})
        assert resp.status_code == 422


class TestScheduleRoute:
    def test_schedule(self):
        resp = client.post("/api/v1/schedule", json={
            "capital": 10000, "repayment": 500, "periods": 24, "annual_rate": 0.12,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert len(data["rows"]) == 23
        assert data["rows"][0]["period"] == 1
        assert data["rows"][-1]["remaining"] == 0
        assert data["summary"]["paid_off"] is True
        assert data["report"].startswith("  Period |")

    def test_invalid_parameters(self):
        resp = client.post("/api/v1/schedule", json={
            "capital": -1, "repayment": 500, "periods": 24, "annual_rate": 0.12,
        })
        assert resp.status_code == 400
        assert "capital" in resp.json()["detail"]


def test_health():
    assert client.get("/health").json() == {"status": "ok"}
