import datetime as dt

from fastapi.testclient import TestClient

from fintrack.api.deps import get_app_settings, get_tx_repo
from fintrack.api.main import app

client = TestClient(app)


def test_summary_with_budget_cap(monkeypatch):
    monkeypatch.setenv("FINTRACK_BUDGET_CAP", "100")
    get_app_settings.cache_clear()
    get_tx_repo().clear()

    today = dt.date.today().isoformat()
    try:
        for payload in [
            {"description": "Groceries", "amount": "60", "category": "Food", "date": today},
            {"description": "Taxi ride", "amount": "55.5", "category": "Transport", "date": today},
        ]:
            assert client.post("/transactions", json=payload).status_code == 201

        body = client.get("/summary").json()
        assert body["total_records"] == 2
        assert body["total_spent"] == "115.5"
        assert body["top_category"] == "Food"
        assert len(body["last_7_days"]) == 7
        assert body["last_7_days"][-1]["date"] == today
        assert body["last_7_days_total"] == "115.5"
        assert body["budget"]["state"] == "over"
        assert body["budget"]["message"] == "Over limit by 15.5"
    finally:
        get_app_settings.cache_clear()
        get_tx_repo().clear()


def test_summary_empty_without_cap(monkeypatch):
    monkeypatch.delenv("FINTRACK_BUDGET_CAP", raising=False)
    get_app_settings.cache_clear()
    get_tx_repo().clear()

    body = client.get("/summary").json()
    assert body["total_records"] == 0
    assert body["total_spent"] == "0"
    assert body["top_category"] is None
    assert body["budget"]["state"] == "no_cap"
    get_app_settings.cache_clear()
