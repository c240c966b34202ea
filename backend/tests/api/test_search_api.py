import pytest
from fastapi.testclient import TestClient

from fintrack.api.deps import get_app_settings, get_tx_repo
from fintrack.api.main import app

client = TestClient(app)


@pytest.fixture(autouse=True)
def _seeded():
    get_app_settings.cache_clear()
    get_tx_repo().clear()
    for payload in [
        {"description": "Paid 1.50 today", "amount": "1.50", "category": "Transport", "date": "2026-01-10"},
        {"description": "Paid 150 today", "amount": "150", "category": "Rent", "date": "2026-01-11"},
        {"description": "<b>Coffee</b>", "amount": "4", "category": "Food", "date": "2026-01-12"},
    ]:
        assert client.post("/transactions", json=payload).status_code == 201
    yield
    get_tx_repo().clear()


def test_plain_search_is_literal():
    body = client.get("/transactions/search", params={"q": "1.50"}).json()
    assert [it["description"] for it in body["items"]] == ["Paid 1.50 today"]
    assert body["matched"] == 1
    assert body["total"] == 3
    assert body["feedback"] == "Text search: 1 transaction matched"
    assert body["stats"] == "Showing 1 of 3 transactions"


def test_regex_search():
    body = client.get("/transactions/search", params={"q": "/^paid \\d+ /", "mode": "regex"}).json()
    assert [it["description"] for it in body["items"]] == ["Paid 150 today"]
    assert body["pattern_valid"] is True


def test_invalid_regex_returns_everything_with_flag():
    body = client.get("/transactions/search", params={"q": "(", "mode": "regex"}).json()
    assert body["matched"] == 3
    assert body["pattern_valid"] is False
    assert body["error"]
    assert body["feedback"] == "Invalid regex pattern"


def test_field_scope():
    body = client.get("/transactions/search", params={"q": "^150$", "mode": "regex", "field": "amount"}).json()
    assert [it["amount"] for it in body["items"]] == ["150"]


def test_highlight_is_escaped():
    body = client.get("/transactions/search", params={"q": "coffee", "highlight": "true"}).json()
    item = body["items"][0]
    assert item["description_html"] == "&lt;b&gt;<mark>Coffee</mark>&lt;/b&gt;"
    assert item["category_html"] == "Food"


def test_no_highlight_by_default():
    body = client.get("/transactions/search", params={"q": "coffee"}).json()
    assert body["items"][0]["description_html"] is None


def test_bad_mode_is_rejected():
    assert client.get("/transactions/search", params={"q": "x", "mode": "fuzzy"}).status_code == 422


def test_pattern_check():
    assert client.get("/search/pattern-check", params={"pattern": "^a+$"}).json() == {"valid": True, "error": None}
    assert client.get("/search/pattern-check", params={"pattern": " "}).json() == {
        "valid": False,
        "error": "Pattern cannot be empty",
    }
    bad = client.get("/search/pattern-check", params={"pattern": "["}).json()
    assert bad["valid"] is False
    assert bad["error"]


def test_highlight_only_in_searched_fields():
    body = client.get("/transactions/search", params={"q": "150", "field": "amount", "highlight": "true"}).json()
    assert [it["amount"] for it in body["items"]] == ["150"]
    item = body["items"][0]
    assert item["description_html"] == "Paid 150 today"
    assert item["category_html"] == "Rent"

    body = client.get("/transactions/search", params={"q": "150", "field": "description", "highlight": "true"}).json()
    assert body["items"][0]["description_html"] == "Paid <mark>150</mark> today"
