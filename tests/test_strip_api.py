"""Tests for the POST /strip endpoint."""
from fastapi.testclient import TestClient

from src.api import strip_api
from src.api.app import app

client = TestClient(app)


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_strip_returns_text_and_line_count():
    resp = client.post("/strip", json={
        "text": "# Title\n\nSome *bold* text.",
        "options": {"filler": "."},
    })
    assert resp.status_code == 200
    assert resp.json() == {"text": ". Title\n\nSome .bold. text.", "line_count": 3}


def test_strip_compact_option():
    resp = client.post("/strip", json={
        "text": "Some *bold* text.\n\n\n\n```\ncode\n```",
        "options": {"compact_output": True},
    })
    assert resp.status_code == 200
    assert resp.json()["text"] == "Some bold text.\n\n"


def test_strip_ignores_unknown_and_observer_options():
    resp = client.post("/strip", json={
        "text": "*a*",
        "options": {"filler": "-", "failure_observer": "print", "logger": "root", "colour": "red"},
    })
    assert resp.status_code == 200
    assert resp.json()["text"] == "-a-"


def test_strip_rejects_empty_text():
    resp = client.post("/strip", json={"text": ""})
    assert resp.status_code == 422


def test_strip_failure_is_500(monkeypatch):
    monkeypatch.setattr(strip_api, "MarkdownStripper", lambda config: (lambda text: None))
    resp = client.post("/strip", json={"text": "anything"})
    assert resp.status_code == 500
    assert resp.json()["detail"] == "strip failed"
