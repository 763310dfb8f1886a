import asyncio
import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from navhistory.api.app import create_app
from navhistory.repository.snapshot_file import JsonFileSnapshotRepository
from navhistory.services.history_store import HistoryStore


def _mk_client(history_path: Path) -> TestClient:
    store = HistoryStore(gateway=JsonFileSnapshotRepository(path=str(history_path)))
    return TestClient(create_app(store, cors_origins=["http://localhost:5174"]))


@pytest.fixture
def history_path(tmp_path: Path) -> Path:
    return tmp_path / "history.json"


def test_startup_creates_empty_snapshot(history_path: Path) -> None:
    with _mk_client(history_path) as client:
        r = client.get("/api/health")
        assert r.status_code == 200
        assert r.json()["historyCount"] == 0

    assert json.loads(history_path.read_text(encoding="utf-8")) == {"pages": [], "currentIndex": -1}


def test_browse_back_and_branch(history_path: Path) -> None:
    with _mk_client(history_path) as client:
        assert client.post("/api/visit", json={"url": "a.com"}).status_code == 200
        assert client.post("/api/visit", json={"url": "b.com"}).status_code == 200

        r = client.post("/api/back")
        assert r.status_code == 200
        assert r.json()["data"]["page"] == "https://a.com"
        assert r.json()["data"]["canGoForward"] is True

        r = client.post("/api/visit", json={"url": "c.com"})
        payload = r.json()
        assert payload["success"] is True
        assert payload["data"] == {
            "page": "https://c.com",
            "canGoBack": True,
            "canGoForward": False,
            "currentIndex": 1,
            "totalPages": 2,
        }

        history = client.get("/api/history").json()["data"]["history"]
        assert [h["url"] for h in history] == ["https://a.com", "https://c.com"]

        r = client.post("/api/forward")
        assert r.status_code == 400
        assert r.json() == {"success": False, "error": "Cannot go forward - already at the end of history"}


def test_history_survives_restart(history_path: Path) -> None:
    with _mk_client(history_path) as client:
        client.post("/api/visit", json={"url": "a.com"})
        client.post("/api/visit", json={"url": "b.com"})
        client.post("/api/back")

    with _mk_client(history_path) as client:
        data = client.get("/api/current").json()["data"]
        assert data["page"] == "https://a.com"
        assert data["currentIndex"] == 0
        assert data["totalPages"] == 2


def test_corrupt_snapshot_starts_fresh(history_path: Path) -> None:
    history_path.write_text("{broken", encoding="utf-8")

    with _mk_client(history_path) as client:
        assert client.get("/api/current").json()["data"]["totalPages"] == 0

    assert json.loads(history_path.read_text(encoding="utf-8"))["currentIndex"] == -1


@pytest.mark.parametrize("body", [{}, {"url": 5}, {"url": ""}, None])
def test_visit_without_string_url_is_400(history_path: Path, body) -> None:
    with _mk_client(history_path) as client:
        r = client.post("/api/visit", json=body) if body is not None else client.post("/api/visit")
        assert r.status_code == 400
        assert r.json() == {"success": False, "error": "URL is required and must be a string"}


def test_visit_invalid_url_is_400(history_path: Path) -> None:
    with _mk_client(history_path) as client:
        r = client.post("/api/visit", json={"url": "https://"})
        assert r.status_code == 400
        assert r.json()["error"] == "Invalid URL format"


def test_malformed_json_body_is_400(history_path: Path) -> None:
    with _mk_client(history_path) as client:
        r = client.post("/api/visit", content=b"{nope", headers={"Content-Type": "application/json"})
        assert r.status_code == 400
        assert r.json() == {"success": False, "error": "Invalid request body"}


def test_back_on_empty_history_is_400(history_path: Path) -> None:
    with _mk_client(history_path) as client:
        r = client.post("/api/back")
        assert r.status_code == 400
        assert r.json()["success"] is False


def test_clear_resets_history(history_path: Path) -> None:
    with _mk_client(history_path) as client:
        client.post("/api/visit", json={"url": "a.com"})
        r = client.delete("/api/clear")
        assert r.status_code == 200
        assert r.json()["data"]["totalPages"] == 0
        assert r.json()["message"] == "History cleared successfully"


@pytest.mark.parametrize("method,path", [("GET", "/api/nope"), ("GET", "/"), ("GET", "/api/visit"), ("POST", "/api/current")])
def test_unknown_endpoints_are_404(history_path: Path, method, path) -> None:
    with _mk_client(history_path) as client:
        r = client.request(method, path)
        assert r.status_code == 404
        assert r.json() == {"success": False, "error": "Endpoint not found"}


def test_cors_allows_configured_origin(history_path: Path) -> None:
    with _mk_client(history_path) as client:
        r = client.get("/api/current", headers={"Origin": "http://localhost:5174"})
        assert r.headers.get("access-control-allow-origin") == "http://localhost:5174"


class _LoopCheckingGateway:
    """Records whether load/save were called from inside the event loop."""

    def __init__(self):
        self.calls = []

    def _record(self, name):
        try:
            asyncio.get_running_loop()
            self.calls.append((name, "loop"))
        except RuntimeError:
            self.calls.append((name, "worker"))

    def load(self):
        self._record("load")
        return None

    def save(self, state):
        self._record("save")


def test_lifespan_runs_snapshot_io_off_the_event_loop() -> None:
    gateway = _LoopCheckingGateway()
    with TestClient(create_app(HistoryStore(gateway=gateway))) as client:
        client.get("/api/health")

    assert gateway.calls
    assert all(where == "worker" for _, where in gateway.calls)
