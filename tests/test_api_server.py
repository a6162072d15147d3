"""
Tests for examples/api_server_fastapi/main.py
"""

import importlib.util
import sys
from pathlib import Path

import pytest

pytest.importorskip("fastapi")
pytest.importorskip("httpx")

from fastapi.testclient import TestClient  # noqa: E402

SERVER_PATH = (
    Path(__file__).resolve().parent.parent / "examples" / "api_server_fastapi" / "main.py"
)


@pytest.fixture
def server(monkeypatch, tmp_path):
    """Import the example server as a fresh module."""
    monkeypatch.setenv("FUZZYMATCH_ENV_FILE", str(tmp_path / "missing.env"))
    name = "fuzzymatch_example_server"
    spec = importlib.util.spec_from_file_location(name, SERVER_PATH)
    module = importlib.util.module_from_spec(spec)
    monkeypatch.setitem(sys.modules, name, module)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def keys_file(tmp_path):
    path = tmp_path / "titles.txt"
    path.write_text("blue\nBig Lucky Umbrella\nBLu\nabc\n", encoding="utf-8")
    return path


@pytest.fixture
def client(server, keys_file, monkeypatch):
    monkeypatch.setenv("FUZZYMATCH_KEYS_FILE", str(keys_file))
    monkeypatch.setenv("FUZZYMATCH_THRESHOLD", "0.7")
    with TestClient(server.app) as c:
        yield c


class TestSearch:
    def test_search(self, client):
        resp = client.post("/search", json={"term": "BLU"})
        assert resp.status_code == 200
        assert resp.json() == {
            "term": "BLU",
            "matches": [
                {"index": 2, "value": "BLu"},
                {"index": 1, "value": "Big Lucky Umbrella"},
                {"index": 0, "value": "blue"},
            ],
        }

    def test_threshold_override(self, client):
        # "blue" is only accepted by the substring tier under a loose threshold.
        resp = client.post("/search", json={"term": "BLU", "threshold": 0.9})
        assert [m["index"] for m in resp.json()["matches"]] == [2, 1]

    def test_empty_term(self, client):
        resp = client.post("/search", json={"term": ""})
        assert resp.status_code == 200
        assert resp.json()["matches"] == []

    def test_missing_term_is_rejected(self, client):
        resp = client.post("/search", json={})
        assert resp.status_code == 422

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.json() == {"status": "ok", "keys": 4}


class TestStartup:
    def test_not_ready_without_lifespan(self, server):
        # No context manager: lifespan never runs.
        client = TestClient(server.app)
        assert client.post("/search", json={"term": "x"}).status_code == 503

    def test_missing_keys_file_env(self, server, monkeypatch):
        monkeypatch.delenv("FUZZYMATCH_KEYS_FILE", raising=False)
        with pytest.raises(RuntimeError, match="FUZZYMATCH_KEYS_FILE"):
            with TestClient(server.app):
                pass

    def test_invalid_threshold_env(self, server, keys_file, monkeypatch):
        monkeypatch.setenv("FUZZYMATCH_KEYS_FILE", str(keys_file))
        monkeypatch.setenv("FUZZYMATCH_THRESHOLD", "strict")
        with pytest.raises(RuntimeError, match="Invalid float env var"):
            with TestClient(server.app):
                pass

    def test_json_keys_file(self, server, tmp_path, monkeypatch):
        path = tmp_path / "keys.json"
        path.write_text('["foo", "bar"]', encoding="utf-8")
        monkeypatch.setenv("FUZZYMATCH_KEYS_FILE", str(path))
        monkeypatch.delenv("FUZZYMATCH_THRESHOLD", raising=False)
        with TestClient(server.app) as c:
            assert c.post("/search", json={"term": "bars"}).json()["matches"] == [
                {"index": 1, "value": "bar"}
            ]

    def test_dotenv_fills_missing_vars(self, tmp_path, keys_file, monkeypatch):
        env_file = tmp_path / "server.env"
        env_file.write_text(
            f"# comment\nFUZZYMATCH_KEYS_FILE='{keys_file}'\nFUZZYMATCH_THRESHOLD=0.9\n",
            encoding="utf-8",
        )
        # Record the variable so the value written by the loader is undone.
        monkeypatch.setenv("FUZZYMATCH_KEYS_FILE", "placeholder")
        monkeypatch.delenv("FUZZYMATCH_KEYS_FILE")
        monkeypatch.setenv("FUZZYMATCH_THRESHOLD", "0.7")
        monkeypatch.setenv("FUZZYMATCH_ENV_FILE", str(env_file))

        name = "fuzzymatch_example_server_dotenv"
        spec = importlib.util.spec_from_file_location(name, SERVER_PATH)
        module = importlib.util.module_from_spec(spec)
        monkeypatch.setitem(sys.modules, name, module)
        spec.loader.exec_module(module)

        with TestClient(module.app) as c:
            assert c.get("/health").json()["keys"] == 4
            # Real env (0.7) wins over .env (0.9), so "blue" is still matched.
            matches = c.post("/search", json={"term": "BLU"}).json()["matches"]
            assert [m["index"] for m in matches] == [2, 1, 0]
