from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from fastapi.testclient import TestClient

from tasklist_core.app import create_app
from tasklist_core.errors import RenderError
from tasklist_core.store import TaskStore


def test_show_tasks_renders_full_page(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("TASKLIST_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.get("/")
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("text/html")
        assert 'hx-post="/add"' in r.text
        assert "Nothing to do." in r.text


def test_add_check_delete_flow(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("TASKLIST_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.post("/add", data={"task": "buy milk"})
        assert r.status_code == 200
        assert r.text.lstrip().startswith('<ul id="tasks">')
        assert "buy milk" in r.text
        assert "<html" not in r.text

        r = client.post("/add", data={"task": "   "})
        assert r.status_code == 200
        assert len(client.app.state.task_store) == 1

        r = client.patch("/check/0")
        assert r.status_code == 200
        assert 'class="task done"' in r.text
        assert 'hx-patch="/check/0"' not in r.text

        client.post("/add", data={"task": "walk dog"})
        r = client.delete("/delete/0")
        assert r.status_code == 200
        assert "buy milk" not in r.text
        assert "walk dog" in r.text
        assert 'hx-delete="/delete/0"' in r.text

        page = client.get("/")
        assert "walk dog" in page.text


def test_add_without_task_field_is_skipped(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("TASKLIST_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.post("/add", data={})
        assert r.status_code == 200
        assert len(client.app.state.task_store) == 0


def test_check_unknown_id_returns_unchanged_fragment(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("TASKLIST_HOME", str(tmp_path))

    store = TaskStore()
    store.append("a")
    with TestClient(create_app(store=store)) as client:
        r = client.patch("/check/5")
        assert r.status_code == 200
        assert 'hx-patch="/check/0"' in r.text
        assert [t.done for t in store.list()] == [False]


def test_delete_out_of_range_is_server_error(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("TASKLIST_HOME", str(tmp_path))

    store = TaskStore()
    store.append("a")
    with TestClient(create_app(store=store)) as client:
        r = client.delete("/delete/5")
        assert r.status_code == 500
        assert r.headers["content-type"].startswith("text/plain")
        assert r.text == "Task index 5 out of range (have 1 tasks)"
        assert len(store) == 1


def test_invalid_ids_are_rejected(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("TASKLIST_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        assert client.delete("/delete/-1").status_code == 422
        assert client.patch("/check/abc").status_code == 422
        r = client.delete("/delete/nope")
        assert r.status_code == 422
        assert r.text.startswith("Request validation failed")


class FailingRenderer:
    def render(self, view_name: str, context: Mapping[str, Any]) -> str:
        raise RenderError(view_name, "boom")


def test_render_failure_is_server_error_for_every_route(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("TASKLIST_HOME", str(tmp_path))

    store = TaskStore()
    store.append("a")
    store.append("b")
    with TestClient(create_app(store=store, renderer=FailingRenderer())) as client:
        responses = [
            client.get("/"),
            client.post("/add", data={"task": "c"}),
            client.patch("/check/0"),
            client.delete("/delete/0"),
        ]
        for r in responses:
            assert r.status_code == 500
            assert r.text == "Failed to render template. Error: boom"

    # The mutations themselves still happened.
    assert [(t.description, t.done) for t in store.list()] == [("b", False), ("c", False)]


def test_busy_store_is_service_unavailable(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("TASKLIST_HOME", str(tmp_path))

    store = TaskStore(lock_timeout_s=0.05)
    with TestClient(create_app(store=store)) as client:
        store._lock.acquire()
        try:
            r = client.get("/")
        finally:
            store._lock.release()
        assert r.status_code == 503


def test_store_lock_timeout_comes_from_config(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("TASKLIST_HOME", str(tmp_path))
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "core.json").write_text(
        '{"store": {"lock_timeout_s": 2.5}, "ui": {"title": "Chores"}}', encoding="utf-8"
    )

    with TestClient(create_app()) as client:
        assert client.app.state.task_store._lock_timeout_s == 2.5
        assert "<title>Chores</title>" in client.get("/").text
