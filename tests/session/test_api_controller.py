from __future__ import annotations

import io

import pandas as pd
import pytest
from werkzeug.datastructures import FileStorage

from src.roll_call.roll_call.core.exceptions import PersistenceError
from src.roll_call.roll_call.main import create_app

CSV = "H1,H2,H3,H4\nAna,,García,Pérez\nana,,garcía,pérez\nLuis,,Ortiz,\n,,Solo,\n".encode("utf-8")


@pytest.fixture()
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app({"DATABASE_URL": f"sqlite:///{tmp_path / 'roll_call.db'}"})
    return app.test_client()


def _create(client, name="5A"):
    resp = client.post("/api/lists", json={"name": name})
    assert resp.status_code == 201
    return resp.get_json()["list"]


def _upload(client, content=CSV, filename="students.csv"):
    return client.post(
        "/api/current/import",
        data={"file": (io.BytesIO(content), filename)},
        content_type="multipart/form-data",
    )


def test_create_list_and_list_them(client):
    created = _create(client)

    resp = client.get("/api/lists")

    assert resp.status_code == 200
    assert [l["id"] for l in resp.get_json()["lists"]] == [created["id"]]


def test_create_list_requires_name(client):
    resp = client.post("/api/lists", json={"name": "   "})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_import_then_summary(client):
    _create(client)

    resp = _upload(client)

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["imported"] == 2
    assert body["duplicates_found"] == 1
    assert body["unsaved_changes"] is False
    assert body["summary"]["total"] == 2
    assert body["summary"]["absent_from_import"] == 2


def test_import_rejects_unknown_file_type(client):
    _create(client)

    resp = _upload(client, b"hello", "notes.txt")

    assert resp.status_code == 400


def test_operations_need_an_active_list(client):
    assert client.get("/api/current/students").status_code == 409
    assert client.post("/api/current/students", json={"given_name": "A", "family_name": "B"}).status_code == 409
    assert client.post("/api/current/save").status_code == 409


def test_manual_student_lifecycle(client):
    _create(client)

    resp = client.post("/api/current/students", json={"given_name": "Ana", "family_name": "Ruiz"})
    assert resp.status_code == 201
    student_id = resp.get_json()["student"]["id"]

    dup = client.post("/api/current/students", json={"given_name": "ana", "family_name": "RUIZ"})
    assert dup.status_code == 400

    toggled = client.post(f"/api/current/students/{student_id}/toggle").get_json()
    assert toggled["summary"]["absent_manual"] == 1

    deleted = client.delete(f"/api/current/students/{student_id}").get_json()
    assert deleted["summary"]["total"] == 0


def test_students_search_and_sort(client):
    _create(client)
    _upload(client)

    by_given_desc = client.get("/api/current/students?sort=given_name&order=desc").get_json()["students"]
    search = client.get("/api/current/students?q=ortiz").get_json()["students"]

    assert [s["given_name"] for s in by_given_desc] == ["Luis", "Ana"]
    assert [s["family_name"] for s in search] == ["Ortiz"]
    assert client.get("/api/current/students?sort=age").status_code == 400


def test_select_and_delete_lists(client):
    first = _create(client, "A")
    _create(client, "B")

    selected = client.post(f"/api/lists/{first['id']}/select", json={}).get_json()
    assert selected["list"]["name"] == "A"
    assert client.post("/api/lists/unknown/select", json={}).status_code == 404

    assert client.delete(f"/api/lists/{first['id']}").status_code == 200
    assert client.get("/api/current").get_json()["list"] is None


def test_explicit_save(client):
    _create(client)

    resp = client.post("/api/current/save")

    assert resp.status_code == 200
    assert resp.get_json()["unsaved_changes"] is False


def test_export_workbook(client):
    _create(client, "5A")
    _upload(client)

    resp = client.get("/api/current/export.xlsx")

    assert resp.status_code == 200
    assert resp.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    assert "5A_" in resp.headers["Content-Disposition"]
    sheets = pd.read_excel(io.BytesIO(resp.data), sheet_name=None, engine="openpyxl")
    assert len(sheets["Students"]) == 2


def test_notifications_can_be_dismissed(client):
    _create(client)

    items = client.get("/api/notifications").get_json()["notifications"]
    assert items[0]["level"] == "success"

    assert client.delete(f"/api/notifications/{items[0]['id']}").status_code == 200
    assert client.delete(f"/api/notifications/{items[0]['id']}").status_code == 404


def test_new_list_over_unsaved_changes_needs_confirmation(client, monkeypatch):
    first = _create(client, "A")
    repo = client.application.extensions["roll_call"].rosters_repo
    real_save = repo.save
    failing = {"on": True}

    def flaky_save(roster):
        if failing["on"]:
            raise PersistenceError("disk full")
        real_save(roster)

    monkeypatch.setattr(repo, "save", flaky_save)
    added = client.post("/api/current/students", json={"given_name": "Eva", "family_name": "Ruiz"})
    assert added.get_json()["unsaved_changes"] is True
    failing["on"] = False

    refused = client.post("/api/lists", json={"name": "B"})
    assert refused.status_code == 409
    current = client.get("/api/current").get_json()
    assert current["list"]["id"] == first["id"]
    assert current["unsaved_changes"] is True

    accepted = client.post("/api/lists", json={"name": "B", "confirm": True})
    assert accepted.status_code == 201
    assert accepted.get_json()["list"]["name"] == "B"


def test_oversized_upload_is_rejected_without_reading_it(tmp_path, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app({"DATABASE_URL": f"sqlite:///{tmp_path / 'roll_call.db'}", "MAX_UPLOAD_BYTES": 16})
    small_client = app.test_client()
    _create(small_client)

    def no_read(self, *args, **kwargs):
        raise AssertionError("upload content was read")

    monkeypatch.setattr(FileStorage, "read", no_read, raising=False)
    resp = _upload(small_client)

    assert resp.status_code == 400
    assert "too large" in resp.get_json()["message"]
    assert small_client.get("/api/current").get_json()["summary"]["total"] == 0
