"""
Web 接口测试
"""

from pathlib import Path

import pytest

from app import app


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def client():
    app.config.update(TESTING=True, EXPORT_VERBOSE=True, ALLOW_DISK_EXPORT=False)
    with app.test_client() as test_client:
        yield test_client


def test_index_page(client):
    response = client.get("/")
    assert response.status_code == 200


def test_index_post_renders_tree_and_code(client):
    source = (FIXTURES_DIR / "filagauge_main.cpp").read_text(encoding="utf-8")
    response = client.post("/", data={"source_text": source, "file_name": "filagauge_main.cpp"})
    body = response.get_data(as_text=True)
    assert response.status_code == 200
    assert "weight_arc" in body
    assert "filagauge_main_create" in body


def test_index_post_empty(client):
    response = client.post("/", data={"source_text": "   "})
    assert response.status_code == 200
    assert "输入文本为空" in response.get_data(as_text=True)


def test_api_import(client):
    response = client.post("/api/import", json={
        "files": [{"file_name": "ui.cpp", "content": 'lbl = lv_label_create(parent);\nlv_label_set_text(lbl, "Hi");'}],
    })
    data = response.get_json()
    assert response.status_code == 200
    assert data["success"] is True
    widget = data["files"][0]["widgets"][0]
    assert widget["identifier"] == "lbl"
    assert widget["properties"]["text"] == "Hi"


def test_api_import_without_widgets(client):
    response = client.post("/api/import", json={"files": [{"file_name": "a.cpp", "content": "int x;"}]})
    data = response.get_json()
    assert data["success"] is False
    assert data["error"] == "Could not parse any LVGL widgets from the files"


def test_api_import_bad_payload(client):
    response = client.post("/api/import", json={"files": "nope"})
    assert response.status_code == 400


def test_api_export_in_memory(client):
    response = client.post("/api/export", json={
        "screens": [{"name": "home", "widgets": [{"kind": "button", "identifier": "ok_btn"}]}],
    })
    data = response.get_json()
    assert response.status_code == 200
    assert [f["file_name"] for f in data["generated_files"]] == ["ui.h", "home.cpp"]
    assert "ok_btn = lv_btn_create(parent);" in data["generated_files"][1]["code"]
    assert data["issues"] == []


def test_api_export_reports_issues(client):
    response = client.post("/api/export", json={
        "screens": [{"name": "home", "widgets": [{"kind": "label"}]}],
    })
    data = response.get_json()
    assert data["success"] is True
    assert data["issues"][0]["path"] == "home/0"


def test_api_export_bad_payload(client):
    assert client.post("/api/export", json={}).status_code == 400
    assert client.post("/api/export", json={"screens": ["not a screen"]}).status_code == 400


def test_api_export_to_disk_requires_permission(client, tmp_path):
    response = client.post("/api/export", json={"screens": [], "output_dir": str(tmp_path)})
    assert response.status_code == 403


def test_api_export_to_disk(client, tmp_path):
    app.config["ALLOW_DISK_EXPORT"] = True
    response = client.post("/api/export", json={
        "screens": [{"name": "home", "widgets": [{"kind": "label", "identifier": "a"}]}],
        "output_dir": str(tmp_path / "out"),
    })
    data = response.get_json()
    assert data["success"] is True
    assert (tmp_path / "out" / "home.cpp").exists()
    assert (tmp_path / "out" / "ui.h").exists()
