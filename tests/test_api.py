"""Tests untuk HTTP API."""

import pytest
from fastapi.testclient import TestClient

from main import app
from src.core.config import settings
from src.api.endpoints.sync import get_spreadsheet_repository
from src.repositories.spreadsheet import SpreadsheetRepository
from tests.conftest import PHOTOS

API = "/api/v1"


def as_user(nip):
    return {"X-User-Nip": nip}


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def loaded_client(client, loaded_store):
    return client


# ===== SYSTEM =====

def test_root_and_health(client):
    assert client.get("/").status_code == 200
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["data_loaded"] is False


def test_missing_identity_header(loaded_client):
    response = loaded_client.get(f"{API}/pegawai/")
    assert response.status_code == 401


def test_unknown_nip(loaded_client):
    assert loaded_client.get(f"{API}/pegawai/", headers=as_user("000")).status_code == 401


def test_no_snapshot_yet(client):
    response = client.get(f"{API}/pegawai/", headers=as_user("Admin"))
    assert response.status_code == 503


# ===== SYNC =====

def test_refresh_and_status(client, sheet_transport):
    app.dependency_overrides[get_spreadsheet_repository] = lambda: SpreadsheetRepository(
        transport=sheet_transport()
    )
    try:
        response = client.post(f"{API}/sync/refresh", headers=as_user("Admin"))
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    body = response.json()
    assert body["published"] is True
    assert body["employee_count"] == 3

    status = client.get(f"{API}/sync/status").json()
    assert status["loaded"] is True
    assert status["task_count"] == 3
    assert status["demo_mode"] is True


def test_refresh_reports_degraded_source(client, sheet_transport):
    transport = sheet_transport(failing={settings.SHEET_LAPORAN: 500})
    app.dependency_overrides[get_spreadsheet_repository] = lambda: SpreadsheetRepository(transport=transport)
    try:
        body = client.post(f"{API}/sync/refresh", headers=as_user("Admin")).json()
    finally:
        app.dependency_overrides.clear()

    assert body["degraded"] is True
    assert body["degraded_sources"] == ["reports"]


# ===== PEGAWAI & DISIPLIN =====

def test_list_and_search_pegawai(loaded_client):
    body = loaded_client.get(f"{API}/pegawai/", headers=as_user("Admin")).json()
    assert body["total"] == 3

    body = loaded_client.get(f"{API}/pegawai/", params={"search": "bud"}, headers=as_user("Admin")).json()
    assert [item["nip"] for item in body["items"]] == ["123"]
    assert body["items"][0]["status"] == "Bertugas"
    assert body["items"][0]["active_activity"] == "Workshop"


def test_pegawai_detail(loaded_client):
    response = loaded_client.get(f"{API}/pegawai/789", headers=as_user("123"))
    assert response.status_code == 200
    assert response.json()["discipline_score"]["final"] == 72.5
    assert loaded_client.get(f"{API}/pegawai/999", headers=as_user("123")).status_code == 404


def test_unassigned_list_requires_admin(loaded_client):
    assert loaded_client.get(f"{API}/pegawai/tidak-bertugas", headers=as_user("123")).status_code == 403
    body = loaded_client.get(f"{API}/pegawai/tidak-bertugas", headers=as_user("456")).json()
    assert [item["nip"] for item in body["items"]] == ["456"]


def test_discipline_ranking(loaded_client):
    body = loaded_client.get(f"{API}/disiplin/", headers=as_user("123")).json()
    assert [item["nip"] for item in body["items"]] == ["123", "789", "456"]
    detail = loaded_client.get(f"{API}/disiplin/456", headers=as_user("123")).json()
    assert detail["discipline_score"]["rating"] == "Kurang (<60%)"


# ===== SURAT TUGAS =====

def test_surat_tugas_scope_and_detail(loaded_client):
    body = loaded_client.get(f"{API}/surat-tugas/", headers=as_user("123")).json()
    assert [item["letter_number"] for item in body["items"]] == ["LTR-1"]

    response = loaded_client.get(f"{API}/surat-tugas/ST/001/2026", headers=as_user("Admin"))
    assert response.status_code == 200
    assert [emp["name"] for emp in response.json()["employees"]] == ["Sari", "Andi"]

    assert loaded_client.get(f"{API}/surat-tugas/ST/001/2026", headers=as_user("123")).status_code == 403
    assert loaded_client.get(f"{API}/surat-tugas/NOPE", headers=as_user("Admin")).status_code == 404


def test_check_conflicts_endpoint(loaded_client):
    response = loaded_client.post(
        f"{API}/surat-tugas/check-conflicts",
        json={"employee_nips": ["123"], "start_date": "2026-02-03", "end_date": "2026-02-04"},
        headers=as_user("Admin"),
    )
    assert response.json() == {"has_conflict": True, "conflicts": ["Budi"]}


def new_assignment(**overrides):
    data = {
        "letter_number": "ST/020/2026",
        "basis": "DIPA 2026",
        "description": "Supervisi",
        "location": "Sofifi",
        "start_date": "2026-02-03",
        "end_date": "2026-02-04",
        "signee": "Kepala BPMP",
        "activity_type": "Luring",
        "employee_nips": ["456"],
    }
    data.update(overrides)
    return data


def test_create_surat_tugas(loaded_client):
    response = loaded_client.post(f"{API}/surat-tugas/", json=new_assignment(), headers=as_user("Admin"))
    assert response.status_code == 201
    assert response.json()["surat_tugas"]["letter_number"] == "ST/020/2026"

    listed = loaded_client.get(f"{API}/surat-tugas/", headers=as_user("Admin")).json()
    assert listed["total"] == 4


def test_create_conflict_returns_409(loaded_client):
    response = loaded_client.post(
        f"{API}/surat-tugas/", json=new_assignment(employee_nips=["123"]), headers=as_user("Admin")
    )
    assert response.status_code == 409
    assert response.json()["conflicts"] == ["Budi"]


def test_create_invalid_dates_returns_422(loaded_client):
    response = loaded_client.post(
        f"{API}/surat-tugas/",
        json=new_assignment(start_date="2026-02-05", end_date="2026-02-01"),
        headers=as_user("Admin"),
    )
    assert response.status_code == 422


def test_create_duplicate_returns_400(loaded_client):
    response = loaded_client.post(
        f"{API}/surat-tugas/", json=new_assignment(letter_number="LTR-1"), headers=as_user("Admin")
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Nomor surat sudah ada"


# ===== LAPORAN =====

def test_report_lifecycle(loaded_client):
    report = {"uraian": "Workshop terlaksana", "hasil": "Modul disepakati", "documentation_photos": PHOTOS[:2]}
    response = loaded_client.put(f"{API}/laporan/LTR-1", json=report, headers=as_user("123"))
    assert response.status_code == 400
    assert response.json()["minimum"] == 3

    report["documentation_photos"] = PHOTOS
    response = loaded_client.put(f"{API}/laporan/LTR-1", json=report, headers=as_user("123"))
    assert response.status_code == 200
    assert response.json()["report_status"] == "Sudah Upload"

    response = loaded_client.post(f"{API}/laporan/LTR-1/verify", headers=as_user("Admin"))
    assert response.json()["report_status"] == "Terverifikasi"

    stats = loaded_client.get(f"{API}/laporan/stats", headers=as_user("Admin")).json()
    assert stats == {"total": 3, "pending": 1, "completed": 2}


def test_report_tabs(loaded_client):
    body = loaded_client.get(f"{API}/laporan/", params={"tab": "pending"}, headers=as_user("Admin")).json()
    assert [item["letter_number"] for item in body["items"]] == ["LTR-1", "ST/002/2026"]
    assert body["tab"] == "pending"
    assert loaded_client.get(f"{API}/laporan/", params={"tab": "x"}, headers=as_user("Admin")).status_code == 422


def test_delete_report(loaded_client):
    assert loaded_client.delete(f"{API}/laporan/ST/001/2026", headers=as_user("789")).status_code == 403

    response = loaded_client.delete(f"{API}/laporan/ST/001/2026", headers=as_user("456"))
    assert response.status_code == 200
    assert response.json()["data"]["report_status"] == "Belum Upload"

    task = loaded_client.get(f"{API}/surat-tugas/ST/001/2026", headers=as_user("Admin")).json()
    assert task["report_status"] == "Belum Upload"
    assert task["documentation_photos"] == []


# ===== KALENDER & DASHBOARD =====

def test_calendar_endpoints(loaded_client):
    month = loaded_client.get(f"{API}/kalender/2026/2", headers=as_user("123")).json()
    assert len(month["days"]) == 28

    day = loaded_client.get(f"{API}/kalender/tanggal/2026-02-02", headers=as_user("123")).json()
    assert [emp["nip"] for emp in day["unassigned"]] == ["456"]

    assert loaded_client.get(f"{API}/kalender/2026/13", headers=as_user("123")).status_code == 400
    assert loaded_client.get(f"{API}/kalender/0/1", headers=as_user("123")).status_code == 400


def test_dashboard_endpoints(loaded_client):
    summary = loaded_client.get(f"{API}/dashboard/summary", headers=as_user("123")).json()
    assert summary["stats"]["active_surat"] == 1
    assert [task["letter_number"] for task in summary["pending_reports"]] == ["LTR-1"]

    recap = loaded_client.get(f"{API}/dashboard/rekap", params={"type": "Daring"}, headers=as_user("Admin")).json()
    assert [item["surat_tugas"]["letter_number"] for item in recap["items"]] == ["ST/002/2026"]
