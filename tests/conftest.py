"""Shared fixtures: sheet tables, reconciled snapshot, users and HTTP mocks."""

import csv
import io
import json
from datetime import date

import httpx
import pytest

from src.core.config import settings
from src.core.store import store as global_store
from src.models.enums import SourceKind, UserRole
from src.services.reconciler import EntityReconciler

TODAY = date(2026, 2, 2)

ROSTER = [
    ["NIP", "Nama", "Jabatan", "Unit Kerja"],
    ["123", "Budi", "Analyst", "Unit A"],
    ["456", "Sari", "Pengembang Teknologi", "Unit A"],
    ["789", "Andi", "Pengawas Sekolah", "Unit B"],
]

SCHEDULE = [
    ["NIP", "Nomor Surat", "Jenis", "Kegiatan", "Lokasi", "Mulai", "Selesai", "Penandatangan", "Biaya", "Dasar"],
    ["123", "LTR-1", "Luring", "Workshop", "City Hall", "2026-02-01", "2026-02-03", "Director"],
    ["456", "ST/001/2026", "Luring", "Monitoring", "Ternate", "2026-01-20", "2026-01-22", "Kepala", "Biaya BPMP", "DIPA 2026"],
    ["789", "ST/001/2026", "Luring", "Monitoring", "Ternate", "2026-01-20", "2026-01-22", "Kepala", "Biaya BPMP", "DIPA 2026"],
    ["789", "ST/002/2026", "Daring", "Webinar", "Zoom", "02/02/2026", "02/02/2026", "Kepala", "Tanpa Biaya", "Undangan"],
]

DISCIPLINE = [
    ["NIP", "Kehadiran", "Apel", "LKH", "Laporan"],
    ["123", "100", "100", "100", "100"],
    ["456", "80", "0", "0", "0"],
    ["789", "90", "80", "70", "60"],
]

REPORTS = [
    ["Nomor Surat", "Laporan", "Tanggal", "NIP", "Foto", "Status"],
    [
        "ST/001/2026",
        '{"uraian": "Monitoring selesai", "hasil": "Rekomendasi disusun"}',
        "2026-01-23",
        "456",
        '["a.jpg", "b.jpg", "c.jpg"]',
        "",
    ],
]

PHOTOS = ["data:image/jpeg;base64,AAA", "data:image/jpeg;base64,BBB", "data:image/jpeg;base64,CCC"]


def to_csv(rows):
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerows(rows)
    return buffer.getvalue()


@pytest.fixture
def raw_tables():
    return {
        SourceKind.ROSTER: ROSTER,
        SourceKind.SCHEDULE: SCHEDULE,
        SourceKind.DISCIPLINE: DISCIPLINE,
        SourceKind.REPORTS: REPORTS,
    }


@pytest.fixture
def snapshot(raw_tables):
    return EntityReconciler().reconcile(raw_tables, TODAY)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Demo mode, a known team-admin, and a clean store for every test."""
    monkeypatch.setattr(settings, "SCRIPT_HOST_URL", None)
    monkeypatch.setattr(settings, "ADMIN_TIM_NIPS", "456")
    monkeypatch.setattr(settings, "SCHEDULE_LAYOUT", "compact")
    global_store.reset()
    yield
    global_store.reset()


@pytest.fixture
def store():
    return global_store


@pytest.fixture
def loaded_store(store, snapshot):
    store.replace(snapshot)
    return store


# ===== USERS =====

@pytest.fixture
def super_admin():
    return {"nip": "Admin", "name": "Administrator", "role": UserRole.SUPER_ADMIN.value, "unit": "BPMP Malut"}


@pytest.fixture
def budi():
    return {"nip": "123", "name": "Budi", "role": UserRole.PEGAWAI.value, "unit": "Unit A"}


@pytest.fixture
def sari():
    return {"nip": "456", "name": "Sari", "role": UserRole.ADMIN_TIM.value, "unit": "Unit A"}


@pytest.fixture
def andi():
    return {"nip": "789", "name": "Andi", "role": UserRole.PEGAWAI.value, "unit": "Unit B"}


# ===== HTTP MOCKS =====

@pytest.fixture
def sheet_transport():
    """
    Factory for a MockTransport serving the four sheets by ``sheet`` param.

    ``failing`` maps sheet name to an HTTP status; ``calls`` collects every
    request served.
    """
    def factory(tables=None, failing=None, calls=None):
        tables = tables or {
            settings.SHEET_PEGAWAI: ROSTER,
            settings.SHEET_JADWAL: SCHEDULE,
            settings.SHEET_DISIPLIN: DISCIPLINE,
            settings.SHEET_LAPORAN: REPORTS,
        }
        failing = failing or {}

        def handler(request: httpx.Request) -> httpx.Response:
            if calls is not None:
                calls.append(request)
            sheet = request.url.params.get("sheet")
            if sheet in failing:
                return httpx.Response(failing[sheet], text="error")
            return httpx.Response(200, text=to_csv(tables.get(sheet, [])))

        return httpx.MockTransport(handler)

    return factory


@pytest.fixture
def script_host_transport():
    """Factory for a MockTransport that records script host calls."""
    def factory(calls, reply=None, status_code=200):
        reply = reply if reply is not None else {"success": True}

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(json.loads(request.content))
            return httpx.Response(status_code, json=reply)

        return httpx.MockTransport(handler)

    return factory
