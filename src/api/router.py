"""API router configuration."""

from fastapi import APIRouter

from src.api.endpoints import (
    sync, pegawai, surat_tugas, kalender, laporan, disiplin, dashboard
)

# Create main API router
api_router = APIRouter()

# ===== DATA SYNC =====

api_router.include_router(
    sync.router,
    prefix="/sync",
    tags=["Sinkronisasi"],
    responses={
        401: {"description": "Unauthorized"},
    }
)

# ===== PEGAWAI =====

api_router.include_router(
    pegawai.router,
    prefix="/pegawai",
    tags=["Pegawai"],
    responses={
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden - Admin only for operational list"},
        404: {"description": "Pegawai not found"},
        503: {"description": "Data belum disinkronkan"},
    }
)

api_router.include_router(
    disiplin.router,
    prefix="/disiplin",
    tags=["Disiplin"],
    responses={
        401: {"description": "Unauthorized"},
        404: {"description": "Pegawai not found"},
        503: {"description": "Data belum disinkronkan"},
    }
)

# ===== PENUGASAN =====

api_router.include_router(
    surat_tugas.router,
    prefix="/surat-tugas",
    tags=["Surat Tugas"],
    responses={
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden - Insufficient permissions"},
        404: {"description": "Surat tugas not found"},
        409: {"description": "Bentrok jadwal tugas luring"},
        422: {"description": "Validation Error"},
        502: {"description": "Script host error"},
        503: {"description": "Data belum disinkronkan"},
    }
)

api_router.include_router(
    laporan.router,
    prefix="/laporan",
    tags=["Laporan"],
    responses={
        400: {"description": "Laporan tidak lengkap"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden - Check role permissions"},
        404: {"description": "Surat tugas not found"},
        502: {"description": "Script host error"},
        503: {"description": "Data belum disinkronkan"},
    }
)

# ===== VIEWS =====

api_router.include_router(
    kalender.router,
    prefix="/kalender",
    tags=["Kalender"],
    responses={
        401: {"description": "Unauthorized"},
        503: {"description": "Data belum disinkronkan"},
    }
)

api_router.include_router(
    dashboard.router,
    prefix="/dashboard",
    tags=["Dashboard"],
    responses={
        401: {"description": "Unauthorized"},
        503: {"description": "Data belum disinkronkan"},
    }
)

# ===== DOCUMENTATION METADATA =====

tags_metadata = [
    {
        "name": "Sinkronisasi",
        "description": """
        **Fetch dan rekonsiliasi empat sheet**

        - Roster pegawai, jadwal tugas, disiplin, laporan
        - Sumber yang gagal ditandai degraded
        - Refresh yang sedang berjalan di-join, bukan diulang
        """,
    },
    {
        "name": "Surat Tugas",
        "description": """
        **Penerbitan surat tugas**

        - Cek bentrok jadwal luring
        - Admin tim hanya untuk pegawai di unitnya
        - Mode demo: perubahan disimpan di memori
        """,
    },
    {
        "name": "Laporan",
        "description": """
        **Laporan pelaksanaan tugas**

        - Minimal 3 foto dokumentasi
        - Edit dan hapus hanya oleh pembuat laporan
        - Verifikasi oleh admin
        """,
    },
]


# Export untuk main.py
def get_api_router():
    """Get configured API router dengan semua endpoints."""
    return api_router


def get_tags_metadata():
    """Get tags metadata untuk OpenAPI documentation."""
    return tags_metadata
