"""SI-KERTAS API entrypoint."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.core.config import settings
from src.core.store import store
from src.api.router import api_router, get_tags_metadata
from src.middleware.error_handler import add_error_handlers
from src.repositories.spreadsheet import SpreadsheetRepository
from src.services.sync import SyncService
from src.utils.logging import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

API_DESCRIPTION = """
Dashboard penugasan pegawai berbasis spreadsheet.

* Sinkronisasi roster, jadwal tugas, disiplin dan laporan
* Ketersediaan pegawai per tanggal dan kalender bulanan
* Surat tugas dengan deteksi bentrok jadwal luring
* Laporan pelaksanaan dengan foto dokumentasi

Identitas dikirim lewat header `X-User-Nip` (NIP pegawai, atau `Admin`).
"""


async def initial_sync() -> None:
    """Muat snapshot pertama; kegagalan tidak menghentikan startup."""
    sync_service = SyncService(SpreadsheetRepository(), store)
    try:
        result = await sync_service.refresh(timeout=settings.FETCH_TIMEOUT_SECONDS)
    except Exception as e:
        # POST /sync/refresh can load the data later
        logger.error(f"❌ Initial sync failed: {e}")
        return

    summary = f"{result.employee_count} pegawai, {result.task_count} surat tugas"
    if result.degraded:
        summary += f" (degraded: {', '.join(result.degraded_sources)})"
    logger.info(f"✅ Initial sync: {summary}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"🚀 Starting {settings.PROJECT_NAME} v{settings.VERSION}")
    logger.info(
        f"   layout={settings.SCHEDULE_LAYOUT} "
        f"mutations={'demo (in-memory)' if settings.IS_DEMO_MODE else 'script host'} "
        f"debug={settings.DEBUG}"
    )

    if settings.REFRESH_ON_STARTUP:
        await initial_sync()

    yield

    logger.info("🛑 SI-KERTAS API stopped")


def create_application() -> FastAPI:
    """Build the FastAPI app with middleware, error handlers and routes."""
    docs_enabled = settings.DEBUG
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description=API_DESCRIPTION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        openapi_tags=get_tags_metadata(),
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS_LIST,
        allow_credentials=True,
        allow_methods=settings.CORS_METHODS_LIST,
        allow_headers=settings.CORS_HEADERS_LIST,
    )
    add_error_handlers(app)
    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.get("/", tags=["System"])
    async def root():
        return {
            "name": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "mode": "demo" if settings.IS_DEMO_MODE else "live",
            "docs": "/docs" if docs_enabled else None,
        }

    @app.get("/health", tags=["System"])
    async def health_check():
        """Liveness plus snapshot state."""
        snapshot = store.snapshot
        return {
            "status": "healthy",
            "data_loaded": snapshot is not None,
            "degraded": bool(snapshot and snapshot.is_degraded),
            "last_attempt_at": store.last_attempt_at,
        }

    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
    )
