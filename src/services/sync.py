"""Service untuk sinkronisasi data dari spreadsheet."""

import asyncio
import logging
from datetime import date
from typing import Dict, List, Optional

from src.core.config import settings
from src.core.exceptions import DataSourceError
from src.core.store import SnapshotStore
from src.models.enums import ScheduleLayout, SourceKind
from src.repositories.spreadsheet import SpreadsheetRepository
from src.schemas.sync import SyncStatusResponse
from src.services.reconciler import EntityReconciler
from src.services.row_mapper import RowMapper
from src.utils.dates import today_local

logger = logging.getLogger(__name__)


class SyncService:
    """Fan-out fetch of the four sheets, reconciliation and snapshot publishing."""

    def __init__(
        self,
        spreadsheet_repo: SpreadsheetRepository,
        store: SnapshotStore,
        reconciler: Optional[EntityReconciler] = None,
    ):
        self.spreadsheet_repo = spreadsheet_repo
        self.store = store
        self.reconciler = reconciler or EntityReconciler(
            RowMapper(ScheduleLayout(settings.SCHEDULE_LAYOUT))
        )

    async def refresh(
        self,
        timeout: Optional[float] = None,
        today: Optional[date] = None,
        after_write: bool = False,
    ) -> SyncStatusResponse:
        """
        Fetch and reconcile all sources.

        A refresh already in flight is joined instead of starting another one.
        ``timeout`` bounds the whole fetch; sources still pending when it
        expires count as failed.

        With ``after_write`` the caller has just written through the script
        host. A refresh that was already running fetched the sheets before
        that write, so it is awaited to completion and a new fetch follows. A
        refresh started after the write may still be joined.
        """
        if after_write and self.store.is_refreshing():
            logger.info("Refresh in flight predates the write, waiting to fetch again")
            # wait() leaves the in-flight outcome to its own caller
            await asyncio.wait({self.store.inflight})

        if self.store.is_refreshing():
            logger.info("Refresh already in flight, joining it")
            return await asyncio.shield(self.store.inflight)

        task = asyncio.ensure_future(self._refresh(timeout, today))
        self.store.inflight = task
        try:
            return await task
        finally:
            if self.store.inflight is task:
                self.store.inflight = None

    async def _refresh(self, timeout: Optional[float], today: Optional[date]) -> SyncStatusResponse:
        kinds: List[SourceKind] = list(SourceKind)
        raw_tables: Dict[SourceKind, list] = {}
        errors: Dict[str, str] = {}

        fetches = [asyncio.ensure_future(self.spreadsheet_repo.fetch_table(kind)) for kind in kinds]
        try:
            if timeout is not None:
                await asyncio.wait_for(
                    asyncio.gather(*fetches, return_exceptions=True), timeout
                )
            else:
                await asyncio.gather(*fetches, return_exceptions=True)
        except asyncio.TimeoutError:
            logger.error(f"Sync timed out after {timeout}s")
        except asyncio.CancelledError:
            for fetch in fetches:
                fetch.cancel()
            raise

        for kind, fetch in zip(kinds, fetches):
            if not fetch.done() or fetch.cancelled():
                errors[kind.value] = "timeout"
                continue
            error = fetch.exception()
            if error is None:
                raw_tables[kind] = fetch.result()
            elif isinstance(error, DataSourceError):
                errors[kind.value] = error.message
            else:
                logger.error(f"Unexpected error fetching {kind.value}: {error}", extra={"source": kind.value})
                errors[kind.value] = str(error) or error.__class__.__name__

        degraded = [SourceKind(name) for name in errors]
        result = self.reconciler.reconcile(raw_tables, today or today_local(), degraded)
        published = self.store.offer(result, errors)

        if degraded:
            logger.warning(f"Sync finished degraded, failed sources: {', '.join(errors)}")
        else:
            logger.info("Sync finished for all sources")

        return self.build_status(published=published)

    def build_status(self, published: Optional[bool] = None) -> SyncStatusResponse:
        snapshot = self.store.snapshot
        return SyncStatusResponse(
            loaded=snapshot is not None,
            published=published,
            degraded=bool(self.store.last_degraded),
            degraded_sources=list(self.store.last_degraded),
            errors=dict(self.store.last_errors),
            refreshing=self.store.is_refreshing(),
            last_attempt_at=self.store.last_attempt_at,
            loaded_at=snapshot.loaded_at if snapshot else None,
            evaluated_on=snapshot.evaluated_on if snapshot else None,
            employee_count=len(snapshot.employees) if snapshot else 0,
            task_count=len(snapshot.tasks) if snapshot else 0,
            demo_mode=settings.IS_DEMO_MODE,
        )
