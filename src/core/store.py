"""Session state: the published reconciliation snapshot."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from src.core.exceptions import DataNotLoaded
from src.models.enums import SourceKind
from src.services.reconciler import ReconciliationResult

logger = logging.getLogger(__name__)

# Without these two sources a snapshot is not worth replacing a good one
CORE_SOURCES = {SourceKind.ROSTER, SourceKind.SCHEDULE}


class SnapshotStore:
    """
    Single-writer container for the current snapshot.

    Readers grab ``snapshot`` once per request and work on that reference;
    writers replace it wholesale, never patch it in place.
    """

    def __init__(self):
        self._snapshot: Optional[ReconciliationResult] = None
        self.inflight: Optional[asyncio.Task] = None
        self.last_attempt_at: Optional[datetime] = None
        self.last_errors: Dict[str, str] = {}
        self.last_degraded: list = []

    @property
    def snapshot(self) -> Optional[ReconciliationResult]:
        return self._snapshot

    @property
    def has_snapshot(self) -> bool:
        return self._snapshot is not None

    def require(self) -> ReconciliationResult:
        snapshot = self._snapshot
        if snapshot is None:
            raise DataNotLoaded("Data belum disinkronkan, silakan refresh")
        return snapshot

    def replace(self, snapshot: ReconciliationResult):
        self._snapshot = snapshot

    def update(self, mutate: Callable[[ReconciliationResult], None]) -> ReconciliationResult:
        """Copy-on-write change of the current snapshot (demo mode writes)."""
        updated = self.require().clone()
        mutate(updated)
        self._snapshot = updated
        return updated

    def offer(self, result: ReconciliationResult, errors: Optional[Dict[str, str]] = None) -> bool:
        """
        Publish a sync result unless it would replace a good snapshot with one
        missing a core source. Returns whether it was published.
        """
        self.last_attempt_at = datetime.now(timezone.utc)
        self.last_errors = dict(errors or {})
        self.last_degraded = [s.value for s in result.degraded_sources]

        missing_core = CORE_SOURCES.intersection(result.degraded_sources)
        if missing_core and self._snapshot is not None:
            logger.warning(
                f"Keeping last-known-good snapshot, core source(s) failed: "
                f"{', '.join(sorted(s.value for s in missing_core))}"
            )
            return False

        self._snapshot = result
        return True

    def is_refreshing(self) -> bool:
        return self.inflight is not None and not self.inflight.done()

    def reset(self):
        self._snapshot = None
        self.inflight = None
        self.last_attempt_at = None
        self.last_errors = {}
        self.last_degraded = []


store = SnapshotStore()


def get_store() -> SnapshotStore:
    """Dependency untuk SnapshotStore."""
    return store
