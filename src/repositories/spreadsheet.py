"""Repository untuk membaca sheet spreadsheet sebagai CSV."""

import logging
from typing import Dict, List, Optional, Tuple

import httpx

from src.core.config import settings
from src.core.exceptions import DataSourceError
from src.models.enums import SourceKind
from src.utils.tabular_parser import parse_csv

logger = logging.getLogger(__name__)


class SpreadsheetRepository:
    """Read-only access to the four source sheets."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.transport = transport
        self.timeout = settings.FETCH_TIMEOUT_SECONDS

    @staticmethod
    def get_sources() -> Dict[SourceKind, Tuple[str, str]]:
        """Spreadsheet id and sheet name per source."""
        return {
            SourceKind.ROSTER: (settings.SPREADSHEET_PEGAWAI_ID, settings.SHEET_PEGAWAI),
            SourceKind.SCHEDULE: (settings.SPREADSHEET_JADWAL_ID, settings.SHEET_JADWAL),
            SourceKind.DISCIPLINE: (settings.SPREADSHEET_PEGAWAI_ID, settings.SHEET_DISIPLIN),
            SourceKind.REPORTS: (settings.SPREADSHEET_PEGAWAI_ID, settings.SHEET_LAPORAN),
        }

    async def fetch_table(self, kind: SourceKind) -> List[List[str]]:
        """
        Fetch one sheet and parse it into rows (header row included).

        Raises:
            DataSourceError: network failure or non-success status
        """
        kind = SourceKind(kind)
        spreadsheet_id, sheet_name = self.get_sources()[kind]
        url = settings.spreadsheet_export_url(spreadsheet_id)
        params = {"tqx": "out:csv", "sheet": sheet_name}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(
                    url,
                    params=params,
                    headers={"Cache-Control": "no-store"},
                    follow_redirects=True,
                )
                response.raise_for_status()
                text = response.text
        except httpx.TimeoutException:
            logger.error(f"Fetching sheet '{sheet_name}' timed out", extra={"source": kind.value})
            raise DataSourceError(kind.value, "timeout")
        except httpx.HTTPStatusError as e:
            logger.error(f"Fetching sheet '{sheet_name}' returned HTTP {e.response.status_code}", extra={"source": kind.value})
            raise DataSourceError(kind.value, f"HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.error(f"Fetching sheet '{sheet_name}' failed: {e}", extra={"source": kind.value})
            raise DataSourceError(kind.value, str(e) or e.__class__.__name__)

        rows = parse_csv(text)
        logger.debug(f"Fetched {len(rows)} row(s) from sheet '{sheet_name}'")
        return rows
