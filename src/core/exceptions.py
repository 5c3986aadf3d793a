"""Domain exceptions untuk SI-KERTAS."""

from typing import Any, Dict, List, Optional

from fastapi import status


class SiKertasError(Exception):
    """Base error; carries the HTTP status the API layer responds with."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationFailed(SiKertasError):
    """Input rejected before any mutation is attempted."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(SiKertasError):
    status_code = status.HTTP_404_NOT_FOUND


class ScheduleConflict(SiKertasError):
    """Employees already hold an overlapping in-person assignment."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, conflicting_names: List[str]):
        super().__init__(
            f"Pegawai sudah memiliki tugas luring pada rentang tanggal tersebut: "
            f"{', '.join(conflicting_names)}",
            details={"conflicts": conflicting_names},
        )
        self.conflicting_names = conflicting_names


class DataSourceError(SiKertasError):
    """A spreadsheet table could not be fetched."""

    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, source: str, message: str):
        super().__init__(f"Gagal fetch {source}: {message}", details={"source": source})
        self.source = source


class ScriptHostError(SiKertasError):
    """The script host rejected or failed a mutation."""

    status_code = status.HTTP_502_BAD_GATEWAY


class DataNotLoaded(SiKertasError):
    """No snapshot has been published yet."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
