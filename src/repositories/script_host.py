"""Repository untuk operasi tulis melalui script host spreadsheet."""

import logging
from typing import Any, Dict, Optional

import httpx

from src.core.config import settings
from src.core.exceptions import ScriptHostError

logger = logging.getLogger(__name__)


class ScriptHostRepository:
    """
    Named remote operations on the spreadsheet script host.

    Each call posts ``{"action": name, "payload": {...}}`` and expects
    ``{"success": true}`` back.
    """

    SAVE_ASSIGNMENT = "saveAssignmentRecord"
    SAVE_REPORT = "saveReportRecord"
    DELETE_REPORT = "deleteReportRecord"
    VERIFY_REPORT = "verifyReportRecord"

    def __init__(self, url: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url or settings.SCRIPT_HOST_URL
        self.transport = transport
        self.timeout = settings.SCRIPT_HOST_TIMEOUT_SECONDS

    async def call(self, action: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        if not self.url:
            raise ScriptHostError("Script host belum dikonfigurasi")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.url,
                    json={"action": action, "payload": payload},
                    follow_redirects=True,
                )
                response.raise_for_status()
                result = response.json()
        except httpx.TimeoutException:
            logger.error(f"Script host call '{action}' timed out", extra={"action": action})
            raise ScriptHostError(f"Script host tidak merespons ({action})")
        except httpx.HTTPError as e:
            logger.error(f"Script host call '{action}' HTTP error: {e}", extra={"action": action})
            raise ScriptHostError(f"Gagal menghubungi script host ({action})")
        except ValueError:
            logger.error(f"Script host call '{action}' returned a non-JSON body", extra={"action": action})
            raise ScriptHostError(f"Respons script host tidak valid ({action})")

        if not isinstance(result, dict) or not result.get("success", False):
            message = result.get("message") if isinstance(result, dict) else None
            logger.warning(f"Script host rejected '{action}': {message}", extra={"action": action})
            raise ScriptHostError(message or f"Script host menolak operasi {action}")

        logger.info(f"Script host accepted '{action}'", extra={"action": action})
        return result

    async def save_assignment(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return await self.call(self.SAVE_ASSIGNMENT, record)

    async def save_report(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return await self.call(self.SAVE_REPORT, record)

    async def delete_report(self, letter_number: str, nip: str) -> Dict[str, Any]:
        return await self.call(self.DELETE_REPORT, {"letterNumber": letter_number, "nip": nip})

    async def verify_report(self, letter_number: str, verifier_nip: str) -> Dict[str, Any]:
        return await self.call(self.VERIFY_REPORT, {"letterNumber": letter_number, "nip": verifier_nip})
