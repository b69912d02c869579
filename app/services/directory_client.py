from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

import requests

from ..core.config import settings
from ..core.logging import logger
from .records import VolunteerPayload, normalize_record, normalize_records


@dataclass
class ClientResult:
    """Uniform outcome of a remote directory call."""

    ok: bool
    data: Any = None
    error: Optional[str] = None
    status_code: Optional[int] = None

    @classmethod
    def success(cls, data: Any = None, status_code: Optional[int] = None) -> "ClientResult":
        return cls(ok=True, data=data, status_code=status_code)

    @classmethod
    def failure(cls, error: str, status_code: Optional[int] = None) -> "ClientResult":
        return cls(ok=False, error=error, status_code=status_code)


class RemoteDirectoryClient:
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or settings.directory_api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def list_volunteers(self) -> ClientResult:
        """Fetch the full volunteer list."""
        result = self._request("GET", self.base_url)
        if not result.ok:
            return result

        data = result.data
        if data is None:
            data = []
        if not isinstance(data, list):
            return self._fail("GET", "envelope data is not a list", result.status_code)

        records = normalize_records(data)
        logger.info(f"Remote directory returned {len(records)} volunteer(s)")
        return ClientResult.success(records, result.status_code)

    def create_volunteer(self, payload: VolunteerPayload) -> ClientResult:
        """Register a volunteer; the server assigns id and sequence number."""
        result = self._request("POST", self.base_url, json=payload.to_wire())
        if not result.ok:
            return result

        record = normalize_record(result.data)
        if record is None:
            return self._fail("POST", "server returned an unusable record", result.status_code)

        logger.info(f"Remote directory created volunteer {record.id} ({record.membership_code})")
        return ClientResult.success(record, result.status_code)

    def delete_volunteer(self, record_id: str) -> ClientResult:
        """Delete a volunteer by id."""
        result = self._request("DELETE", f"{self.base_url}/{quote(record_id, safe='')}")
        if not result.ok:
            return result

        logger.info(f"Remote directory deleted volunteer {record_id}")
        return ClientResult.success(None, result.status_code)

    def _request(self, method: str, url: str, **kwargs: Any) -> ClientResult:
        """Perform one call and unwrap the ``{success, data}`` envelope."""
        try:
            response = requests.request(
                method, url, headers=self.headers, timeout=self.timeout, **kwargs
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            status_code = getattr(getattr(e, "response", None), "status_code", None)
            return self._fail(method, str(e), status_code)

        try:
            body = response.json()
        except ValueError:
            return self._fail(method, "response body is not JSON", response.status_code)

        if not isinstance(body, dict) or not body.get("success"):
            message = body.get("message") if isinstance(body, dict) else None
            return self._fail(method, message or "envelope reported failure", response.status_code)

        return ClientResult.success(body.get("data"), response.status_code)

    def _fail(self, method: str, error: str, status_code: Optional[int] = None) -> ClientResult:
        logger.warning(f"Remote directory {method} {self.base_url} failed: {error}")
        return ClientResult.failure(error, status_code)
