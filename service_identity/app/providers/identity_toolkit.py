"""
Identity Toolkit REST client for user-record lookups.
"""

from typing import Dict, Any, Optional

import httpx

from shared.logging import get_logger
from .base import UserRecord, UserRecordError, user_record_from_payload


class IdentityToolkitClient:
    """Implements `IdentityRecordProvider` over `accounts:lookup`."""

    def __init__(
        self,
        base_url: str,
        project_id: str,
        access_token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.project_id = project_id
        self.access_token = access_token
        self.timeout = timeout
        self._transport = transport
        self.logger = get_logger("identity.toolkit")

    @property
    def lookup_url(self) -> str:
        return f"{self.base_url}/v1/projects/{self.project_id}/accounts:lookup"

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    async def get_user_record(self, subject_id: str) -> UserRecord:
        """Fetch the user record for `subject_id`.

        Transport failures (timeouts, refused connections) propagate as
        `httpx` errors; provider answers that carry no usable record raise
        `UserRecordError`.
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(
                self.lookup_url,
                json={"localId": [subject_id]},
                headers=self._headers(),
            )

        if response.is_error:
            message = _error_message(response)
            self.logger.warning(
                "User lookup rejected by provider",
                status_code=response.status_code,
                error=message
            )
            raise UserRecordError(
                f"Provider returned {response.status_code}: {message}",
                code=str(response.status_code),
            )

        users = response.json().get("users") or []
        if not users:
            raise UserRecordError(
                f"No user record found for identifier {subject_id}",
                code="user-not-found",
            )

        return user_record_from_payload(users[0])


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return response.reason_phrase
