from __future__ import annotations

import logging
from typing import Any

import httpx

from members_client.config import settings
from members_client.models import Member

logger = logging.getLogger(__name__)

MEMBERS_PATH = "/api/members"


class ApiError(Exception):
    """A failed call to the members API, carrying the server's message and detail."""

    def __init__(self, message: str, details: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.status_code = status_code

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class MembersApi:
    def __init__(self, client: httpx.Client):
        self._client = client

    @classmethod
    def from_settings(cls) -> MembersApi:
        return cls(httpx.Client(base_url=settings.api_base_url, timeout=settings.http_timeout_seconds))

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, fallback: str, body: dict[str, Any] | None = None) -> Any:
        try:
            response = self._client.request(method, path, json=body)
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise ApiError(fallback) from exc

        if response.is_success:
            return response.json()

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}
        logger.warning("%s %s -> %s: %s", method, path, response.status_code, payload)
        raise ApiError(
            payload.get("error") or fallback,
            details=payload.get("details"),
            status_code=response.status_code,
        )

    def list_members(self) -> list[Member]:
        data = self._request("GET", MEMBERS_PATH, "Could not fetch members. Is the backend server running?")
        return [Member.model_validate(item) for item in data]

    def create_member(self, body: dict[str, Any]) -> Member:
        data = self._request("POST", MEMBERS_PATH, "Failed to add member. Please try again.", body)
        return Member.model_validate(data)

    def update_member(self, member_id: int, body: dict[str, Any]) -> Member:
        data = self._request("PUT", f"{MEMBERS_PATH}/{member_id}", "Failed to update member. Please try again.", body)
        return Member.model_validate(data)

    def delete_member(self, member_id: int) -> None:
        self._request("DELETE", f"{MEMBERS_PATH}/{member_id}", "Failed to delete member.")
