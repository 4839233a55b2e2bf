from __future__ import annotations

from typing import Any


class MemberStoreError(Exception):
    """Base class for failures reported to clients as ``{"error", "details"}``."""

    status_code = 500

    def __init__(self, error: str, details: str | None = None):
        super().__init__(error)
        self.error = error
        self.details = details

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.error}
        if self.details:
            body["details"] = self.details
        return body


class MemberValidationError(MemberStoreError):
    status_code = 400


class MemberNotFoundError(MemberStoreError):
    status_code = 404


class DuplicateEmailError(MemberStoreError):
    status_code = 409


class StorageFaultError(MemberStoreError):
    status_code = 500
