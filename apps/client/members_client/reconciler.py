from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Literal

from members_client.api import ApiError, MembersApi
from members_client.cache import MemberCache
from members_client.form import MemberForm
from members_client.models import Member

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this member?"
REQUIRED_FIELDS_MESSAGE = "Name, Email, and Join Date are required."

FormMode = Literal["add", "edit"]


class ViewReconciler:
    """Keeps a member cache and one add/edit form in step with the API.

    Every mutation waits for the server: the cache only changes after a call
    succeeds, and a failed call leaves both the cache and the form fields as
    they were.
    """

    def __init__(self, api: MembersApi):
        self.api = api
        self.cache = MemberCache()
        self.form = MemberForm()
        self.loading = True
        self.error: str | None = None
        self.editing: Member | None = None
        self.notice: str | None = None

    @property
    def mode(self) -> FormMode:
        return "edit" if self.editing is not None else "add"

    @property
    def members(self) -> tuple[Member, ...]:
        return self.cache.items

    def refresh(self) -> None:
        self.loading = True
        self.error = None
        try:
            self.cache.replace_all(self.api.list_members())
        except ApiError as exc:
            self.error = str(exc)
        finally:
            self.loading = False

    def submit(self) -> Member | None:
        """Submit the form as an add or an edit, depending on the mode.

        Returns the server's record on success and ``None`` otherwise, with
        the reason left in ``form.error``.
        """
        self.form.error = ""
        if not self.form.is_complete():
            self.form.error = REQUIRED_FIELDS_MESSAGE
            return None

        editing = self.editing
        try:
            if editing is not None:
                member = self.api.update_member(editing.id, self.form.to_payload())
            else:
                member = self.api.create_member(self.form.to_payload())
        except ApiError as exc:
            self.form.error = str(exc)
            return None

        if editing is not None:
            self.cache.replace(member)
            logger.info("member %s updated", member.id)
            self.notice = "Member updated."
        else:
            self.cache.insert(member)
            logger.info("member %s added", member.id)
            self.notice = "Member added."
        self.cancel_edit()
        return member

    def begin_edit(self, member: Member) -> None:
        self.editing = member
        self.form.load(member)

    def cancel_edit(self) -> None:
        self.editing = None
        self.form.reset()

    def delete(self, member_id: int, confirm: Callable[[str], bool]) -> bool:
        if not confirm(DELETE_PROMPT):
            return False
        try:
            self.api.delete_member(member_id)
        except ApiError as exc:
            self.error = f"Error deleting member: {exc}"
            return False

        self.cache.remove(member_id)
        if self.editing is not None and self.editing.id == member_id:
            self.cancel_edit()
        logger.info("member %s deleted", member_id)
        self.notice = "Member deleted."
        return True

    def dismiss_error(self) -> None:
        self.error = None

    def pop_notice(self) -> str | None:
        """Return the last success message once, then clear it."""
        notice, self.notice = self.notice, None
        return notice
