from __future__ import annotations

from collections.abc import Iterable, Iterator

from members_client.models import Member


class MemberCache:
    """Local copy of the server's member list, kept sorted by name.

    Only server-confirmed records go in; callers mutate it after a request
    succeeds, never before.
    """

    def __init__(self, members: Iterable[Member] = ()):
        self._members: list[Member] = sorted(members, key=lambda m: m.sort_key)

    def __iter__(self) -> Iterator[Member]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    @property
    def items(self) -> tuple[Member, ...]:
        return tuple(self._members)

    def get(self, member_id: int) -> Member | None:
        for member in self._members:
            if member.id == member_id:
                return member
        return None

    def replace_all(self, members: Iterable[Member]) -> None:
        self._members = sorted(members, key=lambda m: m.sort_key)

    def insert(self, member: Member) -> None:
        self._members = sorted([*self._members, member], key=lambda m: m.sort_key)

    def replace(self, member: Member) -> None:
        self._members = sorted(
            [member if item.id == member.id else item for item in self._members],
            key=lambda m: m.sort_key,
        )

    def remove(self, member_id: int) -> None:
        self._members = [item for item in self._members if item.id != member_id]
