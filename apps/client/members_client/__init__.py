from members_client.api import ApiError, MembersApi
from members_client.cache import MemberCache
from members_client.models import Member
from members_client.reconciler import ViewReconciler

__all__ = [
    "ApiError",
    "Member",
    "MemberCache",
    "MembersApi",
    "ViewReconciler",
]
