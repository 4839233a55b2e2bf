from members_api.routers import health, members

__all__ = [
    "health",
    "members",
]
