"""Procedure catalog for the Palytt tRPC backend."""

from palytt_client.procedures import (
    comments,
    follows,
    friends,
    lists,
    messages,
    notifications,
    places,
    posts,
    users,
)
from palytt_client.procedures.base import (
    Procedure,
    ProcedureKind,
    ProcedureRegistry,
    mutation,
    query,
)

ROUTERS = (posts, users, friends, follows, comments, messages, notifications, lists, places)


def build_registry() -> ProcedureRegistry:
    registry = ProcedureRegistry()
    for router in ROUTERS:
        registry.extend(router.PROCEDURES)
    return registry


REGISTRY = build_registry()

__all__ = [
    "REGISTRY",
    "ROUTERS",
    "Procedure",
    "ProcedureKind",
    "ProcedureRegistry",
    "build_registry",
    "comments",
    "follows",
    "friends",
    "lists",
    "messages",
    "mutation",
    "notifications",
    "places",
    "posts",
    "query",
    "users",
]
