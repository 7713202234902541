"""Tests for procedure descriptors and the catalog registry."""

import pytest

from palytt_client.procedures import (
    REGISTRY,
    ROUTERS,
    Procedure,
    ProcedureKind,
    ProcedureRegistry,
    build_registry,
    friends,
    mutation,
    places,
    posts,
    query,
)
from palytt_client.procedures.models import EmptyInput, SuccessResponse
from palytt_client.transport import HttpMethod


@pytest.mark.parametrize(
    "router,count",
    [
        ("posts", 9),
        ("users", 6),
        ("friends", 10),
        ("follows", 8),
        ("comments", 4),
        ("messages", 12),
        ("notifications", 9),
        ("lists", 7),
        ("places", 1),
    ],
)
def test_catalog_router_sizes(router: str, count: int) -> None:
    assert len(REGISTRY.by_router(router)) == count


def test_catalog_is_complete_and_unique() -> None:
    assert len(REGISTRY) == 66
    assert len(set(REGISTRY.names)) == 66
    assert len(REGISTRY.queries()) + len(REGISTRY.mutations()) == 66


def test_every_router_module_prefixes_its_names() -> None:
    for router in ROUTERS:
        prefix = router.__name__.rsplit(".", 1)[-1]
        assert router.PROCEDURES
        assert all(p.name.startswith(f"{prefix}.") for p in router.PROCEDURES)


def test_http_method_follows_kind() -> None:
    for procedure in REGISTRY:
        if procedure.kind is ProcedureKind.QUERY:
            assert procedure.http_method is HttpMethod.GET
            assert procedure.is_query
        else:
            assert procedure.http_method is HttpMethod.POST
            assert not procedure.is_query


def test_known_descriptors() -> None:
    assert REGISTRY.require("posts.getRecentPosts") is posts.GET_RECENT_POSTS
    assert "friends.sendRequest" in REGISTRY
    assert friends.SEND_REQUEST.kind is ProcedureKind.MUTATION
    assert friends.SEND_REQUEST.protected is True
    assert places.SEARCH_PLACES.protected is False
    assert posts.GET_POST_BY_ID.router == "posts"


def test_lookup_of_unknown_name() -> None:
    assert REGISTRY.get("posts.nope") is None
    assert "posts.nope" not in REGISTRY
    with pytest.raises(KeyError):
        REGISTRY.require("posts.nope")


def test_duplicate_names_are_rejected() -> None:
    registry = ProcedureRegistry([query("demo.ping", EmptyInput, SuccessResponse)])
    with pytest.raises(ValueError, match="already registered"):
        registry.register(mutation("demo.ping", EmptyInput, SuccessResponse))


def test_empty_name_is_rejected() -> None:
    with pytest.raises(ValueError):
        Procedure("", ProcedureKind.QUERY, EmptyInput, SuccessResponse)
    with pytest.raises(ValueError):
        query("  ", EmptyInput, SuccessResponse)


def test_descriptors_are_immutable() -> None:
    with pytest.raises(AttributeError):
        posts.GET_RECENT_POSTS.name = "posts.other"  # type: ignore[misc]


def test_build_registry_returns_fresh_registry() -> None:
    registry = build_registry()
    assert registry is not REGISTRY
    assert registry.names == REGISTRY.names
