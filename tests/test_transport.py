"""Tests for palytt_client.transport.APIClient over httpx.MockTransport."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from palytt_client.auth import StaticTokenAuth
from palytt_client.errors import APIError, ErrorKind
from palytt_client.procedures import posts
from palytt_client.procedures.models import Post, SuccessResponse
from palytt_client.transport import APIClient, HttpMethod, extract_error_message

from tests.helpers import BASE_URL, request_input, trpc_data


def _raise(exc: BaseException):
    def responder(request: httpx.Request) -> httpx.Response:
        raise exc

    return responder


class TestRequestBuilding:
    @pytest.mark.asyncio
    async def test_get_puts_input_in_query_param(self, make_api_client) -> None:
        client, handler = make_api_client(trpc_data({"id": "p1", "userId": "u1"}))
        result = await client.call(
            "posts.getPostById", posts.GetPostByIdInput(id="p1"), HttpMethod.GET, output_type=Post | None
        )
        assert isinstance(result, Post)
        request = handler.last
        assert request.method == "GET"
        assert str(request.url).startswith(f"{BASE_URL}/trpc/posts.getPostById?")
        assert request.url.params["input"] == '{"id":"p1"}'
        assert request.content == b""

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self, make_api_client) -> None:
        client, handler = make_api_client(trpc_data({"liked": True, "likesCount": 3}))
        result = await client.call(
            "posts.likePost", posts.PostIdInput(post_id="p1"), "post", output_type=posts.LikeResult
        )
        assert result == posts.LikeResult(liked=True, likes_count=3)
        request = handler.last
        assert request.method == "POST"
        assert request.url.path == "/trpc/posts.likePost"
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == {"postId": "p1"}

    @pytest.mark.asyncio
    async def test_no_input_sends_empty_object(self, make_api_client) -> None:
        client, handler = make_api_client(trpc_data({"count": 0}))
        await client.call("notifications.getUnreadCount")
        assert request_input(handler.last) == {}

    @pytest.mark.asyncio
    async def test_auth_headers_are_attached(self, make_api_client) -> None:
        client, handler = make_api_client(trpc_data(None), StaticTokenAuth("tok-123", "user_1"))
        await client.call("users.getUserByClerkId", {"clerkId": "user_1"})
        headers = handler.last.headers
        assert headers["authorization"] == "Bearer tok-123"
        assert headers["x-clerk-user-id"] == "user_1"
        assert headers["accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_timeout_is_passed_on_every_request(self, make_api_client) -> None:
        client, handler = make_api_client(trpc_data([]), timeout_seconds=5.0)
        await client.call("places.searchPlaces", {"query": "ramen"})
        timeout = handler.last.extensions["timeout"]
        assert timeout["read"] == 5.0
        assert timeout["connect"] == 5.0

    @pytest.mark.asyncio
    async def test_get_and_post_carry_the_same_json(self, make_api_client) -> None:
        client, handler = make_api_client(trpc_data(None))
        payload = posts.CreatePostInput(
            caption="Tonkotsu, extra chashu", rating=4.5, menu_items=["ramen", "gyoza"], location_city="Austin"
        )
        await client.call("posts.createPost", payload, HttpMethod.GET)
        await client.call("posts.createPost", payload, HttpMethod.POST)
        get_request, post_request = handler.requests
        assert json.loads(get_request.url.params["input"]) == json.loads(post_request.content)
        assert json.loads(post_request.content) == {
            "caption": "Tonkotsu, extra chashu",
            "rating": 4.5,
            "menuItems": ["ramen", "gyoza"],
            "locationCity": "Austin",
        }

    def test_procedure_url_strips_trailing_slash(self) -> None:
        client = APIClient("https://api.palytt.test/")
        assert client.procedure_url("posts.getRecentPosts") == "https://api.palytt.test/trpc/posts.getRecentPosts"

    def test_non_positive_timeout_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            APIClient(BASE_URL, timeout_seconds=0)


class TestFailures:
    @pytest.mark.asyncio
    async def test_auth_failure_sends_nothing(self, make_api_client) -> None:
        client, handler = make_api_client(trpc_data({}), StaticTokenAuth(""))
        with pytest.raises(APIError) as exc_info:
            await client.call("posts.getFeedPosts")
        assert exc_info.value.kind is ErrorKind.AUTHENTICATION_REQUIRED
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_auth_provider_crash_is_normalized(self, make_api_client) -> None:
        class BrokenAuth:
            async def get_headers(self) -> dict[str, str]:
                raise RuntimeError("keychain locked")

        client, handler = make_api_client(trpc_data({}), BrokenAuth())
        with pytest.raises(APIError) as exc_info:
            await client.call("posts.getFeedPosts")
        assert exc_info.value.kind is ErrorKind.UNKNOWN
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_encoding_failure_sends_nothing(self, make_api_client) -> None:
        client, handler = make_api_client(trpc_data({}))
        with pytest.raises(APIError) as exc_info:
            await client.call("posts.createPost", {"caption": object()}, HttpMethod.POST)
        assert exc_info.value.kind is ErrorKind.ENCODING_ERROR
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_empty_procedure_name(self, make_api_client) -> None:
        client, handler = make_api_client(trpc_data({}))
        with pytest.raises(APIError) as exc_info:
            await client.call("  ")
        assert exc_info.value.kind is ErrorKind.INVALID_DATA
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_unsupported_method(self, make_api_client) -> None:
        client, _ = make_api_client(trpc_data({}))
        with pytest.raises(APIError) as exc_info:
            await client.call("posts.getRecentPosts", None, "TRACE")
        assert exc_info.value.kind is ErrorKind.INVALID_DATA

    @pytest.mark.asyncio
    async def test_500_with_plain_text_body(self, make_api_client) -> None:
        client, _ = make_api_client(lambda request: httpx.Response(500, text="upstream exploded"))
        with pytest.raises(APIError) as exc_info:
            await client.call("posts.getRecentPosts")
        error = exc_info.value
        assert error == APIError.internal_server_error()
        assert error.details["status_code"] == 500
        assert error.details["server_message"] == "upstream exploded"
        assert error.details["procedure"] == "posts.getRecentPosts"

    @pytest.mark.asyncio
    async def test_404_keeps_message_only_in_details(self, make_api_client) -> None:
        client, _ = make_api_client(lambda request: httpx.Response(404, json={"message": "Post missing"}))
        with pytest.raises(APIError) as exc_info:
            await client.call("posts.getPostById", {"id": "p1"})
        error = exc_info.value
        assert error == APIError.not_found(None)
        assert error.details["server_message"] == "Post missing"

    @pytest.mark.asyncio
    async def test_400_joins_error_list(self, make_api_client) -> None:
        client, _ = make_api_client(
            lambda request: httpx.Response(400, json={"errors": ["limit too big", "cursor invalid"]})
        )
        with pytest.raises(APIError) as exc_info:
            await client.call("posts.getFeedPosts")
        assert exc_info.value == APIError.bad_request("limit too big, cursor invalid")

    @pytest.mark.asyncio
    async def test_unlisted_5xx_is_server_error(self, make_api_client) -> None:
        client, _ = make_api_client(lambda request: httpx.Response(502, json={"error": "bad gateway"}))
        with pytest.raises(APIError) as exc_info:
            await client.call("posts.getRecentPosts")
        assert exc_info.value == APIError.server_error(502, "bad gateway")
        assert exc_info.value.analytics_code == "server_error_502"

    @pytest.mark.asyncio
    async def test_redirect_status_is_invalid_response(self, make_api_client) -> None:
        client, _ = make_api_client(lambda request: httpx.Response(302))
        with pytest.raises(APIError) as exc_info:
            await client.call("posts.getRecentPosts")
        assert exc_info.value.kind is ErrorKind.INVALID_RESPONSE
        assert exc_info.value.details["status_code"] == 302

    @pytest.mark.asyncio
    async def test_envelope_error_beats_result(self, make_api_client) -> None:
        body = {
            "result": {"data": {"success": True}},
            "error": {"message": "Already liked", "code": 409, "data": {"code": "CONFLICT"}},
        }
        client, _ = make_api_client(lambda request: httpx.Response(200, json=body))
        with pytest.raises(APIError) as exc_info:
            await client.call("posts.likePost", {"postId": "p1"}, HttpMethod.POST, output_type=SuccessResponse)
        assert exc_info.value == APIError.server_error(409, "Already liked")

    @pytest.mark.asyncio
    async def test_bare_body_fallback(self, make_api_client) -> None:
        client, _ = make_api_client(lambda request: httpx.Response(200, json={"success": True}))
        result = await client.call("lists.deleteList", {"listId": "l1"}, HttpMethod.POST, output_type=SuccessResponse)
        assert result.success is True

    @pytest.mark.asyncio
    async def test_undecodable_body(self, make_api_client) -> None:
        client, _ = make_api_client(lambda request: httpx.Response(200, text="<html>maintenance</html>"))
        with pytest.raises(APIError) as exc_info:
            await client.call("posts.getRecentPosts")
        assert exc_info.value.kind is ErrorKind.DECODING_ERROR
        assert exc_info.value.details["procedure"] == "posts.getRecentPosts"

    @pytest.mark.asyncio
    async def test_timeout(self, make_api_client) -> None:
        client, _ = make_api_client(_raise(httpx.ReadTimeout("too slow")))
        with pytest.raises(APIError) as exc_info:
            await client.call("posts.getRecentPosts")
        assert exc_info.value.kind is ErrorKind.TIMEOUT

    @pytest.mark.asyncio
    async def test_connection_refused(self, make_api_client) -> None:
        client, _ = make_api_client(_raise(httpx.ConnectError("connection refused")))
        with pytest.raises(APIError) as exc_info:
            await client.call("posts.getRecentPosts")
        assert exc_info.value.kind is ErrorKind.CONNECTION_LOST
        assert exc_info.value.should_report is False

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, make_api_client) -> None:
        client, _ = make_api_client(_raise(asyncio.CancelledError()))
        with pytest.raises(asyncio.CancelledError):
            await client.call("posts.getRecentPosts")


class TestExtractErrorMessage:
    def test_preference_order(self) -> None:
        assert extract_error_message(b'{"message":"m","error":"e"}') == "m"
        assert extract_error_message(b'{"error":"e","errors":["x"]}') == "e"
        assert extract_error_message(b'{"errors":["a","b"]}') == "a, b"

    def test_falls_back_to_text_then_none(self) -> None:
        assert extract_error_message(b"plain failure") == "plain failure"
        assert extract_error_message(b'{"code":1}') == '{"code":1}'
        assert extract_error_message(b"") is None
        assert extract_error_message(b"\xff\xfe\xfa") is None


class TestLifecycleAndHealth:
    @pytest.mark.asyncio
    async def test_injected_client_is_not_closed(self) -> None:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(trpc_data({})))
        async with APIClient(BASE_URL, http_client=http_client) as client:
            await client.call("posts.getRecentPosts")
        assert not http_client.is_closed
        await http_client.aclose()

    @pytest.mark.asyncio
    async def test_health_ok(self, make_api_client) -> None:
        client, handler = make_api_client(lambda request: httpx.Response(200, json={"status": "ok"}))
        status = await client.check_health()
        assert status.healthy is True
        assert status.status_code == 200
        assert status.error is None
        assert handler.last.url.path == "/health"

    @pytest.mark.asyncio
    async def test_health_bad_status(self, make_api_client) -> None:
        client, _ = make_api_client(lambda request: httpx.Response(503))
        status = await client.check_health()
        assert status.healthy is False
        assert status.status_code == 503
        assert status.error == "Unexpected status 503"

    @pytest.mark.asyncio
    async def test_health_unreachable_never_raises(self, make_api_client) -> None:
        client, _ = make_api_client(_raise(httpx.ConnectError("refused")))
        status = await client.check_health()
        assert status.healthy is False
        assert status.status_code is None
        assert status.error == "Connection lost. Please check your internet connection."
