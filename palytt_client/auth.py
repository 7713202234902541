"""Auth header providers for the transport client."""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable, Protocol, runtime_checkable

from loguru import logger

from palytt_client.errors import APIError, from_cause
from palytt_client.utils.sanitize import sanitize_text

USER_ID_HEADER = "x-clerk-user-id"


@runtime_checkable
class AuthProvider(Protocol):
    async def get_headers(self) -> dict[str, str]: ...


def bearer_headers(token: str, user_id: str | None = None) -> dict[str, str]:
    """Standard JSON headers plus ``Authorization: Bearer``."""
    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "Authorization": f"Bearer {token}",
    }
    if user_id:
        headers[USER_ID_HEADER] = user_id
    return headers


class AnonymousAuth:
    """No credentials; used for public procedures."""

    async def get_headers(self) -> dict[str, str]:
        return {}


class StaticTokenAuth:
    """Fixed bearer token, e.g. from config or the command line."""

    def __init__(self, token: str, user_id: str | None = None):
        self.token = token
        self.user_id = user_id

    async def get_headers(self) -> dict[str, str]:
        if not self.token:
            raise APIError.authentication_required()
        return bearer_headers(self.token, self.user_id)


class TokenProviderAuth:
    """
    Bearer headers from an async token source with a short local cache.

    Session tokens are short-lived, so a fetched token is reused for at most
    ``cache_seconds``. A missing token means there is no active session.
    """

    def __init__(
        self,
        fetch_token: Callable[[], Awaitable[str | None]],
        *,
        user_id: Callable[[], str | None] | str | None = None,
        cache_seconds: float = 15.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._fetch_token = fetch_token
        self._user_id = user_id
        self.cache_seconds = cache_seconds
        self._clock = clock
        self._cached_token: str | None = None
        self._fetched_at: float | None = None

    def clear_cache(self) -> None:
        self._cached_token = None
        self._fetched_at = None

    def _current_user_id(self) -> str | None:
        if callable(self._user_id):
            return self._user_id()
        return self._user_id

    async def get_token(self) -> str:
        if self._cached_token is not None and self._fetched_at is not None:
            if self._clock() - self._fetched_at < self.cache_seconds:
                return self._cached_token

        try:
            token = await self._fetch_token()
        except asyncio.CancelledError:
            raise
        except APIError:
            self.clear_cache()
            raise
        except Exception as e:
            self.clear_cache()
            text = str(e)
            logger.warning(f"Token fetch failed: {sanitize_text(text)}")
            if "expired" in text:
                raise APIError.token_expired() from e
            if "invalid" in text:
                raise APIError.invalid_token() from e
            raise from_cause(e) from e

        if not token:
            self.clear_cache()
            raise APIError.authentication_required()

        self._cached_token = token
        self._fetched_at = self._clock()
        return token

    async def force_refresh(self) -> str:
        """Drop the cached token and fetch a new one."""
        self.clear_cache()
        return await self.get_token()

    async def get_headers(self) -> dict[str, str]:
        token = await self.get_token()
        return bearer_headers(token, self._current_user_id())
