"""Authentication strategies for the Google APIs."""

from __future__ import annotations

from collections.abc import Callable, Generator

import httpx


class BearerTokenAuth(httpx.Auth):
    """Authenticate with an OAuth access token (Authorization: Bearer header).

    The token is fetched lazily per request so refreshed tokens are picked up.
    """

    def __init__(self, token_provider: Callable[[], str]) -> None:
        self.token_provider = token_provider

    def auth_flow(
        self, request: httpx.Request,
    ) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self.token_provider()}"
        yield request
