"""HTTP client bound to one API origin and version."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from firebase_cli.client.errors import (
    ApiConnectionError,
    ApiRequestError,
    AuthenticationError,
    ConflictError,
    NotFoundError,
)
from firebase_cli.config.constants import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class ApiClient:
    """Synchronous HTTP client for one Google REST API.

    Instances are constructed explicitly and handed to the code that needs
    them, so tests can point them at mocked routes.
    """

    def __init__(
        self,
        origin: str,
        api_version: str,
        *,
        auth: httpx.Auth | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.origin = origin.rstrip("/")
        self.api_version = api_version
        self.base_url = f"{self.origin}/{api_version}"
        self._client = httpx.Client(
            base_url=self.base_url,
            auth=auth,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        if response.is_success:
            return response
        status = response.status_code
        try:
            body = response.json()
            error = body.get("error", {}) if isinstance(body, dict) else {}
            detail = error.get("message", response.text) if isinstance(error, dict) else response.text
        except (json.JSONDecodeError, AttributeError):
            detail = response.text
        logger.debug("%s %s -> %s: %s", response.request.method, response.request.url, status, detail)
        if status in (401, 403):
            raise AuthenticationError(
                f"Authentication failed ({status}): {detail}", status_code=status,
            )
        if status == 404:
            raise NotFoundError(f"Not found: {detail}")
        if status == 409:
            raise ConflictError(f"Conflict: {detail}")
        raise ApiRequestError(status, detail)

    def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        logger.debug(">>> %s %s%s", method, self.base_url, path)
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.ConnectError as exc:
            raise ApiConnectionError(
                f"Cannot connect to {self.origin}: {exc}", original=exc,
            ) from exc
        except httpx.TimeoutException as exc:
            raise ApiConnectionError(
                f"Request to {self.origin} timed out: {exc}", original=exc,
            ) from exc
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise ApiConnectionError(
                f"Invalid URL for {self.origin}: {exc}", original=exc,
            ) from exc
        except httpx.TransportError as exc:
            raise ApiConnectionError(
                f"Request to {self.origin} failed: {exc}", original=exc,
            ) from exc
        return self._handle_response(response)

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("POST", path, **kwargs)

    def get_json(self, path: str, **kwargs: Any) -> Any:
        return _decode(self.get(path, **kwargs))

    def post_json(self, path: str, **kwargs: Any) -> Any:
        return _decode(self.post(path, **kwargs))


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        # Fallback: decode with replacement for non-UTF8 responses
        text = response.content.decode("utf-8", errors="replace")
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ApiRequestError(
                response.status_code, f"invalid JSON in response body: {exc}",
            ) from exc
