"""Typed exceptions and error handling decorator."""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, TypeVar

from rich.console import Console

F = TypeVar("F", bound=Callable[..., Any])

err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


class FirebaseCLIError(Exception):
    """Base exception for firebase-cli."""

    exit_code: int = 1

    def __init__(
        self,
        message: str = "",
        *,
        original: BaseException | None = None,
        exit_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.original = original
        if exit_code is not None:
            self.exit_code = exit_code


# HTTP layer


class ApiConnectionError(FirebaseCLIError):
    """Cannot reach the API."""

    exit_code = 2
    status_code: int | None = None


class HTTPStatusError(FirebaseCLIError):
    """The API answered with a non-success status."""

    exit_code = 2

    def __init__(self, status_code: int, message: str = "") -> None:
        self.status_code = status_code
        super().__init__(message)


class AuthenticationError(HTTPStatusError):
    """Authentication failed (401/403)."""

    exit_code = 3

    def __init__(self, message: str = "", status_code: int = 401) -> None:
        super().__init__(status_code, message)


class NotFoundError(HTTPStatusError):
    """Resource not found (404)."""

    exit_code = 4

    def __init__(self, message: str = "") -> None:
        super().__init__(404, message)


class ConflictError(HTTPStatusError):
    """Resource conflict (409)."""

    exit_code = 5

    def __init__(self, message: str = "") -> None:
        super().__init__(409, message)


class ApiRequestError(HTTPStatusError):
    """Generic API error."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        super().__init__(status_code, f"API returned {status_code}: {detail}")


# Configuration and preconditions


class ConfigurationError(FirebaseCLIError):
    """Invalid or missing configuration."""

    exit_code = 6


class NonInteractiveError(FirebaseCLIError):
    """Interactive input is required but the CLI runs non-interactively."""

    exit_code = 1


# Domain errors


class ProjectListError(FirebaseCLIError):
    """Listing projects failed."""

    exit_code = 2


class PaginationLimitError(ProjectListError):
    """The server kept returning continuation tokens past the page limit."""


class ProjectLookupError(FirebaseCLIError):
    """Fetching a single project failed."""

    exit_code = 2


class ProjectIdCheckError(FirebaseCLIError):
    """The project ID availability check failed."""

    exit_code = 2


class ProjectCreationError(FirebaseCLIError):
    """Creating the Cloud project failed."""

    exit_code = 2


class ProjectExistsError(ProjectCreationError):
    """A project with the requested ID already exists."""


class FirebaseEnableError(FirebaseCLIError):
    """Adding Firebase to a Cloud project failed."""

    exit_code = 2


class OperationError(FirebaseCLIError):
    """A long-running operation finished with an error or never finished."""

    exit_code = 2


class LoginError(FirebaseCLIError):
    """The OAuth login flow failed."""

    exit_code = 2


class UnexpectedError(FirebaseCLIError):
    """Internal inconsistency, not a user error."""

    exit_code = 2


def error_status(exc: BaseException | None) -> int | None:
    """Return the HTTP status behind *exc*, following ``original`` links."""
    seen: set[int] = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        status = getattr(exc, "status_code", None)
        if isinstance(status, int):
            return status
        exc = getattr(exc, "original", None) or exc.__cause__
    return None


def error_handler(func: F) -> F:
    """Decorator that catches FirebaseCLIError and prints user-friendly messages."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except FirebaseCLIError as exc:
            if exc.original is not None:
                logger.debug("Original error: %r", exc.original)
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(exc.exit_code)
        except ValueError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(1)

    return wrapper  # type: ignore[return-value]
