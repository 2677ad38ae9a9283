"""Login orchestration: consent questions, OAuth, and session persistence."""

from __future__ import annotations

import logging

from firebase_cli.auth.google import Authenticator
from firebase_cli.client.errors import NonInteractiveError
from firebase_cli.config.manager import ConfigStore
from firebase_cli.models.auth import Identity, RawIdentity, StructuredIdentity, identity_to_config
from firebase_cli.output.formatter import console
from firebase_cli.output.status import log_bullet, log_success
from firebase_cli.utils.env import is_cloud_environment
from firebase_cli.utils.prompt import Prompter

logger = logging.getLogger(__name__)

GEMINI_NOTICE = (
    "The Firebase CLI's MCP server feature can optionally make use of Gemini in Firebase. "
    "Learn more about Gemini in Firebase and how it uses your data: "
    "https://firebase.google.com/docs/gemini-in-firebase#how-gemini-in-firebase-uses-your-data"
)
USAGE_NOTICE = (
    "Firebase optionally collects CLI and Emulator Suite usage and error reporting "
    "information to help improve our products. Data is collected in accordance with "
    "Google's privacy policy (https://policies.google.com/privacy) and is not used to "
    "identify you."
)


def ask_consent(store: ConfigStore, prompter: Prompter) -> None:
    """Ask the first-run questions and store each answer on its own."""
    log_bullet(GEMINI_NOTICE)
    gemini = prompter.confirm("Enable Gemini in Firebase features?")
    store.set("gemini", gemini)

    console.print()
    log_bullet(USAGE_NOTICE)
    usage = prompter.confirm(
        "Allow Firebase to collect CLI and Emulator Suite usage and error reporting information?"
    )
    store.set("usage", usage)

    if gemini or usage:
        console.print()
        log_bullet(
            "To change your preferences at any time, run "
            "`firebase logout` and `firebase login` again."
        )


def _as_user(user: Identity) -> str:
    """Message suffix naming the user; empty when the identity carries no name."""
    if isinstance(user, RawIdentity):
        name = user.value
    else:
        name = user.email or user.name or user.sub
    return f" as [bold]{name}[/]" if name else ""


def login(
    store: ConfigStore,
    authenticator: Authenticator,
    prompter: Prompter,
    *,
    non_interactive: bool = False,
    localhost: bool = True,
    reauth: bool = False,
) -> Identity:
    """Log the CLI in and return the signed-in identity."""
    if non_interactive:
        raise NonInteractiveError(
            "Cannot run login in non-interactive mode. Run [bold]firebase login[/] "
            "from an interactive terminal first; later commands reuse the stored session.",
        )

    user = store.user
    if user is not None and store.has_valid_session() and not reauth:
        console.print(f"Already logged in{_as_user(user)}")
        return user

    if not reauth:
        ask_consent(store, prompter)

    # A cloud workspace cannot receive the localhost redirect
    use_localhost = False if is_cloud_environment() else localhost
    email_hint = user.email if isinstance(user, StructuredIdentity) else None

    result = authenticator.login(use_localhost, email_hint)
    store.set("user", identity_to_config(result.user))
    store.set("tokens", result.tokens)
    # Keep the granted scopes in case the required scopes grow later
    store.set("loginScopes", result.scopes)
    store.delete("session")

    console.print()
    if isinstance(result.user, RawIdentity):
        logger.debug(
            "Unexpected string for the logged-in user. Maybe the ID token didn't parse right?"
        )
        log_success("Success! Logged in")
    else:
        log_success(f"Success! Logged in{_as_user(result.user)}")
    return result.user
