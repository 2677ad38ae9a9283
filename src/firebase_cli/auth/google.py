"""Google OAuth transport for ``firebase login``.

Two ways to obtain the authorization code:

- localhost: a temporary local server receives the browser redirect
  (``InstalledAppFlow.run_local_server``).
- manual: the user signs in on any device and pastes the code (or the whole
  redirect URL) back into the terminal. Used in cloud shells and with
  ``--no-localhost``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import timezone
from typing import Any, Protocol
from urllib.parse import parse_qs, urlparse

import google.auth.exceptions
import google.auth.jwt
import google.auth.transport.requests
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from firebase_cli.client.errors import AuthenticationError, LoginError
from firebase_cli.config.constants import (
    OAUTH_AUTH_URI,
    OAUTH_CLIENT_ID,
    OAUTH_CLIENT_SECRET,
    OAUTH_SCOPES,
    OAUTH_TOKEN_URI,
    OOB_REDIRECT_URI,
)
from firebase_cli.config.manager import ConfigStore
from firebase_cli.models.auth import (
    Identity,
    LoginResult,
    RawIdentity,
    StructuredIdentity,
    Tokens,
    resolve_identity,
)
from firebase_cli.output.formatter import console
from firebase_cli.utils.prompt import Prompter

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Firebase CLI login succeeded. You can close this window and return to the terminal."


class Authenticator(Protocol):
    def login(self, use_localhost: bool, email_hint: str | None = None) -> LoginResult: ...


def client_config() -> dict[str, Any]:
    return {
        "installed": {
            "client_id": OAUTH_CLIENT_ID,
            "client_secret": OAUTH_CLIENT_SECRET,
            "auth_uri": OAUTH_AUTH_URI,
            "token_uri": OAUTH_TOKEN_URI,
            "redirect_uris": ["http://localhost", OOB_REDIRECT_URI],
        }
    }


def extract_code(answer: str) -> str:
    """Accept either the bare code or the redirect URL that carries it."""
    answer = answer.strip()
    if answer.startswith(("http://", "https://")):
        codes = parse_qs(urlparse(answer).query).get("code")
        if codes:
            return codes[0]
    return answer


def identity_from_id_token(id_token: str | None) -> Identity:
    """Decode the ID token claims without verification (they came over TLS from Google)."""
    if not id_token:
        # No claims to show; the session still counts as logged in
        return StructuredIdentity()
    try:
        claims = google.auth.jwt.decode(id_token, verify=False)
    except ValueError:
        return RawIdentity(id_token)
    return resolve_identity(claims) or RawIdentity(id_token)


def tokens_from_credentials(creds: Credentials) -> Tokens:
    expires_at = None
    if creds.expiry is not None:
        # google-auth keeps expiry as a naive UTC datetime
        expires_at = creds.expiry.replace(tzinfo=timezone.utc).timestamp()
    return Tokens(
        access_token=creds.token,
        refresh_token=creds.refresh_token,
        id_token=getattr(creds, "id_token", None),
        expires_at=expires_at,
        scopes=list(creds.granted_scopes or creds.scopes or []),
    )


class GoogleAuthenticator:
    """Run the installed-app OAuth flow against Google."""

    def __init__(
        self,
        prompter: Prompter,
        *,
        flow_factory: Callable[[], InstalledAppFlow] | None = None,
    ) -> None:
        self.prompter = prompter
        self._flow_factory = flow_factory or (
            lambda: InstalledAppFlow.from_client_config(client_config(), scopes=OAUTH_SCOPES)
        )

    def _auth_params(self, email_hint: str | None) -> dict[str, str]:
        params = {"access_type": "offline", "prompt": "consent"}
        if email_hint:
            params["login_hint"] = email_hint
        return params

    def _run_localhost(self, flow: InstalledAppFlow, email_hint: str | None) -> Credentials:
        return flow.run_local_server(
            host="localhost",
            port=0,
            authorization_prompt_message="Visit this URL on this device to log in:\n{url}\n",
            success_message=SUCCESS_MESSAGE,
            open_browser=True,
            **self._auth_params(email_hint),
        )

    def _run_manual(self, flow: InstalledAppFlow, email_hint: str | None) -> Credentials:
        flow.redirect_uri = OOB_REDIRECT_URI
        auth_url, _ = flow.authorization_url(**self._auth_params(email_hint))
        console.print("\nVisit this URL on any device to log in:\n")
        console.print(auth_url, soft_wrap=True, markup=False, highlight=False)
        console.print(
            "\nAfter signing in your browser is sent to a page that will not load. "
            "Copy the [bold]code[/] parameter (or the whole URL) from the address bar.\n"
        )
        code = extract_code(self.prompter.text("Paste authorization code here"))
        flow.fetch_token(code=code)
        return flow.credentials

    def login(self, use_localhost: bool, email_hint: str | None = None) -> LoginResult:
        flow = self._flow_factory()
        try:
            if use_localhost:
                creds = self._run_localhost(flow, email_hint)
            else:
                creds = self._run_manual(flow, email_hint)
        except Exception as exc:
            logger.debug("OAuth flow failed: %r", exc)
            raise LoginError(f"Failed to authenticate: {exc}", original=exc) from exc
        tokens = tokens_from_credentials(creds)
        return LoginResult(
            user=identity_from_id_token(tokens.id_token),
            tokens=tokens,
            scopes=tokens.scopes or [],
        )


def refresh_tokens(tokens: Tokens) -> Tokens:
    """Exchange the stored refresh token for a new access token."""
    creds = Credentials(
        token=None,
        refresh_token=tokens.refresh_token,
        token_uri=OAUTH_TOKEN_URI,
        client_id=OAUTH_CLIENT_ID,
        client_secret=OAUTH_CLIENT_SECRET,
        scopes=tokens.scopes,
    )
    try:
        creds.refresh(google.auth.transport.requests.Request())
    except google.auth.exceptions.RefreshError as exc:
        raise AuthenticationError(
            "Your credentials are no longer valid. Run `firebase login --reauth`.",
        ) from exc
    refreshed = tokens_from_credentials(creds)
    # Google only returns a new refresh token on consent; keep the old one
    return refreshed.model_copy(
        update={
            "refresh_token": refreshed.refresh_token or tokens.refresh_token,
            "id_token": refreshed.id_token or tokens.id_token,
            "scopes": refreshed.scopes or tokens.scopes,
        }
    )


def access_token_provider(store: ConfigStore) -> Callable[[], str]:
    """Return a callable yielding a fresh access token, refreshing and persisting as needed."""

    def provide() -> str:
        tokens = store.tokens
        if tokens is None or not (tokens.access_token or tokens.refresh_token):
            raise AuthenticationError("Not logged in. Run `firebase login` to authenticate.")
        if tokens.access_token and not tokens.expired:
            return tokens.access_token
        if not tokens.refresh_token:
            raise AuthenticationError(
                "Your session has expired. Run `firebase login --reauth`.",
            )
        logger.debug("Access token expired, refreshing")
        refreshed = refresh_tokens(tokens)
        store.set("tokens", refreshed)
        return refreshed.access_token or ""

    return provide
