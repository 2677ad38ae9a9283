"""Helpers shared by the CLI commands."""

from __future__ import annotations

from typing import Annotated

import typer

from firebase_cli.auth.google import GoogleAuthenticator, access_token_provider
from firebase_cli.client.api import ApiClient
from firebase_cli.client.auth import BearerTokenAuth
from firebase_cli.client.errors import AuthenticationError
from firebase_cli.config.constants import (
    FIREBASE_API_ORIGIN,
    FIREBASE_API_VERSION,
    FIREBASE_V1_API_VERSION,
    RESOURCE_MANAGER_API_VERSION,
    RESOURCE_MANAGER_ORIGIN,
)
from firebase_cli.config.manager import ConfigStore
from firebase_cli.management.projects import ProjectsAPI
from firebase_cli.utils.prompt import Prompter

# Shared Typer option type aliases
FormatOpt = Annotated[
    str,
    typer.Option("--format", "-f", help="Output format: table, json, yaml or csv"),
]
ProjectIdArg = Annotated[
    str | None,
    typer.Argument(help="Project ID (prompts when omitted)"),
]


def get_store() -> ConfigStore:
    return ConfigStore()


def is_non_interactive(ctx: typer.Context) -> bool:
    obj = ctx.find_root().obj or {}
    return bool(obj.get("non_interactive"))


def make_prompter(ctx: typer.Context) -> Prompter:
    return Prompter(non_interactive=is_non_interactive(ctx))


def make_authenticator(prompter: Prompter) -> GoogleAuthenticator:
    return GoogleAuthenticator(prompter)


def make_projects_api(store: ConfigStore) -> ProjectsAPI:
    """Build the three API clients, authenticated with the stored session."""
    tokens = store.tokens
    if tokens is None or not (tokens.access_token or tokens.refresh_token):
        raise AuthenticationError("Not logged in. Run `firebase login` to authenticate.")
    auth = BearerTokenAuth(access_token_provider(store))
    return ProjectsAPI(
        firebase=ApiClient(FIREBASE_API_ORIGIN, FIREBASE_API_VERSION, auth=auth),
        firebase_v1=ApiClient(FIREBASE_API_ORIGIN, FIREBASE_V1_API_VERSION, auth=auth),
        resource_manager=ApiClient(
            RESOURCE_MANAGER_ORIGIN, RESOURCE_MANAGER_API_VERSION, auth=auth,
        ),
    )
