"""Pydantic models for the persisted CLI configuration."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from firebase_cli.models.auth import Tokens


class StoredConfig(BaseModel):
    """Root configuration model, keyed by the names used on disk."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    user: dict[str, Any] | str | None = None
    tokens: Tokens | None = None
    login_scopes: list[str] | None = Field(default=None, alias="loginScopes")
    # Legacy single-token session, removed on every new login
    session: str | None = None
    gemini: bool | None = None
    usage: bool | None = None
