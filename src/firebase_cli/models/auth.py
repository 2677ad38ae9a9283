"""Session and identity models."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Union

from pydantic import BaseModel, ConfigDict


class StructuredIdentity(BaseModel):
    """Decoded ID token claims for the signed-in user."""

    model_config = ConfigDict(extra="allow")

    email: str | None = None
    sub: str | None = None
    name: str | None = None

    @property
    def label(self) -> str:
        return self.email or self.name or self.sub or "unknown user"


@dataclass(frozen=True)
class RawIdentity:
    """An identity the token parser handed back as a bare string."""

    value: str

    @property
    def label(self) -> str:
        return self.value


Identity = Union[StructuredIdentity, RawIdentity]


def resolve_identity(raw: Any) -> Identity | None:
    """Turn a stored or freshly parsed user value into an ``Identity``."""
    if raw is None:
        return None
    if isinstance(raw, (StructuredIdentity, RawIdentity)):
        return raw
    if isinstance(raw, dict):
        return StructuredIdentity.model_validate(raw)
    return RawIdentity(str(raw))


def identity_to_config(identity: Identity) -> dict[str, Any] | str:
    if isinstance(identity, RawIdentity):
        return identity.value
    return identity.model_dump(exclude_none=True)


class Tokens(BaseModel):
    """OAuth tokens kept in the config store."""

    model_config = ConfigDict(extra="ignore")

    access_token: str | None = None
    refresh_token: str | None = None
    id_token: str | None = None
    expires_at: float | None = None
    scopes: list[str] | None = None

    @property
    def expired(self) -> bool:
        if self.expires_at is None:
            return False
        # Treat tokens within a minute of expiry as expired
        return time.time() >= self.expires_at - 60


@dataclass
class LoginResult:
    """Result of a completed OAuth login."""

    user: Identity
    tokens: Tokens
    scopes: list[str] = field(default_factory=list)
