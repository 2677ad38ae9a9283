"""Pydantic data models for the Firebase Management API and the session."""

from firebase_cli.models.auth import (
    Identity,
    LoginResult,
    RawIdentity,
    StructuredIdentity,
    Tokens,
    resolve_identity,
)
from firebase_cli.models.project import (
    CloudProjectInfo,
    ParentResource,
    ParentResourceType,
    ProjectIdAvailability,
    ProjectInfo,
    ProjectMetadata,
    ProjectPage,
)

__all__ = [
    "CloudProjectInfo",
    "Identity",
    "LoginResult",
    "ParentResource",
    "ParentResourceType",
    "ProjectIdAvailability",
    "ProjectInfo",
    "ProjectMetadata",
    "ProjectPage",
    "RawIdentity",
    "StructuredIdentity",
    "Tokens",
    "resolve_identity",
]
