"""Project-related data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class _ApiModel(BaseModel):
    """Base for camelCase API payloads; unknown fields are kept."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class ParentResourceType(str, Enum):
    ORGANIZATION = "organization"
    FOLDER = "folder"


class ParentResource(_ApiModel):
    """Organization or folder a new project is created under."""

    id: str
    type: ParentResourceType


class ProjectMetadata(_ApiModel):
    """A Firebase project as returned by the Firebase Management API."""

    project_id: str
    project_number: str | None = None
    display_name: str | None = None
    name: str | None = None
    state: str | None = None
    resources: dict[str, Any] | None = None

    @property
    def label(self) -> str:
        return choice_label(self.project_id, self.display_name)


class CloudProjectInfo(_ApiModel):
    """A Cloud project that Firebase can be added to."""

    project: str
    display_name: str | None = None
    location_id: str | None = None

    @property
    def project_id(self) -> str:
        # Resource name has the form "projects/<projectId>"
        return self.project.rsplit("/", 1)[-1]

    @property
    def label(self) -> str:
        return choice_label(self.project_id, self.display_name)


class ProjectInfo(_ApiModel):
    """Basic Cloud project information from the resource manager."""

    project_id: str
    project_number: str | None = None
    lifecycle_state: str | None = None
    name: str | None = None
    create_time: str | None = None
    parent: ParentResource | None = None

    def to_metadata(self) -> ProjectMetadata:
        return ProjectMetadata(
            project_id=self.project_id,
            project_number=self.project_number,
            display_name=self.name,
            name=f"projects/{self.project_id}",
            state=self.lifecycle_state,
        )


@dataclass
class ProjectPage(Generic[T]):
    """One page of a paginated list; ``next_page_token`` is None on the last page."""

    items: list[T] = field(default_factory=list)
    next_page_token: str | None = None


@dataclass(frozen=True)
class ProjectIdAvailability:
    is_available: bool
    suggested_project_id: str | None = None


def choice_label(project_id: str, display_name: str | None) -> str:
    return project_id + (f" ({display_name})" if display_name else "")
