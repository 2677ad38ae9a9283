"""Firebase Management and Cloud Resource Manager calls for projects.

``ProjectsAPI`` wraps three explicitly constructed clients:

- ``firebase``: Firebase Management API, v1beta1 (list, get, addFirebase)
- ``firebase_v1``: Firebase Management API, v1 (project ID availability)
- ``resource_manager``: Cloud Resource Manager, v1 (create, basic project info)

Every failure that leaves this module is a ``FirebaseCLIError`` subclass with
the underlying error kept on ``.original``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import ValidationError

from firebase_cli.client.api import ApiClient
from firebase_cli.client.errors import (
    FirebaseCLIError,
    FirebaseEnableError,
    PaginationLimitError,
    ProjectCreationError,
    ProjectExistsError,
    ProjectIdCheckError,
    ProjectListError,
    ProjectLookupError,
    error_status,
)
from firebase_cli.client.operations import OperationPoller
from firebase_cli.config.constants import (
    CHECK_PROJECT_ID_TIMEOUT,
    CREATE_PROJECT_TIMEOUT,
    DEFAULT_TIMEOUT,
    MAX_LIST_PAGES,
    PROJECT_LIST_PAGE_SIZE,
)
from firebase_cli.models.project import (
    CloudProjectInfo,
    ParentResource,
    ProjectIdAvailability,
    ProjectInfo,
    ProjectMetadata,
    ProjectPage,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEBUG_HINT = "Run with --debug for more info."


class ProjectsAPI:
    """Project listing, lookup and provisioning."""

    def __init__(
        self,
        firebase: ApiClient,
        firebase_v1: ApiClient,
        resource_manager: ApiClient,
        *,
        poller_factory: Callable[[ApiClient], OperationPoller] = OperationPoller,
        max_pages: int = MAX_LIST_PAGES,
    ) -> None:
        self.firebase = firebase
        self.firebase_v1 = firebase_v1
        self.resource_manager = resource_manager
        self.poller_factory = poller_factory
        self.max_pages = max_pages

    def close(self) -> None:
        for client in (self.firebase, self.firebase_v1, self.resource_manager):
            client.close()

    def __enter__(self) -> ProjectsAPI:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # Pagination

    def get_project_page(
        self,
        resource: str,
        response_key: str,
        page_size: int,
        page_token: str | None = None,
    ) -> ProjectPage[dict[str, Any]]:
        """Fetch exactly one page of ``resource``; items live under ``response_key``."""
        if page_size < 1:
            raise ValueError(f"page_size must be a positive integer, got {page_size}")
        params = {"pageSize": str(page_size)}
        if page_token:
            params["pageToken"] = page_token
        body = self.firebase.get_json(resource, params=params, timeout=DEFAULT_TIMEOUT)
        if not isinstance(body, dict):
            body = {}
        items = body.get(response_key)
        token = body.get("nextPageToken")
        return ProjectPage(
            items=[item for item in items if item] if isinstance(items, list) else [],
            next_page_token=token if isinstance(token, str) and token else None,
        )

    def _typed_page(
        self,
        resource: str,
        response_key: str,
        model: Callable[..., T],
        error_message: str,
        page_size: int,
        page_token: str | None,
    ) -> ProjectPage[T]:
        try:
            page = self.get_project_page(resource, response_key, page_size, page_token)
            items = [model(**item) for item in page.items]
        except (FirebaseCLIError, ValidationError, TypeError) as exc:
            logger.debug("%s: %s", error_message, exc)
            raise ProjectListError(f"{error_message} {DEBUG_HINT}", original=exc) from exc
        return ProjectPage(items=items, next_page_token=page.next_page_token)

    def get_firebase_project_page(
        self,
        page_size: int = PROJECT_LIST_PAGE_SIZE,
        page_token: str | None = None,
    ) -> ProjectPage[ProjectMetadata]:
        return self._typed_page(
            "/projects",
            "results",
            ProjectMetadata,
            "Failed to list Firebase projects.",
            page_size,
            page_token,
        )

    def get_available_cloud_project_page(
        self,
        page_size: int = PROJECT_LIST_PAGE_SIZE,
        page_token: str | None = None,
    ) -> ProjectPage[CloudProjectInfo]:
        return self._typed_page(
            "/availableProjects",
            "projectInfo",
            CloudProjectInfo,
            "Failed to list available Google Cloud Platform projects.",
            page_size,
            page_token,
        )

    def list_firebase_projects(self, page_size: int | None = None) -> list[ProjectMetadata]:
        """Read every page of Firebase projects, in server order.

        Stops when a page comes back without a continuation token; raises
        PaginationLimitError after ``max_pages`` pages.
        """
        size = page_size or PROJECT_LIST_PAGE_SIZE
        projects: list[ProjectMetadata] = []
        token: str | None = None
        for _ in range(self.max_pages):
            page = self.get_firebase_project_page(size, token)
            projects.extend(page.items)
            token = page.next_page_token
            if token is None:
                return projects
        raise PaginationLimitError(
            f"Stopped listing Firebase projects after {self.max_pages} pages; "
            "the server kept returning more."
        )

    # Lookup

    def get_firebase_project(self, project_id: str) -> ProjectMetadata:
        """Fetch a Firebase project, falling back to basic Cloud info on 404."""
        try:
            body = self.firebase.get_json(f"/projects/{project_id}", timeout=DEFAULT_TIMEOUT)
            return ProjectMetadata(**body)
        except (FirebaseCLIError, ValidationError) as exc:
            if error_status(exc) == 404:
                logger.debug(
                    "Couldn't get project info from Firebase for %s, trying resource manager: %s",
                    project_id,
                    exc,
                )
                try:
                    return self.get_project(project_id).to_metadata()
                except (FirebaseCLIError, ValidationError) as fallback_exc:
                    logger.debug(
                        "Unable to get project info from resource manager for %s: %s",
                        project_id,
                        fallback_exc,
                    )
            message = str(exc)
            original = getattr(exc, "original", None)
            if original is not None:
                message += f" (original: {original})"
            logger.debug(message)
            raise ProjectLookupError(
                f"Failed to get Firebase project {project_id}. "
                "Please make sure the project exists and your account has permission to access it.",
                original=exc,
            ) from exc

    def get_project(self, project_id: str) -> ProjectInfo:
        """Basic information about any Cloud project, Firebase or not."""
        body = self.resource_manager.get_json(f"/projects/{project_id}")
        return ProjectInfo(**body)

    def check_firebase_enabled_for_cloud_project(self, project_id: str) -> ProjectMetadata | None:
        """Return the Firebase metadata, or None when Firebase is not enabled."""
        try:
            body = self.firebase.get_json(f"/projects/{project_id}", timeout=DEFAULT_TIMEOUT)
            return ProjectMetadata(**body)
        except (FirebaseCLIError, ValidationError) as exc:
            if error_status(exc) == 404:
                return None
            logger.debug("%s", exc)
            raise ProjectLookupError(
                f"Failed to check if Firebase is enabled for project {project_id}. "
                "Please make sure the project exists and your account has permission to access it.",
                original=exc,
            ) from exc

    def check_and_recommend_project_id(self, project_id: str) -> ProjectIdAvailability:
        try:
            body = self.firebase_v1.post_json(
                "/projects:checkProjectId",
                json={"proposedId": project_id},
                timeout=CHECK_PROJECT_ID_TIMEOUT,
            )
        except FirebaseCLIError as exc:
            raise ProjectIdCheckError(
                f"Failed to check if project ID is available. {DEBUG_HINT}",
                original=exc,
            ) from exc
        if not isinstance(body, dict):
            raise ProjectIdCheckError(
                f"Failed to check if project ID is available. {DEBUG_HINT}",
            )
        return ProjectIdAvailability(
            is_available=body.get("projectIdStatus") == "PROJECT_ID_AVAILABLE",
            suggested_project_id=body.get("suggestedProjectId") or None,
        )

    # Provisioning

    def create_cloud_project(
        self,
        project_id: str,
        display_name: str | None = None,
        parent_resource: ParentResource | None = None,
    ) -> Any:
        """Create a Cloud project and wait for the creation operation."""
        body: dict[str, Any] = {"projectId": project_id, "name": display_name or project_id}
        if parent_resource is not None:
            body["parent"] = parent_resource.model_dump(mode="json")
        try:
            operation = self.resource_manager.post_json(
                "/projects", json=body, timeout=CREATE_PROJECT_TIMEOUT,
            )
            return self.poller_factory(self.resource_manager).poll(
                operation["name"], poller_name="Project Creation Poller",
            )
        except (FirebaseCLIError, KeyError, TypeError) as exc:
            if error_status(exc) == 409:
                raise ProjectExistsError(
                    "Failed to create project because there is already a project "
                    f"with ID {project_id}. Please try again with a unique project ID.",
                    original=exc,
                ) from exc
            raise ProjectCreationError(
                f"Failed to create project. {DEBUG_HINT}", original=exc,
            ) from exc

    def add_firebase_to_cloud_project(self, project_id: str) -> ProjectMetadata:
        """Add Firebase resources to an existing Cloud project."""
        try:
            operation = self.firebase.post_json(
                f"/projects/{project_id}:addFirebase", timeout=CREATE_PROJECT_TIMEOUT,
            )
            payload = self.poller_factory(self.firebase).poll(
                operation["name"], poller_name="Add Firebase Poller",
            )
            return ProjectMetadata(**payload)
        except (FirebaseCLIError, KeyError, TypeError, ValidationError) as exc:
            logger.debug("%s", exc)
            raise FirebaseEnableError(
                f"Failed to add Firebase to Google Cloud Platform project. {DEBUG_HINT}",
                original=exc,
            ) from exc
