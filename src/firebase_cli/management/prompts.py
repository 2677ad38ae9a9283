"""Interactive project selection and creation prompts."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from firebase_cli.client.errors import FirebaseCLIError, UnexpectedError
from firebase_cli.config.constants import (
    DISPLAY_NAME_MAX_LENGTH,
    DISPLAY_NAME_MIN_LENGTH,
    MAXIMUM_PROMPT_LIST,
    PROJECT_ID_MAX_LENGTH,
    PROJECT_ID_MIN_LENGTH,
    SCROLL_HINT_THRESHOLD,
)
from firebase_cli.management.projects import ProjectsAPI
from firebase_cli.models.project import ProjectMetadata
from firebase_cli.output.status import log_bullet
from firebase_cli.utils.prompt import Choice, Prompter

logger = logging.getLogger(__name__)


def sorted_choices(labelled: Sequence[tuple[str, str]]) -> list[Choice]:
    """Build menu choices from (label, value) pairs, sorted case-insensitively."""
    choices = [Choice(name=label, value=value) for label, value in labelled]
    return sorted(choices, key=lambda c: (c.name.casefold(), c.name))


def validate_project_id(api: ProjectsAPI, project_id: str) -> str | None:
    """Return an error message for ``project_id``, or None if it may be used.

    The availability check is a convenience only: if it fails, the ID is
    accepted and the server has the final word at creation time.
    """
    if len(project_id) < PROJECT_ID_MIN_LENGTH:
        return f"Project ID must be at least {PROJECT_ID_MIN_LENGTH} characters long"
    if len(project_id) > PROJECT_ID_MAX_LENGTH:
        return f"Project ID cannot be longer than {PROJECT_ID_MAX_LENGTH} characters"
    try:
        availability = api.check_and_recommend_project_id(project_id)
    except FirebaseCLIError as exc:
        logger.debug(
            "Couldn't check if project ID %s is available. Original error: %s", project_id, exc,
        )
        return None
    if not availability.is_available and availability.suggested_project_id:
        return (
            "Project ID is taken or unavailable. "
            f"Try {availability.suggested_project_id}."
        )
    return None


def validate_display_name(display_name: str) -> str | None:
    if len(display_name) < DISPLAY_NAME_MIN_LENGTH:
        return f"Project name must be at least {DISPLAY_NAME_MIN_LENGTH} characters long"
    if len(display_name) > DISPLAY_NAME_MAX_LENGTH:
        return f"Project name cannot be longer than {DISPLAY_NAME_MAX_LENGTH} characters"
    return None


def prompt_project_creation(
    api: ProjectsAPI,
    prompter: Prompter,
    project_id: str | None = None,
    display_name: str | None = None,
) -> tuple[str, str]:
    """Ask for a new project's ID and display name; given values skip their prompt."""
    if project_id is None:
        project_id = prompter.text(
            "Please specify a unique project id "
            "([yellow]warning[/]: cannot be modified afterward) "
            f"[{PROJECT_ID_MIN_LENGTH}-{PROJECT_ID_MAX_LENGTH} characters]",
            validate=lambda value: validate_project_id(api, value),
        )
    if display_name is None:
        display_name = prompter.text(
            "What would you like to call your project? (defaults to your project ID)",
            default=project_id,
            validate=validate_display_name,
        )
    return project_id, display_name


def get_or_prompt_project(
    api: ProjectsAPI,
    prompter: Prompter,
    project_id: str | None = None,
) -> ProjectMetadata:
    """Get the user's desired project, prompting if necessary."""
    if project_id:
        return api.get_firebase_project(project_id)
    return select_project_interactively(api, prompter)


def select_project_interactively(
    api: ProjectsAPI,
    prompter: Prompter,
    page_size: int = MAXIMUM_PROMPT_LIST,
) -> ProjectMetadata:
    page = api.get_firebase_project_page(page_size)
    if not page.items:
        raise FirebaseCLIError("There are no Firebase projects associated with this account.")
    if page.next_page_token:
        # Too many to list in one menu
        logger.debug("Found more than %d projects, selecting via prompt", len(page.items))
        return select_project_by_prompting(api, prompter)
    return select_project_from_list(prompter, page.items)


def select_project_by_prompting(api: ProjectsAPI, prompter: Prompter) -> ProjectMetadata:
    project_id = prompter.text("Please input the project ID you would like to use")
    return api.get_firebase_project(project_id)


def select_project_from_list(
    prompter: Prompter,
    projects: Sequence[ProjectMetadata],
) -> ProjectMetadata:
    """Present a menu of projects and return the chosen record."""
    choices = sorted_choices([(p.label, p.project_id) for p in projects if p])
    if len(choices) >= SCROLL_HINT_THRESHOLD:
        log_bullet(
            "Don't want to scroll through all your projects? If you know your project ID, "
            "you can pass it directly, e.g. [bold]firebase projects show <project_id>[/].\n"
        )
    project_id = prompter.select("Select a default Firebase project for this directory:", choices)
    for project in projects:
        if project.project_id == project_id:
            return project
    raise UnexpectedError("Unexpected error. Project does not exist")


def prompt_available_project_id(api: ProjectsAPI, prompter: Prompter) -> str:
    """Pick a Cloud project that Firebase can be added to."""
    page = api.get_available_cloud_project_page(MAXIMUM_PROMPT_LIST)
    if not page.items:
        raise FirebaseCLIError(
            "There are no available Google Cloud projects to add Firebase services."
        )
    if page.next_page_token:
        return prompter.text(
            "Please input the ID of the Google Cloud Project you would like to add Firebase"
        )
    choices = sorted_choices([(p.label, p.project_id) for p in page.items])
    return prompter.select(
        "Select the Google Cloud Platform project you would like to add Firebase:", choices,
    )
