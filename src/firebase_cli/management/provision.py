"""Create a Cloud project and add Firebase to it, reporting progress."""

from __future__ import annotations

import sys

from firebase_cli.config.constants import CONSOLE_ORIGIN
from firebase_cli.management.projects import ProjectsAPI
from firebase_cli.models.project import ParentResource, ProjectMetadata
from firebase_cli.output.formatter import console
from firebase_cli.output.status import progress


def console_url(project_id: str) -> str:
    return f"{CONSOLE_ORIGIN}/project/{project_id}/overview"


def create_firebase_project_and_log(
    api: ProjectsAPI,
    project_id: str,
    *,
    display_name: str | None = None,
    parent_resource: ParentResource | None = None,
) -> ProjectMetadata:
    """Create a Cloud project, then add Firebase resources to it.

    If the second phase fails the Cloud project already exists; only
    ``add_firebase_to_cloud_project_and_log`` needs to be re-run.
    """
    with progress("Creating Google Cloud Platform project"):
        api.create_cloud_project(project_id, display_name, parent_resource)
    return add_firebase_to_cloud_project_and_log(api, project_id)


def add_firebase_to_cloud_project_and_log(api: ProjectsAPI, project_id: str) -> ProjectMetadata:
    with progress("Adding Firebase resources to Google Cloud Platform project"):
        project = api.add_firebase_to_cloud_project(project_id)
    log_new_firebase_project_info(project)
    return project


def log_new_firebase_project_info(project: ProjectMetadata) -> None:
    console.print()
    if sys.platform == "win32":
        console.print("=== Your Firebase project is ready! ===")
    else:
        console.print("🎉🎉🎉 Your Firebase project is ready! 🎉🎉🎉")
    console.print()
    console.print("Project information:")
    console.print(f"   - Project ID: [bold]{project.project_id}[/]")
    if project.display_name:
        console.print(f"   - Project Name: [bold]{project.display_name}[/]")
    console.print()
    console.print("Firebase console is available at")
    console.print(console_url(project.project_id), soft_wrap=True)
