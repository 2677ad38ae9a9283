"""Project commands.

list, show, create, add-firebase.
"""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from firebase_cli.client.errors import ConfigurationError, error_handler
from firebase_cli.commands._common import (
    FormatOpt,
    ProjectIdArg,
    get_store,
    make_projects_api,
    make_prompter,
)
from firebase_cli.management.prompts import (
    get_or_prompt_project,
    prompt_available_project_id,
    prompt_project_creation,
)
from firebase_cli.management.provision import (
    add_firebase_to_cloud_project_and_log,
    console_url,
    create_firebase_project_and_log,
)
from firebase_cli.models.project import ParentResource, ParentResourceType
from firebase_cli.output.formatter import output
from firebase_cli.output.status import log_warning, progress

app = typer.Typer(name="projects", help="List, create and select Firebase projects.")
console = Console()


@app.command("list")
@error_handler
def list_projects(fmt: FormatOpt = "table") -> None:
    """List all Firebase projects you have access to."""
    with make_projects_api(get_store()) as api:
        with progress("Preparing the list of your Firebase projects"):
            projects = api.list_firebase_projects()
    if not projects and fmt == "table":
        console.print("[yellow]No projects found.[/]")
        return
    columns = ["Project Display Name", "Project ID", "Project Number", "State"]
    rows = [
        [p.display_name, p.project_id, p.project_number, p.state]
        for p in projects
    ]
    output(projects, fmt, columns=columns, rows=rows, title="Firebase Projects")
    if fmt == "table":
        console.print(f"{len(projects)} project(s) total.")


@app.command()
@error_handler
def show(
    ctx: typer.Context,
    project_id: ProjectIdArg = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show a project, choosing it from a list when no ID is given."""
    prompter = make_prompter(ctx)
    with make_projects_api(get_store()) as api:
        project = get_or_prompt_project(api, prompter, project_id)
    output(project, fmt, title=f"Project: {project.project_id}")
    if fmt == "table":
        console.print(f"Console: {console_url(project.project_id)}", soft_wrap=True)


@app.command()
@error_handler
def create(
    ctx: typer.Context,
    project_id: ProjectIdArg = None,
    display_name: Annotated[
        str | None,
        typer.Option("--display-name", "-n", help="Display name (defaults to the project ID)"),
    ] = None,
    organization: Annotated[
        str | None,
        typer.Option("--organization", "-o", help="ID of the parent organization"),
    ] = None,
    folder: Annotated[
        str | None,
        typer.Option("--folder", help="ID of the parent folder"),
    ] = None,
) -> None:
    """Create a Google Cloud project and add Firebase resources to it."""
    if organization and folder:
        raise ConfigurationError(
            "Pass either --organization or --folder, not both."
        )
    parent = None
    if organization:
        parent = ParentResource(id=organization, type=ParentResourceType.ORGANIZATION)
    elif folder:
        parent = ParentResource(id=folder, type=ParentResourceType.FOLDER)

    prompter = make_prompter(ctx)
    with make_projects_api(get_store()) as api:
        project_id, display_name = prompt_project_creation(
            api, prompter, project_id, display_name,
        )
        create_firebase_project_and_log(
            api, project_id, display_name=display_name, parent_resource=parent,
        )


@app.command("add-firebase")
@error_handler
def add_firebase(
    ctx: typer.Context,
    project_id: ProjectIdArg = None,
) -> None:
    """Add Firebase resources to an existing Google Cloud project."""
    prompter = make_prompter(ctx)
    with make_projects_api(get_store()) as api:
        if not project_id:
            project_id = prompt_available_project_id(api, prompter)
        existing = api.check_firebase_enabled_for_cloud_project(project_id)
        if existing is not None:
            log_warning(f"Firebase is already enabled for project '{project_id}'.")
            return
        add_firebase_to_cloud_project_and_log(api, project_id)
