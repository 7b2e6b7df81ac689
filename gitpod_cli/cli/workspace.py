"""CLI commands for Gitpod workspaces."""

import asyncio

import click
from rich.console import Console

from gitpod_cli.api.client import REJECTED_STATUS_CODES, create_client
from gitpod_cli.api.models import Workspace
from gitpod_cli.cli.context import CLIContext, fail, pass_cli_context
from gitpod_cli.exceptions import ExternalServiceError, GitpodCLIError, NotLoggedInError, VerificationError
from gitpod_cli.rendering.workspaces import build_workspace_table, print_workspace_table, workspaces_to_json


@click.group(name="workspace")
def workspace_group():
    """Manage workspaces."""
    pass


@workspace_group.command(name="list")
@click.option("--json", "json_output", is_flag=True, help="Print workspaces as a JSON array")
@pass_cli_context
def list_workspaces(cli_ctx: CLIContext, json_output: bool):
    """Lists workspaces."""
    try:
        credential = cli_ctx.resolver.resolve()
        if not credential.present:
            raise NotLoggedInError()

        workspaces = asyncio.run(_fetch(cli_ctx.host, credential.token, cli_ctx.settings.list_timeout))
    except VerificationError as e:
        click.echo("Logged in with invalid credentials. Please login again.", err=True)
        fail(e)
    except GitpodCLIError as e:
        fail(e)

    if json_output:
        click.echo(workspaces_to_json(workspaces))
        return

    print_workspace_table(Console(), build_workspace_table(workspaces))


async def _fetch(host: str, token: str, timeout: float) -> list[Workspace]:
    """List workspaces; a 401/403 is reported as rejected credentials."""
    async with create_client(host, token, timeout=timeout) as client:
        try:
            return await client.list_workspaces()
        except ExternalServiceError as e:
            if e.status_code in REJECTED_STATUS_CODES:
                raise VerificationError(
                    "Credentials were rejected by the server",
                    status_code=e.status_code,
                    suggestion="Log in again with: gitpod auth login <token>",
                ) from e
            raise
