"""CLI commands for authentication.

This module provides the ``gitpod auth`` command group.

The personal access token is stored in the OS keyring (macOS Keychain,
GNOME Keyring, Windows Credential Manager) when one is reachable. On
headless systems it falls back to the plain-text config file unless
``--prevent-plain`` is given.

Commands:
    - login: Verify and store a personal access token
    - logout: Remove the stored token from every backend
    - status: Show whether a valid token is stored

Example:
    $ gitpod auth login gitpod_pat_abc123
    $ gitpod auth status
    $ gitpod auth logout
"""

import asyncio

import click

from gitpod_cli.api.client import create_client
from gitpod_cli.cli.context import CLIContext, fail, pass_cli_context
from gitpod_cli.credentials import CredentialLocation
from gitpod_cli.exceptions import (
    CredentialPersistenceError,
    GitpodCLIError,
    VerificationError,
)
from gitpod_cli.utils.logging_config import get_logger

log = get_logger(__name__)


@click.group(name="auth")
def auth_group():
    """Manage authentication.

    Examples:

        # Log in with a personal access token
        gitpod auth login <token>

        # Never write the token to the plain-text config file
        gitpod auth login <token> --prevent-plain

        # Check the stored token
        gitpod auth status
    """
    pass


@auth_group.command(name="login")
@click.argument("token")
@click.option("--no-verify", "-n", is_flag=True, help="Skip verification of credentials")
@click.option(
    "--prevent-plain",
    "-p",
    is_flag=True,
    help="Prevent storing the token in plain text to the config file",
)
@pass_cli_context
def login(cli_ctx: CLIContext, token: str, no_verify: bool, prevent_plain: bool):
    """Log in to the CLI with a personal access token.

    The token is verified against the configured host before it is stored,
    unless --no-verify is given.
    """
    if not token.strip():
        raise click.BadParameter("token must not be empty", param_hint="TOKEN")

    host = _host_or_fail(cli_ctx)

    try:
        if not no_verify:
            asyncio.run(_verify(host, token, cli_ctx.settings.auth_timeout))

        location = cli_ctx.resolver.store(token, allow_plaintext=not prevent_plain)

    except VerificationError as e:
        click.echo(f"Credentials are invalid for {host}", err=True)
        click.echo("Please check your token and try again", err=True)
        log.debug("login_rejected", host=host, status_code=e.status_code)
        fail(e)
    except CredentialPersistenceError as e:
        click.echo("Could not save token to keyring or config file", err=True)
        fail(e)
    except GitpodCLIError as e:
        fail(e)

    if location is CredentialLocation.CONFIG_FILE:
        click.echo(
            click.style(
                f"Saved token to config file because keyring was not available: {cli_ctx.config_store.path}",
                fg="yellow",
            )
        )
    else:
        click.echo(f"Saved token to {location.description}")

    log.info("login_succeeded", host=host, location=str(location), verified=not no_verify)
    click.echo(click.style(f"Successfully logged in to {host}", fg="green"))


@auth_group.command(name="logout")
@pass_cli_context
def logout(cli_ctx: CLIContext):
    """Log out by removing the stored token from every backend."""
    try:
        removed = cli_ctx.resolver.clear()
    except CredentialPersistenceError as e:
        click.echo("Could not remove the stored token everywhere", err=True)
        fail(e)

    if not removed:
        click.echo("Not logged in")
        return

    locations = ", ".join(location.description for location in removed)
    log.info("logout_succeeded", removed=[str(location) for location in removed])
    click.echo(click.style(f"Logged out; removed token from {locations}", fg="green"))


@auth_group.command(name="status")
@pass_cli_context
def status(cli_ctx: CLIContext):
    """Query the current auth status.

    Prints "Not logged in" without contacting the server when no token is
    stored.
    """
    try:
        credential = cli_ctx.resolver.resolve()
    except GitpodCLIError as e:
        fail(e)

    if not credential.present:
        click.echo("Not logged in")
        return

    host = _host_or_fail(cli_ctx)

    try:
        asyncio.run(_verify(host, credential.token, cli_ctx.settings.auth_timeout))
    except VerificationError as e:
        click.echo("Logged in with invalid credentials. Please login again.")
        fail(e)
    except GitpodCLIError as e:
        fail(e)

    click.echo(f"Logged in to {host}")
    click.echo(f"Token stored in {credential.location.description}")


def _host_or_fail(cli_ctx: CLIContext) -> str:
    try:
        return cli_ctx.host
    except GitpodCLIError as e:
        fail(e)


async def _verify(host: str, token: str, timeout: float) -> None:
    """Check ``token`` against ``host`` with a lightweight authenticated call."""
    async with create_client(host, token, timeout=timeout) as client:
        await client.verify()
