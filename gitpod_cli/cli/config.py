"""CLI commands for the local configuration file.

Commands:
    - set: Update a configuration option
    - get: Print a configuration option (empty line when unset)
"""

import click

from gitpod_cli.cli.context import CLIContext, fail, pass_cli_context
from gitpod_cli.exceptions import GitpodCLIError


@click.group(name="config")
def config_group():
    """Change the configuration of the CLI.

    Examples:

        gitpod config set host gitpod.example.com

        gitpod config get host
    """
    pass


@config_group.command(name="set")
@click.argument("key")
@click.argument("value")
@pass_cli_context
def set_option(cli_ctx: CLIContext, key: str, value: str):
    """Update a configuration option."""
    try:
        cli_ctx.config_store.set(key, value)
    except GitpodCLIError as e:
        fail(e)


@config_group.command(name="get")
@click.argument("key")
@pass_cli_context
def get_option(cli_ctx: CLIContext, key: str):
    """Get a configuration option."""
    try:
        value = cli_ctx.config_store.get(key)
    except GitpodCLIError as e:
        fail(e)

    click.echo(value)
