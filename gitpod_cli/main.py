"""CLI entry point for the gitpod command-line client."""

from pathlib import Path

import click

from gitpod_cli import __version__
from gitpod_cli.cli.auth import auth_group
from gitpod_cli.cli.config import config_group
from gitpod_cli.cli.context import CLIContext, fail
from gitpod_cli.cli.workspace import workspace_group
from gitpod_cli.config.settings import CLISettings
from gitpod_cli.exceptions import ConfigurationError
from gitpod_cli.utils.logging_config import configure_logging


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the config file (default: ~/.gitpod/config.yaml)",
)
@click.option("--log-level", default=None, help="Logging level (default: WARNING)")
@click.version_option(__version__, prog_name="gitpod")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, log_level: str | None) -> None:
    """gitpod: command-line client for Gitpod workspaces."""
    try:
        settings = CLISettings.load(config_path=config_path, log_level=log_level)
    except ConfigurationError as e:
        fail(e)

    configure_logging(settings.log_level)
    ctx.obj = CLIContext.create(settings)


cli.add_command(auth_group)
cli.add_command(config_group)
cli.add_command(workspace_group)


if __name__ == "__main__":
    cli()
