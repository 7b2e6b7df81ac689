"""Per-invocation state shared by CLI commands through ``click.Context.obj``."""

import sys
from dataclasses import dataclass, field
from typing import NoReturn

import click

from gitpod_cli.config.settings import CLISettings, normalize_host
from gitpod_cli.config.store import ConfigStore
from gitpod_cli.credentials.resolver import CredentialResolver
from gitpod_cli.exceptions import GitpodCLIError


@dataclass
class CLIContext:
    """Explicit configuration handle created once per process.

    Attributes:
        settings: Process-level settings
        config_store: The user's config file
    """

    settings: CLISettings
    config_store: ConfigStore
    _resolver: CredentialResolver | None = field(default=None, repr=False)

    @classmethod
    def create(cls, settings: CLISettings) -> "CLIContext":
        return cls(settings=settings, config_store=ConfigStore(settings.config_path))

    @property
    def resolver(self) -> CredentialResolver:
        """Credential resolver over the keyring and this invocation's config file."""
        if self._resolver is None:
            self._resolver = CredentialResolver.default(self.config_store)
        return self._resolver

    @property
    def host(self) -> str:
        """Gitpod host from the config file, falling back to settings."""
        return normalize_host(self.config_store.get("host")) or self.settings.host


pass_cli_context = click.make_pass_decorator(CLIContext)


def fail(error: GitpodCLIError) -> NoReturn:
    """Report ``error`` on stderr and exit with status 1."""
    click.echo(click.style(f"Error: {error.message}", fg="red"), err=True)
    if error.suggestion:
        click.echo(click.style(f"Suggestion: {error.suggestion}", fg="yellow"), err=True)
    sys.exit(1)
