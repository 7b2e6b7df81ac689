"""CLI commands for the gitpod command-line client.

The CLI is built using Click with the entry point ``gitpod``.

Key Commands:
    auth (gitpod_cli.cli.auth):
        login, logout and status for the personal access token.

    config (gitpod_cli.cli.config):
        get and set values in the local config file.

    workspace (gitpod_cli.cli.workspace):
        list workspaces as a table or JSON.

Usage Examples:
    $ gitpod auth login <token>
    $ gitpod config set host gitpod.example.com
    $ gitpod workspace list --json
"""

from gitpod_cli.cli.auth import auth_group
from gitpod_cli.cli.config import config_group
from gitpod_cli.cli.workspace import workspace_group

__all__ = ["auth_group", "config_group", "workspace_group"]
