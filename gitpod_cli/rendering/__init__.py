"""Output formatting for CLI commands."""

from gitpod_cli.rendering.workspaces import (
    build_workspace_table,
    format_relative_time,
    print_workspace_table,
    workspaces_to_json,
)

__all__ = ["build_workspace_table", "format_relative_time", "print_workspace_table", "workspaces_to_json"]
