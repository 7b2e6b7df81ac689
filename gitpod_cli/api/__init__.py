"""Client for the Gitpod public API."""

from gitpod_cli.api.client import GitpodClient, api_base_url, create_client
from gitpod_cli.api.models import Workspace, WorkspacePhase, phase_display_name

__all__ = [
    "GitpodClient",
    "Workspace",
    "WorkspacePhase",
    "api_base_url",
    "create_client",
    "phase_display_name",
]
