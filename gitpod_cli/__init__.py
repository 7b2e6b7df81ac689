"""gitpod-cli: command-line client for Gitpod workspaces."""

__version__ = "0.1.0"
