"""Configuration for the gitpod CLI.

Key Components:
    - CLISettings: process-level settings loaded from ``GITPOD_*`` environment variables
    - ConfigStore: the user's flat key/value config file (``host``, ``gitpod.token``, ...)

Example:
    >>> from gitpod_cli.config import CLISettings, ConfigStore
    >>> settings = CLISettings.load()
    >>> store = ConfigStore(settings.config_path)
    >>> store.get("gitpod.token")
    ''
"""

from gitpod_cli.config.settings import CLISettings
from gitpod_cli.config.store import ConfigStore

__all__ = ["CLISettings", "ConfigStore"]
