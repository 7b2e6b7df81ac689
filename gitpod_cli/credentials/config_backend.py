"""Plain-text fallback backend storing the token in the user's config file.

Used when no system keyring is reachable. The secret sits unencrypted in
the config file (mode 0600), so callers can forbid this backend.
"""

import logging

from gitpod_cli.config.store import ConfigStore
from gitpod_cli.credentials.backend import CredentialLocation
from gitpod_cli.exceptions import CredentialError, GitpodCLIError

logger = logging.getLogger(__name__)


class ConfigFileBackend:
    """Credential storage inside the flat config file.

    ``(service, key)`` maps onto the config key ``<namespace>.<key>``; the
    service is ignored because the file belongs to a single CLI. With the
    default namespace the token lives under ``gitpod.token``.

    Example:
        >>> backend = ConfigFileBackend(store)
        >>> backend.set('gitpod-cli', 'token', 'gitpod_pat_abc123')
        >>> store.get('gitpod.token')
        'gitpod_pat_abc123'
    """

    def __init__(self, store: ConfigStore, namespace: str = "gitpod") -> None:
        self.store = store
        self.namespace = namespace

    @property
    def name(self) -> str:
        return "config"

    @property
    def location(self) -> CredentialLocation:
        return CredentialLocation.CONFIG_FILE

    @property
    def secure(self) -> bool:
        return False

    @property
    def available(self) -> bool:
        """The config file is always usable; write failures surface on ``set``."""
        return True

    def config_key(self, key: str) -> str:
        """Config key holding ``key``."""
        return f"{self.namespace}.{key}"

    def get(self, service: str, key: str) -> str | None:
        """Return the stored token, or None when the entry is empty or missing."""
        value = self._call(key, self.store.get, self.config_key(key))
        if not value:
            return None

        logger.debug(f"Retrieved credential from config file: {self.config_key(key)}")
        return value

    def set(self, service: str, key: str, value: str) -> None:
        """Write the token to the config file.

        Raises:
            CredentialError: If the config file cannot be written
        """
        if not value:
            raise ValueError("Credential value cannot be empty")

        self._call(key, self.store.set, self.config_key(key), value)
        logger.info(f"Stored credential in plain text: {self.store.path}")

    def delete(self, service: str, key: str) -> bool:
        """Remove the token entry from the config file."""
        deleted = self._call(key, self.store.delete, self.config_key(key))
        if deleted:
            logger.info(f"Deleted credential from config file: {self.config_key(key)}")
        return deleted

    def _call(self, key, operation, *args):
        """Run a store operation, re-raising store failures as credential errors."""
        try:
            return operation(*args)
        except GitpodCLIError as e:
            raise CredentialError(
                e.message,
                reference=f"@config:{self.store.path}#{self.config_key(key)}",
                suggestion=e.suggestion,
            ) from e
