"""Abstract backend protocol for credential storage."""

from enum import Enum
from typing import Protocol


class CredentialLocation(str, Enum):
    """Where the active token lives.

    Derived at read time by probing backends in priority order; never persisted.
    """

    SECURE_STORE = "keyring"
    CONFIG_FILE = "config"
    ABSENT = "absent"

    def __str__(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        """Human-readable name for CLI output."""
        return {
            CredentialLocation.SECURE_STORE: "system keyring",
            CredentialLocation.CONFIG_FILE: "config file (plain text)",
            CredentialLocation.ABSENT: "nowhere",
        }[self]


class CredentialBackend(Protocol):
    """Protocol defining the interface for credential storage backends.

    All backends must implement these methods to be compatible
    with the CredentialResolver.
    """

    @property
    def name(self) -> str:
        """Backend identifier (e.g., 'keyring', 'config')."""
        ...

    @property
    def location(self) -> CredentialLocation:
        """Location reported to the user when this backend holds the token."""
        ...

    @property
    def secure(self) -> bool:
        """False if the backend stores the secret in plain text."""
        ...

    @property
    def available(self) -> bool:
        """Check if this backend is available on the current system."""
        ...

    def get(self, service: str, key: str) -> str | None:
        """Retrieve a credential.

        Args:
            service: Service identifier (e.g., 'gitpod-cli')
            key: Key within the service (e.g., 'token')

        Returns:
            Credential value or None if not found

        Raises:
            BackendNotAvailableError: If backend is not available
        """
        ...

    def set(self, service: str, key: str, value: str) -> None:
        """Store a credential.

        Raises:
            BackendNotAvailableError: If backend is not available
            BackendAccessDeniedError: If the backend refuses access
        """
        ...

    def delete(self, service: str, key: str) -> bool:
        """Delete a credential.

        Returns:
            True if credential was deleted, False if not found

        Raises:
            BackendNotAvailableError: If backend is not available
        """
        ...
