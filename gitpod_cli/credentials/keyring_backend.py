"""OS-level keyring backend using system credential stores.

Platform Support:
- Linux: Secret Service API (GNOME Keyring, KWallet)
- macOS: Keychain
- Windows: Windows Credential Locker

Headless machines and CI runners usually have no reachable backend; the
keyring library then selects its ``fail`` backend and this store reports
itself as unavailable.
"""

import logging
from typing import cast

import keyring
from keyring.backends import fail
from keyring.errors import (
    InitError,
    KeyringError,
    KeyringLocked,
    NoKeyringError,
    PasswordDeleteError,
    PasswordSetError,
)

from gitpod_cli.credentials.backend import CredentialLocation
from gitpod_cli.exceptions import BackendAccessDeniedError, BackendNotAvailableError, CredentialError

logger = logging.getLogger(__name__)

UNAVAILABLE_SUGGESTION = (
    "No system keyring is reachable (common on headless or CI machines).\n"
    "Start a Secret Service daemon, or allow the plain-text config file fallback."
)


class KeyringBackend:
    """OS-level credential storage using system keyring.

    The recommended backend: secrets are encrypted by the operating system
    and never touch the config file.

    Example:
        >>> backend = KeyringBackend()
        >>> backend.set('gitpod-cli', 'token', 'gitpod_pat_abc123')
        >>> token = backend.get('gitpod-cli', 'token')
        >>> backend.delete('gitpod-cli', 'token')
    """

    @property
    def name(self) -> str:
        """Get backend identifier.

        Returns:
            Backend name constant "keyring"
        """
        return "keyring"

    @property
    def location(self) -> CredentialLocation:
        return CredentialLocation.SECURE_STORE

    @property
    def secure(self) -> bool:
        return True

    @property
    def available(self) -> bool:
        """Check if keyring is available.

        Returns False if:
        - Only the ``fail`` backend is configured (headless systems)
        - Backend fails to initialize
        """
        try:
            backend = keyring.get_keyring()
        except Exception as e:
            logger.debug(f"Keyring not available: {e}")
            return False

        return not isinstance(backend, fail.Keyring)

    def get(self, service: str, key: str) -> str | None:
        """Retrieve credential from OS keyring.

        Args:
            service: Service identifier (e.g., 'gitpod-cli')
            key: Account within service (e.g., 'token')

        Returns:
            Credential value or None if not found

        Raises:
            BackendNotAvailableError: If keyring is not available
            BackendAccessDeniedError: If the keyring is locked
            CredentialError: If keyring operation fails
        """
        self._require_available(service, key)

        try:
            credential = cast(str | None, keyring.get_password(service, key))
        except KeyringError as e:
            raise self._translate(e, "Keyring operation failed", service, key) from e

        if credential is not None:
            logger.debug(f"Retrieved credential from keyring: {service}/{key}")

        return credential

    def set(self, service: str, key: str, value: str) -> None:
        """Store credential in OS keyring.

        Args:
            service: Service identifier
            key: Account within service
            value: Credential value

        Raises:
            BackendNotAvailableError: If keyring is not available
            BackendAccessDeniedError: If the keyring refuses the write
            CredentialError: If keyring operation fails
        """
        if not value:
            raise ValueError("Credential value cannot be empty")

        self._require_available(service, key)

        try:
            keyring.set_password(service, key, value)
        except KeyringError as e:
            raise self._translate(e, "Failed to store credential", service, key) from e

        logger.info(f"Stored credential in keyring: {service}/{key}")

    def delete(self, service: str, key: str) -> bool:
        """Delete credential from OS keyring.

        Returns:
            True if deleted, False if not found

        Raises:
            BackendNotAvailableError: If keyring is not available
            CredentialError: If keyring operation fails
        """
        self._require_available(service, key)

        try:
            keyring.delete_password(service, key)
        except PasswordDeleteError:
            # Credential doesn't exist - not an error
            return False
        except KeyringError as e:
            raise self._translate(e, "Failed to delete credential", service, key) from e

        logger.info(f"Deleted credential from keyring: {service}/{key}")
        return True

    def _require_available(self, service: str, key: str) -> None:
        if not self.available:
            raise BackendNotAvailableError(
                "Keyring backend is not available",
                reference=f"@keyring:{service}/{key}",
                suggestion=UNAVAILABLE_SUGGESTION,
            )

    @staticmethod
    def _translate(error: KeyringError, prefix: str, service: str, key: str) -> CredentialError:
        """Map a keyring library error onto the credential error taxonomy."""
        reference = f"@keyring:{service}/{key}"
        message = f"{prefix}: {error}"

        if isinstance(error, NoKeyringError):
            return BackendNotAvailableError(message, reference=reference, suggestion=UNAVAILABLE_SUGGESTION)
        if isinstance(error, (KeyringLocked, InitError, PasswordSetError)):
            return BackendAccessDeniedError(
                message,
                reference=reference,
                suggestion="Unlock your keyring or grant this terminal access to it",
            )
        return CredentialError(message, reference=reference)
