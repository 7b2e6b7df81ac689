"""Credential resolution and persistence policy over ordered backends.

The resolver owns a single rule set for the auth token:

- write: the first permitted backend that accepts the token wins
- read: the first backend that yields a token wins
- delete: every backend is cleared so no stale copy can be resurrected

Backends are ordered by preference, most secure first. The default order
is the system keyring followed by the plain-text config file.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from gitpod_cli.config.store import ConfigStore
from gitpod_cli.credentials.backend import CredentialBackend, CredentialLocation
from gitpod_cli.credentials.config_backend import ConfigFileBackend
from gitpod_cli.credentials.keyring_backend import KeyringBackend
from gitpod_cli.exceptions import (
    BackendNotAvailableError,
    CredentialError,
    CredentialPersistenceError,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "gitpod-cli"
ACCOUNT_NAME = "token"


@dataclass(frozen=True)
class ResolvedCredential:
    """Result of the read policy.

    Attributes:
        token: The active token, or None when not logged in
        location: Backend that supplied the token
    """

    token: str | None
    location: CredentialLocation

    @property
    def present(self) -> bool:
        return self.token is not None


ABSENT = ResolvedCredential(token=None, location=CredentialLocation.ABSENT)


class CredentialResolver:
    """Read, write and delete the auth token across ordered backends.

    Example:
        >>> resolver = CredentialResolver.default(config_store)
        >>> resolver.store("gitpod_pat_abc123")
        <CredentialLocation.SECURE_STORE: 'keyring'>
        >>> resolver.resolve().token
        'gitpod_pat_abc123'
        >>> resolver.clear()
        [<CredentialLocation.SECURE_STORE: 'keyring'>]
    """

    def __init__(
        self,
        backends: Sequence[CredentialBackend],
        service: str = SERVICE_NAME,
        account: str = ACCOUNT_NAME,
    ) -> None:
        """Initialize credential resolver.

        Args:
            backends: Backends in priority order. Converted to a tuple for
                immutability.
            service: Service identifier the token is stored under
            account: Account identifier the token is stored under
        """
        if not backends:
            raise ValueError("At least one credential backend is required")

        self._backends: tuple[CredentialBackend, ...] = tuple(backends)
        self.service = service
        self.account = account

    @classmethod
    def default(cls, config_store: ConfigStore) -> "CredentialResolver":
        """Resolver over the system keyring, falling back to ``config_store``."""
        return cls([KeyringBackend(), ConfigFileBackend(config_store)])

    @property
    def backends(self) -> tuple[CredentialBackend, ...]:
        """Active backends in resolution order."""
        return self._backends

    @property
    def reference(self) -> str:
        return f"{self.service}/{self.account}"

    def store(self, token: str, allow_plaintext: bool = True) -> CredentialLocation:
        """Persist ``token`` in the most preferred backend that accepts it.

        Only one backend is written. When the keyring accepts the token the
        config file is left untouched.

        Args:
            token: Token to persist
            allow_plaintext: If False, backends that store plain text are
                never written

        Returns:
            Location now holding the token

        Raises:
            ValueError: If ``token`` is empty
            CredentialPersistenceError: If no permitted backend accepted the token
        """
        if not token:
            raise ValueError("Credential value cannot be empty")

        failures: dict[str, Exception] = {}
        skipped: list[str] = []

        for backend in self.backends:
            if not backend.secure and not allow_plaintext:
                skipped.append(backend.name)
                logger.debug(f"Skipping plain-text backend: {backend.name}")
                continue

            try:
                backend.set(self.service, self.account, token)
            except CredentialError as e:
                failures[backend.name] = e
                logger.debug(f"Backend {backend.name} rejected credential: {e.message}")
                continue

            if failures:
                logger.warning(
                    f"Stored credential in {backend.name} after failures in: {', '.join(failures)}"
                )
            return backend.location

        if skipped:
            message = "Could not store credential securely and plain-text storage is not allowed"
            suggestion = "Make a system keyring available, or log in without --prevent-plain"
        else:
            message = "Could not store credential in any backend"
            suggestion = _first_suggestion(failures) or "Check keyring availability and config file permissions"

        raise CredentialPersistenceError(
            _with_failures(message, failures),
            failures=failures,
            suggestion=suggestion,
        )

    def resolve(self) -> ResolvedCredential:
        """Return the active token and where it came from.

        Unavailable backends are skipped, and so is a failing backend while
        a later one remains to fall back to. An absent token is a normal
        result, not an error.

        Raises:
            CredentialError: If the last backend fails to read
        """
        last = len(self.backends) - 1
        for index, backend in enumerate(self.backends):
            if not backend.available:
                logger.debug(f"Backend not available, skipping: {backend.name}")
                continue

            try:
                token = backend.get(self.service, self.account)
            except CredentialError as e:
                if index == last:
                    raise
                logger.debug(f"Backend {backend.name} failed to read credential: {e.message}")
                continue

            if token:
                logger.debug(f"Resolved credential from {backend.name}: {self.reference}")
                return ResolvedCredential(token=token, location=backend.location)

        return ABSENT

    def clear(self) -> list[CredentialLocation]:
        """Remove the token from every backend.

        A failing backend does not stop the others from being cleared.

        Returns:
            Locations that held a copy of the token

        Raises:
            CredentialPersistenceError: If any available backend failed to delete
        """
        removed: list[CredentialLocation] = []
        failures: dict[str, Exception] = {}

        for backend in self.backends:
            if not backend.available:
                logger.debug(f"Backend not available, nothing to clear: {backend.name}")
                continue

            try:
                if backend.delete(self.service, self.account):
                    removed.append(backend.location)
            except BackendNotAvailableError as e:
                logger.debug(f"Backend became unavailable: {backend.name}: {e.message}")
            except CredentialError as e:
                failures[backend.name] = e

        if failures:
            raise CredentialPersistenceError(
                _with_failures("Could not remove credential from every backend", failures),
                failures=failures,
                suggestion=_first_suggestion(failures),
            )

        return removed


def _with_failures(message: str, failures: dict[str, Exception]) -> str:
    if not failures:
        return message
    details = "; ".join(f"{name}: {getattr(error, 'message', error)}" for name, error in failures.items())
    return f"{message} ({details})"


def _first_suggestion(failures: dict[str, Exception]) -> str | None:
    for error in failures.values():
        suggestion = getattr(error, "suggestion", None)
        if suggestion:
            return suggestion
    return None
