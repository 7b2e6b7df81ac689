"""Credential storage for the gitpod CLI auth token.

The token is kept in the OS keyring when one is reachable and falls back to
the plain-text config file otherwise. ``CredentialResolver`` applies one
read/write/delete policy across both backends.

Example:
    from gitpod_cli.credentials import CredentialResolver

    resolver = CredentialResolver.default(config_store)
    location = resolver.store(token, allow_plaintext=False)
    credential = resolver.resolve()
"""

from gitpod_cli.credentials.backend import CredentialBackend, CredentialLocation
from gitpod_cli.credentials.config_backend import ConfigFileBackend
from gitpod_cli.credentials.keyring_backend import KeyringBackend
from gitpod_cli.credentials.resolver import (
    ACCOUNT_NAME,
    SERVICE_NAME,
    CredentialResolver,
    ResolvedCredential,
)
from gitpod_cli.exceptions import (
    BackendAccessDeniedError,
    BackendNotAvailableError,
    CredentialError,
    CredentialPersistenceError,
)

__all__ = [
    # Backends
    "CredentialBackend",
    "CredentialLocation",
    "KeyringBackend",
    "ConfigFileBackend",
    # Resolver
    "CredentialResolver",
    "ResolvedCredential",
    "SERVICE_NAME",
    "ACCOUNT_NAME",
    # Exceptions
    "CredentialError",
    "BackendNotAvailableError",
    "BackendAccessDeniedError",
    "CredentialPersistenceError",
]
