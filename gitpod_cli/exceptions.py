"""Custom exception hierarchy for the gitpod CLI.

Exception Hierarchy:
    GitpodCLIError (base)
    ├── ConfigurationError
    ├── PersistenceError
    ├── CredentialError
    │   ├── BackendNotAvailableError
    │   ├── BackendAccessDeniedError
    │   └── CredentialPersistenceError
    ├── NotLoggedInError
    └── ExternalServiceError
        ├── NetworkError
        │   └── RequestTimeoutError
        └── VerificationError

Every command catches ``GitpodCLIError``, prints ``message`` (and
``suggestion`` when present) and exits with a non-zero status.

Example Usage:
    >>> from gitpod_cli.exceptions import PersistenceError
    >>> try:
    ...     path.write_text(data)
    ... except OSError as e:
    ...     raise PersistenceError(f"Cannot write config file: {path}") from e
"""


class GitpodCLIError(Exception):
    """Base exception for all gitpod CLI errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional hint shown to the user
    """

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        """Initialize exception.

        Args:
            message: Error message
            suggestion: Optional suggestion for resolution
        """
        self.message = message
        self.suggestion = suggestion
        super().__init__(message)


class ConfigurationError(GitpodCLIError):
    """Settings are invalid or the config file cannot be read or parsed."""

    pass


class PersistenceError(GitpodCLIError):
    """The config file could not be written (permissions, full disk)."""

    pass


class CredentialError(GitpodCLIError):
    """Credential-related errors.

    Base class for failures of a credential storage backend. Subclasses:
    - BackendNotAvailableError: no usable secret storage on this system
    - BackendAccessDeniedError: the secret storage refused access
    - CredentialPersistenceError: no backend could persist or clear the token

    Attributes:
        message: Human-readable error description
        reference: Where the credential was looked up (e.g. "@keyring:gitpod-cli/token")
        suggestion: Optional suggestion for resolution
    """

    def __init__(
        self,
        message: str,
        reference: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            reference: The credential reference that failed
            suggestion: Optional suggestion for resolution
        """
        self.reference = reference

        full_message = message
        if reference:
            full_message = f"{message} (reference: {reference})"

        super().__init__(full_message, suggestion=suggestion)
        # Keep the short message; str(exc) carries the reference
        self.message = message


class BackendNotAvailableError(CredentialError):
    """Requested backend is not available on this system."""

    pass


class BackendAccessDeniedError(CredentialError):
    """The backend exists but refused the operation (locked or denied)."""

    pass


class CredentialPersistenceError(CredentialError):
    """The token could not be written to, or removed from, any permitted backend.

    Attributes:
        failures: Mapping of backend name to the error it raised
    """

    def __init__(
        self,
        message: str,
        failures: dict[str, Exception] | None = None,
        suggestion: str | None = None,
    ) -> None:
        self.failures = failures or {}
        super().__init__(message, suggestion=suggestion)


class NotLoggedInError(GitpodCLIError):
    """A command needs a token but none is stored."""

    def __init__(self, message: str = "Not logged in") -> None:
        super().__init__(message, suggestion="Log in with: gitpod auth login <token>")


class ExternalServiceError(GitpodCLIError):
    """Communication with the remote service failed.

    Attributes:
        status_code: HTTP status code (if applicable)
        response_text: Response body text (if applicable)
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            status_code: HTTP status code (if applicable)
            response_text: Response body text (if applicable)
            suggestion: Optional suggestion for resolution
        """
        self.status_code = status_code
        self.response_text = response_text

        full_message = message
        if status_code:
            full_message = f"{message} (HTTP {status_code})"

        super().__init__(full_message, suggestion=suggestion)


class NetworkError(ExternalServiceError):
    """The remote service could not be reached."""

    pass


class RequestTimeoutError(NetworkError):
    """A remote call exceeded its timeout.

    Attributes:
        timeout_seconds: The timeout that was exceeded
    """

    def __init__(self, message: str, timeout_seconds: float | None = None) -> None:
        self.timeout_seconds = timeout_seconds
        if timeout_seconds and "timeout" not in message.lower():
            message = f"{message} (timeout: {timeout_seconds}s)"
        super().__init__(message)


class VerificationError(ExternalServiceError):
    """The server rejected the credential.

    The token was read or written fine; the remote service does not accept it.
    """

    pass
