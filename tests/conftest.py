"""Pytest configuration and shared fixtures."""

import logging
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest
import structlog

from gitpod_cli.api.client import GitpodClient, api_base_url
from gitpod_cli.config.store import ConfigStore
from gitpod_cli.credentials.backend import CredentialLocation
from gitpod_cli.exceptions import BackendNotAvailableError


class InMemoryKeyring:
    """Stand-in for the system keyring backend."""

    def __init__(self, available: bool = True) -> None:
        self._available = available
        self.secrets: dict[tuple[str, str], str] = {}

    @property
    def name(self) -> str:
        return "keyring"

    @property
    def location(self) -> CredentialLocation:
        return CredentialLocation.SECURE_STORE

    @property
    def secure(self) -> bool:
        return True

    @property
    def available(self) -> bool:
        return self._available

    def _check(self) -> None:
        if not self._available:
            raise BackendNotAvailableError("Keyring backend is not available")

    def get(self, service: str, key: str) -> str | None:
        self._check()
        return self.secrets.get((service, key))

    def set(self, service: str, key: str, value: str) -> None:
        self._check()
        self.secrets[(service, key)] = value

    def delete(self, service: str, key: str) -> bool:
        self._check()
        return self.secrets.pop((service, key), None) is not None


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's GITPOD_* environment out of tests."""
    for var in ("GITPOD_CONFIG_PATH", "GITPOD_HOST", "GITPOD_AUTH_TIMEOUT", "GITPOD_LIST_TIMEOUT", "GITPOD_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Config file location inside a temporary home."""
    return tmp_path / ".gitpod" / "config.yaml"


@pytest.fixture
def config_store(config_path: Path) -> ConfigStore:
    """ConfigStore backed by a temporary file."""
    return ConfigStore(config_path)


@pytest.fixture
def keyring_store() -> InMemoryKeyring:
    """Working in-memory keyring."""
    return InMemoryKeyring()


@pytest.fixture
def unavailable_keyring() -> InMemoryKeyring:
    """Keyring that behaves like a headless machine."""
    return InMemoryKeyring(available=False)


@pytest.fixture
def use_keyring():
    """Patch the default resolver to use a given keyring stand-in.

    Usage::

        def test_x(use_keyring, keyring_store):
            use_keyring(keyring_store)
    """
    patchers = []

    def _use(backend: InMemoryKeyring) -> InMemoryKeyring:
        patcher = patch("gitpod_cli.credentials.resolver.KeyringBackend", return_value=backend)
        patcher.start()
        patchers.append(patcher)
        return backend

    yield _use

    for patcher in patchers:
        patcher.stop()


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep log lines out of captured command output."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL))
    with patch("gitpod_cli.main.configure_logging"):
        yield
    structlog.reset_defaults()


def workspace_record(
    workspace_id: str = "gitpodio-gitpod-abc123",
    phase: str = "PHASE_RUNNING",
    created_at: str = "2024-01-01T10:00:00Z",
    context_url: str = "https://github.com/gitpod-io/gitpod",
) -> dict:
    """A workspace as encoded by the public API."""
    return {
        "workspaceId": workspace_id,
        "ownerId": "owner-1",
        "context": {"contextUrl": context_url},
        "status": {
            "instance": {
                "instanceId": f"{workspace_id}-instance",
                "workspaceId": workspace_id,
                "createdAt": created_at,
                "status": {"phase": phase},
            }
        },
    }


class FakeGitpodAPI:
    """Records requests and answers like the Gitpod public API."""

    def __init__(self, valid_token: str = "valid-token", workspaces: list[dict] | None = None) -> None:
        self.valid_token = valid_token
        self.workspaces = workspaces if workspaces is not None else []
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.headers.get("Authorization") != f"Bearer {self.valid_token}":
            return httpx.Response(401, json={"code": "unauthenticated", "message": "invalid token"})

        if request.url.path.endswith("/ListPersonalAccessTokens"):
            return httpx.Response(200, json={"tokens": [{"id": "pat-1"}]})
        if request.url.path.endswith("/ListWorkspaces"):
            return httpx.Response(200, json={"result": self.workspaces})
        return httpx.Response(404, json={"code": "unimplemented", "message": "unknown method"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client_factory(self):
        """Replacement for ``create_client`` that routes through this fake."""

        def _create(host: str, token: str, timeout: float) -> GitpodClient:
            return GitpodClient(api_base_url(host), token, timeout=timeout, transport=self.transport)

        return _create


@pytest.fixture
def fake_api() -> FakeGitpodAPI:
    """Fake API with one valid token and no workspaces."""
    return FakeGitpodAPI()


@pytest.fixture
def make_workspace():
    """Factory for API workspace records."""
    return workspace_record


@pytest.fixture
def make_fake_api():
    """Factory for fake APIs with custom tokens and workspaces."""
    return FakeGitpodAPI


@pytest.fixture
def make_keyring():
    """Factory for in-memory keyrings."""
    return InMemoryKeyring
