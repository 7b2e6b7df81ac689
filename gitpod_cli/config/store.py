"""
File-backed key/value configuration store.

The config file is a flat YAML mapping of string keys to string values.
Dotted keys such as ``gitpod.token`` are plain keys, not nested paths.
Writes go through a temporary file and an atomic rename so unrelated keys
are never lost to a partial write.

Example:
    >>> store = ConfigStore(Path("~/.gitpod/config.yaml").expanduser())
    >>> store.set("host", "gitpod.example.com")
    >>> store.get("host")
    'gitpod.example.com'
    >>> store.get("missing")
    ''
"""

from pathlib import Path

import structlog
import yaml

from gitpod_cli.exceptions import ConfigurationError, PersistenceError

log = structlog.get_logger(__name__)


class ConfigStore:
    """Flat key/value store persisted to a single YAML file.

    One instance is created per process and handed to every component that
    needs configuration. The file is loaded lazily on first use.
    """

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the YAML config file
        """
        self.path = Path(path).expanduser()
        self._values: dict[str, str] | None = None

    def init(self) -> None:
        """Ensure the backing file exists and is loaded into memory.

        Idempotent: subsequent calls are no-ops.

        Raises:
            PersistenceError: If the file or its directory cannot be created
            ConfigurationError: If the file exists but is not a YAML mapping
        """
        if self._values is not None:
            return

        if not self.path.exists():
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.touch(mode=0o600)
            except OSError as e:
                raise PersistenceError(
                    f"Cannot create config file: {self.path}",
                    suggestion="Check permissions or set GITPOD_CONFIG_PATH to a writable location",
                ) from e
            log.debug("config_file_created", path=str(self.path))

        self._values = self._load()

    def get(self, key: str) -> str:
        """Return the value stored under ``key`` or an empty string."""
        self.init()
        assert self._values is not None
        return self._values.get(key, "")

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key`` and write the file.

        Raises:
            PersistenceError: If the file cannot be written
        """
        self.init()
        assert self._values is not None

        updated = dict(self._values)
        updated[key] = str(value)
        self._save(updated)
        self._values = updated
        log.debug("config_value_set", key=key)

    def delete(self, key: str) -> bool:
        """Remove ``key`` from the file.

        Returns:
            True if the key was present, False otherwise

        Raises:
            PersistenceError: If the file cannot be written
        """
        self.init()
        assert self._values is not None

        if key not in self._values:
            return False

        updated = {k: v for k, v in self._values.items() if k != key}
        self._save(updated)
        self._values = updated
        log.debug("config_value_deleted", key=key)
        return True

    def items(self) -> dict[str, str]:
        """Return a copy of all entries."""
        self.init()
        assert self._values is not None
        return dict(self._values)

    def _load(self) -> dict[str, str]:
        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file: {self.path}") from e

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {self.path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file must be a YAML mapping, not a list or scalar: {self.path}")

        # Hand-edited files may carry numbers or booleans; nulls mean unset
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def _save(self, values: dict[str, str]) -> None:
        """Write values atomically with owner-only permissions."""
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(values, f, default_flow_style=False, sort_keys=True)
            tmp_path.chmod(0o600)
            tmp_path.replace(self.path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise PersistenceError(
                f"Cannot write config file: {self.path}",
                suggestion="Check file permissions and free disk space",
            ) from e
