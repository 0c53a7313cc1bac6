"""Persistence for the chat API credential."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path

from common.constants import CREDENTIAL_STORAGE_KEY
from common.logger import get_logger

logger = get_logger(__name__)


class CredentialBackend(ABC):
    """Key-value storage the credential store reads and writes through."""

    @abstractmethod
    def read(self, key: str) -> str | None:
        """Return the stored value for ``key``, or None if absent."""
        pass

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        pass


class MemoryBackend(CredentialBackend):
    """Backend holding values in a dict; nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.values: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self.values.get(key)

    def write(self, key: str, value: str) -> None:
        self.values[key] = value

    def delete(self, key: str) -> None:
        self.values.pop(key, None)


class JsonFileBackend(CredentialBackend):
    """Backend storing values as a JSON object in a local file.

    The file and its parent directory are created on first write. An
    unreadable or malformed file reads as empty.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable credential file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring credential file {self.path}: expected a JSON object")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _save(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        try:
            self.path.chmod(0o600)
        except OSError:
            logger.debug(f"Could not restrict permissions on {self.path}")

    def read(self, key: str) -> str | None:
        return self._load().get(key)

    def write(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)


class CredentialStore:
    """Holds the chat API credential, backed by a persistence backend.

    The value is read from the backend once and cached; ``set`` and
    ``clear`` update both the cache and the backend.
    """

    def __init__(self, backend: CredentialBackend, key: str = CREDENTIAL_STORAGE_KEY):
        self.backend = backend
        self.key = key
        self._cached: str | None = None
        self._loaded = False

    def get(self) -> str | None:
        """Return the stored credential, or None if none is configured."""
        if not self._loaded:
            value = self.backend.read(self.key)
            self._cached = value or None
            self._loaded = True
        return self._cached

    def set(self, value: str) -> None:
        """Persist ``value`` as the credential."""
        self.backend.write(self.key, value)
        self._cached = value
        self._loaded = True

    def clear(self) -> None:
        """Forget the stored credential."""
        self.backend.delete(self.key)
        self._cached = None
        self._loaded = True

    def has_credential(self) -> bool:
        return self.get() is not None
