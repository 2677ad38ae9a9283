"""Config store: the TOML file holding the session and user preferences."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import tomli_w

from firebase_cli.config.constants import CONFIG_FILE, ENV_CONFIG_PATH
from firebase_cli.config.models import StoredConfig
from firebase_cli.models.auth import Identity, Tokens, resolve_identity

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib

# On-disk key -> StoredConfig field
_KEYS = {
    (field.alias or name): name for name, field in StoredConfig.model_fields.items()
}


class ConfigStore:
    """Key/value store for session state and user preferences."""

    def __init__(self, config_path: Path | None = None) -> None:
        env_path = os.environ.get(ENV_CONFIG_PATH)
        self.config_path = config_path or (Path(env_path) if env_path else CONFIG_FILE)
        self._config: StoredConfig | None = None

    @property
    def config(self) -> StoredConfig:
        if self._config is None:
            self._config = self._load()
        return self._config

    def _load(self) -> StoredConfig:
        if not self.config_path.exists():
            return StoredConfig()
        raw = self.config_path.read_bytes()
        data = tomllib.loads(raw.decode())
        return StoredConfig.model_validate(data)

    def save(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        # Secure directory permissions (owner-only)
        os.chmod(self.config_path.parent, 0o700)
        data = self.config.model_dump(mode="json", by_alias=True, exclude_none=True)
        # Atomic write: write to temp file, then rename
        temp = self.config_path.with_suffix(".tmp")
        fd = os.open(str(temp), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        try:
            os.write(fd, tomli_w.dumps(data).encode())
        finally:
            os.close(fd)
        temp.replace(self.config_path)

    def _field(self, key: str) -> str:
        try:
            return _KEYS[key]
        except KeyError:
            raise ValueError(f"Unknown config key: {key}") from None

    def get(self, key: str, default: Any = None) -> Any:
        value = getattr(self.config, self._field(key))
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        setattr(self.config, self._field(key), value)
        self.save()

    def delete(self, key: str) -> bool:
        field = self._field(key)
        if getattr(self.config, field) is None:
            return False
        setattr(self.config, field, None)
        self.save()
        return True

    @property
    def user(self) -> Identity | None:
        return resolve_identity(self.config.user)

    @property
    def tokens(self) -> Tokens | None:
        return self.config.tokens

    def has_valid_session(self) -> bool:
        """A stored user with a non-empty refresh token counts as logged in."""
        tokens = self.tokens
        return self.user is not None and bool(tokens and tokens.refresh_token)
