"""Host configuration for pygeiger."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from pygeiger.exceptions import GeigerConfigError
from pygeiger.identity import AddressValidator, IdentityValidator, accept_any
from pygeiger.state.backends import MemoryStorage, SqliteStorage, Storage


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class GeigerConfig:
    """Host configuration.

    Parameters
    ----------
    db_path : str or None
        SQLite database file. ``None`` keeps state in memory only.
    address_prefix : str or None
        Required bech32 prefix for queried addresses (e.g. ``"cosmos"``).
        ``None`` accepts any prefix.
    validate_addresses : bool
        Check queried addresses for bech32 shape. When disabled any
        non-empty string is accepted as an identity.
    """

    db_path: str | None = None
    address_prefix: str | None = None
    validate_addresses: bool = True

    @classmethod
    def from_env(cls, **overrides: Any) -> GeigerConfig:
        """Create configuration from ``GEIGER_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "GEIGER_DB_PATH": "db_path",
            "GEIGER_ADDRESS_PREFIX": "address_prefix",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val:
                config_kwargs[field_name] = val

        if "validate_addresses" not in overrides:
            config_kwargs["validate_addresses"] = _env_bool(env.get("GEIGER_VALIDATE_ADDRESSES"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)

    def open_storage(self) -> Storage:
        if self.db_path is None:
            return MemoryStorage()
        return SqliteStorage(Path(self.db_path).expanduser())

    def identity_validator(self) -> IdentityValidator:
        if not self.validate_addresses:
            return accept_any
        try:
            return AddressValidator(self.address_prefix)
        except ValueError as exc:
            raise GeigerConfigError(str(exc)) from exc
