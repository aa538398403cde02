"""Typed state store over an ordered key-value backend.

This is the only component that knows how records are keyed and encoded.
It holds no cache: every read goes to the backend, so a read always
observes the latest write of the same call sequence.
"""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel, ValidationError

from pygeiger._constants import CONFIG_KEY, CONTRACT_INFO_KEY, RADIOACTIVITY_PREFIX
from pygeiger.exceptions import NotFoundError, StoreError
from pygeiger.models.state import Config, ContractVersion, UserState
from pygeiger.state.backends import Storage

T = TypeVar("T", bound=BaseModel)


def _user_key(identity: str) -> bytes:
    return RADIOACTIVITY_PREFIX + identity.encode("utf-8")


def _decode(model: type[T], key: bytes, raw: bytes) -> T:
    try:
        return model.model_validate_json(raw)
    except ValidationError as exc:
        raise StoreError(
            f"corrupt {model.__name__} record: {exc.error_count()} validation error(s)",
            key=key.decode("utf-8", "replace"),
        ) from exc


class StateStore:
    """Config singleton plus a keyed collection of :class:`UserState`."""

    def __init__(self, storage: Storage) -> None:
        self._storage = storage

    # ------------------------------------------------------------------
    # Config singleton
    # ------------------------------------------------------------------

    def load_config(self) -> Config:
        raw = self._storage.get(CONFIG_KEY)
        if raw is None:
            raise NotFoundError("config not initialized", key=CONFIG_KEY.decode())
        return _decode(Config, CONFIG_KEY, raw)

    def save_config(self, config: Config) -> None:
        self._storage.set(CONFIG_KEY, config.model_dump_json().encode("utf-8"))

    def load_contract_version(self) -> ContractVersion:
        raw = self._storage.get(CONTRACT_INFO_KEY)
        if raw is None:
            raise NotFoundError("contract version not set", key=CONTRACT_INFO_KEY.decode())
        return _decode(ContractVersion, CONTRACT_INFO_KEY, raw)

    def save_contract_version(self, info: ContractVersion) -> None:
        self._storage.set(CONTRACT_INFO_KEY, info.model_dump_json().encode("utf-8"))

    # ------------------------------------------------------------------
    # Per-identity records
    # ------------------------------------------------------------------

    def load_user(self, identity: str) -> UserState | None:
        key = _user_key(identity)
        raw = self._storage.get(key)
        if raw is None:
            return None
        return _decode(UserState, key, raw)

    def save_user(self, identity: str, state: UserState) -> None:
        self._storage.set(_user_key(identity), state.model_dump_json().encode("utf-8"))

    def user_identities(self) -> list[str]:
        """Identities with a record, ascending by key bytes."""
        return [identity for identity, _ in self._scan_users()]

    def iterate_users(self) -> list[tuple[str, UserState]]:
        """Snapshot of all records, ascending by identity key bytes.

        Each call reads the backend afresh.
        """
        return [(identity, _decode(UserState, _user_key(identity), raw)) for identity, raw in self._scan_users()]

    def _scan_users(self) -> list[tuple[str, bytes]]:
        offset = len(RADIOACTIVITY_PREFIX)
        out: list[tuple[str, bytes]] = []
        for key, raw in self._storage.range(RADIOACTIVITY_PREFIX):
            try:
                identity = key[offset:].decode("utf-8")
            except UnicodeDecodeError as exc:
                raise StoreError("undecodable identity key", key=key.decode("utf-8", "replace")) from exc
            out.append((identity, raw))
        return out
