"""Persisted records: the config singleton and per-identity counters."""

from __future__ import annotations

from pydantic import field_validator

from pygeiger.models._base import GeigerBaseModel, Uint64


class Config(GeigerBaseModel):
    """Singleton configuration written once at instantiation."""

    owner: str

    @field_validator("owner")
    @classmethod
    def _non_empty_owner(cls, value: str) -> str:
        if not value:
            raise ValueError("owner must be non-empty")
        return value


class UserState(GeigerBaseModel):
    """Measurement state of a single identity.

    A record only exists once the identity has measured at least once;
    reset zeroes ``radioactivity`` but never removes the record.
    """

    last_interaction: Uint64
    radioactivity: Uint64


class ContractVersion(GeigerBaseModel):
    """Name and version of the code that instantiated the store."""

    contract: str
    version: str
