"""Per-call context supplied by the host: clock and caller identity."""

from __future__ import annotations

from pydantic import Field, field_validator

from pygeiger.models._base import GeigerBaseModel, Uint64


class Env(GeigerBaseModel):
    """Host environment for one call.

    ``time`` is the block time in epoch seconds. The library never reads a
    wall clock itself.
    """

    time: Uint64
    height: Uint64 = Field(default=0, description="Block height, informational only")


class MessageInfo(GeigerBaseModel):
    """Authenticated caller of a mutating call."""

    sender: str

    @field_validator("sender")
    @classmethod
    def _non_empty_sender(cls, value: str) -> str:
        if not value:
            raise ValueError("sender must be non-empty")
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ValueError(f"sender is not valid UTF-8 text: {exc.reason}") from exc
        return value
