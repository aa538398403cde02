"""Base model and shared field types for pygeiger records and messages.

Every persisted record and host message inherits from
:class:`GeigerBaseModel` which is frozen and rejects unknown keys, so a
record read back from storage is exactly what was written.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from pygeiger._constants import U64_MAX

Uint64 = Annotated[int, Field(ge=0, le=U64_MAX)]
"""Unsigned 64-bit integer (counters and epoch seconds)."""


class GeigerBaseModel(BaseModel):
    """Base for all pygeiger models."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
