"""Typed responses returned by mutating entry points.

Mutations report a short list of human-readable key/value attributes.
Query results are plain values (``Config``, ``int`` or a leaderboard).
"""

from __future__ import annotations

from pydantic import Field

from pygeiger.models._base import GeigerBaseModel

LeaderboardEntry = tuple[str, int]
Leaderboard = list[LeaderboardEntry]


class Attribute(GeigerBaseModel):
    key: str
    value: str


def attr(key: str, value: object) -> Attribute:
    """Build an attribute, stringifying *value*."""
    return Attribute(key=key, value=str(value))


class Response(GeigerBaseModel):
    """Acknowledgement of a mutating call."""

    attributes: tuple[Attribute, ...] = Field(default_factory=tuple)

    def add_attributes(self, *attributes: Attribute) -> Response:
        return self.model_copy(update={"attributes": (*self.attributes, *attributes)})

    def attribute(self, key: str) -> str | None:
        """Return the first attribute value for *key*, if any."""
        for item in self.attributes:
            if item.key == key:
                return item.value
        return None

    def as_dict(self) -> dict[str, str]:
        return {item.key: item.value for item in self.attributes}
