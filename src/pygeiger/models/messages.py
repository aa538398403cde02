"""Host messages in their JSON envelope form.

Execute and query messages are single-key objects whose key names the
action, e.g. ``{"measure": {}}`` or ``{"radioactivity": {"address": "..."}}``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, ClassVar, TypeVar

from pydantic import ValidationError

from pygeiger.exceptions import InvalidMessageError
from pygeiger.models._base import GeigerBaseModel


class _Message(GeigerBaseModel):
    TAG: ClassVar[str] = ""

    def to_wire(self) -> dict[str, Any]:
        """Return the single-key envelope for this message."""
        return {self.TAG: self.model_dump()}


class InstantiateMsg(GeigerBaseModel):
    pass


class MigrateMsg(GeigerBaseModel):
    pass


class MeasureMsg(_Message):
    TAG: ClassVar[str] = "measure"


class ResetMsg(_Message):
    TAG: ClassVar[str] = "reset"


class ConfigQuery(_Message):
    TAG: ClassVar[str] = "config"


class RadioactivityQuery(_Message):
    TAG: ClassVar[str] = "radioactivity"

    address: str


class LeaderboardQuery(_Message):
    TAG: ClassVar[str] = "leaderboard"


ExecuteMsg = MeasureMsg | ResetMsg
QueryMsg = ConfigQuery | RadioactivityQuery | LeaderboardQuery

_EXECUTE_VARIANTS: dict[str, type[_Message]] = {cls.TAG: cls for cls in (MeasureMsg, ResetMsg)}
_QUERY_VARIANTS: dict[str, type[_Message]] = {
    cls.TAG: cls for cls in (ConfigQuery, RadioactivityQuery, LeaderboardQuery)
}

M = TypeVar("M", bound=_Message)


def _load(raw: str | bytes | Mapping[str, Any]) -> Any:
    if isinstance(raw, Mapping):
        return dict(raw)
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidMessageError(f"message is not valid JSON: {exc}") from exc


def _parse(raw: str | bytes | Mapping[str, Any], variants: Mapping[str, type[M]], kind: str) -> M:
    payload = _load(raw)
    if not isinstance(payload, dict) or len(payload) != 1:
        raise InvalidMessageError(f"{kind} message must be an object with exactly one key")
    ((name, body),) = payload.items()
    cls = variants.get(name)
    if cls is None:
        expected = ", ".join(sorted(variants))
        raise InvalidMessageError(f"unknown {kind} message {name!r} (expected one of: {expected})")
    try:
        return cls.model_validate(body)
    except ValidationError as exc:
        raise InvalidMessageError(f"invalid {kind} message {name!r}: {exc}") from exc


def parse_execute_msg(raw: str | bytes | Mapping[str, Any]) -> ExecuteMsg:
    """Parse a raw execute envelope into :data:`ExecuteMsg`."""
    return _parse(raw, _EXECUTE_VARIANTS, "execute")  # type: ignore[return-value]


def parse_query_msg(raw: str | bytes | Mapping[str, Any]) -> QueryMsg:
    """Parse a raw query envelope into :data:`QueryMsg`."""
    return _parse(raw, _QUERY_VARIANTS, "query")  # type: ignore[return-value]
