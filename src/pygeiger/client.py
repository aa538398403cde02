"""Host-side facade over the measurement engine.

:class:`GeigerCounter` plays the part of the host runtime: it stamps each
call with the clock, wraps the caller identity, builds a fresh
:class:`StateStore` view over the backend and dispatches to
:mod:`pygeiger.contract`.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from pygeiger import contract
from pygeiger.exceptions import InvalidIdentityError, InvalidMessageError
from pygeiger.identity import AddressValidator, IdentityValidator
from pygeiger.models.context import Env, MessageInfo
from pygeiger.models.messages import (
    ExecuteMsg,
    InstantiateMsg,
    MeasureMsg,
    MigrateMsg,
    QueryMsg,
    ResetMsg,
    parse_execute_msg,
    parse_query_msg,
)
from pygeiger.models.responses import Leaderboard, Response
from pygeiger.models.state import Config
from pygeiger.state.backends import Storage
from pygeiger.state.store import StateStore

_logger = logging.getLogger(__name__)


def _now_seconds() -> int:
    """Current epoch timestamp in whole seconds."""
    return int(time.time())


class GeigerCounter:
    """Command surface of the radioactivity counter.

    Usage::

        counter = GeigerCounter(MemoryStorage())
        counter.instantiate("owner")
        counter.measure("alice")
        counter.get_leaderboard()
    """

    def __init__(
        self,
        storage: Storage,
        *,
        clock: Callable[[], int] = _now_seconds,
        validator: IdentityValidator | None = None,
    ) -> None:
        self._storage = storage
        self._clock = clock
        self._validator = validator or AddressValidator()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _store(self) -> StateStore:
        return StateStore(self._storage)

    def _env(self, now: int | None) -> Env:
        value = self._clock() if now is None else now
        try:
            return Env(time=value)
        except ValidationError as exc:
            raise InvalidMessageError(f"invalid block time {value!r}: must fit an unsigned 64-bit integer") from exc

    def _info(self, sender: str) -> MessageInfo:
        try:
            return MessageInfo(sender=sender)
        except ValidationError as exc:
            raise InvalidIdentityError(f"invalid sender {sender!r}", identity=sender) from exc

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def instantiate(self, sender: str, *, now: int | None = None) -> Response:
        return contract.instantiate(self._store(), self._env(now), self._info(sender), InstantiateMsg())

    def migrate(self, *, now: int | None = None) -> Response:
        return contract.migrate(self._store(), self._env(now), MigrateMsg())

    def execute(
        self,
        sender: str,
        msg: ExecuteMsg | str | bytes | Mapping[str, Any],
        *,
        now: int | None = None,
    ) -> Response:
        """Run an execute message, given typed or in its JSON envelope."""
        if not isinstance(msg, (MeasureMsg, ResetMsg)):
            msg = parse_execute_msg(msg)
        env = self._env(now)
        _logger.debug("execute %s from %s at t=%d", type(msg).__name__, sender, env.time)
        return contract.execute(self._store(), env, self._info(sender), msg)

    def measure(self, sender: str, *, now: int | None = None) -> Response:
        return self.execute(sender, MeasureMsg(), now=now)

    def reset(self, sender: str, *, now: int | None = None) -> Response:
        return self.execute(sender, ResetMsg(), now=now)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def query(self, msg: QueryMsg | str | bytes | Mapping[str, Any], *, now: int | None = None) -> bytes:
        """Answer a query message with JSON bytes."""
        if isinstance(msg, (str, bytes, Mapping)):
            msg = parse_query_msg(msg)
        return contract.query(self._store(), self._env(now), msg, self._validator)

    def get_config(self) -> Config:
        return contract.query_config(self._store())

    def get_radioactivity(self, address: str) -> int:
        return contract.query_radioactivity(self._store(), address, self._validator)

    def get_leaderboard(self) -> Leaderboard:
        return contract.query_leaderboard(self._store())
