"""Measurement engine: instantiate, execute, query and migrate handlers.

Handlers are stateless. Each receives the store for the current call plus
the host-supplied :class:`Env` and :class:`MessageInfo`, loads what it
needs, writes, and returns. The host serializes calls, so no locking
happens here.
"""

from __future__ import annotations

import logging

from pydantic import TypeAdapter

from pygeiger import __version__
from pygeiger._constants import CONTRACT_NAME, ONE_DAY, TWO_DAYS, U64_MAX
from pygeiger.exceptions import CounterOverflowError, NotFoundError, RateLimitedError, UnauthorizedError
from pygeiger.identity import AddressValidator, IdentityValidator
from pygeiger.models.context import Env, MessageInfo
from pygeiger.models.messages import (
    ConfigQuery,
    ExecuteMsg,
    InstantiateMsg,
    LeaderboardQuery,
    MeasureMsg,
    MigrateMsg,
    QueryMsg,
    RadioactivityQuery,
    ResetMsg,
)
from pygeiger.models.responses import Leaderboard, Response, attr
from pygeiger.models.state import Config, ContractVersion, UserState
from pygeiger.state.store import StateStore

_logger = logging.getLogger(__name__)

_CONFIG_ADAPTER: TypeAdapter[Config] = TypeAdapter(Config)
_U64_ADAPTER: TypeAdapter[int] = TypeAdapter(int)
_LEADERBOARD_ADAPTER: TypeAdapter[Leaderboard] = TypeAdapter(Leaderboard)


# ------------------------------------------------------------------
# Instantiate / migrate
# ------------------------------------------------------------------


def instantiate(store: StateStore, _env: Env, info: MessageInfo, _msg: InstantiateMsg) -> Response:
    """Record the caller as owner. Run once by the host before anything else."""
    store.save_contract_version(ContractVersion(contract=CONTRACT_NAME, version=__version__))
    store.save_config(Config(owner=info.sender))
    _logger.debug("Instantiated with owner=%s", info.sender)
    return Response().add_attributes(attr("action", "instantiate"))


def migrate(_store: StateStore, _env: Env, _msg: MigrateMsg) -> Response:
    """Schema migration hook. Nothing to migrate yet."""
    return Response()


# ------------------------------------------------------------------
# Execute
# ------------------------------------------------------------------


def execute(store: StateStore, env: Env, info: MessageInfo, msg: ExecuteMsg) -> Response:
    if isinstance(msg, MeasureMsg):
        return try_measure(store, env, info)
    if isinstance(msg, ResetMsg):
        return try_reset(store, info)
    raise TypeError(f"unsupported execute message: {type(msg).__name__}")


def next_user_state(state: UserState | None, now: int, *, identity: str = "") -> UserState:
    """Apply the daily measurement rule to *state*.

    * first measurement: counter starts at 1
    * less than one day since the last one: rejected
    * more than two days: streak broken, counter back to 1
    * otherwise the streak continues and the counter grows by 1

    Both bounds are inclusive on the accepting side: exactly one day is
    allowed, exactly two days still continues the streak.
    """
    if state is None:
        return UserState(last_interaction=now, radioactivity=1)

    time_diff = now - state.last_interaction
    if time_diff < ONE_DAY:
        raise RateLimitedError(
            f"measurement limited to once per day ({time_diff}s since last)",
            identity=identity,
            retry_after=state.last_interaction + ONE_DAY,
        )

    if time_diff > TWO_DAYS:
        radioactivity = 1
    else:
        if state.radioactivity >= U64_MAX:
            raise CounterOverflowError("radioactivity overflow", identity=identity)
        radioactivity = state.radioactivity + 1

    return state.model_copy(update={"last_interaction": now, "radioactivity": radioactivity})


def try_measure(store: StateStore, env: Env, info: MessageInfo) -> Response:
    now = env.time
    response = Response().add_attributes(
        attr("action", "try_measure"),
        attr("current_time", now),
    )

    current = store.load_user(info.sender)
    try:
        updated = next_user_state(current, now, identity=info.sender)
    except RateLimitedError:
        _logger.debug("Measurement rejected for %s at t=%d", info.sender, now)
        raise
    store.save_user(info.sender, updated)
    _logger.debug(
        "Measured %s at t=%d radioactivity=%d",
        info.sender,
        now,
        updated.radioactivity,
    )
    return response


def try_reset(store: StateStore, info: MessageInfo) -> Response:
    """Zero every counter. Owner only.

    Records are rewritten one by one in key order. A store failure part way
    through propagates and leaves the already-zeroed records as they are.
    """
    config = store.load_config()
    if config.owner != info.sender:
        raise UnauthorizedError("only the owner may reset", identity=info.sender)

    identities = store.user_identities()
    for identity in identities:
        state = store.load_user(identity)
        if state is None:
            raise NotFoundError(f"record vanished during reset: {identity}", key=identity)
        store.save_user(identity, state.model_copy(update={"radioactivity": 0}))
    _logger.debug("Reset %d record(s)", len(identities))

    return Response().add_attributes(attr("method", "try_reset"))


# ------------------------------------------------------------------
# Query
# ------------------------------------------------------------------


def query(
    store: StateStore,
    _env: Env,
    msg: QueryMsg,
    validator: IdentityValidator | None = None,
) -> bytes:
    """Answer *msg* as JSON bytes."""
    if isinstance(msg, ConfigQuery):
        return _CONFIG_ADAPTER.dump_json(query_config(store))
    if isinstance(msg, RadioactivityQuery):
        return _U64_ADAPTER.dump_json(query_radioactivity(store, msg.address, validator))
    if isinstance(msg, LeaderboardQuery):
        return _LEADERBOARD_ADAPTER.dump_json(query_leaderboard(store))
    raise TypeError(f"unsupported query message: {type(msg).__name__}")


def query_config(store: StateStore) -> Config:
    return store.load_config()


def query_radioactivity(store: StateStore, address: str, validator: IdentityValidator | None = None) -> int:
    """Counter of *address*; an identity that never measured is an error, not 0."""
    identity = (validator or AddressValidator())(address)
    state = store.load_user(identity)
    if state is None:
        raise NotFoundError(f"no radioactivity recorded for {identity}", key=identity)
    return state.radioactivity


def query_leaderboard(store: StateStore) -> Leaderboard:
    """All identities by descending counter; ties keep ascending identity order."""
    leaderboard = [(identity, state.radioactivity) for identity, state in store.iterate_users()]
    # list.sort is stable, so key order survives among equal scores.
    leaderboard.sort(key=lambda entry: entry[1], reverse=True)
    return leaderboard
