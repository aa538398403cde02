"""Pydantic models for pygeiger records, messages and responses."""

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
    parse_execute_msg,
    parse_query_msg,
)
from pygeiger.models.responses import Attribute, Leaderboard, LeaderboardEntry, Response, attr
from pygeiger.models.state import Config, ContractVersion, UserState

__all__ = [
    "Attribute",
    "Config",
    "ConfigQuery",
    "ContractVersion",
    "Env",
    "ExecuteMsg",
    "InstantiateMsg",
    "Leaderboard",
    "LeaderboardEntry",
    "LeaderboardQuery",
    "MeasureMsg",
    "MessageInfo",
    "MigrateMsg",
    "QueryMsg",
    "RadioactivityQuery",
    "ResetMsg",
    "Response",
    "UserState",
    "attr",
    "parse_execute_msg",
    "parse_query_msg",
]
