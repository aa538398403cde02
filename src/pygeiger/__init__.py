"""pygeiger - Daily radioactivity counter with streaks and a leaderboard."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pygeiger")
except PackageNotFoundError:
    __version__ = "0+local"
from pygeiger.client import GeigerCounter
from pygeiger.config import GeigerConfig
from pygeiger.exceptions import (
    CounterOverflowError,
    GeigerConfigError,
    GeigerError,
    InvalidIdentityError,
    InvalidMessageError,
    NotFoundError,
    RateLimitedError,
    StoreError,
    UnauthorizedError,
)
from pygeiger.identity import AddressValidator
from pygeiger.models import (
    Config,
    Env,
    MessageInfo,
    Response,
    UserState,
)
from pygeiger.state import MemoryStorage, SqliteStorage, StateStore

__all__ = [
    "__version__",
    "AddressValidator",
    "Config",
    "CounterOverflowError",
    "Env",
    "GeigerConfig",
    "GeigerConfigError",
    "GeigerCounter",
    "GeigerError",
    "InvalidIdentityError",
    "InvalidMessageError",
    "MemoryStorage",
    "MessageInfo",
    "NotFoundError",
    "RateLimitedError",
    "Response",
    "SqliteStorage",
    "StateStore",
    "StoreError",
    "UnauthorizedError",
    "UserState",
]
