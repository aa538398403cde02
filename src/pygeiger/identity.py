"""Identity validation for the query path.

Mutating calls trust the host-supplied sender. Queries take arbitrary
strings, so they are checked against the bech32 address shape and must
already be in canonical (lowercase) form.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from pygeiger.exceptions import InvalidIdentityError

IdentityValidator = Callable[[str], str]
"""Maps a raw input to its canonical identity or raises InvalidIdentityError."""

_BECH32_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_ADDRESS_RE = re.compile(rf"^(?P<hrp>[\x21-\x7e]+)1(?P<data>[{_BECH32_CHARSET}]{{6,}})$")
_MAX_LENGTH = 90


class AddressValidator:
    """Validate bech32-shaped addresses, optionally pinned to one prefix.

    Only the shape is checked; the checksum is left to the host that
    authenticated the address in the first place.
    """

    def __init__(self, prefix: str | None = None) -> None:
        if prefix is not None and (not prefix or prefix != prefix.lower()):
            raise ValueError(f"address prefix must be non-empty lowercase, got {prefix!r}")
        self.prefix = prefix

    def __call__(self, address: str) -> str:
        if not address:
            raise InvalidIdentityError("address is empty", identity=address)
        if address != address.strip():
            raise InvalidIdentityError("address has surrounding whitespace", identity=address)
        if address != address.lower():
            raise InvalidIdentityError("address is not normalized (must be lowercase)", identity=address)
        if len(address) > _MAX_LENGTH:
            raise InvalidIdentityError(
                f"address length must be at most {_MAX_LENGTH}, got {len(address)}",
                identity=address,
            )
        # The separator is the last "1"; the hrp itself may contain ones.
        match = _ADDRESS_RE.match(address)
        if match is None:
            raise InvalidIdentityError("address is not bech32-shaped", identity=address)
        if self.prefix is not None and match.group("hrp") != self.prefix:
            raise InvalidIdentityError(
                f"address prefix {match.group('hrp')!r} does not match {self.prefix!r}",
                identity=address,
            )
        return address


def accept_any(address: str) -> str:
    """Permissive validator: any non-empty string is an identity."""
    if not address:
        raise InvalidIdentityError("address is empty", identity=address)
    return address
