"""Ports (interfaces) used by the core composers.

The composers only need read access to one account's view of a realm, so
any snapshot or live store that satisfies this contract can be plugged in.
"""

from __future__ import annotations

from typing import Mapping, Optional, Protocol

from core.config import RealmContext
from core.models import User


class AccountStore(Protocol):
    """Read-only lookups required to build links and quotes."""

    @property
    def realm(self) -> RealmContext:
        ...

    @property
    def self_user_id(self) -> int:
        ...

    @property
    def users(self) -> Mapping[int, User]:
        ...

    def get_user(self, user_id: int) -> Optional[User]:
        ...

    def get_stream_name(self, stream_id: int) -> Optional[str]:
        ...
