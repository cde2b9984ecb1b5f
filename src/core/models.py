"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any server payload shapes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class User:
    """A realm member, as far as mentions are concerned."""

    user_id: int
    full_name: str


@dataclass(frozen=True)
class Stream:
    """A stream (channel) in the realm's directory."""

    stream_id: int
    name: str


@dataclass(frozen=True)
class Message:
    """Minimal message shape; content is passed around separately."""

    id: int
    sender_id: int


@dataclass(frozen=True)
class StreamMessage(Message):
    """A message sent to a topic within a stream."""

    stream_id: int
    topic: str


@dataclass(frozen=True)
class DmMessage(Message):
    """A direct message; recipient_ids lists every participant, sender included."""

    recipient_ids: Tuple[int, ...]
