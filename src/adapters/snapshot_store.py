"""JSON snapshot account store adapter.

Implements the core AccountStore port over a register-style JSON snapshot
of users, streams, and messages.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

from core.config import RealmContext
from core.models import DmMessage, Message, Stream, StreamMessage, User

LOGGER = logging.getLogger(__name__)


def _user_from_payload(entry: dict[str, Any]) -> User:
    try:
        return User(user_id=int(entry["user_id"]), full_name=str(entry["full_name"]))
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Malformed user entry: {entry!r}") from e


def _stream_from_payload(entry: dict[str, Any]) -> Stream:
    try:
        return Stream(stream_id=int(entry["stream_id"]), name=str(entry["name"]))
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Malformed stream entry: {entry!r}") from e


def _message_from_payload(entry: dict[str, Any]) -> Message:
    message_type = entry.get("type")
    try:
        if message_type == "stream":
            return StreamMessage(
                id=int(entry["id"]),
                sender_id=int(entry["sender_id"]),
                stream_id=int(entry["stream_id"]),
                topic=str(entry["subject"]),
            )
        if message_type == "private":
            recipients = sorted(int(r["id"]) for r in entry["display_recipient"])
            return DmMessage(
                id=int(entry["id"]),
                sender_id=int(entry["sender_id"]),
                recipient_ids=tuple(recipients),
            )
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Malformed message entry: {entry!r}") from e
    raise ValueError(f"Unsupported message type: {message_type!r}")


class SnapshotStore:
    """In-memory snapshot that satisfies the AccountStore contract."""

    def __init__(
        self,
        realm: RealmContext,
        self_user_id: int,
        users: Mapping[int, User],
        streams: Mapping[int, Stream],
        messages: Optional[Mapping[int, Message]] = None,
    ) -> None:
        self._realm = realm
        self._self_user_id = self_user_id
        self._users = dict(users)
        self._streams = dict(streams)
        self._messages = dict(messages or {})

    @classmethod
    def from_payload(
        cls, payload: dict[str, Any], realm: RealmContext, self_user_id: int
    ) -> "SnapshotStore":
        """Build a store from an already-decoded snapshot."""

        users = {u.user_id: u for u in map(_user_from_payload, payload.get("realm_users", []))}
        streams = {s.stream_id: s for s in map(_stream_from_payload, payload.get("streams", []))}
        messages = {m.id: m for m in map(_message_from_payload, payload.get("messages", []))}
        LOGGER.info(
            "Snapshot loaded: users=%s, streams=%s, messages=%s",
            len(users),
            len(streams),
            len(messages),
        )
        return cls(realm, self_user_id, users, streams, messages)

    @classmethod
    def from_file(cls, path: str, realm: RealmContext, self_user_id: int) -> "SnapshotStore":
        """Load a snapshot from a JSON file."""

        with open(path, "r", encoding="utf-8") as handle:
            payload = json.load(handle)
        if not isinstance(payload, dict):
            raise ValueError(f"Snapshot must be a JSON object: {path}")
        return cls.from_payload(payload, realm, self_user_id)

    @property
    def realm(self) -> RealmContext:
        return self._realm

    @property
    def self_user_id(self) -> int:
        return self._self_user_id

    @property
    def users(self) -> Mapping[int, User]:
        return self._users

    def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def get_stream_name(self, stream_id: int) -> Optional[str]:
        stream = self._streams.get(stream_id)
        return stream.name if stream else None

    def get_message(self, message_id: int) -> Message:
        """Return a message from the snapshot, or raise KeyError."""

        try:
            return self._messages[message_id]
        except KeyError:
            raise KeyError(f"Message {message_id} is not in the snapshot") from None
