"""Narrows and their API encoding (core domain).

A narrow is a filtered view of the message list. Clients hold it as a
Narrow object; links and server requests use the flat "API" form, an
ordered list of operator/operand elements.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ClassVar, Iterable, List, Tuple, Union

from core.config import DM_OPERATOR_FEATURE_LEVEL
from core.models import DmMessage, Message, StreamMessage

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiNarrowStream:
    operator: ClassVar[str] = "stream"

    operand: int
    negated: bool = False


@dataclass(frozen=True)
class ApiNarrowTopic:
    operator: ClassVar[str] = "topic"

    operand: str
    negated: bool = False


@dataclass(frozen=True)
class ApiNarrowDmModern:
    """DM element using the "dm" operator (feature level 177 and up)."""

    operator: ClassVar[str] = "dm"

    operand: Tuple[int, ...]
    negated: bool = False


@dataclass(frozen=True)
class ApiNarrowPmWith:
    """DM element using the legacy "pm-with" operator."""

    operator: ClassVar[str] = "pm-with"

    operand: Tuple[int, ...]
    negated: bool = False


@dataclass(frozen=True)
class ApiNarrowDm:
    """A DM element whose operator depends on the server.

    Never serialize this directly; call resolve_dm_element first.
    """

    operand: Tuple[int, ...]
    negated: bool = False

    def resolve(self, legacy: bool) -> Union[ApiNarrowDmModern, ApiNarrowPmWith]:
        if legacy:
            return ApiNarrowPmWith(operand=self.operand, negated=self.negated)
        return ApiNarrowDmModern(operand=self.operand, negated=self.negated)


@dataclass(frozen=True)
class ApiNarrowMessageId:
    operator: ClassVar[str] = "id"

    operand: int
    negated: bool = False


ApiNarrowElement = Union[
    ApiNarrowStream,
    ApiNarrowTopic,
    ApiNarrowDmModern,
    ApiNarrowPmWith,
    ApiNarrowDm,
    ApiNarrowMessageId,
]

ApiNarrow = List[ApiNarrowElement]


def resolve_dm_element(
    element: ApiNarrowDm, zulip_feature_level: int
) -> Union[ApiNarrowDmModern, ApiNarrowPmWith]:
    """Pick the DM operator the server at this feature level understands."""

    legacy = zulip_feature_level < DM_OPERATOR_FEATURE_LEVEL
    LOGGER.debug(
        "Resolving DM element at feature level %s (legacy=%s)", zulip_feature_level, legacy
    )
    return element.resolve(legacy=legacy)


@dataclass(frozen=True)
class StreamNarrow:
    """All messages in one stream."""

    stream_id: int

    def api_encode(self) -> ApiNarrow:
        return [ApiNarrowStream(self.stream_id)]


@dataclass(frozen=True)
class TopicNarrow:
    """All messages in one topic of a stream."""

    stream_id: int
    topic: str

    def api_encode(self) -> ApiNarrow:
        return [ApiNarrowStream(self.stream_id), ApiNarrowTopic(self.topic)]


@dataclass(frozen=True)
class DmNarrow:
    """One DM conversation, identified by all of its participants.

    all_recipient_ids is sorted and includes the self-user.
    """

    all_recipient_ids: Tuple[int, ...]
    self_user_id: int = field(compare=False)

    @classmethod
    def with_users(cls, user_ids: Iterable[int], self_user_id: int) -> "DmNarrow":
        """Build the narrow from the other participants, adding the self-user."""

        return cls(
            all_recipient_ids=tuple(sorted({*user_ids, self_user_id})),
            self_user_id=self_user_id,
        )

    def api_encode(self) -> ApiNarrow:
        return [ApiNarrowDm(self.all_recipient_ids)]


SendableNarrow = Union[TopicNarrow, DmNarrow]


def sendable_narrow_of_message(message: Message, self_user_id: int) -> SendableNarrow:
    """Return the narrow for the conversation that contains the message."""

    if isinstance(message, StreamMessage):
        return TopicNarrow(stream_id=message.stream_id, topic=message.topic)
    if isinstance(message, DmMessage):
        return DmNarrow.with_users(message.recipient_ids, self_user_id)
    raise TypeError(f"Unsupported message type: {type(message).__name__}")
