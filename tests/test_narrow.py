from __future__ import annotations

import pytest

from core.models import DmMessage, Message, StreamMessage
from core.narrow import (
    ApiNarrowDm,
    ApiNarrowDmModern,
    ApiNarrowPmWith,
    ApiNarrowStream,
    ApiNarrowTopic,
    DmNarrow,
    StreamNarrow,
    TopicNarrow,
    resolve_dm_element,
    sendable_narrow_of_message,
)


def test_resolve_dm_element_by_feature_level() -> None:
    element = ApiNarrowDm((5, 6), negated=True)

    modern = resolve_dm_element(element, 177)
    assert modern == ApiNarrowDmModern((5, 6), negated=True)
    assert modern.operator == "dm"

    legacy = resolve_dm_element(element, 176)
    assert legacy == ApiNarrowPmWith((5, 6), negated=True)
    assert legacy.operator == "pm-with"


def test_topic_narrow_api_encode() -> None:
    assert TopicNarrow(48, "mobile dev").api_encode() == [
        ApiNarrowStream(48),
        ApiNarrowTopic("mobile dev"),
    ]
    assert StreamNarrow(48).api_encode() == [ApiNarrowStream(48)]


def test_dm_narrow_adds_self_and_sorts() -> None:
    narrow = DmNarrow.with_users([7, 5], self_user_id=6)
    assert narrow.all_recipient_ids == (5, 6, 7)
    assert narrow.api_encode() == [ApiNarrowDm((5, 6, 7))]


def test_sendable_narrow_of_stream_message() -> None:
    message = StreamMessage(id=10, sender_id=5, stream_id=48, topic="mobile")
    assert sendable_narrow_of_message(message, self_user_id=1) == TopicNarrow(48, "mobile")


def test_sendable_narrow_of_dm_message() -> None:
    message = DmMessage(id=10, sender_id=5, recipient_ids=(1, 5))
    narrow = sendable_narrow_of_message(message, self_user_id=1)
    assert isinstance(narrow, DmNarrow)
    assert narrow.all_recipient_ids == (1, 5)


def test_sendable_narrow_of_self_dm() -> None:
    message = DmMessage(id=10, sender_id=1, recipient_ids=(1,))
    narrow = sendable_narrow_of_message(message, self_user_id=1)
    assert narrow.all_recipient_ids == (1,)


def test_sendable_narrow_rejects_bare_message() -> None:
    with pytest.raises(TypeError):
        sendable_narrow_of_message(Message(id=10, sender_id=5), self_user_id=1)
