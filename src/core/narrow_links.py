"""Narrow links: URLs that open a narrow, optionally near one message."""

from __future__ import annotations

import logging
from typing import Iterable, Optional
from urllib.parse import urlsplit

from core.hash_encoding import encode_hash_component
from core.narrow import (
    ApiNarrowDm,
    ApiNarrowDmModern,
    ApiNarrowElement,
    ApiNarrowMessageId,
    ApiNarrowPmWith,
    ApiNarrowStream,
    ApiNarrowTopic,
    resolve_dm_element,
)
from core.ports import AccountStore

LOGGER = logging.getLogger(__name__)

UNKNOWN_STREAM_SLUG = "unknown"

# Three or more participants make a group conversation.
_GROUP_DM_MIN_SIZE = 3


def _stream_slug(store: AccountStore, stream_id: int) -> str:
    name = store.get_stream_name(stream_id)
    if name is None:
        LOGGER.debug("Stream %s not in directory, linking as %r", stream_id, UNKNOWN_STREAM_SLUG)
        name = UNKNOWN_STREAM_SLUG
    return f"{stream_id}-{encode_hash_component(name.replace(' ', '-'))}"


def _dm_operand(user_ids: Iterable[int], singular_suffix: str) -> str:
    ids = [str(user_id) for user_id in user_ids]
    suffix = "group" if len(ids) >= _GROUP_DM_MIN_SIZE else singular_suffix
    return f"{','.join(ids)}-{suffix}"


def _encode_operand(store: AccountStore, element: ApiNarrowElement) -> str:
    if isinstance(element, ApiNarrowStream):
        return _stream_slug(store, element.operand)
    if isinstance(element, ApiNarrowTopic):
        return encode_hash_component(element.operand)
    if isinstance(element, ApiNarrowDmModern):
        return _dm_operand(element.operand, "dm")
    if isinstance(element, ApiNarrowPmWith):
        return _dm_operand(element.operand, "pm")
    if isinstance(element, ApiNarrowDm):
        raise AssertionError("ApiNarrowDm should have been resolved")
    if isinstance(element, ApiNarrowMessageId):
        return str(element.operand)
    raise TypeError(f"Unsupported narrow element: {type(element).__name__}")


def build_narrow_fragment(
    store: AccountStore,
    narrow: Iterable[ApiNarrowElement],
    near_message_id: Optional[int] = None,
) -> str:
    """Return the "narrow/..." fragment, without the leading "#"."""

    parts = ["narrow"]
    for element in narrow:
        parts.append("/")
        if element.negated:
            parts.append("-")

        if isinstance(element, ApiNarrowDm):
            element = resolve_dm_element(element, store.realm.zulip_feature_level)

        operand = _encode_operand(store, element)
        parts.append(f"{element.operator}/{operand}")

    # "near" says where to look in the message list rather than filtering it,
    # so it is a parameter here instead of a narrow element.
    if near_message_id is not None:
        parts.append(f"/near/{near_message_id}")
    return "".join(parts)


def narrow_link(
    store: AccountStore,
    narrow: Iterable[ApiNarrowElement],
    near_message_id: Optional[int] = None,
) -> str:
    """A URL to the given narrow on the store's realm.

    Pass near_message_id to include /near/<id> in the link.
    """

    fragment = build_narrow_fragment(store, narrow, near_message_id)
    return urlsplit(store.realm.realm_url)._replace(fragment=fragment).geturl()
