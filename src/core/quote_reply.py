"""Quote-and-reply message composition.

The result looks like it does in the web app:

    @_**Iago|5** [said](link to message):
    ```quote
    message content
    ```
"""

from __future__ import annotations

import logging

from core.fences import wrap_with_backtick_fence
from core.inline import inline_link, mention
from core.models import Message, User
from core.narrow import sendable_narrow_of_message
from core.narrow_links import narrow_link
from core.ports import AccountStore

LOGGER = logging.getLogger(__name__)

QUOTE_INFO_STRING = "quote"


def _sender(store: AccountStore, message: Message) -> User:
    sender = store.get_user(message.sender_id)
    assert sender is not None, f"sender {message.sender_id} of message {message.id} is not known"
    return sender


def quote_header(store: AccountStore, message: Message) -> str:
    """The "@_**Name|id** [said](link)" line shared by both quote forms."""

    sender = _sender(store, message)
    narrow = sendable_narrow_of_message(message, store.self_user_id)
    url = narrow_link(store, narrow.api_encode(), near_message_id=message.id)
    # The mention could omit |<id> when the name is unambiguous, but that
    # costs a scan of every user and the long link is noisy anyway.
    return f"{mention(sender, silent=True)} {inline_link('said', url)}:"


def quote_and_reply_placeholder(store: AccountStore, message: Message) -> str:
    """What we show while fetching the target message's raw Markdown."""

    return f"{quote_header(store, message)} *(loading message {message.id})*\n"


def quote_and_reply(store: AccountStore, message: Message, raw_content: str) -> str:
    """Quote-and-reply body for the message, quoting raw_content."""

    LOGGER.debug("Quoting message %s (%s chars)", message.id, len(raw_content))
    quoted = wrap_with_backtick_fence(raw_content, info_string=QUOTE_INFO_STRING)
    return f"{quote_header(store, message)}\n{quoted}"
