"""Inline Markdown snippets: @-mentions and inline links."""

from __future__ import annotations

from itertools import islice
from typing import Mapping, Optional

from core.models import User


def _is_name_ambiguous(user: User, users: Optional[Mapping[int, User]]) -> bool:
    if users is None:
        return True
    same_name = (u for u in users.values() if u.full_name == user.full_name)
    return len(list(islice(same_name, 2))) == 2


def mention(user: User, silent: bool = False, users: Optional[Mapping[int, User]] = None) -> str:
    """An @-mention, like @**Chris Bobbe|13313**.

    To omit the "|13313" part whenever the name is unambiguous, pass a
    mapping of all users we know about. That means a linear scan through
    them, so avoid it on performance-sensitive paths.
    """

    user_id_part = f"|{user.user_id}" if _is_name_ambiguous(user, users) else ""
    return f"@{'_' if silent else ''}**{user.full_name}{user_id_part}**"


def inline_link(visible_text: str, destination: Optional[str] = None) -> str:
    """A CommonMark inline link: [visible_text](destination).

    Nothing is escaped. Square brackets in visible_text or parentheses in
    destination can give a surprising result.
    """

    # TODO: escape square brackets in visible_text, e.g. as HTML character references.
    return f"[{visible_text}]({destination or ''})"
