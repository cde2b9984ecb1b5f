"""Backtick fence helpers for embedding Markdown in a code block.

See the CommonMark rules for fenced code blocks:
  https://spec.commonmark.org/0.30/#fenced-code-blocks
"""

from __future__ import annotations

import re
from typing import Optional

# CommonMark ends a line at "\r\n", "\n", or a bare "\r".
_LINE_ENDING = re.compile(r"\r\n|\r|\n")

# Up to three spaces of indentation, the backticks (captured so we can count
# them), then an info string that cannot contain backticks. Matched per line.
_OPENING_BACKTICK_FENCE = re.compile(r" {0,3}(`{3,})[^`]*")

_MIN_FENCE_LENGTH = 3


def get_unused_backtick_fence_length(content: str) -> int:
    """Return the shortest backtick fence longer than any opening fence in content.

    Every line is considered, not just block starts, because content is
    untrusted and may hold nested fences. Indented code blocks and tilde
    fences make no difference here.
    """

    result = _MIN_FENCE_LENGTH
    for line in _LINE_ENDING.split(content):
        match = _OPENING_BACKTICK_FENCE.fullmatch(line)
        if match:
            result = max(result, len(match.group(1)) + 1)
    return result


def wrap_with_backtick_fence(content: str, info_string: Optional[str] = None) -> str:
    """Wrap Markdown content in opening and closing backtick fences.

    For this content:

        ```javascript
        console.log('Hello world!');
        ```

    info_string="quote" gives:

        ````quote
        ```javascript
        console.log('Hello world!');
        ```
        ````
    """

    assert info_string is None or "`" not in info_string, "info string must not contain backticks"
    assert info_string is None or info_string.strip() == info_string, "info string must be trimmed"

    # The opening fence must be too long for anything in the content to close
    # it, and the closing fence long enough to close anything left open.
    fence = "`" * get_unused_backtick_fence_length(content)

    parts = [fence, info_string or "", "\n", content]
    if content and not content.endswith("\n"):
        parts.append("\n")
    parts.extend([fence, "\n"])
    return "".join(parts)
