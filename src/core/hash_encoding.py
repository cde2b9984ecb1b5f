"""URL fragment encoding compatible with the web client's narrow links.

Mirrors encodeHashComponent in the web app (web/shared/src/internal_url.ts).
The substitution table is a fixed convention shared with that client; links
must come out byte-identical, so oddities here are kept on purpose.
"""

from __future__ import annotations

import re
from urllib.parse import quote

# Characters JavaScript's encodeURIComponent leaves alone, on top of the
# letters, digits and "_.-~" that urllib always keeps.
_URI_COMPONENT_SAFE = "!*'()"

_HASH_REPLACEMENTS = {
    "%": ".",
    "(": ".28",
    ")": ".29",
    ".": ".2E",
}

_HASH_REPLACEMENT_PATTERN = re.compile(r"[%().]")


def encode_uri_component(value: str) -> str:
    """Percent-encode value the way encodeURIComponent does."""

    return quote(value, safe=_URI_COMPONENT_SAFE, encoding="utf-8", errors="surrogatepass")


def encode_hash_component(value: str) -> str:
    """Encode value for use as one path segment of a narrow fragment."""

    # One pass, so the "." produced for "%" is not itself rewritten.
    return _HASH_REPLACEMENT_PATTERN.sub(
        lambda match: _HASH_REPLACEMENTS[match.group(0)],
        encode_uri_component(value),
    )
