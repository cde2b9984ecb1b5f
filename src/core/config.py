"""Core configuration dataclasses.

Config parsing lives in settings.py, but these dataclasses define the shape
the core expects so adapters and the app layer can build them safely.
"""

from __future__ import annotations

from dataclasses import dataclass

# Servers at this feature level or above understand the "dm" operator.
DM_OPERATOR_FEATURE_LEVEL = 177


@dataclass(frozen=True)
class RealmContext:
    """The realm a link points into, and what its server supports."""

    realm_url: str
    zulip_feature_level: int
