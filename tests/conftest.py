from __future__ import annotations

import os

# settings.py reads its config at import time; point it at the test fixtures.
FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")
os.environ["ZCOMPOSE_CONFIG"] = os.path.join(FIXTURES, "config.json")
