"""Test bootstrap: keep SQLite files out of the project tree.

Must run before any `core` import, because the config service and the
audit logger resolve their paths at import time.
"""
from __future__ import annotations

import os
import tempfile
from pathlib import Path

_TMP = Path(tempfile.mkdtemp(prefix="ramstool-tests-"))
os.environ.setdefault("RAMSTOOL_DATABASE__LOGGING", str(_TMP / "logs.db"))
os.environ.setdefault("RAMSTOOL_DATABASE__SIGNATURES", str(_TMP / "rams-tool.db"))
os.environ.setdefault("RAMSTOOL_DISPLAY__TIMEZONE", "UTC")
