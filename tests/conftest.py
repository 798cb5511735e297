"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages and
that settings from the developer's shell never leak into tests.
"""

import os
import sys
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of jlcov modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("jlcov"):
        del sys.modules[module_name]


@pytest.fixture(autouse=True)
def clean_jlcov_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop JLCOV__* overrides and any file bound by an earlier test."""
    import structlog

    for key in list(os.environ):
        if key.upper().startswith("JLCOV__"):
            monkeypatch.delenv(key)
    structlog.contextvars.clear_contextvars()
