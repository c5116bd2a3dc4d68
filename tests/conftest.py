# tests/conftest.py

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Callable, Dict

import pytest

# Package imports in tests (`import adapters`, `import project`) resolve from src/.
SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

CUSTOM_PREFIX = "event.custom("


def _parse_custom_line(line: str) -> Dict:
    assert line.startswith(CUSTOM_PREFIX)
    end = line.rindex("})") + 1
    return json.loads(line[len(CUSTOM_PREFIX):end])


@pytest.fixture
def custom_body() -> Callable[[str], Dict]:
    """Parses the JSON object out of a compiled `event.custom({...})` line."""
    return _parse_custom_line


@pytest.fixture
def bare_root_logger(monkeypatch):
    """
    Root logger with no handlers, so configure_logging() installs its own.

    pytest's capture handlers are restored afterwards along with the level.
    """
    root = logging.getLogger()
    level = root.level
    monkeypatch.setattr(root, "handlers", [])
    yield root
    root.setLevel(level)


@pytest.hookimpl(hookwrapper=True, trylast=True)
def pytest_runtest_call(item):
    """
    pytest's logging plugin attaches its capture handlers again at the start of
    the call phase; strip them inside that phase for bare_root_logger tests.
    """
    if "bare_root_logger" not in item.fixturenames:
        yield
        return
    root = logging.getLogger()
    saved = root.handlers
    root.handlers = []
    try:
        yield
    finally:
        root.handlers = saved
