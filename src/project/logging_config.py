# src/project/logging_config.py
"""
Logging setup for the recipe-builder entrypoints.

Log records go to stderr by default: `recipe-builder compile` and
`recipe-builder scaffold` write their artifact to stdout, and that stream
must stay pipeable into a .js / .yaml file.

    from project.logging_config import configure_logging
    configure_logging(logging.INFO)
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: int = logging.WARNING,
    stream: Optional[IO[str]] = None,
) -> Optional[logging.Handler]:
    """
    Attach one stream handler to the root logger unless it already has one.

    Args:
        level: root level (the CLI passes INFO for -v, WARNING otherwise)
        stream: target stream; defaults to sys.stderr at call time

    Returns the installed handler, or None when logging was already set up by
    the host application (or by pytest).
    """
    root = logging.getLogger()
    if root.handlers:
        return None

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)
    return handler
