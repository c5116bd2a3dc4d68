# tests/test_logging_config.py

import io
import logging
import sys

from project.logging_config import LOG_FORMAT, configure_logging


def test_installs_handler_on_given_stream(bare_root_logger):
    buf = io.StringIO()
    handler = configure_logging(logging.INFO, stream=buf)

    assert bare_root_logger.handlers == [handler]
    assert bare_root_logger.level == logging.INFO
    assert handler.formatter._fmt == LOG_FORMAT

    logging.getLogger("project.loader").info("Loaded %d entries", 3)
    assert "[INFO] project.loader: Loaded 3 entries" in buf.getvalue()


def test_defaults_to_stderr(bare_root_logger):
    handler = configure_logging()
    assert handler.stream is sys.stderr
    assert bare_root_logger.level == logging.WARNING


def test_leaves_existing_setup_alone(bare_root_logger):
    existing = logging.NullHandler()
    bare_root_logger.addHandler(existing)

    assert configure_logging(logging.DEBUG, stream=io.StringIO()) is None
    assert bare_root_logger.handlers == [existing]
