"""
Tests for logging setup — console levels, progress lines, log file.
"""

import logging
from pathlib import Path

import pytest

from inkwell.core.observability.logging_config import (
    PROGRESS_LOGGER,
    _parse_level,
    progress_logger,
    setup_logging,
)


class TestParseLevel:
    def test_names(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("ERROR") == logging.ERROR

    def test_fallback(self):
        assert _parse_level(None) == logging.WARNING
        assert _parse_level("") == logging.WARNING
        assert _parse_level("loud") == logging.WARNING


class TestProgressLines:
    def test_shown_bare_at_default_level(self, capsys):
        setup_logging()
        progress_logger("convert").info("Converting %s", "hello.md")

        assert capsys.readouterr().err == "Converting hello.md\n"

    def test_diagnostics_hidden_at_default_level(self, capsys):
        setup_logging()
        logging.getLogger("inkwell.core.services.convert").info("internal detail")

        assert capsys.readouterr().err == ""

    def test_hidden_when_quiet(self, capsys):
        setup_logging(level="ERROR")
        progress_logger("preview").info("Changed: a.md")

        assert capsys.readouterr().err == ""

    def test_warnings_still_formatted(self, capsys):
        setup_logging()
        progress_logger("convert").warning("Skipped %s", "plain.md")

        assert "Skipped plain.md" in capsys.readouterr().err

    def test_verbose_keeps_progress_bare(self, capsys):
        setup_logging(level="INFO")
        progress_logger("publish").info("remote: done")
        logging.getLogger("inkwell.core.services.publish").info("exited")

        err = capsys.readouterr().err.splitlines()
        assert err[0] == "remote: done"
        assert "[inkwell.core.services.publish] exited" in err[1]

    @pytest.mark.parametrize("level", ["WARNING", "ERROR"])
    def test_progress_logger_level(self, level: str):
        setup_logging(level=level)
        enabled = logging.getLogger(PROGRESS_LOGGER).isEnabledFor(logging.INFO)
        assert enabled is (level == "WARNING")


class TestSetupLogging:
    def test_single_console_handler(self):
        setup_logging(level="INFO")
        setup_logging(level="INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_file_handler(self, tmp_path: Path):
        log_file = tmp_path / "ink.log"
        setup_logging(level="ERROR", log_file=str(log_file), log_file_level="DEBUG")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        logging.getLogger("inkwell.test").debug("to the file only")
        for handler in root.handlers:
            handler.flush()

        assert "to the file only" in log_file.read_text()

    def test_third_party_quieted(self):
        setup_logging(level="INFO")
        assert logging.getLogger("werkzeug").level == logging.WARNING
        assert logging.getLogger("watchdog").level == logging.WARNING

    def test_debug_keeps_third_party(self):
        logging.getLogger("werkzeug").setLevel(logging.NOTSET)
        setup_logging(level="DEBUG")
        assert logging.getLogger("werkzeug").level == logging.NOTSET
