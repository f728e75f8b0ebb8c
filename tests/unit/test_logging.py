"""Unit tests for portbot logging configuration."""

import logging
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from portbot.logging import sanitize_for_log, setup_logging, truncate_output


@pytest.fixture(autouse=True)
def reset_portbot_logger():
    """Drop the handlers a test attached to the portbot logger."""
    yield
    logger = logging.getLogger("portbot")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_console_only_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """No log file is written unless a directory is configured."""
        monkeypatch.delenv("PORTBOT_LOG_DIR", raising=False)

        logger = setup_logging()

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_creates_log_directory(self) -> None:
        """Log directory is created if it doesn't exist."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_dir = Path(tmpdir) / "nested" / "logs"
            setup_logging(log_dir=log_dir, console=False)

            assert log_dir.exists()

    def test_writes_to_log_file(self) -> None:
        """Log messages are written to the file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            logger = setup_logging(log_dir=tmpdir, console=False)
            logger.info("test message 123")

            content = (Path(tmpdir) / "portbot.log").read_text()
            assert "test message 123" in content

    def test_log_dir_from_environment(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with patch.dict("os.environ", {"PORTBOT_LOG_DIR": tmpdir}):
                setup_logging(console=False)

            assert (Path(tmpdir) / "portbot.log").exists()

    def test_log_format_includes_component_name(self) -> None:
        """Log entries include the component logger name."""
        with tempfile.TemporaryDirectory() as tmpdir:
            setup_logging(log_dir=tmpdir, console=False)
            logging.getLogger("portbot.backport").info("component test")

            content = (Path(tmpdir) / "portbot.log").read_text()
            assert " | INFO" in content
            assert " | portbot.backport | component test" in content

    def test_level_from_environment(self) -> None:
        with patch.dict("os.environ", {"PORTBOT_LOG_LEVEL": "WARNING"}):
            logger = setup_logging(console=False)

        assert logger.level == logging.WARNING

    def test_no_duplicate_handlers(self) -> None:
        """Calling setup twice does not duplicate handlers."""
        with tempfile.TemporaryDirectory() as tmpdir:
            setup_logging(log_dir=tmpdir, console=True)
            logger = setup_logging(log_dir=tmpdir, console=True)

            assert len(logger.handlers) == 2


@pytest.mark.unit
class TestTruncateOutput:
    """Tests for truncate_output."""

    def test_short_output_unchanged(self) -> None:
        assert truncate_output("short") == "short"

    def test_long_output_truncated(self) -> None:
        result = truncate_output("x" * 120, max_length=100)

        assert result.startswith("x" * 100)
        assert "truncated, 20 more chars" in result


@pytest.mark.unit
class TestSanitizeForLog:
    """Tests for sanitize_for_log."""

    def test_redacts_tokens(self) -> None:
        text = "push https://x-access-token:ghs_" + "a" * 36 + "@github.com/o/r.git"

        result = sanitize_for_log(text)

        assert "ghs_" not in result
        assert "x-access-token:[REDACTED]@github.com" in result

    def test_redacts_bearer(self) -> None:
        assert sanitize_for_log("Authorization: Bearer abc.def") == (
            "Authorization: Bearer [REDACTED]"
        )

    def test_plain_text_unchanged(self) -> None:
        assert sanitize_for_log("nothing secret") == "nothing secret"
