from __future__ import annotations

import io
import os
import sys
import pytest
import logging
import threading
from typing import Generator
from unittest.mock import patch, MagicMock

from cratekeeper.utils.logger import (
    ColoredFormatter,
    setup_logging,
    get_logger,
    is_logging_configured,
    disable_logging,
)


@pytest.fixture
def clean_logger_state() -> Generator[None, None, None]:
    """Reset the cratekeeper logger before and after each test.

    Yields:
        None
    """
    import cratekeeper.utils.logger as logger_module

    root_logger = logging.getLogger("cratekeeper")
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
    logger_module._logging_configured = False

    yield

    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
    logger_module._logging_configured = False


@pytest.fixture
def captured_stream() -> io.StringIO:
    """Provide a StringIO stream for capturing log output."""
    return io.StringIO()


def _make_record(level: int, msg: str, exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


@pytest.mark.unit
class TestColoredFormatter:
    """Tests for ColoredFormatter ANSI color formatting."""

    def test_init_default_values(self) -> None:
        """Test ColoredFormatter uses color by default."""
        formatter = ColoredFormatter("%(levelname)s: %(message)s")

        assert formatter.use_color is True
        assert formatter._fmt == "%(levelname)s: %(message)s"

    def test_init_custom_values(self) -> None:
        """Test ColoredFormatter accepts custom configuration."""
        formatter = ColoredFormatter(
            "%(levelname)s: %(message)s",
            datefmt="%Y-%m-%d",
            use_color=False,
        )

        assert formatter.use_color is False
        assert formatter.datefmt == "%Y-%m-%d"

    def test_color_codes_defined(self) -> None:
        """Test ANSI color codes exist for every standard level."""
        for level in (
            logging.DEBUG,
            logging.INFO,
            logging.WARNING,
            logging.ERROR,
            logging.CRITICAL,
        ):
            assert ColoredFormatter.COLORS[level].startswith("\033[")

        assert ColoredFormatter.RESET == "\033[0m"

    def test_format_with_color_enabled(self) -> None:
        """Test levelname is wrapped in ANSI codes when color applies."""
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=True)
        record = _make_record(logging.INFO, "Test message")

        with patch.object(ColoredFormatter, "_should_use_color", return_value=True):
            result = formatter.format(record)

        assert result.startswith(ColoredFormatter.COLORS[logging.INFO])
        assert "INFO" in result
        assert "Test message" in result

    def test_format_with_color_disabled(self) -> None:
        """Test no ANSI codes are added when use_color=False."""
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=False)
        record = _make_record(logging.WARNING, "Warning message")

        result = formatter.format(record)

        assert "\033[" not in result
        assert result == "WARNING: Warning message"

    def test_format_restores_record_levelname(self) -> None:
        """Test the record is left unchanged for other handlers."""
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=True)
        record = _make_record(logging.ERROR, "Error message")

        with patch.object(ColoredFormatter, "_should_use_color", return_value=True):
            formatter.format(record)

        assert record.levelname == "ERROR"

    def test_format_with_exception_info(self) -> None:
        """Test exception tracebacks are included in formatted output."""
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=True)

        try:
            raise ValueError("Test error")
        except ValueError:
            exc_info = sys.exc_info()

        record = _make_record(logging.ERROR, "An error occurred", exc_info=exc_info)

        with patch.object(ColoredFormatter, "_should_use_color", return_value=True):
            result = formatter.format(record)

        assert "An error occurred" in result
        assert "ValueError: Test error" in result

    def test_format_custom_level_uncolored(self) -> None:
        """Test levels without a color entry are printed plain."""
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=True)
        record = _make_record(25, "between info and warning")

        with patch.object(ColoredFormatter, "_should_use_color", return_value=True):
            result = formatter.format(record)

        assert "\033[" not in result
        assert result.endswith("between info and warning")

    def test_should_use_color_no_color_env(self) -> None:
        """Test NO_COLOR disables colors."""
        with patch.dict(os.environ, {"NO_COLOR": "1"}):
            assert ColoredFormatter._should_use_color() is False

    def test_should_use_color_ci_env(self) -> None:
        """Test CI environments disable colors."""
        with patch.dict(os.environ, {"CI": "true"}, clear=True):
            assert ColoredFormatter._should_use_color() is False

    @pytest.mark.parametrize("is_tty", [True, False], ids=["tty", "pipe"])
    def test_should_use_color_follows_tty(self, is_tty: bool) -> None:
        """Test color follows whether stderr is a terminal."""
        with patch.dict(os.environ, {}, clear=True):
            with patch.object(sys.stderr, "isatty", return_value=is_tty):
                assert ColoredFormatter._should_use_color() is is_tty

    def test_should_use_color_no_isatty_attribute(self) -> None:
        """Test streams without isatty() disable colors."""
        with patch.dict(os.environ, {}, clear=True):
            mock_stderr = MagicMock()
            del mock_stderr.isatty

            with patch("sys.stderr", mock_stderr):
                assert ColoredFormatter._should_use_color() is False

    def test_should_use_color_isatty_raises(self) -> None:
        """Test isatty() raising OSError disables colors."""
        with patch.dict(os.environ, {}, clear=True):
            with patch.object(
                sys.stderr, "isatty", side_effect=OSError("Not supported")
            ):
                assert ColoredFormatter._should_use_color() is False


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging configuration function."""

    def test_setup_default_config(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        """Test default setup is INFO level with a single stream handler."""
        setup_logging(stream=captured_stream)

        logger = logging.getLogger("cratekeeper")
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)
        assert logger.propagate is False

    def test_setup_custom_level(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        """Test custom levels apply to logger and handler."""
        setup_logging(level=logging.DEBUG, stream=captured_stream)

        logger = logging.getLogger("cratekeeper")
        assert logger.level == logging.DEBUG
        assert logger.handlers[0].level == logging.DEBUG

    @pytest.mark.parametrize("level", ["debug", "DEBUG"])
    def test_setup_level_name(
        self, clean_logger_state: None, captured_stream: io.StringIO, level: str
    ) -> None:
        """Test level names are accepted in any case."""
        setup_logging(level=level, stream=captured_stream)

        assert logging.getLogger("cratekeeper").level == logging.DEBUG

    def test_setup_unknown_level_name(self, clean_logger_state: None) -> None:
        """Test unknown level names are rejected without touching handlers."""
        with pytest.raises(ValueError, match="Unknown log level"):
            setup_logging(level="chatty")

        assert is_logging_configured() is False

    def test_setup_verbose_format(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        """Test verbose mode includes the logger name."""
        setup_logging(verbose=True, stream=captured_stream)

        get_logger("checker").info("verbose line")

        output = captured_stream.getvalue()
        assert "cratekeeper.checker" in output
        assert "verbose line" in output

    def test_setup_clears_previous_handlers(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        """Test repeated setup does not stack handlers."""
        setup_logging(stream=io.StringIO())
        setup_logging(stream=captured_stream)

        logger = logging.getLogger("cratekeeper")
        assert len(logger.handlers) == 1
        assert logger.handlers[0].stream is captured_stream

    def test_setup_sets_configured_flag(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        """Test setup marks logging as configured."""
        assert is_logging_configured() is False

        setup_logging(stream=captured_stream)

        assert is_logging_configured() is True

    def test_setup_filters_debug_at_info_level(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        """Test DEBUG records are dropped at INFO level."""
        with patch.dict(os.environ, {"NO_COLOR": "1"}):
            setup_logging(level=logging.INFO, stream=captured_stream)

        logger = get_logger("data_store")
        logger.debug("hidden")
        logger.info("shown")

        output = captured_stream.getvalue()
        assert "hidden" not in output
        assert "INFO: shown" in output

    def test_setup_thread_safe(self, clean_logger_state: None) -> None:
        """Test concurrent setup calls leave exactly one handler."""
        threads = [
            threading.Thread(target=setup_logging, kwargs={"stream": io.StringIO()})
            for _ in range(10)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(logging.getLogger("cratekeeper").handlers) == 1


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger namespacing."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            (None, "cratekeeper"),
            ("", "cratekeeper"),
            ("cratekeeper", "cratekeeper"),
            ("checker", "cratekeeper.checker"),
            ("cratekeeper.core.checker", "cratekeeper.core.checker"),
            ("core.data_store", "cratekeeper.core.data_store"),
        ],
        ids=["none", "empty", "root", "short", "qualified", "dotted"],
    )
    def test_get_logger_names(
        self, clean_logger_state: None, name, expected: str
    ) -> None:
        """Test names are placed under the cratekeeper hierarchy."""
        assert get_logger(name).name == expected

    def test_get_logger_adds_null_handler(self, clean_logger_state: None) -> None:
        """Test unconfigured loggers get a NullHandler."""
        logger = get_logger("unconfigured_module")

        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_get_logger_same_instance(self, clean_logger_state: None) -> None:
        """Test repeated calls return the same logger."""
        assert get_logger("config") is get_logger("config")

    def test_child_logger_uses_root_handler(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        """Test module loggers write through the configured handler."""
        setup_logging(stream=captured_stream)

        get_logger("config").warning("child message")

        assert "child message" in captured_stream.getvalue()


@pytest.mark.unit
class TestDisableLogging:
    """Tests for disable_logging."""

    def test_disable_silences_output(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        """Test no output is produced after disabling."""
        setup_logging(stream=captured_stream)
        disable_logging()

        get_logger("checker").error("should not appear")

        assert captured_stream.getvalue() == ""

    def test_disable_resets_state(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        """Test disabling resets level, handlers and the configured flag."""
        setup_logging(stream=captured_stream)
        disable_logging()

        logger = logging.getLogger("cratekeeper")
        assert logger.level == logging.NOTSET
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.NullHandler)
        assert is_logging_configured() is False

    def test_disable_idempotent(self, clean_logger_state: None) -> None:
        """Test disabling twice is harmless."""
        disable_logging()
        disable_logging()

        assert len(logging.getLogger("cratekeeper").handlers) == 1
