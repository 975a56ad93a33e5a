"""Unit tests for langcatalog.logging.setup module."""

import importlib
import logging
from unittest.mock import patch

import structlog
from structlog.testing import capture_logs

from langcatalog.logging import configure_logging, get_module_logger
from langcatalog.logging import setup


class TestIsTestEnvironment:
    """Tests for _is_test_environment."""

    def test_returns_true_during_test_run(self):
        assert setup._is_test_environment() is True


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_returns_logger(self):
        logger = configure_logging()
        assert hasattr(logger, "bind")
        assert hasattr(logger, "info")

    def test_suppresses_in_test_env(self):
        """Test configure_logging silences the root logger under pytest."""
        configure_logging(log_level="DEBUG")
        assert logging.root.level == logging.CRITICAL + 1

    def test_production_uses_json_renderer(self):
        with patch.object(setup, "_is_test_environment", return_value=False), patch.object(
            setup.structlog, "configure"
        ) as mock_configure, patch.object(setup.logging, "basicConfig") as mock_basic:
            configure_logging(log_level="warning", is_production=True)

        processors = mock_configure.call_args.kwargs["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert mock_basic.call_args.kwargs["level"] == logging.WARNING

    def test_development_uses_console_renderer(self):
        with patch.object(setup, "_is_test_environment", return_value=False), patch.object(
            setup.structlog, "configure"
        ) as mock_configure, patch.object(setup.logging, "basicConfig"):
            configure_logging(is_production=False)

        processors = mock_configure.call_args.kwargs["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_unknown_level_defaults_to_info(self):
        with patch.object(setup, "_is_test_environment", return_value=False), patch.object(
            setup.structlog, "configure"
        ), patch.object(setup.logging, "basicConfig") as mock_basic:
            configure_logging(log_level="chatty", is_production=True)

        assert mock_basic.call_args.kwargs["level"] == logging.INFO


class TestGetModuleLogger:
    """Tests for get_module_logger."""

    def test_binds_calling_module(self):
        logger = get_module_logger()
        context = structlog.get_context(logger.bind())

        assert context["module_path"] == __name__
        assert context["component"] == __name__.split(".")[-1]

    def test_library_loggers(self):
        from langcatalog.i18n import builder

        context = structlog.get_context(builder.logger.bind())
        assert context == {
            "component": "builder",
            "module_path": "langcatalog.i18n.builder",
        }

    def test_logging_methods_dont_raise(self):
        logger = get_module_logger()
        logger.debug("debug_event", key="value")
        logger.info("info_event", count=1)
        logger.warning("warning_event")
        logger.error("error_event", error="boom")

    def test_import_leaves_logging_unconfigured(self):
        """Importing the library configures neither structlog nor the root logger."""
        with patch.object(setup.structlog, "configure") as mock_configure, patch.object(
            setup.logging, "basicConfig"
        ) as mock_basic:
            importlib.reload(setup)

        mock_configure.assert_not_called()
        mock_basic.assert_not_called()

    def test_resolves_configuration_on_first_use(self):
        """Module loggers resolve the structlog configuration when they first log."""
        logger = get_module_logger()
        with capture_logs() as captured:
            logger.info("late_event", key="value")

        assert captured == [
            {
                "event": "late_event",
                "key": "value",
                "log_level": "info",
                "component": __name__.split(".")[-1],
                "module_path": __name__,
            }
        ]
