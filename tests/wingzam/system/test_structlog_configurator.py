"""Tests for the structlog configurator module."""

import json
import logging
import os
import sys
from unittest.mock import Mock, patch

import pytest
import structlog

from wingzam.config import WingzamConfig
from wingzam.config.models import LoggingConfig
from wingzam.system.structlog_configurator import (
    LoggingEnvironment,
    build_formatter,
    configure_structlog,
    detect_environment,
    get_git_version,
    shared_processors,
    static_context,
    wants_json,
)

PRODUCTION = LoggingEnvironment(is_docker=False, is_development=False)
DEVELOPMENT = LoggingEnvironment(is_docker=False, is_development=True)
DOCKER = LoggingEnvironment(is_docker=True, is_development=False)


@pytest.fixture
def test_config():
    """Create a config with neutral logging settings."""
    return WingzamConfig(
        site_name="Test Site",
        logging=LoggingConfig(level="INFO", json_logs=None, extra_fields={}),
    )


@pytest.fixture(autouse=True)
def restore_logging():
    """Drop handlers installed by the test and restore structlog defaults."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def mock_git():
    """Pin the git version reported in log entries."""
    with patch(
        "wingzam.system.structlog_configurator.get_git_version", return_value="main@abc12345"
    ) as mock_version:
        yield mock_version


class TestStaticContext:
    """Test the static_context processor."""

    def test_adds_fields(self):
        """Should add static fields to all log events."""
        processor = static_context({"service": "test", "version": "1.0.0"})

        result = processor(Mock(), "info", {"event": "test_event"})

        assert result == {"event": "test_event", "service": "test", "version": "1.0.0"}

    def test_overwrites_existing_fields(self):
        """Should overwrite existing fields with static values."""
        processor = static_context({"service": "override"})

        assert processor(Mock(), "info", {"service": "original"})["service"] == "override"


class TestEnvironmentDetection:
    """Test environment detection."""

    @pytest.mark.parametrize(
        "environment,expected",
        [(DOCKER, "docker"), (DEVELOPMENT, "development"), (PRODUCTION, "unknown")],
    )
    def test_environment_name(self, environment, expected):
        """Should label the deployment."""
        assert environment.name == expected

    @patch("wingzam.system.structlog_configurator.is_docker_environment", return_value=True)
    @patch.dict(os.environ, {}, clear=True)
    def test_docker(self, _mock_docker):
        """Should identify a Docker deployment."""
        assert detect_environment() == DOCKER

    @patch("wingzam.system.structlog_configurator.is_docker_environment", return_value=False)
    @patch.dict(os.environ, {"WINGZAM_ENV": "development"})
    def test_development(self, _mock_docker):
        """Should identify a development checkout."""
        assert detect_environment() == DEVELOPMENT

    @patch("wingzam.system.structlog_configurator.subprocess.run")
    def test_git_version(self, mock_run):
        """Should combine branch and short commit."""
        mock_run.side_effect = [
            Mock(returncode=0, stdout="main\n"),
            Mock(returncode=0, stdout="1a2b3c4d\n"),
        ]

        assert get_git_version() == "main@1a2b3c4d"

    @patch("wingzam.system.structlog_configurator.subprocess.run")
    def test_git_version_outside_checkout(self, mock_run):
        """Should mark parts git cannot resolve as unknown."""
        mock_run.return_value = Mock(returncode=128, stdout="")

        assert get_git_version() == "unknown@unknown"

    @patch("wingzam.system.structlog_configurator.subprocess.run", side_effect=FileNotFoundError)
    def test_git_version_without_git(self, _mock_run):
        """Should report unknown when git is not installed."""
        assert get_git_version() == "unknown"


class TestWantsJson:
    """Test the choice of renderer."""

    @pytest.mark.parametrize(
        "environment,expected",
        [(PRODUCTION, True), (DOCKER, True), (DEVELOPMENT, False)],
    )
    @patch.dict(os.environ, {}, clear=True)
    def test_auto_detect(self, test_config, environment, expected):
        """Should render JSON everywhere except development."""
        assert wants_json(test_config, environment) is expected

    @patch.dict(os.environ, {}, clear=True)
    def test_explicit_setting(self, test_config):
        """Should respect json_logs when set."""
        test_config.logging.json_logs = False
        assert wants_json(test_config, DOCKER) is False

        test_config.logging.json_logs = True
        assert wants_json(test_config, DEVELOPMENT) is True

    @patch.dict(os.environ, {"WINGZAM_JSON_LOGS": "true"})
    def test_development_override(self, test_config):
        """Should honour WINGZAM_JSON_LOGS in development."""
        test_config.logging.json_logs = False
        assert wants_json(test_config, DEVELOPMENT) is True


class TestProcessors:
    """Test processor and formatter assembly."""

    def test_static_fields(self, mock_git, test_config):
        """Should stamp service, version, deployment and site on every event."""
        test_config.logging.extra_fields = {"station": "north"}
        processors = shared_processors(test_config, DOCKER)

        event = processors[1](Mock(), "info", {"event": "hello"})

        assert event["service"] == "wingzam"
        assert event["version"] == "main@abc12345"
        assert event["deployment"] == "docker"
        assert event["site_name"] == "Test Site"
        assert event["station"] == "north"

    def test_include_caller(self, mock_git, test_config):
        """Should add callsite information when requested."""
        test_config.logging.include_caller = True

        processors = shared_processors(test_config, PRODUCTION)

        assert isinstance(processors[-1], structlog.processors.CallsiteParameterAdder)

    @patch.dict(os.environ, {}, clear=True)
    def test_formatter_renderer(self, mock_git, test_config):
        """Should end the chain with the chosen renderer."""
        json_formatter = build_formatter(test_config, PRODUCTION)
        console_formatter = build_formatter(test_config, DEVELOPMENT)

        assert isinstance(json_formatter.processors[-1], structlog.processors.JSONRenderer)
        assert isinstance(console_formatter.processors[-1], structlog.dev.ConsoleRenderer)


class TestConfigureStructlog:
    """Test the full configuration entry point."""

    @patch.dict(os.environ, {}, clear=True)
    def test_single_stdout_handler(self, mock_git, test_config):
        """Should replace existing handlers with one stdout handler."""
        logging.getLogger().addHandler(logging.NullHandler())
        test_config.logging.level = "warning"

        configure_structlog(test_config)

        root_logger = logging.getLogger()
        assert len(root_logger.handlers) == 1
        assert root_logger.handlers[0].stream is sys.stdout
        assert root_logger.level == logging.WARNING
        assert structlog.is_configured()

    @patch.dict(os.environ, {}, clear=True)
    def test_stdlib_records_rendered_as_json(self, mock_git, test_config, capsys):
        """Should render standard library records with extra fields and bound context."""
        configure_structlog(test_config)
        capsys.readouterr()

        structlog.contextvars.bind_contextvars(request_id="req-1")
        logging.getLogger("wingzam.test").info("Identified bird", extra={"bird": "Blue Jay"})

        entry = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert entry["event"] == "Identified bird"
        assert entry["bird"] == "Blue Jay"
        assert entry["request_id"] == "req-1"
        assert entry["logger"] == "wingzam.test"
        assert entry["level"] == "info"
        assert entry["service"] == "wingzam"
        assert entry["site_name"] == "Test Site"

    @patch.dict(os.environ, {}, clear=True)
    def test_structlog_loggers_rendered_as_json(self, mock_git, test_config, capsys):
        """Should render structlog loggers through the same handler."""
        configure_structlog(test_config)
        capsys.readouterr()

        structlog.get_logger("wingzam.test").info("configured", answer=42)

        entry = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert entry["event"] == "configured"
        assert entry["answer"] == 42
        assert entry["version"] == "main@abc12345"

    @patch.dict(os.environ, {}, clear=True)
    def test_unknown_level_falls_back_to_info(self, mock_git, test_config):
        """Should use INFO for unrecognized level names."""
        test_config.logging.level = "chatty"

        configure_structlog(test_config)

        assert logging.getLogger().level == logging.INFO
