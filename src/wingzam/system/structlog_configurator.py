"""Structlog setup for Wingzam.

Application modules log through the standard library (``logging.getLogger(__name__)``
with ``extra=`` fields). Those records and any emitted through structlog loggers are
rendered by one structlog ``ProcessorFormatter`` on a single stdout handler:

- JSON lines in Docker and production deployments
- colored console output in development (``WINGZAM_ENV=development``), unless
  ``WINGZAM_JSON_LOGS=true`` or ``logging.json_logs`` asks for JSON

Every entry carries the service name, the git version, the deployment environment
and any context bound with ``structlog.contextvars`` (such as the request id).
"""

import logging
import os
import subprocess
import sys
from collections.abc import Callable
from typing import Any, NamedTuple

import structlog

from wingzam.config.models import WingzamConfig


class LoggingEnvironment(NamedTuple):
    """Where the process runs, as far as log formatting is concerned."""

    is_docker: bool
    is_development: bool

    @property
    def name(self) -> str:
        """Label recorded as ``deployment`` on every entry."""
        if self.is_docker:
            return "docker"
        if self.is_development:
            return "development"
        return "unknown"


def is_docker_environment() -> bool:
    """Check if running in a Docker container."""
    return os.path.exists("/.dockerenv") or os.environ.get("DOCKER_CONTAINER") == "true"


def detect_environment() -> LoggingEnvironment:
    """Detect the deployment environment from the filesystem and WINGZAM_ENV."""
    return LoggingEnvironment(
        is_docker=is_docker_environment(),
        is_development=os.environ.get("WINGZAM_ENV") == "development",
    )


def _git(*args: str) -> str:
    result = subprocess.run(["git", *args], capture_output=True, text=True, timeout=5)
    return result.stdout.strip() if result.returncode == 0 else "unknown"


def get_git_version() -> str:
    """Get the checked out version as ``branch@sha8``, or ``unknown`` without git."""
    try:
        branch = _git("rev-parse", "--abbrev-ref", "HEAD")
        commit = _git("rev-parse", "--short=8", "HEAD")
    except (subprocess.SubprocessError, OSError):
        return "unknown"
    return f"{branch}@{commit}"


def static_context(fields: dict[str, str]) -> Callable:
    """Build a processor stamping fixed fields onto every entry."""

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.update(fields)
        return event_dict

    return processor


def wants_json(config: WingzamConfig, environment: LoggingEnvironment) -> bool:
    """Decide between JSON and console rendering."""
    if environment.is_development and os.environ.get("WINGZAM_JSON_LOGS", "").lower() == "true":
        return True
    if config.logging.json_logs is not None:
        return config.logging.json_logs
    return environment.is_docker or not environment.is_development


def shared_processors(config: WingzamConfig, environment: LoggingEnvironment) -> list:
    """Processors applied to both structlog and standard library entries."""
    fields = {
        "service": "wingzam",
        "version": get_git_version(),
        "deployment": environment.name,
    }
    if config.site_name:
        fields["site_name"] = config.site_name
    fields.update(config.logging.extra_fields)

    processors: list = [
        structlog.contextvars.merge_contextvars,
        static_context(fields),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if config.logging.include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder())
    return processors


def build_formatter(
    config: WingzamConfig, environment: LoggingEnvironment
) -> structlog.stdlib.ProcessorFormatter:
    """Build the formatter rendering every record on the root handler."""
    if wants_json(config, environment):
        renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderers = [structlog.dev.ConsoleRenderer(colors=True)]
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            *shared_processors(config, environment),
            structlog.stdlib.ExtraAdder(),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *renderers,
        ],
    )


def configure_structlog(config: WingzamConfig) -> None:
    """Configure structlog and the root logger.

    Args:
        config: The WingzamConfig instance containing logging settings.
    """
    environment = detect_environment()
    level = logging.getLevelName(config.logging.level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            *shared_processors(config, environment),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter(config, environment))

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    structlog.get_logger(__name__).info(
        "Structured logging configured",
        log_level=config.logging.level,
        environment=environment.name,
        json_output=wants_json(config, environment),
    )
