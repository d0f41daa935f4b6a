"""ASGI entry point: ``uvicorn wingzam.web.main:app``."""

import logging

from wingzam.config import ConfigManager
from wingzam.system.structlog_configurator import configure_structlog
from wingzam.web.core.factory import create_app

# Loggers created at import time of the routers must see the final configuration
configure_structlog(ConfigManager().load())

# Requests are logged by StructuredRequestLoggingMiddleware
logging.getLogger("uvicorn.access").disabled = True
logging.getLogger("uvicorn.error").setLevel(logging.INFO)

app = create_app()
