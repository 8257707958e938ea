"""
Structured logging setup shared by the Lambda handler and the CLI.

PURPOSE:
- Render forecast events (request.received, forecast.generated, response.*) as
  one JSON object per line so they can be queried by field (request_id,
  scenario, quality...).
- Let each surface choose where those lines go. Lambda writes to stdout, where
  CloudWatch picks them up. The CLI writes to stderr, since its stdout carries
  forecast JSON.

CONTEXT:
- Records go through the stdlib "finforecast" logger, so module loggers such as
  finforecast.pipeline inherit the handler configured here.
"""

from __future__ import annotations
import logging
import os
import sys
from typing import IO, Optional

import structlog

LOGGER_NAME = "finforecast"


def _stamp_service(service: str, env: str):
    """Processor adding service/env to every event, including module loggers."""
    def processor(logger, method_name, event_dict):
        event_dict.setdefault("service", service)
        event_dict.setdefault("env", env)
        return event_dict
    return processor


def configure_logging(
    service: str = "finforecast",
    stream: Optional[IO[str]] = None,
    default_level: str = "INFO",
):
    """
    Configure structured JSON logging for one surface.

    parameters:
    - service: str – value of the "service" field on every line.
    - stream: text stream for log lines (default: sys.stdout at call time).
    - default_level: str – used when LOG_LEVEL is unset.

    returns:
    - structlog.BoundLogger – every line it (or any module logger) writes
      carries service and env.

    behaviour:
    - Calling again replaces the previous handler and processors, so the last
      surface to configure decides the stream. Loggers are not cached, so
      module-level loggers pick the change up.
    - The "finforecast" logger does not propagate to the root logger.

    example log entry:
    {
      "event": "forecast.generated",
      "level": "info",
      "timestamp": "2025-10-21T13:00:00Z",
      "service": "finforecast",
      "env": "dev",
      "scenario": "base",
      "quality": 45
    }
    """
    level = os.getenv("LOG_LEVEL", default_level).upper()
    env = os.getenv("ENV", "dev")

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    app_logger = logging.getLogger(LOGGER_NAME)
    app_logger.handlers[:] = [handler]
    app_logger.setLevel(getattr(logging, level, logging.INFO))
    app_logger.propagate = False

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            _stamp_service(service, env),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    return structlog.get_logger(LOGGER_NAME)
