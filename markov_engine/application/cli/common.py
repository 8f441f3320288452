from typing import Optional
import argparse
import uuid
import structlog

from markov_engine.infrastructure.config.settings import LoggingSettings
from markov_engine.infrastructure.observability.logging import setup_logging

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def add_logging_arguments(parser: argparse.ArgumentParser) -> None:
    """Options shared by every driver command"""
    parser.add_argument("--log-level", default=None, help="Log level (default: $MARKOV_LOG_LEVEL or WARNING)")
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Log renderer (default: $MARKOV_LOG_FORMAT or console)",
    )


def configure_logging(args: argparse.Namespace, run_name: str) -> str:
    """Set up structlog for one run and bind its run id; returns the run id"""

    settings = LoggingSettings.from_env(log_level=args.log_level, log_format=args.log_format)
    setup_logging(
        log_level=settings.log_level,
        log_format=settings.log_format,
        service_name=settings.service_name,
    )
    run_id = f"{run_name}-{uuid.uuid4().hex[:12]}"
    structlog.contextvars.bind_contextvars(run_id=run_id)
    return run_id


def release_run_context(run_id: Optional[str]) -> None:
    if run_id:
        structlog.contextvars.unbind_contextvars("run_id")
