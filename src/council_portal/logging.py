"""Logging setup shared by the web app and CLI entry points."""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_NOISY_LOGGERS = (
    "azure.core.pipeline.policies.http_logging_policy",
    "azure.cosmos",
    "httpx",
)


def configure_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure root logging with a console handler and an optional file handler."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=level.upper(),
        format=_FORMAT,
        handlers=handlers,
        force=True,
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
