"""Structlog-based logging configuration for macaudio.

Library modules log through the standard ``logging`` module. Applications that
embed macaudio call ``configure_structlog`` once at startup: the root handler then
renders those stdlib records and any structlog loggers through one processor chain,
so both end up with the same fields, timestamps and output format.

Output selection:
- ``logging.json_logs`` true: JSON lines (useful when piping to a collector)
- ``logging.json_logs`` false: console output
- ``logging.json_logs`` unset: console output unless MACAUDIO_JSON_LOGS=true
"""

import logging
import os
import platform
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import Any

import structlog

from macaudio.config.models import AudioConfig


def get_package_version() -> str:
    """Get the installed macaudio version, or 'unknown' when running from a checkout."""
    try:
        return version("macaudio")
    except PackageNotFoundError:
        return "unknown"


class StaticFields:
    """Processor stamping fixed fields (service, version, ...) on every entry."""

    def __init__(self, fields: dict[str, str]) -> None:
        self.fields = fields

    def __call__(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]  # noqa: ANN401
    ) -> dict[str, Any]:
        for key, value in self.fields.items():
            event_dict.setdefault(key, value)
        return event_dict


def _use_json_output(config: AudioConfig) -> bool:
    if config.logging.json_logs is not None:
        return config.logging.json_logs
    return os.environ.get("MACAUDIO_JSON_LOGS", "false").lower() == "true"


def _shared_processors(config: AudioConfig) -> list:
    """Processors applied to structlog events and stdlib records alike."""
    static_fields = {
        "service": "macaudio",
        "version": get_package_version(),
        "platform": platform.system().lower(),
        **config.logging.extra_fields,
    }

    processors = [
        structlog.contextvars.merge_contextvars,
        StaticFields(static_fields),
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if config.logging.include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder())
    return processors


def _build_renderer(config: AudioConfig) -> Any:  # noqa: ANN401
    if _use_json_output(config):
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def _install_root_handler(config: AudioConfig, shared: list) -> None:
    """Replace the root handlers with one stdout handler rendering through structlog."""
    root_logger = logging.getLogger()
    log_level = getattr(logging, config.logging.level.upper(), logging.INFO)

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _build_renderer(config),
        ],
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def configure_structlog(config: AudioConfig) -> None:
    """Configure logging for macaudio and the embedding application.

    Args:
        config: The AudioConfig instance containing logging settings.
    """
    shared = _shared_processors(config)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _install_root_handler(config, shared)

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=config.logging.level,
        json_output=_use_json_output(config),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound to the stdlib logger ``name``."""
    return structlog.get_logger(name)
