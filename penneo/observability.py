"""Structured logging helpers for connector traffic."""

from __future__ import annotations

import logging

TRACE = 5

logging.addLevelName(TRACE, "TRACE")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def request_log_fields(
    *,
    component: str,
    operation: str,
    method: str | None = None,
    url: str | None = None,
    status_code: int | None = None,
    **details: object,
) -> dict[str, object]:
    fields: dict[str, object] = {
        "component": component,
        "operation": operation,
    }
    if method is not None:
        fields["method"] = method
    if url is not None:
        fields["url"] = url
    if status_code is not None:
        fields["statusCode"] = status_code
    for key, value in details.items():
        if value is None:
            continue
        fields[key] = value
    return fields


def log_request_event(
    logger: logging.Logger,
    *,
    level: int,
    message: str,
    component: str,
    operation: str,
    method: str | None = None,
    url: str | None = None,
    status_code: int | None = None,
    exc_info: bool = False,
    **details: object,
) -> None:
    logger.log(
        level,
        message,
        exc_info=exc_info,
        extra=request_log_fields(
            component=component,
            operation=operation,
            method=method,
            url=url,
            status_code=status_code,
            **details,
        ),
    )


def parse_log_level(value: str | int) -> int:
    """Resolve a level name such as ``"trace"`` or ``"INFO"`` to its number."""
    if isinstance(value, int):
        return value
    normalized = value.strip().upper()
    if normalized.isdigit():
        return int(normalized)
    level = logging.getLevelName(normalized)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value!r}")
    return level


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Install a root handler for command-line use."""
    logging.basicConfig(level=parse_log_level(level), format=_LOG_FORMAT)


__all__ = [
    "TRACE",
    "configure_logging",
    "log_request_event",
    "parse_log_level",
    "request_log_fields",
]
