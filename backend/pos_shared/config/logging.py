"""
Structured logging for the BuffetPOS backend (stdlib logging).

Loggers accept keyword context next to the message:

    logger.info("Table assigned", table_id=str(table_id), access_code=mask_code(code))

The keywords end up in record.extra_data. Production renders one JSON object
per line; other environments get a coloured single line. Both include the
request id and client address bound by CorrelationIdMiddleware.

Security-relevant events (logins, rejected tokens and access codes, table
occupancy changes) go to the "security.audit" logger through audit_event(),
which also copies the request context into the event itself so it survives
any handler configuration.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from pos_shared.config.settings import Settings, get_settings
from pos_shared.infrastructure.correlation import CorrelationIdFilter, current_request_context

HANDLER_NAME = "buffet-pos"

NOISY_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
}


def _request_fields(record: logging.LogRecord) -> dict[str, str]:
    fields = {}
    for name in ("request_id", "client"):
        value = getattr(record, name, "-")
        if value and value != "-":
            fields[name] = value
    return fields


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, for log aggregation."""

    def __init__(self, include_source: bool = False):
        super().__init__()
        self.include_source = include_source

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_request_fields(record),
        }
        data = getattr(record, "extra_data", None)
        if data:
            payload["data"] = data
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if self.include_source:
            payload["source"] = f"{record.pathname}:{record.lineno} in {record.funcName}"
        return json.dumps(payload, default=str)


class DevelopmentFormatter(logging.Formatter):
    """Coloured single-line output for local runs."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"
    DIM = "\033[2m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        parts = [f"{color}{self.formatTime(record, '%H:%M:%S')} {record.levelname:<8}{self.RESET}"]

        request_id = _request_fields(record).get("request_id")
        if request_id:
            parts.append(f"{self.DIM}[{request_id[:8]}]{self.RESET}")
        parts.append(f"{record.name}: {record.getMessage()}")

        data = getattr(record, "extra_data", None)
        if data:
            parts.append("(" + ", ".join(f"{k}={v}" for k, v in data.items()) + ")")

        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class StructuredLogger(logging.Logger):
    """Logger whose debug/info/warning/... accept arbitrary keyword context."""

    def _log(
        self,
        level: int,
        msg: object,
        args: Any,
        exc_info: Any = None,
        extra: dict[str, Any] | None = None,
        stack_info: bool = False,
        stacklevel: int = 1,
        **data: Any,
    ) -> None:
        merged = dict(extra or {})
        merged["extra_data"] = data or None
        super()._log(
            level,
            msg,
            args,
            exc_info=exc_info,
            extra=merged,
            stack_info=stack_info,
            stacklevel=stacklevel + 1,
        )


logging.setLoggerClass(StructuredLogger)


def setup_logging(settings: Settings | None = None) -> None:
    """
    Install the application handler on the root logger. Safe to call again:
    only a handler previously installed here is replaced.
    """
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setLevel(level)
    handler.addFilter(CorrelationIdFilter())
    if settings.environment == "production":
        handler.setFormatter(StructuredFormatter(include_source=settings.debug))
    else:
        handler.setFormatter(DevelopmentFormatter())

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    for name, noisy_level in NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(noisy_level)


def get_logger(name: str) -> StructuredLogger:
    return logging.getLogger(name)  # type: ignore[return-value]


def mask_email(email: str | None) -> str:
    """"manager@test.com" -> "ma***@test.com"."""
    if not email:
        return "<no-email>"
    local, sep, domain = email.partition("@")
    if not sep:
        return "***@invalid"
    keep = 2 if len(local) > 2 else 1
    return f"{local[:keep]}***@{domain}"


def mask_code(code: str | None) -> str:
    """
    Mask a table access code for logging.

    Only the first 4 characters are kept so log lines can be correlated
    without handing out a usable code.
    """
    if not code:
        return "<no-code>"
    if len(code) <= 4:
        return "****"
    return f"{code[:4]}..."


rest_api_logger = get_logger("pos_api")
auth_logger = get_logger("pos_api.auth")
tables_logger = get_logger("pos_api.tables")
security_audit_logger = get_logger("security.audit")


def audit_event(category: str, event_type: str, success: bool = True, **context: Any) -> None:
    """
    Write one security audit event.

    Inside a request the event also carries request_id, ip_address and path,
    unless the caller passed them.
    """
    request = current_request_context()
    if request is not None:
        context.setdefault("request_id", request.request_id)
        context.setdefault("ip_address", request.client)
        context.setdefault("path", request.path)

    security_audit_logger.log(
        logging.INFO if success else logging.WARNING,
        f"{category}_AUDIT: {event_type}",
        event_type=event_type,
        success=success,
        **context,
    )


def audit_auth_event(
    event_type: str,
    user_id: str | None = None,
    email: str | None = None,
    success: bool = True,
    reason: str | None = None,
    ip_address: str | None = None,
    **extra: Any,
) -> None:
    """LOGIN, REGISTER, TOKEN_REJECTED, ACCESS_CODE_REJECTED. Emails are masked."""
    if ip_address is not None:
        extra["ip_address"] = ip_address
    audit_event(
        "AUTH",
        event_type,
        success=success,
        user_id=user_id,
        email=mask_email(email) if email else None,
        reason=reason,
        **extra,
    )


def audit_table_event(event_type: str, table_id: Any, user_id: str | None = None, **extra: Any) -> None:
    """TABLE_ASSIGNED, TABLE_RELEASED. Access codes must be passed masked."""
    audit_event("TABLE", event_type, table_id=str(table_id), user_id=user_id, **extra)
