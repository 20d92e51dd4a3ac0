"""Logging configuration.

Provides structured, rotating logs with optional JSON output. Binds lightweight contextvars
(request_id/user_id/ip) to every record for correlation across middleware and handlers.
"""

import json
import logging
import logging.handlers
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

# Context variables used across middleware/handlers to enrich logs
request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
user_id_ctx: ContextVar[Optional[int]] = ContextVar("user_id", default=None)
ip_ctx: ContextVar[Optional[str]] = ContextVar("ip_address", default=None)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JSONFormatter(logging.Formatter):
    """Emit logs as JSON for aggregation (ELK/Splunk/etc.)."""

    EXTRA_FIELDS = (
        ("user_id", "user_id"),
        ("request_id", "request_id"),
        ("ip_address", "ip_address"),
        ("endpoint", "endpoint"),
        ("method", "method"),
        ("status_code", "status_code"),
        ("duration", "duration_ms"),
        ("project_id", "project_id"),
    )

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for attr, key in self.EXTRA_FIELDS:
            if hasattr(record, attr):
                log_data[key] = getattr(record, attr)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Add ANSI colors to console output for local readability."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"

        result = super().format(record)

        # Reset levelname for other handlers
        record.levelname = levelname

        return result


class ContextEnricher(logging.Filter):
    """Inject contextvars (request_id, user_id, ip_address) into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - trivial
        request_id = request_id_ctx.get()
        user_id = user_id_ctx.get()
        ip_address = ip_ctx.get()
        if request_id and not hasattr(record, "request_id"):
            record.request_id = request_id
        if user_id and not hasattr(record, "user_id"):
            record.user_id = user_id
        if ip_address and not hasattr(record, "ip_address"):
            record.ip_address = ip_address
        return True


def bind_request_context(
    *,
    request_id: Optional[str] = None,
    user_id: Optional[int] = None,
    ip_address: Optional[str] = None,
):
    """Bind request context into contextvars; returns tokens for reset."""
    tokens = []
    if request_id is not None:
        tokens.append(("request_id", request_id_ctx.set(request_id)))
    if user_id is not None:
        tokens.append(("user_id", user_id_ctx.set(user_id)))
    if ip_address is not None:
        tokens.append(("ip_address", ip_ctx.set(ip_address)))
    return tokens


def reset_request_context(tokens):
    """Reset bound contextvars using tokens returned by bind_request_context."""
    ctx_by_key = {
        "request_id": request_id_ctx,
        "user_id": user_id_ctx,
        "ip_address": ip_ctx,
    }
    for key, token in reversed(tokens):
        ctx_by_key[key].reset(token)


def _rotating_handler(path: Path, level: int, max_bytes: int, backup_count: int):
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
        delay=True,
    )
    handler.setLevel(level)
    return handler


def setup_logging(
    log_level: str = "INFO",
    log_dir: Optional[str] = None,
    app_name: str = "projecthub",
    max_bytes: int = 10 * 1024 * 1024,  # 10 MB
    backup_count: int = 5,
    use_json: bool = False,
    use_colors: bool = True,
) -> None:
    """Configure root logging.

    Args:
        log_level: Minimum logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory to store log files; if None, logs only to console.
        app_name: Application name used in log filenames.
        max_bytes: Max size per log file before rotation.
        backup_count: Number of rotated files to keep.
        use_json: If True, use JSON for file handlers (better for aggregation).
        use_colors: If True, add ANSI colors to console output.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    def _reset_handlers(logger: logging.Logger) -> None:
        """Close and remove any existing handlers to avoid descriptor leaks."""
        for handler in list(logger.handlers):
            try:
                handler.flush()
            finally:
                handler.close()
                logger.removeHandler(handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    _reset_handlers(root_logger)
    context_filter = ContextEnricher()
    root_logger.addFilter(context_filter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    formatter_cls = ColoredFormatter if use_colors else logging.Formatter
    console_handler.setFormatter(formatter_cls(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(console_handler)

    access_logger = logging.getLogger("access")
    _reset_handlers(access_logger)
    access_logger.setLevel(logging.INFO)
    access_logger.addFilter(context_filter)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        general_handler = _rotating_handler(
            log_path / f"{app_name}.log", logging.DEBUG, max_bytes, backup_count
        )
        error_handler = _rotating_handler(
            log_path / f"{app_name}_error.log", logging.ERROR, max_bytes, backup_count
        )
        for handler in (general_handler, error_handler):
            handler.setFormatter(
                JSONFormatter()
                if use_json
                else logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
            )
            root_logger.addHandler(handler)

        access_handler = _rotating_handler(
            log_path / f"{app_name}_access.log", logging.INFO, max_bytes, backup_count
        )
        access_handler.setFormatter(
            JSONFormatter()
            if use_json
            else logging.Formatter(
                "%(asctime)s | %(method)s %(endpoint)s | Status: %(status_code)s | "
                "Duration: %(duration)sms | IP: %(ip_address)s",
                datefmt=DATE_FORMAT,
            )
        )
        access_logger.addHandler(access_handler)
        access_logger.propagate = False
    else:
        access_logger.propagate = True

    # Suppress noisy loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)

    logging.info(
        f"Logging configured. Level: {log_level}, Directory: {log_dir or 'console only'}"
    )


def log_request(
    method: str,
    endpoint: str,
    status_code: int,
    duration_ms: float,
    ip_address: str,
    user_id: Optional[int] = None,
    request_id: Optional[str] = None,
) -> None:
    """
    Log an HTTP request with structured data.

    Args:
        method: HTTP method (GET, POST, etc.)
        endpoint: Request endpoint/path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
        ip_address: Client IP address
        user_id: User ID if authenticated
        request_id: Unique request ID for tracking
    """
    logger = logging.getLogger("access")
    extra = {
        "method": method,
        "endpoint": endpoint,
        "status_code": status_code,
        "duration": f"{duration_ms:.2f}",
        "ip_address": ip_address,
    }

    if user_id:
        extra["user_id"] = user_id
    if request_id:
        extra["request_id"] = request_id

    message = f"{method} {endpoint} - {status_code} - {duration_ms:.2f}ms"
    logger.info(message, extra=extra)
