# core/logger.py
import json
import logging
import os
import uuid
from logging.handlers import RotatingFileHandler
from typing import Any, Mapping, Optional

LOGGER_NAME = "api_todo_list"
LOG_FORMAT = "%(asctime)s [%(levelname)s]: %(message)s"
DATE_FORMAT = "%d/%m/%Y %H:%M:%S"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

SENSITIVE_FIELDS = frozenset(
    {"senha", "password", "token", "respostaSeguranca", "segredo", "cartao", "credito"}
)
REDACTED = "[REDACTED]"


def redact(data: Any) -> Any:
    """
    Copy of ``data`` with every sensitive key replaced by a fixed placeholder.
    Nested mappings and lists are walked; other values are returned as-is.
    """
    if isinstance(data, Mapping):
        return {
            key: REDACTED if key in SENSITIVE_FIELDS else redact(value)
            for key, value in data.items()
        }
    if isinstance(data, (list, tuple)):
        return [redact(item) for item in data]
    return data


class ContextFormatter(logging.Formatter):
    """Appends the structured ``context`` of a record as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = getattr(record, "context", None)
        if context:
            line = f"{line} {json.dumps(context, default=str, ensure_ascii=False)}"
        return line


def configure_logging(level: str = "info", log_dir: Optional[str] = "logs") -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    logger.propagate = False

    # calling twice (tests, reloads) must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = ContextFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

        errors = RotatingFileHandler(
            os.path.join(log_dir, "error.log"),
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUPS,
            encoding="utf-8",
        )
        errors.setLevel(logging.ERROR)
        errors.setFormatter(formatter)
        logger.addHandler(errors)

        combined = RotatingFileHandler(
            os.path.join(log_dir, "combined.log"),
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUPS,
            encoding="utf-8",
        )
        combined.setFormatter(formatter)
        logger.addHandler(combined)

    return logger


def new_operation_id() -> str:
    return uuid.uuid4().hex[:12]


class OperationLogger:
    """
    Operation-scoped logging on top of a plain ``logging.Logger``.

    ``start`` hands out a fresh operation id; every later event of the same
    call passes it back so the lines can be grouped. All context is redacted
    before it reaches a handler.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def log(self, level: int, message: str, exc_info=None, **context: Any) -> None:
        self.logger.log(level, message, extra={"context": redact(context)}, exc_info=exc_info)

    def debug(self, message: str, **context: Any) -> None:
        self.log(logging.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        self.log(logging.INFO, message, **context)

    def start(self, operation: str, message: str, **context: Any) -> str:
        operation_id = new_operation_id()
        self.log(
            logging.INFO,
            f"[{operation_id}] Starting {operation}: {message}",
            operation_id=operation_id,
            operation=operation,
            **context,
        )
        return operation_id

    def finish(self, operation_id: str, operation: str, message: str, **context: Any) -> None:
        self.log(
            logging.INFO,
            f"[{operation_id}] Finished {operation}: {message}",
            operation_id=operation_id,
            operation=operation,
            **context,
        )

    def warning(self, operation_id: str, message: str, **context: Any) -> None:
        self.log(logging.WARNING, f"[{operation_id}] {message}", operation_id=operation_id, **context)

    def failure(self, operation_id: str, operation: str, error: BaseException, **context: Any) -> None:
        self.log(
            logging.ERROR,
            f"[{operation_id}] Error in {operation}: {error}",
            exc_info=error,
            operation_id=operation_id,
            operation=operation,
            error={
                "message": str(error),
                "name": type(error).__name__,
                "status": getattr(error, "status_code", 500),
            },
            **context,
        )
