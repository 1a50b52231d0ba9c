"""
Structured logging for the service.

Every record gets the current correlation id through ``RequestContextFilter``;
``LeaveJsonFormatter`` emits one JSON object per line with the ``extra``
fields the services attach (employee_id, leave_request_id, days, ...).
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Union
from pythonjsonlogger import jsonlogger
from contextvars import ContextVar

# Set per request by CorrelationIdMiddleware
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

TEXT_FORMAT = "%(asctime)s %(levelname)-7s [%(request_id)s] %(name)s: %(message)s"
JSON_FORMAT = "%(timestamp) %(level) %(name) %(request_id) %(message)"


class RequestContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


class LeaveJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        if log_record.get("request_id") == "-":
            del log_record["request_id"]


def setup_logging(level: Union[int, str] = logging.INFO, json_output: bool = True) -> None:
    root = logging.getLogger()
    root.setLevel(level)
    # Importing the app twice (tests, reloaders) must not duplicate output
    if any(getattr(h, "_leave_management", False) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler._leave_management = True
    handler.addFilter(RequestContextFilter())
    handler.setFormatter(LeaveJsonFormatter(JSON_FORMAT) if json_output else logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
