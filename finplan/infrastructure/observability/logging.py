"""Structured JSON logging"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from finplan.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON lines tagged with service and environment"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name
        log_record["environment"] = settings.environment


def setup_logging(level: str = "INFO") -> None:
    """Route the root logger to stdout as JSON, replacing any previous handlers"""
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    root.addHandler(handler)


def log_projection(
    request_id: str,
    forecast_months: int,
    start_month: str | None,
    shortfall_months: int,
    hero_free_cents: int,
    duration_ms: float,
) -> None:
    """One line per projection: horizon, shortfall count and the current month's free money"""
    logging.info(
        "Projection built",
        extra={
            "request_id": request_id,
            "step": "projection_complete",
            "forecast_months": forecast_months,
            "start_month": start_month,
            "shortfall_months": shortfall_months,
            "hero_free_cents": hero_free_cents,
            "duration_ms": duration_ms,
        },
    )


def log_store_write(request_id: str, key: str, operation: str) -> None:
    # key only, never the value
    logging.info(
        "Store updated",
        extra={"request_id": request_id, "step": "store_write", "store_key": key, "operation": operation},
    )
