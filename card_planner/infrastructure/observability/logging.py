"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from card_planner.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_plan_generated(
    request_id: str,
    strategy: str,
    card_count: int,
    action_count: int,
    total_payment_cents: int,
    duration_ms: float,
) -> None:
    """Log structured plan outcome for analysis"""
    logging.info(
        "Plan generated",
        extra={
            "request_id": request_id,
            "step": "plan_complete",
            "strategy": strategy,
            "card_count": card_count,
            "action_count": action_count,
            "total_payment_cents": total_payment_cents,
            "duration_ms": duration_ms,
        },
    )
