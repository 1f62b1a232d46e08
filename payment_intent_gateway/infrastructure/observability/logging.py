"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter

from payment_intent_gateway.config import settings


class CustomJsonFormatter(JsonFormatter):
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
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_pipeline_result(
    request_id: str,
    risk_level: str,
    score: int,
    scoring_degraded: str | None,
    scheme: str,
    duration_ms: float,
) -> None:
    """Log structured pipeline outcome for analysis"""
    logging.info(
        "Payment instruction processed",
        extra={
            "request_id": request_id,
            "step": "pipeline_complete",
            "risk_level": risk_level,
            "risk_score": score,
            "scoring_degraded": scoring_degraded,
            "scheme": scheme,
            "duration_ms": duration_ms,
        },
    )
