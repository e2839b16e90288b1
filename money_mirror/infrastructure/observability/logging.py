"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from money_mirror.config import settings


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


def log_analysis(
    request_id: str,
    user_id: str,
    finding_count: int,
    high_count: int,
    failed_rules: int,
    duration_ms: float,
) -> None:
    """Log structured analysis outcome"""
    logging.info(
        "Analysis completed",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "analysis_complete",
            "finding_count": finding_count,
            "high_severity_count": high_count,
            "failed_rules": failed_rules,
            "duration_ms": duration_ms,
        },
    )


def log_assessment(request_id: str, user_id: str, style_code: str) -> None:
    logging.info(
        "Assessment scored",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "assessment_scored",
            "style_code": style_code,
        },
    )


def log_resolution(request_id: str, user_id: str, finding_id: str, outcome: str) -> None:
    logging.info(
        "Finding resolved",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "finding_resolved",
            "finding_id": finding_id,
            "outcome": outcome,
        },
    )
