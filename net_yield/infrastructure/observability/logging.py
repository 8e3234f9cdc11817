"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List
from pythonjsonlogger import jsonlogger

from net_yield.config import settings


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


def log_simulation(
    request_id: str,
    data_driven: bool,
    monthly_net_return_pct: float,
    saved: bool,
    duration_ms: float,
) -> None:
    """Log structured simulation outcome; the prospect's email is never logged"""
    logging.info(
        "Simulation completed",
        extra={
            "request_id": request_id,
            "step": "simulation_complete",
            "mode": "data_driven" if data_driven else "baseline",
            "monthly_net_return_pct": monthly_net_return_pct,
            "saved": saved,
            "duration_ms": duration_ms,
        },
    )


def log_validation_failure(request_id: str, codes: List[str]) -> None:
    """Log rejected submissions by error code"""
    logging.warning(
        "Simulation input rejected",
        extra={
            "request_id": request_id,
            "step": "validation",
            "error_codes": codes,
        },
    )
