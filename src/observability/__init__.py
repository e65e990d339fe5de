"""
Observability Package

Structured JSON logging with correlation IDs. Metrics and tracing are not
part of this service.
"""

from src.observability.logging import (
    configure_logging,
    correlation_id_context,
    get_correlation_id,
    get_logger,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_correlation_id",
    "correlation_id_context",
]
