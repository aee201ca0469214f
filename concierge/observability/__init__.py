"""
Observability module.

Provides logging configuration, correlation ID tracking and request
logging middleware.
"""

from concierge.observability.logger import CorrelationIdFilter, configure_logging

__all__ = ["CorrelationIdFilter", "configure_logging"]
