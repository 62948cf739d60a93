"""
Observability helpers: logging configuration and safe structured logging.
"""

from knowledge_rag.observability.logger import configure_logging
from knowledge_rag.observability.log_utils import log_exception_with_context, safe_log_value

__all__ = ["configure_logging", "log_exception_with_context", "safe_log_value"]
