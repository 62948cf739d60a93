"""
Structured logging helpers.

Context passed through ``extra=`` is rendered with ``safe_log_value`` so a
chunk list or an embedding vector shows up as a size, not as its contents.

Dependencies: logging (stdlib), knowledge_rag.core.exceptions
System role: Logging helper functions
"""

import logging
from typing import Any

from knowledge_rag.core.exceptions import KnowledgeRagError


def _is_vector(value: list | tuple) -> bool:
    return bool(value) and all(isinstance(item, float) for item in value[:8])


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Render a context value for a log record.

    Float sequences render as ``vector(N dims)``, other sequences and dicts as
    their size. Long strings are cut at ``max_length``.
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, str):
            rendered = value
        elif isinstance(value, (list, tuple)):
            if _is_vector(value):
                rendered = f"vector({len(value)} dims)"
            else:
                rendered = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            rendered = f"dict({len(value)} keys)"
        else:
            rendered = str(value)
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"

    if len(rendered) > max_length:
        return rendered[:max_length] + f"... (truncated, {len(rendered)} total)"
    return rendered


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log an exception at ERROR with its traceback and rendered context.

    For KnowledgeRagError the bare message is logged as ``error_msg`` and
    its details dict is flattened into ``error_<key>`` fields.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception being reported
        **context: Extra fields (job_id, source_id, ...)
    """
    fields = {key: safe_log_value(val) for key, val in context.items()}
    fields["error_type"] = type(exc).__name__
    if isinstance(exc, KnowledgeRagError):
        fields["error_msg"] = safe_log_value(exc.message)
        for key, val in exc.details.items():
            fields.setdefault(f"error_{key}", safe_log_value(val))
    else:
        fields["error_msg"] = safe_log_value(str(exc))
    logger.error(message, exc_info=exc, extra=fields)
