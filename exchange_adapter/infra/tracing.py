"""
Correlation ID and error classification helpers

Every transaction sequence runs inside a CorrelationContext so that the
approve/swap/confirm log lines of one user action can be grouped together.
"""

import logging
import uuid
import contextvars
from typing import Optional, Tuple

from ..errors import ErrorCode

logger = logging.getLogger(__name__)

# Context variable for correlation ID (thread-safe)
_correlation_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    'correlation_id', default=None
)


def generate_correlation_id() -> str:
    """Generate a unique correlation ID for transaction tracing."""
    return uuid.uuid4().hex[:12]


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from context."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: Optional[str]) -> contextvars.Token:
    """Set the correlation ID in context. Returns token for reset."""
    return _correlation_id.set(correlation_id)


class CorrelationContext:
    """
    Context manager for correlation ID scoping.

    Usage:
        with CorrelationContext("swap") as cid:
            log_with_correlation(logging.INFO, "approving", "swap")
    """

    def __init__(self, prefix: Optional[str] = None):
        """
        Args:
            prefix: Optional prefix for the correlation ID (e.g., "swap", "lp")
        """
        self.correlation_id = generate_correlation_id()
        if prefix:
            self.correlation_id = f"{prefix}_{self.correlation_id}"
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> str:
        self._token = set_correlation_id(self.correlation_id)
        return self.correlation_id

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._token is not None:
            _correlation_id.reset(self._token)


def log_with_correlation(
    level: int,
    message: str,
    operation_name: str,
    **extra
):
    """
    Log message with correlation ID and structured context.

    Args:
        level: Logging level (logging.INFO, logging.WARNING, etc.)
        message: Log message
        operation_name: Name of the operation being executed
        **extra: Additional context fields
    """
    cid = get_correlation_id()

    parts = []
    if cid:
        parts.append(f"[{cid}]")
    parts.append(f"[{operation_name}]")
    parts.append(message)

    extra_context = {
        "correlation_id": cid,
        "operation": operation_name,
        **extra
    }

    logger.log(level, " ".join(parts), extra=extra_context)


# Error keywords for classification
RECOVERABLE_KEYWORDS = [
    "timeout", "timed out", "connection", "network", "rate limit",
    "too many requests", "503", "502", "504",
    "temporarily unavailable", "service unavailable",
    "econnreset", "enotfound", "etimedout",
    "socket hang up", "request failed",
]

# Revert reasons of the exchange contract when the minimum output is not met
SLIPPAGE_KEYWORDS = [
    "insufficient output amount", "slippage", "price moved",
    "amount out less than minimum",
]


def classify_error(error: Exception) -> Tuple[bool, Optional[ErrorCode]]:
    """
    Classify a remote error.

    The recoverable flag is a hint for the caller; this package never retries.

    Args:
        error: The exception to classify

    Returns:
        Tuple of (is_recoverable, error_code)
    """
    error_str = str(error).lower()

    if any(keyword in error_str for keyword in SLIPPAGE_KEYWORDS):
        return True, ErrorCode.SLIPPAGE_EXCEEDED

    is_recoverable = any(keyword in error_str for keyword in RECOVERABLE_KEYWORDS)

    error_code = None
    if is_recoverable:
        if "timeout" in error_str or "timed out" in error_str:
            error_code = ErrorCode.RPC_TIMEOUT
        elif any(kw in error_str for kw in ["connection", "network", "socket"]):
            error_code = ErrorCode.RPC_CONNECTION_FAILED
        elif "rate limit" in error_str or "too many requests" in error_str:
            error_code = ErrorCode.RPC_RATE_LIMITED
        else:
            error_code = ErrorCode.RPC_INVALID_RESPONSE

    return is_recoverable, error_code
