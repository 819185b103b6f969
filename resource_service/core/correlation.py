"""
Correlation ID context shared by the HTTP middleware, the event dispatcher
and the structured logger
"""

from contextvars import ContextVar, Token
from typing import Optional

# Context variable to store correlation ID for the current request or event
correlation_id_ctx: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> Optional[str]:
    """Get the correlation ID from the current context"""
    return correlation_id_ctx.get()


def set_correlation_id(correlation_id: Optional[str]) -> Token:
    """Set the correlation ID in the current context"""
    return correlation_id_ctx.set(correlation_id)


def reset_correlation_id(token: Token) -> None:
    correlation_id_ctx.reset(token)
