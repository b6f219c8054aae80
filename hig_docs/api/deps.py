"""FastAPI dependencies for the HIG docs server.

- Engine lookup from application state
- Error sanitization
"""

import logging

from fastapi import HTTPException, Request

from ..engine.hig_engine import HIGEngine

logger = logging.getLogger(__name__)


# ============ ERROR SANITIZATION ============

# Error messages that are safe to return to clients verbatim
SAFE_ERROR_PATTERNS = [
    "Invalid",
    "too long",
    "Too many",
    "Unknown tool",
    "at least one platform",
]


def sanitize_error_message(error: Exception) -> str:
    """Sanitize error messages to prevent information disclosure.

    Validation messages pass through; anything else is logged in full
    and replaced by a generic message.
    """
    error_str = str(error)

    for pattern in SAFE_ERROR_PATTERNS:
        if pattern.lower() in error_str.lower():
            return error_str

    logger.error(f"Tool execution error: {error}", exc_info=True)
    return "An error occurred processing your request. Please try again."


# ============ ENGINE ============


def get_engine(request: Request) -> HIGEngine:
    """Return the engine built at startup."""
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="Search index is not ready")
    return engine
