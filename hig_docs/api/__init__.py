"""API helpers shared by the server endpoints."""

from .deps import get_engine, sanitize_error_message

__all__ = ["get_engine", "sanitize_error_message"]
