"""Token accounting for tool payloads.

Counts tokens with tiktoken (cl100k_base) so usage reported by the server
matches what an agent pays to read a result.
"""

import json
from typing import Any

import tiktoken

_encoding: tiktoken.Encoding | None = None


def get_encoder() -> tiktoken.Encoding:
    """Get or create the cl100k_base encoder (lazy initialization)."""
    global _encoding
    if _encoding is None:
        _encoding = tiktoken.get_encoding("cl100k_base")
    return _encoding


def count_tokens(text: str) -> int:
    """Count tokens in text.

    Args:
        text: Text to count tokens for

    Returns:
        Number of tokens in the text
    """
    if not text:
        return 0
    return len(get_encoder().encode(text))


def count_payload_tokens(payload: Any) -> int:
    """Count tokens of a JSON-serializable payload as it would be sent."""
    if payload is None:
        return 0
    if isinstance(payload, str):
        return count_tokens(payload)
    return count_tokens(json.dumps(payload, default=str, separators=(",", ":")))
