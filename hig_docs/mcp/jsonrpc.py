"""JSON-RPC 2.0 envelopes for the MCP endpoint.

See: https://www.jsonrpc.org/specification
"""

import json
from typing import Any

# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
SERVER_ERROR = -32000  # Base for application-specific errors

MCP_PROTOCOL_VERSION = "2024-11-05"


def jsonrpc_response(id: Any, result: Any) -> dict:
    """Build a success envelope echoing the request id."""
    return {"jsonrpc": "2.0", "id": id, "result": result}


def jsonrpc_error(id: Any, code: int, message: str) -> dict:
    """Build an error envelope.

    Args:
        id: Request ID (None for parse errors)
        code: One of the error codes above
        message: Human-readable error message

    Returns:
        JSON-RPC 2.0 error response dict
    """
    return {"jsonrpc": "2.0", "id": id, "error": {"code": code, "message": message}}


def tool_content(payload: Any) -> dict:
    """Wrap a tool payload as MCP ``tools/call`` text content."""
    return {"content": [{"type": "text", "text": json.dumps(payload, indent=2, default=str)}]}
