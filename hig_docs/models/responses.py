"""Response models for the HIG docs server."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ToolResult(BaseModel):
    """Output of a tool handler with token accounting."""

    data: Any = Field(default=None, description="Tool result payload")
    input_tokens: int = Field(default=0, ge=0)
    output_tokens: int = Field(default=0, ge=0)


class UsageInfo(BaseModel):
    """Usage information for a request."""

    input_tokens: int = Field(default=0, ge=0)
    output_tokens: int = Field(default=0, ge=0)
    latency_ms: int = Field(default=0, ge=0)


class MCPResponse(BaseModel):
    """MCP tool execution response."""

    success: bool
    result: Any = None
    error: str | None = None
    usage: UsageInfo = Field(default_factory=UsageInfo)


class HealthResponse(BaseModel):
    """Liveness response."""

    status: str
    version: str
    timestamp: datetime


class ReadyResponse(BaseModel):
    """Readiness response."""

    ready: bool
    sections_indexed: int = 0
    scorer: str = ""
    checks: dict[str, bool] = Field(default_factory=dict)
