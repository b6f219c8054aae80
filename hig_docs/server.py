"""FastAPI MCP server for the Apple HIG documentation engine."""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Annotated, Any

import sentry_sdk
from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from . import __version__
from .api.deps import get_engine, sanitize_error_message
from .config import configure_logging, settings
from .engine.handlers.validation import InvalidInputError
from .engine.hig_engine import HIGEngine, create_engine
from .mcp import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    MCP_PROTOCOL_VERSION,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    SERVER_ERROR,
    TOOL_DEFINITIONS,
    jsonrpc_error,
    jsonrpc_response,
    tool_content,
)
from .models import (
    HIGResource,
    HealthResponse,
    MCPRequest,
    MCPResponse,
    ReadyResponse,
    UsageInfo,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "hig-docs"

# ============ SENTRY INITIALIZATION ============


def _filter_sentry_event(event: dict) -> dict:
    """Remove sensitive headers from Sentry events."""
    if "request" in event and "headers" in event["request"]:
        headers = event["request"]["headers"]
        for key in ["authorization", "cookie"]:
            if key in headers:
                headers[key] = "[REDACTED]"
    return event


if settings.sentry_dsn:
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        traces_sample_rate=0.1 if settings.environment == "production" else 1.0,
        integrations=[FastApiIntegration(), StarletteIntegration()],
        before_send=lambda event, hint: _filter_sentry_event(event),
    )
    logger.info("Sentry error tracking initialized")
else:
    logger.debug("Sentry DSN not configured - error tracking disabled")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler: build the index before serving."""
    configure_logging()
    logger.info(f"Starting HIG docs server v{__version__}")

    if not settings.debug and settings.cors_allowed_origins == "*":
        logger.warning(
            "SECURITY WARNING: CORS is configured to allow all origins ('*'). "
            "Set HIG_CORS_ALLOWED_ORIGINS to specific domains in production."
        )

    # Tests may install a prebuilt engine
    if getattr(app.state, "engine", None) is None:
        app.state.engine = await create_engine(settings)
    logger.info(f"Engine ready: {len(app.state.engine.indexer)} sections indexed")

    yield


app = FastAPI(
    title="HIG Docs MCP Server",
    description="Apple Human Interface Guidelines search and component reference over MCP",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

EngineDep = Annotated[HIGEngine, Depends(get_engine)]


# ============ EXCEPTION HANDLERS ============


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent response format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "usage": {"latency_ms": 0},
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with sanitized error messages."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "An internal server error occurred. Please try again.",
            "usage": {"latency_ms": 0},
        },
    )


# ============ HEALTH ENDPOINTS ============


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """Health check endpoint (lightweight liveness check)."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.now(),
    )


@app.get("/ready", tags=["Health"])
async def readiness_check(request: Request):
    """Readiness check: the index is built and non-empty."""
    engine: HIGEngine | None = getattr(request.app.state, "engine", None)
    checks = {
        "engine": engine is not None,
        "index": engine is not None and engine.indexer.is_loaded,
    }
    ready = all(checks.values())
    response = ReadyResponse(
        ready=ready,
        sections_indexed=len(engine.indexer) if engine else 0,
        scorer=engine.indexer.scorer.name if engine else "",
        checks=checks,
    )
    return JSONResponse(
        content=response.model_dump(mode="json"),
        status_code=200 if ready else 503,
    )


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint with API info."""
    return {
        "name": "HIG Docs MCP Server",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "mcp": "/mcp",
    }


# ============ MCP ENDPOINTS ============


@app.post("/v1/mcp", response_model=MCPResponse, tags=["MCP"])
async def mcp_endpoint(request: MCPRequest, engine: EngineDep) -> MCPResponse:
    """Execute a HIG tool.

    Args:
        request: The MCP request with tool and parameters

    Returns:
        MCPResponse with result or error
    """
    start_time = time.perf_counter()

    try:
        result = await engine.execute(request.tool, request.params)
        latency_ms = int((time.perf_counter() - start_time) * 1000)
        return MCPResponse(
            success=True,
            result=result.data,
            usage=UsageInfo(
                input_tokens=result.input_tokens,
                output_tokens=result.output_tokens,
                latency_ms=latency_ms,
            ),
        )
    except Exception as e:
        latency_ms = int((time.perf_counter() - start_time) * 1000)
        return MCPResponse(
            success=False,
            error=sanitize_error_message(e),
            usage=UsageInfo(latency_ms=latency_ms),
        )


@app.post("/mcp", tags=["MCP Transport"])
async def mcp_transport_endpoint(request: Request, engine: EngineDep):
    """MCP Streamable HTTP endpoint (JSON-RPC format).

    Supports initialize, tools/list, tools/call, resources/list, resources/read
    and ping, single or batched.
    """
    try:
        body = await request.json()
    except ValueError:
        return JSONResponse(jsonrpc_error(None, PARSE_ERROR, "Parse error"), status_code=400)

    if isinstance(body, list):
        responses = []
        for req in body:
            resp = await _handle_request(req, engine)
            if resp:  # Skip notifications (no id)
                responses.append(resp)
        return JSONResponse(responses)

    response = await _handle_request(body, engine)
    return JSONResponse(response) if response else Response(status_code=204)


async def _handle_request(body: Any, engine: HIGEngine) -> dict | None:
    """Handle a single JSON-RPC request."""
    if not isinstance(body, dict):
        return jsonrpc_error(None, INVALID_REQUEST, "Invalid request")

    method = body.get("method")
    id = body.get("id")
    params = body.get("params") or {}

    if id is None:  # Notification - no response
        return None

    if method == "initialize":
        return jsonrpc_response(
            id,
            {
                "protocolVersion": MCP_PROTOCOL_VERSION,
                "serverInfo": {"name": SERVER_NAME, "version": __version__},
                "capabilities": {"tools": {}, "resources": {}},
            },
        )
    elif method == "tools/list":
        return jsonrpc_response(id, {"tools": TOOL_DEFINITIONS})
    elif method == "tools/call":
        return await _handle_call_tool(id, params, engine)
    elif method == "resources/list":
        resources = [_resource_descriptor(r) for r in engine.list_resources()]
        return jsonrpc_response(id, {"resources": resources})
    elif method == "resources/read":
        return _handle_read_resource(id, params, engine)
    elif method == "ping":
        return jsonrpc_response(id, {})
    else:
        return jsonrpc_error(id, METHOD_NOT_FOUND, f"Method not found: {method}")


async def _handle_call_tool(id: Any, params: dict, engine: HIGEngine) -> dict:
    """Handle MCP tools/call request."""
    tool_name = params.get("name")
    arguments = params.get("arguments") or {}

    try:
        result = await engine.execute(tool_name, arguments)
    except InvalidInputError as e:
        return jsonrpc_error(id, INVALID_PARAMS, str(e))
    except Exception as e:
        return jsonrpc_error(id, SERVER_ERROR, sanitize_error_message(e))
    return jsonrpc_response(id, tool_content(result.data))


def _resource_descriptor(resource: HIGResource) -> dict:
    return {
        "uri": resource.uri,
        "name": resource.name,
        "description": resource.description,
        "mimeType": resource.mime_type,
    }


def _handle_read_resource(id: Any, params: dict, engine: HIGEngine) -> dict:
    """Handle MCP resources/read request."""
    uri = params.get("uri")
    if not isinstance(uri, str) or not uri:
        return jsonrpc_error(id, INVALID_PARAMS, "Missing resource uri")

    try:
        resource = engine.read_resource(uri)
    except InvalidInputError as e:
        return jsonrpc_error(id, INVALID_PARAMS, str(e))
    if resource is None:
        return jsonrpc_error(id, INVALID_PARAMS, f"Resource not found: {uri}")

    return jsonrpc_response(
        id,
        {"contents": [{"uri": resource.uri, "mimeType": resource.mime_type, "text": resource.content}]},
    )


# ============ MONITORING ENDPOINTS ============


@app.get("/v1/stats", tags=["Monitoring"])
async def get_stats(engine: EngineDep):
    """Index, cache and extraction statistics."""
    return engine.get_statistics()


@app.get("/v1/quality-report", response_class=PlainTextResponse, tags=["Monitoring"])
async def quality_report(engine: EngineDep) -> str:
    """Plain-text extraction quality report."""
    if engine.validator is None:
        raise HTTPException(
            status_code=404,
            detail="No extraction report: the index was loaded from a persisted file",
        )
    return engine.validator.generate_report()


# ============ MAIN ============


def main():
    """Run the server with uvicorn."""
    import uvicorn

    uvicorn.run(
        "hig_docs.server:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
