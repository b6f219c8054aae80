"""Tests for the FastAPI MCP server."""

import json

import pytest
from fastapi.testclient import TestClient

from hig_docs.engine.hig_engine import HIGEngine
from hig_docs.mcp import INVALID_PARAMS, INVALID_REQUEST, METHOD_NOT_FOUND, PARSE_ERROR
from hig_docs.server import _filter_sentry_event, app


@pytest.fixture
def client(engine):
    app.state.engine = engine
    yield TestClient(app)
    app.state.engine = None


def rpc(id, method, params=None):
    body = {"jsonrpc": "2.0", "id": id, "method": method}
    if params is not None:
        body["params"] = params
    return body


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self, client):
        response = client.get("/ready")
        assert response.status_code == 200
        data = response.json()
        assert data["ready"] is True
        assert data["sections_indexed"] == 5
        assert data["scorer"] == "keyword"

    def test_not_ready_without_engine(self):
        app.state.engine = None
        response = TestClient(app).get("/ready")
        assert response.status_code == 503
        assert response.json()["ready"] is False

    def test_root(self, client):
        data = client.get("/").json()
        assert data["mcp"] == "/mcp"


class TestToolEndpoint:
    def test_search(self, client):
        response = client.post("/v1/mcp", json={"tool": "search_guidelines", "params": {"query": "buttons"}})
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["result"]["results"][0]["title"] == "Buttons"
        assert data["usage"]["output_tokens"] > 0

    def test_validation_error_returned(self, client):
        response = client.post(
            "/v1/mcp",
            json={"tool": "search_guidelines", "params": {"query": "buttons", "platform": "Windows"}},
        )
        data = response.json()
        assert data["success"] is False
        assert data["error"].startswith("Invalid platform: Windows")

    def test_unknown_tool_rejected(self, client):
        response = client.post("/v1/mcp", json={"tool": "render_mockup", "params": {}})
        assert response.status_code == 422

    def test_engine_not_ready(self):
        app.state.engine = None
        response = TestClient(app).post("/v1/mcp", json={"tool": "search_guidelines", "params": {}})
        assert response.status_code == 503
        assert response.json()["error"] == "Search index is not ready"


class TestJsonRpcTransport:
    def test_initialize(self, client):
        data = client.post("/mcp", json=rpc(1, "initialize")).json()
        assert data["id"] == 1
        assert data["result"]["protocolVersion"] == "2024-11-05"
        assert data["result"]["serverInfo"]["name"] == "hig-docs"
        assert data["result"]["capabilities"] == {"tools": {}, "resources": {}}

    def test_tools_list(self, client):
        data = client.post("/mcp", json=rpc(2, "tools/list")).json()
        names = {tool["name"] for tool in data["result"]["tools"]}
        assert names == {
            "search_guidelines",
            "search_unified",
            "get_component_spec",
            "get_accessibility_requirements",
            "compare_platforms",
            "search_wildcard",
            "get_cross_references",
        }

    def test_tools_call(self, client):
        data = client.post(
            "/mcp",
            json=rpc(3, "tools/call", {"name": "get_component_spec", "arguments": {"componentName": "Buttons"}}),
        ).json()
        content = data["result"]["content"][0]
        assert content["type"] == "text"
        assert json.loads(content["text"])["component"]["id"] == "buttons"

    def test_tools_call_invalid_params(self, client):
        data = client.post(
            "/mcp",
            json=rpc(4, "tools/call", {"name": "search_guidelines", "arguments": {"query": "x" * 101}}),
        ).json()
        assert data["error"]["code"] == INVALID_PARAMS
        assert "Query too long" in data["error"]["message"]

    def test_tools_call_unknown_tool(self, client):
        data = client.post("/mcp", json=rpc(5, "tools/call", {"name": "render_mockup"})).json()
        assert data["error"]["code"] == INVALID_PARAMS
        assert data["error"]["message"] == "Unknown tool: render_mockup"

    def test_ping(self, client):
        assert client.post("/mcp", json=rpc(6, "ping")).json()["result"] == {}

    def test_unknown_method(self, client):
        data = client.post("/mcp", json=rpc(7, "prompts/list")).json()
        assert data["error"]["code"] == METHOD_NOT_FOUND

    def test_resources_list(self, client):
        data = client.post("/mcp", json=rpc(8, "resources/list")).json()
        resources = data["result"]["resources"]
        uris = [r["uri"] for r in resources]
        assert uris[0] == "hig://ios"
        assert "hig://macos/navigation" in uris
        assert "hig://universal" in uris
        assert resources[0]["mimeType"] == "text/markdown"

    def test_resources_read(self, client):
        data = client.post("/mcp", json=rpc(9, "resources/read", {"uri": "hig://macos/navigation"})).json()
        contents = data["result"]["contents"]
        assert contents[0]["uri"] == "hig://macos/navigation"
        assert contents[0]["mimeType"] == "text/markdown"
        assert "## Sidebars" in contents[0]["text"]

    @pytest.mark.parametrize(
        "params,message",
        [
            ({}, "Missing resource uri"),
            ({"uri": "https://example.com"}, "Invalid resource URI"),
            ({"uri": "hig://android"}, "Unknown platform"),
            ({"uri": "hig://watchos"}, "Resource not found: hig://watchos"),
        ],
    )
    def test_resources_read_invalid(self, client, params, message):
        data = client.post("/mcp", json=rpc(10, "resources/read", params)).json()
        assert data["error"]["code"] == INVALID_PARAMS
        assert message in data["error"]["message"]

    def test_notification_has_no_body(self, client):
        response = client.post("/mcp", json={"jsonrpc": "2.0", "method": "notifications/initialized"})
        assert response.status_code == 204

    def test_batch(self, client):
        response = client.post(
            "/mcp",
            json=[rpc(1, "ping"), {"jsonrpc": "2.0", "method": "notifications/initialized"}, rpc(2, "tools/list")],
        )
        assert [item["id"] for item in response.json()] == [1, 2]

    def test_parse_error(self, client):
        response = client.post("/mcp", content="{not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == PARSE_ERROR

    def test_invalid_request(self, client):
        data = client.post("/mcp", json=42).json()
        assert data["error"]["code"] == INVALID_REQUEST


class TestMonitoring:
    def test_stats(self, client):
        data = client.get("/v1/stats").json()
        assert data["index"]["total_sections"] == 5
        assert data["extraction"]["fallback_rate"] == 0.0
        assert data["sla_met"] is True

    def test_quality_report(self, client):
        response = client.get("/v1/quality-report")
        assert response.status_code == 200
        assert "SLA Compliance: MET" in response.text

    def test_quality_report_without_validator(self, engine):
        app.state.engine = HIGEngine(engine.indexer, engine.fuser, engine.cache, engine.settings)
        try:
            response = TestClient(app).get("/v1/quality-report")
        finally:
            app.state.engine = None
        assert response.status_code == 404
        assert response.json()["success"] is False


class TestSentryFilter:
    def test_sensitive_headers_redacted(self):
        event = {"request": {"headers": {"authorization": "Bearer abc", "accept": "*/*"}}}
        headers = _filter_sentry_event(event)["request"]["headers"]
        assert headers["authorization"] == "[REDACTED]"
        assert headers["accept"] == "*/*"

    def test_event_without_request(self):
        assert _filter_sentry_event({"message": "boom"}) == {"message": "boom"}
