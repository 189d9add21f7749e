"""Tests for the MCP tool surface in server.py, driven through an in-memory client."""

import sys
import os
import asyncio
import json
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest
from fastmcp import Client

import server
from mce_mcp.config import Settings
from mce_mcp.transport import HttpxTransport


TOOL_NAMES = {
    "mce_v1_health",
    "mce_v1_rest_request",
    "mce_v1_soap_request",
    "mce_v1_documentation",
}


def call(tool, arguments=None):
    async def run():
        async with Client(server.mcp) as client:
            result = await client.call_tool(tool, arguments or {})
            return result.content[0].text
    return asyncio.run(run())


def list_tools():
    async def run():
        async with Client(server.mcp) as client:
            return await client.list_tools()
    return asyncio.run(run())


@pytest.fixture
def no_credentials(monkeypatch):
    monkeypatch.setattr(server.token_cache, "settings", Settings())


class TestToolListing:

    def test_four_tools_registered(self):
        assert {tool.name for tool in list_tools()} == TOOL_NAMES

    def test_argument_names(self):
        tools = {tool.name: tool for tool in list_tools()}

        soap_props = tools["mce_v1_soap_request"].inputSchema["properties"]
        assert {"action", "objectType", "properties", "filter", "objects",
                "options", "businessUnitId"} <= set(soap_props)
        assert set(tools["mce_v1_soap_request"].inputSchema["required"]) == {"action", "objectType"}

        rest_props = tools["mce_v1_rest_request"].inputSchema["properties"]
        assert {"method", "path", "query", "headers", "body", "businessUnitId"} <= set(rest_props)

    def test_health_ping_defaults_to_pong(self):
        tools = {tool.name: tool for tool in list_tools()}
        assert tools["mce_v1_health"].inputSchema["properties"]["ping"]["default"] == "pong"


class TestHealthAndDocumentation:

    def test_health_without_arguments(self):
        assert call("mce_v1_health") == "ok=true echo=pong"

    def test_health_echo(self):
        assert call("mce_v1_health", {"ping": "hello"}) == "ok=true echo=hello"

    def test_documentation_includes_email_filters(self):
        docs = json.loads(call("mce_v1_documentation"))

        hint = docs["email_asset_filters"]
        assert hint["path"] == "asset/v1/content/assets"
        assert hint["query"]["html"] == {"$filter": "assetType.name eq 'htmlemail'"}
        assert "mcp_documentation" in docs


class TestRequestToolErrors:

    def test_unknown_soap_action(self):
        text = call("mce_v1_soap_request", {"action": "Upsert", "objectType": "DataExtension"})
        assert text == "Error: Unsupported SOAP action: Upsert"

    def test_unknown_rest_method(self):
        text = call("mce_v1_rest_request", {"method": "TRACE", "path": "/x"})
        assert text.startswith("Error: Invalid method")

    def test_soap_without_credentials(self, no_credentials):
        text = call("mce_v1_soap_request", {"action": "Retrieve", "objectType": "Email"})
        assert text.startswith("Error: Missing required environment variables")

    def test_rest_without_credentials(self, no_credentials):
        text = call("mce_v1_rest_request", {"method": "get", "path": "/x", "businessUnitId": "123"})
        assert text.startswith("Error: Missing required environment variables")


class TestLifespan:

    def test_http_client_closed_on_shutdown(self, monkeypatch):
        monkeypatch.setattr(server, "transport", HttpxTransport(timeout=5.0))

        async def run():
            async with server.lifespan(server.mcp):
                assert not server.transport.is_closed
        asyncio.run(run())

        assert server.transport.is_closed
