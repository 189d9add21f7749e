#!/usr/bin/env python3
"""
Marketing Cloud Engagement MCP Server - FastMCP server for the SFMC REST and SOAP APIs.

Tools:
- mce_v1_health: echo/readiness check
- mce_v1_rest_request: generic REST call under the tenant REST base URL
- mce_v1_soap_request: generic SOAP Create/Retrieve/Update/Delete
- mce_v1_documentation: bundled documentation and examples

Credentials come from MCE_SUBDOMAIN, MCE_CLIENT_ID and MCE_CLIENT_SECRET.
Logs go to stderr so stdout stays free for the stdio transport.
"""

import logging
import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from fastmcp import FastMCP

# --- Add src to path for mce_mcp ---
src_path = Path(__file__).parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from mce_mcp import __version__
from mce_mcp.categories.meta_tools import DocumentationBundle, health_text
from mce_mcp.categories.rest import email_asset_listing_hint
from mce_mcp.config import Settings
from mce_mcp.executor import RequestExecutor
from mce_mcp.models import RestRequestSpec, SoapRequestSpec
from mce_mcp.token_cache import TokenCache
from mce_mcp.transport import HttpxTransport
from mce_mcp.xml_builders.builders import EnvelopeBuilder

settings = Settings.from_env()

logging.basicConfig(
    stream=sys.stderr,
    level=getattr(logging, settings.log_level, logging.INFO),
    format="[%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("mce_mcp.server")

if not settings.subdomain or not settings.client_id or not settings.client_secret:
    logger.warning(
        "MCE_SUBDOMAIN, MCE_CLIENT_ID and MCE_CLIENT_SECRET are not all set; "
        "API tools will return an error until they are"
    )

# --- Components ---
transport = HttpxTransport(timeout=settings.http_timeout)
token_cache = TokenCache(settings, transport)
executor = RequestExecutor(
    token_cache=token_cache,
    http_client=transport,
    envelope_builder=EnvelopeBuilder(settings.subdomain),
    default_mid=settings.default_mid,
)
documentation = DocumentationBundle.load(settings.docs_dir).with_document(
    "email_asset_filters", email_asset_listing_hint()
)


@asynccontextmanager
async def lifespan(server):
    try:
        yield
    finally:
        await transport.aclose()


mcp = FastMCP(name="salesforce-marketing-cloud-engagement", lifespan=lifespan)


# --- Tools ---

@mcp.tool(
    name="mce_v1_health",
    annotations={"readOnlyHint": True},
)
def health(ping: str = "pong") -> str:
    """
    Health check tool. Echoes input and confirms server readiness.

    Args:
        ping: Echo payload (default "pong")
    """
    return health_text(ping)


@mcp.tool(
    name="mce_v1_rest_request",
    annotations={"openWorldHint": True},
)
async def rest_request(
    method: str,
    path: str,
    query: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    body: Optional[Union[Dict[str, Any], List[Any], str]] = None,
    businessUnitId: Optional[str] = None,
) -> str:
    """
    Generic REST request for Salesforce Marketing Cloud Engagement.

    Args:
        method: HTTP method (GET, POST, PUT, PATCH or DELETE)
        path: Path under the REST base, e.g. /asset/v1/content/assets
        query: Query parameters (object values are JSON-encoded)
        headers: Additional headers (Authorization cannot be overridden)
        body: Request body (object or string)
        businessUnitId: Business Unit ID (MID) for a scoped token

    Returns:
        Response body as pretty JSON or text, or "Error: ..." on failure
    """
    try:
        spec = RestRequestSpec.from_arguments(
            method=method,
            path=path,
            query=query,
            headers=headers,
            body=body,
            business_unit_id=businessUnitId,
        )
        result = await executor.execute_rest(spec)
        return result.text
    except Exception as e:
        logger.error("mce_v1_rest_request failed: %s", e)
        return f"Error: {e}"


@mcp.tool(
    name="mce_v1_soap_request",
    annotations={"openWorldHint": True},
)
async def soap_request(
    action: str,
    objectType: str,
    properties: Optional[List[str]] = None,
    filter: Optional[Dict[str, Any]] = None,
    objects: Optional[List[Dict[str, Any]]] = None,
    options: Optional[Dict[str, Any]] = None,
    businessUnitId: Optional[str] = None,
) -> str:
    """
    Generic SOAP request for Salesforce Marketing Cloud Engagement.

    Supported actions: Create, Retrieve, Update, Delete.
    Any other action is rejected with an error message.

    Args:
        action: SOAP action (Create, Retrieve, Update or Delete)
        objectType: Marketing Cloud object type (e.g. DataExtension, Email)
        properties: Properties to retrieve (Retrieve)
        filter: {"property", "operator", "value"} simple filter (Retrieve)
        objects: Objects to create/update/delete (only the first is sent)
        options: SOAP options
        businessUnitId: Business Unit ID (MID) for scoped operations

    Returns:
        Parsed SOAP body as JSON text, SOAP fault text, or "Error: ..."
    """
    try:
        spec = SoapRequestSpec.from_arguments(
            action=action,
            object_type=objectType,
            properties=properties,
            filter=filter,
            objects=objects,
            options=options,
            business_unit_id=businessUnitId,
        )
        result = await executor.execute_soap(spec)
        return result.text
    except Exception as e:
        logger.error("mce_v1_soap_request failed: %s", e)
        return f"Error: {e}"


@mcp.tool(
    name="mce_v1_documentation",
    annotations={"readOnlyHint": True},
)
def documentation_tool() -> str:
    """Returns Marketing Cloud Engagement documentation and examples."""
    return documentation.to_text()


if __name__ == "__main__":
    logger.info("=" * 60)
    logger.info("Marketing Cloud Engagement MCP server v%s", __version__)
    logger.info("=" * 60)
    logger.info("Subdomain:      %s", settings.subdomain or "(not set)")
    logger.info("Default MID:    %s", settings.default_mid or "(none)")
    logger.info("Documentation:  %s", ", ".join(documentation.keys()) or "(none loaded)")
    logger.info("Tools: mce_v1_health, mce_v1_rest_request, mce_v1_soap_request, mce_v1_documentation")

    transport_mode = os.getenv("MCP_TRANSPORT", "stdio")
    if transport_mode == "http":
        host = os.getenv("MCP_HOST", "127.0.0.1")
        port = int(os.getenv("MCP_PORT", "8000"))
        logger.info("Starting server on http://%s:%s (MCP endpoint: /mcp)", host, port)
        mcp.run(transport="http", host=host, port=port)
    else:
        mcp.run(transport="stdio")
