"""
REST API request building and response rendering.

- encode_query: query mapping -> query string (objects JSON-encoded)
- build_headers: JSON content type + caller headers + bearer token
- render_response: JSON pretty-print / plain text / empty marker
- call_rest: one request through the HttpClient, as a Result
"""

import json
import logging
from typing import Any, Dict, Mapping
from urllib.parse import urlencode

from ..models.rest_request import RestRequestSpec
from ..result import Ok, Result
from ..token_cache import TokenInfo
from ..transport import HttpClient, HttpResponse

logger = logging.getLogger(__name__)

PREVIEW_CHARS = 500

EMAIL_ASSET_FILTERS = {
    "all": "assetType.id in (207,208,209)",
    "html": "assetType.name eq 'htmlemail'",
    "template": "assetType.name eq 'templatebasedemail'",
}


def email_asset_filter(kind: str = "all") -> str:
    """Content Builder ``$filter`` expression selecting email assets."""
    return EMAIL_ASSET_FILTERS.get(kind, EMAIL_ASSET_FILTERS["all"])


def email_asset_listing_hint() -> Dict[str, Any]:
    """``mce_v1_rest_request`` arguments that list Content Builder emails, per kind."""
    return {
        "method": "GET",
        "path": "asset/v1/content/assets",
        "query": {kind: {"$filter": email_asset_filter(kind)} for kind in EMAIL_ASSET_FILTERS},
    }


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None or isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def encode_query(query: Mapping[str, Any]) -> str:
    """Encode query params; dict/list/None values are JSON-stringified first."""
    if not query:
        return ""
    return urlencode([(str(k), _query_value(v)) for k, v in query.items()])


def build_url(base_url: str, path: str, query: Mapping[str, Any]) -> str:
    url = f"{base_url}{path}"
    query_string = encode_query(query)
    if query_string:
        url += f"?{query_string}"
    return url


def build_headers(access_token: str, extra: Mapping[str, str]) -> Dict[str, str]:
    """Merge caller headers; the bearer Authorization header always wins."""
    headers = {"Content-Type": "application/json"}
    for key, value in (extra or {}).items():
        if key.lower() == "authorization":
            logger.warning("Ignoring caller-supplied Authorization header")
            continue
        headers[key] = value
    headers["Authorization"] = f"Bearer {access_token}"
    return headers


def render_response(response: HttpResponse) -> str:
    """
    Render a REST response body as text.

    Objects and arrays are pretty-printed. A JSON string renders as the bare
    string. Empty bodies and falsy JSON scalars (``null``, ``false``, ``0``,
    ``""``) render as the empty-response marker.
    """
    empty = f"HTTP {response.status} (empty response)"
    if not response.body:
        return empty
    try:
        data = response.json()
    except ValueError:
        return response.body
    if isinstance(data, (dict, list)):
        return json.dumps(data, indent=2, ensure_ascii=False)
    if not data:
        return empty
    if isinstance(data, str):
        return data
    return response.body.strip()


async def call_rest(token: TokenInfo, http_client: HttpClient, spec: RestRequestSpec) -> Result:
    """Send one REST request; any HTTP status is returned as text."""
    url = build_url(token.rest_base_url, spec.path, spec.query)
    headers = build_headers(token.access_token, spec.headers)

    logger.info("Making %s request to: %s", spec.method, url)
    response = await http_client.send(spec.method, url, headers, spec.body)
    logger.info("Response status: %s", response.status)

    text = render_response(response)
    logger.debug("Response preview: %s", text[:PREVIEW_CHARS])
    return Ok(text)
