"""Tests for health, documentation bundle, config and transport plumbing."""

import sys
import os
import asyncio
import json
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import httpx
import pytest
from mce_mcp.categories.meta_tools import DOC_FILES, DocumentationBundle, bundle_key, health_text
from mce_mcp.categories.rest import email_asset_filter, email_asset_listing_hint
from mce_mcp.config import DEFAULT_DOCS_DIR, Settings
from mce_mcp.errors import TransportError
from mce_mcp.transport import HttpxTransport


class TestHealth:

    def test_echo(self):
        assert health_text("hello") == "ok=true echo=hello"

    def test_default_pong(self):
        assert health_text() == "ok=true echo=pong"
        assert health_text("") == "ok=true echo=pong"


class TestDocumentationBundle:

    def test_bundle_key(self):
        assert bundle_key("journey-builder-examples.json") == "journey_builder_examples"

    def test_packaged_docs_load(self):
        bundle = DocumentationBundle.load(DEFAULT_DOCS_DIR)
        assert sorted(bundle.keys()) == sorted(bundle_key(f) for f in DOC_FILES)

    def test_missing_and_invalid_files_skipped(self, tmp_path):
        (tmp_path / "mcp-documentation.json").write_text(json.dumps({"ok": True}))
        (tmp_path / "soap-examples.json").write_text("{not json")

        bundle = DocumentationBundle.load(tmp_path)

        assert bundle.keys() == ["mcp_documentation"]
        assert json.loads(bundle.to_text()) == {"mcp_documentation": {"ok": True}}

    def test_bundle_is_read_only(self):
        bundle = DocumentationBundle({"a": 1})
        with pytest.raises(TypeError):
            bundle.documents["b"] = 2

    def test_to_text_is_pretty_json(self):
        assert DocumentationBundle({"a": {"b": 1}}).to_text() == '{\n  "a": {\n    "b": 1\n  }\n}'

    def test_with_document_returns_new_bundle(self):
        bundle = DocumentationBundle({"a": 1})
        extended = bundle.with_document("b", {"c": 2})

        assert bundle.keys() == ["a"]
        assert extended.documents == {"a": 1, "b": {"c": 2}}


class TestEmailAssetFilter:

    def test_known_kinds(self):
        assert email_asset_filter() == "assetType.id in (207,208,209)"
        assert email_asset_filter("html") == "assetType.name eq 'htmlemail'"
        assert email_asset_filter("template") == "assetType.name eq 'templatebasedemail'"

    def test_unknown_falls_back_to_all(self):
        assert email_asset_filter("sms") == email_asset_filter("all")

    def test_listing_hint_covers_every_kind(self):
        hint = email_asset_listing_hint()
        assert hint["method"] == "GET"
        assert hint["query"]["all"] == {"$filter": "assetType.id in (207,208,209)"}
        assert set(hint["query"]) == {"all", "html", "template"}


class TestSettings:

    def test_from_env(self):
        settings = Settings.from_env({
            "MCE_SUBDOMAIN": "mc123",
            "MCE_CLIENT_ID": "cid",
            "MCE_CLIENT_SECRET": "secret",
            "MCE_DEFAULT_MID": "5000",
            "MCE_HTTP_TIMEOUT": "12.5",
            "MCE_LOG_LEVEL": "debug",
        })
        assert settings.default_mid == "5000"
        assert settings.http_timeout == 12.5
        assert settings.log_level == "DEBUG"
        assert settings.token_url == "https://mc123.auth.marketingcloudapis.com/v2/token"
        assert settings.soap_endpoint == "https://mc123.soap.marketingcloudapis.com/Service.asmx"
        settings.require_credentials()

    def test_defaults(self):
        settings = Settings.from_env({"MCE_HTTP_TIMEOUT": "abc"})
        assert settings.subdomain is None
        assert settings.http_timeout == 30.0
        assert settings.docs_dir == DEFAULT_DOCS_DIR


class TestHttpxTransport:

    def _transport(self, handler):
        return HttpxTransport(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))

    def test_json_body_and_status_passthrough(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            seen["auth"] = request.headers["Authorization"]
            return httpx.Response(400, json={"error": "bad"})

        transport = self._transport(handler)
        response = asyncio.run(transport.send(
            "post", "https://example.test/x", {"Authorization": "Bearer t"}, {"a": 1}
        ))

        assert seen == {"method": "POST", "body": {"a": 1}, "auth": "Bearer t"}
        assert response.status == 400
        assert not response.ok
        assert response.json() == {"error": "bad"}

    def test_string_body_sent_verbatim(self):
        seen = {}

        def handler(request):
            seen["body"] = request.content.decode()
            return httpx.Response(200, text="<ok/>")

        transport = self._transport(handler)
        response = asyncio.run(transport.send("POST", "https://example.test/x", {}, "<env/>"))

        assert seen["body"] == "<env/>"
        assert response.body == "<ok/>"

    def test_connection_error_raises_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport = self._transport(handler)
        with pytest.raises(TransportError) as exc:
            asyncio.run(transport.send("GET", "https://example.test/x", {}))

        assert "connection refused" in str(exc.value)

    def test_aclose_closes_client_and_is_idempotent(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
        transport = HttpxTransport(client=client)

        assert not transport.is_closed
        asyncio.run(transport.aclose())
        asyncio.run(transport.aclose())

        assert client.is_closed
        assert transport.is_closed
