"""Shared fixtures: fake HTTP transport, manual clock, test settings."""

import sys
import os
import json
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from mce_mcp.config import Settings
from mce_mcp.errors import TransportError
from mce_mcp.transport import HttpResponse


TOKEN_URL = "https://mc123.auth.marketingcloudapis.com/v2/token"


def token_response(access_token="tok-1", expires_in=1080):
    return HttpResponse(
        status=200,
        headers={"Content-Type": "application/json"},
        body=json.dumps({
            "access_token": access_token,
            "token_type": "Bearer",
            "expires_in": expires_in,
            "rest_instance_url": "https://mc123.rest.marketingcloudapis.com/",
            "soap_instance_url": "https://mc123.soap.marketingcloudapis.com/",
        }),
    )


class FakeTransport:
    """Records requests and replays queued responses (or raises queued errors)."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.requests = []

    def queue(self, response):
        self.responses.append(response)

    async def send(self, method, url, headers, body=None):
        self.requests.append({"method": method, "url": url, "headers": headers, "body": body})
        if not self.responses:
            raise TransportError("no response queued")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def calls_to(self, url):
        return [r for r in self.requests if r["url"] == url]


class ManualClock:
    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def settings():
    return Settings(subdomain="mc123", client_id="cid", client_secret="secret")


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def transport():
    return FakeTransport()
