"""
Error types raised inside the request-translation layer.

None of these cross the tool boundary: executors catch them and render
a text result instead.
"""


class MceError(Exception):
    """Base class for all Marketing Cloud Engagement errors."""


class AuthConfigError(MceError):
    """Required credentials are missing from the environment."""


class AuthRequestError(MceError):
    """The token endpoint rejected the request or could not be reached."""


class UnsupportedActionError(MceError):
    """SOAP action outside Create/Retrieve/Update/Delete."""

    def __init__(self, action):
        self.action = action
        super().__init__(f"Unsupported SOAP action: {action}")


class TransportError(MceError):
    """The HTTP call itself failed (DNS, connect, timeout, ...)."""


class ParseError(MceError):
    """Vendor response was not well-formed XML."""
