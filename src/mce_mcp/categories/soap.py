"""
SOAP API calls: envelope -> POST Service.asmx -> normalized text.
"""

import logging

from ..models.soap_request import SoapRequestSpec
from ..result import Ok, Result
from ..token_cache import TokenInfo
from ..transport import HttpClient
from ..xml_builders.builders import EnvelopeBuilder
from ..xml_builders.envelope_parser import parse_response

logger = logging.getLogger(__name__)

PREVIEW_CHARS = 2000


def soap_url(token: TokenInfo) -> str:
    return f"{token.soap_base_url}Service.asmx"


async def call_soap(
    token: TokenInfo,
    http_client: HttpClient,
    builder: EnvelopeBuilder,
    spec: SoapRequestSpec,
) -> Result:
    """
    Build the envelope, post it and parse the reply.

    Raises:
        UnsupportedActionError: from the envelope builder
        TransportError: from the HTTP client
    """
    envelope = builder.build_envelope(spec, token.access_token)
    url = soap_url(token)
    logger.info("SOAP %s %s -> %s", spec.action.value, spec.object_type, url)

    response = await http_client.send(
        "POST",
        url,
        {
            "Content-Type": "text/xml; charset=UTF-8",
            "SOAPAction": spec.action.value,
        },
        envelope,
    )
    logger.info("SOAP response status: %s", response.status)
    logger.debug("SOAP response (first %d chars): %s", PREVIEW_CHARS, response.body[:PREVIEW_CHARS])

    return Ok(parse_response(response.status, response.body).text)
