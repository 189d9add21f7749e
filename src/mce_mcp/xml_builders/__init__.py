"""
SOAP XML construction and parsing for the Marketing Cloud partner API.

- templates/: envelope and action body structure
- builders/: logic deciding which elements to emit
- envelope_parser: response XML -> normalized text
"""

from .builders import EnvelopeBuilder, serialize_properties
from .envelope_parser import parse_response, xml_to_dict

__all__ = [
    "EnvelopeBuilder",
    "serialize_properties",
    "parse_response",
    "xml_to_dict",
]
