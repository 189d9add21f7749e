"""
SOAP body builders.

Each supported action has its own builder; EnvelopeBuilder picks one and
wraps the result in the partner API envelope.
"""

from .base_builder import BaseXMLBuilder, escape_xml, serialize_properties
from .envelope_builder import (
    CreateRequestBuilder,
    DataExtensionCreateBuilder,
    DeleteRequestBuilder,
    EnvelopeBuilder,
    RetrieveRequestBuilder,
    UpdateRequestBuilder,
)

__all__ = [
    'BaseXMLBuilder',
    'escape_xml',
    'serialize_properties',
    'CreateRequestBuilder',
    'DataExtensionCreateBuilder',
    'DeleteRequestBuilder',
    'EnvelopeBuilder',
    'RetrieveRequestBuilder',
    'UpdateRequestBuilder',
]
