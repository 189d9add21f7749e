"""Typed request models built from loose tool arguments."""

from .rest_request import RestRequestSpec, ALLOWED_METHODS
from .soap_request import (
    DataExtensionField,
    DataExtensionObject,
    GenericObject,
    SimpleFilter,
    SoapAction,
    SoapObject,
    SoapRequestSpec,
)

__all__ = [
    'RestRequestSpec',
    'ALLOWED_METHODS',
    'DataExtensionField',
    'DataExtensionObject',
    'GenericObject',
    'SimpleFilter',
    'SoapAction',
    'SoapObject',
    'SoapRequestSpec',
]
