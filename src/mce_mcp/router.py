"""
Advisory REST/SOAP routing for named logical operations.

The generic ``rest_request``/``soap_request`` tools let the caller choose the
protocol directly; ``route`` is for operation-name based callers and only
logs its decision.

Precedence (first match wins):
1. bulk data operations over 1000 rows -> SOAP
2. REST-preferred operations -> REST
3. SOAP-preferred operations -> SOAP
4. anything else -> REST
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

BULK_ROW_THRESHOLD = 1000


class WireProtocol(str, Enum):
    REST = "REST"
    SOAP = "SOAP"


REST_PREFERRED = frozenset({
    "list_emails", "create_email", "update_email",
    "list_journeys", "create_journey", "publish_journey",
    "get_contacts", "create_contact",
    "list_data_extensions",
})

SOAP_PREFERRED = frozenset({
    "bulk_data_import",     # large row counts
    "complex_retrieve",     # multi-object queries
    "automation_trigger",
})


def _row_count(params: Dict[str, Any]) -> float:
    value = params.get("rowCount")
    if isinstance(value, bool):
        return 0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0


def route(operation_name: str, params: Optional[Dict[str, Any]] = None) -> WireProtocol:
    """Pick the wire protocol for ``operation_name``."""
    params = params or {}
    row_count = _row_count(params)

    if "data" in operation_name and row_count > BULK_ROW_THRESHOLD:
        logger.info("Routing to SOAP for bulk operation (%s rows)", params.get("rowCount"))
        return WireProtocol.SOAP

    if operation_name in REST_PREFERRED:
        logger.info("Routing to REST for %s (optimal performance)", operation_name)
        return WireProtocol.REST

    if operation_name in SOAP_PREFERRED:
        logger.info("Routing to SOAP for %s (better for this operation)", operation_name)
        return WireProtocol.SOAP

    logger.info("Defaulting to REST for %s", operation_name)
    return WireProtocol.REST
