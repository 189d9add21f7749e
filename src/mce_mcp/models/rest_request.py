"""REST request model for the generic ``rest_request`` tool."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

ALLOWED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


@dataclass(frozen=True)
class RestRequestSpec:
    method: str
    path: str
    query: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None
    business_unit_id: Optional[str] = None

    @classmethod
    def from_arguments(
        cls,
        method: str,
        path: str,
        query: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        body: Any = None,
        business_unit_id: Optional[str] = None,
    ) -> "RestRequestSpec":
        """Normalize raw tool arguments.

        Raises:
            ValueError: method is not one of GET, POST, PUT, PATCH, DELETE
        """
        method = (method or "").upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(
                f"Invalid method: {method or '<empty>'}. Valid methods: {', '.join(ALLOWED_METHODS)}"
            )
        return cls(
            method=method,
            path=path or "",
            query=dict(query) if isinstance(query, Mapping) else {},
            headers={str(k): str(v) for k, v in headers.items()} if isinstance(headers, Mapping) else {},
            body=body,
            business_unit_id=business_unit_id or None,
        )
