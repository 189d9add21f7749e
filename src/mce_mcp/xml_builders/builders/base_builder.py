"""
Base builder classes and generic property serialization for SOAP bodies.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping, Tuple, Union

logger = logging.getLogger(__name__)

# Element names we are willing to emit from caller-supplied keys
_XML_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_.\-]*$")


def escape_xml(value: Any) -> str:
    """Escape special XML characters in text content."""
    if value is None:
        return ""
    if isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)

    replacements = {
        '&': '&amp;',
        '<': '&lt;',
        '>': '&gt;',
        '"': '&quot;',
        "'": '&apos;'
    }

    for char, escaped in replacements.items():
        text = text.replace(char, escaped)

    return text


def serialize_properties(obj: Union[Mapping[str, Any], Iterable[Tuple[str, Any]], None]) -> str:
    """
    Serialize an object as flat ``<key>value</key>`` elements.

    Keys are emitted in insertion order. Values that are lists, dicts or
    None are skipped: nested structures are not supported on this path.

    Args:
        obj: Mapping or iterable of (key, value) pairs

    Returns:
        Concatenated XML fragment (empty string for no scalar properties)

    Example:
        >>> serialize_properties({"a": 1, "b": [1, 2], "c": {"x": 1}})
        '<a>1</a>'
    """
    if not obj:
        return ""

    pairs = obj.items() if isinstance(obj, Mapping) else obj
    parts = []
    for key, value in pairs:
        if value is None or isinstance(value, (list, tuple, dict, Mapping)):
            continue
        key = str(key)
        if not _XML_NAME.match(key):
            logger.warning("Skipping property with invalid XML element name: %r", key)
            continue
        parts.append(f"<{key}>{escape_xml(value)}</{key}>")
    return "".join(parts)


class BaseXMLBuilder(ABC):
    """
    Abstract base class for SOAP action body builders.

    Builders never reject missing fields; they render them empty or leave
    the element out.
    """

    @abstractmethod
    def build(self, spec) -> str:
        """
        Build and return the action body XML.

        Args:
            spec: SoapRequestSpec describing the request

        Returns:
            XML fragment placed inside ``<s:Body>``
        """
        pass

    def _escape_xml(self, value: Any) -> str:
        return escape_xml(value)
