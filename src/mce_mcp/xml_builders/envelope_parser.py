"""
SOAP response parsing.

Responses are converted to plain dicts with xml2js-style conventions
(attributes dropped, single children not wrapped in lists) and rendered as
pretty JSON text. Tag names are kept exactly as written in the document,
e.g. ``soap:Envelope`` or an unprefixed ``RetrieveResponseMsg`` under a
default namespace; on the success path ``:`` is replaced with ``_``.

Malformed or too deeply nested XML never raises out of ``parse_response``:
the result falls back to the raw body.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple
from xml.parsers import expat

from ..errors import ParseError
from ..result import NormalizedResult

logger = logging.getLogger(__name__)

ENVELOPE_PREFIXES = ("soap", "s")

TagProcessor = Callable[[str], str]


def _add_child(parent: Dict[str, Any], name: str, value: Any) -> None:
    if name in parent:
        existing = parent[name]
        if isinstance(existing, list):
            existing.append(value)
        else:
            parent[name] = [existing, value]
    else:
        parent[name] = value


class _DictBuilder:
    """expat handlers that assemble the dict with an explicit element stack."""

    def __init__(self, rename: TagProcessor):
        self.rename = rename
        self.stack: List[Tuple[str, Dict[str, Any], List[str]]] = []
        self.root: Optional[Dict[str, Any]] = None

    def start(self, name, attrs):
        self.stack.append((self.rename(name), {}, []))

    def end(self, name):
        tag, children, chunks = self.stack.pop()
        text = "".join(chunks)
        if not children:
            value: Any = text if text.strip() else ""
        elif text.strip():
            value = {"_": text}
            value.update(children)
        else:
            value = children

        if self.stack:
            _add_child(self.stack[-1][1], tag, value)
        else:
            self.root = {tag: value}

    def data(self, text):
        if self.stack:
            self.stack[-1][2].append(text)


def xml_to_dict(xml_text: str, tag_processor: Optional[TagProcessor] = None) -> Dict[str, Any]:
    """
    Parse XML into a nested dict keyed by the root element name.

    Attributes are ignored. Text-only elements become strings, repeated
    children become lists, text mixed with children is kept under ``"_"``.
    Namespace processing is off, so each tag keeps the prefix (or lack of
    one) it was written with.

    Raises:
        ParseError: the input is not well-formed XML
    """
    builder = _DictBuilder(tag_processor or (lambda name: name))

    parser = expat.ParserCreate()
    parser.buffer_text = True
    parser.StartElementHandler = builder.start
    parser.EndElementHandler = builder.end
    parser.CharacterDataHandler = builder.data
    try:
        parser.Parse(xml_text, True)
    except expat.ExpatError as e:
        raise ParseError(f"Invalid XML: {e}") from e

    if builder.root is None:
        raise ParseError("Invalid XML: no root element")
    return builder.root


def _underscore_tags(name: str) -> str:
    return name.replace(":", "_")


def _find_body(parsed: Dict[str, Any], separator: str) -> Optional[Any]:
    for prefix in ENVELOPE_PREFIXES:
        envelope = parsed.get(f"{prefix}{separator}Envelope")
        if isinstance(envelope, dict) and f"{prefix}{separator}Body" in envelope:
            return envelope[f"{prefix}{separator}Body"]
    return None


def _find_fault(parsed: Dict[str, Any]) -> Optional[Any]:
    body = _find_body(parsed, ":")
    if not isinstance(body, dict):
        return None
    for key, value in body.items():
        if key == "Fault" or key.endswith(":Fault"):
            return value
    return None


def _to_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def _decode(body) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body or ""


def parse_fault(status: int, body: str) -> NormalizedResult:
    """Render a non-2xx SOAP response, preferring the Fault element."""
    try:
        parsed = xml_to_dict(body)
    except ParseError as e:
        logger.warning("Could not parse error response as XML: %s", e)
    else:
        fault = _find_fault(parsed)
        if fault is not None:
            try:
                return NormalizedResult(text=f"SOAP Fault: {_to_json(fault)}")
            except RecursionError:
                logger.warning("SOAP fault nests too deeply to render as JSON")

    return NormalizedResult(text=f"SOAP Error ({status}): {body}")


def parse_success(body: str) -> NormalizedResult:
    """Render a 2xx SOAP response body as JSON text (raw body if not XML)."""
    try:
        parsed = xml_to_dict(body, tag_processor=_underscore_tags)
    except ParseError as e:
        logger.warning("XML parse error, returning raw response: %s", e)
        return NormalizedResult(text=body)

    response_body = _find_body(parsed, "_")
    if response_body is None:
        response_body = parsed
    try:
        return NormalizedResult(text=_to_json(response_body))
    except RecursionError:
        logger.warning("Response nests too deeply to render as JSON, returning raw response")
        return NormalizedResult(text=body)


def parse_response(status: int, body) -> NormalizedResult:
    """Normalize any SOAP HTTP response into text."""
    text = _decode(body)
    if 200 <= status < 300:
        return parse_success(text)
    return parse_fault(status, text)
