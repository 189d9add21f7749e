"""
Meta tools: health check and bundled documentation (no API calls).

The documentation bundle is loaded once at startup and handed to the
server as an immutable value.
"""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

logger = logging.getLogger(__name__)

DOC_FILES = (
    "mcp-documentation.json",
    "journey-builder-examples.json",
    "soap-examples.json",
)


def health_text(ping: Optional[str] = None) -> str:
    return f"ok=true echo={ping or 'pong'}"


def bundle_key(filename: str) -> str:
    """``journey-builder-examples.json`` -> ``journey_builder_examples``."""
    return filename.replace(".json", "").replace("-", "_")


class DocumentationBundle:
    """Read-only mapping of bundle key -> parsed JSON document."""

    def __init__(self, documents: Optional[Mapping[str, Any]] = None):
        self._documents = MappingProxyType(dict(documents or {}))

    @property
    def documents(self) -> Mapping[str, Any]:
        return self._documents

    def keys(self):
        return list(self._documents.keys())

    def to_text(self) -> str:
        return json.dumps(dict(self._documents), indent=2, ensure_ascii=False)

    def with_document(self, key: str, document: Any) -> "DocumentationBundle":
        """Return a new bundle with ``key`` added (or replaced)."""
        documents = dict(self._documents)
        documents[key] = document
        return DocumentationBundle(documents)

    @classmethod
    def load(cls, docs_dir: Path, files: Iterable[str] = DOC_FILES) -> "DocumentationBundle":
        """Load each file; ones that cannot be read or parsed are skipped."""
        documents = {}
        for filename in files:
            path = Path(docs_dir) / filename
            try:
                with open(path, "r", encoding="utf-8") as f:
                    documents[bundle_key(filename)] = json.load(f)
                logger.info("Loaded %s", filename)
            except (OSError, ValueError) as e:
                logger.warning("Could not load %s: %s", filename, e)
        return cls(documents)
