"""
Success/error result values and the adapter that renders them as tool text.

Executors build an ``Ok`` or ``Err`` internally; ``render_text`` is the only
place where a failure becomes the caller-facing ``"Error: ..."`` string.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class NormalizedResult:
    """The single value handed back across the tool boundary."""

    text: str


@dataclass(frozen=True)
class Ok:
    text: str


@dataclass(frozen=True)
class Err:
    error: Exception
    prefix: str = "Error"

    @property
    def message(self) -> str:
        return str(self.error) or self.error.__class__.__name__


Result = Union[Ok, Err]


def render_text(result: Result) -> NormalizedResult:
    """Turn either result variant into a NormalizedResult."""
    if isinstance(result, Ok):
        return NormalizedResult(text=result.text)
    return NormalizedResult(text=f"{result.prefix}: {result.message}")
