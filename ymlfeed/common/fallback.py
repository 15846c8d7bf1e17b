"""
Fallback Chains

An attempt is a zero-argument callable returning a candidate value.
first_non_empty folds a sequence of attempts left to right and keeps the
first non-empty result; a failing attempt counts as "no value".
"""

import json
import logging
from typing import Callable, Iterable, Optional

from .errors import ExtractionError

logger = logging.getLogger(__name__)

Attempt = Callable[[], Optional[str]]

# Errors a single parse step may raise on malformed markup
RECOVERABLE_ERRORS = (
    ExtractionError,
    ValueError,
    TypeError,
    AttributeError,
    KeyError,
    IndexError,
    json.JSONDecodeError,
)


def run_attempt(attempt: Attempt) -> str:
    """Run one attempt, returning its trimmed text or "" on failure."""
    try:
        value = attempt()
    except RECOVERABLE_ERRORS as e:
        logger.debug("Attempt %s failed: %s", getattr(attempt, "__name__", attempt), e)
        return ""
    if value is None:
        return ""
    return str(value).strip()


def first_non_empty(attempts: Iterable[Attempt]) -> str:
    """
    Return the first non-empty attempt result.

    Attempts after the first hit are not evaluated.

    Args:
        attempts: Ordered attempt callables

    Returns:
        First non-empty trimmed value, or empty string
    """
    for attempt in attempts:
        value = run_attempt(attempt)
        if value:
            return value
    return ""
