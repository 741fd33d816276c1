"""Text -> JSON value, the only place syntax errors surface.

An optional repair callable gets exactly one chance to turn broken text
into valid JSON. What "repair" means (closing brackets, dropping trailing
commas, asking a model) is up to the caller.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from jsongraph.exceptions import DocumentTooDeepError, ParseError, RepairFailedError

logger = logging.getLogger(__name__)

Repairer = Callable[[str], str]


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(e.msg, line=e.lineno, column=e.colno) from e
    except RecursionError as e:
        raise DocumentTooDeepError() from e


def parse_json(text: str, repair: Repairer | None = None) -> Any:
    """Parse JSON text, optionally retrying once on repaired text.

    Args:
        text: Raw JSON text
        repair: Callable that returns a fixed-up version of the text

    Returns:
        The parsed value

    Raises:
        ParseError: Text is invalid and no repairer was given
        RepairFailedError: Text is invalid and the repaired text is too
            (or the repairer raised)
        DocumentTooDeepError: Text nests deeper than the decoder can follow
    """
    try:
        return _loads(text)
    except ParseError as original:
        if repair is None:
            raise

        logger.warning("JSON parse failed (%s); attempting repair", original.message)
        try:
            repaired = repair(text)
        except Exception as e:
            raise RepairFailedError(original, message=f"Repair failed: {e}") from e

        try:
            value = _loads(repaired)
        except ParseError as second:
            raise RepairFailedError(original, second) from second

        logger.info("Repaired JSON parsed successfully")
        return value
