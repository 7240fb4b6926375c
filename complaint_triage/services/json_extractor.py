"""
Pull the JSON payload out of free-form model output.
"""
import json
import logging
import re
from typing import Any, Optional

logger = logging.getLogger(__name__)

# Earliest opening bracket, greedy to the last closing bracket of the same kind
JSON_SPAN_PATTERN = re.compile(r'\{[\s\S]*\}|\[[\s\S]*\]')


def _reject_constant(name: str):
    raise ValueError(f"Non-standard JSON constant: {name}")


def extract_json(text: Any) -> Optional[Any]:
    """
    Parse the first JSON object or array literal embedded in text.

    Single attempt: the matched span is parsed as-is. If it does not
    parse, None is returned without trying narrower spans or repairs.

    Args:
        text: Model output, possibly wrapped in prose or markdown fences.

    Returns:
        Parsed JSON value, or None if nothing parses.
    """
    if not isinstance(text, str):
        return None

    match = JSON_SPAN_PATTERN.search(text)
    if not match:
        logger.debug("No JSON-like span found in model output")
        return None

    try:
        return json.loads(match.group(0), parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        # RecursionError: nesting deeper than the decoder can follow
        logger.debug(f"JSON span failed to parse: {type(e).__name__}: {e}")
        return None
