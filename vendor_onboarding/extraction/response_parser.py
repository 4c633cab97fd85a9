"""
Extraction Response Parser

Defensive parsing of the extraction service's reply: the model is asked
for bare JSON but often wraps it in a Markdown code fence.
"""

import json
import logging
import re
from typing import Any, Dict

from ..exceptions import ExtractionError

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r'^\s*```[a-zA-Z]*[ \t]*\n?')
_FENCE_CLOSE = re.compile(r'\n?```\s*$')


def strip_code_fences(text: str) -> str:
    """
    Remove a leading ```json (or bare ```) fence and the closing fence.

    Example:
        >>> strip_code_fences('```json\\n{"a": 1}\\n```')
        '{"a": 1}'
    """
    if not text:
        return ""
    cleaned = _FENCE_OPEN.sub('', text, count=1)
    cleaned = _FENCE_CLOSE.sub('', cleaned, count=1)
    return cleaned.strip()


def _load_json(cleaned: str) -> Any:
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        # Prose around the object ("Here is the JSON: {...}")
        start, end = cleaned.find('{'), cleaned.rfind('}')
        if 0 <= start < end:
            return json.loads(cleaned[start:end + 1])
        raise


def parse_catalog_response(text: str) -> Dict[str, Any]:
    """
    Parse and structurally validate a catalog reply.

    Args:
        text: Raw reply text from the extraction service

    Returns:
        Parsed object with a 'vendor' object and a 'products' list

    Raises:
        ExtractionError: Non-JSON reply, or vendor/products missing; the
            raw reply is preserved on the error
    """
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise ExtractionError("Empty response from AI", raw_response=text or "")

    try:
        data = _load_json(cleaned)
    except json.JSONDecodeError as e:
        logger.error("JSON Parse Error: %s", e)
        logger.debug("Raw content: %s", text)
        raise ExtractionError("Failed to parse AI response as JSON", raw_response=text) from e

    if not isinstance(data, dict):
        raise ExtractionError("AI response is not a JSON object", raw_response=text)

    if not isinstance(data.get("vendor"), dict) or not isinstance(data.get("products"), list):
        raise ExtractionError("Invalid data structure returned from AI", raw_response=text)

    return data
