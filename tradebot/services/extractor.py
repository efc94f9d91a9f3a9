import json
import logging
import re
from typing import Any, List, Optional

from tradebot.config.settings import NO_TRADE_SENTINEL

logger = logging.getLogger(__name__)

FENCE_RE = re.compile(r"```(?:json)?[ \t]*\n?(.*?)```", re.DOTALL | re.IGNORECASE)


def _find_payload(text: str) -> Optional[str]:
    """Return the fenced block, or the whole text when it is bare JSON."""
    match = FENCE_RE.search(text)
    if match:
        return match.group(1).strip()
    if text[:1] in "{[" and text[-1:] in "}]":
        return text
    return None


def _parse_payload(payload: str) -> Any:
    return json.loads(payload)


def extract_records(text: Optional[str], sentinel: str = NO_TRADE_SENTINEL) -> List[Any]:
    """Pull raw trade records out of a model response.

    Returns an empty list for the no-trade sentinel and for any response
    without a usable payload. A single record is wrapped in a list.
    """
    text = (text or "").strip()
    if not text:
        return []
    if text == sentinel:
        logger.info("Model reported no trade")
        return []

    payload = _find_payload(text)
    if payload is None:
        logger.debug("No structured block found in model response")
        return []

    try:
        data = _parse_payload(payload)
    except json.JSONDecodeError as e:
        logger.warning(f"Malformed trade payload: {e}")
        return []

    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return data
    logger.warning(f"Unexpected trade payload type: {type(data).__name__}")
    return []
