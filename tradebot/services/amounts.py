import logging
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

logger = logging.getLogger(__name__)

MULTIPLIERS = {
    "k": Decimal("1000"),
    "thousand": Decimal("1000"),
    "m": Decimal("1000000"),
    "million": Decimal("1000000"),
}

# K/M or spelled out; anything else after a number makes it unreadable
MAGNITUDE = r"(?:thousands?|millions?|k|m)(?![a-z])"
UNSUPPORTED_MAGNITUDE_RE = re.compile(
    r"\s*(?:b|bn|t|tn|billions?|trillions?|hundreds?)(?![a-z])", re.IGNORECASE
)

# optional currency marker, number (thousands separators allowed), optional magnitude
AMOUNT_RE = re.compile(
    r"(?<![\w.-])(?P<marker>[$€£])?\s*"
    r"(?P<number>\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?|\.\d+)"
    rf"(?:\s*(?P<suffix>{MAGNITUDE}))?",
    re.IGNORECASE,
)

CURRENCY_WORDS = [
    (re.compile(r"\$|\busd\b|\bdollars?\b", re.IGNORECASE), "USD"),
    (re.compile(r"€|\beur\b|\beuros?\b", re.IGNORECASE), "EUR"),
    (re.compile(r"£|\bgbp\b|\bpounds?\b", re.IGNORECASE), "GBP"),
]


def has_unsupported_magnitude(text: str, pos: int) -> bool:
    """True when a magnitude we cannot scale by (2B, 1 billion) starts at ``pos``."""
    return UNSUPPORTED_MAGNITUDE_RE.match(text, pos) is not None


def _to_decimal(value) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        try:
            number = Decimal(str(value))
        except InvalidOperation:
            return None
        if not number.is_finite() or number < 0:
            return None
        return number
    if not isinstance(value, str) or not value.strip():
        return None

    match = AMOUNT_RE.search(value)
    if not match:
        logger.debug(f"No numeric pattern in {value!r}")
        return None
    if has_unsupported_magnitude(value, match.end()):
        logger.debug(f"Unsupported magnitude in {value!r}")
        return None
    number = Decimal(match.group("number").replace(",", ""))
    suffix = match.group("suffix")
    if suffix:
        number *= MULTIPLIERS[suffix.lower().rstrip("s")]
    return number


def parse_amount(value) -> Optional[int]:
    """Parse a fiat magnitude such as ``"$300K"`` or ``"1.5M"`` to an int.

    Numeric input is accepted as-is so parsing is idempotent. Returns None
    when nothing numeric is found.
    """
    number = _to_decimal(value)
    if number is None:
        return None
    return int(number.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def parse_quantity(value) -> Optional[float]:
    """Same grammar as parse_amount but keeps fractional coin units."""
    number = _to_decimal(value)
    if number is None:
        return None
    return float(number)


def detect_currency(text) -> Optional[str]:
    if not isinstance(text, str):
        return None
    for pattern, code in CURRENCY_WORDS:
        if pattern.search(text):
            return code
    return None
