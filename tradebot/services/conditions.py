import logging
import re
from typing import Optional

from tradebot.models.trade import (
    NO_CONDITION,
    Condition,
    CryptoThreshold,
    PriceThreshold,
    Trend,
    TrendCondition,
)
from tradebot.services.amounts import MAGNITUDE, has_unsupported_magnitude, parse_amount, parse_quantity
from tradebot.services.coins import CoinRegistry

logger = logging.getLogger(__name__)

NUMBER = r"(?:\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?|\.\d+)"

FIAT_RE = re.compile(
    rf"(?P<marker>[$€£])\s*{NUMBER}(?:\s*{MAGNITUDE})?"
    rf"|(?<![\w.$€£]){NUMBER}\s*{MAGNITUDE}"
    rf"|(?<![\w.$€£]){NUMBER}(?:\s*{MAGNITUDE})?\s*(?:usd|usdt|usdc|dollars?|eur|euros?|gbp)\b"
    rf"|\b(?:hits?|reach(?:es)?|cross(?:es)?|above|below|over|under|at|to)\s+{NUMBER}(?:\s*{MAGNITUDE})?(?![\w.])",
    re.IGNORECASE,
)
BARE_NUMBER_RE = re.compile(rf"\s*{NUMBER}\s*")
CRYPTO_RE = re.compile(rf"(?<![\w.]){NUMBER}(?:\s*{MAGNITUDE})?\s*(?P<coin>[a-z][a-z0-9]*)\b", re.IGNORECASE)
NEXT_WORD_RE = re.compile(r"\s*([a-z][a-z0-9]*)", re.IGNORECASE)
WORD_RE = re.compile(r"[a-z]+", re.IGNORECASE)

# numbers that are percentages, clock times or durations
NON_PRICE_UNIT_RE = re.compile(
    r"\s*(?:%|percent\b|pct\b|bps\b|x\b|am\b|pm\b|o'?clock\b"
    r"|(?:sec(?:ond)?|min(?:ute)?|h(?:ou)?r|day|week|month|year)s?\b|[hdw]\b)",
    re.IGNORECASE,
)
# indicators whose levels are not prices
NON_PRICE_SUBJECTS = frozenset({
    "rsi", "macd", "stoch", "stochastic", "adx", "cci", "mfi", "volume", "vol",
    "funding", "dominance", "index", "apy", "apr", "gas", "fee", "fees", "leverage",
})

BULLISH_WORDS = [
    "bullish", "bull", "bull run", "uptrend", "pump", "pumps", "pumping",
    "moon", "mooning", "rally", "rallies", "rising", "rises", "surge", "surges",
    "going up", "goes up", "breakout", "green",
]
BEARISH_WORDS = [
    "bearish", "bear", "downtrend", "dump", "dumps", "dumping", "crash",
    "crashes", "falling", "falls", "drop", "drops", "dip", "dips",
    "going down", "goes down", "correction", "red",
]


def _keyword_re(words):
    return re.compile(r"\b(?:" + "|".join(re.escape(word) for word in words) + r")\b", re.IGNORECASE)


BULLISH_RE = _keyword_re(BULLISH_WORDS)
BEARISH_RE = _keyword_re(BEARISH_WORDS)


class ConditionClassifier:
    """Classifies a free-text trade condition; the first matching rule wins."""

    def __init__(self, registry: CoinRegistry):
        self.registry = registry

    def classify(self, raw) -> Condition:
        if raw is None or isinstance(raw, bool):
            return NO_CONDITION
        if isinstance(raw, (int, float)):
            price = parse_amount(raw)
            return PriceThreshold(price) if price is not None else NO_CONDITION
        if not isinstance(raw, str):
            logger.debug(f"Ignoring non-text condition: {raw!r}")
            return NO_CONDITION
        if not raw.strip():
            return NO_CONDITION

        text = raw.strip()

        price = self._price_threshold(text)
        if price is not None:
            return PriceThreshold(price)

        crypto = self._crypto_threshold(text)
        if crypto is not None:
            return crypto

        if BULLISH_RE.search(text):
            return TrendCondition(Trend.BULLISH)
        if BEARISH_RE.search(text):
            return TrendCondition(Trend.BEARISH)

        logger.debug(f"Dropping unrecognised condition: {text!r}")
        return NO_CONDITION

    def _followed_by_coin(self, text: str, pos: int) -> bool:
        match = NEXT_WORD_RE.match(text, pos)
        if not match:
            return False
        word = match.group(1)
        return self.registry.is_known(word) and not self.registry.is_fiat(word)

    def _not_a_price(self, text: str, match) -> bool:
        """5%, 10 am, 3 days, or a level of RSI and friends."""
        if NON_PRICE_UNIT_RE.match(text, match.end()):
            return True
        preceding = WORD_RE.findall(text[:match.start()].lower())[-3:]
        return any(word in NON_PRICE_SUBJECTS for word in preceding)

    def _price_threshold(self, text: str) -> Optional[int]:
        if BARE_NUMBER_RE.fullmatch(text):
            return parse_amount(text)
        for match in FIAT_RE.finditer(text):
            if has_unsupported_magnitude(text, match.end()):
                continue
            # "1k DOGE" is a coin quantity, not a price
            if not match.group("marker") and (
                self._followed_by_coin(text, match.end()) or self._not_a_price(text, match)
            ):
                continue
            price = parse_amount(match.group(0))
            if price is not None:
                return price
        return None

    def _crypto_threshold(self, text: str) -> Optional[CryptoThreshold]:
        for match in CRYPTO_RE.finditer(text):
            coin = match.group("coin")
            if not self.registry.is_known(coin) or self.registry.is_fiat(coin):
                continue
            quantity = parse_quantity(match.group(0))
            if quantity is None:
                continue
            return CryptoThreshold(quantity=quantity, coin=self.registry.resolve(coin))
        return None
