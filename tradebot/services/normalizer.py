import logging
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from tradebot.config.settings import DEFAULT_CURRENCY, SWAP_DECOMPOSITION
from tradebot.models.trade import Action, CanonicalTradeIntent, Condition
from tradebot.services.amounts import detect_currency, parse_amount, parse_quantity
from tradebot.services.coins import CoinRegistry
from tradebot.services.conditions import ConditionClassifier

logger = logging.getLogger(__name__)

ACTION_KEYS = ("action", "type", "side")
COIN_KEYS = ("coin", "coinname", "coin_name", "symbol", "asset")
AMOUNT_KEYS = ("amount", "minimumAmount", "minimum_amount", "fiat_amount")
QUANTITY_KEYS = ("coinQuantity", "coin_quantity", "quantity")
FROM_KEYS = ("from", "from_coin", "source")
TO_KEYS = ("to", "to_coin", "target")


def _first(record: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        value = record.get(key)
        if value not in (None, ""):
            return value
    return None


class TradeNormalizer:
    def __init__(
        self,
        registry: CoinRegistry,
        classifier: Optional[ConditionClassifier] = None,
        decompose_swaps: bool = SWAP_DECOMPOSITION,
        default_currency: str = DEFAULT_CURRENCY,
    ):
        self.registry = registry
        self.classifier = classifier or ConditionClassifier(registry)
        self.decompose_swaps = decompose_swaps
        self.default_currency = default_currency

    def normalize(self, records: Iterable[Any]) -> List[CanonicalTradeIntent]:
        """Turn raw model records into canonical trade intents, in input order.

        Malformed records are skipped; siblings are unaffected.
        """
        intents: List[CanonicalTradeIntent] = []
        for index, record in enumerate(records or []):
            if not isinstance(record, Mapping):
                logger.debug(f"Skipping record {index}: not a mapping ({record!r})")
                continue
            intents.extend(self._normalize_record(index, record))
        return intents

    def _normalize_record(self, index: int, record: Mapping[str, Any]) -> List[CanonicalTradeIntent]:
        verb = _first(record, ACTION_KEYS)
        verb = verb.strip().lower() if isinstance(verb, str) else None

        raw_amount = _first(record, AMOUNT_KEYS)
        amount = parse_amount(raw_amount)
        currency = self._currency(record, raw_amount, amount)
        quantity = parse_quantity(_first(record, QUANTITY_KEYS))
        condition = self.classifier.classify(record.get("condition"))

        def build(action: Action, coin: Any, coin_quantity: Optional[float]) -> CanonicalTradeIntent:
            return self._intent(action, coin, amount, currency, coin_quantity, condition)

        if verb == "buy" or verb == "sell":
            coin = _first(record, COIN_KEYS)
            if coin is None:
                logger.warning(f"Skipping record {index}: {verb} without a coin")
                return []
            return [build(Action(verb.capitalize()), coin, quantity)]

        if verb == "swap":
            return self._swap(index, record, build, quantity)

        logger.warning(f"Skipping record {index}: unsupported action {verb!r}")
        return []

    def _swap(self, index, record, build, quantity) -> List[CanonicalTradeIntent]:
        source = _first(record, FROM_KEYS)
        target = _first(record, TO_KEYS) or _first(record, COIN_KEYS)

        if not self.decompose_swaps:
            if target is None:
                logger.warning(f"Skipping record {index}: swap without a destination coin")
                return []
            return [build(Action.BUY, target, quantity)]

        source_fiat = source is None or self.registry.is_fiat(source)
        target_fiat = target is None or self.registry.is_fiat(target)
        if source_fiat and target_fiat:
            logger.warning(f"Skipping record {index}: swap without a crypto leg")
            return []
        if source_fiat:
            return [build(Action.BUY, target, quantity)]
        if target_fiat:
            return [build(Action.SELL, source, quantity)]
        # the stated quantity is of the coin given up
        return [build(Action.SELL, source, quantity), build(Action.BUY, target, None)]

    def _currency(self, record: Mapping[str, Any], raw_amount: Any, amount: Optional[int]) -> Optional[str]:
        if amount is None:
            return None
        currency = record.get("currency")
        if isinstance(currency, str) and currency.strip():
            return currency.strip().upper()
        return detect_currency(raw_amount) or self.default_currency

    def _intent(
        self,
        action: Action,
        coin: Any,
        amount: Optional[int],
        currency: Optional[str],
        coin_quantity: Optional[float],
        condition: Condition,
    ) -> CanonicalTradeIntent:
        coin = str(coin).strip()
        resolved = self.registry.is_known(coin)
        if not resolved:
            logger.info(f"Coin {coin!r} not in registry, passing through")
        return CanonicalTradeIntent(
            action=action,
            coin=self.registry.resolve(coin),
            amount=amount,
            currency=currency,
            coin_quantity=coin_quantity,
            condition=condition,
            coin_resolved=resolved,
        )
