import logging
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional

logger = logging.getLogger(__name__)

# symbol -> full name
COINS: Mapping[str, str] = MappingProxyType({
    "BTC": "Bitcoin",
    "ETH": "Ethereum",
    "SOL": "Solana",
    "XRP": "Ripple",
    "BNB": "Binance Coin",
    "ADA": "Cardano",
    "DOGE": "Dogecoin",
    "SHIB": "Shiba Inu",
    "DOT": "Polkadot",
    "AVAX": "Avalanche",
    "MATIC": "Polygon",
    "LINK": "Chainlink",
    "LTC": "Litecoin",
    "TRX": "Tron",
    "ATOM": "Cosmos",
    "XLM": "Stellar",
    "UNI": "Uniswap",
    "PEPE": "Pepe",
    "USDT": "Tether",
    "USDC": "USD Coin",
})

# extra lowercase aliases -> symbol
ALIASES: Mapping[str, str] = MappingProxyType({
    "xbt": "BTC",
    "ether": "ETH",
    "binance": "BNB",
    "shiba": "SHIB",
    "avalanche-2": "AVAX",
    "pol": "MATIC",
})

FIAT: FrozenSet[str] = frozenset({
    "usd", "usdt", "usdc", "busd", "dai", "tusd",
    "eur", "gbp", "jpy", "inr", "cad", "aud",
    "dollar", "dollars", "tether", "usd coin", "cash", "fiat",
})

OUTPUT_MODES = ("symbol", "name")


class CoinRegistry:
    """Immutable lookup between coin aliases, symbols and full names.

    The alias index and the name -> symbol index are both derived from the
    same symbol table when the registry is built, so they cannot disagree.
    """

    def __init__(
        self,
        coins: Mapping[str, str] = COINS,
        aliases: Mapping[str, str] = ALIASES,
        output_mode: str = "symbol",
    ):
        if output_mode not in OUTPUT_MODES:
            raise ValueError(f"Unknown coin output mode: {output_mode}")
        self.output_mode = output_mode

        by_symbol: Dict[str, str] = {symbol.upper(): name for symbol, name in coins.items()}
        by_name: Dict[str, str] = {name.lower(): symbol for symbol, name in by_symbol.items()}

        by_alias: Dict[str, str] = {}
        for symbol, name in by_symbol.items():
            by_alias[symbol.lower()] = symbol
            by_alias[name.lower()] = symbol
        for alias, symbol in aliases.items():
            if symbol.upper() not in by_symbol:
                raise ValueError(f"Alias {alias!r} points at unknown symbol {symbol!r}")
            by_alias.setdefault(alias.lower(), symbol.upper())

        self._by_symbol = MappingProxyType(by_symbol)
        self._by_name = MappingProxyType(by_name)
        self._by_alias = MappingProxyType(by_alias)
        self._symbols = frozenset(by_symbol)

    @property
    def symbols(self) -> FrozenSet[str]:
        return self._symbols

    def _lookup(self, alias) -> Optional[str]:
        if not isinstance(alias, str):
            return None
        return self._by_alias.get(alias.strip().lower())

    def is_known(self, alias) -> bool:
        return self._lookup(alias) is not None

    def is_fiat(self, alias) -> bool:
        return isinstance(alias, str) and alias.strip().lower() in FIAT

    def resolve(self, alias):
        """Return the canonical symbol or name for ``alias``, or ``alias`` unchanged."""
        symbol = self._lookup(alias)
        if symbol is None:
            logger.debug(f"Unknown coin alias passed through: {alias!r}")
            return alias
        if self.output_mode == "name":
            return self._by_symbol[symbol]
        return symbol

    def to_name(self, symbol):
        """Symbol (or any alias) -> full name; unknown values pass through."""
        resolved = self._lookup(symbol)
        return self._by_symbol[resolved] if resolved else symbol

    def to_symbol(self, name):
        """Full name (or any alias) -> symbol; unknown values pass through."""
        if isinstance(name, str) and name.strip().lower() in self._by_name:
            return self._by_name[name.strip().lower()]
        resolved = self._lookup(name)
        return resolved or name
