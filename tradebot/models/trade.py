from typing import Any, Dict, List, Optional, Union
from dataclasses import dataclass, field
from enum import Enum


class Action(str, Enum):
    BUY = "Buy"
    SELL = "Sell"


class Trend(str, Enum):
    BULLISH = "Bullish"
    BEARISH = "Bearish"


@dataclass(frozen=True)
class NoCondition:
    def __bool__(self) -> bool:
        return False

    def to_dict(self) -> None:
        return None


@dataclass(frozen=True)
class PriceThreshold:
    price: int  # fiat price level

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "price", "price": self.price}


@dataclass(frozen=True)
class CryptoThreshold:
    quantity: float
    coin: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "crypto", "quantity": self.quantity, "coin": self.coin}


@dataclass(frozen=True)
class TrendCondition:
    trend: Trend

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "trend", "trend": self.trend.value}


Condition = Union[NoCondition, PriceThreshold, CryptoThreshold, TrendCondition]

NO_CONDITION = NoCondition()


@dataclass(frozen=True)
class CanonicalTradeIntent:
    action: Action
    coin: str  # registry-resolved symbol or name
    amount: Optional[int] = None  # fiat
    currency: Optional[str] = None  # only set alongside amount
    coin_quantity: Optional[float] = None
    condition: Condition = NO_CONDITION
    coin_resolved: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with a fixed key set; absent values become None."""
        return {
            "action": self.action.value,
            "coin": self.coin,
            "amount": self.amount,
            "currency": self.currency,
            "coinQuantity": self.coin_quantity,
            "condition": self.condition.to_dict(),
        }


@dataclass
class TurnResult:
    trades: List[CanonicalTradeIntent] = field(default_factory=list)
    reply: Optional[str] = None  # chat

    @property
    def is_trade(self) -> bool:
        return bool(self.trades)

    def to_dict(self) -> Dict[str, Any]:
        if self.is_trade:
            return {"trades": [trade.to_dict() for trade in self.trades]}
        return {"response": self.reply}
