import logging

from tradebot.config.settings import COIN_OUTPUT_MODE, NO_TRADE_SENTINEL, SWAP_DECOMPOSITION
from tradebot.models.trade import TurnResult
from tradebot.services.coins import CoinRegistry
from tradebot.services.extractor import extract_records
from tradebot.services.llm import LLMService
from tradebot.services.normalizer import TradeNormalizer

logger = logging.getLogger(__name__)


class IntentRouter:
    """Routes one user turn to trade intents or a conversational reply.

    ``llm`` needs ``extract_trades(text) -> Optional[str]`` and
    ``chat(text) -> str``.
    """

    def __init__(self, llm, normalizer: TradeNormalizer, sentinel: str = NO_TRADE_SENTINEL):
        self.llm = llm
        self.normalizer = normalizer
        self.sentinel = sentinel

    def route(self, user_text: str) -> TurnResult:
        response_text = self.llm.extract_trades(user_text)
        if response_text is None:
            logger.warning("Trade extraction unavailable, falling back to chat")
            trades = []
        else:
            trades = self.normalizer.normalize(extract_records(response_text, self.sentinel))

        if trades:
            logger.info(f"Extracted {len(trades)} trade(s)")
            return TurnResult(trades=trades)
        return TurnResult(reply=self.llm.chat(user_text))


def build_router(llm=None) -> IntentRouter:
    if llm is None:
        llm = LLMService()
    registry = CoinRegistry(output_mode=COIN_OUTPUT_MODE)
    normalizer = TradeNormalizer(registry, decompose_swaps=SWAP_DECOMPOSITION)
    return IntentRouter(llm, normalizer)
