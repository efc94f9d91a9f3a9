import logging
from typing import Optional
from together import Together
from tradebot.config.settings import (
    TOGETHER_API_KEY,
    LLM_MODEL,
    LLM_MAX_TOKENS,
    LLM_TEMPERATURE,
    LLM_CHAT_TEMPERATURE,
    LLM_TOP_P,
    NO_TRADE_SENTINEL,
    FALLBACK_MESSAGE,
)

logger = logging.getLogger(__name__)

EXTRACTION_PROMPT = f"""You are a crypto trading assistant. Decide whether the user's message asks to buy, sell or swap cryptocurrency.

If it does NOT, reply with exactly: {NO_TRADE_SENTINEL}

If it does, reply with a ```json fenced block containing a list of trades. Each trade is an object with these fields:
{{
    "action": "buy|sell|swap",
    "coinname": "coin symbol or name",
    "amount": "fiat amount as written, e.g. $300K" or null,
    "currency": "USD|EUR|etc" or null,
    "coin_quantity": number of coins or null,
    "condition": "trigger as written, e.g. $60K, 2 ETH, bullish" or null,
    "from": "coin given up (swap only)" or null,
    "to": "coin received (swap only)" or null
}}

Examples:
- "buy 2 BTC if it hits 60k" -> [{{"action": "buy", "coinname": "btc", "amount": null, "currency": null, "coin_quantity": 2, "condition": "$60K", "from": null, "to": null}}]
- "sell $500 of eth" -> [{{"action": "sell", "coinname": "eth", "amount": "$500", "currency": "USD", "coin_quantity": null, "condition": null, "from": null, "to": null}}]
- "swap my ETH for SOL" -> [{{"action": "swap", "coinname": null, "amount": null, "currency": null, "coin_quantity": null, "condition": null, "from": "ETH", "to": "SOL"}}]
- "hi" -> {NO_TRADE_SENTINEL}

Never add fields that the user did not state."""

CHAT_PROMPT = "You are a friendly crypto trading assistant. Answer the user conversationally and briefly."


class LLMService:
    def __init__(self, client=None):
        self.client = client or Together(api_key=TOGETHER_API_KEY)

    def _complete(self, system_prompt: str, user_prompt: str, temperature: float) -> str:
        response = self.client.chat.completions.create(
            model=LLM_MODEL,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            max_tokens=LLM_MAX_TOKENS,
            temperature=temperature,
            top_p=LLM_TOP_P
        )
        return (response.choices[0].message.content or "").strip()

    def extract_trades(self, user_prompt: str) -> Optional[str]:
        """Ask the model for trade records; None if the call failed"""
        try:
            response_text = self._complete(EXTRACTION_PROMPT, user_prompt, LLM_TEMPERATURE)
            logger.info(f"LLM Response: {response_text}")
            return response_text
        except Exception as e:
            logger.error(f"Error getting trade intent: {e}")
            return None

    def chat(self, user_prompt: str) -> str:
        """Conversational reply for messages without a trade"""
        try:
            reply = self._complete(CHAT_PROMPT, user_prompt, LLM_CHAT_TEMPERATURE)
            return reply or FALLBACK_MESSAGE
        except Exception as e:
            logger.error(f"Error getting chat reply: {e}")
            return FALLBACK_MESSAGE
