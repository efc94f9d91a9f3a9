import json
import logging
from typing import Callable

from tradebot.config.settings import FALLBACK_MESSAGE
from tradebot.services.router import IntentRouter

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"


def handle_turn(router: IntentRouter, user_input: str, output: Callable[[str], None] = print):
    result = router.route(user_input)
    if result.is_trade:
        output("Extracted trades: " + json.dumps(result.to_dict()["trades"], indent=2))
    else:
        output(f"Bot: {result.reply}")
    return result


def start_chat(router: IntentRouter, input_fn: Callable[[str], str] = input, output: Callable[[str], None] = print):
    """Read user turns until 'exit' or end of input"""
    output("Chatbot started! Type 'exit' to quit.")
    while True:
        try:
            user_input = input_fn("You: ")
        except (EOFError, KeyboardInterrupt):
            output("Exiting chatbot...")
            return

        if user_input.strip().lower() == EXIT_COMMAND:
            output("Exiting chatbot...")
            return
        if not user_input.strip():
            continue

        try:
            handle_turn(router, user_input, output)
        except Exception as e:
            logger.error(f"Error handling turn: {e}")
            output(f"Bot: {FALLBACK_MESSAGE}")
