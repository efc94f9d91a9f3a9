import os
from dotenv import load_dotenv

load_dotenv()

# API Keys
TOGETHER_API_KEY = os.getenv("TOGETHER_API_KEY")

# API server
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))

# LLM Settings
LLM_MODEL = os.getenv("LLM_MODEL", "meta-llama/Llama-3.3-70B-Instruct-Turbo-Free")
LLM_MAX_TOKENS = 400
LLM_TEMPERATURE = 0.2
LLM_CHAT_TEMPERATURE = 0.7
LLM_TOP_P = 0.9

# Extraction
NO_TRADE_SENTINEL = os.getenv("NO_TRADE_SENTINEL", "NO_TRADE")
COIN_OUTPUT_MODE = os.getenv("COIN_OUTPUT_MODE", "symbol")  # "symbol|name"
SWAP_DECOMPOSITION = os.getenv("SWAP_DECOMPOSITION", "false").lower() in ("1", "true", "yes")
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "USD")

FALLBACK_MESSAGE = "Sorry, I couldn't process your request."
