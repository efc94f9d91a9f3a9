import subprocess
import sys
import logging
from tradebot.chat import start_chat
from tradebot.config.settings import API_HOST, API_PORT
from tradebot.services.router import build_router

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def run_fastapi():
    """Run the FastAPI server"""
    try:
        logger.info("Starting FastAPI server...")
        subprocess.run(
            [sys.executable, "-m", "uvicorn", "tradebot.backend:app", "--host", API_HOST, "--port", str(API_PORT)],
            check=True
        )
    except subprocess.CalledProcessError as e:
        logger.error(f"FastAPI server error: {e}")
    except KeyboardInterrupt:
        logger.info("Shutting down...")

def run_chat():
    """Run the terminal chat loop"""
    start_chat(build_router())

if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "serve":
        run_fastapi()
    else:
        run_chat()
