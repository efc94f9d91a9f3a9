from fastapi import FastAPI, Depends
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel
from functools import lru_cache
import logging
from .config.settings import FALLBACK_MESSAGE
from .services.router import IntentRouter, build_router

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI()


class QueryRequest(BaseModel):
    prompt: str = ""


@lru_cache(maxsize=1)
def get_router() -> IntentRouter:
    return build_router()


@app.post("/query")
async def query(req: QueryRequest, router: IntentRouter = Depends(get_router)):
    if not req.prompt.strip():
        return {"response": "Tell me what you'd like to buy or sell, or just say hi."}

    try:
        result = await run_in_threadpool(router.route, req.prompt)
        return result.to_dict()
    except Exception as e:
        logger.error(f"Error processing request: {e}")
        return {"response": FALLBACK_MESSAGE}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
