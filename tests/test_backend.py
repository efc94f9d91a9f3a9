import pytest
from fastapi.testclient import TestClient
from tests.fakes import FakeLLM
from tradebot.config.settings import FALLBACK_MESSAGE
from tradebot.backend import app, get_router
from tradebot.services.router import build_router


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def use_llm(llm):
    app.dependency_overrides[get_router] = lambda: build_router(llm)


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_query_returns_trades(client):
    use_llm(FakeLLM('```json\n[{"action":"sell","coin":"eth","amount":"$500"}]\n```'))
    response = client.post("/query", json={"prompt": "sell $500 of eth"})
    assert response.status_code == 200
    assert response.json() == {
        "trades": [
            {
                "action": "Sell",
                "coin": "ETH",
                "amount": 500,
                "currency": "USD",
                "coinQuantity": None,
                "condition": None,
            }
        ]
    }


def test_query_returns_chat_reply(client):
    use_llm(FakeLLM("NO_TRADE", reply="Hello!"))
    assert client.post("/query", json={"prompt": "hi"}).json() == {"response": "Hello!"}


def test_empty_prompt(client):
    llm = FakeLLM("NO_TRADE")
    use_llm(llm)
    assert "response" in client.post("/query", json={"prompt": "  "}).json()
    assert llm.extract_calls == []


def test_unexpected_error_returns_apology(client):
    class BrokenLLM(FakeLLM):
        def extract_trades(self, user_prompt):
            raise RuntimeError("boom")

    use_llm(BrokenLLM(None))
    assert client.post("/query", json={"prompt": "buy btc"}).json() == {"response": FALLBACK_MESSAGE}
