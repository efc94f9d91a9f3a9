import json
from tests.fakes import FakeLLM
from tradebot.chat import handle_turn, start_chat
from tradebot.services.router import build_router


def make_input(lines):
    inputs = iter(lines)

    def read(prompt):
        try:
            return next(inputs)
        except StopIteration:
            raise EOFError

    return read


def run_chat(llm, lines):
    output = []
    start_chat(build_router(llm), input_fn=make_input(lines), output=output.append)
    return output


def test_exit_stops_loop():
    llm = FakeLLM("NO_TRADE")
    output = run_chat(llm, ["EXIT"])
    assert output == ["Chatbot started! Type 'exit' to quit.", "Exiting chatbot..."]
    assert llm.extract_calls == []


def test_chat_reply_printed():
    output = run_chat(FakeLLM("NO_TRADE", reply="Hi!"), ["hello", "", "exit"])
    assert output[1] == "Bot: Hi!"
    assert output[-1] == "Exiting chatbot..."


def test_trades_printed_as_json():
    output = []
    llm = FakeLLM('```json\n{"action":"buy","coinname":"sol","condition":"bearish"}\n```')
    handle_turn(build_router(llm), "buy sol on a dip", output.append)

    [line] = output
    assert line.startswith("Extracted trades: ")
    trades = json.loads(line[len("Extracted trades: "):])
    assert trades[0]["coin"] == "SOL"
    assert trades[0]["condition"] == {"type": "trend", "trend": "Bearish"}


def test_end_of_input_exits():
    assert run_chat(FakeLLM("NO_TRADE"), [])[-1] == "Exiting chatbot..."


def test_turn_error_keeps_session_alive():
    class BrokenLLM(FakeLLM):
        def extract_trades(self, user_prompt):
            raise RuntimeError("boom")

    output = run_chat(BrokenLLM(None), ["buy btc", "exit"])
    assert output[1] == "Bot: Sorry, I couldn't process your request."
    assert output[-1] == "Exiting chatbot..."
