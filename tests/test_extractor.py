import json
from tradebot.services import extractor
from tradebot.services.extractor import extract_records


def test_single_record_becomes_list():
    text = 'Here is the trade:\n```json\n{"action": "buy", "coinname": "btc"}\n```'
    assert extract_records(text) == [{"action": "buy", "coinname": "btc"}]


def test_list_payload_kept_in_order():
    records = [{"action": "buy", "coinname": "eth"}, {"action": "sell", "coinname": "sol"}]
    text = "Sure, I found two trades.\n```json\n" + json.dumps(records) + "\n```\nLet me know!"
    assert extract_records(text) == records


def test_untagged_fence():
    text = '```\n[{"action": "sell", "coinname": "doge"}]\n```'
    assert extract_records(text) == [{"action": "sell", "coinname": "doge"}]


def test_bare_json_response():
    assert extract_records('{"action": "buy", "coinname": "btc"}') == [{"action": "buy", "coinname": "btc"}]


def test_sentinel_yields_nothing(monkeypatch):
    def boom(payload):
        raise AssertionError("payload should not be parsed")

    monkeypatch.setattr(extractor, "_parse_payload", boom)
    assert extract_records("NO_TRADE") == []
    assert extract_records("  \n NO_TRADE \n") == []


def test_sentinel_is_exact_match():
    text = 'NO_TRADE is not what I mean.\n```json\n{"action": "buy", "coinname": "eth"}\n```'
    assert extract_records(text) == [{"action": "buy", "coinname": "eth"}]


def test_custom_sentinel():
    assert extract_records("NONE", sentinel="NONE") == []


def test_failures_return_empty():
    assert extract_records(None) == []
    assert extract_records("") == []
    assert extract_records("Hello! How can I help you today?") == []
    assert extract_records("```json\n{not json}\n```") == []
    assert extract_records('```json\n"just a string"\n```') == []
    assert extract_records("```json\n42\n```") == []


def test_corrupt_entries_are_passed_to_normalizer():
    text = '```json\n[{"action": "buy", "coinname": "btc"}, null, "junk"]\n```'
    assert extract_records(text) == [{"action": "buy", "coinname": "btc"}, None, "junk"]
