from tradebot.services.amounts import detect_currency, parse_amount, parse_quantity


def test_parse_amount_suffixes():
    assert parse_amount("$300K") == 300000
    assert parse_amount("1.5M") == 1500000
    assert parse_amount("2k") == 2000
    assert parse_amount("€ 1,250") == 1250


def test_parse_amount_misses():
    assert parse_amount("no number here") is None
    assert parse_amount("") is None
    assert parse_amount(None) is None
    assert parse_amount(True) is None
    assert parse_amount(-5) is None
    assert parse_amount("-5") is None


def test_parse_amount_is_idempotent():
    assert parse_amount(300000) == 300000
    assert parse_amount(parse_amount("$300K")) == 300000
    assert parse_amount(1500000.0) == 1500000


def test_parse_amount_rounds_half_up():
    assert parse_amount("$10.50") == 11
    assert parse_amount(2.5) == 3
    assert parse_amount("99.4") == 99


def test_suffix_needs_word_end():
    # "kg" is not a thousands suffix
    assert parse_amount("300 kg") == 300


def test_parse_quantity_keeps_fractions():
    assert parse_quantity("0.25") == 0.25
    assert parse_quantity(2) == 2
    assert parse_quantity("1k") == 1000
    assert parse_quantity("lots") is None


def test_detect_currency():
    assert detect_currency("$500") == "USD"
    assert detect_currency("500 dollars") == "USD"
    assert detect_currency("€20") == "EUR"
    assert detect_currency("£1k") == "GBP"
    assert detect_currency("500") is None
    assert detect_currency(500) is None


def test_spelled_out_magnitudes():
    assert parse_amount("1.5 million") == 1500000
    assert parse_amount("$300 thousand") == 300000
    assert parse_amount("2 millions") == 2000000
    assert parse_amount("1.5 million dollars") == 1500000
    assert parse_quantity("2 thousand") == 2000


def test_unsupported_magnitude_is_none():
    assert parse_amount("$2B") is None
    assert parse_amount("1 billion") is None
    assert parse_amount("3bn") is None
    assert parse_amount("1 trillion dollars") is None


def test_coin_after_number_is_not_a_magnitude():
    assert parse_quantity("2 BTC") == 2
    assert parse_quantity("5 tether") == 5
