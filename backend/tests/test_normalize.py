"""Tests for market field normalization."""

import hashlib

from utils.normalize import (
    description_signature,
    flag,
    load_market_json,
    market_end_date,
    norm_str,
    normalize_market,
    parse_outcomes,
    parse_prices,
)


class TestNormStr:
    def test_trims(self):
        assert norm_str("  hello ") == "hello"

    def test_empty_is_none(self):
        assert norm_str("") is None
        assert norm_str("   ") is None

    def test_none_is_none(self):
        assert norm_str(None) is None


class TestFlag:
    def test_only_true_counts(self):
        assert flag(True) == 1
        assert flag(False) == 0
        assert flag("true") == 0
        assert flag(1) == 0
        assert flag(None) == 0


class TestArrays:
    def test_outcomes_from_json_string(self):
        assert parse_outcomes('["Yes", "No"]') == ["Yes", "No"]

    def test_outcomes_from_list(self):
        assert parse_outcomes(["Yes", "No"]) == ["Yes", "No"]

    def test_invalid_encoding_is_none(self):
        assert parse_outcomes("[Yes, No") is None
        assert parse_outcomes('{"a": 1}') is None
        assert parse_outcomes(None) is None
        assert parse_outcomes("") is None

    def test_prices_from_strings(self):
        assert parse_prices('["0.65", "0.35"]') == [0.65, 0.35]

    def test_prices_from_numbers(self):
        assert parse_prices([0.2, 0.8]) == [0.2, 0.8]

    def test_partial_prices_rejected(self):
        assert parse_prices('["0.65", "n/a"]') is None
        assert parse_prices([0.5, None]) is None

    def test_non_finite_prices_rejected(self):
        assert parse_prices(["0.5", "inf"]) is None

    def test_boolean_prices_rejected(self):
        assert parse_prices([True, False]) is None


class TestEndDate:
    def test_prefers_first_event(self):
        market = {"endDate": "2025-01-01", "events": [{"endDate": "2025-06-30"}]}
        assert market_end_date(market) == "2025-06-30"

    def test_falls_back_to_market(self):
        assert market_end_date({"endDate": "2025-01-01", "events": []}) == "2025-01-01"
        assert market_end_date({"endDate": "2025-01-01", "events": [{}]}) == "2025-01-01"

    def test_missing(self):
        assert market_end_date({}) is None


class TestDescriptionSignature:
    def test_hash_and_length(self):
        text = "Resolves YES if it rains."
        expected = hashlib.sha256(text.encode()).hexdigest()
        assert description_signature(text) == f"{expected}:{len(text)}"

    def test_empty_is_none(self):
        assert description_signature("") is None
        assert description_signature(None) is None

    def test_one_character_difference(self):
        assert description_signature("abc") != description_signature("abcd")


class TestNormalizeMarket:
    def test_absent_market(self):
        assert normalize_market(None) is None
        assert normalize_market([]) is None

    def test_full_market(self, market):
        snap = normalize_market(market)
        assert snap.question == "Will it rain tomorrow?"
        assert snap.resolution_source == "https://a.example"
        assert snap.status == "1/0"
        assert snap.restricted == 0
        assert snap.end_date == "2025-02-01T00:00:00Z"
        assert snap.outcomes == ["Yes", "No"]
        assert snap.yes_price == 0.40

    def test_empty_and_missing_compare_equal(self):
        assert normalize_market({"resolutionSource": ""}) == normalize_market({})

    def test_bad_prices_yield_no_yes_price(self, market):
        snap = normalize_market({**market, "outcomePrices": "oops"})
        assert snap.outcome_prices is None
        assert snap.yes_price is None


class TestLoadMarketJson:
    def test_roundtrip_dict(self):
        assert load_market_json('{"a": 1}') == {"a": 1}

    def test_unusable(self):
        assert load_market_json(None) is None
        assert load_market_json("not json") is None
        assert load_market_json("[1, 2]") is None
