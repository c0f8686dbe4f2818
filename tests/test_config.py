import logging

import pytest

from starframe.config import (
    DEFAULT_BASE_URL,
    DEFAULT_FRAME_IMAGE_URL,
    DEFAULT_PAIR_URL_TEMPLATE,
    load_config,
    parse_sign_pairs,
)
from starframe.signs import AGGREGATE_SIGN, DEFAULT_SIGN_PAIRS


def test_defaults_when_environment_is_empty():
    config = load_config({})

    assert config.sign_pairs == DEFAULT_SIGN_PAIRS
    assert config.frame_image_url == DEFAULT_FRAME_IMAGE_URL
    assert config.collect_url_prefix == ""
    assert config.base_url == DEFAULT_BASE_URL
    assert config.pair_url_template == DEFAULT_PAIR_URL_TEMPLATE
    assert config.fetch_timeout_seconds == 5.0


def test_sign_pairs_override_merges_over_defaults():
    pairs = parse_sign_pairs('{"aries": " 0xaaa ", "Taurus": "0xbbb"}')

    assert pairs["aries"] == "0xaaa"
    assert pairs["taurus"] == "0xbbb"
    assert pairs[AGGREGATE_SIGN] == DEFAULT_SIGN_PAIRS[AGGREGATE_SIGN]
    assert list(pairs)[:3] == ["aries", "taurus", "gemini"]


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]", '"aries"'])
def test_malformed_sign_pairs_fall_back_and_log(raw, caplog):
    with caplog.at_level(logging.WARNING, logger="starframe.config"):
        pairs = parse_sign_pairs(raw)

    assert pairs == DEFAULT_SIGN_PAIRS
    assert "SIGN_PAIRS" in caplog.text


def test_non_string_pair_entries_are_skipped():
    pairs = parse_sign_pairs('{"leo": 42, "virgo": null, "libra": "0xlib"}')

    assert pairs["leo"] == ""
    assert pairs["virgo"] == ""
    assert pairs["libra"] == "0xlib"


def test_environment_overrides():
    config = load_config(
        {
            "FRAME_IMAGE_URL": "https://img.example/frame.png",
            "COLLECT_URL_PREFIX": "https://zora.co/coin/",
            "BASE_URL": "https://frames.example/",
            "DEXSCREENER_PAIR_URL": "https://dex.example/{pair}",
            "STARFRAME_FETCH_TIMEOUT_SECONDS": "2.5",
        }
    )

    assert config.frame_image_url == "https://img.example/frame.png"
    assert config.collect_url_prefix == "https://zora.co/coin/"
    assert config.base_url == "https://frames.example"
    assert config.pair_url_template == "https://dex.example/{pair}"
    assert config.fetch_timeout_seconds == 2.5


@pytest.mark.parametrize("raw, expected", [("abc", 5.0), ("0", 0.5), ("600", 30.0)])
def test_fetch_timeout_is_clamped(raw, expected):
    assert load_config({"STARFRAME_FETCH_TIMEOUT_SECONDS": raw}).fetch_timeout_seconds == expected


def test_pair_url_without_placeholder_is_ignored():
    assert load_config({"DEXSCREENER_PAIR_URL": "https://dex.example/"}).pair_url_template == DEFAULT_PAIR_URL_TEMPLATE


def test_config_is_frozen():
    config = load_config({})

    with pytest.raises(ValueError):
        config.base_url = "https://elsewhere.example"


@pytest.mark.parametrize(
    "template",
    [
        "https://dex.example/{chain}/{pair}",
        "https://dex.example/{0}",
        "https://dex.example/{pair}/{pair",
        "https://dex.example/{pair!x}",
    ],
)
def test_pair_url_with_other_fields_falls_back(template, caplog):
    with caplog.at_level(logging.WARNING, logger="starframe.config"):
        config = load_config({"DEXSCREENER_PAIR_URL": template})

    assert config.pair_url_template == DEFAULT_PAIR_URL_TEMPLATE
    assert "DEXSCREENER_PAIR_URL" in caplog.text


def test_pair_url_with_escaped_braces_is_kept():
    template = "https://dex.example/{{v2}}/{pair}"

    assert load_config({"DEXSCREENER_PAIR_URL": template}).pair_url_template == template


def test_sign_pairs_cannot_be_mutated():
    config = load_config({"SIGN_PAIRS": '{"aries": "0xaaa"}'})

    with pytest.raises(TypeError):
        config.sign_pairs["aries"] = "0xother"
    with pytest.raises(TypeError):
        load_config({}).sign_pairs["leo"] = "0xother"

    assert config.sign_pairs["aries"] == "0xaaa"
    assert load_config({}).sign_pairs == DEFAULT_SIGN_PAIRS
