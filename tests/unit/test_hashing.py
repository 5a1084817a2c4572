"""Unit tests for the plan-id hash"""

import re
from card_planner.utils.hashing import hash128_hex


def test_hash_is_32_lowercase_hex():
    for value in ("", "a", '{"cards":[]}', "x" * 10_000):
        assert re.fullmatch(r"[0-9a-f]{32}", hash128_hex(value))


def test_hash_is_deterministic():
    assert hash128_hex("snowball|5000|2026-01-15") == hash128_hex("snowball|5000|2026-01-15")


def test_hash_changes_with_single_character():
    base = hash128_hex('{"bal":5000}')
    assert hash128_hex('{"bal":5001}') != base
    assert hash128_hex('{"bal":6000}') != base


def test_hash_distinct_across_many_inputs():
    digests = {hash128_hex(f"card-{i}") for i in range(2_000)}
    assert len(digests) == 2_000


def test_hash_handles_non_ascii():
    assert hash128_hex("Café ☕") != hash128_hex("Cafe ☕")
