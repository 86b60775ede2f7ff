"""Tests for fractional order keys."""

import random

import pytest

from sitebuilder.utils.order import (
    JITTER_DIGITS,
    key_between,
    keys_between,
    validate_order_key,
)


class TestPlainKeys:
    """Deterministic part of the generator (no jitter)."""

    def test_seed_key(self):
        assert key_between(None, None, jitter=False) == "a0"

    def test_append_increments_integer(self):
        assert key_between("a0", None, jitter=False) == "a1"
        assert key_between("az", None, jitter=False) == "b00"

    def test_prepend_decrements_integer(self):
        assert key_between(None, "a0", jitter=False) == "Zz"
        assert key_between(None, "a1", jitter=False) == "a0"

    def test_prepend_ignores_upper_fraction(self):
        assert key_between(None, "a0V", jitter=False) == "Zz"
        assert key_between(None, "a5abc", jitter=False) == "a4"

    def test_between_adjacent_integers_uses_fraction(self):
        assert key_between("a0", "a1", jitter=False) == "a0V"

    def test_between_fractions(self):
        key = key_between("a0V", "a1", jitter=False)
        assert "a0V" < key < "a1"

    def test_never_prefix_of_upper(self):
        lower, upper = "a0", "a0V"
        for _ in range(50):
            key = key_between(lower, upper, jitter=False)
            assert lower < key < upper
            assert not upper.startswith(key)
            upper = key


class TestJitteredKeys:
    def test_jitter_suffix_length(self):
        key = key_between(None, None, rng=random.Random(1))
        assert key.startswith("a0")
        assert len(key) == 2 + JITTER_DIGITS
        validate_order_key(key)

    def test_same_bounds_produce_distinct_keys(self):
        rng = random.Random(7)
        lower = key_between(None, None, rng=rng)
        upper = key_between(lower, None, rng=rng)

        keys = {key_between(lower, upper, rng=rng) for _ in range(100)}

        assert len(keys) == 100
        for key in keys:
            assert lower < key < upper

    def test_random_inserts_stay_sorted(self):
        rng = random.Random(42)
        keys = []
        for _ in range(300):
            position = rng.randint(0, len(keys))
            lower = keys[position - 1] if position > 0 else None
            upper = keys[position] if position < len(keys) else None
            key = key_between(lower, upper, rng=rng)
            if lower is not None:
                assert lower < key
            if upper is not None:
                assert key < upper
            keys.insert(position, key)

        assert keys == sorted(keys)
        assert len(set(keys)) == len(keys)

    def test_repeated_insert_at_same_boundary(self):
        rng = random.Random(3)
        first = key_between(None, None, rng=rng)
        last = key_between(first, None, rng=rng)

        upper = last
        for _ in range(200):
            key = key_between(first, upper, rng=rng)
            assert first < key < upper
            upper = key

    def test_many_inserts_after_same_key_stay_short(self):
        rng = random.Random(11)
        first = key_between(None, None, rng=rng)
        upper = key_between(first, None, rng=rng)

        longest = 0
        for _ in range(20_000):
            key = key_between(first, upper, rng=rng)
            assert first < key < upper
            longest = max(longest, len(key))
            upper = key

        assert longest <= 24

    def test_many_inserts_before_same_key_stay_short(self):
        rng = random.Random(12)
        lower = key_between(None, None, rng=rng)
        last = key_between(lower, None, rng=rng)

        longest = 0
        for _ in range(20_000):
            key = key_between(lower, last, rng=rng)
            assert lower < key < last
            longest = max(longest, len(key))
            lower = key

        assert longest <= 24

    def test_many_prepends_stay_short(self):
        rng = random.Random(13)
        upper = key_between(None, None, rng=rng)
        for _ in range(1_000):
            key = key_between(None, upper, rng=rng)
            assert key < upper
            upper = key

        assert len(upper) <= 3 + JITTER_DIGITS

    def test_stepped_keys_are_valid(self):
        rng = random.Random(14)
        lower, upper = "a0" + "z" * 6, "a0" + "z" * 7
        for _ in range(50):
            key = key_between(lower, upper, rng=rng)
            validate_order_key(key)
            assert lower < key < upper
            upper = key

    def test_keys_between_ascending(self):
        keys = keys_between(None, None, 5, rng=random.Random(5))
        assert len(keys) == 5
        assert keys == sorted(keys)
        assert len(set(keys)) == 5


class TestValidation:
    @pytest.mark.parametrize("key", ["", "a", "a00", "a0!", "?0", "A" + "0" * 26])
    def test_invalid_keys_rejected(self, key):
        with pytest.raises(ValueError):
            validate_order_key(key)

    def test_bounds_must_be_ordered(self):
        with pytest.raises(ValueError):
            key_between("a1", "a0")

    def test_equal_bounds_rejected(self):
        with pytest.raises(ValueError):
            key_between("a0", "a0")
