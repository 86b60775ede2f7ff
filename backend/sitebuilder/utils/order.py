"""
Fractional order keys for blocks.

A key is an *integer part* followed by an optional *fraction*:

- the integer part starts with a head letter that encodes its length
  (``a`` -> 2 chars, ``b`` -> 3 chars, ... ``A`` -> 27 chars, ``Z`` -> 2 chars
  on the negative side) followed by base-62 digits;
- the fraction is any run of base-62 digits that does not end in ``0``.

Digits are ``0-9A-Za-z``, which is also their ASCII order, so plain string
comparison sorts keys. Appending and prepending only touch the integer part,
which keeps those keys short; inserting between two keys bisects the
fractions.

``key_between`` never returns a prefix of ``upper``. That lets us append a
random suffix (jitter) to every key while staying strictly inside the bounds,
so two editors inserting at the same spot at the same time still get
distinct keys.

Bisecting halves the gap on every insert, so inserting again and again at
the same spot grows the key by one digit per ~six inserts. Jittered keys
between two bounds therefore step a random distance away from the newer
bound instead, at the current key length, and only grow (by a quarter of
their length) once the gap runs out. Key length then stays logarithmic in
the number of inserts at one spot.
"""
from __future__ import annotations

import random
from typing import List, Optional

BASE_62_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
ZERO = BASE_62_DIGITS[0]
SMALLEST_INTEGER = "A" + ZERO * 26

JITTER_DIGITS = 6
# Largest random step between two bounds, in units of the last digit
STEP_RANGE = len(BASE_62_DIGITS) ** 5

_system_random = random.SystemRandom()


def _digit(char: str) -> int:
    index = BASE_62_DIGITS.find(char)
    if index < 0:
        raise ValueError(f"Invalid order key digit: {char!r}")
    return index


def _midpoint(lower: str, upper: Optional[str]) -> str:
    """
    Fraction strictly between ``lower`` and ``upper`` that is never a
    prefix of ``upper``. ``upper=None`` means "no upper bound".
    """
    if upper is not None and lower >= upper:
        raise ValueError(f"{lower!r} is not less than {upper!r}")
    if lower[-1:] == ZERO or (upper and upper[-1:] == ZERO):
        raise ValueError("Fractions must not end with a zero digit")

    if upper:
        # Skip the common prefix, reading missing lower digits as zeros
        n = 0
        while (lower[n] if n < len(lower) else ZERO) == upper[n]:
            n += 1
        if n > 0:
            return upper[:n] + _midpoint(lower[n:], upper[n:])

    digit_lower = _digit(lower[0]) if lower else 0
    digit_upper = _digit(upper[0]) if upper is not None else len(BASE_62_DIGITS)

    if digit_upper - digit_lower > 1:
        return BASE_62_DIGITS[(digit_lower + digit_upper + 1) // 2]

    # Consecutive first digits: keep lower's digit and go one level deeper
    return BASE_62_DIGITS[digit_lower] + _midpoint(lower[1:], None)


def _integer_length(head: str) -> int:
    if "a" <= head <= "z":
        return ord(head) - ord("a") + 2
    if "A" <= head <= "Z":
        return ord("Z") - ord(head) + 2
    raise ValueError(f"Invalid order key head: {head!r}")


def _integer_part(key: str) -> str:
    length = _integer_length(key[0])
    if length > len(key):
        raise ValueError(f"Invalid order key: {key!r}")
    return key[:length]


def validate_order_key(key: str) -> None:
    if not isinstance(key, str) or not key:
        raise ValueError("Order key must be a non-empty string")
    if key == SMALLEST_INTEGER:
        raise ValueError(f"Invalid order key: {key!r}")

    integer = _integer_part(key)
    for char in key[1:]:
        _digit(char)
    if key[len(integer):][-1:] == ZERO:
        raise ValueError(f"Invalid order key: {key!r}")


def _increment_integer(integer: str) -> Optional[str]:
    head, digits = integer[0], list(integer[1:])

    for i in reversed(range(len(digits))):
        value = _digit(digits[i]) + 1
        if value == len(BASE_62_DIGITS):
            digits[i] = ZERO
        else:
            digits[i] = BASE_62_DIGITS[value]
            return head + "".join(digits)

    # Carried past the first digit: switch to a longer integer
    if head == "Z":
        return "a" + ZERO
    if head == "z":
        return None
    next_head = chr(ord(head) + 1)
    if next_head > "a":
        digits.append(ZERO)
    else:
        digits.pop()
    return next_head + "".join(digits)


def _decrement_integer(integer: str) -> Optional[str]:
    head, digits = integer[0], list(integer[1:])

    for i in reversed(range(len(digits))):
        value = _digit(digits[i]) - 1
        if value == -1:
            digits[i] = BASE_62_DIGITS[-1]
        else:
            digits[i] = BASE_62_DIGITS[value]
            return head + "".join(digits)

    if head == "a":
        return "Z" + BASE_62_DIGITS[-1]
    if head == "A":
        return None
    next_head = chr(ord(head) - 1)
    if next_head < "Z":
        digits.append(BASE_62_DIGITS[-1])
    else:
        digits.pop()
    return next_head + "".join(digits)


def _plain_key_between(lower: Optional[str], upper: Optional[str]) -> str:
    if lower is None:
        if upper is None:
            return "a" + ZERO

        # Any key of the previous integer sorts first, whatever upper's fraction
        integer = _integer_part(upper)
        if integer == SMALLEST_INTEGER:
            return integer + _midpoint("", upper[len(integer):])
        return _decrement_integer(integer)

    integer = _integer_part(lower)
    fraction = lower[len(integer):]

    if upper is None:
        incremented = _increment_integer(integer)
        if incremented is None:
            return integer + _midpoint(fraction, None)
        return incremented

    upper_integer = _integer_part(upper)
    if integer == upper_integer:
        return integer + _midpoint(fraction, upper[len(upper_integer):])

    incremented = _increment_integer(integer)
    if incremented is None:
        raise ValueError("Cannot increment order key beyond the largest key")
    if incremented < upper and not upper.startswith(incremented):
        return incremented
    return integer + _midpoint(fraction, None)


def _jitter(rng: random.Random) -> str:
    body = "".join(rng.choice(BASE_62_DIGITS) for _ in range(JITTER_DIGITS - 1))
    return body + rng.choice(BASE_62_DIGITS[1:])


def _fraction_value(fraction: str, length: int) -> int:
    value = 0
    for char in fraction.ljust(length, ZERO):
        value = value * len(BASE_62_DIGITS) + _digit(char)
    return value


def _fraction_digits(value: int, length: int) -> str:
    digits = []
    for _ in range(length):
        value, index = divmod(value, len(BASE_62_DIGITS))
        digits.append(BASE_62_DIGITS[index])
    return "".join(reversed(digits))


def _stepped_key_between(
    integer: str,
    lower_fraction: str,
    upper_fraction: Optional[str],
    rng: random.Random,
) -> str:
    """
    Key inside ``integer`` whose fraction lies between the two fractions.
    ``upper_fraction=None`` means the upper bound is a later integer.

    Fractions are read as base-62 numbers padded to a common length. The new
    key steps a random amount away from the longer bound, which is normally
    the key inserted last at this spot, so the gap left for the next insert
    barely shrinks.
    """
    base = len(BASE_62_DIGITS)
    near_upper = len(upper_fraction or "") >= len(lower_fraction)

    length = max(len(lower_fraction), len(upper_fraction or ""))
    low = _fraction_value(lower_fraction, length)
    if upper_fraction is None:
        high = base ** length
    else:
        high = _fraction_value(upper_fraction, length)

    while high - low <= 2 * STEP_RANGE:
        extra = max(1, length // 4)
        length += extra
        low *= base ** extra
        high *= base ** extra

    step = rng.randint(1, STEP_RANGE)
    if near_upper:
        value = high - step
        if value % base == 0:
            value -= 1
    else:
        value = low + step
        if value % base == 0:
            value += 1

    return integer + _fraction_digits(value, length)


def key_between(
    lower: Optional[str],
    upper: Optional[str],
    *,
    jitter: bool = True,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Return a key that sorts strictly between ``lower`` and ``upper``.

    ``lower=None`` means "before upper", ``upper=None`` means "after lower",
    both ``None`` returns a seed key. With ``jitter`` the key is randomised
    (a suffix, or a random step between two bounds) so concurrent calls with
    identical bounds do not collide.
    """
    if lower is not None:
        validate_order_key(lower)
    if upper is not None:
        validate_order_key(upper)
    if lower is not None and upper is not None and lower >= upper:
        raise ValueError(f"Lower bound {lower!r} must sort before upper bound {upper!r}")

    if not jitter:
        return _plain_key_between(lower, upper)

    rng = rng or _system_random
    if lower is not None and upper is not None:
        integer = _integer_part(lower)
        fraction = lower[len(integer):]
        upper_integer = _integer_part(upper)
        if integer == upper_integer:
            return _stepped_key_between(integer, fraction, upper[len(upper_integer):], rng)

        incremented = _increment_integer(integer)
        if incremented is None or incremented >= upper or upper.startswith(incremented):
            return _stepped_key_between(integer, fraction, None, rng)

    return _plain_key_between(lower, upper) + _jitter(rng)


def keys_between(
    lower: Optional[str],
    upper: Optional[str],
    count: int,
    *,
    jitter: bool = True,
    rng: Optional[random.Random] = None,
) -> List[str]:
    """
    ``count`` ascending keys between the bounds, e.g. for seeding a page.
    """
    keys: List[str] = []
    previous = lower
    for _ in range(count):
        previous = key_between(previous, upper, jitter=jitter, rng=rng)
        keys.append(previous)
    return keys
