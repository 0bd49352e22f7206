"""Base-N decoding of share values."""

import string

import config
from shareweave.errors import InvalidBase, InvalidDigit

_DIGITS = {ch: i for i, ch in enumerate(string.digits + string.ascii_lowercase)}
_DIGITS.update({ch.upper(): i for ch, i in _DIGITS.items() if ch.isalpha()})


def digit_value(ch: str) -> int:
    """Numeric value of a single digit character, letters case-insensitive."""
    try:
        return _DIGITS[ch]
    except KeyError:
        raise InvalidDigit(f"Illegal digit {ch!r}") from None


def decode(value: str, base: int, modulus: int = config.Config.FIELD_PRIME) -> int:
    """
    Convert a digit string in the given base to an integer.

    The accumulator is folded back into the field as soon as it reaches the
    modulus, so large values come out reduced rather than exact.
    """
    if isinstance(base, bool) or not isinstance(base, int):
        raise InvalidBase(f"Base must be an integer, got {base!r}")
    if not config.Config.MIN_BASE <= base <= config.Config.MAX_BASE:
        raise InvalidBase(f"Base {base} outside {config.Config.MIN_BASE}..{config.Config.MAX_BASE}")
    if not value:
        raise InvalidDigit("Empty digit string")

    result = 0
    for ch in value:
        digit = digit_value(ch)
        if digit >= base:
            raise InvalidDigit(f"Digit {ch!r} not valid in base {base}")
        result = result * base + digit
        if result >= modulus:
            result %= modulus
    return result
