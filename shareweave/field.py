"""Modular arithmetic over a prime field."""

import config
from shareweave.errors import DivisionByZero


# Deterministic Miller-Rabin witnesses for every n < 2**64
_WITNESSES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


def is_prime(n: int) -> bool:
    if n < 2:
        return False
    for p in _WITNESSES:
        if n % p == 0:
            return n == p
    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1
    for a in _WITNESSES:
        x = mod_pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = x * x % n
            if x == n - 1:
                break
        else:
            return False
    return True


def check_modulus(modulus: int) -> int:
    """Reject moduli that are not primes in the 64-bit signed domain.

    Inverses come from Fermat's little theorem, which only holds for a prime.
    """
    if isinstance(modulus, bool) or not isinstance(modulus, int):
        raise ValueError(f"Modulus must be an integer, got {modulus!r}")
    if not 2 < modulus < config.Config.MAX_FIELD_PRIME:
        raise ValueError(f"Modulus {modulus} outside supported range (2, 2**63)")
    if not is_prime(modulus):
        raise ValueError(f"Modulus {modulus} is not prime")
    return modulus


def mod_pow(base: int, exponent: int, modulus: int = config.Config.FIELD_PRIME) -> int:
    """Binary exponentiation: base ** exponent mod modulus."""
    if exponent < 0:
        raise ValueError("Negative exponents are not supported")
    result = 1 % modulus
    base %= modulus
    while exponent:
        if exponent & 1:
            result = result * base % modulus
        base = base * base % modulus
        exponent >>= 1
    return result


def mod_inverse(a: int, modulus: int = config.Config.FIELD_PRIME) -> int:
    """Multiplicative inverse via Fermat's little theorem (modulus must be prime)."""
    if a % modulus == 0:
        raise DivisionByZero(f"{a} has no inverse modulo {modulus}")
    return mod_pow(a, modulus - 2, modulus)
