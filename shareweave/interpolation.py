import config
from shareweave.errors import InsufficientShares
from shareweave.field import mod_inverse


def lagrange_interpolate(points, modulus=config.Config.FIELD_PRIME):
    """
    Evaluates the polynomial through the given (x, y) points at x = 0.
    Colliding x-coordinates raise DivisionByZero instead of yielding a wrong secret.
    """
    if not points:
        raise InsufficientShares("Cannot interpolate from zero points.")

    secret = 0
    for i, (xi, yi) in enumerate(points):
        numerator = 1
        denominator = 1
        for j, (xj, _) in enumerate(points):
            if i == j:
                continue
            numerator = numerator * ((0 - xj + modulus) % modulus) % modulus
            denominator = denominator * ((xi - xj + modulus) % modulus) % modulus

        term = yi * numerator % modulus * mod_inverse(denominator, modulus) % modulus
        secret = (secret + term) % modulus

    return (secret + modulus) % modulus
