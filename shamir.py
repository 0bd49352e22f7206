import config
from shareweave.errors import InsufficientShares
from shareweave.field import check_modulus
from shareweave.interpolation import lagrange_interpolate

class ShamirSecretSharing:
    """Reconstruction side of Shamir's Secret Sharing scheme"""

    def __init__(self, threshold: int, prime: int = None):
        if threshold < 1:
            raise ValueError("Threshold must be at least 1")
        self.threshold = threshold
        self.prime = check_modulus(config.Config.FIELD_PRIME if prime is None else prime)

    def select_quorum(self, shares: list) -> list:
        """Pick the first `threshold` shares"""
        if len(shares) < self.threshold:
            raise InsufficientShares(f"Not enough shares. Need {self.threshold}, got {len(shares)}")
        return list(shares[:self.threshold])

    def recover_secret(self, shares: list) -> int:
        """Recover secret from shares using Lagrange interpolation at x = 0"""
        return lagrange_interpolate(self.select_quorum(shares), self.prime)
