"""Recovering Shamir-shared secrets from base-N encoded share batches."""

__version__ = "0.1.0"
