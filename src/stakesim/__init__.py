"""Epoch-by-epoch simulation of proof-of-stake validator balances."""

__version__ = "0.1.0"
