"""Epoch transition engine: validators, totals, proposers and deltas."""
