"""Epoch transition and multi-epoch drivers."""
