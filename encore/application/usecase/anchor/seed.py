"""Seed handling shared by the selection use cases."""

import secrets


def resolve_seed(seed: int | None) -> int:
    """Use the caller's seed, or draw a fresh one that can be logged and replayed."""
    return seed if seed is not None else secrets.randbits(32)
