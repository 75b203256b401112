"""Utility functions for Monarchy."""

from monarchy.utils.rng import generate_seed, random_fraction, seeded_random

__all__ = [
    "generate_seed",
    "random_fraction",
    "seeded_random",
]
