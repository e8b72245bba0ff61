"""Shared fixtures for polysecret tests."""

import random
import pytest


def poly_eval_low(coeffs: list, x: int) -> int:
    """a_0 + a_1*x + ... + a_d*x^d over the integers (Horner)."""
    result = 0
    for c in reversed(coeffs):
        result = result * x + c
    return result


def make_points(coeffs: list, xs) -> list:
    return [(x, poly_eval_low(coeffs, x)) for x in xs]


@pytest.fixture
def rng():
    """Deterministic RNG for reproducible tests."""
    return random.Random(42)


@pytest.fixture
def sample_document():
    """f(x) = 5 + 3x + 2x^2, n=5, k=3, each share in a different base.

    f(1..5) = 10, 19, 32, 49, 70.
    """
    return {
        "keys": {"n": 5, "k": 3},
        "1": {"base": "2", "value": "1010"},
        "2": {"base": "16", "value": "13"},
        "3": {"base": "3", "value": "1012"},
        "4": {"base": "7", "value": "100"},
        "5": {"base": "36", "value": "1y"},
    }
