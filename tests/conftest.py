"""Shared fixtures for basepoly tests."""

import random
import pytest
from basepoly.digits import encode
from basepoly.lagrange import poly_eval_low


@pytest.fixture
def rng():
    """Deterministic RNG for reproducible tests."""
    return random.Random(42)


@pytest.fixture
def example_data():
    """The worked example: P(x) = x^2 + 3 sampled at 1, 2, 3, 6."""
    return {
        'keys': {'n': 4, 'k': 3},
        '1': {'base': '10', 'value': '4'},
        '2': {'base': '2', 'value': '111'},
        '3': {'base': '10', 'value': '12'},
        '6': {'base': '4', 'value': '213'},
    }


@pytest.fixture
def make_dataset():
    """Build an encoded input document sampling coeffs at xs.

    Bases cycle through bases so decoding is exercised with mixed radixes.
    y values must be non-negative, so callers pick coefficients accordingly.
    """
    def build(coeffs, xs, k=None, bases=(10, 2, 16, 36, 62, 7)):
        data = {'keys': {'n': len(xs), 'k': k or len(coeffs)}}
        for i, x in enumerate(xs):
            b = bases[i % len(bases)]
            data[str(x)] = {'base': str(b), 'value': encode(poly_eval_low(coeffs, x), b)}
        return data
    return build
