"""
Tests
"""

import pytest
import random

from toydkg.ed25519_op import order, pub_key_from_priv, ec_scalar_mul, ec_sum, O
from toydkg.errors import ArithmeticFailure, GenerationFailure
from toydkg.polynomial import Polynomial, random_polynomial


def generate_t():
    return random.randint(1, 8)


def test_random_polynomial():
    for _ in range(5):
        t = generate_t()
        secret = random.randint(0, order - 1)
        poly = random_polynomial(secret, t - 1)
        print(f"\nt={t}")
        assert len(poly) == t
        assert poly.degree == t - 1
        assert poly.secret == secret
        assert poly.coef[0] == secret
        assert poly.evaluate(0) == secret


def test_evaluate_matches_power_sum():
    poly = random_polynomial(random.randint(0, order - 1), 4)
    for _ in range(5):
        x = random.randint(0, order - 1)
        expected = sum(c * pow(x, k, order) for k, c in enumerate(poly.coef)) % order
        assert poly.evaluate(x) == expected
        assert poly(x) == expected


def test_small_example():
    poly = Polynomial([1234, 7, 13])
    assert [poly.evaluate(x) for x in (1, 2, 3)] == [1254, 1300, 1372]
    assert poly.evaluate(0) == 1234


def test_constant_polynomial():
    poly = random_polynomial(42, 0)
    assert poly.evaluate(random.randint(1, order - 1)) == 42


def test_verification_vector_covers_every_coefficient():
    t = generate_t()
    poly = random_polynomial(random.randint(0, order - 1), t - 1)
    vector = poly.verification_vector()
    assert len(vector) == t
    assert vector == [pub_key_from_priv(c) for c in poly.coef]
    assert vector[-1] != O


def test_feldman_identity():
    poly = random_polynomial(random.randint(0, order - 1), 3)
    vector = poly.verification_vector()
    for _ in range(3):
        x = random.randint(1, order - 1)
        rhs = ec_sum(ec_scalar_mul(F, pow(x, k, order)) for k, F in enumerate(vector))
        assert pub_key_from_priv(poly.evaluate(x)) == rhs


def test_rejects_bad_coefficients():
    with pytest.raises(ValueError):
        Polynomial([])
    with pytest.raises(ArithmeticFailure):
        Polynomial([order])
    with pytest.raises(ArithmeticFailure):
        random_polynomial(-1, 2)
    with pytest.raises(ValueError):
        random_polynomial(1, -1)
    with pytest.raises(ArithmeticFailure):
        Polynomial([1, 2]).evaluate(order + 1)


def test_repr_hides_coefficients():
    poly = Polynomial([1234, 7, 13])
    assert "1234" not in repr(poly)


def test_broken_rng_is_fatal():
    def broken(n):
        raise OSError("entropy pool gone")

    with pytest.raises(GenerationFailure):
        random_polynomial(1234, 2, broken)
    # a constant polynomial draws nothing
    assert random_polynomial(1234, 0, broken).coef == [1234]
