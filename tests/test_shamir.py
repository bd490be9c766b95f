"""
Tests
"""

import pytest
import random
from itertools import combinations

from toydkg.ed25519_op import order, pub_key_from_priv
from toydkg.errors import ReconstructionFailure
from toydkg.polynomial import Polynomial, random_polynomial
from toydkg.shamir import (aggregate_shares, lagrange_coeffs_at_zero, shamir_reconstruct,
                           interpolate_in_exponent)


def test_small_example_any_triple():
    poly = Polynomial([1234, 7, 13])
    xs = [1, 2, 3, 4, 5, 6, 7]
    shares = {x: poly.evaluate(x) for x in xs}
    assert shares[1] == 1254
    assert shamir_reconstruct([1, 2, 3], [shares[1], shares[2], shares[3]], threshold=3) == 1234
    for subset in combinations(xs, 3):
        assert shamir_reconstruct(list(subset), [shares[x] for x in subset], threshold=3) == 1234


def test_every_subset_gives_the_secret():
    t = random.randint(1, 5)
    n = random.randint(t, 7)
    print(f"\nt={t} n={n}")
    secret = random.randint(0, order - 1)
    poly = random_polynomial(secret, t - 1)
    xs = list(range(1, n + 1))
    shares = [poly.evaluate(x) for x in xs]
    for size in range(t, n + 1):
        for subset in combinations(range(n), size):
            assert shamir_reconstruct([xs[i] for i in subset],
                                      [shares[i] for i in subset], threshold=t) == secret


def test_arbitrary_indices():
    secret = random.randint(0, order - 1)
    poly = random_polynomial(secret, 2)
    xs = random.sample(range(1, 10**6), 3)
    assert shamir_reconstruct(xs, [poly.evaluate(x) for x in xs]) == secret


def test_fewer_than_t_shares_do_not_reconstruct():
    poly = Polynomial([1234, 7, 13])
    with pytest.raises(ReconstructionFailure):
        shamir_reconstruct([1, 2], [poly.evaluate(1), poly.evaluate(2)], threshold=3)
    # without the threshold the two points define a line, not our secret
    assert shamir_reconstruct([1, 2], [poly.evaluate(1), poly.evaluate(2)]) != 1234


def test_duplicate_indices_fail():
    poly = Polynomial([1234, 7, 13])
    with pytest.raises(ReconstructionFailure) as excinfo:
        shamir_reconstruct([1, 1, 2], [poly.evaluate(1), poly.evaluate(1), poly.evaluate(2)])
    assert isinstance(excinfo.value.__cause__, ZeroDivisionError)
    with pytest.raises(ZeroDivisionError):
        lagrange_coeffs_at_zero([1, 1, 2])


def test_malformed_inputs():
    with pytest.raises(ReconstructionFailure):
        shamir_reconstruct([1, 2, 3], [1, 2])
    with pytest.raises(ReconstructionFailure):
        shamir_reconstruct([], [])
    with pytest.raises(ReconstructionFailure):
        shamir_reconstruct([0, 1, 2], [1, 2, 3])


def test_lagrange_coefficients_sum_to_one():
    xs = random.sample(range(1, 1000), 4)
    assert sum(lagrange_coeffs_at_zero(xs)) % order == 1


def test_aggregate_and_interpolate_in_exponent():
    t, n = 3, 5
    polys = [random_polynomial(random.randint(0, order - 1), t - 1) for _ in range(n)]
    xs = list(range(1, n + 1))
    final = [aggregate_shares(poly.evaluate(x) for poly in polys) for x in xs]
    joint = sum(poly.secret for poly in polys) % order
    assert shamir_reconstruct(xs[2:], final[2:], threshold=t) == joint
    points = [pub_key_from_priv(s) for s in final]
    assert interpolate_in_exponent([1, 3, 5], [points[0], points[2], points[4]],
                                   threshold=t) == pub_key_from_priv(joint)
    with pytest.raises(ReconstructionFailure):
        interpolate_in_exponent([1, 1, 2], points[:3])
