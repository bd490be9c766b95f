"""
Tests
"""

import pytest
import random

from toydkg.ed25519_op import order, pub_key_from_priv, O
from toydkg.errors import ArithmeticFailure
from toydkg.feldman import (Complaint, verify_share, expected_share_point, resolve_complaint,
                            public_share, group_vector, check_vector)
from toydkg.polynomial import random_polynomial


def make(t):
    poly = random_polynomial(random.randint(0, order - 1), t - 1)
    return poly, poly.verification_vector()


def test_valid_shares_verify():
    t = random.randint(1, 6)
    n = random.randint(t, 8)
    poly, vector = make(t)
    for x in range(1, n + 1):
        assert verify_share(vector, poly.evaluate(x), x)
        assert expected_share_point(vector, x) == pub_key_from_priv(poly.evaluate(x))


def test_tampered_share_fails():
    poly, vector = make(3)
    share = poly.evaluate(2)
    assert not verify_share(vector, (share + 1) % order, 2)
    # right value, wrong recipient
    assert not verify_share(vector, share, 3)


def test_tampered_vector_fails():
    poly, vector = make(3)
    vector[1] = pub_key_from_priv(random.randint(1, order - 1))
    assert not verify_share(vector, poly.evaluate(4), 4)


def test_truncated_vector_does_not_vouch_for_top_coefficient():
    # leaving the last entry at the identity is not a valid vector for this polynomial
    poly, vector = make(3)
    vector[-1] = O
    assert not verify_share(vector, poly.evaluate(1), 1)


def test_check_vector():
    _, vector = make(3)
    assert check_vector(vector, 3) == vector
    with pytest.raises(ValueError):
        check_vector(vector[:2], 3)
    with pytest.raises(ValueError):
        check_vector([])
    with pytest.raises(ArithmeticFailure):
        verify_share([(1, 1)] + vector[1:], 5, 1)
    with pytest.raises(ArithmeticFailure):
        verify_share(vector, order, 1)


def test_complaints():
    poly, vector = make(3)
    good = poly.evaluate(4)
    assert resolve_complaint(Complaint(sender=1, receiver=4, share=(good + 5) % order), vector)
    assert not resolve_complaint(Complaint(sender=1, receiver=4, share=good), vector)


def test_public_share():
    t, n = 3, 5
    polys = [make(t) for _ in range(n)]
    vectors = [v for _, v in polys]
    for x in range(1, n + 1):
        aggregate = sum(poly.evaluate(x) for poly, _ in polys) % order
        assert public_share(vectors, x) == pub_key_from_priv(aggregate)
    joint_secret = sum(poly.secret for poly, _ in polys) % order
    assert group_vector(vectors)[0] == pub_key_from_priv(joint_secret)
    with pytest.raises(ValueError):
        group_vector([vectors[0], vectors[1][:2]])
