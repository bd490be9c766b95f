"""
Secret polynomials for Shamir / Feldman sharing.

A party holding secret s picks f(x) = s + a_1*x + ... + a_(t-1)*x^(t-1)
with uniformly random a_k. Any t evaluations determine f and therefore s,
t - 1 of them say nothing about s.
"""

from typing import List

from .ed25519_op import order, pub_key_from_priv, check_scalar
from .toyrand import int_sample


class Polynomial:
    def __init__(self, coef: List[int]):
        if not coef:
            raise ValueError("a polynomial needs at least its constant term")
        # the coefficients are stored lowest degree first
        # For example let the polynomial be y = ax^2 + bx + c
        # self.coef = [c, b, a]
        self.coef = [check_scalar(c, "coefficient") for c in coef]

    @property
    def secret(self):
        return self.coef[0]

    @property
    def degree(self):
        return len(self.coef) - 1

    def evaluate(self, x):
        """
        Horner's method, degree number of steps. With self.coef = [c, b, a]:
        step 0(initialize):
          y = a
        step 1(multiply with x and add next coef):
          y = a*(x) + b
        step 2(multiply with x and add next coef):
          y = (a*(x) + b) * (x) + c
        """
        check_scalar(x, "evaluation point")
        y = self.coef[-1]
        for c in reversed(self.coef[:-1]):
            y = (y * x + c) % order
        return y

    __call__ = evaluate

    def verification_vector(self):
        """The public points coef[k]*G, one for every coefficient."""
        return [pub_key_from_priv(c) for c in self.coef]

    def __len__(self):
        return len(self.coef)

    def __repr__(self):
        # never print coefficients
        return f"Polynomial(degree={self.degree})"


def random_polynomial(secret, degree, rng=None) -> Polynomial:
    check_scalar(secret, "secret")
    if degree < 0:
        raise ValueError("degree must be non negative")
    return Polynomial([secret] + [int_sample(order, rng) for _ in range(degree)])
