"""
Share aggregation and Shamir reconstruction.

Every party adds up the values all n polynomials take at its own index.
The sums are points on f = f_1 + ... + f_n, a degree t-1 polynomial whose
constant term is the joint secret nobody ever computes directly.

Reconstruction is Lagrange interpolation at x = 0:

    lambda_i = prod_{j != i} x_j / (x_j - x_i)
    f(0)     = sum_i lambda_i * f(x_i)

Any t distinct indices give the same f(0).
"""

import logging

from .ed25519_op import (order, scalar_inv_mod_order, check_scalar,
                         ec_scalar_mul, ec_sum, check_point)
from .errors import ReconstructionFailure

logger = logging.getLogger(__name__)


def aggregate_shares(shares):
    return sum(check_scalar(s, "share") for s in shares) % order


def lagrange_coeffs_at_zero(xs):
    for x in xs:
        check_scalar(x, "party index")
    cs = [1] * len(xs)
    for i, x_i in enumerate(xs):
        for j, x_j in enumerate(xs):
            if i != j:
                cs[i] = cs[i] * x_j * scalar_inv_mod_order(x_j - x_i) % order
    return cs


def _check_inputs(xs, values, threshold):
    if len(xs) != len(values):
        raise ReconstructionFailure(
            f"{len(xs)} indices but {len(values)} values")
    if not xs:
        raise ReconstructionFailure("nothing to reconstruct from")
    if threshold is not None and len(xs) < threshold:
        raise ReconstructionFailure(
            f"need at least {threshold} shares, got {len(xs)}")
    if any(x == 0 for x in xs):
        raise ReconstructionFailure("index 0 is the secret itself, not a share")


def _coeffs(xs):
    try:
        return lagrange_coeffs_at_zero(xs)
    except ZeroDivisionError as e:
        raise ReconstructionFailure(f"repeated party index in {list(xs)}") from e


def shamir_reconstruct(xs, shares, threshold=None):
    """
    Interpolate the constant term from (xs[i], shares[i]).
    With more than threshold points every point is used; the result is the
    same as long as all shares lie on one polynomial of degree < threshold.
    """
    _check_inputs(xs, shares, threshold)
    for s in shares:
        check_scalar(s, "share")
    result = 0
    for c, s in zip(_coeffs(xs), shares):
        result = (result + c * s) % order
    logger.debug("reconstructed from indices %s", list(xs))
    return result


def interpolate_in_exponent(xs, points, threshold=None):
    """Same interpolation on group elements: f(0)*G from the f(x_i)*G."""
    _check_inputs(xs, points, threshold)
    for P in points:
        check_point(P, "public share")
    return ec_sum(ec_scalar_mul(P, c) for c, P in zip(_coeffs(xs), points))
