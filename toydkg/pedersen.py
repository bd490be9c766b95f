"""
Pedersen commitments to group elements.

    C = P + r*H

H is a second generator nobody knows the discrete log of with respect to
G. It is obtained by hashing a fixed public constant into the curve
(try and increment, then clearing the cofactor), so no party, including
whoever picked the constant, can hold a trapdoor log_G(H).

Commitments under the same H add up: summing every commitment and
subtracting the sum of every blinder gives the sum of the committed
points. That is how the joint public key is assembled.
"""

import logging
from functools import lru_cache
from hashlib import sha512

from .ed25519_op import (O, ec_add, ec_sub, ec_sum, ec_scalar_mul, order,
                         decode_point, clear_cofactor, check_point,
                         check_scalar, POINT_BYTES)
from .errors import ArithmeticFailure
from .toyrand import nonzero_sample

logger = logging.getLogger(__name__)

PEDERSEN_SEED = b"\xff" * 32


@lru_cache(maxsize=None)
def pedersen_base(seed: bytes = PEDERSEN_SEED):
    for counter in range(256):
        candidate = sha512(seed + counter.to_bytes(4, "big")).digest()[:POINT_BYTES]
        try:
            point = decode_point(candidate)
        except ArithmeticFailure:
            continue
        point = clear_cofactor(point)
        if point == O:
            continue
        logger.debug("pedersen base derived after %d attempts", counter + 1)
        return point
    raise RuntimeError("failed to hash the pedersen seed onto the curve")


def random_blinder(rng=None) -> int:
    return nonzero_sample(order, rng)


def blind(public, blinder):
    check_point(public, "public point")
    check_scalar(blinder, "blinder")
    return ec_add(public, ec_scalar_mul(pedersen_base(), blinder))


def unblind(commitment, blinder):
    check_point(commitment, "commitment")
    check_scalar(blinder, "blinder")
    return ec_sub(commitment, ec_scalar_mul(pedersen_base(), blinder))


def verify_commitment(commitment, public, blinder) -> bool:
    return unblind(commitment, blinder) == public


def aggregate_public_key(commitments, blinders):
    """
    Open the sum of the commitments with the sum of the blinders.
    Blinders may only be revealed after every commitment is published.
    """
    if len(commitments) != len(blinders):
        raise ValueError("need exactly one blinder per commitment")
    for c in commitments:
        check_point(c, "commitment")
    total_blinder = sum(check_scalar(r, "blinder") for r in blinders) % order
    return ec_sub(ec_sum(commitments), ec_scalar_mul(pedersen_base(), total_blinder))
