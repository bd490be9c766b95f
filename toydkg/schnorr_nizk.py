"""
This module is an implementation of the Schnorr's NIZK over edwards25519
Please refer to https://tools.ietf.org/html/rfc8235#section-3.2

Every party proves it knows the constant term of its polynomial, bound to
its own index through user_id. This rules out a verification vector whose
first entry was chosen to cancel the other parties' keys.
"""

from collections import namedtuple
from hashlib import sha512

from .ed25519_op import (ec_add, ec_scalar_mul, order, pub_key_from_priv,
                         generator, valid, encode_point, check_scalar)
from .toyrand import nonzero_sample


SchnorrNIZK = namedtuple('SchnorrNIZK', ['V', 'A', 'r', 'c', 'user_id'])


def _challenge(V, A, user_id: bytes) -> int:
    return int.from_bytes(sha512(
        encode_point(generator) +
        encode_point(V) +
        encode_point(A) +
        user_id).digest(), byteorder='little') % order


def proove(secret: int, user_id: bytes = b"DEFAULT", rng=None) -> SchnorrNIZK:
    """
    Non Interactive zero knowledge proof that the proover knows the secret.
    """
    check_scalar(secret, "secret")
    v = nonzero_sample(order, rng)
    V = pub_key_from_priv(v)
    A = pub_key_from_priv(secret)
    # calculate challenge use Fiat Shamir Transform.
    c = _challenge(V, A, user_id)
    r = (v - secret * c) % order
    return SchnorrNIZK(V=V, A=A, r=r, c=c, user_id=user_id)


def verify(proof: SchnorrNIZK) -> bool:
    """
    Verify the above zero knowledge proof.
    """
    if not (valid(proof.V) and valid(proof.A)):
        return False
    if not isinstance(proof.r, int) or not 0 <= proof.r < order:
        return False
    # calculate challenge again
    if proof.c != _challenge(proof.V, proof.A, proof.user_id):
        return False
    # verify V = G * [r] + A * [c]
    return proof.V == ec_add(pub_key_from_priv(proof.r), ec_scalar_mul(proof.A, proof.c))


def index_user_id(index: int) -> bytes:
    return b"toydkg/pok/" + index.to_bytes(32, "little")
