"""
Feldman verifiable secret sharing checks.

A dealer with polynomial f publishes F[k] = a_k*G for every coefficient.
The holder of the share s = f(x) checks

    s*G == F[0] + x*F[1] + x^2*F[2] + ... + x^(t-1)*F[t-1]

without learning anything about f beyond what F already reveals.

When the check fails the recipient publishes a Complaint: the disputed
share becomes public so that everyone can run the very same equation
against the same vector and decide who is lying.
"""

import logging
from collections import namedtuple

from .ed25519_op import (O, ec_add, ec_scalar_mul, ec_sum, pub_key_from_priv,
                         check_point, check_scalar)

logger = logging.getLogger(__name__)


Complaint = namedtuple("Complaint", ["sender", "receiver", "share"])


def check_vector(vector, threshold=None):
    if threshold is not None and len(vector) != threshold:
        raise ValueError(
            f"verification vector has {len(vector)} entries, expected {threshold}")
    if not vector:
        raise ValueError("empty verification vector")
    return [check_point(F, "verification vector entry") for F in vector]


def expected_share_point(vector, index):
    """
    Right hand side of the Feldman equation, evaluated with Horner's method
    in the exponent: (((F[t-1])*x + F[t-2])*x + ...)*x + F[0].
    """
    check_scalar(index, "party index")
    acc = O
    for F in reversed(vector):
        acc = ec_add(ec_scalar_mul(acc, index), F)
    return acc


def verify_share(vector, share, index) -> bool:
    """share*G == sum_k index^k * vector[k]"""
    check_scalar(share, "share")
    check_vector(vector)
    return pub_key_from_priv(share) == expected_share_point(vector, index)


def resolve_complaint(complaint: Complaint, vector) -> bool:
    """
    Re-run the check for a published complaint.
    True means the complaint stands and the sender is at fault.
    """
    upheld = not verify_share(vector, complaint.share, complaint.receiver)
    logger.info("complaint of party %d against party %d %s",
                complaint.receiver, complaint.sender,
                "upheld" if upheld else "dismissed")
    return upheld


def public_share(vectors, index):
    """
    (sum_i f_i(index))*G computed from published vectors only: the public
    counterpart of the aggregated share of the party at index.
    """
    return ec_sum(expected_share_point(v, index) for v in vectors)


def group_vector(vectors):
    """Entry-wise sum of verification vectors, the vector of sum_i f_i."""
    lengths = {len(v) for v in vectors}
    if len(lengths) != 1:
        raise ValueError("verification vectors differ in length")
    return [ec_sum(column) for column in zip(*vectors)]
