"""
Per party key pair generation.

The secret is expanded from 32 random bytes exactly the way RFC 8032
expands an Ed25519 private key (section 5.1.5): hash with SHA-512, keep
the lower half, clamp. The clamped value is reduced modulo the group
order so that the secret is a proper scalar; the public point does not
change because G has prime order.
"""

from collections import namedtuple
from hashlib import sha512

from .ed25519_op import order, pub_key_from_priv, SCALAR_BYTES
from .toyrand import random_bytes


KeyPair = namedtuple("KeyPair", ["secret", "public"])

SEED_BYTES = 32


def clamp(raw: bytes) -> int:
    b = bytearray(raw)
    b[0] &= 248
    b[31] &= 127
    b[31] |= 64
    return int.from_bytes(b, "little")


def keypair_from_seed(seed: bytes) -> KeyPair:
    if len(seed) != SEED_BYTES:
        raise ValueError("seed must be 32 bytes")
    digest = sha512(seed).digest()[:SCALAR_BYTES]
    secret = clamp(digest) % order
    return KeyPair(secret=secret, public=pub_key_from_priv(secret))


def generate_keypair(rng=None) -> KeyPair:
    # GenerationFailure from random_bytes is deliberately not caught
    return keypair_from_seed(random_bytes(SEED_BYTES, rng))
