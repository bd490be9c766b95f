"""
Randomness used by every party.

An rng is any callable taking a byte count and returning that many bytes,
secrets.token_bytes being the default. Tests plug in deterministic or
broken sources through the same hook.

Every failure of the source surfaces as GenerationFailure. There is no
fallback and no retry: a secret derived from degraded entropy is worse
than no secret at all.
"""

import secrets

from .errors import GenerationFailure


def random_bytes(n, rng=None):
    source = secrets.token_bytes if rng is None else rng
    try:
        out = source(n)
    except GenerationFailure:
        raise
    except Exception as e:
        raise GenerationFailure("random source failed") from e
    if not isinstance(out, (bytes, bytearray)):
        raise GenerationFailure(f"random source returned {type(out).__name__}, not bytes")
    if len(out) != n:
        raise GenerationFailure(f"random source returned {len(out)} of {n} bytes")
    return bytes(out)


def int_sample(bound, rng=None):
    """
    Uniform integer in [0, bound) by rejection sampling.
    Draws are masked to the bit length of bound so more than half of them
    are accepted.
    """
    if bound <= 0:
        raise ValueError("bound must be positive")
    bits = bound.bit_length()
    nbytes = (bits + 7) // 8
    mask = (1 << bits) - 1
    while True:
        candidate = int.from_bytes(random_bytes(nbytes, rng), "little") & mask
        if candidate < bound:
            return candidate


def nonzero_sample(bound, rng=None):
    """Uniform integer in [1, bound)."""
    if bound <= 1:
        raise ValueError("bound must be at least 2")
    while True:
        candidate = int_sample(bound, rng)
        if candidate:
            return candidate
