"""
Group arithmetic on the prime order subgroup of edwards25519.
Utilities for:
    1. Public key generation (fixed base, precomputed doublings of G)
    2. Point addition, negation and subtraction
    3. Variable base scalar multiplication
    4. Scalar inverse mod order
    5. Point and scalar encoding (RFC 8032 section 5.1.2)

Points are kept affine in the public API so they compare with a plain ==.
Internally everything runs in extended twisted Edwards coordinates
(X, Y, Z, T) with x = X/Z, y = Y/Z, x*y = T/Z.

    Addition formulas are the ones from RFC 8032 section 5.1.4:
    https://www.rfc-editor.org/rfc/rfc8032#section-5.1.4

"""

from collections import namedtuple
from functools import lru_cache

from ecdsa import VerifyingKey, Ed25519

from .errors import ArithmeticFailure


# edwards25519 domain params: -x^2 + y^2 = 1 + d*x^2*y^2 over GF(p)
p = 2**255 - 19
d = -121665 * pow(121666, -1, p) % p
cofactor = 8
order = 2**252 + 27742317777372353535851937790883648493
sqrt_m1 = pow(2, (p - 1) // 4, p)

SCALAR_BYTES = 32
POINT_BYTES = 32
#############################


Point = namedtuple("Point", "x y")


class Point(Point):
    def __repr__(self):
        """Compressed, the way it goes over the wire."""
        return compressed_hex(self)


generator = Point(
    15112221349535400772501151409588531511454012693041857206046113283949847762202,
    46316835694926478169428394003475163141307993866256225615783033603165251855960)

# The neutral element. Unlike short weierstrass curves it is an ordinary
# affine point, so generator * order == O.
O = Point(0, 1)


def valid(P):
    """
    twisted edwards curve: -x^2 + y^2 = 1 + d*x^2*y^2
    Determine whether we have a valid representation of a point
    on our curve, with both coordinates reduced modulo p.
    """
    if not isinstance(P, tuple) or len(P) != 2:
        return False
    x, y = P
    if not (isinstance(x, int) and isinstance(y, int)):
        return False
    if not (0 <= x < p and 0 <= y < p):
        return False
    xx, yy = x * x, y * y
    return (yy - xx - 1 - d * xx * yy) % p == 0


def scalar_inv_mod_order(x):
    """
    Compute an inverse for x modulo order, assuming that x
    is not divisible by order.
    """
    if x % order == 0:
        raise ZeroDivisionError("Impossible inverse")
    return pow(x, -1, order)


def check_scalar(x, name="scalar"):
    """
    Reject anything that is not an already reduced scalar.
    Nothing is coerced: an unreduced value is a caller bug.
    """
    if isinstance(x, bool) or not isinstance(x, int):
        raise ArithmeticFailure(f"{name} must be an int, got {type(x).__name__}")
    if not 0 <= x < order:
        raise ArithmeticFailure(f"{name} is not reduced modulo the group order")
    return x


def check_point(P, name="point"):
    if not valid(P):
        raise ArithmeticFailure(f"{name} is not a point on edwards25519")
    if not in_prime_subgroup(P):
        raise ArithmeticFailure(f"{name} is not in the prime order subgroup")
    return P if isinstance(P, Point) else Point(*P)


# extended coordinates ----------------------------------------------------

_IDENTITY = (0, 1, 1, 0)


def _to_extended(P):
    return (P[0], P[1], 1, P[0] * P[1] % p)


def _to_affine(E):
    X, Y, Z, _ = E
    z_inv = pow(Z, -1, p)
    return Point(X * z_inv % p, Y * z_inv % p)


def _ext_add(E1, E2):
    X1, Y1, Z1, T1 = E1
    X2, Y2, Z2, T2 = E2
    A = (Y1 - X1) * (Y2 - X2) % p
    B = (Y1 + X1) * (Y2 + X2) % p
    C = T1 * 2 * d * T2 % p
    D = Z1 * 2 * Z2 % p
    E, F, G, H = B - A, D - C, D + C, B + A
    return (E * F % p, G * H % p, F * G % p, E * H % p)


def _ext_mul(E, scalar):
    # no reduction here, in_prime_subgroup needs the full order
    ret = _IDENTITY
    while scalar:
        if scalar & 1:
            ret = _ext_add(ret, E)
        E = _ext_add(E, E)
        scalar >>= 1
    return ret


@lru_cache(maxsize=None)
def _base_table():
    """G * 2^i for every bit of the order, computed once."""
    table = []
    E = _to_extended(generator)
    for _ in range(order.bit_length()):
        table.append(E)
        E = _ext_add(E, E)
    return tuple(table)


# public api -------------------------------------------------------------

def ec_inv(P):
    """
    Inverse of the point P: on an edwards curve -(x, y) = (-x, y).
    """
    inv = Point((-P[0]) % p, P[1])
    assert valid(inv)
    return inv


def ec_add(P, Q):
    """
    Sum of the points P and Q. The edwards addition law is complete so there
    are no special cases for the neutral element or for doubling.
    """
    if not (valid(P) and valid(Q)):
        raise ValueError("Invalid inputs")
    result = _to_affine(_ext_add(_to_extended(P), _to_extended(Q)))
    assert valid(result)
    return result


def ec_sub(P, Q):
    return ec_add(P, ec_inv(Q))


def ec_sum(points):
    acc = _IDENTITY
    for P in points:
        if not valid(P):
            raise ValueError("Invalid inputs")
        acc = _ext_add(acc, _to_extended(P))
    return _to_affine(acc)


def ec_scalar_mul(P, scalar):
    scalar %= order
    assert valid(P)
    ret = _to_affine(_ext_mul(_to_extended(P), scalar))
    assert valid(ret)
    return ret


def pub_key_from_priv(private):
    """Fixed base multiplication private * G."""
    private %= order
    table = _base_table()
    acc = _IDENTITY
    i = 0
    while private:
        if private & 1:
            acc = _ext_add(acc, table[i])
        private >>= 1
        i += 1
    return _to_affine(acc)


def in_prime_subgroup(P):
    return _to_affine(_ext_mul(_to_extended(P), order)) == O


def clear_cofactor(P):
    return _to_affine(_ext_mul(_to_extended(P), cofactor))


# encoding ---------------------------------------------------------------

def encode_point(P):
    """y little endian, the top bit carries the parity of x."""
    x, y = P
    return (y | ((x & 1) << 255)).to_bytes(POINT_BYTES, "little")


def decode_point(data):
    """
    Inverse of encode_point. Only checks that the bytes describe a curve
    point, subgroup membership is left to check_point.
    """
    if not isinstance(data, (bytes, bytearray)) or len(data) != POINT_BYTES:
        raise ArithmeticFailure("a point encoding is exactly 32 bytes")
    y = int.from_bytes(data, "little")
    sign = y >> 255
    y &= (1 << 255) - 1
    if y >= p:
        raise ArithmeticFailure("y coordinate is not reduced")

    # x^2 = (y^2 - 1) / (d*y^2 + 1)
    x2 = (y * y - 1) * pow(d * y * y + 1, -1, p) % p
    if x2 == 0:
        if sign:
            raise ArithmeticFailure("x = 0 cannot carry a sign bit")
        return Point(0, y)

    # square root candidate, p = 5 mod 8
    x = pow(x2, (p + 3) // 8, p)
    if (x * x - x2) % p != 0:
        x = x * sqrt_m1 % p
    if (x * x - x2) % p != 0:
        raise ArithmeticFailure("encoding does not decode to a curve point")
    if (x & 1) != sign:
        x = p - x
    return Point(x, y)


def compressed_hex(point) -> str:
    return encode_point(point).hex()


def encode_scalar(x):
    return check_scalar(x).to_bytes(SCALAR_BYTES, "little")


def decode_scalar(data):
    if not isinstance(data, (bytes, bytearray)) or len(data) != SCALAR_BYTES:
        raise ArithmeticFailure("a scalar encoding is exactly 32 bytes")
    return check_scalar(int.from_bytes(data, "little"))


def export_verifying_key(P):
    """Hand a group element to python-ecdsa as an Ed25519 public key."""
    return VerifyingKey.from_string(encode_point(check_point(P)), curve=Ed25519)
