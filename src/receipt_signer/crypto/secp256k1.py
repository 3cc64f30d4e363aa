"""
secp256k1 curve arithmetic and public key recovery.

The `cryptography` package signs and derives keys on secp256k1 but does not
expose public key recovery. Recovery is done here with affine point
arithmetic:

    R = lift_x(r, parity)
    Q = r^-1 * (s*R - z*G)

where `z` is the 32-byte message digest interpreted as a big-endian integer.

References:
- SEC 1 v2, section 4.1.6 (Public Key Recovery Operation)
"""

from __future__ import annotations

from typing import Final

from cryptography.hazmat.primitives.asymmetric import ec

Point = tuple[int, int]
"""Affine curve point (x, y). The point at infinity is represented as None."""

P: Final = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
"""secp256k1 field prime."""

N: Final = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
"""secp256k1 curve order."""

HALF_N: Final = N // 2
"""Upper bound for canonical (low-s) signatures."""

G: Final[Point] = (
    0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
)
"""secp256k1 generator point."""

SCALAR_SIZE: Final = 32
"""Size of a private scalar or a signature component in bytes."""

UNCOMPRESSED_PUBKEY_SIZE: Final = 65
"""Uncompressed secp256k1 public key: 0x04 + 32-byte x + 32-byte y."""


def _modinv(a: int, m: int) -> int:
    """Compute modular inverse using Fermat's little theorem (m must be prime)."""
    return pow(a, m - 2, m)


def is_valid_scalar(value: int) -> bool:
    """Return True if `value` lies in [1, n-1]."""
    return 0 < value < N


def point_add(p1: Point | None, p2: Point | None) -> Point | None:
    """Add two secp256k1 curve points."""
    if p1 is None:
        return p2
    if p2 is None:
        return p1

    x1, y1 = p1
    x2, y2 = p2

    if x1 == x2 and y1 != y2:
        return None

    if x1 == x2:
        # Point doubling.
        lam = (3 * x1 * x1 * _modinv(2 * y1, P)) % P
    else:
        lam = ((y2 - y1) * _modinv(x2 - x1, P)) % P

    x3 = (lam * lam - x1 - x2) % P
    y3 = (lam * (x1 - x3) - y1) % P
    return (x3, y3)


def point_mul(k: int, point: Point | None) -> Point | None:
    """Scalar multiplication using double-and-add."""
    result = None
    addend = point
    while k:
        if k & 1:
            result = point_add(result, addend)
        addend = point_add(addend, addend)
        k >>= 1
    return result


def lift_x(x: int, parity: int) -> Point | None:
    """
    Find the curve point with the given x-coordinate and y parity.

    Returns None when x is not the x-coordinate of any point on the curve.
    """
    if not 0 <= x < P:
        return None

    # Solve y^2 = x^3 + 7 (mod p). p = 3 (mod 4), so a square root is
    # a single exponentiation.
    y_sq = (pow(x, 3, P) + 7) % P
    y = pow(y_sq, (P + 1) // 4, P)
    if (y * y) % P != y_sq:
        return None

    if (y & 1) != parity:
        y = P - y
    return (x, y)


def recover_public_point(digest: bytes, r: int, s: int, parity: int) -> Point | None:
    """
    Recover the signer's public point from a digest and signature.

    Args:
        digest: 32-byte message hash that was signed.
        r: Signature x-coordinate component.
        s: Signature proof component.
        parity: Parity of the y-coordinate of the ephemeral point R (0 or 1).

    Returns:
        The recovered public point, or None if (r, parity) does not name a
        curve point or the result is the point at infinity.
    """
    if not (is_valid_scalar(r) and is_valid_scalar(s)):
        return None
    if parity not in (0, 1):
        return None

    ephemeral = lift_x(r, parity)
    if ephemeral is None:
        return None

    z = int.from_bytes(digest, "big") % N
    r_inv = _modinv(r, N)

    # Q = r^-1 * (s*R - z*G) = (-z * r^-1)*G + (s * r^-1)*R
    u1 = (-z * r_inv) % N
    u2 = (s * r_inv) % N
    return point_add(point_mul(u1, G), point_mul(u2, ephemeral))


def public_point(private_key: ec.EllipticCurvePrivateKey) -> Point:
    """Return the affine public point of a `cryptography` private key."""
    numbers = private_key.public_key().public_numbers()
    return (numbers.x, numbers.y)


def encode_uncompressed(point: Point) -> bytes:
    """Encode a curve point as 65-byte uncompressed format (0x04 || x || y)."""
    x, y = point
    return b"\x04" + x.to_bytes(SCALAR_SIZE, "big") + y.to_bytes(SCALAR_SIZE, "big")
