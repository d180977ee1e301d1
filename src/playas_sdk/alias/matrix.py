"""
Matrix Conversion
=================

Builds rotate-translate-scale matrices and packs them into the RSP's
16.16 fixed-point Mtx layout.

Mtx Layout
----------
A 64-byte Mtx stores every element as a signed 16.16 value, split so the
integer halves come first:

    0x00-0x1F: integer halves, two elements per word, row-major
    0x20-0x3F: fraction halves, two elements per word, row-major
"""

import math
import struct

Matrix4 = list[list[float]]

FIXED_ONE = 65536
MTX_SIZE = 0x40


def rtsf(
    roll: float, pitch: float, heading: float,
    x: float, y: float, z: float,
    sx: float, sy: float, sz: float,
) -> Matrix4:
    """
    Build a row-major 4x4 matrix from rotation (degrees), translation and
    per-axis scale. Rows 0-2 carry the scaled rotation, row 3 the
    translation.
    """
    r = math.radians(roll)
    p = math.radians(pitch)
    h = math.radians(heading)

    sinr, cosr = math.sin(r), math.cos(r)
    sinp, cosp = math.sin(p), math.cos(p)
    sinh, cosh = math.sin(h), math.cos(h)

    return [
        [
            (cosp * cosh) * sx,
            (cosp * sinh) * sx,
            (-sinp) * sx,
            0.0,
        ],
        [
            (sinr * sinp * cosh - cosr * sinh) * sy,
            (sinr * sinp * sinh + cosr * cosh) * sy,
            (sinr * cosp) * sy,
            0.0,
        ],
        [
            (cosr * sinp * cosh + sinr * sinh) * sz,
            (cosr * sinp * sinh - sinr * cosh) * sz,
            (cosr * cosp) * sz,
            0.0,
        ],
        [x, y, z, 1.0],
    ]


def to_fixed(value: float) -> int:
    """Convert to 16.16 fixed point as an unsigned 32-bit pattern."""
    scaled = value * FIXED_ONE
    if not math.isfinite(scaled):
        raise ValueError(f"cannot convert {value} to fixed point")
    return round(scaled) & 0xFFFFFFFF


def mtx_f2l(mf: Matrix4) -> bytes:
    """
    Pack a float matrix into a 64-byte fixed-point Mtx.

    Raises:
        ValueError: If an element is not finite
    """
    integer_words = []
    fraction_words = []

    for row in mf:
        for j in range(2):
            a = to_fixed(row[j * 2])
            b = to_fixed(row[j * 2 + 1])
            integer_words.append((a & 0xFFFF0000) | (b >> 16))
            fraction_words.append(((a << 16) & 0xFFFF0000) | (b & 0xFFFF))

    return struct.pack(">16I", *integer_words, *fraction_words)
