"""
Shared Test Fixtures
====================

Builds small synthetic zobjs and manifests.

Synthetic Zobj Layout
---------------------
    0x000-0x0FF  free space
    0x100-0x24F  21 limbs, 0x10 bytes each (near DL == far DL)
    0x300-0x353  limb index table (21 segment 6 pointers)
    0x360-0x36B  hierarchy header -> 0x06000300, 21 limbs, 18 DLs
    0x380-0x3FF  object pool
    0x400-       PlayAs trailer
"""

import struct

import pytest


BODY_SIZE = 0x400
LIMB_BASE = 0x100
LIMB_TABLE = 0x300
HEADER_OFFSET = 0x360
POOL_OFFSET = 0x380
POOL_SIZE = 0x80

HEADER_BYTES = bytes.fromhex("06000300 15000000 12000000")

DEFAULT_TRAILER = {
    "Sheathed Sword": 0x200,
    "Fist": 0x208,
}

MANIFEST = """\
// Synthetic PlayAs manifest
DICTIONARY
    LUT_ZERO      0
    LUT_HAND      0x150
    DL_SWORD      BANK   "Sheathed Sword"
    DL_SHIELD     BANK   "Hylian Shield"    // not in the trailer
END

OBJECT POOL=0x380,0x80
    ALIAS_HAND:
        CallList(LUT_HAND);
    ALIAS_SHIELD: CallList(DL_SHIELD);
END
"""


def build_trailer(entries: dict[str, int]) -> bytes:
    """Serialize a PlayAs trailer."""
    data = bytearray(b"!PlayAsManifest".ljust(0x10, b"\x00"))
    data += struct.pack(">H", len(entries))
    for name, offset in entries.items():
        data += name.encode("utf-8") + b"\x00" + struct.pack(">I", offset)
    return bytes(data)


def build_body(with_hierarchy: bool = True) -> bytearray:
    """Zobj body (no trailer) with a valid 21-limb skeleton."""
    data = bytearray(BODY_SIZE)
    if not with_hierarchy:
        return data

    for i in range(21):
        limb = LIMB_BASE + i * 0x10
        dl = 0x06000000 + 0x200 + i * 8 if i % 7 else 0
        struct.pack_into(">II", data, limb + 8, dl, dl)
        struct.pack_into(">I", data, LIMB_TABLE + i * 4, 0x06000000 | limb)

    data[HEADER_OFFSET:HEADER_OFFSET + 12] = HEADER_BYTES
    return data


def build_zobj(
    trailer: dict[str, int] = None,
    with_hierarchy: bool = True,
    body: bytes = None,
) -> bytes:
    if body is None:
        body = build_body(with_hierarchy)
    if trailer is None:
        trailer = DEFAULT_TRAILER
    return bytes(body) + build_trailer(trailer)


@pytest.fixture
def make_zobj():
    """Factory fixture: build_zobj(trailer=..., with_hierarchy=..., body=...)."""
    return build_zobj


@pytest.fixture
def make_body():
    """Factory fixture: build_body(with_hierarchy=...)."""
    return build_body


@pytest.fixture
def zobj() -> bytes:
    """A valid zobj with the default trailer."""
    return build_zobj()


@pytest.fixture
def manifest() -> str:
    """A manifest matching the zobj fixture."""
    return MANIFEST


def pool_manifest(pool: str, dictionary: str = "LUT_HAND 0x150", header: str = "=0x380,0x80") -> str:
    """Build a manifest with the given DICTIONARY body and OBJECT POOL body."""
    return f"DICTIONARY\n{dictionary}\nEND\nOBJECT POOL{header}\n{pool}\nEND\n"


@pytest.fixture
def make_manifest():
    """Factory fixture: pool_manifest(pool, dictionary=..., header=...)."""
    return pool_manifest
