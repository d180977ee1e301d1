"""
Skeleton Hierarchy Locator
==========================

Finds the 12-byte flex skeleton header of a 21-limb model inside a zobj.

The format gives the header no tag, so the locator works from internal
consistency alone:

1. Every occurrence of the bytes ``15 00 00 00 12 00 00 00`` (limb count
   21, display list count 18) marks a candidate; the header starts four
   bytes earlier.
2. The candidate's first word, masked to 24 bits, must point at an
   8-aligned limb index table with room for 21 entries.
3. Each of the 21 indices must be a segment 6 address of an 8-aligned,
   in-bounds limb whose near and far display list pointers are equal
   (the model carries no separate low-detail geometry).

The first candidate passing every check wins.
"""

from typing import Iterator, Optional
import logging
import struct

from playas_sdk.errors import StructureNotFoundError
from playas_sdk.zobj.records import (
    HIERARCHY_HEADER_SIZE,
    HIERARCHY_PATTERN,
    LIMB_COUNT,
    LIMB_DL_OFFSET,
    LIMB_ENTRY_SIZE,
    LIMB_FAR_DL_OFFSET,
    LIMB_INDEX_SIZE,
    LIMB_INDEX_TABLE_SIZE,
    SEGMENT_ID,
    SEGMENT_OFFSET_MASK,
    HierarchyHeader,
)

# Logger for this module
logger = logging.getLogger(__name__)


def _candidates(data: bytes) -> Iterator[int]:
    """Yield header start offsets for every occurrence of the count pattern."""
    position = data.find(HIERARCHY_PATTERN)
    while position != -1:
        if position >= 4:
            yield position - 4
        position = data.find(HIERARCHY_PATTERN, position + 1)


def _is_limb(data: bytes, index_offset: int) -> bool:
    """Check one limb index slot and the limb it points at."""
    if data[index_offset] != SEGMENT_ID:
        return False

    limb = struct.unpack_from(">I", data, index_offset)[0] & SEGMENT_OFFSET_MASK
    if limb >= len(data) - LIMB_ENTRY_SIZE or limb % 8 != 0:
        return False

    near_dl = struct.unpack_from(">I", data, limb + LIMB_DL_OFFSET)[0]
    far_dl = struct.unpack_from(">I", data, limb + LIMB_FAR_DL_OFFSET)[0]
    return near_dl == far_dl


def is_hierarchy_header(data: bytes, offset: int) -> bool:
    """
    Return True if a valid 21-limb hierarchy header starts at ``offset``.

    Only the limb index table and limbs are validated here; callers are
    expected to have matched the count pattern at ``offset + 4``.
    """
    if offset < 0 or offset + HIERARCHY_HEADER_SIZE > len(data):
        return False

    table = struct.unpack_from(">I", data, offset)[0] & SEGMENT_OFFSET_MASK

    # The index table must fit in the asset and be 8-aligned
    if table >= len(data) - LIMB_INDEX_TABLE_SIZE or table % 8 != 0:
        logger.debug(f"Candidate 0x{offset:X}: bad limb table 0x{table:X}")
        return False

    for i in range(LIMB_COUNT):
        if not _is_limb(data, table + i * LIMB_INDEX_SIZE):
            logger.debug(f"Candidate 0x{offset:X}: limb {i} rejected")
            return False

    return True


def find_hierarchy_offset(data: bytes) -> Optional[int]:
    """Return the offset of the first valid hierarchy header, or None."""
    for offset in _candidates(data):
        if is_hierarchy_header(data, offset):
            return offset
    return None


def locate_hierarchy(data: bytes, name: str = "<zobj>") -> HierarchyHeader:
    """
    Locate the skeleton hierarchy header in an asset.

    Args:
        data: The raw asset bytes
        name: Asset name used in error messages

    Returns:
        HierarchyHeader with the header offset and a copy of its 12 bytes

    Raises:
        StructureNotFoundError: If no candidate passes validation
    """
    offset = find_hierarchy_offset(data)
    if offset is None:
        logger.error(f"No 21-limb hierarchy in {name}")
        raise StructureNotFoundError(f"hierarchy could not be located in {name}")

    logger.debug(f"Hierarchy header at 0x{offset:X}")
    return HierarchyHeader(
        offset=offset,
        data=bytes(data[offset:offset + HIERARCHY_HEADER_SIZE]),
    )
