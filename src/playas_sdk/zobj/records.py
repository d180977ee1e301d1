"""
Zobj Structure Definitions
==========================

Constants and data structures for the parts of a skeletal model asset
(zobj) that the alias patcher reads.

PlayAs Trailer
--------------
A proprietary block appended to the asset by the model exporter:

    Offset  Size  Description
    0x00    15    Marker "!PlayAsManifest"
    0x10    2     Display list count (big-endian)
    0x12    n     Entries: NUL-terminated name, then 4-byte offset (BE)

Everything from the marker to the end of the file is removed before the
asset is patched.

Hierarchy Header
----------------
The 12-byte flex skeleton header:

    Offset  Size  Description
    0x00    4     Segmented address of the limb index table
    0x04    1     Limb count (0x15), 3 bytes padding
    0x08    1     Display list count (0x12), 3 bytes padding

The header carries no tag of its own; see playas_sdk.zobj.hierarchy.
"""

from dataclasses import dataclass
import struct


# =============================================================================
# Format Constants
# =============================================================================

# Trailer layout
TRAILER_MARKER = b"!PlayAsManifest"
TRAILER_COUNT_OFFSET = 0x10
TRAILER_ENTRIES_OFFSET = 0x12

# Segment 6 holds the object file at runtime
SEGMENT_ID = 0x06
SEGMENT_TAG = SEGMENT_ID << 24
SEGMENT_OFFSET_MASK = 0x00FFFFFF

# Skeleton shape: 21 limbs, 18 of which draw display lists
LIMB_COUNT = 0x15
DISPLAY_LIST_COUNT = 0x12
HIERARCHY_HEADER_SIZE = 0x0C
HIERARCHY_PATTERN = struct.pack(">B3xB3x", LIMB_COUNT, DISPLAY_LIST_COUNT)

LIMB_INDEX_SIZE = 0x04
LIMB_INDEX_TABLE_SIZE = LIMB_COUNT * LIMB_INDEX_SIZE
LIMB_ENTRY_SIZE = 0x10
LIMB_DL_OFFSET = 0x08
LIMB_FAR_DL_OFFSET = 0x0C

# gsSPEndDisplayList, appended so bank objects have something to call
PLACEHOLDER_INSTRUCTION = bytes.fromhex("DF00000000000000")


# =============================================================================
# Data Structures
# =============================================================================

@dataclass(frozen=True)
class TrailerEntry:
    """
    One display list listed in the PlayAs trailer.

    Attributes:
        name: Display list name as written by the exporter
        offset: Absolute offset of the display list in the asset
    """
    name: str
    offset: int


@dataclass(frozen=True)
class HierarchyHeader:
    """
    The located skeleton hierarchy header.

    Attributes:
        offset: Where the header was found in the asset
        data: The 12 header bytes, copied out of the asset
    """
    offset: int
    data: bytes

    @property
    def limb_table_offset(self) -> int:
        """Offset of the limb index table within segment 6."""
        return struct.unpack_from(">I", self.data, 0)[0] & SEGMENT_OFFSET_MASK

    @property
    def limb_count(self) -> int:
        return self.data[4]

    @property
    def display_list_count(self) -> int:
        return self.data[8]
