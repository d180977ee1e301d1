"""
PlayAs Trailer Parser
=====================

Reads the symbol table the model exporter appends to a zobj, and trims
it off again before the asset is patched.

Usage
-----
    >>> from playas_sdk.zobj import parse_trailer, trim_trailer
    >>> entries = parse_trailer(data)
    >>> for name, entry in entries.items():
    ...     print(f"{name}: 0x{entry.offset:08X}")
    >>> body = trim_trailer(data)
"""

from typing import Optional
import logging
import struct

from playas_sdk.errors import StructureNotFoundError
from playas_sdk.zobj.records import (
    TRAILER_MARKER,
    TRAILER_COUNT_OFFSET,
    TRAILER_ENTRIES_OFFSET,
    TrailerEntry,
)

# Logger for this module
logger = logging.getLogger(__name__)


def find_trailer(data: bytes) -> int:
    """
    Return the offset of the trailer marker, or -1 if there is none.
    """
    return data.find(TRAILER_MARKER)


def parse_trailer(data: bytes, name: str = "<zobj>") -> dict[str, TrailerEntry]:
    """
    Parse the PlayAs trailer of a zobj.

    Args:
        data: The raw asset bytes, trailer included
        name: Asset name used in error messages

    Returns:
        Mapping of display list name to its TrailerEntry, in trailer order

    Raises:
        StructureNotFoundError: If the asset has no trailer, or the trailer
            is cut short before all declared entries are read
    """
    marker = find_trailer(data)
    if marker == -1:
        logger.error(f"No PlayAs trailer in {name}")
        raise StructureNotFoundError(f"PlayAs manifest not found in {name}")

    count_at = marker + TRAILER_COUNT_OFFSET
    if count_at + 2 > len(data):
        raise StructureNotFoundError(f"PlayAs manifest in {name} is truncated")

    count = struct.unpack_from(">H", data, count_at)[0]
    logger.debug(f"Trailer at 0x{marker:X} declares {count} display lists")

    entries: dict[str, TrailerEntry] = {}
    offset = marker + TRAILER_ENTRIES_OFFSET

    for _ in range(count):
        end = data.find(b"\x00", offset)
        if end == -1 or end + 5 > len(data):
            raise StructureNotFoundError(
                f"PlayAs manifest in {name} is truncated "
                f"({len(entries)} of {count} entries read)"
            )

        entry_name = data[offset:end].decode("utf-8", errors="replace")
        entry_offset = struct.unpack_from(">I", data, end + 1)[0]
        entries[entry_name] = TrailerEntry(entry_name, entry_offset)
        logger.debug(f"  {entry_name} -> 0x{entry_offset:08X}")

        offset = end + 5

    return entries


def trim_trailer(data: bytes, marker: Optional[int] = None) -> bytes:
    """
    Remove the trailer (marker onward) from an asset.

    Assets without a trailer are returned unchanged.
    """
    if marker is None:
        marker = find_trailer(data)
    if marker == -1:
        return bytes(data)
    return bytes(data[:marker])
