"""
Zobj Asset Handling
===================

Readers for the parts of a skeletal model asset (zobj) the patcher needs:

- **parse_trailer / trim_trailer**: the PlayAs symbol trailer
- **locate_hierarchy**: the untagged 21-limb skeleton header
- **records**: format constants and data structures
"""

from playas_sdk.zobj.records import (
    TRAILER_MARKER,
    SEGMENT_TAG,
    SEGMENT_OFFSET_MASK,
    HIERARCHY_HEADER_SIZE,
    HIERARCHY_PATTERN,
    PLACEHOLDER_INSTRUCTION,
    TrailerEntry,
    HierarchyHeader,
)
from playas_sdk.zobj.trailer import find_trailer, parse_trailer, trim_trailer
from playas_sdk.zobj.hierarchy import (
    find_hierarchy_offset,
    is_hierarchy_header,
    locate_hierarchy,
)

__all__ = [
    "TRAILER_MARKER",
    "SEGMENT_TAG",
    "SEGMENT_OFFSET_MASK",
    "HIERARCHY_HEADER_SIZE",
    "HIERARCHY_PATTERN",
    "PLACEHOLDER_INSTRUCTION",
    "TrailerEntry",
    "HierarchyHeader",
    "find_trailer",
    "parse_trailer",
    "trim_trailer",
    "find_hierarchy_offset",
    "is_hierarchy_header",
    "locate_hierarchy",
]
