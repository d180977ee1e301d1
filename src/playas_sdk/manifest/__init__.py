"""
PlayAs Manifest Handling
========================

Reads the text manifest that accompanies a zobj:

- **reader**: comment-free (content, line number) pairs and section slicing
- **parser**: DICTIONARY and OBJECT POOL sections as immutable structures

Quick Start
-----------
    >>> from playas_sdk.manifest import parse_manifest
    >>> manifest = parse_manifest(Path("adult.txt").read_bytes(), "adult.txt")
    >>> print(f"Pool at 0x{manifest.pool.offset:X}")
"""

from playas_sdk.manifest.reader import (
    SourceLine,
    Section,
    decode_manifest,
    strip_comment,
    read_lines,
    find_section,
)
from playas_sdk.manifest.parser import (
    DictionarySection,
    PoolCall,
    PoolGroup,
    PoolSection,
    Manifest,
    parse_hex,
    parse_dictionary,
    parse_pool_header,
    parse_pool,
    parse_manifest,
)

__all__ = [
    "SourceLine",
    "Section",
    "decode_manifest",
    "strip_comment",
    "read_lines",
    "find_section",
    "DictionarySection",
    "PoolCall",
    "PoolGroup",
    "PoolSection",
    "Manifest",
    "parse_hex",
    "parse_dictionary",
    "parse_pool_header",
    "parse_pool",
    "parse_manifest",
]
