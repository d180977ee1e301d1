"""
Manifest Parser
===============

Parses the two sections of a PlayAs manifest into immutable structures.

DICTIONARY
----------
One entry per line. Literal entries give a name and a hex offset:

    LUT_LFIST        0x5A38
    MATRIX_SWORD     5D00

Lines starting with ``DL_`` are bank aliases and must carry a quoted name.
The quoted text names a display list in the asset's PlayAs trailer; the
first token is the dictionary name it is published under:

    DL_SWORD_SHEATHED   BANK   "Sheathed Sword"

OBJECT POOL
-----------
The header gives the pool offset and byte budget, then labelled groups
of semicolon-separated calls follow. A group runs until the next line
with a colon:

    OBJECT POOL=0x5090,0x800
    DL_SWORD:
        Matrix(0, 0, 0, 0, 120, 0, 1, 1, 1);
        CallList(DL_SWORD_SHEATHED);
        PopMatrix(1);
    DL_FIST: CallList(LUT_LFIST);

Whitespace inside pool lines is insignificant and removed.
"""

from dataclasses import dataclass
from typing import Optional, Union
import logging
import re

from playas_sdk.errors import ManifestSyntaxError, SourceLocation
from playas_sdk.zobj.records import SEGMENT_ID, SEGMENT_OFFSET_MASK
from playas_sdk.manifest.reader import (
    SourceLine,
    decode_manifest,
    find_section,
    read_lines,
)

# Logger for this module
logger = logging.getLogger(__name__)


DICTIONARY_KEYWORD = "DICTIONARY"
POOL_KEYWORD = "OBJECT POOL"
BANK_ALIAS_PREFIX = "DL_"

_WHITESPACE = re.compile(r"\s+")


# =============================================================================
# Parsed Structures
# =============================================================================

@dataclass(frozen=True)
class DictionarySection:
    """
    Parsed DICTIONARY section.

    Attributes:
        entries: Literal name -> offset entries
        bank_aliases: Quoted trailer name -> dictionary name
    """
    entries: dict[str, int]
    bank_aliases: dict[str, str]


@dataclass(frozen=True)
class PoolCall:
    """A single call in the object pool, e.g. ``CallList(DL_FIST)``."""
    text: str
    location: SourceLocation


@dataclass(frozen=True)
class PoolGroup:
    """
    A labelled run of pool calls.

    Attributes:
        label: Name the group's first byte is published under
        location: Line holding the label
        calls: Calls in source order
    """
    label: str
    location: SourceLocation
    calls: tuple[PoolCall, ...]


@dataclass(frozen=True)
class PoolSection:
    """
    Parsed OBJECT POOL section.

    Attributes:
        offset: Where the alias table is written in the asset
        size: Byte budget for the alias table
        groups: Labelled groups in source order
    """
    offset: int
    size: int
    groups: tuple[PoolGroup, ...]


@dataclass(frozen=True)
class Manifest:
    """A fully parsed manifest."""
    filename: str
    dictionary: DictionarySection
    pool: PoolSection


# =============================================================================
# Helpers
# =============================================================================

def parse_hex(text: str) -> int:
    """
    Parse a hex number with optional ``0x`` prefix.

    Raises:
        ValueError: If the text is not a non-negative hex number
    """
    value = int(text, 16)
    if value < 0:
        raise ValueError(f"negative offset: {text}")
    return value


# =============================================================================
# DICTIONARY
# =============================================================================

def _parse_bank_alias(
    tokens: list[str],
    location: SourceLocation,
) -> tuple[str, str]:
    """Return (alias, dictionary name) for a ``DL_`` bank alias line."""
    if len(tokens) < 3:
        raise ManifestSyntaxError(
            "malformed dictionary entry: bank alias needs a quoted name",
            location,
        )

    # Quoted names may contain spaces; everything after the bank marker
    # belongs to the name.
    quoted = " ".join(tokens[2:])
    pieces = quoted.split('"')
    if len(pieces) != 3:
        raise ManifestSyntaxError(
            'malformed dictionary entry: wrong number of " symbols',
            location,
        )

    return pieces[1], tokens[0]


def parse_dictionary(lines: tuple[SourceLine, ...], filename: str) -> DictionarySection:
    """
    Parse the body of a DICTIONARY section.

    Raises:
        ManifestSyntaxError: On a malformed or unparsable entry
    """
    entries: dict[str, int] = {}
    bank_aliases: dict[str, str] = {}

    for line in lines:
        if not line:
            continue

        location = SourceLocation(filename, line.line)
        tokens = line.content.split()

        if line.content.startswith(BANK_ALIAS_PREFIX):
            alias, name = _parse_bank_alias(tokens, location)
            bank_aliases[alias] = name
            logger.debug(f"Bank alias '{alias}' -> {name}")
            continue

        if len(tokens) != 2:
            raise ManifestSyntaxError("malformed dictionary entry", location)

        name, value = tokens
        try:
            offset = parse_hex(value)
        except ValueError:
            logger.error(f"Cannot parse offset '{value}' for {name}")
            raise ManifestSyntaxError(
                f"unparsable dictionary entry '{value}'", location
            ) from None

        if name in entries:
            logger.warning(f"{location}: '{name}' redefined")
        entries[name] = offset

    return DictionarySection(entries=entries, bank_aliases=bank_aliases)


# =============================================================================
# OBJECT POOL
# =============================================================================

def parse_pool_header(text: str, location: SourceLocation) -> tuple[int, int]:
    """
    Parse a pool declaration.

    Two spellings are accepted:

        =5090,800             offset after '=' (may be segmented, 06005090)
        5090=06005090,800     offset before '=', segmented base after it

    Returns:
        (pool offset, pool size)

    Raises:
        ManifestSyntaxError: If the declaration is malformed
    """
    text = _WHITESPACE.sub("", text)
    error = ManifestSyntaxError("malformed OBJECT POOL declaration", location)

    eq = text.find("=")
    comma = text.find(",")
    if eq == -1 or comma == -1 or comma < eq or comma == len(text) - 1:
        raise error

    try:
        base = parse_hex(text[eq + 1:comma])
        size = parse_hex(text[comma + 1:])
        offset = parse_hex(text[:eq]) if text[:eq] else base
    except ValueError:
        raise error from None

    if offset >> 24 == SEGMENT_ID:
        offset &= SEGMENT_OFFSET_MASK

    return offset, size


def _split_calls(text: str, location: SourceLocation) -> list[PoolCall]:
    return [PoolCall(call, location) for call in text.split(";") if call]


def parse_pool(
    header: SourceLine,
    lines: tuple[SourceLine, ...],
    filename: str,
) -> PoolSection:
    """
    Parse an OBJECT POOL section.

    The declaration is read from the keyword line itself, or from the
    first non-blank line after it when the keyword stands alone.

    Raises:
        ManifestSyntaxError: On a malformed declaration, an empty label,
            or calls that do not belong to any label
    """
    body = list(lines)
    if not header:
        while body and not body[0]:
            body.pop(0)
        if not body:
            raise ManifestSyntaxError(
                "malformed OBJECT POOL declaration",
                SourceLocation(filename, header.line),
            )
        header = body.pop(0)

    offset, size = parse_pool_header(
        header.content, SourceLocation(filename, header.line)
    )
    logger.debug(f"Object pool at 0x{offset:X}, 0x{size:X} bytes")

    groups: list[PoolGroup] = []
    label: Optional[str] = None
    label_location: Optional[SourceLocation] = None
    calls: list[PoolCall] = []

    for line in body:
        text = _WHITESPACE.sub("", line.content)
        if not text:
            continue

        location = SourceLocation(filename, line.line)
        colon = text.find(":")

        if colon != -1:
            if label is not None:
                groups.append(PoolGroup(label, label_location, tuple(calls)))

            label = text[:colon]
            label_location = location
            calls = []
            if not label:
                raise ManifestSyntaxError("pool entry without a name", location)
            text = text[colon + 1:]
        elif label is None:
            raise ManifestSyntaxError(
                "pool call outside of a labelled entry", location
            )

        calls.extend(_split_calls(text, location))

    if label is not None:
        groups.append(PoolGroup(label, label_location, tuple(calls)))

    return PoolSection(offset=offset, size=size, groups=tuple(groups))


# =============================================================================
# Whole Manifest
# =============================================================================

def parse_manifest(
    data: Union[bytes, str],
    filename: str = "<manifest>",
) -> Manifest:
    """
    Parse manifest text into its DICTIONARY and OBJECT POOL sections.

    Args:
        data: Manifest bytes (UTF-8) or text
        filename: Manifest name used in error messages

    Raises:
        StructureNotFoundError: If a section or its END is missing
        ManifestSyntaxError: On malformed section contents
    """
    lines = read_lines(decode_manifest(data))

    dictionary_section = find_section(lines, DICTIONARY_KEYWORD, filename)
    dictionary_lines = dictionary_section.lines
    if dictionary_section.header:
        dictionary_lines = (dictionary_section.header,) + dictionary_lines
    dictionary = parse_dictionary(dictionary_lines, filename)

    pool_section = find_section(lines, POOL_KEYWORD, filename)
    pool = parse_pool(pool_section.header, pool_section.lines, filename)

    logger.debug(
        f"{filename}: {len(dictionary.entries)} entries, "
        f"{len(dictionary.bank_aliases)} bank aliases, "
        f"{len(pool.groups)} pool entries"
    )
    return Manifest(filename=filename, dictionary=dictionary, pool=pool)
