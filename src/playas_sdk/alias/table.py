"""
Alias Table Builder
===================

Assembles the OBJECT POOL into the alias table written over the pool
region of the asset.

Each labelled group is bound to its pool address (pool offset + bytes
emitted so far) before its calls are compiled, so a group can call
itself and any group defined before it. When the last call of a group
is a CallList, its second byte is set to 0x01, turning the
``gsSPDisplayList`` into a ``gsSPBranchList``. The skeleton hierarchy
header is appended after the last group.
"""

from dataclasses import dataclass
from typing import Optional
import logging

from playas_sdk.alias.instructions import compile_call, parse_call
from playas_sdk.alias.symbols import SymbolDictionary
from playas_sdk.errors import PlayAsError, PoolOverflowError
from playas_sdk.manifest.parser import PoolSection

# Logger for this module
logger = logging.getLogger(__name__)


BRANCH_FLAG = 0x01

# Position of the branch flag counted back from the end of a G_DL word
BRANCH_FLAG_FROM_END = 7


@dataclass(frozen=True)
class AliasTable:
    """
    The assembled alias table.

    Attributes:
        data: Compiled groups followed by the hierarchy header
        dictionary: The symbol dictionary including all pool labels
        labels: Pool label -> absolute offset in the asset
    """
    data: bytes
    dictionary: SymbolDictionary
    labels: dict[str, int]

    def __len__(self) -> int:
        return len(self.data)


def build_alias_table(
    pool: PoolSection,
    dictionary: SymbolDictionary,
    hierarchy_header: bytes,
) -> AliasTable:
    """
    Compile every pool group into one alias table.

    Args:
        pool: Parsed OBJECT POOL section
        dictionary: Merged dictionary before any pool labels
        hierarchy_header: The 12 header bytes appended at the end

    Raises:
        DuplicateSymbolError: If a label is already defined
        PoolOverflowError: If the table exceeds the pool size
        PlayAsError: Any compile error, tagged with its manifest line
    """
    table = bytearray()
    labels: dict[str, int] = {}

    for group in pool.groups:
        address = pool.offset + len(table)
        dictionary = dictionary.define(group.label, address, group.location)
        labels[group.label] = address
        logger.debug(f"{group.label} at 0x{address:X}")

        last: Optional[str] = None
        for pool_call in group.calls:
            try:
                call = parse_call(pool_call.text)
                table.extend(compile_call(call, dictionary))
            except PlayAsError as e:
                logger.error(f"{pool_call.location}: {e.message}")
                raise e.with_location(pool_call.location)
            last = call.name

        if last == "CallList":
            table[len(table) - BRANCH_FLAG_FROM_END] = BRANCH_FLAG

    table.extend(hierarchy_header)

    if len(table) > pool.size:
        logger.error(f"Alias table is 0x{len(table):X} bytes, pool holds 0x{pool.size:X}")
        raise PoolOverflowError(
            f"alias table (0x{len(table):X} bytes) exceeds max OBJECT POOL size "
            f"(0x{pool.size:X} bytes)",
            size=len(table),
            budget=pool.size,
        )

    logger.info(f"Alias table uses 0x{len(table):X} of 0x{pool.size:X} bytes")
    return AliasTable(data=bytes(table), dictionary=dictionary, labels=labels)
