"""
Alias Patch Builder
===================

Runs the whole pipeline that turns a manifest and a zobj into a patched
zobj, and composes the output asset.

Pipeline
--------
1. Parse the PlayAs trailer of the raw zobj
2. Locate the skeleton hierarchy header in the raw zobj
3. Trim the trailer off and append the placeholder ``DF`` instruction
4. Parse the manifest
5. Merge the symbol dictionary
6. Assemble the alias table
7. Write the alias table over the pool region

Every step either completes or raises a PlayAsError; there is no
partially built patch.

Usage
-----
    >>> from playas_sdk import AliasPatch
    >>> patch = AliasPatch.from_files("adult.txt", "adult.zobj")
    >>> print(f"Pool 0x{patch.pool_offset:X}: {len(patch.alias_table)} bytes")
    >>> patch.write("adult.patched.zobj")
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union
import logging

from playas_sdk.alias.symbols import SymbolDictionary, merge_dictionary
from playas_sdk.alias.table import build_alias_table
from playas_sdk.config import BuildConfig
from playas_sdk.errors import PoolOverflowError
from playas_sdk.manifest.parser import parse_manifest
from playas_sdk.zobj.hierarchy import locate_hierarchy
from playas_sdk.zobj.records import (
    PLACEHOLDER_INSTRUCTION,
    HierarchyHeader,
    TrailerEntry,
)
from playas_sdk.zobj.trailer import find_trailer, parse_trailer, trim_trailer

# Logger for this module
logger = logging.getLogger(__name__)


def compose_zobj(body: bytes, alias_table: bytes, pool_offset: int) -> bytes:
    """
    Write the alias table over ``body`` starting at ``pool_offset``.

    Raises:
        PoolOverflowError: If the table would run past the end of the body
    """
    end = pool_offset + len(alias_table)
    if end > len(body):
        logger.error(f"Pool region 0x{pool_offset:X}-0x{end:X} outside zobj (0x{len(body):X})")
        raise PoolOverflowError(
            f"OBJECT POOL at 0x{pool_offset:X} runs past the end of the zobj "
            f"(0x{end:X} > 0x{len(body):X})",
            size=end,
            budget=len(body),
        )

    output = bytearray(body)
    output[pool_offset:end] = alias_table
    return bytes(output)


@dataclass(frozen=True)
class AliasPatch:
    """
    A fully built patch.

    Attributes:
        name: Name of the zobj the patch was built for
        pool_offset: Where the alias table sits in the zobj
        pool_size: Byte budget declared for the pool
        alias_table: The compiled alias table
        hierarchy: The located skeleton hierarchy header
        trailer: Entries of the zobj's PlayAs trailer
        dictionary: Final symbol dictionary, pool labels included
    """
    name: str
    pool_offset: int
    pool_size: int
    alias_table: bytes
    hierarchy: HierarchyHeader
    trailer: dict[str, TrailerEntry]
    dictionary: SymbolDictionary
    _zobj: bytes = field(repr=False)

    @property
    def zobj(self) -> bytes:
        """The patched zobj."""
        return self._zobj

    @property
    def hierarchy_header(self) -> bytes:
        return self.hierarchy.data

    @classmethod
    def build(
        cls,
        manifest: Union[bytes, str],
        zobj: bytes,
        name: str,
        manifest_name: str = "<manifest>",
        config: Optional[BuildConfig] = None,
    ) -> "AliasPatch":
        """
        Build a patch from manifest and zobj contents.

        Args:
            manifest: Manifest text (bytes are decoded as UTF-8)
            zobj: The raw zobj, PlayAs trailer included
            name: Zobj name used in messages
            manifest_name: Manifest name used in messages
            config: Build settings (defaults to BuildConfig())

        Raises:
            PlayAsError: If any step fails
        """
        config = config or BuildConfig()
        zobj = bytes(zobj)

        trailer = parse_trailer(zobj, name)
        hierarchy = locate_hierarchy(zobj, name)

        body = trim_trailer(zobj, find_trailer(zobj))
        placeholder_offset = len(body)
        body += PLACEHOLDER_INSTRUCTION
        logger.debug(f"{name}: trimmed to 0x{placeholder_offset:X} bytes, placeholder appended")

        parsed = parse_manifest(manifest, manifest_name)
        dictionary = merge_dictionary(
            parsed.dictionary,
            trailer,
            placeholder_offset,
            config.placeholder_symbol,
        )

        table = build_alias_table(parsed.pool, dictionary, hierarchy.data)
        output = compose_zobj(body, table.data, parsed.pool.offset)

        logger.info(
            f"{name}: wrote 0x{len(table):X} byte alias table at 0x{parsed.pool.offset:X}"
        )
        return cls(
            name=name,
            pool_offset=parsed.pool.offset,
            pool_size=parsed.pool.size,
            alias_table=table.data,
            hierarchy=hierarchy,
            trailer=trailer,
            dictionary=table.dictionary,
            _zobj=output,
        )

    @classmethod
    def from_files(
        cls,
        manifest_path: Union[str, Path],
        zobj_path: Union[str, Path],
        name: Optional[str] = None,
        config: Optional[BuildConfig] = None,
    ) -> "AliasPatch":
        """
        Build a patch from files on disk.

        Raises:
            FileNotFoundError: If either file doesn't exist
            PlayAsError: If any build step fails
        """
        manifest_path = Path(manifest_path)
        zobj_path = Path(zobj_path)
        return cls.build(
            manifest_path.read_bytes(),
            zobj_path.read_bytes(),
            name or zobj_path.name,
            manifest_name=manifest_path.name,
            config=config,
        )

    def write(self, path: Union[str, Path]) -> None:
        """Write the patched zobj to ``path``."""
        Path(path).write_bytes(self._zobj)


def build_patch(
    manifest: Union[bytes, str],
    zobj: bytes,
    name: str,
    manifest_name: str = "<manifest>",
    config: Optional[BuildConfig] = None,
) -> AliasPatch:
    """Convenience wrapper around AliasPatch.build()."""
    return AliasPatch.build(manifest, zobj, name, manifest_name, config)
