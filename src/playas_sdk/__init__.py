"""
PlayAs SDK - Alias Table Patcher for Skeletal Model Assets
===========================================================

This package compiles a PlayAs manifest together with a zobj (a segment 6
skeletal model file) into a patched zobj. The patch is an alias table of
F3DZEX2 words written into the manifest's object pool, so a renderer can
call externally authored display lists, matrices and raw commands by
name.

Main Components
---------------
- **zobj**: PlayAs trailer parsing and skeleton hierarchy location
- **manifest**: DICTIONARY and OBJECT POOL parsing
- **alias**: symbol dictionary, pool function compiler, table assembly
- **patch**: the end-to-end build and output composition

Quick Start
-----------
Build a patch from files:
    >>> from playas_sdk import AliasPatch
    >>> patch = AliasPatch.from_files("adult.txt", "adult.zobj")
    >>> patch.write("adult.patched.zobj")

Build from bytes already in memory:
    >>> from playas_sdk import build_patch
    >>> patch = build_patch(manifest_bytes, zobj_bytes, "adult.zobj")
    >>> patch.pool_offset, patch.pool_size, len(patch.alias_table)

Or use the command-line tool:
    $ playas build adult.txt adult.zobj -o adult.patched.zobj
    $ playas dictionary adult.txt adult.zobj
"""

__version__ = "1.0.0"

from playas_sdk.errors import (
    ErrorKind,
    SourceLocation,
    PlayAsError,
    StructureNotFoundError,
    ManifestSyntaxError,
    UndefinedSymbolError,
    ArgumentError,
    UnknownFunctionError,
    PoolOverflowError,
    DuplicateSymbolError,
)
from playas_sdk.config import BuildConfig
from playas_sdk.patch import AliasPatch, build_patch, compose_zobj

__all__ = [
    "__version__",
    # Build
    "AliasPatch",
    "build_patch",
    "compose_zobj",
    "BuildConfig",
    # Exception hierarchy
    "ErrorKind",
    "SourceLocation",
    "PlayAsError",
    "StructureNotFoundError",
    "ManifestSyntaxError",
    "UndefinedSymbolError",
    "ArgumentError",
    "UnknownFunctionError",
    "PoolOverflowError",
    "DuplicateSymbolError",
]
