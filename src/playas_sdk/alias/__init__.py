"""
Alias Table Compiler
====================

Turns the OBJECT POOL of a manifest into F3DZEX2 words:

- **matrix**: rotate-translate-scale matrices and 16.16 Mtx packing
- **symbols**: the merged, immutable symbol dictionary
- **instructions**: single pool call compilation
- **table**: whole-pool assembly into the alias table
"""

from playas_sdk.alias.matrix import rtsf, to_fixed, mtx_f2l, MTX_SIZE
from playas_sdk.alias.symbols import (
    DEFAULT_PLACEHOLDER_SYMBOL,
    EXTERNAL,
    External,
    Resolved,
    SymbolValue,
    SymbolDictionary,
    merge_dictionary,
)
from playas_sdk.alias.instructions import (
    Call,
    FUNCTIONS,
    parse_call,
    compile_call,
    compile_instruction,
)
from playas_sdk.alias.table import AliasTable, build_alias_table

__all__ = [
    "rtsf",
    "to_fixed",
    "mtx_f2l",
    "MTX_SIZE",
    "DEFAULT_PLACEHOLDER_SYMBOL",
    "EXTERNAL",
    "External",
    "Resolved",
    "SymbolValue",
    "SymbolDictionary",
    "merge_dictionary",
    "Call",
    "FUNCTIONS",
    "parse_call",
    "compile_call",
    "compile_instruction",
    "AliasTable",
    "build_alias_table",
]
