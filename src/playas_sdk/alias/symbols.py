"""
Symbol Dictionary
=================

The name -> offset table every pool call is resolved against.

Symbols come from four places, merged in this order (later wins):

1. Literal DICTIONARY entries (``name  offset``)
2. Bank aliases (``DL_name  BANK  "Trailer Name"``), published as External
3. PlayAs trailer entries, resolving bank aliases to real offsets
4. The placeholder symbol, pointing at the appended end-display-list

Pool labels are added afterwards, one at a time, by the alias table
builder. A bank alias that the trailer does not resolve stays External;
display list calls to it are pointed at the placeholder instead.

The dictionary is immutable: ``define()`` returns a new dictionary.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Union
import logging

from playas_sdk.errors import DuplicateSymbolError, SourceLocation, UndefinedSymbolError
from playas_sdk.manifest.parser import DictionarySection
from playas_sdk.zobj.records import TrailerEntry

# Logger for this module
logger = logging.getLogger(__name__)


DEFAULT_PLACEHOLDER_SYMBOL = "DL_DF_COMMAND"


# =============================================================================
# Symbol Values
# =============================================================================

@dataclass(frozen=True)
class Resolved:
    """A symbol with a known offset in the asset."""
    offset: int

    def __str__(self) -> str:
        return f"0x{self.offset:08X}"


@dataclass(frozen=True)
class External:
    """A bank object the asset does not contain."""

    def __str__(self) -> str:
        return "EXTERNAL"


EXTERNAL = External()

SymbolValue = Union[Resolved, External]


# =============================================================================
# Dictionary
# =============================================================================

@dataclass(frozen=True)
class SymbolDictionary:
    """
    Immutable symbol table.

    Attributes:
        symbols: Name -> SymbolValue, in definition order
        placeholder: Name of the symbol External values fall back to
    """
    symbols: dict[str, SymbolValue] = field(default_factory=dict)
    placeholder: str = DEFAULT_PLACEHOLDER_SYMBOL

    def __contains__(self, name: str) -> bool:
        return name in self.symbols

    def __len__(self) -> int:
        return len(self.symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols)

    def get(self, name: str) -> Optional[SymbolValue]:
        return self.symbols.get(name)

    def lookup(self, name: str) -> SymbolValue:
        """
        Return the value of ``name``.

        Raises:
            UndefinedSymbolError: If the name is not defined
        """
        value = self.symbols.get(name)
        if value is None:
            raise UndefinedSymbolError(name)
        return value

    def resolve(self, name: str) -> int:
        """
        Return the offset of ``name``, following External symbols to the
        placeholder.

        Raises:
            UndefinedSymbolError: If the name (or the placeholder) is not
                defined
        """
        value = self.lookup(name)
        if isinstance(value, External):
            logger.debug(f"'{name}' is a bank object, using {self.placeholder}")
            value = self.lookup(self.placeholder)
            if isinstance(value, External):
                raise UndefinedSymbolError(self.placeholder)
        return value.offset

    def define(
        self,
        name: str,
        offset: int,
        location: Optional[SourceLocation] = None,
    ) -> "SymbolDictionary":
        """
        Return a new dictionary with ``name`` bound to ``offset``.

        Raises:
            DuplicateSymbolError: If the name is already defined
        """
        if name in self.symbols:
            logger.error(f"Duplicate dictionary entry '{name}'")
            raise DuplicateSymbolError(name, location)

        symbols = dict(self.symbols)
        symbols[name] = Resolved(offset)
        return SymbolDictionary(symbols=symbols, placeholder=self.placeholder)

    def offsets(self) -> dict[str, Optional[int]]:
        """Name -> offset, None for External symbols."""
        return {
            name: value.offset if isinstance(value, Resolved) else None
            for name, value in self.symbols.items()
        }

    def format(self) -> str:
        """Render one ``name  value`` line per symbol."""
        if not self.symbols:
            return ""
        width = max(len(name) for name in self.symbols)
        return "\n".join(
            f"{name.ljust(width)}  {value}" for name, value in self.symbols.items()
        )


# =============================================================================
# Merging
# =============================================================================

def merge_dictionary(
    section: DictionarySection,
    trailer: dict[str, TrailerEntry],
    placeholder_offset: int,
    placeholder: str = DEFAULT_PLACEHOLDER_SYMBOL,
) -> SymbolDictionary:
    """
    Combine the manifest dictionary, bank aliases, trailer entries and the
    placeholder into one SymbolDictionary.

    Args:
        section: Parsed DICTIONARY section
        trailer: Entries of the asset's PlayAs trailer
        placeholder_offset: Offset of the appended placeholder instruction
        placeholder: Name to publish the placeholder under
    """
    symbols: dict[str, SymbolValue] = {
        name: Resolved(offset) for name, offset in section.entries.items()
    }

    for name in section.bank_aliases.values():
        symbols[name] = EXTERNAL

    resolved = set()
    for entry in trailer.values():
        name = section.bank_aliases.get(entry.name)
        if name is not None:
            symbols[name] = Resolved(entry.offset)
            resolved.add(entry.name)

    for alias, name in section.bank_aliases.items():
        if alias not in resolved:
            logger.info(f"'{alias}' not in trailer, {name} stays a bank object")

    symbols[placeholder] = Resolved(placeholder_offset)

    return SymbolDictionary(symbols=symbols, placeholder=placeholder)
