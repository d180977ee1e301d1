"""
PlayAs SDK Error Hierarchy
==========================

This module defines the exception hierarchy for the whole SDK. All
exceptions inherit from PlayAsError, so callers can catch every build
failure with a single except clause, or branch on ``error.kind`` when
they need to tell failures apart without parsing messages.

Exception Hierarchy
-------------------
PlayAsError (base)
├── StructureNotFoundError - trailer, section, END or hierarchy missing
├── ManifestSyntaxError    - malformed manifest text
├── UndefinedSymbolError   - dictionary lookup miss
├── ArgumentError          - wrong argument count or invalid argument
├── UnknownFunctionError   - unknown pool function name
├── PoolOverflowError      - alias table does not fit its pool
└── DuplicateSymbolError   - pool label already in the dictionary

Error messages follow this format:
    manifest.txt:15: error: description
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# =============================================================================
# Error Kinds
# =============================================================================

class ErrorKind(Enum):
    """Closed set of failure categories a build can end in."""
    MISSING_STRUCTURE = "missing structure"
    MALFORMED_SYNTAX = "malformed syntax"
    UNRESOLVED_SYMBOL = "unresolved symbol"
    INVALID_ARGUMENT = "invalid argument"
    UNKNOWN_OPCODE = "unknown opcode"
    CAPACITY = "capacity"
    DUPLICATE_DEFINITION = "duplicate definition"


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A line in a manifest file.

    Attributes:
        filename: Name of the manifest (or "<manifest>" for in-memory text)
        line: Line number (1-indexed)
    """
    filename: str
    line: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}"


# =============================================================================
# Base Exception Class
# =============================================================================

class PlayAsError(Exception):
    """
    Base exception for all PlayAs SDK errors.

    Attributes:
        message: The error description
        location: Manifest line the error refers to (optional)
        kind: The ErrorKind of the concrete subclass
    """

    kind: ErrorKind = ErrorKind.MALFORMED_SYNTAX

    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        self.message = message
        self.location = location
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.location:
            return f"{self.location}: error: {self.message}"
        return f"error: {self.message}"

    def with_location(self, location: SourceLocation) -> "PlayAsError":
        """
        Attach a manifest location to an error raised without one.

        The instruction compiler works on single calls and knows nothing
        about lines; the table builder uses this to add the line number
        before re-raising. An existing location is kept.
        """
        if self.location is None:
            self.location = location
            self.args = (self._format_message(),)
        return self


# =============================================================================
# Concrete Exceptions
# =============================================================================

class StructureNotFoundError(PlayAsError):
    """
    A required structure is missing.

    Raised when the asset has no PlayAs trailer or no skeleton hierarchy,
    or when the manifest lacks its DICTIONARY, OBJECT POOL or END markers.
    """
    kind = ErrorKind.MISSING_STRUCTURE


class ManifestSyntaxError(PlayAsError):
    """
    Malformed manifest text.

    Examples:
        - Dictionary entry with the wrong number of tokens
        - Bank alias with the wrong number of quote characters
        - Unparsable OBJECT POOL declaration
        - Unparsable hex offset
    """
    kind = ErrorKind.MALFORMED_SYNTAX


class UndefinedSymbolError(PlayAsError):
    """Reference to a name the dictionary does not contain."""
    kind = ErrorKind.UNRESOLVED_SYMBOL

    def __init__(self, symbol: str, location: Optional[SourceLocation] = None):
        self.symbol = symbol
        super().__init__(f"dictionary entry not found: {symbol}", location)


class ArgumentError(PlayAsError):
    """
    Wrong argument count or invalid argument value for a pool function.

    Examples:
        PopMatrix(one)        ; not an integer
        CallList(a, b)        ; too many arguments
        HexString(XYZ)        ; not hex
    """
    kind = ErrorKind.INVALID_ARGUMENT


class UnknownFunctionError(PlayAsError):
    """A pool call names a function the compiler does not know."""
    kind = ErrorKind.UNKNOWN_OPCODE

    def __init__(self, name: str, location: Optional[SourceLocation] = None):
        self.name = name
        super().__init__(f"unknown function name '{name}'", location)


class PoolOverflowError(PlayAsError):
    """
    The alias table does not fit.

    Raised when the assembled table is larger than the budget declared in
    the OBJECT POOL header, or when the pool region runs past the end of
    the asset it is written into.
    """
    kind = ErrorKind.CAPACITY

    def __init__(self, message: str, size: int, budget: int):
        self.size = size
        self.budget = budget
        super().__init__(message)


class DuplicateSymbolError(PlayAsError):
    """A pool label is already defined in the dictionary."""
    kind = ErrorKind.DUPLICATE_DEFINITION

    def __init__(self, symbol: str, location: Optional[SourceLocation] = None):
        self.symbol = symbol
        super().__init__(f"duplicate dictionary entry '{symbol}'", location)
