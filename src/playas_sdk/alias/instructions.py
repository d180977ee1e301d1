"""
Pool Function Compiler
======================

Compiles one object pool call into F3DZEX2 display list words.

Supported Functions
-------------------
| Call                                  | Output                          |
|---------------------------------------|---------------------------------|
| ``CallList(name)``                    | ``DE 00 00 00 06 xx xx xx``     |
| ``CallMatrix(name)``                  | ``DA 38 00 00 06 xx xx xx``     |
| ``PopMatrix(n)``                      | ``D8 38 00 02 <n * 0x40>``      |
| ``Matrix(r, p, h, x, y, z, sx, sy, sz)`` | 64-byte fixed-point Mtx      |
| ``HexString(hex)``                    | the raw bytes                   |

Names resolve through the SymbolDictionary. A CallList to a bank object
(External symbol) calls the placeholder end-display-list instead.
"""

from dataclasses import dataclass
from typing import Callable
import logging
import struct

from playas_sdk.alias.matrix import mtx_f2l, rtsf
from playas_sdk.alias.symbols import External, SymbolDictionary
from playas_sdk.errors import (
    ArgumentError,
    ManifestSyntaxError,
    UnknownFunctionError,
)
from playas_sdk.zobj.records import SEGMENT_OFFSET_MASK, SEGMENT_TAG

# Logger for this module
logger = logging.getLogger(__name__)


# F3DZEX2 opcodes
G_DL = 0xDE
G_MTX = 0xDA
G_POPMTX = 0xD8

# Matrix push/load flags and the matrix stack index used by G_MTX/G_POPMTX
G_MTX_FLAGS = 0x38
G_MV_MMTX = 0x02
MTX_STACK_STRIDE = 0x40


@dataclass(frozen=True)
class Call:
    """A parsed pool call: function name and its raw arguments."""
    name: str
    args: tuple[str, ...]


def parse_call(text: str) -> Call:
    """
    Split ``Name(arg, ...)`` into a Call.

    Raises:
        ManifestSyntaxError: If the parentheses are missing or misplaced
    """
    text = text.strip()
    start = text.find("(")
    end = text.find(")")

    if (
        start == -1
        or end == -1
        or end < start
        or text.count("(") != 1
        or text.count(")") != 1
        or text[end + 1:].strip()
    ):
        raise ManifestSyntaxError(f"error parsing arguments (parentheses invalid): {text}")

    inner = text[start + 1:end].strip()
    args = tuple(arg.strip() for arg in inner.split(",")) if inner else ()
    return Call(text[:start].strip(), args)


def _check_arity(call: Call, count: int) -> None:
    if len(call.args) != count:
        raise ArgumentError(
            f"invalid number of arguments to {call.name}: "
            f"expected {count}, got {len(call.args)}"
        )


def _segmented(offset: int, name: str) -> int:
    """Tag an asset offset with segment 6."""
    if offset < 0 or offset > SEGMENT_OFFSET_MASK:
        raise ArgumentError(f"offset 0x{offset:X} of '{name}' does not fit in segment 6")
    return SEGMENT_TAG + offset


# =============================================================================
# Function Handlers
# =============================================================================

def _call_list(call: Call, dictionary: SymbolDictionary) -> bytes:
    _check_arity(call, 1)
    name = call.args[0]
    address = _segmented(dictionary.resolve(name), name)
    return struct.pack(">B3xI", G_DL, address)


def _call_matrix(call: Call, dictionary: SymbolDictionary) -> bytes:
    _check_arity(call, 1)
    name = call.args[0]
    value = dictionary.lookup(name)
    if isinstance(value, External):
        raise ArgumentError(f"'{name}' is a bank object and cannot be used as a matrix")
    address = _segmented(value.offset, name)
    return struct.pack(">BB2xI", G_MTX, G_MTX_FLAGS, address)


def _pop_matrix(call: Call, dictionary: SymbolDictionary) -> bytes:
    _check_arity(call, 1)
    arg = call.args[0]
    try:
        if arg.lower().startswith("0x"):
            count = int(arg, 16)
        else:
            count = int(arg, 10)
    except ValueError:
        raise ArgumentError(f"invalid argument to PopMatrix: '{arg}'") from None

    size = count * MTX_STACK_STRIDE
    if count < 0 or size > 0xFFFFFFFF:
        raise ArgumentError(f"invalid argument to PopMatrix: '{arg}'")

    return struct.pack(">BBBBI", G_POPMTX, G_MTX_FLAGS, 0x00, G_MV_MMTX, size)


def _matrix(call: Call, dictionary: SymbolDictionary) -> bytes:
    _check_arity(call, 9)
    try:
        values = [float(arg) for arg in call.args]
        return mtx_f2l(rtsf(*values))
    except ValueError as e:
        logger.error(f"Matrix{call.args}: {e}")
        raise ArgumentError(f"invalid argument to Matrix: {e}") from None


def _hex_string(call: Call, dictionary: SymbolDictionary) -> bytes:
    _check_arity(call, 1)
    try:
        return bytes.fromhex(call.args[0])
    except ValueError:
        raise ArgumentError(f"invalid hex string: {call.args[0]}") from None


FUNCTIONS: dict[str, Callable[[Call, SymbolDictionary], bytes]] = {
    "CallList": _call_list,
    "CallMatrix": _call_matrix,
    "PopMatrix": _pop_matrix,
    "Matrix": _matrix,
    "HexString": _hex_string,
}


def compile_call(call: Call, dictionary: SymbolDictionary) -> bytes:
    """
    Compile a parsed call into its binary encoding.

    Raises:
        UnknownFunctionError: If the function name is not supported
        ArgumentError: On a wrong argument count or invalid argument
        UndefinedSymbolError: If a referenced name is not in the dictionary
    """
    handler = FUNCTIONS.get(call.name)
    if handler is None:
        raise UnknownFunctionError(call.name)

    data = handler(call, dictionary)
    logger.debug(f"{call.name}({', '.join(call.args)}) -> {data.hex().upper()}")
    return data


def compile_instruction(text: str, dictionary: SymbolDictionary) -> bytes:
    """Parse and compile a single pool call given as text."""
    return compile_call(parse_call(text), dictionary)
