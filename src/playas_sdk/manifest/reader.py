"""
Manifest Line Reader
====================

Splits manifest text into (content, line number) pairs with comments and
surrounding whitespace removed, and cuts the pairs into the named
sections the parser works on.

Manifest Layout
---------------
    DICTIONARY
        ...entries...
    END

    OBJECT POOL=0x5090,0x800
        ...labelled groups...
    END

``//`` starts a comment that runs to the end of the line. Both ``\\n``
and ``\\r\\n`` line endings are accepted.

Example
-------
>>> from playas_sdk.manifest.reader import read_lines
>>> for line in read_lines("DICTIONARY // symbols\\nEND"):
...     print(line)
SourceLine('DICTIONARY', 1)
SourceLine('END', 2)
"""

from dataclasses import dataclass
from typing import Union
import re

from playas_sdk.errors import SourceLocation, StructureNotFoundError


COMMENT = "//"
SECTION_END = "END"

_LINE_BREAK = re.compile(r"\r?\n")


@dataclass(frozen=True)
class SourceLine:
    """
    One manifest line after comment stripping.

    Attributes:
        content: Line text without comment and outer whitespace
        line: Line number in the manifest (1-indexed)
    """
    content: str
    line: int

    def __repr__(self) -> str:
        return f"SourceLine({self.content!r}, {self.line})"

    def __bool__(self) -> bool:
        return bool(self.content)


@dataclass(frozen=True)
class Section:
    """
    A keyword-delimited manifest section.

    Attributes:
        keyword: The section keyword ("DICTIONARY", "OBJECT POOL")
        header: Text following the keyword on its own line
        lines: Body lines up to, not including, the END line
    """
    keyword: str
    header: SourceLine
    lines: tuple[SourceLine, ...]


def decode_manifest(data: Union[bytes, str]) -> str:
    """Decode manifest bytes as UTF-8; strings pass through."""
    if isinstance(data, str):
        return data
    return data.decode("utf-8", errors="replace")


def strip_comment(text: str) -> str:
    """Remove a trailing ``//`` comment and outer whitespace."""
    index = text.find(COMMENT)
    if index != -1:
        text = text[:index]
    return text.strip()


def read_lines(text: str) -> list[SourceLine]:
    """Split manifest text into comment-free, stripped SourceLines."""
    return [
        SourceLine(strip_comment(raw), number)
        for number, raw in enumerate(_LINE_BREAK.split(text), start=1)
    ]


def find_section(
    lines: list[SourceLine],
    keyword: str,
    filename: str,
) -> Section:
    """
    Locate a section by its keyword.

    The section starts at the first line beginning with ``keyword`` and
    ends at the next line consisting of ``END`` alone.

    Raises:
        StructureNotFoundError: If the keyword or its END is missing
    """
    for start, line in enumerate(lines):
        if line.content.startswith(keyword):
            break
    else:
        raise StructureNotFoundError(f"could not find {keyword} in {filename}")

    keyword_line = lines[start]
    header = SourceLine(
        keyword_line.content[len(keyword):].strip(),
        keyword_line.line,
    )

    for end in range(start + 1, len(lines)):
        if lines[end].content == SECTION_END:
            return Section(keyword, header, tuple(lines[start + 1:end]))

    raise StructureNotFoundError(
        f"{keyword} has no {SECTION_END}",
        SourceLocation(filename, keyword_line.line),
    )
