#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocast/source_index.py
"""Line and offset index over a source text.

The index splits the text into physical lines and keeps a prefix-sum array
of line start offsets, so that a ``(line, column)`` position maps to an
absolute offset in constant time.
"""

from __future__ import annotations

from bisect import bisect_right

from adocast.ast.nodes import Location, Position


class SourceIndex:
    """Physical lines of a text and the offset at which each one starts.

    Lines are split on ``\\n`` with the terminator removed; line numbers are
    1-based. ``chars[i]`` is the offset of the start of line ``i + 1`` and
    ``chars[-1]`` is one past the end of the text plus a virtual terminator.

    Parameters
    ----------
    text : str
        The complete source text

    Examples
    --------
        >>> index = SourceIndex("ab\\ncd")
        >>> index.lines
        ['ab', 'cd']
        >>> index.position_to_index(2, 1)
        4

    """

    __slots__ = ("text", "lines", "chars")

    def __init__(self, text: str):
        """Build the index for ``text``."""
        self.text = text
        self.lines: list[str] = text.split("\n")
        self.chars: list[int] = [0]
        for line in self.lines:
            self.chars.append(self.chars[-1] + len(line) + 1)

    def __len__(self) -> int:
        """Return the number of physical lines."""
        return len(self.lines)

    def line(self, number: int) -> str:
        """Return the text of 1-based line ``number``."""
        return self.lines[number - 1]

    def position_to_index(self, line: int, column: int) -> int:
        """Convert a 1-based line and 0-based column to an absolute offset."""
        return self.chars[line - 1] + column

    def location_to_range(self, loc: Location) -> tuple[int, int]:
        """Convert a location to its ``(start, end)`` offset pair."""
        return (
            self.position_to_index(loc.start.line, loc.start.column),
            self.position_to_index(loc.end.line, loc.end.column),
        )

    def slice(self, span: tuple[int, int]) -> str:
        """Return the source text covered by an offset pair."""
        return self.text[span[0] : span[1]]

    def index_to_position(self, offset: int) -> Position:
        """Convert an absolute offset back to a position.

        Offsets past the end of the text clamp to the end of the last line.
        """
        # chars has one entry past the last line
        low = min(max(bisect_right(self.chars, offset) - 1, 0), len(self.lines) - 1)
        column = min(offset - self.chars[low], len(self.lines[low]))
        return Position(line=low + 1, column=max(column, 0))
