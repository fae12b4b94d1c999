#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocast/location.py
"""Recover exact source locations for text reported by the document reader.

The reader only knows on which line a block roughly starts, and it reports
text with markup and comment lines already removed. ``LocationFinder`` takes
the text lines a node is expected to consist of and scans a bounded window of
physical lines for the first place where all of them occur in sequence.

Matching policy
---------------
- The first (lowest) candidate start line wins. Callers are responsible for
  passing a window tight enough to avoid earlier, unrelated occurrences of the
  same text.
- Each expected line must occur as a substring of its physical line. On the
  first expected line the search starts at ``start_idx``; this keeps a table
  cell from matching inside the cell to its left.
- When comment skipping is on, physical lines starting with the comment
  marker are stepped over. The shift accumulates across one candidate, so a
  comment line in the middle of a paragraph moves all later lines down.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from adocast.ast.nodes import Location, Position
from adocast.constants import DEFAULT_COMMENT_MARKER
from adocast.options.base import CloneFrozenMixin
from adocast.source_index import SourceIndex


@dataclass(frozen=True)
class SearchWindow(CloneFrozenMixin):
    """Bounds of a location search.

    Parameters
    ----------
    min_line : int
        First physical line (1-based) a match may start on
    max_line : int
        Last physical line (1-based, inclusive) a match may start on, counted
        so that all expected lines fit before it
    skip_comments : bool, default = True
        Step over comment lines while aligning expected lines
    start_idx : int, default = 0
        Column at which the search for the first expected line begins

    """

    min_line: int
    max_line: int
    skip_comments: bool = True
    start_idx: int = 0

    def narrowed(self, min_line: Optional[int] = None, max_line: Optional[int] = None) -> SearchWindow:
        """Return a copy with the given bounds replaced; None keeps a bound."""
        return self.create_updated(
            min_line=self.min_line if min_line is None else min_line,
            max_line=self.max_line if max_line is None else max_line,
        )


class LocationFinder:
    """Locate expected text lines within a source index.

    Parameters
    ----------
    index : SourceIndex
        Index of the document being converted
    comment_marker : str, default = "//"
        Prefix of lines treated as comments when skipping is enabled

    """

    def __init__(self, index: SourceIndex, comment_marker: str = DEFAULT_COMMENT_MARKER):
        """Create a finder over ``index``."""
        self.index = index
        self.comment_marker = comment_marker

    def is_comment(self, line: str) -> bool:
        """Return True if the physical line is a comment line."""
        return line.startswith(self.comment_marker)

    def find_location(self, expected_lines: Sequence[str], window: SearchWindow) -> Optional[Location]:
        """Find the first place in ``window`` where all expected lines occur.

        Parameters
        ----------
        expected_lines : sequence of str
            Text of consecutive lines, as reported by the reader
        window : SearchWindow
            Bounds and flags for the search

        Returns
        -------
        Location or None
            The span from the first expected line's match to the end of the
            last expected line's match, or None when no candidate matches

        """
        if not expected_lines:
            return None

        count = len(expected_lines)
        first = max(window.min_line, 1)
        last = min(window.max_line, len(self.index)) - count + 1
        for candidate in range(first, last + 1):
            location = self._match_at(candidate, expected_lines, window)
            if location is not None:
                return location
        return None

    def _match_at(self, candidate: int, expected_lines: Sequence[str], window: SearchWindow) -> Optional[Location]:
        total = len(self.index)
        offset = 0
        start: Optional[Position] = None
        end_line = candidate
        end_column = 0

        for position, text in enumerate(expected_lines):
            line_number = candidate + position + offset
            if window.skip_comments:
                while line_number <= total and self.is_comment(self.index.line(line_number)):
                    offset += 1
                    line_number += 1
            if line_number > total:
                return None

            column = self.index.line(line_number).find(text, window.start_idx if position == 0 else 0)
            if column == -1:
                return None

            # Comment lines skipped before the first match stay outside the span.
            if position == 0:
                start_column = 0 if text.startswith(self.comment_marker) else column
                start = Position(line=line_number, column=start_column)
            end_line = line_number
            end_column = column + len(text)

        if start is None:
            return None
        return Location(start=start, end=Position(line=end_line, column=end_column))
