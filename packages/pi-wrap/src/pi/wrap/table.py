"""Visual line table and offset resolution.

The table stores one ``(offset, length)`` pair per visual line.  During a
wrap pass some slots hold :data:`RESERVED` while they wait to be refilled;
``count`` only counts real entries, so the backing list can be longer than
``count`` and may contain a block of reserved slots between real entries.
"""

from __future__ import annotations

from typing import Iterator, NamedTuple


class VisualLine(NamedTuple):
    """A wrapped segment ``[offset, offset + length)`` of one logical line."""

    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


RESERVED = VisualLine(-1, -1)


class VisualLineTable:
    """Growable list of visual lines with binary-search offset lookup."""

    def __init__(self, capacity: int = 0) -> None:
        self._lines: list[VisualLine] = [RESERVED] * capacity
        self.count = 0

    # -- storage ---------------------------------------------------------

    @property
    def capacity(self) -> int:
        return len(self._lines)

    def clear(self, capacity: int = 0) -> None:
        """Drop every entry and allocate *capacity* reserved slots."""
        self._lines = [RESERVED] * capacity
        self.count = 0

    def ensure_size(self, size: int) -> None:
        """Grow the backing list to hold at least *size* slots, doubling when it grows."""
        current = len(self._lines)
        if current >= size:
            return
        self._lines.extend([RESERVED] * (max(current * 2, size) - current))

    def reserve(self, start: int, line_count: int) -> None:
        """Mark ``line_count`` slots from *start* as reserved.  Does not change ``count``."""
        end = min(start + line_count, len(self._lines))
        for i in range(start, end):
            self._lines[i] = RESERVED

    def invalidate(self, start: int, line_count: int) -> None:
        """Reserve ``line_count`` real entries from *start* so a wrap pass can refill them."""
        self.reserve(start, line_count)
        self.count -= line_count

    def is_reserved(self, index: int) -> bool:
        return self._lines[index] == RESERVED

    def put(self, index: int, offset: int, length: int) -> None:
        """Store a visual line at *index* and count it.

        If the slot is not reserved, the logical line being wrapped needs more
        visual lines than it had before and the following entries move down
        by one to make room.
        """
        self.ensure_size(self.count + 1)
        if self._lines[index] != RESERVED:
            self._lines[index + 1 : self.count + 1] = self._lines[index : self.count]
        self._lines[index] = VisualLine(offset, length)
        self.count += 1

    def compact(self, index: int) -> int:
        """Close a run of reserved slots starting at *index*.

        A logical line that now needs fewer visual lines than before leaves
        reserved slots behind; the real entries after them move up.  Returns
        the number of slots removed.
        """
        empty = 0
        for i in range(index, len(self._lines)):
            if self._lines[i] != RESERVED:
                break
            empty += 1
        if empty > 0:
            copy_count = self.count - index
            self._lines[index : index + copy_count] = self._lines[index + empty : index + empty + copy_count]
            self.reserve(index + copy_count, empty)
        return empty

    def shift(self, start: int, delta: int) -> None:
        """Move the offsets of entries ``start..count-1`` by *delta*."""
        if delta == 0:
            return
        for i in range(start, self.count):
            line = self._lines[i]
            self._lines[i] = VisualLine(line.offset + delta, line.length)

    # -- queries ---------------------------------------------------------

    def __len__(self) -> int:
        return self.count

    def __getitem__(self, index: int) -> VisualLine:
        if index < 0 or index >= self.count:
            raise ValueError(f"Visual line index {index} out of range (0..{self.count - 1})")
        line = self._lines[index]
        if line == RESERVED:
            raise RuntimeError(f"Visual line {index} read while reserved")
        return line

    def __iter__(self) -> Iterator[VisualLine]:
        for i in range(self.count):
            yield self[i]

    def line_at_offset(self, offset: int) -> int:
        """Return the index of the visual line containing *offset*.

        An offset that ends one visual line and starts the next resolves to
        the earlier line.  The offset right after the last visual line
        resolves to the last line so text can be appended.
        """
        if self.count == 0:
            raise ValueError("Visual line table is empty")
        last_line = self.count - 1
        last_char = self[last_line].end
        if offset < 0 or offset > last_char:
            raise ValueError(f"Offset {offset} out of range (0..{last_char})")
        if offset == last_char:
            return last_line

        high = self.count
        low = -1
        while high - low > 1:
            index = (high + low) // 2
            line = self._lines[index]
            if offset >= line.offset:
                low = index
                if offset <= line.end:
                    break
            else:
                high = index

        if low > 0 and offset == self._lines[low - 1].end:
            low -= 1
        return low

    def validate(self) -> None:
        """Raise ``RuntimeError`` if the real entries break the table invariants."""
        previous: VisualLine | None = None
        for i in range(self.count):
            line = self._lines[i]
            if line == RESERVED:
                raise RuntimeError(f"Reserved entry at visual line {i} after wrap pass")
            if line.length < 0 or line.offset < 0:
                raise RuntimeError(f"Invalid visual line {i}: {line}")
            if previous is not None and line.offset < previous.end:
                raise RuntimeError(f"Visual line {i} {line} overlaps {previous}")
            previous = line
