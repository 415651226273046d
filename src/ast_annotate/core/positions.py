import bisect


class LineAndColumnMap:
    """Maps 0-based (line, column) pairs to absolute offsets into ``source``.

    Line starts are recorded once up front, so each lookup is a list index
    for offsets and a binary search for locations.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.offsets = [0]
        pos = source.find("\n")
        while pos != -1:
            self.offsets.append(pos + 1)
            pos = source.find("\n", pos + 1)

    def get_offset(self, line: int, column: int) -> int:
        return self.offsets[line] + column

    def get_location(self, offset: int) -> tuple[int, int]:
        """Convert an offset back to a 0-based ``(line, column)`` tuple."""
        if offset < 0 or offset > len(self.source):
            raise ValueError(f"Offset {offset} out of bounds (0-{len(self.source)})")
        line = bisect.bisect_right(self.offsets, offset) - 1
        return line, offset - self.offsets[line]
