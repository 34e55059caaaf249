from dataclasses import dataclass
from pathlib import Path
from typing import Optional

"""Source location utilities for tracking code positions."""


@dataclass(frozen=True)
class SourceLocation:
    """Represents a location in source code.

    ``offset`` is the 0-based character index into the source text; ``line``
    and ``column`` are 1-based.
    """

    file: Optional[str] = None
    line: int = 0
    column: int = 0
    offset: int = 0

    def __str__(self) -> str:
        """Format as file:line:col."""
        parts = []
        if self.file:
            parts.append(Path(self.file).name)
        if self.line > 0:
            parts.append(str(self.line))
            if self.column > 0:
                parts.append(str(self.column))
        return ":".join(parts) if parts else "unknown"

    @classmethod
    def from_offset(
        cls, source: str, offset: int, file: Optional[str] = None
    ) -> "SourceLocation":
        """Compute line and column of a character offset within ``source``."""
        offset = max(0, min(offset, len(source)))
        line = source.count("\n", 0, offset) + 1
        line_start = source.rfind("\n", 0, offset) + 1
        return cls(file=file, line=line, column=offset - line_start + 1, offset=offset)

    def byte_offset(self, source: str) -> int:
        """Offset of this location in the UTF-8 encoding of ``source``."""
        return len(source[: self.offset].encode("utf-8"))

    def render_pointer(self, source: str) -> str:
        """Return the source line holding this location with a caret under it."""
        line_start = source.rfind("\n", 0, self.offset) + 1
        line_end = source.find("\n", self.offset)
        if line_end == -1:
            line_end = len(source)
        text = source[line_start:line_end].rstrip("\r")
        caret = " " * (self.offset - line_start) + "^"
        prefix = f"{self.line} | "
        return f"{prefix}{text}\n{' ' * len(prefix)}{caret}"
