from typing import List, Optional

from msg_compiler.src.common.source_location import SourceLocation

"""Parsing exceptions."""


class IDLSyntaxError(SyntaxError):
    """Grammar mismatch in an interface file.

    ``location.offset`` is the index of the first character the parser could
    not consume and ``expected`` lists the alternatives it would have accepted
    there. ``render()`` points at the offending character in the source.

    The inherited ``lineno`` and ``offset`` keep the SyntaxError convention,
    so ``offset`` is the 1-based column. Use ``position`` for the 0-based
    index.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        expected: Optional[List[str]] = None,
        source: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = location
        self.expected = list(expected or [])
        self.source = source
        # Standard SyntaxError fields, so tracebacks show the IDL line
        self.filename = location.file
        self.lineno = location.line
        self.offset = location.column
        self.text = self._line_text()

    @property
    def position(self) -> int:
        """0-based character offset of the failure within the source."""
        return self.location.offset

    @property
    def byte_offset(self) -> int:
        """Offset of the failure within the UTF-8 encoded source."""
        return self.location.byte_offset(self.source)

    def _line_text(self) -> str:
        start = self.source.rfind("\n", 0, self.location.offset) + 1
        end = self.source.find("\n", self.location.offset)
        return self.source[start : end if end != -1 else len(self.source)]

    @property
    def source_name(self) -> Optional[str]:
        return self.location.file

    def render(self, source: Optional[str] = None) -> str:
        """Format the error with a caret under the offending character."""
        header = f"{self.location}: {self.message}"
        pointer = self.location.render_pointer(self.source if source is None else source)
        return f"{header}\n{pointer}"

    def __str__(self) -> str:
        return f"{self.message} at {self.location}"
