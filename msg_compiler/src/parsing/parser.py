"""Parser entry point for ROS 2 interface files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from lark import Lark
from lark.exceptions import (
    UnexpectedCharacters,
    UnexpectedEOF,
    UnexpectedInput,
    UnexpectedToken,
)
from lark.lexer import PatternStr

from msg_compiler.src.ast.declarations import Declaration, ServiceDecl
from msg_compiler.src.common.source_location import SourceLocation
from .exceptions import IDLSyntaxError
from .transformer import IDLTransformer

logger = logging.getLogger(__name__)

# Readable names for the named terminals of the grammar
TERMINAL_DESCRIPTIONS = {
    "NAME": "identifier",
    "UINT": "unsigned integer",
    "NUMBER": "number",
    "QUOTED": "quoted string",
    "COMMENT": "comment",
    "SEPARATOR": '"---"',
    "_NL": "end of line",
    "$END": "end of input",
}


class IDLParser:
    """Main parser class for .msg and .srv files."""

    def __init__(self, grammar_path: Optional[Path] = None):
        """Initialize parser with grammar file."""
        if grammar_path is None:
            grammar_path = (
                Path(__file__).resolve().parent.parent.parent / "grammar" / "ros2msg.lark"
            )

        self.grammar_path = grammar_path
        self.parser = None
        self._load_grammar()

    def _load_grammar(self) -> None:
        """Load and compile the Lark grammar."""
        try:
            with open(self.grammar_path, "r", encoding="utf-8") as handle:
                grammar_text = handle.read()
        except FileNotFoundError as exc:
            raise FileNotFoundError(
                f"Grammar file not found: {self.grammar_path}"
            ) from exc

        self.parser = Lark(
            grammar_text,
            parser="lalr",
            lexer="contextual",
            start=["msg", "srv"],
            propagate_positions=True,
            maybe_placeholders=False,
        )

    def parse_msg(self, source_code: str, filename: str = "<string>") -> List[Declaration]:
        """Parse the text of a .msg file into its declarations, in source order.

        Raises:
            IDLSyntaxError: If the source does not match the grammar
        """
        return self._parse(source_code, "msg", filename)

    def parse_srv(self, source_code: str, filename: str = "<string>") -> ServiceDecl:
        """Parse the text of a .srv file into request and response declarations.

        Raises:
            IDLSyntaxError: If the source does not match the grammar, including
                a missing '---' separator
        """
        return self._parse(source_code, "srv", filename)

    def parse_file(self, file_path: Path) -> Union[List[Declaration], ServiceDecl]:
        """Parse a .msg or .srv file, chosen by its suffix."""
        file_path = Path(file_path)
        source_code = file_path.read_text(encoding="utf-8")
        if file_path.suffix == ".srv":
            return self.parse_srv(source_code, str(file_path))
        return self.parse_msg(source_code, str(file_path))

    def _parse(self, source_code: str, start: str, filename: str):
        if self.parser is None:
            raise RuntimeError("Parser not initialized")

        # Every line, including the last one, must end with a newline
        text = source_code if source_code.endswith("\n") else source_code + "\n"
        try:
            tree = self.parser.parse(text, start=start)
        except UnexpectedInput as exc:
            raise self._syntax_error(exc, source_code, filename) from exc

        logger.debug("parsed %s as %s", filename, start)
        return IDLTransformer(source_file=filename).transform(tree)

    def _syntax_error(
        self, exc: UnexpectedInput, source_code: str, filename: str
    ) -> IDLSyntaxError:
        """Convert a lark error into an IDLSyntaxError at the failing offset."""
        if isinstance(exc, UnexpectedToken):
            if exc.token.type == "$END":
                offset = len(source_code)
                found = "end of input"
            else:
                offset = exc.token.start_pos
                found = self._describe_found(exc.token.type, exc.token.value)
            expected = exc.expected
        elif isinstance(exc, UnexpectedCharacters):
            offset = exc.pos_in_stream
            found = f"character {source_code[offset:offset + 1]!r}"
            expected = exc.allowed or set()
        elif isinstance(exc, UnexpectedEOF):
            offset = len(source_code)
            found = "end of input"
            expected = exc.expected
        else:  # pragma: no cover - lark has no other UnexpectedInput kinds
            raise exc

        offset = min(offset, len(source_code))
        location = SourceLocation.from_offset(
            source_code, offset, None if filename == "<string>" else filename
        )
        alternatives = sorted({self._describe_terminal(name) for name in expected})
        message = f"Unexpected {found}"
        if alternatives:
            message += f"; expected one of: {', '.join(alternatives)}"
        return IDLSyntaxError(message, location, alternatives, source_code)

    def _describe_found(self, terminal: str, value: str) -> str:
        if terminal == "_NL":
            return "end of line"
        return f"{self._describe_terminal(terminal)} {value!r}"

    def _describe_terminal(self, name: str) -> str:
        if name in TERMINAL_DESCRIPTIONS:
            return TERMINAL_DESCRIPTIONS[name]
        try:
            terminal = self.parser.get_terminal(name)
        except KeyError:
            return name
        if isinstance(terminal.pattern, PatternStr):
            return f'"{terminal.pattern.value}"'
        return name.lower()
