"""Parse tree transformer producing AST nodes."""

from __future__ import annotations

import re
from typing import List, NamedTuple, Optional

from lark import Token, Transformer, v_args

from msg_compiler.src.ast.declarations import (
    ConstantDecl,
    Declaration,
    FieldDecl,
    ServiceDecl,
)
from msg_compiler.src.ast.literals import (
    ArrayLiteral,
    BoolLiteral,
    FloatLiteral,
    IntLiteral,
    Literal,
    StringLiteral,
    UIntLiteral,
)
from msg_compiler.src.ast.types import (
    ArrayShape,
    NamedType,
    PrimitiveType,
    ScopedType,
    StringType,
    TypeAnnotation,
)
from msg_compiler.src.common.constants import PRIMITIVE_ALIASES

_ESCAPES = {"\\": "\\", '"': '"', "'": "'", "r": "\r", "n": "\n", "t": "\t"}
_ESCAPE_PATTERN = re.compile(r"\\(.)")


def decode_string_literal(raw: str) -> str:
    """Strip the quotes of a QUOTED token and decode its escapes.

    The lexer only admits \\\\, \\r, \\n, \\t and an escaped quote matching
    the opening one, so every escape found here is known.
    """
    return _ESCAPE_PATTERN.sub(lambda match: _ESCAPES[match.group(1)], raw[1:-1])


class _ValueSpec(NamedTuple):
    is_constant: bool
    literal: Literal


class IDLTransformer(Transformer):
    """Transforms Lark parse tree into typed AST nodes."""

    def __init__(self, source_file: Optional[str] = None):
        super().__init__()
        self.source_file = source_file

    @staticmethod
    def _set_position(node, token):
        if isinstance(token, Token):
            node.line = token.line
            node.column = token.column
            node.offset = token.start_pos
        return node

    # ------------------------------------------------------------------
    # Files and lines
    # ------------------------------------------------------------------

    def msg(self, items) -> List[Declaration]:
        """msg: line*"""
        return [item for item in items if isinstance(item, Declaration)]

    def srv(self, items) -> ServiceDecl:
        """srv: line* SEPARATOR COMMENT? _NL line*"""
        split = next(
            index
            for index, item in enumerate(items)
            if isinstance(item, Token) and item.type == "SEPARATOR"
        )
        request = [item for item in items[:split] if isinstance(item, Declaration)]
        response = [
            item for item in items[split + 1 :] if isinstance(item, Declaration)
        ]
        return self._set_position(ServiceDecl(request, response), items[split])

    def line(self, items) -> Optional[Declaration]:
        """line: var_decl? COMMENT? _NL

        Empty and comment-only lines produce None and are dropped by msg/srv.
        """
        decl = None
        comment = None
        for item in items:
            if isinstance(item, Declaration):
                decl = item
            elif isinstance(item, Token) and item.type == "COMMENT":
                comment = item.value[1:]
        if decl is not None:
            decl.comment = comment
        return decl

    @v_args(meta=True)
    def var_decl(self, meta, items) -> Declaration:
        """var_decl: type_name NAME (const_value | default_value)?"""
        type_name: TypeAnnotation = items[0]
        name = str(items[1])
        spec: Optional[_ValueSpec] = items[2] if len(items) > 2 else None

        if spec is not None and spec.is_constant:
            decl: Declaration = ConstantDecl(type_name, name, spec.literal)
        else:
            decl = FieldDecl(type_name, name, default=spec.literal if spec else None)

        decl.line = meta.line
        decl.column = meta.column
        decl.offset = meta.start_pos
        decl.source_file = self.source_file
        type_name.source_file = self.source_file
        return decl

    def const_value(self, items) -> _ValueSpec:
        """const_value: "=" value"""
        return _ValueSpec(True, items[0])

    def default_value(self, items) -> _ValueSpec:
        """default_value: value"""
        return _ValueSpec(False, items[0])

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    @v_args(meta=True)
    def string_type(self, meta, items) -> StringType:
        """string_type: "string" string_bound? array_suffix?"""
        bound = 0
        shape = None
        for item in items:
            if isinstance(item, ArrayShape):
                shape = item
            else:
                bound = item
        node = StringType(bound=bound, shape=shape, line=meta.line, column=meta.column)
        node.offset = meta.start_pos
        return node

    def string_bound(self, items) -> int:
        """string_bound: "<=" UINT"""
        return int(items[0])

    def scoped_type(self, items) -> ScopedType:
        """scoped_type: NAME "/" NAME array_suffix?"""
        shape = items[2] if len(items) > 2 else None
        node = ScopedType(scope=str(items[0]), name=str(items[1]), shape=shape)
        return self._set_position(node, items[0])

    def named_type(self, items) -> TypeAnnotation:
        """named_type: NAME array_suffix?"""
        name = str(items[0])
        shape = items[1] if len(items) > 1 else None
        if name in PRIMITIVE_ALIASES:
            node: TypeAnnotation = PrimitiveType(PRIMITIVE_ALIASES[name], shape=shape)
        else:
            node = NamedType(name, shape=shape)
        return self._set_position(node, items[0])

    def unbounded_array(self, items) -> ArrayShape:
        """unbounded_array: "[" "]" """
        return ArrayShape.unbounded()

    def fixed_array(self, items) -> ArrayShape:
        """fixed_array: "[" UINT "]" """
        return ArrayShape.fixed(int(items[0]))

    def bounded_array(self, items) -> ArrayShape:
        """bounded_array: "[" "<=" UINT "]" """
        return ArrayShape.bounded(int(items[0]))

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def true_value(self, items) -> BoolLiteral:
        return BoolLiteral(True, raw_text="true")

    def false_value(self, items) -> BoolLiteral:
        return BoolLiteral(False, raw_text="false")

    def number(self, items) -> Literal:
        """NUMBER: unsigned unless prefixed with '-', float iff it has a '.'"""
        token = items[0]
        text = token.value
        if "." in text:
            node: Literal = FloatLiteral(float(text), raw_text=text)
        elif text.startswith("-"):
            node = IntLiteral(int(text), raw_text=text)
        else:
            node = UIntLiteral(int(text), raw_text=text)
        return self._set_position(node, token)

    def quoted(self, items) -> StringLiteral:
        token = items[0]
        node = StringLiteral(decode_string_literal(token.value), raw_text=token.value)
        return self._set_position(node, token)

    def array_value(self, items) -> ArrayLiteral:
        """"[" value ("," value)* "]" """
        return ArrayLiteral(list(items))
