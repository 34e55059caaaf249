"""
Single-file compilation: parse, resolve and emit one interface file.

These functions never touch the filesystem. The caller supplies the text of
the file together with its package and type name and receives the generated
lines, the external packages the file depends on, and the diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional

from msg_compiler.src.common.constants import (
    DEFAULT_CONFIG,
    MSG_CATEGORY,
    SRV_CATEGORY,
    CompilerConfig,
)
from msg_compiler.src.common.diagnostics import ProgramDiagnostics
from msg_compiler.src.emission.emitter import CodeEmitter
from msg_compiler.src.parsing.parser import IDLParser
from msg_compiler.src.semantic.type_resolver import TypeResolver

_parser: Optional[IDLParser] = None


def get_parser() -> IDLParser:
    """Return the process-wide parser; building the LALR tables is not free."""
    global _parser
    if _parser is None:
        _parser = IDLParser()
    return _parser


@dataclass
class CompilationResult:
    """Output of compiling one .msg or .srv file."""

    lines: List[str]
    dependencies: FrozenSet[str] = frozenset()
    diagnostics: ProgramDiagnostics = field(default_factory=ProgramDiagnostics)

    @property
    def warnings(self) -> List[str]:
        return self.diagnostics.warnings()

    def text(self) -> str:
        return "\n".join(self.lines) + "\n"


def compile_msg_source(
    source: str,
    package: str,
    type_name: str,
    config: CompilerConfig = DEFAULT_CONFIG,
    source_name: str = "<string>",
    diagnostics: Optional[ProgramDiagnostics] = None,
) -> CompilationResult:
    """Compile the text of ``package/msg/type_name.msg``.

    Raises:
        IDLSyntaxError: If the text does not match the grammar
        TypeResolutionError: If a type or constant has no Rust mapping
    """
    diagnostics = diagnostics or ProgramDiagnostics()
    declarations = get_parser().parse_msg(source, source_name)

    resolver = TypeResolver(package, MSG_CATEGORY, diagnostics)
    emitter = CodeEmitter(diagnostics, config)
    lines = emitter.emit_message(declarations, package, type_name, resolver)
    return CompilationResult(lines, frozenset(resolver.dependencies), diagnostics)


def compile_srv_source(
    source: str,
    package: str,
    type_name: str,
    config: CompilerConfig = DEFAULT_CONFIG,
    source_name: str = "<string>",
    diagnostics: Optional[ProgramDiagnostics] = None,
) -> CompilationResult:
    """Compile the text of ``package/srv/type_name.srv``.

    Raises:
        IDLSyntaxError: If the text does not match the grammar
        TypeResolutionError: If a type or constant has no Rust mapping
    """
    diagnostics = diagnostics or ProgramDiagnostics()
    service = get_parser().parse_srv(source, source_name)

    resolver = TypeResolver(package, SRV_CATEGORY, diagnostics)
    emitter = CodeEmitter(diagnostics, config)
    lines = emitter.emit_service(service, package, type_name, resolver)
    return CompilationResult(lines, frozenset(resolver.dependencies), diagnostics)


def compile_source(
    source: str,
    package: str,
    type_name: str,
    category: str,
    config: CompilerConfig = DEFAULT_CONFIG,
    source_name: str = "<string>",
    diagnostics: Optional[ProgramDiagnostics] = None,
) -> CompilationResult:
    """Dispatch to compile_msg_source or compile_srv_source by category."""
    if category == MSG_CATEGORY:
        compile_fn = compile_msg_source
    elif category == SRV_CATEGORY:
        compile_fn = compile_srv_source
    else:
        raise ValueError(f"Unknown source category: {category!r}")
    return compile_fn(source, package, type_name, config, source_name, diagnostics)
