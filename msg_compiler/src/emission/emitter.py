"""
Rust emission for .msg and .srv files.

This module turns parsed declarations into the lines of one generated Rust
file targeting the safe_drive crate. Types are resolved inline while the
declarations are visited, so parsing is followed by a single pass.
"""

from __future__ import annotations

from typing import List, Sequence

from msg_compiler.src.ast.declarations import Declaration, ServiceDecl
from msg_compiler.src.common.constants import (
    DEFAULT_CONFIG,
    GENERATED_BANNER,
    MSG_CATEGORY,
    SRV_CATEGORY,
    CompilerConfig,
)
from msg_compiler.src.common.diagnostics import ProgramDiagnostics
from msg_compiler.src.semantic.type_resolver import TypeResolver
from .naming import RecordNames, service_type_support_function
from .record import RecordEmitter


class CodeEmitter:
    """Render message and service files."""

    def __init__(
        self,
        diagnostics: ProgramDiagnostics,
        config: CompilerConfig = DEFAULT_CONFIG,
    ) -> None:
        self.diagnostics = diagnostics
        self.config = config

    def preamble(self) -> List[str]:
        """Banner and `use` lines at the top of every generated file."""
        safe_drive = self.config.safe_drive_path
        lines = [
            GENERATED_BANNER,
            "",
            "use super::*;",
            "use super::super::super::*;",
            f"use {safe_drive}::msg::*;",
            f"use {safe_drive}::rcl::{{self, size_t}};",
        ]
        if not self.config.disable_common_interfaces:
            lines.append(f"use {safe_drive}::msg::common_interfaces::*;")
        lines.append("")
        return lines

    def emit_record(
        self,
        declarations: Sequence[Declaration],
        names: RecordNames,
        resolver: TypeResolver,
    ) -> List[str]:
        """Render one record; shared by messages and both halves of services."""
        return RecordEmitter(names, resolver, self.diagnostics).emit(declarations)

    def emit_message(
        self,
        declarations: Sequence[Declaration],
        package: str,
        type_name: str,
        resolver: TypeResolver,
    ) -> List[str]:
        """Render the file of message ``package/msg/type_name``."""
        names = RecordNames(package, MSG_CATEGORY, type_name)
        lines = self.preamble()
        lines.extend(self.emit_record(declarations, names, resolver))
        return lines

    def emit_service(
        self,
        service: ServiceDecl,
        package: str,
        type_name: str,
        resolver: TypeResolver,
    ) -> List[str]:
        """Render the file of service ``package/srv/type_name``.

        The file holds ``{type_name}_Request`` and ``{type_name}_Response``
        followed by the unit struct ``{type_name}`` implementing ServiceMsg.
        """
        request = RecordNames(package, SRV_CATEGORY, f"{type_name}_Request")
        response = RecordNames(package, SRV_CATEGORY, f"{type_name}_Response")

        lines = self.preamble()
        lines.extend(self.emit_record(service.request, request, resolver))
        lines.append("")
        lines.extend(self.emit_record(service.response, response, resolver))
        lines.append("")
        lines.extend(self._service_marker(package, type_name, request, response))
        return lines

    def _service_marker(
        self,
        package: str,
        type_name: str,
        request: RecordNames,
        response: RecordNames,
    ) -> List[str]:
        type_support = service_type_support_function(package, type_name)
        return [
            'extern "C" {',
            f"    fn {type_support}() -> *const rcl::rosidl_service_type_support_t;",
            "}",
            "",
            "#[derive(Debug)]",
            f"pub struct {type_name};",
            "",
            f"impl ServiceMsg for {type_name} {{",
            f"    type Request = {request.type_name};",
            f"    type Response = {response.type_name};",
            "    fn type_support() -> *const rcl::rosidl_service_type_support_t {",
            "        unsafe {",
            f"            {type_support}()",
            "        }",
            "    }",
            "}",
        ]
