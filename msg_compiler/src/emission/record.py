"""Rust code for a single record: a message, or one half of a service.

A record is a ``#[repr(C)]`` struct laid out exactly like the struct that
rosidl_generator_c produces for it, together with:

* the ``extern "C"`` functions of the C runtime operating on it,
* an inherent ``impl`` holding its constants,
* ``new()`` and ``Drop`` bound to the runtime's ``__init``/``__fini``,
* a sequence wrapper ``{Type}Seq<N>`` mirroring ``{Type}__Sequence``,
* ``TypeSupport`` and ``PartialEq`` forwarding to the runtime.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from msg_compiler.src.ast.base import ASTNode, ASTVisitor
from msg_compiler.src.ast.declarations import ConstantDecl, Declaration, FieldDecl
from msg_compiler.src.common.constants import EMPTY_STRUCT_FIELD
from msg_compiler.src.common.diagnostics import ProgramDiagnostics
from msg_compiler.src.semantic.type_resolver import TypeResolver
from .naming import RecordNames, mangle
from .values import render_value

_ZEROED = "unsafe { std::mem::MaybeUninit::zeroed().assume_init() }"


def _with_comment(line: str, comment: Optional[str]) -> str:
    if comment is None:
        return line
    return f"{line} //{comment}"


class RecordEmitter(ASTVisitor):
    """Collects the constants and fields of one record and renders it."""

    def __init__(
        self,
        names: RecordNames,
        resolver: TypeResolver,
        diagnostics: ProgramDiagnostics,
    ) -> None:
        self.names = names
        self.resolver = resolver
        self.diagnostics = diagnostics
        self.constant_lines: List[str] = []
        self.field_lines: List[str] = []

    def visit(self, node: ASTNode):
        return super().visit(node)

    def visit_FieldDecl(self, node: FieldDecl) -> None:
        resolved = self.resolver.resolve(node.type_name)
        if node.default is not None:
            self.diagnostics.debug(
                f"Default value of '{node.name}' is ignored",
                stage="emission",
                node=node,
            )
        line = f"    pub {mangle(node.name)}: {resolved.render()},"
        self.field_lines.append(_with_comment(line, node.comment))

    def visit_ConstantDecl(self, node: ConstantDecl) -> None:
        resolved = self.resolver.resolve_constant(node.type_name)
        value = render_value(node.value, resolved, node)
        line = f"    pub const {mangle(node.name)}: {resolved.render()} = {value};"
        self.constant_lines.append(_with_comment(line, node.comment))

    def emit(self, declarations: Sequence[Declaration]) -> List[str]:
        """Resolve the declarations in source order and render the record."""
        for declaration in declarations:
            self.visit(declaration)

        lines: List[str] = []
        lines.extend(self._extern_block())
        lines.extend(self._constants())
        lines.extend(self._struct())
        lines.extend(self._lifecycle())
        lines.extend(self._sequence())
        lines.extend(self._traits())
        return lines

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _extern_block(self) -> List[str]:
        name = self.names.type_name
        raw = self.names.sequence_raw
        prefix = self.names.c_prefix
        return [
            'extern "C" {',
            f"    fn {prefix}__init(msg: *mut {name}) -> bool;",
            f"    fn {prefix}__fini(msg: *mut {name});",
            f"    fn {prefix}__are_equal(lhs: *const {name}, rhs: *const {name}) -> bool;",
            f"    fn {prefix}__Sequence__init(msg: *mut {raw}, size: usize) -> bool;",
            f"    fn {prefix}__Sequence__fini(msg: *mut {raw});",
            f"    fn {prefix}__Sequence__are_equal(lhs: *const {raw}, rhs: *const {raw}) -> bool;",
            f"    fn {self.names.type_support_function}() -> *const rcl::rosidl_message_type_support_t;",
            "}",
            "",
        ]

    def _constants(self) -> List[str]:
        if not self.constant_lines:
            return []
        lines = [f"impl {self.names.type_name} {{"]
        lines.extend(self.constant_lines)
        lines.append("}")
        lines.append("")
        return lines

    def _struct(self) -> List[str]:
        lines = [
            "#[repr(C)]",
            "#[derive(Debug)]",
            f"pub struct {self.names.type_name} {{",
        ]
        if self.field_lines:
            lines.extend(self.field_lines)
        else:
            # C forbids empty structs; rosidl_generator_c adds this member
            lines.append(f"    {EMPTY_STRUCT_FIELD}: u8,")
        lines.append("}")
        lines.append("")
        return lines

    def _lifecycle(self) -> List[str]:
        name = self.names.type_name
        prefix = self.names.c_prefix
        return [
            f"impl {name} {{",
            "    pub fn new() -> Option<Self> {",
            f"        let mut msg: Self = {_ZEROED};",
            f"        if unsafe {{ {prefix}__init(&mut msg) }} {{",
            "            Some(msg)",
            "        } else {",
            "            None",
            "        }",
            "    }",
            "}",
            "",
            f"impl Drop for {name} {{",
            "    fn drop(&mut self) {",
            f"        unsafe {{ {prefix}__fini(self) }};",
            "    }",
            "}",
            "",
        ]

    def _sequence(self) -> List[str]:
        name = self.names.type_name
        seq = self.names.sequence
        raw = self.names.sequence_raw
        prefix = self.names.c_prefix
        from_raw = "Self { data: msg.data, size: msg.size, capacity: msg.capacity }"
        to_raw = f"{raw} {{ data: self.data, size: self.size, capacity: self.capacity }}"
        return [
            "#[repr(C)]",
            "#[derive(Debug)]",
            f"struct {raw} {{",
            f"    data: *mut {name},",
            "    size: size_t,",
            "    capacity: size_t,",
            "}",
            "",
            f"/// Sequence of {name}.",
            "/// `N` is the maximum number of elements.",
            "/// If `N` is `0`, the size is unlimited.",
            "#[repr(C)]",
            "#[derive(Debug)]",
            f"pub struct {seq}<const N: usize> {{",
            f"    data: *mut {name},",
            "    size: size_t,",
            "    capacity: size_t,",
            "}",
            "",
            f"impl<const N: usize> {seq}<N> {{",
            f"    /// Create a sequence of {name}.",
            "    /// `N` represents the maximum number of elements.",
            "    /// If `N` is `0`, the sequence is unlimited.",
            "    pub fn new(size: usize) -> Option<Self> {",
            "        if N != 0 && size > N {",
            "            // the size exceeds in the maximum number",
            "            return None;",
            "        }",
            "",
            f"        let mut msg: {raw} = {_ZEROED};",
            f"        if unsafe {{ {prefix}__Sequence__init(&mut msg, size) }} {{",
            f"            Some({from_raw})",
            "        } else {",
            "            None",
            "        }",
            "    }",
            "",
            "    pub fn null() -> Self {",
            f"        let msg: {raw} = {_ZEROED};",
            f"        {from_raw}",
            "    }",
            "",
            f"    pub fn as_slice(&self) -> &[{name}] {{",
            "        if self.data.is_null() {",
            "            &[]",
            "        } else {",
            "            let s = unsafe { std::slice::from_raw_parts(self.data, self.size as _) };",
            "            s",
            "        }",
            "    }",
            "",
            f"    pub fn as_slice_mut(&mut self) -> &mut [{name}] {{",
            "        if self.data.is_null() {",
            "            &mut []",
            "        } else {",
            "            let s = unsafe { std::slice::from_raw_parts_mut(self.data, self.size as _) };",
            "            s",
            "        }",
            "    }",
            "",
            f"    pub fn iter(&self) -> std::slice::Iter<'_, {name}> {{",
            "        self.as_slice().iter()",
            "    }",
            "",
            f"    pub fn iter_mut(&mut self) -> std::slice::IterMut<'_, {name}> {{",
            "        self.as_slice_mut().iter_mut()",
            "    }",
            "",
            "    pub fn len(&self) -> usize {",
            "        self.as_slice().len()",
            "    }",
            "",
            "    pub fn is_empty(&self) -> bool {",
            "        self.len() == 0",
            "    }",
            "}",
            "",
            f"impl<const N: usize> Drop for {seq}<N> {{",
            "    fn drop(&mut self) {",
            f"        let mut msg = {to_raw};",
            f"        unsafe {{ {prefix}__Sequence__fini(&mut msg) }};",
            "    }",
            "}",
            "",
            f"unsafe impl<const N: usize> Send for {seq}<N> {{}}",
            f"unsafe impl<const N: usize> Sync for {seq}<N> {{}}",
            "",
        ]

    def _traits(self) -> List[str]:
        name = self.names.type_name
        seq = self.names.sequence
        raw = self.names.sequence_raw
        prefix = self.names.c_prefix
        other_raw = f"{raw} {{ data: other.data, size: other.size, capacity: other.capacity }}"
        self_raw = f"{raw} {{ data: self.data, size: self.size, capacity: self.capacity }}"
        return [
            f"impl TypeSupport for {name} {{",
            "    fn type_support() -> *const rcl::rosidl_message_type_support_t {",
            "        unsafe {",
            f"            {self.names.type_support_function}()",
            "        }",
            "    }",
            "}",
            "",
            f"impl PartialEq for {name} {{",
            "    fn eq(&self, other: &Self) -> bool {",
            "        unsafe {",
            f"            {prefix}__are_equal(self, other)",
            "        }",
            "    }",
            "}",
            "",
            f"impl<const N: usize> PartialEq for {seq}<N> {{",
            "    fn eq(&self, other: &Self) -> bool {",
            "        unsafe {",
            f"            let msg1 = {self_raw};",
            f"            let msg2 = {other_raw};",
            f"            {prefix}__Sequence__are_equal(&msg1, &msg2)",
            "        }",
            "    }",
            "}",
        ]
