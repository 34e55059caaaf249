"""
Tests for emission/emitter.py and emission/record.py - Rust code generation.
"""

import pytest

from msg_compiler.src.common.constants import CompilerConfig
from msg_compiler.src.common.diagnostics import ProgramDiagnostics
from msg_compiler.src.emission.emitter import CodeEmitter
from msg_compiler.src.parsing.parser import IDLParser
from msg_compiler.src.parsing.transformer import decode_string_literal
from msg_compiler.src.semantic.exceptions import TypeResolutionError
from msg_compiler.src.semantic.type_resolver import TypeResolver


@pytest.fixture(scope="module")
def parser():
    return IDLParser()


@pytest.fixture
def diagnostics():
    return ProgramDiagnostics()


def emit_msg(parser, source, diagnostics=None, package="demo", type_name="Sample", config=None):
    diagnostics = diagnostics or ProgramDiagnostics()
    resolver = TypeResolver(package, "msg", diagnostics)
    emitter = CodeEmitter(diagnostics, config or CompilerConfig())
    return emitter.emit_message(parser.parse_msg(source), package, type_name, resolver)


def emit_srv(parser, source, package="demo", type_name="AddTwoInts"):
    diagnostics = ProgramDiagnostics()
    resolver = TypeResolver(package, "srv", diagnostics)
    emitter = CodeEmitter(diagnostics)
    return emitter.emit_service(parser.parse_srv(source), package, type_name, resolver)


def struct_body(lines, type_name):
    start = lines.index(f"pub struct {type_name} {{")
    end = lines.index("}", start)
    return lines[start + 1 : end]


class TestPreamble:
    """Tests for the banner and use lines."""

    def test_banner_first(self, parser):
        """Test every file starts with the generated-file banner."""
        lines = emit_msg(parser, "int32 a\n")
        assert lines[0].startswith("// This file was automatically generated")

    def test_default_uses(self, parser):
        """Test the default safe_drive imports."""
        lines = emit_msg(parser, "int32 a\n")
        assert "use super::*;" in lines
        assert "use super::super::super::*;" in lines
        assert "use safe_drive::msg::*;" in lines
        assert "use safe_drive::rcl::{self, size_t};" in lines
        assert "use safe_drive::msg::common_interfaces::*;" in lines

    def test_custom_safe_drive_path(self, parser):
        """Test the crate path is configurable."""
        config = CompilerConfig(safe_drive_path="crate")
        lines = emit_msg(parser, "int32 a\n", config=config)
        assert "use crate::msg::*;" in lines
        assert "use safe_drive::msg::*;" not in lines

    def test_disable_common_interfaces(self, parser):
        """Test common_interfaces can be left out."""
        config = CompilerConfig(disable_common_interfaces=True)
        lines = emit_msg(parser, "int32 a\n", config=config)
        assert not any("common_interfaces" in line for line in lines)


class TestMessageRecord:
    """Tests for a single message record."""

    def test_single_scalar_field(self, parser):
        """Test int32 a in demo/Sample."""
        lines = emit_msg(parser, "int32 a\n")
        assert struct_body(lines, "Sample") == ["    pub a: i32,"]
        assert not any("pub const" in line for line in lines)
        assert "    fn demo__msg__Sample__init(msg: *mut Sample) -> bool;" in lines
        assert "    fn demo__msg__Sample__fini(msg: *mut Sample);" in lines

    def test_extern_functions(self, parser):
        """Test all seven native functions are declared."""
        lines = emit_msg(parser, "int32 a\n")
        text = "\n".join(lines)
        for suffix in (
            "__init(",
            "__fini(",
            "__are_equal(",
            "__Sequence__init(",
            "__Sequence__fini(",
            "__Sequence__are_equal(",
        ):
            assert f"fn demo__msg__Sample{suffix}" in text
        assert (
            "fn rosidl_typesupport_c__get_message_type_support_handle__demo__msg__Sample()"
            " -> *const rcl::rosidl_message_type_support_t;" in text
        )

    def test_struct_layout_attributes(self, parser):
        """Test the struct is repr(C)."""
        lines = emit_msg(parser, "int32 a\n")
        index = lines.index("pub struct Sample {")
        assert lines[index - 2 : index] == ["#[repr(C)]", "#[derive(Debug)]"]

    def test_field_order_preserved(self, parser):
        """Test fields keep their source order."""
        lines = emit_msg(parser, "uint8 z\nfloat64 y\nbool x\n")
        assert struct_body(lines, "Sample") == [
            "    pub z: u8,",
            "    pub y: f64,",
            "    pub x: bool,",
        ]

    def test_empty_record_placeholder(self, parser):
        """Test a record without fields gets one placeholder byte."""
        lines = emit_msg(parser, "# nothing here\n", type_name="Empty")
        assert struct_body(lines, "Empty") == [
            "    structure_needs_at_least_one_member: u8,"
        ]

    def test_constants_only_gets_placeholder(self, parser):
        """Test constants do not count as fields."""
        lines = emit_msg(parser, "int8 A = 1\n")
        assert struct_body(lines, "Sample") == [
            "    structure_needs_at_least_one_member: u8,"
        ]

    def test_field_types(self, parser):
        """Test arrays and strings in field declarations."""
        source = (
            "i64[<=3] arr\n"
            "string<=10[5] s4\n"
            "float64[9] covariance\n"
            "geometry_msgs/Point[] points\n"
            "Header header\n"
        )
        assert struct_body(emit_msg(parser, source), "Sample") == [
            "    pub arr: I64Seq<3>,",
            "    pub s4: [RosString<10>; 5],",
            "    pub covariance: [f64; 9],",
            "    pub points: geometry_msgs::msg::PointSeq<0>,",
            "    pub header: super::Header,",
        ]

    def test_bounded_zero_same_as_unbounded(self, parser):
        """Test T[<=0] and T[] generate identical code."""
        assert emit_msg(parser, "int32[<=0] a\n") == emit_msg(parser, "int32[] a\n")

    def test_field_comment(self, parser):
        """Test trailing comments are kept verbatim."""
        lines = emit_msg(parser, "int32 a # meters\n")
        assert struct_body(lines, "Sample") == ["    pub a: i32, // meters"]

    def test_reserved_field_name(self, parser):
        """Test fields named after Rust keywords are mangled."""
        lines = emit_msg(parser, "uint8 type\nbool loop\n")
        assert struct_body(lines, "Sample") == [
            "    pub type_: u8,",
            "    pub loop_: bool,",
        ]

    def test_default_ignored(self, parser):
        """Test defaults do not change the generated code."""
        with_default = emit_msg(parser, "float64 b 1.5\n")
        without_default = emit_msg(parser, "float64 b\n")
        assert with_default == without_default

    def test_default_noted_at_debug_level(self, parser):
        """Test an ignored default is recorded as a debug diagnostic."""
        diagnostics = ProgramDiagnostics(log_level="debug")
        emit_msg(parser, "float64 b 1.5\n", diagnostics=diagnostics)
        assert any("ignored" in d.message for d in diagnostics.diagnostics)
        assert diagnostics.warning_count() == 0

    def test_caller_default_stage_kept(self, parser):
        """Test building an emitter leaves the caller's default stage alone."""
        diagnostics = ProgramDiagnostics()
        diagnostics.default_stage = "caller"
        emit_msg(parser, "float64 b 1.5\n", diagnostics=diagnostics)
        assert diagnostics.default_stage == "caller"

    def test_new_and_drop(self, parser):
        """Test new() zero-initialises and Drop calls __fini."""
        text = "\n".join(emit_msg(parser, "int32 a\n"))
        assert "pub fn new() -> Option<Self> {" in text
        assert "std::mem::MaybeUninit::zeroed().assume_init()" in text
        assert "if unsafe { demo__msg__Sample__init(&mut msg) } {" in text
        assert "impl Drop for Sample {" in text
        assert "unsafe { demo__msg__Sample__fini(self) };" in text

    def test_sequence_wrapper(self, parser):
        """Test the sequence wrapper and its raw mirror."""
        lines = emit_msg(parser, "int32 a\n")
        text = "\n".join(lines)
        assert "struct SampleSeqRaw {" in lines
        assert "pub struct SampleSeq<const N: usize> {" in lines
        assert "if N != 0 && size > N {" in text
        assert "pub fn null() -> Self {" in text
        assert "pub fn as_slice(&self) -> &[Sample] {" in text
        assert "pub fn as_slice_mut(&mut self) -> &mut [Sample] {" in text
        assert "pub fn iter(&self) -> std::slice::Iter<'_, Sample> {" in text
        assert "pub fn len(&self) -> usize {" in text
        assert "pub fn is_empty(&self) -> bool {" in text
        assert "impl<const N: usize> Drop for SampleSeq<N> {" in text
        assert "unsafe impl<const N: usize> Send for SampleSeq<N> {}" in lines
        assert "unsafe impl<const N: usize> Sync for SampleSeq<N> {}" in lines

    def test_equality_forwards_to_native(self, parser):
        """Test PartialEq delegates to the native comparison functions."""
        text = "\n".join(emit_msg(parser, "int32 a\n"))
        assert "impl PartialEq for Sample {" in text
        assert "demo__msg__Sample__are_equal(self, other)" in text
        assert "impl<const N: usize> PartialEq for SampleSeq<N> {" in text
        assert "demo__msg__Sample__Sequence__are_equal(&msg1, &msg2)" in text

    def test_type_support(self, parser):
        """Test TypeSupport is implemented."""
        text = "\n".join(emit_msg(parser, "int32 a\n"))
        assert "impl TypeSupport for Sample {" in text

    def test_idempotent(self, parser):
        """Test emitting twice gives identical lines."""
        source = "int8 A = -1 # c\nstring<=4[<=2] s\ngeometry_msgs/Pose p\n"
        assert emit_msg(parser, source) == emit_msg(parser, source)


class TestConstants:
    """Tests for constant emission."""

    def test_constants_before_struct(self, parser):
        """Test constants live in an impl block ahead of the struct."""
        lines = emit_msg(parser, "int32 a\nint8 FOO = -5 # negative\n")
        impl_index = lines.index("impl Sample {")
        assert lines[impl_index + 1] == "    pub const FOO: i8 = -5; // negative"
        assert impl_index < lines.index("pub struct Sample {")

    def test_constant_types(self, parser):
        """Test constants of different types."""
        source = (
            "bool FLAG = true\n"
            "float32 RATE = 10\n"
            "uint8[3] RGB = [255, 128, 0]\n"
            'string NAME = "demo"\n'
        )
        lines = emit_msg(parser, source)
        assert "    pub const FLAG: bool = true;" in lines
        assert "    pub const RATE: f32 = 10.0;" in lines
        assert "    pub const RGB: [u8; 3] = [255, 128, 0];" in lines
        assert '    pub const NAME: &[u8] = b"demo\\0";' in lines

    def test_string_constant_round_trip(self, parser):
        """Test decoding the emitted byte string reproduces the literal."""
        source = r'string S = "a\\b\"c\rd\ne\tf"' + "\n"
        original = parser.parse_msg(source)[0].value.value
        line = next(line for line in emit_msg(parser, source) if "pub const S" in line)
        body = line[line.index('b"') + 2 : line.rindex('\\0"')]
        assert decode_string_literal(f'"{body}"') == original

    def test_out_of_range_constant(self, parser):
        """Test constant values are checked against their type."""
        with pytest.raises(TypeResolutionError, match="out of range"):
            emit_msg(parser, "uint8 BIG = 300\n")

    def test_sequence_constant_rejected(self, parser):
        """Test growable arrays cannot be constants."""
        with pytest.raises(TypeResolutionError):
            emit_msg(parser, "int32[] A = [1]\n")


class TestBuiltinInterfaces:
    """Tests for the Time/Duration substitution during emission."""

    def test_time_field(self, parser, diagnostics):
        """Test Time fields use UnsafeTime and warn once."""
        lines = emit_msg(parser, "builtin_interfaces/Time stamp\n", diagnostics=diagnostics)
        assert struct_body(lines, "Sample") == [
            "    pub stamp: builtin_interfaces::UnsafeTime,"
        ]
        assert diagnostics.warning_count() == 1

    def test_unknown_builtin(self, parser):
        """Test other builtin_interfaces types are fatal."""
        with pytest.raises(TypeResolutionError):
            emit_msg(parser, "builtin_interfaces/Clock c\n")


class TestServiceEmission:
    """Tests for .srv emission."""

    SOURCE = "int64 a\nint64 b\n---\nint64 sum\n"

    def test_request_and_response_records(self, parser):
        """Test both halves become records of category srv."""
        lines = emit_srv(parser, self.SOURCE)
        assert struct_body(lines, "AddTwoInts_Request") == [
            "    pub a: i64,",
            "    pub b: i64,",
        ]
        assert struct_body(lines, "AddTwoInts_Response") == ["    pub sum: i64,"]
        text = "\n".join(lines)
        assert "fn demo__srv__AddTwoInts_Request__init(" in text
        assert "fn demo__srv__AddTwoInts_Response__Sequence__fini(" in text

    def test_preamble_once(self, parser):
        """Test the banner appears once per file."""
        lines = emit_srv(parser, self.SOURCE)
        assert sum(line.startswith("// This file") for line in lines) == 1

    def test_service_marker(self, parser):
        """Test the unit struct binding request and response."""
        lines = emit_srv(parser, self.SOURCE)
        assert "pub struct AddTwoInts;" in lines
        assert "impl ServiceMsg for AddTwoInts {" in lines
        assert "    type Request = AddTwoInts_Request;" in lines
        assert "    type Response = AddTwoInts_Response;" in lines
        assert (
            "    fn rosidl_typesupport_c__get_service_type_support_handle__demo__srv__AddTwoInts()"
            " -> *const rcl::rosidl_service_type_support_t;" in lines
        )

    def test_empty_halves(self, parser):
        """Test empty request and response both get placeholders."""
        lines = emit_srv(parser, "---\n", type_name="Trigger")
        placeholder = ["    structure_needs_at_least_one_member: u8,"]
        assert struct_body(lines, "Trigger_Request") == placeholder
        assert struct_body(lines, "Trigger_Response") == placeholder

    def test_same_package_message_path(self, parser):
        """Test services reach their package's messages through msg."""
        lines = emit_srv(parser, "Header h\n---\n")
        assert struct_body(lines, "AddTwoInts_Request") == [
            "    pub h: super::super::msg::Header,"
        ]

    def test_constants_per_half(self, parser):
        """Test constants attach to the half they are declared in."""
        lines = emit_srv(parser, "int8 A = 1\n---\nint8 B = 2\n")
        request_impl = lines.index("impl AddTwoInts_Request {")
        response_impl = lines.index("impl AddTwoInts_Response {")
        assert lines[request_impl + 1] == "    pub const A: i8 = 1;"
        assert lines[response_impl + 1] == "    pub const B: i8 = 2;"
