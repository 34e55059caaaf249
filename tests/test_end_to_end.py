#!/usr/bin/env python3
"""
End-to-end tests for the interface compiler.
Generates the example_interfaces tree: discovery -> parsing -> resolution -> emission -> module index
"""

from pathlib import Path

import pytest

from msg_compiler.src.common.constants import CompilerConfig
from msg_compiler.src.common.diagnostics import ProgramDiagnostics
from msg_compiler.src.project.generator import generate_project

EXAMPLES = Path(__file__).parent.parent / "example_interfaces"


def struct_body(text, type_name):
    lines = text.splitlines()
    start = lines.index(f"pub struct {type_name} {{")
    end = lines.index("}", start)
    return lines[start + 1 : end]


@pytest.fixture(scope="module")
def generated(tmp_path_factory):
    out = tmp_path_factory.mktemp("generated")
    diagnostics = ProgramDiagnostics()
    result = generate_project(EXAMPLES, out, diagnostics=diagnostics)
    files = {
        path.relative_to(out).as_posix(): path.read_text(encoding="utf-8")
        for path in sorted(out.rglob("*.rs"))
    }
    return result, diagnostics, files


class TestExampleInterfaces:
    """Generate every file under example_interfaces/."""

    def test_all_files_compile(self, generated):
        """Test the example tree compiles without errors."""
        result, diagnostics, files = generated
        assert result.success
        assert not diagnostics.has_errors()

    def test_output_layout(self, generated):
        """Test the generated module tree."""
        _, _, files = generated
        assert sorted(files) == [
            "demo_msgs/mod.rs",
            "demo_msgs/msg.rs",
            "demo_msgs/msg/bool_.rs",
            "demo_msgs/msg/constants.rs",
            "demo_msgs/msg/empty.rs",
            "demo_msgs/msg/sample.rs",
            "demo_msgs/msg/stamped.rs",
            "demo_msgs/srv.rs",
            "demo_msgs/srv/add_two_ints.rs",
            "demo_msgs/srv/trigger.rs",
            "demo_nav/mod.rs",
            "demo_nav/msg.rs",
            "demo_nav/msg/path_point.rs",
            "mod.rs",
        ]

    def test_module_indexes(self, generated):
        """Test the index files."""
        _, _, files = generated
        assert files["mod.rs"] == "pub mod demo_msgs;\npub mod demo_nav;\n"
        assert files["demo_msgs/mod.rs"] == "pub mod msg;\npub use msg::*;\npub mod srv;\n"
        assert files["demo_msgs/msg.rs"].splitlines() == [
            "mod bool_;",
            "mod constants;",
            "mod empty;",
            "mod sample;",
            "mod stamped;",
            "",
            "pub use bool_::*;",
            "pub use constants::*;",
            "pub use empty::*;",
            "pub use sample::*;",
            "pub use stamped::*;",
        ]
        assert files["demo_msgs/srv.rs"].splitlines() == [
            "mod add_two_ints;",
            "mod trigger;",
            "",
            "pub use add_two_ints::*;",
            "pub use trigger::*;",
        ]

    def test_sample_fields(self, generated):
        """Test every array shape and string form."""
        _, _, files = generated
        assert struct_body(files["demo_msgs/msg/sample.rs"], "Sample") == [
            "    pub a: i32, // plain scalar",
            "    pub arr: I64Seq<3>,",
            "    pub s4: [RosString<10>; 5],",
            "    pub covariance: [f64; 9],",
            "    pub data: U8Seq<0>,",
            "    pub name: RosString<0>,",
        ]

    def test_empty_placeholder(self, generated):
        """Test the record without fields gets a placeholder member."""
        _, _, files = generated
        assert struct_body(files["demo_msgs/msg/empty.rs"], "Empty") == [
            "    structure_needs_at_least_one_member: u8,"
        ]

    def test_constants(self, generated):
        """Test constants render as associated constants."""
        _, _, files = generated
        lines = files["demo_msgs/msg/constants.rs"].splitlines()
        start = lines.index("impl Constants {")
        assert lines[start + 1 : lines.index("}", start)] == [
            "    pub const FOO: i8 = -5; // negative",
            "    pub const MAX: u32 = 4294967295;",
            "    pub const RATE: f32 = 10.0;",
            "    pub const PI: f64 = 3.14159;",
            "    pub const ENABLED: bool = true;",
            "    pub const RGB: [u8; 3] = [255, 128, 0];",
            '    pub const GREETING: &[u8] = b"hello \\"world\\"\\n\\0";',
        ]
        assert struct_body("\n".join(lines), "Constants") == ["    pub mode: u8,"]

    def test_reserved_words(self, generated):
        """Test Rust keywords are mangled in field and file names."""
        _, _, files = generated
        assert struct_body(files["demo_msgs/msg/bool_.rs"], "Bool") == [
            "    pub data: bool,",
            "    pub type_: u8, // reserved word as a field name",
        ]

    def test_nested_types(self, generated):
        """Test references to local, external and builtin types."""
        _, _, files = generated
        assert struct_body(files["demo_msgs/msg/stamped.rs"], "Stamped") == [
            "    pub stamp: builtin_interfaces::UnsafeTime,",
            "    pub timeout: builtin_interfaces::UnsafeDuration,",
            "    pub header: std_msgs::msg::Header,",
            "    pub points: geometry_msgs::msg::PointSeq<0>,",
            "    pub sample: super::Sample,",
            "    pub samples: super::SampleSeq<2>,",
        ]
        assert struct_body(files["demo_nav/msg/path_point.rs"], "PathPoint") == [
            "    pub sample: demo_msgs::msg::Sample,",
            "    pub x: f64,",
            "    pub y: f64,",
        ]

    def test_builtin_warnings(self, generated):
        """Test each builtin_interfaces substitution warns once."""
        _, diagnostics, _ = generated
        assert diagnostics.warning_count() == 2
        assert all("2038" in message for message in diagnostics.warnings())

    def test_dependencies(self, generated):
        """Test external packages are collected per package."""
        result, _, _ = generated
        assert result.dependencies == {
            "demo_msgs": {"std_msgs", "geometry_msgs"},
            "demo_nav": {"demo_msgs"},
        }

    def test_service_files(self, generated):
        """Test services hold both records and the marker type."""
        _, _, files = generated
        text = files["demo_msgs/srv/add_two_ints.rs"]
        assert struct_body(text, "AddTwoInts_Request") == [
            "    pub a: i64,",
            "    pub b: i64,",
        ]
        assert struct_body(text, "AddTwoInts_Response") == ["    pub sum: i64,"]
        assert "impl ServiceMsg for AddTwoInts {" in text.splitlines()

    def test_service_with_empty_request(self, generated):
        """Test an empty request still gets a placeholder member."""
        _, _, files = generated
        text = files["demo_msgs/srv/trigger.rs"]
        assert struct_body(text, "Trigger_Request") == [
            "    structure_needs_at_least_one_member: u8,"
        ]
        assert len(struct_body(text, "Trigger_Response")) == 2
        assert "super::super::msg" not in text

    def test_service_type_paths(self, tmp_path):
        """Test services refer to messages of their own package through msg."""
        src = tmp_path / "src" / "demo" / "srv"
        src.mkdir(parents=True)
        (src / "Query.srv").write_text("Sample probe\n---\nbool ok\n", encoding="utf-8")
        generate_project(tmp_path / "src", tmp_path / "out")
        text = (tmp_path / "out" / "demo" / "srv" / "query.rs").read_text(encoding="utf-8")
        assert "    pub probe: super::super::msg::Sample," in text.splitlines()

    def test_every_file_has_banner(self, generated):
        """Test every generated interface file starts with the banner."""
        _, _, files = generated
        for name, text in files.items():
            if name.count("/") == 2:
                assert text.startswith("// This file was automatically generated"), name

    def test_matches_custom_config(self, tmp_path):
        """Test a custom crate path reaches every generated file."""
        config = CompilerConfig(safe_drive_path="crate", jobs=2)
        generate_project(EXAMPLES, tmp_path, config)
        for path in tmp_path.rglob("*.rs"):
            if path.parent.name in ("msg", "srv"):
                assert "use crate::msg::*;" in path.read_text(encoding="utf-8")
