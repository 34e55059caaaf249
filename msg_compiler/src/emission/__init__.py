"""Rust code emission for ROS 2 interface files."""

from .emitter import CodeEmitter
from .naming import RecordNames, mangle, module_file_stem, to_snake_case
from .record import RecordEmitter
from .values import encode_byte_string, render_value

__all__ = [
    "CodeEmitter",
    "RecordEmitter",
    "RecordNames",
    "mangle",
    "module_file_stem",
    "to_snake_case",
    "encode_byte_string",
    "render_value",
]
