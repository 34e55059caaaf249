"""Shared constants and static lookup tables across the compiler."""

from dataclasses import dataclass
from types import MappingProxyType

# Source file categories
MSG_CATEGORY = "msg"
SRV_CATEGORY = "srv"
SOURCE_SUFFIXES = {".msg": MSG_CATEGORY, ".srv": SRV_CATEGORY}

# Canonical IDL primitive names accepted in source, keyed by spelling.
# ROS spells them int32/float64, but the Rust spellings are accepted as well.
PRIMITIVE_ALIASES = MappingProxyType(
    {
        "bool": "bool",
        "byte": "uint8",
        "char": "uint8",
        "int8": "int8",
        "uint8": "uint8",
        "int16": "int16",
        "uint16": "uint16",
        "int32": "int32",
        "uint32": "uint32",
        "int64": "int64",
        "uint64": "uint64",
        "float32": "float32",
        "float64": "float64",
        "i8": "int8",
        "u8": "uint8",
        "i16": "int16",
        "u16": "uint16",
        "i32": "int32",
        "u32": "uint32",
        "i64": "int64",
        "u64": "uint64",
        "f32": "float32",
        "f64": "float64",
    }
)

# Canonical IDL primitive -> Rust scalar
PRIMITIVE_TYPES = MappingProxyType(
    {
        "bool": "bool",
        "int8": "i8",
        "uint8": "u8",
        "int16": "i16",
        "uint16": "u16",
        "int32": "i32",
        "uint32": "u32",
        "int64": "i64",
        "uint64": "u64",
        "float32": "f32",
        "float64": "f64",
    }
)

# Rust scalar -> safe_drive sequence wrapper over rosidl_runtime_c__<T>__Sequence
PRIMITIVE_SEQUENCES = MappingProxyType(
    {
        "bool": "BoolSeq",
        "i8": "I8Seq",
        "u8": "U8Seq",
        "i16": "I16Seq",
        "u16": "U16Seq",
        "i32": "I32Seq",
        "u32": "U32Seq",
        "i64": "I64Seq",
        "u64": "U64Seq",
        "f32": "F32Seq",
        "f64": "F64Seq",
    }
)

# Inclusive value ranges for integer constants
INTEGER_RANGES = MappingProxyType(
    {
        "i8": (-(2**7), 2**7 - 1),
        "u8": (0, 2**8 - 1),
        "i16": (-(2**15), 2**15 - 1),
        "u16": (0, 2**16 - 1),
        "i32": (-(2**31), 2**31 - 1),
        "u32": (0, 2**32 - 1),
        "i64": (-(2**63), 2**63 - 1),
        "u64": (0, 2**64 - 1),
    }
)
FLOAT_TYPES = frozenset({"f32", "f64"})

# String representations
STRING_TYPE = "RosString"
STRING_SEQUENCE_TYPE = "RosStringSeq"
STRING_CONSTANT_TYPE = "&[u8]"

# ROS builtin type names that have no mapping onto the C runtime ABI here
UNSUPPORTED_BUILTINS = frozenset({"wstring", "time", "duration"})

# builtin_interfaces/Time and Duration are replaced by safe_drive's 2038-limited
# variants. Any other name under this scope is rejected.
BUILTIN_INTERFACES_SCOPE = "builtin_interfaces"
BUILTIN_INTERFACES_TYPES = MappingProxyType(
    {
        "Time": "builtin_interfaces::UnsafeTime",
        "Duration": "builtin_interfaces::UnsafeDuration",
    }
)

# Placeholder member for records without fields, named as rosidl_generator_c does
EMPTY_STRUCT_FIELD = "structure_needs_at_least_one_member"

# Identifiers that cannot be used verbatim as Rust field or module names
RESERVED_WORDS = frozenset(
    {
        # strict and reserved keywords
        "as",
        "async",
        "await",
        "box",
        "break",
        "const",
        "continue",
        "crate",
        "dyn",
        "else",
        "enum",
        "extern",
        "false",
        "fn",
        "for",
        "if",
        "impl",
        "in",
        "let",
        "loop",
        "match",
        "mod",
        "move",
        "mut",
        "pub",
        "ref",
        "return",
        "self",
        "static",
        "struct",
        "super",
        "trait",
        "true",
        "type",
        "unsafe",
        "use",
        "where",
        "while",
        "yield",
        # primitive type names
        "bool",
        "char",
        "i8",
        "u8",
        "i16",
        "u16",
        "i32",
        "u32",
        "i64",
        "u64",
        "f32",
        "f64",
    }
)

GENERATED_BANNER = "// This file was automatically generated by ros2msg_to_rs. Do not edit."


@dataclass(frozen=True)
class CompilerConfig:
    """Settings shared by every file of one compilation run."""

    # Rust path of the safe_drive crate used in generated `use` lines
    safe_drive_path: str = "safe_drive"
    # When set, generated files do not import safe_drive's bundled
    # common_interfaces (used when generating those interfaces themselves)
    disable_common_interfaces: bool = False
    # Number of worker processes for directory compilation
    jobs: int = 1


DEFAULT_CONFIG = CompilerConfig()
