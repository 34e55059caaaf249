"""Names of generated Rust items and files."""

from __future__ import annotations

import re
from dataclasses import dataclass

from msg_compiler.src.common.constants import RESERVED_WORDS

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def mangle(identifier: str) -> str:
    """Append '_' to identifiers that are reserved in Rust."""
    if identifier in RESERVED_WORDS:
        return f"{identifier}_"
    return identifier


def to_snake_case(name: str) -> str:
    """MultiArrayLayout -> multi_array_layout, HTTPHeader -> http_header"""
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return name.lower()


def module_file_stem(type_name: str) -> str:
    """Stem of the .rs file generated for a type: Bool -> bool_"""
    return mangle(to_snake_case(type_name))


@dataclass(frozen=True)
class RecordNames:
    """Every name derived from one record of one package."""

    package: str
    category: str
    type_name: str  # Name, or Name_Request / Name_Response

    @property
    def c_prefix(self) -> str:
        """Prefix of the rosidl_generator_c functions: pkg__msg__Name"""
        return f"{self.package}__{self.category}__{self.type_name}"

    @property
    def sequence(self) -> str:
        return f"{self.type_name}Seq"

    @property
    def sequence_raw(self) -> str:
        return f"{self.type_name}SeqRaw"

    @property
    def type_support_function(self) -> str:
        return f"rosidl_typesupport_c__get_message_type_support_handle__{self.c_prefix}"


def service_type_support_function(package: str, service_name: str) -> str:
    return (
        "rosidl_typesupport_c__get_service_type_support_handle__"
        f"{package}__srv__{service_name}"
    )
