from .parser import IDLParser
from .transformer import IDLTransformer, decode_string_literal
from .exceptions import IDLSyntaxError

"""Parsing module for ROS 2 interface files."""


__all__ = ["IDLParser", "IDLTransformer", "IDLSyntaxError", "decode_string_literal"]
