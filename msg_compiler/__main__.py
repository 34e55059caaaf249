#!/usr/bin/env python3
"""
ros2msg_to_rs CLI - Entry point for the interface compiler.

This module allows running the compiler as:
    python -m msg_compiler -i src
    ros2msg_to_rs -i src  (when installed via pip)
"""

from msg_compiler.cli import main

if __name__ == "__main__":
    main()
