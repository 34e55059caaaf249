#!/usr/bin/env python3
"""
ros2msg_to_rs CLI - Generate safe_drive Rust code from ROS 2 interface files.

This module provides the entry point for the 'ros2msg_to_rs' command installed via pip.

The input directory holds one directory per package; every .msg and .srv file
below a package directory is compiled:

    src/
      my_interfaces/msg/Example.msg
      my_interfaces/srv/Example.srv

Usage:
    ros2msg_to_rs -i src                       # Generate into target/src
    ros2msg_to_rs -i src -o out                # Generate into out
    ros2msg_to_rs -i src -s crate              # safe_drive is the current crate
    ros2msg_to_rs -i src -j 8                  # Compile with 8 worker processes
"""

import logging
import sys
from pathlib import Path

import click

from msg_compiler.src.common.constants import DEFAULT_CONFIG, CompilerConfig
from msg_compiler.src.common.diagnostics import ProgramDiagnostics
from msg_compiler.src.project.generator import generate_project


def setup_logging(level: str) -> None:
    """Setup logging configuration."""
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")
    logging.basicConfig(level=numeric_level, format="%(levelname)s: %(message)s")


def default_output_dir(input_dir: Path) -> Path:
    """target/<name of the input directory>"""
    return Path("target") / input_dir.resolve().name


@click.command()
@click.option(
    "-i",
    "--input",
    "input_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    required=True,
    help="Input directory containing one directory per package",
)
@click.option(
    "-o",
    "--out",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory (default: target/<input directory name>)",
)
@click.option(
    "-s",
    "--safe-drive",
    "safe_drive_path",
    default=DEFAULT_CONFIG.safe_drive_path,
    show_default=True,
    help="Rust path of the safe_drive crate",
)
@click.option(
    "--disable-common-interfaces",
    is_flag=True,
    help="Do not import safe_drive's common_interfaces. Only needed when "
    "generating the common_interfaces bundled with safe_drive itself.",
)
@click.option(
    "-j",
    "--jobs",
    type=click.IntRange(min=1),
    default=DEFAULT_CONFIG.jobs,
    show_default=True,
    help="Number of worker processes",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default="warning",
    help="Set the logging level",
)
def main(input_dir, output_dir, safe_drive_path, disable_common_interfaces, jobs, log_level):
    """Generate Rust code for safe_drive from .msg and .srv files."""
    setup_logging(log_level)
    verbose = log_level in ["debug", "info"]

    if output_dir is None:
        output_dir = default_output_dir(input_dir)

    config = CompilerConfig(
        safe_drive_path=safe_drive_path,
        disable_common_interfaces=disable_common_interfaces,
        jobs=jobs,
    )
    diagnostics = ProgramDiagnostics(log_level=log_level)

    try:
        result = generate_project(
            input_dir, output_dir, config, diagnostics, show_progress=verbose
        )
    except OSError as e:
        click.echo(f"Generation failed: {e}", err=True)
        sys.exit(1)

    if not result.success:
        click.echo(
            f"Generation failed: {len(result.failures)} file(s) could not be compiled",
            err=True,
        )
        sys.exit(1)

    if verbose:
        click.echo(
            f"Generated {len(result.written)} file(s) in {output_dir} "
            f"with {diagnostics.warning_count()} warning(s).",
            err=True,
        )


if __name__ == "__main__":
    main()
