#!/usr/bin/env python3
"""
ROS 2 interface file compiler

Compiles a single .msg or .srv file to safe_drive Rust code. The package is
taken from the directory layout (<package>/msg/Foo.msg) unless given.

Usage:
    python compile.py my_interfaces/msg/Example.msg            # Print Rust code to stdout
    python compile.py Example.msg --package my_interfaces       # Set the package
    python compile.py Example.srv -o example.rs                 # Save Rust code to file
    python compile.py Example.msg -v                            # Show all diagnostics
"""

import sys
import click
from pathlib import Path

# Add the compiler to the path
sys.path.insert(0, str(Path(__file__).parent))

from msg_compiler.src.common import DEFAULT_CONFIG, CompilerConfig, DiagnosticSeverity
from msg_compiler.src.common.constants import SOURCE_SUFFIXES
from msg_compiler.src.project import SourceFile, compile_file


def infer_package(input_path: Path) -> str:
    """<package>/msg/Foo.msg -> package; otherwise the containing directory."""
    parent = input_path.resolve().parent
    if parent.name in SOURCE_SUFFIXES.values():
        return parent.parent.name
    return parent.name


def compile_interface_file(
    input_path: Path,
    package: str | None = None,
    type_name: str | None = None,
    config: CompilerConfig = DEFAULT_CONFIG,
    verbose: bool = False,
) -> tuple[bool, str, list]:
    """
    Compile one interface file to Rust code.

    Returns:
        (success: bool, result: str, diagnostics: list)
    """
    category = SOURCE_SUFFIXES.get(input_path.suffix)
    if category is None:
        return False, f"'{input_path}' is not a .msg or .srv file", []

    source = SourceFile(
        path=input_path,
        package=package or infer_package(input_path),
        category=category,
        type_name=type_name or input_path.name.split(".")[0],
    )
    outcome = compile_file(source, config, "debug" if verbose else "warning")
    messages = outcome.diagnostics.get_messages(
        DiagnosticSeverity.DEBUG if verbose else DiagnosticSeverity.WARNING
    )

    if outcome.failed:
        return False, f"{input_path} could not be compiled", messages
    return True, "\n".join(outcome.lines) + "\n", messages


@click.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    help="Output file for the Rust code (default: stdout)",
)
@click.option("--package", type=str, help="Package name (default: from the directory layout)")
@click.option("--name", type=str, help="Type name (default: the file name)")
@click.option(
    "-s",
    "--safe-drive",
    "safe_drive_path",
    default="safe_drive",
    help="Rust path of the safe_drive crate",
)
@click.option(
    "--disable-common-interfaces",
    is_flag=True,
    help="Do not import safe_drive's common_interfaces",
)
@click.option("-v", "--verbose", is_flag=True, help="Show detailed diagnostic messages")
def main(input_file, output, package, name, safe_drive_path, disable_common_interfaces, verbose):
    """Compile a ROS 2 .msg or .srv file to safe_drive Rust code."""

    if verbose:
        click.echo(f"Compiling {input_file}...", err=True)

    config = CompilerConfig(
        safe_drive_path=safe_drive_path,
        disable_common_interfaces=disable_common_interfaces,
    )
    success, result, diagnostic_messages = compile_interface_file(
        input_file, package, name, config, verbose
    )

    # Print diagnostics if needed
    if diagnostic_messages and (verbose or not success):
        click.echo("Diagnostics:", err=True)
        for msg in diagnostic_messages:
            click.echo(f"  {msg}", err=True)
        click.echo("", err=True)

    if not success:
        click.echo(f"Compilation failed: {result}", err=True)
        sys.exit(1)

    # Output Rust code
    if output:
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(result, encoding="utf-8")
            if verbose:
                click.echo(f"Rust code saved to {output}", err=True)
        except OSError as e:
            click.echo(f"Failed to write output file: {e}", err=True)
            sys.exit(1)
    else:
        click.echo(result, nl=False)


if __name__ == "__main__":
    main()
