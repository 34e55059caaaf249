"""
Generation of a Rust module tree from a directory of interface files.

Every file is compiled independently, in worker processes when more than one
job is configured. Results are merged in path order after all files are
done, so the output does not depend on which worker finished first.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Sequence, Set, Union

from tqdm import tqdm

from msg_compiler.src.common.constants import DEFAULT_CONFIG, CompilerConfig
from msg_compiler.src.common.diagnostics import ProgramDiagnostics
from msg_compiler.src.common.source_location import SourceLocation
from msg_compiler.src.parsing.exceptions import IDLSyntaxError
from msg_compiler.src.pipeline import compile_source
from msg_compiler.src.semantic.exceptions import TypeResolutionError
from .discovery import SourceFile, discover_sources
from .module_index import ModuleIndex

logger = logging.getLogger(__name__)


@dataclass
class FileOutcome:
    """Result of compiling one file, as returned by a worker."""

    source: SourceFile
    lines: Optional[List[str]]  # None when the file failed to compile
    dependencies: FrozenSet[str]
    diagnostics: ProgramDiagnostics

    @property
    def failed(self) -> bool:
        return self.lines is None


@dataclass
class ProjectResult:
    """Summary of one generate_project run."""

    written: List[Path] = field(default_factory=list)
    dependencies: Dict[str, Set[str]] = field(default_factory=dict)
    failures: List[Path] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures


def compile_file(
    source: SourceFile, config: CompilerConfig, log_level: str = "warning"
) -> FileOutcome:
    """Compile one discovered file; failures are recorded, not raised.

    Module-level so it can be sent to worker processes.
    """
    diagnostics = ProgramDiagnostics(log_level=log_level)
    source_name = str(source.path)

    try:
        text = source.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        diagnostics.error(f"Cannot read {source_name}: {e}", stage="project")
        return FileOutcome(source, None, frozenset(), diagnostics)

    try:
        result = compile_source(
            text,
            source.package,
            source.type_name,
            source.category,
            config,
            source_name,
            diagnostics,
        )
    except IDLSyntaxError as e:
        diagnostics.error(
            f"Failed to parse {source_name}: {e.message}\n"
            f"{e.location.render_pointer(text)}",
            stage="parsing",
            line=e.location.line,
            column=e.location.column,
            source_file=source_name,
        )
        return FileOutcome(source, None, frozenset(), diagnostics)
    except TypeResolutionError as e:
        message = f"Failed to compile {source_name}: {e.message}"
        if e.node is not None and e.node.line > 0:
            location = SourceLocation.from_offset(text, e.node.offset, source_name)
            message += f"\n{location.render_pointer(text)}"
        diagnostics.error(
            message, stage="semantic", node=e.node, source_file=source_name
        )
        return FileOutcome(source, None, frozenset(), diagnostics)

    return FileOutcome(source, result.lines, result.dependencies, diagnostics)


def _compile_all(
    sources: Sequence[SourceFile],
    config: CompilerConfig,
    log_level: str,
    show_progress: bool,
) -> List[FileOutcome]:
    if config.jobs > 1 and len(sources) > 1:
        outcomes = []
        with ProcessPoolExecutor(max_workers=config.jobs) as executor:
            futures = [
                executor.submit(compile_file, source, config, log_level)
                for source in sources
            ]
            for future in tqdm(
                as_completed(futures),
                total=len(futures),
                desc="Generating",
                disable=not show_progress,
            ):
                outcomes.append(future.result())
        return outcomes

    return [
        compile_file(source, config, log_level)
        for source in tqdm(sources, desc="Generating", disable=not show_progress)
    ]


def _write_lines(path: Path, lines: List[str]) -> None:
    logger.info("generating: %s", path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def generate_project(
    input_dir: Union[str, Path],
    output_dir: Union[str, Path],
    config: CompilerConfig = DEFAULT_CONFIG,
    diagnostics: Optional[ProgramDiagnostics] = None,
    show_progress: bool = False,
) -> ProjectResult:
    """Compile every interface file below ``input_dir`` into ``output_dir``.

    Writes ``{out}/{package}/{msg|srv}/{file}.rs`` for each file that
    compiles, then the module index files. Files that fail are reported as
    errors in ``diagnostics`` and produce no output; the others still do.

    Raises:
        NotADirectoryError: If ``input_dir`` is not a directory
    """
    diagnostics = diagnostics or ProgramDiagnostics()
    output_dir = Path(output_dir)
    result = ProjectResult()

    sources = discover_sources(input_dir)
    if not sources:
        diagnostics.warning(
            f"No .msg or .srv files found in {input_dir}", stage="project"
        )
        return result

    outcomes = _compile_all(sources, config, diagnostics.log_level, show_progress)

    index = ModuleIndex()
    claimed: Dict[Path, Path] = {}
    for outcome in sorted(outcomes, key=lambda outcome: outcome.source.path):
        source = outcome.source
        diagnostics.merge(outcome.diagnostics)
        if outcome.failed:
            result.failures.append(source.path)
            continue

        target = source.output_path(output_dir)
        if target in claimed:
            diagnostics.error(
                f"{source.path} and {claimed[target]} would both generate {target}",
                source_file=str(source.path),
                stage="project",
            )
            result.failures.append(source.path)
            continue
        claimed[target] = source.path

        _write_lines(target, outcome.lines)
        result.written.append(target)
        index.add(source)
        result.dependencies.setdefault(source.package, set()).update(
            outcome.dependencies
        )

    if index:
        for path, lines in index.files(output_dir).items():
            _write_lines(path, lines)
            result.written.append(path)

    for package, dependencies in sorted(result.dependencies.items()):
        external = sorted(dependencies - {package})
        if external:
            logger.info("%s depends on: %s", package, ", ".join(external))

    return result
