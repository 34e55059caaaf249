"""Discovery of interface files below an input directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from msg_compiler.src.common.constants import SOURCE_SUFFIXES
from msg_compiler.src.emission.naming import module_file_stem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFile:
    """One .msg or .srv file and the names inferred from its location."""

    path: Path
    package: str  # first-level directory below the input directory
    category: str  # msg or srv, from the suffix
    type_name: str  # file name up to the first '.'

    @property
    def module_name(self) -> str:
        """Name of the Rust module generated for this file."""
        return module_file_stem(self.type_name)

    def output_path(self, output_dir: Path) -> Path:
        return Path(output_dir) / self.package / self.category / f"{self.module_name}.rs"


def discover_sources(input_dir: Union[str, Path]) -> List[SourceFile]:
    """Find every interface file of every package below ``input_dir``.

    Each first-level directory is a package; .msg and .srv files at any depth
    below it belong to that package. Files directly inside ``input_dir``
    belong to no package and are skipped. The result is sorted by path.

    Raises:
        NotADirectoryError: If ``input_dir`` is not a directory
    """
    input_dir = Path(input_dir)
    if not input_dir.is_dir():
        raise NotADirectoryError(f"Input directory not found: {input_dir}")

    sources: List[SourceFile] = []
    for entry in sorted(input_dir.iterdir()):
        if not entry.is_dir():
            if entry.suffix in SOURCE_SUFFIXES:
                logger.warning("Skipping %s: not inside a package directory", entry)
            continue

        for path in sorted(entry.rglob("*")):
            category = SOURCE_SUFFIXES.get(path.suffix)
            if category is None or not path.is_file():
                continue
            type_name = path.name.split(".")[0]
            sources.append(SourceFile(path, entry.name, category, type_name))

    logger.debug("Found %d interface files in %s", len(sources), input_dir)
    return sources
