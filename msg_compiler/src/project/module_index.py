"""Rust module index files tying the generated files together.

For an output directory ``out``::

    out/mod.rs              pub mod {package};
    out/{package}/mod.rs    pub mod msg; pub use msg::*; pub mod srv;
    out/{package}/msg.rs    mod {file}; ... pub use {file}::*; ...
    out/{package}/srv.rs    same as msg.rs

Every list is sorted so the files do not depend on compilation order.
"""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, List, Set

from msg_compiler.src.common.constants import MSG_CATEGORY
from .discovery import SourceFile


def render_category_index(modules: Iterable[str]) -> List[str]:
    modules = sorted(set(modules))
    lines = [f"mod {module};" for module in modules]
    lines.append("")
    lines.extend(f"pub use {module}::*;" for module in modules)
    return lines


def render_package_index(categories: Iterable[str]) -> List[str]:
    lines = []
    for category in sorted(set(categories)):
        lines.append(f"pub mod {category};")
        # messages are re-exported at package level, services are not
        if category == MSG_CATEGORY:
            lines.append(f"pub use {category}::*;")
    return lines


def render_root_index(packages: Iterable[str]) -> List[str]:
    return [f"pub mod {package};" for package in sorted(set(packages))]


class ModuleIndex:
    """Collects generated modules per package and category."""

    def __init__(self) -> None:
        self.packages: Dict[str, Dict[str, Set[str]]] = defaultdict(
            lambda: defaultdict(set)
        )

    def add(self, source: SourceFile) -> None:
        self.packages[source.package][source.category].add(source.module_name)

    def __bool__(self) -> bool:
        return bool(self.packages)

    def files(self, output_dir: Path) -> Dict[Path, List[str]]:
        """Return the lines of every index file, keyed by path."""
        output_dir = Path(output_dir)
        result: Dict[Path, List[str]] = {
            output_dir / "mod.rs": render_root_index(self.packages)
        }
        for package in sorted(self.packages):
            categories = self.packages[package]
            package_dir = output_dir / package
            result[package_dir / "mod.rs"] = render_package_index(categories)
            for category in sorted(categories):
                result[package_dir / f"{category}.rs"] = render_category_index(
                    categories[category]
                )
        return result
