from __future__ import annotations

import ast
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

# Collaborator modules: the CLI driver, reporting and visualization.
# The codec core (core/layers/engine/errors/pipeline_spec) must NEVER import these.
COLLAB_PREFIXES: tuple[str, ...] = (
    "shiftpress.cli",
    "shiftpress.report",
    "shiftpress.viz",
)

PACKAGE_ROOT = "shiftpress"


@dataclass(frozen=True)
class ImportEdge:
    src: str
    dst: str
    file: Path
    lineno: int


def _is_collab(mod: str) -> bool:
    return any(mod == p or mod.startswith(p + ".") for p in COLLAB_PREFIXES)


def _module_name_from_path(src_dir: Path, py_file: Path) -> str | None:
    try:
        rel = py_file.relative_to(src_dir)
    except ValueError:
        return None

    parts = list(rel.parts)
    if not parts or parts[0] != PACKAGE_ROOT:
        return None

    if py_file.name == "__init__.py":
        parts = parts[:-1]
    else:
        parts[-1] = py_file.stem

    if not parts:
        return None
    return ".".join(parts)


def _resolve_relative(current_mod: str, level: int, module: str | None) -> str | None:
    if level <= 0:
        return module

    base = current_mod.split(".")[:-1]
    if level > len(base):
        return None
    base = base[: len(base) - level + 1]

    if module:
        return ".".join(base + module.split("."))
    return ".".join(base)


def _iter_import_edges(src_dir: Path) -> Iterable[ImportEdge]:
    for py in src_dir.rglob("*.py"):
        mod = _module_name_from_path(src_dir, py)
        if not mod:
            continue

        tree = ast.parse(py.read_text(encoding="utf-8"), filename=str(py))

        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    name = alias.name
                    if name.startswith(PACKAGE_ROOT + ".") or name == PACKAGE_ROOT:
                        yield ImportEdge(src=mod, dst=name, file=py, lineno=node.lineno)

            elif isinstance(node, ast.ImportFrom):
                if node.module is None and node.level == 0:
                    continue
                abs_mod = _resolve_relative(mod, node.level, node.module)
                if not abs_mod:
                    continue
                if abs_mod.startswith(PACKAGE_ROOT + ".") or abs_mod == PACKAGE_ROOT:
                    yield ImportEdge(src=mod, dst=abs_mod, file=py, lineno=node.lineno)


def test_core_does_not_import_collaborators() -> None:
    """
    Dependency direction:
      collaborators (cli/report/viz) -> may depend on the core
      core                           -> must NOT depend on collaborators
    """
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    if not src_dir.is_dir():
        raise AssertionError(f"Expected src/ directory at: {src_dir}")

    violations: list[ImportEdge] = []
    seen = 0

    for edge in _iter_import_edges(src_dir):
        seen += 1
        if edge.src == edge.dst:
            continue
        if (not _is_collab(edge.src)) and _is_collab(edge.dst):
            violations.append(edge)

    assert seen > 0, "no internal imports found; wrong src layout?"

    if violations:
        lines = ["Forbidden imports detected (core -> collaborator):"]
        for v in sorted(violations, key=lambda e: (str(e.file), e.lineno, e.src, e.dst)):
            lines.append(f"  {v.file}:{v.lineno}  {v.src}  ->  {v.dst}")
        lines.append("")
        lines.append("Fix: keep printing/rendering in cli/report/viz, not in the codec modules.")
        raise AssertionError("\n".join(lines))
