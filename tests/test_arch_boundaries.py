from __future__ import annotations

import ast
from pathlib import Path

# High-level orchestrator modules.
# LOW-level code (core/engine) must NEVER import these.
#
# config/errors/log are shared contracts, not ORCH: core and engine may import them.
ORCH_MODULES: tuple[str, ...] = ("huffproc.cli", "huffproc.verify")

PACKAGE_ROOT = "huffproc"


def _module_name(src_dir: Path, py_file: Path) -> str:
    return ".".join(py_file.relative_to(src_dir).with_suffix("").parts)


def _imported_modules(mod: str, tree: ast.AST) -> list[tuple[str, int]]:
    out: list[tuple[str, int]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            out.extend((alias.name, node.lineno) for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            if node.level:
                base = mod.split(".")[: -node.level]
                name = ".".join(base + ([node.module] if node.module else []))
            else:
                name = node.module or ""
            out.append((name, node.lineno))
    return [(n, ln) for n, ln in out if n == PACKAGE_ROOT or n.startswith(PACKAGE_ROOT + ".")]


def _is_orch(mod: str) -> bool:
    return any(mod == p or mod.startswith(p + ".") for p in ORCH_MODULES)


def test_no_low_level_imports_orchestrator() -> None:
    """
    Hard dependency direction:
      ORCH (cli, verify) -> may depend on LOW
      LOW                -> must NOT depend on ORCH
    """
    src_dir = Path(__file__).resolve().parents[1] / "src"
    assert (src_dir / PACKAGE_ROOT).is_dir(), f"Expected src/{PACKAGE_ROOT} at: {src_dir}"

    violations: list[str] = []
    for py in sorted((src_dir / PACKAGE_ROOT).rglob("*.py")):
        mod = _module_name(src_dir, py)
        if _is_orch(mod):
            continue
        tree = ast.parse(py.read_text(encoding="utf-8"), filename=str(py))
        for dst, lineno in _imported_modules(mod, tree):
            if _is_orch(dst):
                violations.append(f"  {py}:{lineno}  {mod}  ->  {dst}")

    assert not violations, "Forbidden imports detected (LOW -> ORCH):\n" + "\n".join(violations)


def test_core_does_not_import_engine() -> None:
    src_dir = Path(__file__).resolve().parents[1] / "src"
    for py in sorted((src_dir / PACKAGE_ROOT / "core").rglob("*.py")):
        mod = _module_name(src_dir, py)
        tree = ast.parse(py.read_text(encoding="utf-8"), filename=str(py))
        for dst, lineno in _imported_modules(mod, tree):
            assert not dst.startswith("huffproc.engine"), f"{py}:{lineno} imports {dst}"
