import ast
import unittest
from pathlib import Path

_BACKEND = Path(__file__).resolve().parents[1] / "backend"


def _absolute_imports(py_file: Path) -> set[str]:
    """Module names a file imports absolutely (relative imports stay inside their package)."""
    tree = ast.parse(py_file.read_text(encoding="utf-8"), filename=str(py_file))
    names: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            names.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module and not node.level:
            names.add(node.module)
    return names


def _layer_violations(layer: str, forbidden: tuple[str, ...]) -> dict[str, list[str]]:
    out: dict[str, list[str]] = {}
    for py_file in sorted((_BACKEND / layer).rglob("*.py")):
        bad = sorted(m for m in _absolute_imports(py_file) if m.split(".")[0] in forbidden)
        if bad:
            out[str(py_file.relative_to(_BACKEND))] = bad
    return out


class TestLayerBoundaryImports(unittest.TestCase):
    def test_domain_is_pure(self) -> None:
        violations = _layer_violations("domain", ("application", "infrastructure", "config", "asyncpg", "pydantic"))
        self.assertEqual(violations, {}, msg="`backend/domain` must stay free of outer layers and libraries")

    def test_application_does_not_import_infra_or_config(self) -> None:
        violations = _layer_violations("application", ("infrastructure", "config", "asyncpg"))
        self.assertEqual(violations, {}, msg="`backend/application` must depend on ports, not adapters")


if __name__ == "__main__":
    unittest.main()
