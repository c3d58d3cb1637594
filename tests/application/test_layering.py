"""The domain and application layers must not depend on infrastructure."""

import ast
from pathlib import Path

import pytest

import catalog

PACKAGE_ROOT = Path(catalog.__file__).parent


def _imported_modules(path: Path) -> set[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"))
    modules = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module:
            modules.add(node.module)
    return modules


@pytest.mark.parametrize("layer", ["domain", "application"])
def test_layer_does_not_import_infrastructure(layer):
    for path in sorted((PACKAGE_ROOT / layer).rglob("*.py")):
        offending = {m for m in _imported_modules(path) if m.startswith("catalog.infrastructure")}
        assert not offending, f"{path.name} imports {sorted(offending)}"
