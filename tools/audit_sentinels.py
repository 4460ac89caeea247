#!/usr/bin/env python3
"""
Audit for centralized format constants.

Fails if:
- role sentinel labels ("INSTRUCTIONS", the machine name) appear as literals
  outside defaults/settings
- platoHtml tag/class names or the block terminator are hardcoded in
  extractors or serializers
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path
from typing import Iterable


ROOT = Path(__file__).resolve().parents[1]
SEARCH_DIRS = ["plato_transcript", "tools"]
EXCLUDE_DIR_PARTS = {"tests", "venv", "__pycache__"}
ALLOWED_FILES = {
    ROOT / "plato_transcript" / "defaults.py",
    ROOT / "plato_transcript" / "settings.py",
}

SENTINEL_LITERALS = {"INSTRUCTIONS", "MACHINA RATIOCINATRIX"}
FORMAT_LITERALS = {"dialogue", "speaker", "\n\n"}
FORMAT_FILES = {"markup.py", "text_scan.py", "serializers.py"}


def _should_skip(path: Path) -> bool:
    if path in ALLOWED_FILES:
        return True
    return any(part in EXCLUDE_DIR_PARTS for part in path.parts)


class AuditVisitor(ast.NodeVisitor):
    def __init__(self, path: Path):
        self.path = path
        self.issues: list[tuple[int, str]] = []

    def _record(self, node: ast.AST, message: str) -> None:
        self.issues.append((getattr(node, "lineno", 0), message))

    def visit_Constant(self, node: ast.Constant) -> None:
        if isinstance(node.value, str):
            if node.value.upper() in SENTINEL_LITERALS:
                self._record(node, f"role sentinel literal {node.value!r} outside defaults/settings")
            elif self.path.name in FORMAT_FILES and node.value in FORMAT_LITERALS:
                self._record(node, f"format literal {node.value!r} outside defaults")
        self.generic_visit(node)


def _iter_files() -> Iterable[Path]:
    for root in SEARCH_DIRS:
        base = ROOT / root
        for path in base.rglob("*.py"):
            if _should_skip(path):
                continue
            if path == Path(__file__).resolve():
                continue
            yield path


def main() -> None:
    issues: list[tuple[Path, int, str]] = []
    count = 0
    for path in _iter_files():
        count += 1
        tree = ast.parse(path.read_text(encoding="utf-8"))
        visitor = AuditVisitor(path)
        visitor.visit(tree)
        for line, msg in visitor.issues:
            issues.append((path, line, msg))

    if issues:
        for path, line, msg in issues:
            rel = path.relative_to(ROOT)
            print(f"{rel}:{line}: {msg}")
        sys.exit(1)

    print(f"OK {count} files scanned")


if __name__ == "__main__":
    main()
