"""Check that code blocks in docstrings are properly closed, and that doctest blocks end with a blank line."""

import ast
import re
import sys
from pathlib import Path
from typing import NamedTuple

import rich
import rich.table
import rich.text

import pyostream as ps

SRC_DIR = Path().joinpath("src", "pyostream")
FENCE_PATTERN = re.compile(r"^\s*```(\w*)\s*$")


class DocstringError(NamedTuple):
    """Error found in a docstring."""

    file_path: Path
    name: str
    line_no: int
    message: str


class BlockState(NamedTuple):
    """Open fenced block during the line scan, with the offset and content of its last line."""

    opened_at: int | None
    language: str
    last_line: str


def _documented(tree: ast.Module) -> ps.Stream[tuple[str, int, str]]:
    def _docstring(node: ast.AST) -> tuple[str, int, str] | None:
        if not isinstance(node, (ast.Module, ast.ClassDef, ast.FunctionDef, ast.AsyncFunctionDef)):
            return None
        doc = ast.get_docstring(node, clean=False)
        if doc is None:
            return None
        return (getattr(node, "name", "<module>"), getattr(node, "lineno", 1), doc)

    return ps.Stream(ast.walk(tree)).map(_docstring).filter(lambda doc: doc is not None)  # type: ignore[return-value]


def _check_docstring(file_path: Path, name: str, line_no: int, doc: str) -> list[DocstringError]:
    errors: list[DocstringError] = []
    state = BlockState(opened_at=None, language="", last_line="")
    for offset, line in ps.Stream(doc.split("\n")).enumerate():
        match = FENCE_PATTERN.match(line)
        if match is None:
            if state.opened_at is not None:
                state = state._replace(last_line=line)
            continue
        if state.opened_at is None:
            state = BlockState(offset, match.group(1) or "plaintext", "")
            continue
        if match.group(1):
            errors.append(DocstringError(file_path, name, line_no + offset, "Nested ``` block"))
            continue
        if state.language == "python" and state.last_line.strip():
            errors.append(
                DocstringError(file_path, name, line_no + offset, "Python block must end with a blank line")
            )
        state = BlockState(opened_at=None, language="", last_line="")
    if state.opened_at is not None:
        errors.append(
            DocstringError(file_path, name, line_no + state.opened_at, f"Unclosed ```{state.language} block")
        )
    return errors


def _check_file(file_path: Path) -> list[DocstringError]:
    tree = ast.parse(file_path.read_text(encoding="utf-8"))
    return (
        _documented(tree)
        .flat_map(lambda doc: _check_docstring(file_path, *doc))
        .collect()
    )


def main() -> int:
    """Check all docstrings in the project."""
    rich.print(rich.text.Text("Checking docstrings for properly closed code blocks...", style="cyan bold"))
    files = sorted(SRC_DIR.rglob("*.py"))
    rich.print(f"Checking {len(files)} py files...")

    all_errors = ps.Stream(files).flat_map(_check_file).collect()
    if not all_errors:
        rich.print(rich.text.Text("[OK] No issues found!", style="green"))
        return 0

    table = rich.table.Table(title="Issues Found", show_header=True)
    table.add_column("File", style="cyan")
    table.add_column("Name", style="magenta")
    table.add_column("Error", style="red")
    ps.Stream(all_errors).each(
        lambda error: table.add_row(f"{error.file_path}:{error.line_no}", error.name, error.message)
    )
    rich.print(table)
    rich.print(rich.text.Text(f"\n[FAILED] Found {len(all_errors)} issue(s)", style="red"))
    return 1


if __name__ == "__main__":
    sys.exit(main())
