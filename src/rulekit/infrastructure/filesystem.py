"""Filesystem operations: mode-file discovery, markdown discovery, writes."""

from __future__ import annotations

from pathlib import Path

# Directories to skip when discovering markdown files.
_SKIP_DIRS = frozenset({".git", ".rulekit", "node_modules", ".venv"})


def find_mode_files(directory: Path, pattern: str = "*-mode.md") -> list[Path]:
    """Files directly in *directory* matching *pattern*, sorted by name."""
    return sorted(p for p in directory.glob(pattern) if p.is_file())


def find_markdown_files(paths: list[Path]) -> list[Path]:
    """Expand *paths*: files are kept, directories are searched for ``*.md``.

    Raises:
        FileNotFoundError: A path does not exist.
    """
    results: list[Path] = []
    for path in paths:
        if path.is_file():
            results.append(path)
            continue
        if not path.exists():
            raise FileNotFoundError(path)
        for candidate in sorted(path.rglob("*.md")):
            if not candidate.is_file():
                continue
            rel_parts = candidate.relative_to(path).parts
            if any(part in _SKIP_DIRS for part in rel_parts):
                continue
            results.append(candidate)
    return results


def write_text_file(path: Path, content: str) -> None:
    """Write *content* to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def resolve_in_root(root: Path, target: str | Path) -> Path:
    """Resolve *target* against *root*.

    Relative targets must stay inside *root*; absolute targets are taken
    as given.

    Raises:
        ValueError: A relative target escapes *root*.
    """
    candidate = Path(target).expanduser()
    if candidate.is_absolute():
        return candidate
    result = root / candidate
    if not result.resolve().is_relative_to(root.resolve()):
        msg = f"Path escapes workspace root: {target}"
        raise ValueError(msg)
    return result
