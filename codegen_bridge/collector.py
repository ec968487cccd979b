"""Source collection - aggregates project files into a prompt context."""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from pathspec import GitIgnoreSpec
from rich.console import Console
from rich.markup import escape

from codegen_bridge.config import DEFAULT_EXTENSIONS

console = Console(stderr=True)

FILE_DELIMITER = "\n---\n\n"
IGNORE_FILES = (".gitignore", ".ignore")


class SourceDirectoryNotFoundError(FileNotFoundError):
    """Raised when the directory to collect from does not exist."""


@dataclass
class _IgnoreRules:
    """Ignore patterns read from one directory, relative to that directory."""

    base: Path
    spec: GitIgnoreSpec

    def check(self, path: Path, is_dir: bool) -> bool | None:
        """Return True if ignored, False if re-included, None if no pattern matched."""
        rel = path.relative_to(self.base).as_posix()
        if is_dir:
            rel += "/"
        verdict = None
        for pattern in self.spec.patterns:
            if pattern.include is not None and pattern.match_file(rel) is not None:
                verdict = pattern.include
        return verdict


def _ignore_sources(directory: Path, root: Path) -> list[Path]:
    # Later files win: exclude < .gitignore < .ignore
    sources = [directory / name for name in IGNORE_FILES]
    if directory == root:
        sources.insert(0, root / ".git" / "info" / "exclude")
    return sources


def _load_rules(directory: Path, sources: list[Path]) -> _IgnoreRules | None:
    lines: list[str] = []
    for source in sources:
        if not source.is_file():
            continue
        try:
            lines.extend(source.read_text(encoding="utf-8", errors="replace").splitlines())
        except OSError as e:
            console.print(f"[yellow]Warning:[/] Could not read ignore file {escape(str(source))}: {escape(str(e))}")
    valid = []
    for line in lines:
        try:
            GitIgnoreSpec.from_lines([line])
        except ValueError as e:
            console.print(f"[yellow]Warning:[/] Skipping ignore pattern in {escape(str(directory))}: {escape(str(e))}")
            continue
        valid.append(line)
    if not valid:
        return None
    return _IgnoreRules(base=directory, spec=GitIgnoreSpec.from_lines(valid))


def _is_ignored(path: Path, is_dir: bool, rules: list[_IgnoreRules]) -> bool:
    # Deepest rules first; the first directory with a matching pattern decides.
    for rule in reversed(rules):
        verdict = rule.check(path, is_dir)
        if verdict is not None:
            return verdict
    return False


def _normalize_extensions(extensions: Iterable[str] | None) -> set[str]:
    if extensions is None:
        extensions = DEFAULT_EXTENSIONS
    return {ext.strip().lower().lstrip(".") for ext in extensions if ext.strip()}


def _warn_walk_error(error: OSError) -> None:
    console.print(f"[yellow]Warning:[/] Could not read directory: {escape(str(error))}")


def iter_source_files(root: str | Path, extensions: Iterable[str] | None = None) -> Iterator[Path]:
    """Yield files under ``root`` that pass the ignore rules and extension allow-list.

    Hidden files and directories are skipped. ``.gitignore`` and ``.ignore``
    files apply to their own directory and below; ``.git/info/exclude`` at the
    root applies to the whole tree.
    """
    root = Path(root)
    allowed = _normalize_extensions(extensions)
    inherited: dict[Path, list[_IgnoreRules]] = {root: []}

    for dirpath, dirnames, filenames in os.walk(root, onerror=_warn_walk_error):
        current = Path(dirpath)
        rules = inherited.pop(current, [])
        own = _load_rules(current, _ignore_sources(current, root))
        if own is not None:
            rules = [*rules, own]

        dirnames[:] = sorted(
            name for name in dirnames
            if not name.startswith(".") and not _is_ignored(current / name, True, rules)
        )
        for name in dirnames:
            inherited[current / name] = rules

        for name in sorted(filenames):
            if name.startswith("."):
                continue
            path = current / name
            if path.suffix.lower().lstrip(".") not in allowed:
                continue
            if _is_ignored(path, False, rules):
                continue
            yield path


def format_file_block(relative_path: str, content: str) -> str:
    """Label a file's content with its path relative to the collection root."""
    return f"// File: {relative_path}\n{content}\n"


def _collect(root: Path, extensions: Iterable[str] | None) -> str:
    blocks = []
    for path in iter_source_files(root, extensions):
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            console.print(f"[yellow]Warning:[/] Could not read file {escape(str(path))}: {escape(str(e))}")
            continue
        blocks.append(format_file_block(path.relative_to(root).as_posix(), content))
    return FILE_DELIMITER.join(blocks)


async def collect_source_code(
    source_dir: str | Path,
    extensions: Iterable[str] | None = None,
) -> str:
    """Aggregate the allow-listed source files under ``source_dir`` into one string.

    Raises:
        SourceDirectoryNotFoundError: if ``source_dir`` does not exist.
        NotADirectoryError: if ``source_dir`` is not a directory.
    """
    source_path = Path(source_dir)
    if not source_path.exists():
        raise SourceDirectoryNotFoundError(f"Source directory does not exist: {source_dir}")
    if not source_path.is_dir():
        raise NotADirectoryError(f"Source path is not a directory: {source_dir}")

    return await asyncio.to_thread(_collect, source_path, extensions)
