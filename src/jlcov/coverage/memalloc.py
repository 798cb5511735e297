"""Memory allocation analysis for ``.mem`` files.

With ``--track-allocation`` Julia writes ``<source>.<pid>.mem`` files using the
same column layout as coverage counts, the count being bytes allocated on
that line.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from jlcov.core.logging import get_logger
from jlcov.coverage.counts import ismemfile

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class MallocInfo:
    """Bytes allocated on one line of a source file."""

    bytes: int
    filename: str
    linenumber: int


def find_malloc_files(dirs: str | Path | Iterable[str | Path]) -> list[Path]:
    """Recursively collect allocation files below each directory."""
    if isinstance(dirs, (str, Path)):
        dirs = [dirs]
    files: list[Path] = []
    for directory in dirs:
        for path in sorted(Path(directory).iterdir()):
            if path.is_dir():
                files.extend(find_malloc_files(path))
            elif ismemfile(path.name):
                files.append(path)
    return files


def analyze_malloc_files(files: Iterable[str | Path]) -> list[MallocInfo]:
    """One entry per counted line, sorted by bytes (ascending, stable)."""
    results: list[MallocInfo] = []
    for filename in files:
        with Path(filename).open(encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                stripped = line.strip()
                if stripped and stripped[0].isdigit():
                    results.append(MallocInfo(int(stripped.split()[0]), str(filename), lineno))
    log.debug("malloc_files_analyzed", entries=len(results))
    return sorted(results, key=lambda info: info.bytes)


def analyze_malloc(dirs: str | Path | Iterable[str | Path]) -> list[MallocInfo]:
    """Find and analyze every allocation file below ``dirs``."""
    return analyze_malloc_files(find_malloc_files(dirs))
