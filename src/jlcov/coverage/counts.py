"""Readers for the runtime's fixed-column count files.

Julia writes one ``<source>.<pid>.cov`` file per process (``.mem`` for
allocation tracking). Each line mirrors a source line; its first nine columns
hold a right-aligned count, or ``-`` in the ninth column when the line has no
count.
"""

import re
from pathlib import Path

from jlcov.config.constants import COUNT_FIELD_WIDTH, NOT_APPLICABLE_MARK
from jlcov.core.logging import get_logger
from jlcov.coverage.merge import merge_coverage_counts
from jlcov.coverage.models import CovCount

log = get_logger(__name__)

# Count files with and without the pid
_COV_FILE_RE = re.compile(r"\.jl\.?[0-9]*\.cov$")
_MEM_FILE_RE = re.compile(r"\.jl\.?[0-9]*\.mem$")


def iscovfile(filename: str | Path, source: str | Path | None = None) -> bool:
    """Check whether ``filename`` is a coverage count file.

    With ``source``, the count file must also belong to that source file. Both
    may carry directories, which then have to match.
    """
    name = str(filename)
    if source is not None and not name.startswith(str(source)):
        return False
    return _COV_FILE_RE.search(name) is not None


def ismemfile(filename: str | Path, source: str | Path | None = None) -> bool:
    """Same as ``iscovfile`` for allocation (``.mem``) files."""
    name = str(filename)
    if source is not None and not name.startswith(str(source)):
        return False
    return _MEM_FILE_RE.search(name) is not None


def parse_cov_line(line: str) -> CovCount:
    """Decode the count field at the start of one ``.cov`` line."""
    field = line[:COUNT_FIELD_WIDTH]
    if field[COUNT_FIELD_WIDTH - 1 : COUNT_FIELD_WIDTH] == NOT_APPLICABLE_MARK:
        return None
    return int(field)


def read_cov_file(path: Path) -> list[CovCount]:
    with path.open(encoding="utf-8") as f:
        return [parse_cov_line(line) for line in f]


def _count_source_lines(path: Path) -> int:
    try:
        with path.open("rb") as f:
            return sum(1 for _ in f)
    except FileNotFoundError:
        return 0


def process_cov(filename: str | Path, folder: str | Path) -> list[CovCount]:
    """Combine every ``.cov`` file in ``folder`` that belongs to ``filename``.

    When no count file exists the source was never loaded; every line is then
    reported as ``None`` (one entry per line of the source file).
    """
    filename = Path(filename)
    folder = Path(folder)
    files: list[Path] = []
    if folder.is_dir():
        files = sorted(
            p for p in folder.iterdir() if p.is_file() and iscovfile(p.name, filename.name)
        )

    if not files:
        log.info("coverage_file_missing", filename=str(filename), assumed="no coverage")
        return [None] * _count_source_lines(filename)

    full_coverage: list[CovCount] = []
    for path in files:
        log.info("processing_cov_file", path=str(path))
        full_coverage = merge_coverage_counts(full_coverage, read_cov_file(path))
    return full_coverage
