"""Per-line coverage data model.

Counts are either an ``int >= 0`` ("this line could run, and ran N times") or
``None`` ("no count makes sense here", e.g. comments, blank lines and
declarations). ``None`` and ``0`` are never interchangeable.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

CovCount = int | None


@dataclass(slots=True)
class FileCoverage:
    """Coverage for one source file.

    ``coverage[i]`` holds the count for line ``i + 1``. The vector may be
    shorter than the file when the producer stopped at the last executable
    line; it is only ever extended with ``None``, never truncated.
    """

    filename: str
    source: str = ""
    coverage: list[CovCount] = field(default_factory=list)

    def count_at(self, line: int) -> CovCount:
        """Count for 1-based ``line``; lines past the vector read as ``None``."""
        if 1 <= line <= len(self.coverage):
            return self.coverage[line - 1]
        return None

    def ensure_length(self, nlines: int) -> None:
        """Pad the vector with ``None`` up to ``nlines`` entries."""
        missing = nlines - len(self.coverage)
        if missing > 0:
            self.coverage.extend([None] * missing)

    def copy(self) -> FileCoverage:
        return FileCoverage(self.filename, self.source, list(self.coverage))


def _summarize(fc: FileCoverage) -> tuple[int, int]:
    covered = sum(1 for c in fc.coverage if c is not None and c > 0)
    total = sum(1 for c in fc.coverage if c is not None)
    return covered, total


def get_summary(fcs: FileCoverage | Iterable[FileCoverage]) -> tuple[int, int]:
    """Summarize one record or several as ``(covered_lines, total_lines)``.

    A line is covered when its count is positive and counted towards the total
    when it has any count at all.
    """
    if isinstance(fcs, FileCoverage):
        return _summarize(fcs)
    covered, total = 0, 0
    for fc in fcs:
        c, t = _summarize(fc)
        covered += c
        total += t
    return covered, total
