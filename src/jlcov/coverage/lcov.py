"""LCOV trace reading and writing.

LCOV is a plain text format with one block per source file:
- SF:<source file path>
- DA:<line>,<hit count>[,<checksum>]
- LH:<lines hit>
- LF:<lines found>
- end_of_record

Only line data is produced or consumed. Other record types (TN, FN, FNDA,
BRDA, ...) written by other tools are skipped on read. Source text is never
stored in a trace, so records read back always have an empty ``source``.

Written traces must stay byte-for-byte stable: blocks follow input order, DA
entries ascend by line and every line ends with ``\\n``.
"""

from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from jlcov.config.constants import LCOV_TRACE_SUFFIX
from jlcov.core.logging import get_logger
from jlcov.coverage.models import CovCount, FileCoverage, get_summary

log = get_logger(__name__)


def write(stream: TextIO, fcs: Iterable[FileCoverage]) -> None:
    """Write one LCOV block per record, in order."""
    for fc in fcs:
        _write_record(stream, fc)


def _write_record(stream: TextIO, fc: FileCoverage) -> None:
    stream.write(f"SF:{fc.filename}\n")
    for line, count in enumerate(fc.coverage, start=1):
        if count is None:
            continue
        stream.write(f"DA:{line},{count}\n")
    covered, instrumented = get_summary(fc)
    stream.write(f"LH:{covered}\n")
    stream.write(f"LF:{instrumented}\n")
    stream.write("end_of_record\n")


def writefile(path: str | Path, fcs: Iterable[FileCoverage]) -> None:
    """Write records to ``path``, replacing any existing trace."""
    with Path(path).open("w", encoding="utf-8", newline="\n") as f:
        write(f, fcs)


def _to_vector(counts: dict[int, int]) -> list[CovCount]:
    coverage: list[CovCount] = [None] * max(counts, default=0)
    for line, count in counts.items():
        coverage[line - 1] = count
    return coverage


def read(lines: Iterable[str]) -> list[FileCoverage]:
    """Parse LCOV text (any iterable of lines, e.g. an open file)."""
    records: list[FileCoverage] = []
    filename: str | None = None
    counts: dict[int, int] = {}

    for raw in lines:
        line = raw.strip()
        if not line:
            continue

        if line.startswith("SF:"):
            if filename is not None:
                # Previous block was missing its end_of_record
                records.append(FileCoverage(filename, "", _to_vector(counts)))
            filename = line[3:]
            counts = {}

        elif line.startswith("DA:"):
            if filename is None:
                log.debug("lcov_da_outside_record", entry=line)
                continue
            parts = line[3:].split(",")
            try:
                line_num = int(parts[0])
                hits = int(parts[1])
            except (IndexError, ValueError):
                log.debug("lcov_bad_da_entry", entry=line, source_file=filename)
                continue
            if line_num < 1:
                log.debug("lcov_bad_da_entry", entry=line, source_file=filename)
                continue
            counts[line_num] = hits

        elif line == "end_of_record":
            if filename is not None:
                records.append(FileCoverage(filename, "", _to_vector(counts)))
            filename = None
            counts = {}

    # Handle a final block without end_of_record
    if filename is not None:
        records.append(FileCoverage(filename, "", _to_vector(counts)))

    return records


def readfile(path: str | Path) -> list[FileCoverage]:
    """Read every record of a single trace file."""
    with Path(path).open(encoding="utf-8") as f:
        return read(f)


def readfolder(folder: str | Path, *, suffix: str = LCOV_TRACE_SUFFIX) -> list[FileCoverage]:
    """Read all trace files below ``folder`` and concatenate their records.

    Records for the same source file are not merged here; pass the result
    to ``merge_file_coverages`` for that.
    """
    folder = Path(folder)
    log.info("reading_lcov_folder", folder=str(folder))
    records: list[FileCoverage] = []
    for path in sorted(folder.rglob(f"*{suffix}")):
        if path.is_file():
            records.extend(readfile(path))
    return records
