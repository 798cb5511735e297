"""Coverage merging with sum semantics.

When the same source file is reported by several processes (one ``.cov``
file per pid) or by several saved traces, counts are added line by line:

- line[i] = a[i] + b[i] when both have a count
- line[i] = the one count present when the other is None
- line[i] = None only when neither has a count

This is commutative and associative, so partial results can be merged in any
grouping.
"""

from collections.abc import Iterable, Sequence

from jlcov.coverage.models import CovCount, FileCoverage


def merge_coverage_counts(a: Sequence[CovCount], b: Sequence[CovCount]) -> list[CovCount]:
    """Sum two count vectors, keeping ``None`` only where both are ``None``.

    The result is as long as the longer input; positions past the end of the
    shorter one read as ``None``. Neither input is modified.
    """
    merged: list[CovCount] = []
    for i in range(max(len(a), len(b))):
        av = a[i] if i < len(a) else None
        bv = b[i] if i < len(b) else None
        if av is None:
            merged.append(bv)
        elif bv is None:
            merged.append(av)
        else:
            merged.append(av + bv)
    return merged


def merge_file_coverages(*collections: Iterable[FileCoverage]) -> list[FileCoverage]:
    """Fold collections of records into one list keyed by filename.

    Records keep the order in which their filename first appears. The first
    non-empty ``source`` wins and counts are summed with
    ``merge_coverage_counts``. Input records are copied, never modified.
    """
    merged: list[FileCoverage] = []
    seen: dict[str, FileCoverage] = {}
    for collection in collections:
        for fc in collection:
            existing = seen.get(fc.filename)
            if existing is None:
                existing = fc.copy()
                seen[fc.filename] = existing
                merged.append(existing)
                continue
            if not existing.source:
                existing.source = fc.source
            existing.coverage = merge_coverage_counts(existing.coverage, fc.coverage)
    return merged
