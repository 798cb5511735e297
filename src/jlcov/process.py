"""Turn a package's source tree plus ``.cov`` files into coverage records.

Typical use, from a package root after running its tests with
``--code-coverage=user``::

    from jlcov import process_folder, get_summary, lcov

    results = process_folder("src")
    lcov.writefile("lcov.info", results)
    covered, total = get_summary(results)
"""

from pathlib import Path

from jlcov.amend.engine import amend_coverage_from_src
from jlcov.amend.parser import StatementParser
from jlcov.amend.version import detect_syntax_version
from jlcov.config.constants import SOURCE_SUFFIX
from jlcov.config.models import AmendConfig
from jlcov.core.logging import bind_file, get_logger, unbind_file
from jlcov.coverage.counts import iscovfile, ismemfile, process_cov
from jlcov.coverage.models import FileCoverage

log = get_logger(__name__)


def process_file(
    filename: str | Path,
    folder: str | Path | None = None,
    *,
    amend: AmendConfig | bool = True,
    parser: StatementParser | None = None,
) -> FileCoverage:
    """Build the coverage record for one source file.

    Counts come from the matching ``.cov`` files in ``folder`` (the file's own
    directory by default). With amendment enabled, lines inside functions the
    runtime never compiled are upgraded from ``None`` to ``0``.

    Raises:
        ParseError: Amendment is enabled and the source does not parse.
    """
    filename = Path(filename)
    folder = Path(folder) if folder is not None else filename.parent
    if isinstance(amend, bool):
        amend = AmendConfig(enabled=amend)

    bind_file(str(filename))
    try:
        log.info("processing_source_file")
        coverage = process_cov(filename, folder)
        fc = FileCoverage(str(filename), filename.read_text(encoding="utf-8"), coverage)
        if amend.enabled:
            amend_coverage_from_src(
                fc,
                parser=parser,
                syntax_version=detect_syntax_version(filename, amend.default_syntax_version),
                markers=amend.markers,
            )
    finally:
        unbind_file()
    return fc


def process_folder(
    folder: str | Path = "src",
    *,
    amend: AmendConfig | bool = True,
    parser: StatementParser | None = None,
) -> list[FileCoverage]:
    """Process every ``.jl`` file below ``folder``, recursing into subfolders.

    The default suits the common case of running from a package root.
    """
    folder = Path(folder)
    log.info("searching_folder", folder=str(folder))
    results: list[FileCoverage] = []
    for path in sorted(folder.iterdir()):
        if path.is_file():
            if path.suffix == SOURCE_SUFFIX:
                results.append(process_file(path, folder, amend=amend, parser=parser))
            else:
                log.debug("skipping_file", path=str(path), reason="not a .jl file")
        elif path.is_dir():
            results.extend(process_folder(path, amend=amend, parser=parser))
    return results


def clean_folder(folder: str | Path, *, include_memfiles: bool = False) -> None:
    """Delete ``.cov`` (and optionally ``.mem``) files below ``folder``.

    Unlike ``process_folder`` there is no default folder.
    """
    for path in sorted(Path(folder).iterdir()):
        if path.is_file() and (iscovfile(path.name) or (include_memfiles and ismemfile(path.name))):
            log.info("removing_file", path=str(path))
            path.unlink()
        elif path.is_dir():
            clean_folder(path, include_memfiles=include_memfiles)


def clean_file(filename: str | Path, *, include_memfiles: bool = False) -> None:
    """Delete the ``.cov`` (and optionally ``.mem``) files of one source file.

    Only siblings of the source file are considered.
    """
    filename = Path(filename)
    folder = filename.parent
    for path in sorted(folder.iterdir()):
        if not path.is_file():
            continue
        if iscovfile(path, filename) or (include_memfiles and ismemfile(path, filename)):
            log.info("removing_file", path=str(path))
            path.unlink()
