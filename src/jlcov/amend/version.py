"""Syntax version detection for Julia source files.

The version a file should be parsed with is pinned by the nearest project
file (``[syntax] julia_version``), or, inside Julia's own source tree, by the
``VERSION`` file at its root.
"""

import re
import tomllib
from pathlib import Path

from jlcov.config.constants import DEFAULT_SYNTAX_VERSION, PROJECT_FILENAMES
from jlcov.core.logging import get_logger

log = get_logger(__name__)

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)")


def _normalize(raw: str) -> str | None:
    m = _VERSION_RE.match(raw.strip())
    if m is None:
        return None
    return f"{int(m.group(1))}.{int(m.group(2))}"


def _locate_project_file(directory: Path) -> Path | None:
    for name in PROJECT_FILENAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def _project_syntax_version(project_file: Path) -> str | None:
    try:
        with project_file.open("rb") as f:
            project = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        log.debug("project_file_unreadable", path=str(project_file), error=str(e))
        return None
    syntax = project.get("syntax")
    if not isinstance(syntax, dict):
        return None
    julia_version = syntax.get("julia_version")
    if not isinstance(julia_version, str):
        return None
    return _normalize(julia_version)


def _version_file_syntax_version(version_file: Path) -> str | None:
    try:
        content = version_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        log.debug("version_file_unreadable", path=str(version_file), error=str(e))
        return None
    return _normalize(content)


def detect_syntax_version(filename: str | Path, default: str = DEFAULT_SYNTAX_VERSION) -> str:
    """Syntax version (``"MAJOR.MINOR"``) to parse ``filename`` with.

    Walks up from the file's directory. In each directory the first project
    file (``JuliaProject.toml`` before ``Project.toml``) is checked for a
    ``[syntax] julia_version`` entry, then a ``VERSION`` file such as
    ``1.14.0-DEV``. Unreadable or unparsable files are skipped. Falls back to
    ``default``, which is safe because newer grammars keep accepting older
    syntax.
    """
    directory = Path(filename).resolve().parent
    while True:
        project_file = _locate_project_file(directory)
        if project_file is not None:
            version = _project_syntax_version(project_file)
            if version is not None:
                return version

        version_file = directory / "VERSION"
        if version_file.is_file():
            version = _version_file_syntax_version(version_file)
            if version is not None:
                return version

        if directory.parent == directory:
            break
        directory = directory.parent
    return default
