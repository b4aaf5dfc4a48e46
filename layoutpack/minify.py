"""Back up and minify the files of a layout directory in place.

Files are treated as opaque bytes: only newline and tab bytes are removed, so
template syntax of the site generator is never touched.
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path

from .batch import ALREADY_CACHED, DEFAULT_CACHE_NAME, BatchResult, FileOutcome, cache_path, regular_files
from .errors import CacheCollision, IOFailure, MissingDirectory
from .log_utils import log

FORMATTING_WHITESPACE = re.compile(rb"[\n\t]+")


def minify_bytes(content: bytes) -> bytes:
    return FORMATTING_WHITESPACE.sub(b"", content)


def _prepare_cache(directory: Path, cache_name: str) -> Path:
    directory = Path(directory)
    cache = cache_path(directory, cache_name)
    if not directory.is_dir():
        raise MissingDirectory(directory)
    if cache.exists() and not cache.is_dir():
        raise CacheCollision(directory, cache)
    cache.mkdir(exist_ok=True)
    return cache


def _minify_file(path: Path, cache: Path) -> FileOutcome:
    outcome = FileOutcome(path.name)
    backup = cache / path.name
    if backup.exists():
        # Keep the original from the earlier run; the live file is already minified.
        outcome.note = ALREADY_CACHED
    else:
        try:
            shutil.copy2(path, backup)
        except OSError as e:
            outcome.ok = False
            outcome.error = IOFailure("backup", path, e)
            return outcome

    try:
        content = path.read_bytes()
    except OSError as e:
        outcome.ok = False
        outcome.error = IOFailure("read", path, e)
        return outcome

    minified = minify_bytes(content)
    outcome.size_before = len(content)
    outcome.size_after = len(minified)
    if minified == content:
        return outcome

    try:
        path.write_bytes(minified)
    except OSError as e:
        outcome.ok = False
        outcome.error = IOFailure("write", path, e)
    return outcome


def minify_directory(directory: str | Path, cache_name: str = DEFAULT_CACHE_NAME) -> BatchResult:
    """Minify every regular file directly inside ``directory``.

    Originals are copied into the cache folder first. A file that already
    has a cached copy keeps it, so minifying twice without a restore never
    replaces the original backup. Failures are recorded per file and do not
    stop the remaining files.
    """
    directory = Path(directory)
    cache = _prepare_cache(directory, cache_name)
    result = BatchResult("minify", directory)

    for path in regular_files(directory):
        outcome = _minify_file(path, cache)
        result.outcomes.append(outcome)
        if outcome.error is not None:
            log("error", str(outcome.error))
        elif outcome.note == ALREADY_CACHED:
            log("warn", f"{path}: backup already present, keeping the cached original")

    log("error" if result.failures else "info", result.summary())
    return result
