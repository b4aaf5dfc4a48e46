"""Put cached originals back and drop the cache folder."""

from __future__ import annotations

import shutil
from pathlib import Path

from .batch import DEFAULT_CACHE_NAME, BatchResult, FileOutcome, cache_path, regular_files
from .errors import IOFailure, MissingCache, MissingDirectory
from .log_utils import log


def restore_directory(directory: str | Path, cache_name: str = DEFAULT_CACHE_NAME) -> BatchResult:
    """Copy every cached file back into ``directory``.

    The cache folder is removed only when every file was restored; on any
    failure it stays in place so the run can be repeated.
    """
    directory = Path(directory)
    cache = cache_path(directory, cache_name)
    if not directory.is_dir():
        raise MissingDirectory(directory)
    if not cache.is_dir():
        raise MissingCache(directory, cache)

    result = BatchResult("restore", directory)
    for backup in regular_files(cache):
        outcome = FileOutcome(backup.name)
        try:
            shutil.copy2(backup, directory / backup.name)
        except OSError as e:
            outcome.ok = False
            outcome.error = IOFailure("restore", directory / backup.name, e)
            log("error", str(outcome.error))
        result.outcomes.append(outcome)

    if result.failures:
        log("error", f"{result.summary()}; keeping {cache}")
        return result

    try:
        shutil.rmtree(cache)
    except OSError as e:
        failure = FileOutcome(cache.name, ok=False, error=IOFailure("delete", cache, e))
        result.outcomes.append(failure)
        log("error", str(failure.error))
    else:
        result.cache_removed = True

    log("error" if result.failures else "info", result.summary())
    return result
