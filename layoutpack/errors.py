"""Errors raised by minify/restore and the preview server."""

from pathlib import Path


class LayoutpackError(Exception):
    """Base class for directory-level failures."""


class MissingDirectory(LayoutpackError):
    def __init__(self, directory: Path):
        self.directory = directory
        super().__init__(f"Directory not found: {directory}")


class MissingCache(LayoutpackError):
    def __init__(self, directory: Path, cache: Path):
        self.directory = directory
        self.cache = cache
        super().__init__(f"Nothing to restore in {directory}: no cache folder {cache.name}")


class CacheCollision(LayoutpackError):
    def __init__(self, directory: Path, cache: Path):
        self.directory = directory
        self.cache = cache
        super().__init__(f"Cache name {cache.name!r} in {directory} is taken by a non-directory entry")


class IOFailure(LayoutpackError):
    """A read/write/copy/delete failure on a single file."""

    def __init__(self, operation: str, path: Path, cause: OSError):
        self.operation = operation
        self.path = path
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"{operation} failed for {path}: {reason}")
