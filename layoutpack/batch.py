from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .errors import IOFailure

DEFAULT_CACHE_NAME = ".minify-cache"
ALREADY_CACHED = "already_cached"


@dataclass
class FileOutcome:
    name: str
    ok: bool = True
    error: IOFailure | None = None
    note: str | None = None
    size_before: int | None = None
    size_after: int | None = None


@dataclass
class BatchResult:
    """Per-file outcomes of one minify or restore run over a directory."""

    operation: str
    directory: Path
    outcomes: list[FileOutcome] = field(default_factory=list)
    cache_removed: bool = False

    @property
    def failures(self) -> list[FileOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def bytes_saved(self) -> int:
        saved = 0
        for outcome in self.outcomes:
            if outcome.ok and outcome.size_before is not None and outcome.size_after is not None:
                saved += outcome.size_before - outcome.size_after
        return saved

    def summary(self) -> str:
        done = len(self.outcomes) - len(self.failures)
        text = f"{self.operation} {self.directory}: {done}/{len(self.outcomes)} files"
        if self.operation == "minify":
            text += f", {self.bytes_saved} bytes saved"
        if self.failures:
            text += f", {len(self.failures)} failed"
        return text


def cache_path(directory: Path, cache_name: str = DEFAULT_CACHE_NAME) -> Path:
    """Return the cache folder location inside ``directory``.

    ``cache_name`` must be a single plain path component so the cache always
    lives directly inside the target directory.
    """
    if not cache_name or cache_name in (".", "..") or Path(cache_name).name != cache_name or "\\" in cache_name:
        raise ValueError(f"invalid cache name: {cache_name!r}")
    return directory / cache_name


def regular_files(directory: Path) -> list[Path]:
    """Regular files directly inside ``directory``, sorted by name."""
    return sorted((entry for entry in directory.iterdir() if entry.is_file()), key=lambda p: p.name)
