import shutil

import pytest

from layoutpack.batch import DEFAULT_CACHE_NAME
from layoutpack.errors import MissingCache, MissingDirectory
from layoutpack.minify import minify_directory
from layoutpack.restore import restore_directory


def _snapshot(directory):
    return {p.name: p.read_bytes() for p in directory.iterdir() if p.is_file()}


def test_restore_round_trip(layouts):
    before = _snapshot(layouts)
    minify_directory(layouts)

    result = restore_directory(layouts)

    assert result.ok
    assert result.cache_removed
    assert _snapshot(layouts) == before
    assert (layouts / "a.html").read_bytes() == b"<p>\n\thello\n</p>"
    assert not (layouts / DEFAULT_CACHE_NAME).exists()


def test_restore_round_trip_after_double_minify(layouts):
    before = _snapshot(layouts)
    minify_directory(layouts)
    minify_directory(layouts)

    restore_directory(layouts)

    assert _snapshot(layouts) == before


def test_restore_recreates_deleted_file(layouts):
    minify_directory(layouts)
    (layouts / "a.html").unlink()

    restore_directory(layouts)

    assert (layouts / "a.html").read_bytes() == b"<p>\n\thello\n</p>"


def test_restore_without_cache_leaves_directory_alone(layouts):
    before = _snapshot(layouts)

    with pytest.raises(MissingCache):
        restore_directory(layouts)

    assert _snapshot(layouts) == before


def test_restore_twice_fails_second_time(layouts):
    minify_directory(layouts)
    restore_directory(layouts)

    with pytest.raises(MissingCache):
        restore_directory(layouts)


def test_restore_missing_directory(tmp_path):
    with pytest.raises(MissingDirectory):
        restore_directory(tmp_path / "nope")


def test_restore_keeps_cache_when_a_copy_fails(layouts, monkeypatch):
    minify_directory(layouts)
    real_copy2 = shutil.copy2

    def flaky_copy2(src, dst, *args, **kwargs):
        if str(src).endswith("a.html"):
            raise PermissionError(13, "Permission denied")
        return real_copy2(src, dst, *args, **kwargs)

    monkeypatch.setattr("layoutpack.restore.shutil.copy2", flaky_copy2)

    result = restore_directory(layouts)

    assert not result.ok
    assert not result.cache_removed
    assert [o.name for o in result.failures] == ["a.html"]
    assert "restore failed" in str(result.failures[0].error)
    assert (layouts / DEFAULT_CACHE_NAME / "a.html").read_bytes() == b"<p>\n\thello\n</p>"
    assert b"\n" in (layouts / "post.html").read_bytes()
