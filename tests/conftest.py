"""Make ``import layoutpack`` resolve to the local package when running pytest."""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = str(Path(__file__).resolve().parent.parent)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from layoutpack import log_utils


@pytest.fixture(autouse=True)
def no_log_file():
    log_utils.configure(None)
    yield
    log_utils.configure(None)


@pytest.fixture
def layouts(tmp_path):
    directory = tmp_path / "_layouts"
    directory.mkdir()
    (directory / "a.html").write_bytes(b"<p>\n\thello\n</p>")
    (directory / "post.html").write_bytes(b"{% include head.html %}\n<body>\n\t{{ content }}\n</body>\n")
    return directory
