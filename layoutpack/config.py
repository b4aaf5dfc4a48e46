import json
from pathlib import Path

from .batch import DEFAULT_CACHE_NAME
from .log_utils import log

CONFIG_FILE = Path("layoutpack.json")

DEFAULTS = {
    "cache_name": DEFAULT_CACHE_NAME,
    "directories": ["_layouts", "_includes"],
    "site_dir": "_site",
    "host": "localhost",
    "port": 8080,
    "log_file": None,
}


class ConfigManager:
    """Read-only view of the JSON config, falling back to DEFAULTS."""

    def __init__(self, path: Path | None = None):
        self.path = Path(path) if path is not None else CONFIG_FILE
        self._data = {}
        self._load()

    def _load(self):
        if not self.path.exists():
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            log("warn", f"Ignoring unreadable config {self.path}: {e}")
            return
        if not isinstance(data, dict):
            log("warn", f"Ignoring config {self.path}: top level is not an object")
            return
        directories = data.get("directories")
        if isinstance(directories, str):
            data["directories"] = [directories]
        elif "directories" in data and not (
            isinstance(directories, list) and all(isinstance(d, str) for d in directories)
        ):
            log("warn", f"Ignoring 'directories' in {self.path}: expected a list of paths")
            del data["directories"]
        self._data = data

    def get(self, key: str, default=None):
        if key in self._data:
            return self._data[key]
        if default is None:
            return DEFAULTS.get(key)
        return default
