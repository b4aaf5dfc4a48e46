from datetime import datetime
from pathlib import Path


LOG_FILE: Path | None = None


def configure(log_file: str | Path | None) -> None:
    """Set (or clear) the file that log lines are appended to."""
    global LOG_FILE
    LOG_FILE = Path(log_file) if log_file else None


def log(level: str, message: str) -> None:
    """Log to stdout and append to LOG_FILE when one is configured."""
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    line = f"{timestamp} [{level.upper()}] {message}"
    print(line, flush=True)
    if LOG_FILE is None:
        return
    try:
        LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        with LOG_FILE.open("a", encoding="utf-8") as f:
            f.write(line + "\n")
    except OSError:
        # Avoid crashing if log file cannot be written
        pass
