"""Local preview server for the generated site.

Serves the static output directory read-only, the way ``jekyll serve`` would
without rebuilding anything.
"""

import logging
import socket
from pathlib import Path
from urllib.parse import quote

from flask import Flask, abort, redirect, send_from_directory
from markupsafe import escape
from werkzeug.security import safe_join

from .errors import MissingDirectory
from .log_utils import log

HOST = "localhost"
PORT = 8080
INDEX_FILE = "index.html"


def directory_listing(directory: Path) -> str:
    """Plain link list of a directory, like Go's http.FileServer."""
    rows = []
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        name = entry.name + ("/" if entry.is_dir() else "")
        rows.append(f'<a href="{quote(name)}">{escape(name)}</a>')
    return "<!doctype html>\n<pre>\n" + "\n".join(rows) + "\n</pre>\n"


def create_app(site_dir) -> Flask:
    site_dir = Path(site_dir).resolve()
    app = Flask(__name__, static_folder=None)

    @app.route("/", defaults={"filename": ""}, methods=["GET", "HEAD"])
    @app.route("/<path:filename>", methods=["GET", "HEAD"])
    def serve_site(filename):
        """Serve a file, or the index page (or listing) of a directory."""
        target = safe_join(str(site_dir), filename) if filename else str(site_dir)
        if target is None:
            abort(404)
        if Path(target).is_dir():
            if filename and not filename.endswith("/"):
                return redirect(f"/{filename}/", code=301)
            if not (Path(target) / INDEX_FILE).is_file():
                return directory_listing(Path(target))
            filename = f"{filename}{INDEX_FILE}"
        return send_from_directory(site_dir, filename)

    return app


def port_in_use(host: str, port: int) -> bool:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        return sock.connect_ex((host, port)) == 0
    except OSError:
        return False
    finally:
        sock.close()


def serve(site_dir, host: str = HOST, port: int = PORT) -> None:
    site_dir = Path(site_dir)
    if not site_dir.is_dir():
        raise MissingDirectory(site_dir)

    app = create_app(site_dir)
    log("info", f"Serving {site_dir} on http://{host}:{port}/")
    if port_in_use(host, port):
        log("warn", f"Port {port} is already in use")
    log("info", "Press Ctrl+C to stop.")

    # Keep werkzeug's per-request lines out of the output
    logging.getLogger("werkzeug").setLevel(logging.WARNING)

    try:
        app.run(host=host, port=port, debug=False, threaded=True, use_reloader=False)
    except KeyboardInterrupt:
        log("info", "Stopped by user.")
