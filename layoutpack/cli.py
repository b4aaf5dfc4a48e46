"""Command line entry point: ``layoutpack minify|restore|serve``."""

import argparse
from pathlib import Path

from . import log_utils
from .config import ConfigManager
from .errors import LayoutpackError
from .log_utils import log
from .minify import minify_directory
from .preview import serve
from .restore import restore_directory

OPERATIONS = {
    "minify": minify_directory,
    "restore": restore_directory,
}


def _port(value: str) -> int:
    try:
        port = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}") from exc
    if not 0 < port < 65536:
        raise argparse.ArgumentTypeError("port must be between 1 and 65535")
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="layoutpack",
        description="Minify layout directories before deploy, restore them afterwards, preview the site.",
    )
    parser.add_argument("--config", type=Path, default=None, help="JSON config file (default: ./layoutpack.json)")
    parser.add_argument("--log-file", default=None, help="Also append log lines to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("minify", "Back up and minify every file in each directory"),
        ("restore", "Restore backed-up originals and remove the cache folder"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("directories", nargs="*", help="Target directories (default: from config)")
        cmd.add_argument("--cache-name", default=None, help="Cache folder name inside each directory")

    serve_cmd = sub.add_parser("serve", help="Serve the built site locally")
    serve_cmd.add_argument("site_dir", nargs="?", default=None, help="Site directory (default: _site)")
    serve_cmd.add_argument("--host", default=None)
    serve_cmd.add_argument("--port", type=_port, default=None)
    return parser


def run_batch(command: str, directories: list[str], cache_name: str) -> int:
    """Run minify or restore over every directory and report the aggregate status."""
    operation = OPERATIONS[command]
    failed = []
    for directory in directories:
        try:
            result = operation(directory, cache_name)
        except (LayoutpackError, ValueError) as e:
            log("error", f"{command} {directory}: {e}")
            failed.append(directory)
            continue
        if not result.ok:
            failed.append(directory)

    if failed:
        log("error", f"{command} failed for {len(failed)} of {len(directories)} directories: {', '.join(failed)}")
        return 1
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    cfg = ConfigManager(args.config)
    log_utils.configure(args.log_file or cfg.get("log_file"))

    if args.command == "serve":
        site_dir = args.site_dir or cfg.get("site_dir")
        port = args.port
        if port is None:
            try:
                port = _port(str(cfg.get("port")))
            except argparse.ArgumentTypeError as e:
                log("error", f"config port {cfg.get('port')!r}: {e}")
                return 1
        try:
            serve(site_dir, host=args.host or cfg.get("host"), port=port)
        except LayoutpackError as e:
            log("error", str(e))
            return 1
        return 0

    directories = args.directories or cfg.get("directories")
    cache_name = args.cache_name or cfg.get("cache_name")
    return run_batch(args.command, directories, cache_name)
