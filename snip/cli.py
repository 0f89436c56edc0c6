from __future__ import annotations

import argparse
import contextlib
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
import sys

from . import __version__
from .config import explain_snip_toml, load_snip_toml, with_overrides
from .daily import daily_path, record_snippet
from .paths import base_dir, snip_paths


@dataclass(frozen=True)
class RuntimeHooks:
    emit_console: bool = True
    log_file: Path | None = None


def _emit_runtime_log(message: str, *, hooks: RuntimeHooks, level: str = "info", stderr: bool = False) -> None:
    if hooks.log_file is not None:
        _append_runtime_log(hooks.log_file, level=level, message=message)
    if hooks.emit_console:
        print(message, file=sys.stderr if stderr else sys.stdout)


def _append_runtime_log(log_file: Path, *, level: str, message: str) -> None:
    # One line per message, local time; an unwritable log never fails the command.
    stamp = datetime.now().astimezone().isoformat(timespec="seconds")
    line = f"{stamp} [{level}] {' '.join(message.split())}\n"
    with contextlib.suppress(OSError):
        log_file.parent.mkdir(parents=True, exist_ok=True)
        with log_file.open("a", encoding="utf-8") as handle:
            handle.write(line)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snip",
        description="Record a short timestamped snippet to today's file in ~/.snip.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-m",
        "--message",
        default="",
        help="Text of the snippet. If empty, $EDITOR opens to write the snippet.",
    )
    parser.add_argument(
        "--edit",
        action="store_true",
        help="Open $EDITOR to edit the snippet even when -m is given (falls back to vim).",
    )
    parser.add_argument("--time-format", default=None, help="strftime format of the snippet timestamp (default: %%H:%%M)")
    parser.add_argument(
        "--include-header",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Add a date/timezone header as the first line of a new day file.",
    )
    parser.add_argument("--no-timestamp", action="store_true", help="Do not prefix the snippet with the time")
    parser.add_argument("--dir", default=None, help="Snippet directory (default: $SNIP_DIR or ~/.snip)")
    parser.add_argument("--config", default=None, help="Path to snip.toml (default: <dir>/snip.toml)")
    parser.add_argument("--show-config", action="store_true", help="Print the effective configuration and exit")
    parser.add_argument("--print-path", action="store_true", help="Print today's snippet file path and exit")
    return parser


def cmd_show_config(config, config_path: Path) -> int:
    print(explain_snip_toml(config, path=config_path))
    return 0


def cmd_print_path(config) -> int:
    print(daily_path(config))
    return 0


def cmd_record(args: argparse.Namespace, config, hooks: RuntimeHooks) -> int:
    result = record_snippet(
        config,
        args.message,
        edit=args.edit,
        log=lambda message: _emit_runtime_log(message, level="warn", stderr=True, hooks=hooks),
    )
    if result.header_written:
        _emit_runtime_log(f"Started new day file {result.path}", hooks=RuntimeHooks(log_file=hooks.log_file, emit_console=False))
    _emit_runtime_log(f"Snippet saved to {result.path}", hooks=hooks)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else sys.argv[1:])

    hooks = RuntimeHooks()
    try:
        root = Path(args.dir).expanduser() if args.dir else base_dir()
        paths = snip_paths(root)
        config_path = Path(args.config).expanduser() if args.config else paths.config_toml
        config, warning = load_snip_toml(config_path, root=root)
        config = with_overrides(
            config,
            time_format=args.time_format,
            include_header=args.include_header,
            timestamp=False if args.no_timestamp else None,
        )
        if config.log_file:
            hooks = RuntimeHooks(log_file=paths.log_file)
        if warning:
            _emit_runtime_log(warning, level="warn", stderr=True, hooks=hooks)

        if args.show_config:
            return cmd_show_config(config, config_path)
        if args.print_path:
            return cmd_print_path(config)
        return cmd_record(args, config, hooks)
    except KeyboardInterrupt:
        return 130
    except Exception as exc:  # noqa: BLE001
        _emit_runtime_log(f"Fatal error: {exc}", level="error", stderr=True, hooks=hooks)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
