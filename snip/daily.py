from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable

from .assemble import assemble_day_file, format_snippet_line, has_header, normalize_snippet
from .config import SnipConfig
from .editor import compose_in_editor, resolve_editor
from .paths import snippet_path
from .storage import read_day_file, write_atomic
from .timezone import FixedTimezoneResolver, SystemTimezoneResolver, TimezoneResolver, resolve_timezone_name


EditorRunner = Callable[..., str]


@dataclass(frozen=True)
class RecordResult:
    path: Path
    line: str
    header_written: bool


def daily_path(config: SnipConfig, now: datetime | None = None) -> Path:
    return snippet_path(config.base_dir, now or datetime.now().astimezone())


def default_resolver(config: SnipConfig) -> TimezoneResolver:
    if config.timezone:
        return FixedTimezoneResolver(config.timezone)
    return SystemTimezoneResolver()


def record_snippet(
    config: SnipConfig,
    message: str = "",
    *,
    edit: bool = False,
    now: datetime | None = None,
    resolver: TimezoneResolver | None = None,
    editor_runner: EditorRunner = compose_in_editor,
    log: Callable[[str], None] | None = None,
) -> RecordResult:
    """Compose one snippet and append it to the day file for `now`.

    The editor opens when `edit` is set or `message` is empty. Nothing is
    written if the editor fails or the snippet ends up empty.
    """

    if config.timestamp and not config.time_format:
        raise ValueError("time format is required")

    now = now or datetime.now().astimezone()
    seed = format_snippet_line(now, message, time_format=config.time_format, timestamp=config.timestamp)

    text = seed
    if edit or not message:
        text = editor_runner(seed, editor_argv=resolve_editor(config.editor))

    line = normalize_snippet(text)

    path = snippet_path(config.base_dir, now)
    existing = read_day_file(path)
    resolver = resolver or default_resolver(config)
    assembled = assemble_day_file(
        existing,
        line,
        include_header=config.include_header,
        now=now,
        timezone_name=lambda: resolve_timezone_name(resolver, log=log),
    )
    write_atomic(path, assembled)

    return RecordResult(
        path=path,
        line=line.decode("utf-8", errors="replace").rstrip("\n"),
        header_written=config.include_header and not has_header(existing),
    )
