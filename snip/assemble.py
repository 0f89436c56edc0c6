"""Day-file assembly.

A day file is an optional header line followed by one line per snippet. New
content is always appended; an existing header is never touched, so a file
that starts with the header marker keeps it regardless of the header flag.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable


HEADER_MARKER = b"---"

_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class EmptySnippetError(ValueError):
    def __init__(self) -> None:
        super().__init__("snippet is empty")


def normalize_snippet(text: str) -> bytes:
    cleaned = text.strip()
    if not cleaned:
        raise EmptySnippetError()
    cleaned = cleaned.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")
    return (cleaned + "\n").encode("utf-8", errors="surrogateescape")


def format_header(now: datetime, timezone_name: str) -> str:
    # English names, space-padded day of month ("Nov  5"); independent of locale.
    weekday = _WEEKDAYS[now.weekday()]
    month = _MONTHS[now.month - 1]
    return f"--- {weekday} {month} {now.day:>2} {now.year} in {timezone_name} ---"


def _snippet_prefix(now: datetime, *, time_format: str, timestamp: bool = True) -> str:
    if not timestamp:
        return ""
    if not time_format:
        raise ValueError("time format is required")
    return now.strftime(time_format) + " | "


def format_snippet_line(now: datetime, text: str, *, time_format: str, timestamp: bool = True) -> str:
    return _snippet_prefix(now, time_format=time_format, timestamp=timestamp) + text


def has_header(existing: bytes) -> bool:
    return existing.startswith(HEADER_MARKER)


def assemble_day_file(
    existing: bytes,
    line: bytes,
    *,
    include_header: bool,
    now: datetime,
    timezone_name: str | Callable[[], str],
) -> bytes:
    """Return the full new content of a day file.

    `line` must already be normalized (see `normalize_snippet`). When
    `timezone_name` is callable it is only invoked if a header is emitted.
    """

    if not line.strip():
        raise EmptySnippetError()

    parts: list[bytes] = []
    if include_header and not has_header(existing):
        name = timezone_name() if callable(timezone_name) else timezone_name
        parts.append((format_header(now, name) + "\n").encode("utf-8"))

    parts.append(existing)
    # A hand-edited file may lack its trailing newline; never lead with one.
    if existing and not existing.endswith(b"\n"):
        parts.append(b"\n")

    parts.append(line)
    return b"".join(parts)
