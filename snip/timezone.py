from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Callable, Mapping, Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


UNKNOWN_TIMEZONE = "<unknown timezone>"
LOCALTIME_PATH = Path("/etc/localtime")
ZONEINFO_MARKER = "zoneinfo/"


class TimezoneError(RuntimeError):
    pass


class TimezoneResolver(Protocol):
    def resolve(self) -> str: ...


def _is_loadable(name: str) -> bool:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True


@dataclass(frozen=True)
class FixedTimezoneResolver:
    name: str

    def resolve(self) -> str:
        return self.name


@dataclass(frozen=True)
class SystemTimezoneResolver:
    """Best-effort IANA name of the local timezone (e.g. "Europe/Stockholm").

    `TZ` wins when it names a loadable zone. Otherwise /etc/localtime is
    assumed to be a symlink whose target contains `zoneinfo/<name>`, which is
    how both Linux and macOS lay it out.
    """

    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    localtime: Path = LOCALTIME_PATH

    def resolve(self) -> str:
        tz = (self.environ.get("TZ") or "").strip()
        if tz and _is_loadable(tz):
            return tz

        if not self.localtime.is_symlink():
            raise TimezoneError(f"infer local timezone: {self.localtime} is not a symlink")
        try:
            real_path = self.localtime.resolve(strict=True).as_posix()
        except (OSError, RuntimeError) as exc:
            # RuntimeError: symlink loop on Python < 3.13.
            raise TimezoneError(f"infer local timezone: evaluate {self.localtime} as a symlink: {exc}") from exc

        idx = real_path.find(ZONEINFO_MARKER)
        if idx == -1:
            raise TimezoneError(
                f"infer local timezone: infer from {self.localtime} symlink: real path does not contain {ZONEINFO_MARKER!r}"
            )
        inferred = real_path[idx + len(ZONEINFO_MARKER):]
        if not _is_loadable(inferred):
            raise TimezoneError(
                f"infer local timezone: infer from {self.localtime} symlink: inferred timezone {inferred!r} cannot be loaded"
            )
        return inferred


def resolve_timezone_name(
    resolver: TimezoneResolver,
    *,
    log: Callable[[str], None] | None = None,
) -> str:
    try:
        return resolver.resolve()
    except TimezoneError as exc:
        if log is not None:
            log(f"Failed to infer local timezone: {exc}")
        return UNKNOWN_TIMEZONE
