from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
import tomllib

from .paths import base_dir


DEFAULT_TIME_FORMAT = "%H:%M"


_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


def _as_bool(value, *, default: bool) -> bool:
    # TOML booleans pass through; quoted words like "no" are accepted too.
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower() if value is not None else ""
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    return default


def _as_str(value, *, default: str) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return default
    return str(value)


def _section(data: dict, name: str) -> dict:
    value = data.get(name)
    return value if isinstance(value, dict) else {}


@dataclass(frozen=True)
class SnipConfig:
    base_dir: Path = field(default_factory=base_dir)
    time_format: str = DEFAULT_TIME_FORMAT
    include_header: bool = True
    timestamp: bool = True
    editor: str = ""
    timezone: str = ""  # empty: infer from TZ or /etc/localtime
    log_file: bool = True


def load_snip_toml(path: Path, *, root: Path | None = None) -> tuple[SnipConfig, str]:
    """Load snip config from snip.toml.

    Returns (config, warning). Warning is empty on success; on a parse failure
    the defaults are returned alongside the warning.
    """

    defaults = SnipConfig(base_dir=root) if root is not None else SnipConfig()
    if not path.exists():
        return defaults, ""

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001
        return defaults, f"snip.toml parse failed: {exc}"

    snippets = _section(data, "snippets")
    editor = _section(data, "editor")
    timezone = _section(data, "timezone")
    logging = _section(data, "logging")

    cfg = replace(
        defaults,
        time_format=_as_str(snippets.get("time_format"), default=defaults.time_format),
        include_header=_as_bool(snippets.get("include_header"), default=defaults.include_header),
        timestamp=_as_bool(snippets.get("timestamp"), default=defaults.timestamp),
        editor=_as_str(editor.get("command"), default=defaults.editor).strip(),
        timezone=_as_str(timezone.get("name"), default=defaults.timezone).strip(),
        log_file=_as_bool(logging.get("file"), default=defaults.log_file),
    )
    return cfg, ""


def with_overrides(config: SnipConfig, **overrides) -> SnipConfig:
    """Apply command-line overrides; `None` keeps the configured value."""

    unknown = set(overrides) - set(SnipConfig.__dataclass_fields__)
    if unknown:
        raise TypeError(f"unknown config fields: {', '.join(sorted(unknown))}")
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def explain_snip_toml(config: SnipConfig, *, path: Path | None = None) -> str:
    location = str(path) if path is not None else "snip.toml"

    def flag(value: bool) -> str:
        return "true" if value else "false"

    lines = [
        f"snip.toml guide ({location})",
        "",
        f"snippet directory: {config.base_dir}",
        "",
        "[snippets]",
        f"- time_format: strftime pattern for the snippet timestamp (current: {config.time_format!r})",
        f"- include_header: add a date/timezone header to new day files (current: {flag(config.include_header)})",
        f"- timestamp: prefix each snippet with the time (current: {flag(config.timestamp)})",
        "",
        "[editor]",
        f"- command: editor used to compose snippets (current: {config.editor or '$EDITOR, then vim'})",
        "",
        "[timezone]",
        f"- name: timezone shown in the header (current: {config.timezone or 'inferred'})",
        "",
        "[logging]",
        f"- file: append log lines to logs/snip.log (current: {flag(config.log_file)})",
    ]
    return "\n".join(lines)
