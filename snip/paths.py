from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import os
from pathlib import Path
from typing import Mapping


def base_dir(*, environ: Mapping[str, str] | None = None) -> Path:
    """Base directory for everything related to snip (snippets, config, logs).

    `SNIP_DIR` wins when set; otherwise `~/.snip`.
    """

    env = os.environ if environ is None else environ
    override = (env.get("SNIP_DIR") or "").strip()
    if override:
        return Path(override).expanduser()
    try:
        home = Path.home()
    except RuntimeError as exc:
        raise RuntimeError(f"resolve snip dir: {exc}") from exc
    return home / ".snip"


def snippet_path(root: Path, moment: datetime | None) -> Path:
    """Day file for `moment`, named after its date in the local timezone."""

    if moment is None:
        raise ValueError("resolve snippet path: timestamp is missing")
    if moment.tzinfo is None:
        raise ValueError("resolve snippet path: timestamp has no timezone")
    return root / f"{moment.astimezone().date().isoformat()}.txt"


@dataclass(frozen=True)
class SnipPaths:
    root: Path
    config_toml: Path
    logs_dir: Path
    log_file: Path


def snip_paths(root: Path | None = None) -> SnipPaths:
    root = root or base_dir()
    logs_dir = root / "logs"
    return SnipPaths(
        root=root,
        config_toml=root / "snip.toml",
        logs_dir=logs_dir,
        log_file=logs_dir / "snip.log",
    )
