from __future__ import annotations

import os
from pathlib import Path
import shlex
import subprocess
import tempfile
from typing import Mapping


DEFAULT_EDITOR = "vim"


class EditorError(RuntimeError):
    pass


def resolve_editor(configured: str = "", *, environ: Mapping[str, str] | None = None) -> list[str]:
    env = os.environ if environ is None else environ
    command = configured.strip() or (env.get("EDITOR") or "").strip() or DEFAULT_EDITOR
    try:
        argv = shlex.split(command)
    except ValueError as exc:
        raise EditorError(f"parse editor command {command!r}: {exc}") from exc
    return argv or [DEFAULT_EDITOR]


def compose_in_editor(seed: str, *, editor_argv: list[str], tmp_dir: Path | None = None) -> str:
    """Open the editor on a temporary file pre-filled with `seed`.

    Blocks until the editor exits; the editor inherits this process's
    terminal. Returns whatever the file contains afterwards.
    """

    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        prefix="snip-",
        suffix=".txt",
        dir=str(tmp_dir) if tmp_dir is not None else None,
        delete=False,
    ) as handle:
        handle.write(seed)
        tmp_path = Path(handle.name)

    try:
        try:
            proc = subprocess.run([*editor_argv, str(tmp_path)], check=False)
        except OSError as exc:
            raise EditorError(f"open editor {editor_argv[0]!r} to edit snippet: {exc}") from exc
        if proc.returncode != 0:
            raise EditorError(f"open editor {editor_argv[0]!r} to edit snippet: exit status {proc.returncode}")
        # Bytes that are not UTF-8 survive the round trip via surrogateescape.
        return tmp_path.read_text(encoding="utf-8", errors="surrogateescape")
    finally:
        tmp_path.unlink(missing_ok=True)
