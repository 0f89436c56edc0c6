from __future__ import annotations

import os
from pathlib import Path
import tempfile


DIR_MODE = 0o755
FILE_MODE = 0o600


def read_day_file(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return b""


def write_atomic(path: Path, data: bytes, *, mode: int = FILE_MODE) -> Path:
    """Replace `path` with `data` in one step.

    The bytes go to a sibling temporary file which is fsynced and then renamed
    over the target, so readers see either the old or the new content.
    """

    path.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    tmp_path: Path | None = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
        tmp_path = None
    finally:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
    return path
