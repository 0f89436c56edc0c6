from __future__ import annotations

import os
from pathlib import Path
from tempfile import TemporaryDirectory
import unittest
from unittest.mock import patch

from snip.storage import read_day_file, write_atomic


class TestStorage(unittest.TestCase):
    def test_missing_file_reads_as_empty(self) -> None:
        with TemporaryDirectory() as tmp:
            self.assertEqual(b"", read_day_file(Path(tmp) / "2024-11-20.txt"))

    def test_write_creates_parents_and_replaces_content(self) -> None:
        with TemporaryDirectory() as tmp:
            target = Path(tmp) / "nested" / "snips" / "2024-11-20.txt"
            write_atomic(target, b"one\n")
            write_atomic(target, b"one\ntwo\n")

            self.assertEqual(b"one\ntwo\n", read_day_file(target))
            self.assertEqual([target.name], sorted(p.name for p in target.parent.iterdir()))
            if os.name != "nt":
                self.assertEqual(0o600, target.stat().st_mode & 0o777)

    def test_failed_replace_leaves_original_and_no_temp_files(self) -> None:
        with TemporaryDirectory() as tmp:
            target = Path(tmp) / "2024-11-20.txt"
            target.write_bytes(b"original\n")

            with patch("snip.storage.os.replace", side_effect=OSError("disk full")):
                with self.assertRaises(OSError):
                    write_atomic(target, b"original\nnew\n")

            self.assertEqual(b"original\n", target.read_bytes())
            self.assertEqual([target.name], [p.name for p in Path(tmp).iterdir()])


if __name__ == "__main__":
    unittest.main()
