from __future__ import annotations

from pathlib import Path
from tempfile import TemporaryDirectory
import unittest

from snip.config import DEFAULT_TIME_FORMAT, explain_snip_toml, load_snip_toml, with_overrides


class TestSnipConfig(unittest.TestCase):
    def test_missing_file_yields_defaults(self) -> None:
        with TemporaryDirectory() as tmp:
            root = Path(tmp)
            cfg, warn = load_snip_toml(root / "snip.toml", root=root)
        self.assertEqual("", warn)
        self.assertEqual(root, cfg.base_dir)
        self.assertEqual(DEFAULT_TIME_FORMAT, cfg.time_format)
        self.assertTrue(cfg.include_header)
        self.assertTrue(cfg.timestamp)

    def test_values_parse_from_toml(self) -> None:
        with TemporaryDirectory() as tmp:
            root = Path(tmp)
            path = root / "snip.toml"
            path.write_text(
                "\n".join(
                    [
                        "[snippets]",
                        'time_format = "%H:%M:%S"',
                        'include_header = "no"',
                        "",
                        "[editor]",
                        'command = " nano -w "',
                        "",
                        "[timezone]",
                        'name = "Europe/Dublin"',
                        "",
                        "[logging]",
                        "file = false",
                    ]
                )
                + "\n",
                encoding="utf-8",
            )
            cfg, warn = load_snip_toml(path, root=root)
        self.assertEqual("", warn)
        self.assertEqual("%H:%M:%S", cfg.time_format)
        self.assertFalse(cfg.include_header)
        self.assertEqual("nano -w", cfg.editor)
        self.assertEqual("Europe/Dublin", cfg.timezone)
        self.assertFalse(cfg.log_file)

    def test_parse_failure_returns_defaults_and_warning(self) -> None:
        with TemporaryDirectory() as tmp:
            root = Path(tmp)
            path = root / "snip.toml"
            path.write_text("[snippets\ntime_format = ", encoding="utf-8")
            cfg, warn = load_snip_toml(path, root=root)
        self.assertIn("snip.toml parse failed", warn)
        self.assertEqual(DEFAULT_TIME_FORMAT, cfg.time_format)

    def test_overrides_skip_none_and_reject_unknown(self) -> None:
        with TemporaryDirectory() as tmp:
            cfg, _warn = load_snip_toml(Path(tmp) / "snip.toml", root=Path(tmp))
        updated = with_overrides(cfg, time_format=None, include_header=False)
        self.assertEqual(cfg.time_format, updated.time_format)
        self.assertFalse(updated.include_header)
        self.assertIs(cfg, with_overrides(cfg, time_format=None))
        with self.assertRaises(TypeError):
            with_overrides(cfg, colour=True)

    def test_explain_mentions_every_section(self) -> None:
        with TemporaryDirectory() as tmp:
            cfg, _warn = load_snip_toml(Path(tmp) / "snip.toml", root=Path(tmp))
        text = explain_snip_toml(cfg)
        for section in ("[snippets]", "[editor]", "[timezone]", "[logging]"):
            self.assertIn(section, text)


if __name__ == "__main__":
    unittest.main()
