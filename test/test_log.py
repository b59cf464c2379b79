"""Tests for Searchable logger configuration."""

import logging
import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from Searchable.config.runtime import RuntimeConfig
from Searchable.utils.log import configure_logging, log, log_file_path


class TestConfigureLogging(unittest.TestCase):
    def tearDown(self) -> None:
        for handler in list(log.handlers):
            log.removeHandler(handler)
            handler.close()

    def test_console_only_uses_configured_level(self) -> None:
        configure_logging(RuntimeConfig(level="WARNING"), "sql")
        self.assertEqual(len(log.handlers), 1)
        self.assertEqual(log.handlers[0].level, logging.WARNING)
        self.assertFalse(log.propagate)

    def test_file_records_debug_with_level_tag(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            configure_logging(RuntimeConfig(level="ERROR", to_file=True, dir=tmp), "search")
            log.debug("select users.* from users")
            for handler in log.handlers:
                handler.flush()

            files = list((Path(tmp) / "search").glob("search_*.log"))
            self.assertEqual(len(files), 1)
            text = files[0].read_text(encoding="utf-8")
            self.assertIn("[DEBG] select users.* from users", text)
            self.tearDown()

    def test_reconfiguring_replaces_handlers(self) -> None:
        configure_logging(RuntimeConfig(), "sql")
        configure_logging(RuntimeConfig(), "sql")
        self.assertEqual(len(log.handlers), 1)

    def test_log_file_path_layout(self) -> None:
        path = log_file_path("log", "search")
        self.assertEqual(path.parent, Path("log") / "search")
        self.assertTrue(path.name.startswith("search_"))
        self.assertTrue(path.name.endswith(".log"))


if __name__ == "__main__":
    unittest.main()
