"""CLI tests driven through click's test runner."""

from __future__ import annotations

import json
import sqlite3
import sys
import tempfile
import unittest
from pathlib import Path

from click.testing import CliRunner

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from Searchable.cli import cli

CONFIG_TEMPLATE = """\
log:
  level: WARNING
  to_file: false
  dir: {tmp}/log
database:
  default: main
  connections:
    main:
      driver: {driver}
      path: {db_path}
    remote:
      driver: pgsql
      prefix: app_
output:
  base_dir: {tmp}/output
  formats: [json]
searchable:
  users:
    table: users
    columns:
      users.name: 1
  accounts:
    table: accounts
    connection: remote
    columns:
      accounts.name: 2
"""


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.db_path = self.tmp / "app.db"
        conn = sqlite3.connect(self.db_path)
        conn.executescript(
            """
            CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL);
            INSERT INTO users (id, name) VALUES (1, 'John'), (2, 'Johnny'), (3, 'Mary');
            """
        )
        conn.commit()
        conn.close()
        self.runner = CliRunner()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write_config(self, driver: str = "sqlite") -> Path:
        path = self.tmp / "config.yml"
        path.write_text(
            CONFIG_TEMPLATE.format(tmp=self.tmp, driver=driver, db_path=self.db_path),
            encoding="utf-8",
        )
        return path

    def test_sql_prints_query_and_bindings(self) -> None:
        config = self._write_config()
        result = self.runner.invoke(cli, ["--config", str(config), "sql", "accounts", "acme"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("select * from (select app_accounts.*, max(", result.output)
        self.assertIn("LOWER(app_accounts.name) ILIKE ?", result.output)
        self.assertIn("bindings: ['acme', 'acme%', '%acme%', 'acme', 'acme%', '%acme%']", result.output)

    def test_sql_with_threshold_option(self) -> None:
        config = self._write_config(driver="mysql")
        result = self.runner.invoke(
            cli, ["--config", str(config), "sql", "users", "john", "--threshold", "6"]
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("having relevance >= 6.00 order by relevance desc", result.output)

    def test_unknown_entity_aborts(self) -> None:
        config = self._write_config()
        result = self.runner.invoke(cli, ["--config", str(config), "sql", "nobody", "john"])
        self.assertEqual(result.exit_code, 1)

    def test_offset_requires_limit(self) -> None:
        config = self._write_config()
        result = self.runner.invoke(cli, ["--config", str(config), "search", "users", "john", "--offset", "1"])
        self.assertEqual(result.exit_code, 2)
        self.assertIn("--offset requires --limit", result.output)

    def test_search_writes_json_rows_best_first(self) -> None:
        config = self._write_config()
        result = self.runner.invoke(cli, ["--config", str(config), "search", "users", "john", "--limit", "5"])
        self.assertEqual(result.exit_code, 0, result.output)

        files = list((self.tmp / "output" / "json").glob("search_*.json"))
        self.assertEqual(len(files), 1)
        payload = json.loads(files[0].read_text(encoding="utf-8"))
        self.assertEqual(payload[0]["entity"], "users")
        self.assertEqual(payload[0]["total"], 2)
        self.assertEqual([(row["id"], row["relevance"]) for row in payload[0]["rows"]], [(1, 21), (2, 6)])

    def test_search_paging(self) -> None:
        config = self._write_config()
        result = self.runner.invoke(
            cli, ["--config", str(config), "search", "users", "john", "--limit", "1", "--offset", "1"]
        )
        self.assertEqual(result.exit_code, 0, result.output)

        files = list((self.tmp / "output" / "json").glob("search_*.json"))
        payload = json.loads(files[0].read_text(encoding="utf-8"))
        self.assertEqual(payload[0]["total"], 2)
        self.assertEqual([row["id"] for row in payload[0]["rows"]], [2])


if __name__ == "__main__":
    unittest.main()
