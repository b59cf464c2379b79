"""Tests for the per-entity search service."""

import sys
import unittest
from copy import deepcopy
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from Searchable.config import parse_config_dict
from Searchable.core.errors import ConfigurationError
from Searchable.core.models import JoinSpec, SearchSpec
from Searchable.services import create_searchable
from Searchable.services.searchable import apply_prefix, prefixed_spec


def _raw_config() -> dict:
    return {
        "log": {"level": "INFO", "to_file": False, "dir": "log"},
        "database": {
            "default": "main",
            "connections": {
                "main": {"driver": "mysql"},
                "pg": {"driver": "pgsql", "prefix": "app_"},
                "mssql": {"driver": "sqlsrv"},
            },
        },
        "searchable": {
            "users": {"table": "users", "columns": {"users.name": 3, "users.bio": 1}},
            "accounts": {
                "table": "accounts",
                "connection": "pg",
                "columns": {"accounts.name": 1},
                "joins": [{"table": "owners", "first": "accounts.owner_id", "second": "owners.id"}],
            },
            "people": {"table": "people", "connection": "mssql", "columns": {"people.name": 1}},
            "discovered": {"table": "users"},
        },
    }


class TestApplyPrefix(unittest.TestCase):
    def test_prefixes_table_part_only(self) -> None:
        self.assertEqual(apply_prefix("users.name", "app_"), "app_users.name")
        self.assertEqual(apply_prefix("name", "app_"), "name")
        self.assertEqual(apply_prefix("users.name", ""), "users.name")

    def test_prefixed_spec_covers_joins(self) -> None:
        spec = SearchSpec(
            columns={"posts.title": 1},
            joins=[JoinSpec("posts", "users.id", "posts.user_id", ("posts.kind", "blog"))],
            table_columns=["users.id"],
        )
        prefixed = prefixed_spec(spec, "p_")
        self.assertEqual(dict(prefixed.columns), {"p_posts.title": 1})
        self.assertEqual(prefixed.joins[0], JoinSpec("p_posts", "p_users.id", "p_posts.user_id", ("p_posts.kind", "blog")))
        self.assertEqual(prefixed.table_columns, ("p_users.id",))


class TestSearchableModel(unittest.TestCase):
    def setUp(self) -> None:
        self.config = parse_config_dict(_raw_config())

    def test_default_connection_uses_standard_dialect(self) -> None:
        model = create_searchable(self.config, "users")
        query = model.search(model.new_query(), "john")
        sql = query.to_sql()
        self.assertIn("LOWER(`users`.`name`) = ?", sql)
        self.assertIn("having relevance >= 2.00", sql)
        self.assertEqual(len(query.get_bindings()), 6)

    def test_dialect_and_prefix_follow_entity_connection(self) -> None:
        model = create_searchable(self.config, "accounts")
        base = model.new_query()
        self.assertEqual(base.to_sql(), "select * from app_accounts")

        query = model.search(base, "acme")
        sql = query.to_sql()
        self.assertIs(query, base)
        self.assertIn("from app_accounts left join app_owners on app_accounts.owner_id = app_owners.id", sql)
        self.assertIn("LOWER(app_accounts.name) ILIKE ?", sql)
        self.assertTrue(sql.endswith(") as app_accounts order by relevance desc"))
        self.assertEqual(len(query.get_bindings()), 6)

    def test_dialect_is_resolved_per_call(self) -> None:
        raw = _raw_config()
        model = create_searchable(self.config, "users")
        self.assertEqual(model.composer().dialect.name, "standard")

        raw["database"]["connections"]["main"]["driver"] = "sqlite"
        model.database = parse_config_dict(raw).database
        self.assertEqual(model.composer().dialect.name, "sqlite")

    def test_sqlserver_introspects_table_columns(self) -> None:
        model = create_searchable(self.config, "people", list_columns=lambda table: ["id", "name"])
        query = model.search(model.new_query(), "ann")
        self.assertIn("group by people.id, people.name having", query.to_sql())

    def test_sqlserver_without_introspection_fails(self) -> None:
        model = create_searchable(self.config, "people")
        with self.assertRaises(ConfigurationError):
            model.search(model.new_query(), "ann")

    def test_missing_columns_are_introspected(self) -> None:
        seen: list[str] = []

        def list_columns(table: str) -> list[str]:
            seen.append(table)
            return ["id", "name"]

        model = create_searchable(self.config, "discovered", list_columns=list_columns)
        query = model.search(model.new_query(), "john")
        self.assertEqual(seen, ["users"])
        self.assertIn("LOWER(`users`.`id`) = ?", query.to_sql())
        self.assertEqual(len(query.get_bindings()), 6)
        self.assertIn("having relevance >= 1.00", query.to_sql())

    def test_missing_columns_without_introspection_fail(self) -> None:
        model = create_searchable(self.config, "discovered")
        with self.assertRaises(ConfigurationError):
            model.search(model.new_query(), "john")

    def test_empty_introspection_returns_unfiltered_query(self) -> None:
        model = create_searchable(self.config, "discovered", list_columns=lambda table: [])
        query = model.search(model.new_query(), "john")
        self.assertEqual(query.to_sql(), "select users.* from users group by users.id")

    def test_search_restricted_passes_callback(self) -> None:
        model = create_searchable(self.config, "users")
        query = model.search_restricted(
            model.new_query(), "john", lambda q: q.where("users.active", "=", 1), threshold=5
        )
        self.assertIn("where users.active = ?", query.to_sql())
        self.assertIn("relevance >= 5.00", query.to_sql())
        self.assertEqual(query.get_bindings()[-1], 1)

    def test_unknown_entity(self) -> None:
        with self.assertRaises(ConfigurationError):
            create_searchable(self.config, "nope")

    def test_config_is_not_mutated(self) -> None:
        raw = _raw_config()
        snapshot = deepcopy(raw)
        parse_config_dict(raw)
        self.assertEqual(raw, snapshot)


if __name__ == "__main__":
    unittest.main()
