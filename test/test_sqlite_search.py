"""Executes composed search queries on SQLite and checks the scores."""

from __future__ import annotations

import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from Searchable.compiler.composer import QueryComposer
from Searchable.core.models import JoinSpec, SearchSpec
from Searchable.dialects import SqliteDialect, StandardDialect
from Searchable.query import Query
from Searchable.storage.db import DatabaseManager

SCHEMA = """
    CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, bio TEXT NOT NULL DEFAULT '');
    CREATE TABLE posts (id INTEGER PRIMARY KEY, user_id INTEGER NOT NULL, title TEXT NOT NULL);
"""

EXECUTABLE_DIALECTS = (StandardDialect(), SqliteDialect())


class SqliteSearchTestCase(unittest.TestCase):
    users: list[tuple[int, str, str]] = []
    posts: list[tuple[int, int, str]] = []

    def setUp(self) -> None:
        self.manager = DatabaseManager(Path(tempfile.mkdtemp()) / "search.db")
        conn = self.manager.get_connection()
        conn.executescript(SCHEMA)
        conn.executemany("INSERT INTO users (id, name, bio) VALUES (?, ?, ?)", self.users)
        conn.executemany("INSERT INTO posts (id, user_id, title) VALUES (?, ?, ?)", self.posts)
        conn.commit()

    def tearDown(self) -> None:
        self.manager.close()

    def search(self, dialect, columns, phrase, *, joins=(), **kwargs) -> list[tuple[int, float]]:
        spec = SearchSpec(columns=columns, joins=joins)
        composer = QueryComposer(dialect, table="users", primary_key="id", spec=spec)
        query = composer.build(Query("users"), phrase, **kwargs)
        return [(row["id"], row["relevance"]) for row in self.manager.fetch_all(query)]


class TestTierScores(SqliteSearchTestCase):
    users = [
        (1, "John", ""),
        (2, "Johnny", ""),
        (3, "Mary", "likes john"),
        (4, "Peter", "nothing here"),
    ]

    def test_scores_sum_all_matching_tiers(self) -> None:
        # exact 15 + prefix 5 + substring 1 = 21; prefix+substring = 6; substring = 1
        for dialect in EXECUTABLE_DIALECTS:
            with self.subTest(dialect=dialect.name):
                rows = self.search(dialect, {"users.name": 1, "users.bio": 1}, "John")
                self.assertEqual(rows, [(1, 21), (2, 6), (3, 1)])

    def test_weight_scales_every_tier(self) -> None:
        for dialect in EXECUTABLE_DIALECTS:
            with self.subTest(dialect=dialect.name):
                rows = self.search(dialect, {"users.name": 2, "users.bio": 2}, "john")
                self.assertEqual(rows, [(1, 42), (2, 12), (3, 2)])

    def test_threshold_is_inclusive(self) -> None:
        for dialect in EXECUTABLE_DIALECTS:
            with self.subTest(dialect=dialect.name):
                columns = {"users.name": 1, "users.bio": 1}
                self.assertEqual(self.search(dialect, columns, "john", threshold=6), [(1, 21), (2, 6)])
                self.assertEqual(self.search(dialect, columns, "john", threshold=7), [(1, 21)])

    def test_count_matches_rows(self) -> None:
        for dialect in EXECUTABLE_DIALECTS:
            with self.subTest(dialect=dialect.name):
                spec = SearchSpec(columns={"users.name": 1, "users.bio": 1})
                composer = QueryComposer(dialect, table="users", primary_key="id", spec=spec)
                query = composer.build(Query("users"), "john")
                self.assertEqual(self.manager.count(query), 3)
                query.limit(1)
                self.assertEqual(len(self.manager.fetch_all(query)), 1)

    def test_empty_phrase_returns_every_row(self) -> None:
        spec = SearchSpec(columns={"users.name": 1})
        query = QueryComposer(SqliteDialect(), table="users", primary_key="id", spec=spec).build(Query("users"), "")
        self.assertEqual(len(self.manager.fetch_all(query)), 4)


class TestPhraseScores(SqliteSearchTestCase):
    users = [(1, "John Smith", "")]

    def test_adding_a_matching_word_never_lowers_the_score(self) -> None:
        for dialect in EXECUTABLE_DIALECTS:
            with self.subTest(dialect=dialect.name):
                one = self.search(dialect, {"users.name": 1}, "john")
                two = self.search(dialect, {"users.name": 1}, "john smith")
                self.assertEqual(one, [(1, 6)])
                self.assertEqual(two, [(1, 7)])

    def test_entire_text_rewards_whole_phrase(self) -> None:
        for dialect in EXECUTABLE_DIALECTS:
            with self.subTest(dialect=dialect.name):
                rows = self.search(dialect, {"users.name": 1}, "john smith", entire_text=True)
                self.assertEqual(rows, [(1, 87)])

    def test_quoted_phrase_is_matched_as_one_word(self) -> None:
        rows = self.search(StandardDialect(), {"users.name": 1}, '"john smith"')
        self.assertEqual(rows, [(1, 21)])


class TestJoinedScores(SqliteSearchTestCase):
    users = [(1, "Ann", ""), (2, "Bob", ""), (3, "Cid", "")]
    posts = [(1, 1, "python tips"), (2, 1, "cooking"), (3, 2, "gardening")]

    def test_joined_column_scores_and_non_matching_rows_drop(self) -> None:
        join = JoinSpec(table="posts", first="users.id", second="posts.user_id")
        for dialect in EXECUTABLE_DIALECTS:
            with self.subTest(dialect=dialect.name):
                rows = self.search(dialect, {"users.name": 1, "posts.title": 1}, "python", joins=[join])
                self.assertEqual(rows, [(1, 6)])

    def test_join_constraint_literal(self) -> None:
        join = JoinSpec(table="posts", first="users.id", second="posts.user_id", where=("posts.title", "cooking"))
        for dialect in EXECUTABLE_DIALECTS:
            with self.subTest(dialect=dialect.name):
                rows = self.search(dialect, {"users.name": 1, "posts.title": 1}, "python", joins=[join])
                self.assertEqual(rows, [])


class TestIntrospection(SqliteSearchTestCase):
    def test_list_columns(self) -> None:
        self.assertEqual(self.manager.list_columns("users"), ["id", "name", "bio"])
        self.assertEqual(self.manager.list_columns("missing"), [])


if __name__ == "__main__":
    unittest.main()
