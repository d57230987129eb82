"""SQLite storage for quotes and tags."""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from .errors import DatabaseError, NotFoundError
from .models import Quote, QuoteInput, QuoteWithTags

_SCHEMA = """
CREATE TABLE IF NOT EXISTS quotes (
    id TEXT PRIMARY KEY NOT NULL,
    text TEXT NOT NULL,
    author TEXT NOT NULL,
    source TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS tags (
    quote_id TEXT NOT NULL REFERENCES quotes(id),
    tag TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS tags_quote_id ON tags (quote_id);
"""


def _not_found(quote_id: str) -> NotFoundError:
    return NotFoundError(f"Quote with id {quote_id} not found")


class Database:
    """Quote store backed by one SQLite connection shared between threads."""

    def __init__(self, path: str) -> None:
        try:
            self._conn = sqlite3.connect(path, check_same_thread=False)
            self._conn.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as exc:
            raise DatabaseError(exc) from exc
        self._lock = threading.Lock()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @contextmanager
    def _access(self) -> Iterator[sqlite3.Connection]:
        with self._lock:
            try:
                yield self._conn
            except sqlite3.Error as exc:
                raise DatabaseError(exc) from exc

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        with self._access() as conn, conn:
            yield conn

    def migrate(self) -> None:
        """Create the tables if they do not exist yet."""
        with self._access() as conn:
            conn.executescript(_SCHEMA)

    def close(self) -> None:
        """Close the underlying connection."""
        with self._access() as conn:
            conn.close()

    @staticmethod
    def _attach_tags(
        quotes: Iterable[tuple[str, str, str, str]], tag_rows: Iterable[tuple[str, str]]
    ) -> list[QuoteWithTags]:
        by_id = {row[0]: QuoteWithTags(quote=Quote(*row), tags=[]) for row in quotes}
        for quote_id, tag in tag_rows:
            item = by_id.get(quote_id)
            if item is not None:
                item.tags.append(tag)
        return list(by_id.values())

    def get_all_quotes(self) -> list[QuoteWithTags]:
        """Return every quote with its tags, ordered by author then text."""
        with self._access() as conn:
            quotes = conn.execute(
                "SELECT id, text, author, source FROM quotes ORDER BY author, text"
            ).fetchall()
            tags = conn.execute("SELECT quote_id, tag FROM tags ORDER BY quote_id, tag").fetchall()
        return self._attach_tags(quotes, tags)

    def get_quote_by_id(self, quote_id: str) -> QuoteWithTags:
        """Return one quote with its tags; raise NotFoundError if absent."""
        with self._access() as conn:
            row = conn.execute(
                "SELECT id, text, author, source FROM quotes WHERE id = ?", (quote_id,)
            ).fetchone()
            if row is None:
                raise _not_found(quote_id)
            tags = conn.execute(
                "SELECT tag FROM tags WHERE quote_id = ? ORDER BY tag", (quote_id,)
            ).fetchall()
        return QuoteWithTags(quote=Quote(*row), tags=[tag for (tag,) in tags])

    def create_quote(self, data: QuoteInput, tags: list[str]) -> QuoteWithTags:
        """Store a new quote with the given tags and return it."""
        quote = Quote.from_input(data)
        tags = list(tags)
        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO quotes (id, text, author, source) VALUES (?, ?, ?, ?)",
                (quote.id, quote.text, quote.author, quote.source),
            )
            conn.executemany(
                "INSERT INTO tags (quote_id, tag) VALUES (?, ?)",
                [(quote.id, tag) for tag in tags],
            )
        return QuoteWithTags(quote=quote, tags=tags)

    def update_quote(self, quote_id: str, data: QuoteInput, tags: list[str]) -> QuoteWithTags:
        """Replace a quote's fields and tags; raise NotFoundError if absent."""
        tags = list(tags)
        with self._transaction() as conn:
            cursor = conn.execute(
                "UPDATE quotes SET text = ?, author = ?, source = ? WHERE id = ?",
                (data.text, data.author, data.source, quote_id),
            )
            if cursor.rowcount == 0:
                raise _not_found(quote_id)
            conn.execute("DELETE FROM tags WHERE quote_id = ?", (quote_id,))
            conn.executemany(
                "INSERT INTO tags (quote_id, tag) VALUES (?, ?)",
                [(quote_id, tag) for tag in tags],
            )
        quote = Quote(id=quote_id, text=data.text, author=data.author, source=data.source)
        return QuoteWithTags(quote=quote, tags=tags)

    def delete_quote(self, quote_id: str) -> None:
        """Remove a quote and its tags; raise NotFoundError if absent."""
        with self._transaction() as conn:
            conn.execute("DELETE FROM tags WHERE quote_id = ?", (quote_id,))
            cursor = conn.execute("DELETE FROM quotes WHERE id = ?", (quote_id,))
            if cursor.rowcount == 0:
                raise _not_found(quote_id)

    def search_quotes(
        self, author: str | None, tag: str | None, search: str | None
    ) -> list[QuoteWithTags]:
        """Return quotes matching every filter given; None means no filter."""
        query = "SELECT DISTINCT q.id, q.text, q.author, q.source FROM quotes q"
        conditions: list[str] = []
        params: list[str] = []

        if tag is not None:
            query += " LEFT JOIN tags t ON q.id = t.quote_id"
        if author is not None:
            conditions.append("q.author LIKE ?")
            params.append(f"%{author}%")
        if tag is not None:
            conditions.append("t.tag = ?")
            params.append(tag)
        if search is not None:
            conditions.append("(q.text LIKE ? OR q.author LIKE ? OR q.source LIKE ?)")
            params.extend([f"%{search}%"] * 3)

        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY q.author, q.text"

        with self._access() as conn:
            quotes = conn.execute(query, params).fetchall()
            if not quotes:
                return []
            ids = [row[0] for row in quotes]
            placeholders = ",".join("?" for _ in ids)
            tags = conn.execute(
                f"SELECT quote_id, tag FROM tags WHERE quote_id IN ({placeholders}) "
                "ORDER BY quote_id, tag",
                ids,
            ).fetchall()
        return self._attach_tags(quotes, tags)