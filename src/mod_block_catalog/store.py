"""SQLite-backed block catalog.

The catalog is one table keyed by (blockId, modId). It is only ever written
as a whole: ``replace_all`` swaps the full contents inside one transaction,
so readers see either the previous batch or the new one.
"""

import json
import logging
import sqlite3
import threading
from collections.abc import Iterable
from pathlib import Path

from .core.errors import PersistenceError
from .core.types import BlockRecord

logger = logging.getLogger(__name__)

# Rows per INSERT batch inside the replace-all transaction
DEFAULT_CHUNK_SIZE = 5000

# Default row cap for listing and prefix queries
DEFAULT_QUERY_LIMIT = 50

SCHEMA = """
CREATE TABLE IF NOT EXISTS blocks (
    blockId TEXT NOT NULL,
    modId TEXT NOT NULL,
    blockName TEXT,
    jarSlug TEXT NOT NULL,
    texture64 TEXT,
    entryName TEXT NOT NULL,
    variants TEXT NOT NULL DEFAULT '[]',
    PRIMARY KEY (blockId, modId)
)
"""

COLUMNS = ("blockId", "modId", "blockName", "jarSlug", "texture64", "entryName", "variants")

INSERT_SQL = f"INSERT INTO blocks ({', '.join(COLUMNS)}) VALUES ({', '.join('?' * len(COLUMNS))})"
SELECT_SQL = f"SELECT {', '.join(COLUMNS)} FROM blocks"


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _to_row(record: BlockRecord) -> tuple:
    return (
        record["blockId"],
        record["modId"],
        record.get("blockName"),
        record["jarSlug"],
        record.get("texture64"),
        record["entryName"],
        json.dumps(record.get("variants") or []),
    )


def _from_row(row: sqlite3.Row) -> BlockRecord:
    return BlockRecord(
        blockId=row["blockId"],
        modId=row["modId"],
        blockName=row["blockName"],
        jarSlug=row["jarSlug"],
        texture64=row["texture64"],
        entryName=row["entryName"],
        variants=json.loads(row["variants"]),
    )


class CatalogStore:
    """Persistent block catalog (thread-safe).

    Example:
        >>> store = CatalogStore(Path('catalog.db'))
        >>> store.replace_all(records)
        >>> store.get('door')
        {'blockId': 'door', 'modId': 'm1', ...}
    """

    def __init__(self, db_path: Path | str):
        """Open (and create if needed) the catalog database.

        Args:
            db_path: SQLite file path, or ":memory:"
        """
        self.db_path = db_path
        self._lock = threading.RLock()
        self._conn = sqlite3.connect(str(db_path), check_same_thread=False, isolation_level=None)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute(SCHEMA)

    def replace_all(
        self,
        records: Iterable[BlockRecord],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> int:
        """Atomically replace the whole catalog.

        Existing rows are deleted and the new records inserted in chunks of
        ``chunk_size`` inside a single transaction. On any failure the
        transaction is rolled back and the previous catalog is untouched.

        Args:
            records: Complete new catalog contents
            chunk_size: Rows per INSERT batch

        Returns:
            Number of rows committed

        Raises:
            PersistenceError: If the transaction failed
        """
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")

        with self._lock:
            try:
                rows = [_to_row(r) for r in records]
                self._conn.execute("BEGIN IMMEDIATE")
                self._conn.execute("DELETE FROM blocks")
                for start in range(0, len(rows), chunk_size):
                    self._conn.executemany(INSERT_SQL, rows[start:start + chunk_size])
                self._conn.execute("COMMIT")
            except Exception as e:
                if self._conn.in_transaction:
                    self._conn.execute("ROLLBACK")
                raise PersistenceError(f"Catalog commit failed, previous catalog kept: {e}") from e

        logger.info("Committed %d blocks to %s", len(rows), self.db_path)
        return len(rows)

    def get(self, block_id: str, mod_id: str | None = None) -> BlockRecord | None:
        """Point lookup by block id, optionally narrowed to one mod."""
        with self._lock:
            if mod_id is None:
                row = self._conn.execute(
                    f"{SELECT_SQL} WHERE blockId = ? ORDER BY modId LIMIT 1", (block_id,)
                ).fetchone()
            else:
                row = self._conn.execute(
                    f"{SELECT_SQL} WHERE blockId = ? AND modId = ?", (block_id, mod_id)
                ).fetchone()
        return _from_row(row) if row is not None else None

    def find_by_prefix(self, prefix: str, limit: int = DEFAULT_QUERY_LIMIT) -> list[BlockRecord]:
        """Blocks whose id starts with ``prefix`` (case-insensitive)."""
        pattern = f"{_escape_like(prefix.lower())}%"
        with self._lock:
            rows = self._conn.execute(
                f"{SELECT_SQL} WHERE blockId LIKE ? ESCAPE '\\' ORDER BY blockId, modId LIMIT ?",
                (pattern, limit),
            ).fetchall()
        return [_from_row(r) for r in rows]

    def textured(self, limit: int | None = None) -> list[BlockRecord]:
        """Blocks with a resolved texture, in commit order."""
        sql = f"{SELECT_SQL} WHERE texture64 IS NOT NULL ORDER BY rowid"
        params: tuple = ()
        if limit is not None:
            sql += " LIMIT ?"
            params = (limit,)
        with self._lock:
            rows = self._conn.execute(sql, params).fetchall()
        return [_from_row(r) for r in rows]

    def all(self) -> list[BlockRecord]:
        with self._lock:
            rows = self._conn.execute(f"{SELECT_SQL} ORDER BY rowid").fetchall()
        return [_from_row(r) for r in rows]

    def count(self) -> int:
        with self._lock:
            return self._conn.execute("SELECT COUNT(*) FROM blocks").fetchone()[0]

    def close(self) -> None:
        with self._lock:
            self._conn.close()
