"""Fuzzy search over displayable catalog entries.

The index holds only blocks that have a texture. It is rebuilt from the
catalog after every committed batch and never patched incrementally.
"""

import threading
from collections.abc import Iterable

from rapidfuzz import fuzz, process, utils

from .core.types import BlockRecord

DEFAULT_SCORE_CUTOFF = 60.0
DEFAULT_SEARCH_LIMIT = 50


class SearchIndex:
    """In-memory fuzzy index keyed on block display name and block id.

    Example:
        >>> index = SearchIndex()
        >>> index.rebuild(store.textured())
        >>> [r['blockId'] for r in index.search('wooden dor')]
        ['door', 'trapdoor']
    """

    def __init__(self, score_cutoff: float = DEFAULT_SCORE_CUTOFF):
        self.score_cutoff = score_cutoff
        self._lock = threading.RLock()
        self._records: list[BlockRecord] = []
        self._names: dict[int, str] = {}
        self._ids: dict[int, str] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records = []
            self._names = {}
            self._ids = {}

    def add_many(self, records: Iterable[BlockRecord]) -> None:
        with self._lock:
            for record in records:
                key = len(self._records)
                self._records.append(record)
                self._ids[key] = record["blockId"]
                if record.get("blockName"):
                    self._names[key] = record["blockName"]  # type: ignore[assignment]

    def rebuild(self, records: Iterable[BlockRecord]) -> None:
        """Replace the whole index with ``records``."""
        fresh = SearchIndex(self.score_cutoff)
        fresh.add_many(records)
        with self._lock:
            self._records, self._names, self._ids = fresh._records, fresh._names, fresh._ids

    def search(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[BlockRecord]:
        """Rank indexed blocks against a free-text query.

        Each block scores the better of its name match and its id match;
        ties keep index order.
        """
        with self._lock:
            records, names, ids = self._records, self._names, self._ids

        best: dict[int, float] = {}
        for choices in (names, ids):
            matches = process.extract(
                query,
                choices,
                scorer=fuzz.WRatio,
                processor=utils.default_process,
                limit=None,
                score_cutoff=self.score_cutoff,
            )
            for _, score, key in matches:
                if score > best.get(key, -1.0):
                    best[key] = score

        ranked = sorted(best.items(), key=lambda item: (-item[1], item[0]))
        return [records[key] for key, _ in ranked[:limit]]
