"""Three-band match engine over an immutable candidate pool.

Candidates live in one tuple and are referenced by index, so a match chain
is just a list of pool indices. Each pass classifies candidates into exact,
prefix and substring bands and concatenates them in that order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from enum import IntEnum

from .text_width import text_width

logger = logging.getLogger(__name__)


class Band(IntEnum):
    EXACT = 0
    PREFIX = 1
    SUBSTRING = 2


def fold_case(data: bytes) -> bytes:
    """Lower-case ASCII letters only, matching ``strncasecmp`` in the C locale."""
    return data.lower()


def classify(candidate: bytes, query: bytes) -> Band | None:
    """Return the band ``candidate`` falls into for ``query``, or ``None``."""
    if candidate == query:
        return Band.EXACT
    if candidate.startswith(query):
        return Band.PREFIX
    if query in candidate:
        return Band.SUBSTRING
    return None


class MatchEngine:
    """Owns the candidate pool and the current match chain.

    ``match`` always produces the same chain as filtering the full pool.
    With ``narrow=True`` only the previous chain is scanned, which is valid
    when the new query extends the previous one at the end: every candidate
    containing the longer query also contains the shorter one.
    """

    def __init__(self, pool: Iterable[bytes], case_insensitive: bool = False) -> None:
        self.pool: tuple[bytes, ...] = tuple(pool)
        self.case_insensitive = case_insensitive
        self._keys = tuple(fold_case(text) for text in self.pool) if case_insensitive else self.pool
        self.widths: tuple[int, ...] = tuple(text_width(text) for text in self.pool)
        self.matches: list[int] = []
        self.query = b""
        self._has_chain = False

    def __len__(self) -> int:
        return len(self.pool)

    def _key(self, query: bytes) -> bytes:
        return fold_case(query) if self.case_insensitive else query

    def band_of(self, index: int, query: bytes | None = None) -> Band | None:
        """Classify pool item ``index`` against ``query`` (default: last query)."""
        key = self._key(self.query if query is None else query)
        return classify(self._keys[index], key)

    def filter(self, query: bytes, source: Sequence[int]) -> list[int]:
        """Band-partition ``source`` indices for ``query`` without storing the result."""
        key = self._key(query)
        exact: list[int] = []
        prefix: list[int] = []
        substring: list[int] = []
        bands = (exact, prefix, substring)
        for index in source:
            band = classify(self._keys[index], key)
            if band is not None:
                bands[band].append(index)
        return exact + prefix + substring

    def match(self, query: bytes, narrow: bool = False) -> list[int]:
        """Recompute and store the match chain for ``query``.

        The previous chain is band-ordered, not pool-ordered, so narrowing
        restores pool order before partitioning to keep per-band order
        identical to a full pass.
        """
        if narrow and self._has_chain and self._key(query).startswith(self._key(self.query)):
            source: Sequence[int] = sorted(self.matches)
        else:
            source = range(len(self.pool))
        self.matches = self.filter(query, source)
        self.query = query
        self._has_chain = True
        logger.debug(
            "matched %d/%d candidates (narrow=%s)",
            len(self.matches),
            len(self.pool),
            narrow,
        )
        return self.matches

    def text(self, index: int) -> bytes:
        return self.pool[index]

    def chain_texts(self) -> list[bytes]:
        return [self.pool[index] for index in self.matches]

    def chain_widths(self) -> list[int]:
        return [self.widths[index] for index in self.matches]
