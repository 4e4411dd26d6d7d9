"""Read-only mapping of query id to tokenised query, built once per load."""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from querymanager.engines.query.tokenizer import DEFAULT_VAR_MATCH_REGEX, compile_pattern, tokenize
from querymanager.engines.query.tokens import TokenisedQuery


class QueryRegistry:
    """
    Immutable after construction; safe for any number of concurrent readers.

    Reloading means building a new registry, never mutating an existing one.
    """

    __slots__ = ("_queries",)

    def __init__(self, queries: Mapping[str, TokenisedQuery] | None = None) -> None:
        self._queries = MappingProxyType(dict(queries or {}))

    @classmethod
    def build(
        cls,
        definitions: Mapping[str, str],
        pattern: str | re.Pattern[str] = DEFAULT_VAR_MATCH_REGEX,
        *,
        new_line: str = "\n",
    ) -> QueryRegistry:
        """Tokenize every ``id -> raw body`` pair. Any tokenizer error aborts the build."""
        rx = pattern if isinstance(pattern, re.Pattern) else compile_pattern(pattern)
        queries = {
            qid: TokenisedQuery(qid, tokenize(raw, rx, new_line=new_line, query_id=qid))
            for qid, raw in definitions.items()
        }
        return cls(queries)

    def lookup(self, query_id: str) -> TokenisedQuery | None:
        return self._queries.get(query_id)

    def count(self) -> int:
        return len(self._queries)

    def all_ids(self) -> frozenset[str]:
        return frozenset(self._queries)

    def __len__(self) -> int:
        return len(self._queries)

    def __contains__(self, query_id: object) -> bool:
        return query_id in self._queries

    def __iter__(self) -> Iterator[str]:
        return iter(self._queries)

    def __repr__(self) -> str:
        return f"QueryRegistry({len(self._queries)} queries)"
