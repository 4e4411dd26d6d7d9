"""
Render tokenised queries into finished query strings.

Rendering either returns the complete query or raises a ``RenderError``;
no partial output is ever returned. The registry and its tokens are only
read, so any number of renders may run concurrently.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from querymanager.engines.query.errors import (
    MissingNamedArgument,
    MissingPositionalArgument,
    UnknownQuery,
)
from querymanager.engines.query.processors import ConfigurableProcessor, ParamValueProcessor
from querymanager.engines.query.registry import QueryRegistry
from querymanager.engines.query.tokens import Literal, NamedVar, PositionalVar

_log = logging.getLogger(__name__)


class QueryRenderer:
    """Walks a query's tokens and substitutes argument values."""

    __slots__ = ("registry", "processor")

    def __init__(
        self,
        registry: QueryRegistry,
        processor: ParamValueProcessor | None = None,
    ) -> None:
        self.registry = registry
        self.processor = processor or ConfigurableProcessor()

    def _value(self, value: Any, key: str, query_id: str) -> str | None:
        if value is None:
            return self.processor.substitute_missing(key=key, query_id=query_id)
        return self.processor.format_value(value, key=key, query_id=query_id)

    def render(
        self,
        query_id: str,
        positional: Sequence[Any] = (),
        named: Mapping[str, Any] | None = None,
    ) -> str:
        """
        Build query *query_id* from *positional* (1-based in templates) and
        *named* arguments.

        Raises ``UnknownQuery``, ``MissingPositionalArgument``,
        ``MissingNamedArgument`` or ``UnsupportedValueType``.
        """
        query = self.registry.lookup(query_id)
        if query is None:
            raise UnknownQuery(query_id)

        _named = named or {}
        parts: list[str] = []

        for token in query.tokens:
            if isinstance(token, Literal):
                parts.append(token.text)
            elif isinstance(token, PositionalVar):
                i = token.index
                raw = positional[i - 1] if i <= len(positional) else None
                text = self._value(raw, str(i), query_id)
                if text is None:
                    raise MissingPositionalArgument(i, query_id=query_id)
                parts.append(text)
            elif isinstance(token, NamedVar):
                text = self._value(_named.get(token.name), token.name, query_id)
                if text is None:
                    raise MissingNamedArgument(token.name, query_id=query_id)
                parts.append(text)
            else:  # pragma: no cover - Token is a closed union
                raise TypeError(f"Unexpected token {token!r}")

        q = "".join(parts)
        _log.debug("Rendered query %s: %s", query_id, q)
        return q
