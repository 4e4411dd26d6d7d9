"""
Query manager: loads query templates and builds queries from them.

Startup runs loader -> tokenizer -> registry once, on the calling thread.
The finished registry is published with a single reference assignment, so
readers never observe a half-built registry. ``reload()`` rebuilds from
scratch and swaps the whole registry the same way.

Fragments (queries without parameters) are rendered once and cached.
"""

import logging
import threading
from collections.abc import Iterable, Mapping, Sequence
from os import PathLike
from typing import Any

from querymanager.engines.query.config import QueryManagerConfig
from querymanager.engines.query.errors import StartupError
from querymanager.engines.query.loader import DefinitionLoader, list_template_files
from querymanager.engines.query.processors import (
    ConfigurableProcessor,
    ParamValueProcessor,
    SQLProcessor,
)
from querymanager.engines.query.registry import QueryRegistry
from querymanager.engines.query.renderer import QueryRenderer
from querymanager.engines.query.tokenizer import compile_pattern
from querymanager.engines.query.tokens import Token

_log = logging.getLogger(__name__)


def build_processor(config: QueryManagerConfig) -> ParamValueProcessor:
    """Return the value processor selected by ``config.value_processor``."""
    if config.value_processor == "sql":
        return SQLProcessor(bool_true=config.bool_true, bool_false=config.bool_false)
    return ConfigurableProcessor(
        wrap_strings=config.wrap_strings,
        string_wrap_with=config.string_wrap_with,
        wrap_numeric_strings=config.wrap_numeric_strings,
        use_default_for_missing_parameter=config.use_default_for_missing_parameter,
        default_parameter_value=config.default_parameter_value,
        escape_default_values=config.escape_default_values,
        disable_wrap_when_default_parameter_value=config.disable_wrap_when_default_parameter_value,
    )


class QueryManager:
    """Facade over the loader, tokenizer, registry and renderer."""

    def __init__(
        self,
        config: QueryManagerConfig | None = None,
        *,
        processor: ParamValueProcessor | None = None,
    ) -> None:
        self.config = config or QueryManagerConfig()
        self.processor = processor or build_processor(self.config)
        self._renderer = QueryRenderer(QueryRegistry(), self.processor)
        self._started = False
        self._fragments: dict[str, str] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    def _build_registry(self, paths: Iterable[str | PathLike[str]]) -> QueryRegistry:
        cfg = self.config
        rx = compile_pattern(cfg.var_match_regex)
        loader = DefinitionLoader(
            cfg.query_id_prefix,
            trim_id_whitespace=cfg.trim_id_whitespace,
            duplicate_id_policy=cfg.duplicate_id_policy,
        )
        definitions = loader.load(paths)
        return QueryRegistry.build(definitions, rx, new_line=cfg.new_line)

    def load_queries(self, paths: Iterable[str | PathLike[str]]) -> None:
        """
        Load, tokenize and publish the queries defined in *paths*.

        Raises a ``StartupError`` subclass; on failure the previously
        published registry (if any) stays in place.
        """
        try:
            registry = self._build_registry(list(paths))
        except StartupError as e:
            _log.error("Unable to start QueryManager: %s", e)
            raise
        with self._lock:
            self._renderer = QueryRenderer(registry, self.processor)
            self._fragments = {}
            self._started = True
        _log.debug("Started QueryManager with %d queries", registry.count())

    def start(self) -> None:
        """Load every template file found under ``config.template_location``."""
        _log.debug("Starting QueryManager from %s", self.config.template_location)
        try:
            files = list_template_files(self.config.template_location)
        except StartupError as e:
            _log.error("Unable to start QueryManager: %s", e)
            raise
        self.load_queries(files)

    def reload(self) -> None:
        """Discard the current registry and rebuild it from the template location."""
        self.start()

    @property
    def started(self) -> bool:
        return self._started

    @property
    def registry(self) -> QueryRegistry:
        return self._renderer.registry

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(
        self,
        query_id: str,
        positional: Sequence[Any] = (),
        named: Mapping[str, Any] | None = None,
    ) -> str:
        """Build query *query_id*. Raises a ``RenderError`` subclass on failure."""
        return self._renderer.render(query_id, positional, named)

    def build_query_from_id(self, query_id: str, params: Mapping[str, Any]) -> str:
        """Build a query that only uses named parameters."""
        return self._renderer.render(query_id, (), params)

    def fragment_from_id(self, query_id: str) -> str:
        """Return a query that needs no parameters, caching the result."""
        renderer = self._renderer
        with self._lock:
            f = self._fragments.get(query_id)
        if f is not None:
            return f
        f = renderer.render(query_id)
        with self._lock:
            if renderer is self._renderer:
                self._fragments[query_id] = f
        return f

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def tokens_for(self, query_id: str) -> tuple[Token, ...] | None:
        q = self.registry.lookup(query_id)
        return q.tokens if q is not None else None

    def ids_in_use(self) -> frozenset[str]:
        return self.registry.all_ids()

    def count(self) -> int:
        return self.registry.count()

    def named_parameters(self, query_id: str) -> list[str] | None:
        q = self.registry.lookup(query_id)
        return q.named_parameters() if q is not None else None

    def positional_count(self, query_id: str) -> int | None:
        q = self.registry.lookup(query_id)
        return q.positional_count() if q is not None else None
