"""
Query template engine.

Exports: QueryManager, QueryManagerConfig, tokenize, QueryRegistry,
QueryRenderer, DefinitionLoader and the token and error types.
"""

from querymanager.engines.query.config import QueryManagerConfig
from querymanager.engines.query.errors import (
    DuplicateID,
    MalformedDefinition,
    MissingNamedArgument,
    MissingPositionalArgument,
    PatternCompileError,
    QueryManagerError,
    RenderError,
    StartupError,
    TemplateIOError,
    UnknownQuery,
    UnsupportedValueType,
)
from querymanager.engines.query.loader import DefinitionLoader, list_template_files
from querymanager.engines.query.manager import QueryManager
from querymanager.engines.query.processors import ConfigurableProcessor, SQLProcessor
from querymanager.engines.query.registry import QueryRegistry
from querymanager.engines.query.renderer import QueryRenderer
from querymanager.engines.query.tokenizer import tokenize
from querymanager.engines.query.tokens import (
    Literal,
    NamedVar,
    PositionalVar,
    Token,
    TokenisedQuery,
    to_source,
)

__all__ = [
    "QueryManager",
    "QueryManagerConfig",
    "DefinitionLoader",
    "list_template_files",
    "tokenize",
    "QueryRegistry",
    "QueryRenderer",
    "ConfigurableProcessor",
    "SQLProcessor",
    "Literal",
    "NamedVar",
    "PositionalVar",
    "Token",
    "TokenisedQuery",
    "to_source",
    "QueryManagerError",
    "StartupError",
    "TemplateIOError",
    "MalformedDefinition",
    "DuplicateID",
    "PatternCompileError",
    "RenderError",
    "UnknownQuery",
    "MissingPositionalArgument",
    "MissingNamedArgument",
    "UnsupportedValueType",
]
