"""
Errors raised by the query template engine.

Startup errors (loading, tokenizing, pattern compilation) abort the whole
build. Render errors are per call and leave the registry untouched.
"""

from __future__ import annotations


class QueryManagerError(ValueError):
    """Base class for every error raised by the query template engine."""

    pass


# ---------------------------------------------------------------------------
# Startup
# ---------------------------------------------------------------------------


class StartupError(QueryManagerError):
    """Raised when templates cannot be loaded, parsed or tokenized."""

    pass


class TemplateIOError(StartupError):
    """A template file or directory could not be opened or read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Unable to read query template {path}: {reason}")
        self.path = path


class MalformedDefinition(StartupError):
    """Template content that cannot be attributed to a query id."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        if path:
            message = f"{path}: {message}"
        super().__init__(message)
        self.path = path


class DuplicateID(StartupError):
    def __init__(self, query_id: str, *, path: str | None = None) -> None:
        where = f" (redefined in {path})" if path else ""
        super().__init__(f"Query id {query_id!r} is defined more than once{where}")
        self.query_id = query_id
        self.path = path


class PatternCompileError(StartupError):
    """The configured placeholder pattern is not usable."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid placeholder pattern {pattern!r}: {reason}")
        self.pattern = pattern


# ---------------------------------------------------------------------------
# Render
# ---------------------------------------------------------------------------


class RenderError(QueryManagerError):
    """Raised when a query cannot be built from its template and arguments."""

    def __init__(self, message: str, *, query_id: str | None = None) -> None:
        super().__init__(message)
        self.query_id = query_id


class UnknownQuery(RenderError):
    def __init__(self, query_id: str) -> None:
        super().__init__(f"Unknown query {query_id}", query_id=query_id)


class MissingPositionalArgument(RenderError):
    def __init__(self, index: int, *, query_id: str | None = None) -> None:
        super().__init__(
            f"Query {query_id} requires positional parameter {index} but it was not supplied",
            query_id=query_id,
        )
        self.index = index


class MissingNamedArgument(RenderError):
    def __init__(self, name: str, *, query_id: str | None = None) -> None:
        super().__init__(
            f"Query {query_id} requires a parameter named {name} but none supplied",
            query_id=query_id,
        )
        self.name = name


class UnsupportedValueType(RenderError):
    def __init__(self, key: str, value: object, *, query_id: str | None = None) -> None:
        super().__init__(
            f"Value for parameter {key} of query {query_id} is not a supported type "
            f"(type is {type(value).__name__})",
            query_id=query_id,
        )
        self.key = key
