"""
Value processors: turn argument values into query text.

A processor formats a supplied value and decides what happens to a missing
one (``None`` counts as missing). ``substitute_missing`` returning ``None``
means "no substitute": the renderer then raises the matching
``MissingPositionalArgument`` / ``MissingNamedArgument``.

Whenever a string is wrapped, every occurrence of the wrapping delimiter
inside it is doubled first, so ``O'Brien`` becomes ``'O''Brien'``.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Protocol

from querymanager.engines.query.errors import UnsupportedValueType

_NUMERIC_STRING = re.compile(r"-?[0-9]+(\.[0-9]+)?")

_EMPTY_IN_LIST = "(SELECT 1 WHERE 1=0)"


class ParamValueProcessor(Protocol):
    def format_value(self, value: Any, *, key: str, query_id: str) -> str: ...

    def substitute_missing(self, *, key: str, query_id: str) -> str | None: ...


def wrap_string(s: str, delimiter: str) -> str:
    """Double *delimiter* inside *s* and wrap the result with it."""
    if not delimiter:
        return s
    return delimiter + s.replace(delimiter, delimiter * 2) + delimiter


def is_numeric_string(s: str) -> bool:
    return _NUMERIC_STRING.fullmatch(s) is not None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


class ConfigurableProcessor:
    """
    Wraps strings with ``string_wrap_with`` when ``wrap_strings`` is on.

    Strings that look like numbers (``42``, ``-3.5``) are emitted bare unless
    ``wrap_numeric_strings`` is set. Numbers render with ``str()``, booleans as
    ``true``/``false``, dates in ISO form (treated as strings). A missing value
    is an error unless ``use_default_for_missing_parameter`` is on, in which
    case ``default_parameter_value`` is used (escaped only when
    ``escape_default_values`` is set; ``None`` renders as empty text). With
    ``disable_wrap_when_default_parameter_value``, a supplied string equal to
    the default is emitted bare as well.
    """

    def __init__(
        self,
        *,
        wrap_strings: bool = True,
        string_wrap_with: str = "'",
        wrap_numeric_strings: bool = False,
        use_default_for_missing_parameter: bool = False,
        default_parameter_value: Any = None,
        escape_default_values: bool = False,
        disable_wrap_when_default_parameter_value: bool = False,
    ) -> None:
        self.wrap_strings = wrap_strings
        self.string_wrap_with = string_wrap_with
        self.wrap_numeric_strings = wrap_numeric_strings
        self.use_default_for_missing_parameter = use_default_for_missing_parameter
        self.default_parameter_value = default_parameter_value
        self.escape_default_values = escape_default_values
        self.disable_wrap_when_default_parameter_value = disable_wrap_when_default_parameter_value

    def _string(self, s: str) -> str:
        if not self.wrap_strings:
            return s
        if not self.wrap_numeric_strings and is_numeric_string(s):
            return s
        if self.disable_wrap_when_default_parameter_value and s == self.default_parameter_value:
            return s
        return wrap_string(s, self.string_wrap_with)

    def format_value(self, value: Any, *, key: str, query_id: str) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if _is_number(value):
            return str(value)
        if isinstance(value, str):
            return self._string(value)
        if isinstance(value, (date, datetime)):
            return self._string(value.isoformat())
        raise UnsupportedValueType(key, value, query_id=query_id)

    def substitute_missing(self, *, key: str, query_id: str) -> str | None:
        if not self.use_default_for_missing_parameter:
            return None
        v = self.default_parameter_value
        if v is None:
            return ""
        if self.escape_default_values:
            return self.format_value(v, key=key, query_id=query_id)
        if isinstance(v, bool):
            return "true" if v else "false"
        return str(v)


class SQLProcessor:
    """
    SQL flavoured formatting: strings always single-quoted (``'`` doubled),
    booleans as ``bool_true``/``bool_false``, missing values as ``NULL``,
    sequences as a parenthesised ``IN`` list, dates as quoted ISO strings.
    """

    def __init__(self, *, bool_true: str = "TRUE", bool_false: str = "FALSE") -> None:
        self.bool_true = bool_true
        self.bool_false = bool_false

    def format_value(self, value: Any, *, key: str, query_id: str) -> str:
        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return self.bool_true if value else self.bool_false
        if _is_number(value):
            return str(value)
        if isinstance(value, str):
            return wrap_string(value, "'")
        if isinstance(value, (date, datetime)):
            return wrap_string(value.isoformat(), "'")
        if isinstance(value, (list, tuple, set, frozenset)):
            if not value:
                return _EMPTY_IN_LIST
            items = sorted(value, key=str) if isinstance(value, (set, frozenset)) else value
            return "(" + ", ".join(self.format_value(v, key=key, query_id=query_id) for v in items) + ")"
        raise UnsupportedValueType(key, value, query_id=query_id)

    def substitute_missing(self, *, key: str, query_id: str) -> str | None:
        return "NULL"
