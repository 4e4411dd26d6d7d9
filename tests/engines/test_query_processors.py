"""Unit tests for engines.query.processors."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from querymanager.engines.query import ConfigurableProcessor, SQLProcessor, UnsupportedValueType
from querymanager.engines.query.processors import is_numeric_string, wrap_string


def _fmt(p, value):
    return p.format_value(value, key="k", query_id="Q")


class TestWrapString:
    def test_plain(self):
        assert wrap_string("hello", "'") == "'hello'"

    def test_delimiter_doubled(self):
        assert wrap_string("O'Brien", "'") == "'O''Brien'"

    def test_multi_char_delimiter(self):
        assert wrap_string("a$$b", "$$") == "$$a$$$$b$$"

    def test_empty_delimiter(self):
        assert wrap_string("a'b", "") == "a'b"


class TestNumericString:
    @pytest.mark.parametrize("s", ["42", "-7", "3.14", "0"])
    def test_numeric(self, s):
        assert is_numeric_string(s)

    @pytest.mark.parametrize("s", ["", "4 2", "1e5", "42;", "٤٢", "1.", ".5", "+1"])
    def test_not_numeric(self, s):
        assert not is_numeric_string(s)


class TestConfigurableProcessor:
    def test_string_wrapped(self):
        assert _fmt(ConfigurableProcessor(), "hello") == "'hello'"

    def test_quote_escaped(self):
        assert _fmt(ConfigurableProcessor(), "O'Brien") == "'O''Brien'"

    def test_injection_neutralised(self):
        out = _fmt(ConfigurableProcessor(), "'; DROP TABLE users; --")
        assert out == "'''; DROP TABLE users; --'"

    def test_custom_delimiter(self):
        p = ConfigurableProcessor(string_wrap_with='"')
        assert _fmt(p, 'say "hi"') == '"say ""hi"""'

    def test_wrapping_disabled(self):
        assert _fmt(ConfigurableProcessor(wrap_strings=False), "abc") == "abc"

    def test_numeric_string_bare_by_default(self):
        assert _fmt(ConfigurableProcessor(), "42") == "42"

    def test_numeric_string_wrapped_when_configured(self):
        assert _fmt(ConfigurableProcessor(wrap_numeric_strings=True), "42") == "'42'"

    def test_numbers(self):
        p = ConfigurableProcessor()
        assert _fmt(p, 42) == "42"
        assert _fmt(p, 2.5) == "2.5"
        assert _fmt(p, Decimal("1.10")) == "1.10"

    def test_bool(self):
        p = ConfigurableProcessor()
        assert _fmt(p, True) == "true"
        assert _fmt(p, False) == "false"

    def test_date(self):
        assert _fmt(ConfigurableProcessor(), date(2024, 1, 31)) == "'2024-01-31'"

    def test_unsupported(self):
        with pytest.raises(UnsupportedValueType):
            _fmt(ConfigurableProcessor(), [1, 2])

    def test_missing_without_default(self):
        assert ConfigurableProcessor().substitute_missing(key="k", query_id="Q") is None

    def test_missing_with_default(self):
        p = ConfigurableProcessor(use_default_for_missing_parameter=True, default_parameter_value="x")
        assert p.substitute_missing(key="k", query_id="Q") == "x"

    def test_missing_with_escaped_default(self):
        p = ConfigurableProcessor(
            use_default_for_missing_parameter=True,
            default_parameter_value="x",
            escape_default_values=True,
        )
        assert p.substitute_missing(key="k", query_id="Q") == "'x'"

    def test_missing_with_bool_default(self):
        p = ConfigurableProcessor(use_default_for_missing_parameter=True, default_parameter_value=True)
        assert p.substitute_missing(key="k", query_id="Q") == "true"

    def test_missing_with_number_default(self):
        p = ConfigurableProcessor(use_default_for_missing_parameter=True, default_parameter_value=0)
        assert p.substitute_missing(key="k", query_id="Q") == "0"

    def test_default_value_wrapped_unless_disabled(self):
        p = ConfigurableProcessor(default_parameter_value="NULL")
        assert _fmt(p, "NULL") == "'NULL'"
        p = ConfigurableProcessor(
            default_parameter_value="NULL", disable_wrap_when_default_parameter_value=True
        )
        assert _fmt(p, "NULL") == "NULL"
        assert _fmt(p, "other") == "'other'"

    def test_missing_with_none_default(self):
        p = ConfigurableProcessor(use_default_for_missing_parameter=True)
        assert p.substitute_missing(key="k", query_id="Q") == ""


class TestSQLProcessor:
    def test_string(self):
        assert _fmt(SQLProcessor(), "a'b") == "'a''b'"

    def test_numeric_string_still_quoted(self):
        assert _fmt(SQLProcessor(), "42") == "'42'"

    def test_none(self):
        assert _fmt(SQLProcessor(), None) == "NULL"

    def test_bool(self):
        assert _fmt(SQLProcessor(), True) == "TRUE"
        assert _fmt(SQLProcessor(bool_true="1", bool_false="0"), False) == "0"

    def test_datetime(self):
        assert _fmt(SQLProcessor(), datetime(2024, 1, 31, 12, 0)) == "'2024-01-31T12:00:00'"

    def test_in_list(self):
        assert _fmt(SQLProcessor(), [1, "a", None, True]) == "(1, 'a', NULL, TRUE)"

    def test_empty_list(self):
        assert _fmt(SQLProcessor(), []) == "(SELECT 1 WHERE 1=0)"

    def test_set_sorted(self):
        assert _fmt(SQLProcessor(), {"b", "a"}) == "('a', 'b')"

    def test_unsupported(self):
        with pytest.raises(UnsupportedValueType):
            _fmt(SQLProcessor(), {"a": 1})

    def test_missing_is_null(self):
        assert SQLProcessor().substitute_missing(key="k", query_id="Q") == "NULL"
