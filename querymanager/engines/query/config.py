"""Typed configuration record of the query template engine."""

import json
from os import PathLike
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from querymanager.engines.query.tokenizer import DEFAULT_VAR_MATCH_REGEX


class QueryManagerConfig(BaseModel):
    """
    Settings of the query template engine, fixed for the process lifetime.

    Field names are snake_case; each also accepts the CamelCase key used in a
    ``"QueryManager": {...}`` JSON configuration section.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    template_location: Path = Field(
        default=Path("resource/queries"),
        alias="TemplateLocation",
        description="File or directory (searched recursively) holding query templates.",
    )
    query_id_prefix: str = Field(default="ID:", min_length=1, alias="QueryIdPrefix")
    trim_id_whitespace: bool = Field(default=True, alias="TrimIdWhiteSpace")
    var_match_regex: str = Field(
        default=DEFAULT_VAR_MATCH_REGEX,
        min_length=1,
        alias="VarMatchRegEx",
        description="Placeholder pattern; the first capture group is the variable.",
    )
    new_line: str = Field(default="\n", alias="NewLine")
    wrap_strings: bool = Field(default=True, alias="WrapStrings")
    string_wrap_with: str = Field(default="'", alias="StringWrapWith")
    wrap_numeric_strings: bool = Field(
        default=False,
        alias="WrapNumericStrings",
        description="If False, strings such as '42' or '-1.5' are emitted without wrapping.",
    )
    duplicate_id_policy: Literal["error", "last_wins"] = Field(
        default="error", alias="DuplicateIdPolicy"
    )
    value_processor: Literal["configurable", "sql"] = Field(
        default="configurable", alias="ValueProcessor"
    )
    use_default_for_missing_parameter: bool = Field(
        default=False, alias="UseDefaultForMissingParameter"
    )
    default_parameter_value: str | int | float | bool | None = Field(
        default=None, alias="DefaultParameterValue"
    )
    escape_default_values: bool = Field(default=False, alias="EscapeDefaultValues")
    disable_wrap_when_default_parameter_value: bool = Field(
        default=False,
        alias="DisableWrapWhenDefaultParameterValue",
        description="Emit a supplied string equal to the default value without wrapping.",
    )
    bool_true: str = Field(default="TRUE", alias="BoolTrue")
    bool_false: str = Field(default="FALSE", alias="BoolFalse")

    @classmethod
    def from_json_file(
        cls, path: str | PathLike[str], section: str = "QueryManager"
    ) -> "QueryManagerConfig":
        """Read a JSON file; use its *section* object if present, else the whole document."""
        data: Any = json.loads(Path(path).read_text(encoding="utf-8"))
        if isinstance(data, dict) and isinstance(data.get(section), dict):
            data = data[section]
        return cls.model_validate(data)
