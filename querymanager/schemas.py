"""
Pydantic schemas for the query introspection API.
"""

from typing import Any

from pydantic import BaseModel, Field


class QueryListOut(BaseModel):
    data: list[str]
    count: int


class TokenPublic(BaseModel):
    kind: str = Field(..., description="literal, positional or named")
    text: str | None = None
    index: int | None = None
    name: str | None = None


class QueryTokensOut(BaseModel):
    id: str
    tokens: list[TokenPublic]


class RenderIn(BaseModel):
    """Body for POST /queries/{query_id}/render."""

    positional: list[Any] = Field(default_factory=list)
    named: dict[str, Any] = Field(default_factory=dict)


class RenderOut(BaseModel):
    id: str
    query: str
