"""
Query template introspection: list ids, show tokens, preview a rendered query.
"""

from typing import Any

from fastapi import APIRouter, HTTPException

from querymanager.api.deps import QueryManagerDep
from querymanager.engines.query.tokens import describe
from querymanager.schemas import QueryListOut, QueryTokensOut, RenderIn, RenderOut, TokenPublic

router = APIRouter(prefix="/queries", tags=["queries"])


@router.get("", response_model=QueryListOut)
def list_queries(manager: QueryManagerDep) -> Any:
    """All loaded query ids, sorted."""
    ids = sorted(manager.ids_in_use())
    return QueryListOut(data=ids, count=len(ids))


@router.get("/{query_id}/tokens", response_model=QueryTokensOut)
def get_query_tokens(manager: QueryManagerDep, query_id: str) -> Any:
    tokens = manager.tokens_for(query_id)
    if tokens is None:
        raise HTTPException(status_code=404, detail=f"Unknown query {query_id}")
    return QueryTokensOut(
        id=query_id,
        tokens=[TokenPublic(**describe(t)) for t in tokens],
    )


@router.post("/{query_id}/render", response_model=RenderOut)
def render_query(manager: QueryManagerDep, query_id: str, body: RenderIn) -> Any:
    """Render a query; unknown ids give 404, missing arguments 422."""
    q = manager.render(query_id, body.positional, body.named)
    return RenderOut(id=query_id, query=q)
