from typing import Annotated

from fastapi import Depends, Request

from querymanager.engines.query import QueryManager


def get_query_manager(request: Request) -> QueryManager:
    return request.app.state.query_manager


QueryManagerDep = Annotated[QueryManager, Depends(get_query_manager)]
