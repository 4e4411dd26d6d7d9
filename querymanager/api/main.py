from fastapi import APIRouter

from querymanager.api.routes import queries

api_router = APIRouter()
api_router.include_router(queries.router)
