"""
Engines: query templates (tokenize, register, render).
"""

from querymanager.engines.query import QueryManager, QueryManagerConfig

__all__ = [
    "QueryManager",
    "QueryManagerConfig",
]
