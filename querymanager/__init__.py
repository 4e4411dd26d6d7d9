from querymanager.engines.query import QueryManager, QueryManagerConfig

__version__ = "0.1.0"

__all__ = ["QueryManager", "QueryManagerConfig"]
