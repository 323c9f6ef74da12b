from .engine import Engine
from .capability import ServerCapability
from .es_engine import ElasticsearchEngine

__all__ = [
    "Engine",
    "ServerCapability",
    "ElasticsearchEngine",
]
