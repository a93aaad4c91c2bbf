from .papers import PaperQueries
from .storage import StorageQueries

__all__ = [
    "PaperQueries",
    "StorageQueries",
]
