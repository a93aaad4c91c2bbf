from .chat import router as chat_router
from .papers import router as papers_router
from .uploads import router as uploads_router

__all__ = ["chat_router", "papers_router", "uploads_router"]
