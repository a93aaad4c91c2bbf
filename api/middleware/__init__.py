from .cors import AllowListCORSMiddleware, cors_headers

__all__ = ["AllowListCORSMiddleware", "cors_headers"]
