import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import config
from app import __version__, __release_notes__
from errors import ServiceUnavailableError, UpstreamServiceError
from middleware import AllowListCORSMiddleware
from routes import chat_router, papers_router, uploads_router


def configure_logging():
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="QPaperHub API",
    version=__version__,
    description=f"<p>{__release_notes__.strip()}</p>" if __release_notes__.strip() else None,
)

# Include routers
app.include_router(uploads_router)
app.include_router(chat_router)
app.include_router(papers_router)

# Configure CORS
app.add_middleware(AllowListCORSMiddleware)


# ---- Error envelope: every error body is {"error": "..."} ----------------------


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    msg = str(first.get("msg", "Invalid request")).removeprefix("Value error, ")
    field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
    return f"{field}: {msg}" if field else msg


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": _validation_message(exc)})


@app.exception_handler(ServiceUnavailableError)
async def service_unavailable_handler(request: Request, exc: ServiceUnavailableError):
    logger.error(f"Service not configured: {exc.message}")
    return JSONResponse(status_code=500, content={"error": exc.message})


@app.exception_handler(UpstreamServiceError)
async def upstream_error_handler(request: Request, exc: UpstreamServiceError):
    return JSONResponse(status_code=500, content={"error": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unexpected error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "An unexpected error occurred"})


@app.get("/")
async def root():
    return {"message": "QPaperHub API"}


@app.get("/api/health")
async def health():
    return {"status": "healthy", "version": __version__}
