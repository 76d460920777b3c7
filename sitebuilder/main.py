import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from sitebuilder.config import settings
from sitebuilder.routers import ai, auth, endpoints, health, preview, projects
from sitebuilder.domain.errors import (
    AuthenticationError,
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from sitebuilder.application.event_handlers import register_event_handlers
from sitebuilder.storage import get_storage

logger = logging.getLogger(__name__)

MAX_LOG_LINE = 80

app = FastAPI(
    title="Site Builder API",
    description="Projects, AI website generation and previews for the site builder",
    version=settings.VERSION,
)


# Register domain event handlers on startup
@app.on_event("startup")
async def startup_event():
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    register_event_handlers()
    storage = get_storage()
    logger.info("Started with %s", type(storage).__name__)


app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    max_age=settings.SESSION_MAX_AGE,
    https_only=not settings.is_development,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_api_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    path = request.url.path
    if path.startswith("/api"):
        duration_ms = int((time.perf_counter() - start) * 1000)
        line = f"{request.method} {path} {response.status_code} in {duration_ms}ms"
        if len(line) > MAX_LOG_LINE:
            line = line[:MAX_LOG_LINE - 1] + "…"
        logger.info(line)
    return response


# Domain error handlers
def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return _error(404, exc)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return _error(400, exc)


@app.exception_handler(ForbiddenError)
async def forbidden_handler(request: Request, exc: ForbiddenError):
    return _error(403, exc)


@app.exception_handler(AuthenticationError)
async def authentication_handler(request: Request, exc: AuthenticationError):
    return _error(401, exc)


@app.exception_handler(ConflictError)
async def conflict_error_handler(request: Request, exc: ConflictError):
    return _error(409, exc)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    logger.error("Unhandled domain error on %s %s: %s", request.method, request.url.path, exc)
    return _error(500, exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal Server Error"})


# Include routers
app.include_router(health.router, tags=["Health"])  # Health check endpoints first
app.include_router(auth.router, prefix="/api", tags=["Auth"])
app.include_router(projects.router, prefix="/api", tags=["Projects"])
app.include_router(endpoints.router, prefix="/api", tags=["API Endpoints"])
app.include_router(ai.router, prefix="/api", tags=["AI"])
app.include_router(preview.router, prefix="/api", tags=["Preview"])


@app.get("/")
async def root():
    return {"message": "Welcome to the Site Builder API. See /docs for API documentation"}
