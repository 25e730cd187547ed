from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from layoutlens.api.exceptions import LayoutLensException
from layoutlens.api.limiter import limiter
from layoutlens.api.logging_config import logger, setup_logging
from layoutlens.api.routes import health, projects
from layoutlens.api.services.store import ProjectStore
from layoutlens.config import config

setup_logging()

app = FastAPI(
    title="LayoutLens API", description="LayoutLens - floor plan wall layout API", version="0.1.0"
)

# One store per application, handed to routes through get_store
app.state.store = ProjectStore(lock_timeout=config.get("store", "lock_timeout"))

app.add_middleware(GZipMiddleware, minimum_size=1000)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Prometheus metrics (skipped in tests)
if config.app_env != "test" and config.get("metrics", "enabled", True):
    Instrumentator().instrument(app).expose(app)
    logger.info("Prometheus Instrumentator initialized")


def _problem(request: Request, status_code: int, title: str, detail, code: str, **extensions):
    return {
        "type": f"https://layoutlens.dev/errors/{title.lower().replace(' ', '-')}",
        "title": title,
        "status": status_code,
        "detail": detail,
        "instance": str(request.url),
        "code": code,
        "extensions": {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            **extensions,
        },
    }


@app.exception_handler(LayoutLensException)
async def layoutlens_exception_handler(request: Request, exc: LayoutLensException):
    if exc.status_code >= 500:
        logger.error(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.detail}")
    else:
        logger.warning(f"{exc.__class__.__name__} on {request.method} {request.url.path}")

    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_problem(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Validation Error",
            "Request body could not be parsed",
            "VALIDATION_ERROR",
            # input is left out: it may hold NaN, which JSONResponse refuses
            errors=jsonable_encoder(
                [{"type": e["type"], "loc": e["loc"], "msg": e["msg"]} for e in exc.errors()]
            ),
        ),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=_problem(request, exc.status_code, "HTTP Exception", exc.detail, f"HTTP_{exc.status_code}"),
        headers=getattr(exc, "headers", None),
    )


app.include_router(health.router)
app.include_router(projects.router, prefix="/projects", tags=["projects"])

# CORS: wide open by default, trusted/internal deployments only
origins = config.get("cors", "allowed_origins", ["*"])

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request, call_next):
    logger.info(f"Request: {request.method} {request.url}")
    response = await call_next(request)
    logger.info(f"Response: {response.status_code}")
    return response
