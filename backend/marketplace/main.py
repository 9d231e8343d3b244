import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from marketplace.config import settings
from marketplace.database import init_db
from marketplace.errors import AppError, InternalError, ValidationError, field_error
from marketplace.routers import (
    admin,
    articles,
    auth,
    businesses,
    contributors,
    events,
    job_applications,
    jobs,
    payments,
)
from marketplace.utils.response import success

logger = logging.getLogger("marketplace")

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()
    logger.info("Database ready at %s (%s)", settings.db_path, settings.environment)
    yield


app = FastAPI(
    title="Marketplace API",
    description="Businesses, jobs, articles, events and payment verification",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://127.0.0.1:5173",
        "http://localhost:5173",
    ],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_envelope())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = [field_error(str(err["loc"][-1]), err["msg"]) for err in exc.errors()]
    error = ValidationError(details=details)
    return JSONResponse(status_code=error.status_code, content=error.to_envelope())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    error_code = "NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR"
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "code": exc.status_code,
            "message": str(exc.detail),
            "error": {"code": error_code, "details": None},
        },
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    details = None if settings.is_production else [{"field": None, "message": str(exc)}]
    error = InternalError(details=details)
    return JSONResponse(status_code=error.status_code, content=error.to_envelope())


app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(businesses.router, prefix=settings.api_prefix)
app.include_router(jobs.router, prefix=settings.api_prefix)
app.include_router(job_applications.router, prefix=settings.api_prefix)
app.include_router(contributors.router, prefix=settings.api_prefix)
app.include_router(articles.router, prefix=settings.api_prefix)
app.include_router(events.router, prefix=settings.api_prefix)
app.include_router(payments.router, prefix=settings.api_prefix)
app.include_router(admin.router, prefix=settings.api_prefix)


@app.get(f"{settings.api_prefix}/health")
async def health():
    return success({"status": "ok", "version": VERSION})
