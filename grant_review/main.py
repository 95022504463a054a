# grant_review/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from grant_review import models  # noqa
from grant_review.api.v1.endpoints import evaluators, health, users
from grant_review.core.config import settings
from grant_review.core.errors import ServiceError
from grant_review.core.logging_config import setup_logging
from grant_review.db.init_db import init_db

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)


@app.exception_handler(ServiceError)
def service_error_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.on_event("startup")
def on_startup():
    init_db()


app.include_router(health.router, prefix="/api/v1")
app.include_router(users.router, prefix="/api/v1")
app.include_router(evaluators.router, prefix="/api/v1")
