import logging
import time

from fastapi import FastAPI, Request
from starlette.middleware.cors import CORSMiddleware
from core.config_loader import settings
from core.errors import LeaveDeskError, leavedesk_error_handler
from core.logging_config import setup_logging

from auth.routes.auth_router import auth_router
from user.router import user_router
from department.router import department_router
from leaverequest.router import leave_request_router
from document.router import document_router
from event.router import event_router
import models_bootstrap

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger("leavedesk")

openapi_tags = [
    {
        "name": "Leave requests",
        "description": "Leave request ledger and paid-leave balances",
    },
    {
        "name": "Events",
        "description": "Calendar events and recurring occurrences",
    },
    {
        "name": "Health Checks",
        "description": "Application health checks",
    }
]

app = FastAPI(title="Leave Desk", openapi_tags=openapi_tags)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.add_exception_handler(LeaveDeskError, leavedesk_error_handler)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("%s %s failed", request.method, request.url.path)
        raise
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


app.include_router(auth_router, prefix="/api")
app.include_router(user_router, prefix="/api")
app.include_router(department_router, prefix="/api")
app.include_router(leave_request_router, prefix="/api")
app.include_router(document_router, prefix="/api")
app.include_router(event_router, prefix="/api")


@app.get("/health", tags=['Health Checks'])
def read_root():
    return {"health": "true"}
