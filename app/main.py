import logging
import time
from contextlib import asynccontextmanager
from uuid import uuid4
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app import config
from app.db.postgres import init_models
from app.users.router import router as users_router
from app.complaints.router import router as complaints_router
from app.complaint_updates.router import router as complaint_updates_router
from app.attachments.router import router as attachments_router
from app.feedback.router import router as feedback_router
from app.reports.router import router as reports_router
from app.utils.error_handlers import register_exception_handlers

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting complaint tracking service in {config.APP_ENV} mode")
    if config.DB_CREATE_TABLES:
        await init_models()
    yield


app = FastAPI(title="Complaint Tracking Service", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Propagate X-Request-ID and log one line per request"""
    request_id = request.headers.get("x-request-id") or str(uuid4())
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    response.headers["X-Request-ID"] = request_id
    logger.info(
        f"{request.method} {request.url.path} {response.status_code} "
        f"{elapsed_ms:.1f}ms request_id={request_id}"
    )
    return response


app.include_router(users_router, prefix="/api")
app.include_router(complaints_router, prefix="/api")
app.include_router(complaint_updates_router, prefix="/api")
app.include_router(attachments_router, prefix="/api")
app.include_router(feedback_router, prefix="/api")
app.include_router(reports_router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok"}
