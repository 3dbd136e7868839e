import logging

from fastapi import FastAPI

from assignments_api.core.config import USERS_CSV_PATH
from assignments_api.core.errors import register_exception_handlers
from assignments_api.core.health import health_monitor
from assignments_api.core.logging_config import configure_logging
from assignments_api.core.logging_middleware import LoggingMiddleware
from assignments_api.db.init_db import init_db
from assignments_api.db.session import SessionLocal
from assignments_api.routers.assignments import router as assignments_router
from assignments_api.routers.health import router as health_router
from assignments_api.routers.submissions import router as submissions_router
from assignments_api.services.bootstrap import load_users_from_csv

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Assignments API")

# Middleware
app.add_middleware(LoggingMiddleware)

register_exception_handlers(app)


# Startup event
@app.on_event("startup")
def on_startup():
    init_db()

    db = SessionLocal()
    try:
        load_users_from_csv(db, USERS_CSV_PATH)
    finally:
        db.close()

    # warm the health gate; it keeps refreshing itself afterwards
    if not health_monitor.refresh():
        logger.error("Database unreachable at startup")


# Include routers
app.include_router(health_router, tags=["health"])
app.include_router(assignments_router, tags=["assignments"])
app.include_router(submissions_router, tags=["submissions"])
