from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from core.config import Settings
from core.logger import OperationLogger, configure_logging
from db.database import Database
from middleware.error_handlers import register_error_handlers
from middleware.request_logger import log_requests
from routers import tasks, users

SERVICE_NAME = "api-todo-list"
STARTED_AT = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: settings, logger, database (tables created here, not at import).
    Shutdown: engine disposed.
    """
    settings = app.state.settings or Settings.from_env()
    app.state.settings = settings

    logger = OperationLogger(configure_logging(settings.log_level, settings.log_dir))
    app.state.logger = logger

    database = Database(settings.database_url, echo=settings.sql_echo)
    await database.connect()
    app.state.database = database
    logger.info(f"Server running at {settings.base_url}:{settings.port}", service=SERVICE_NAME)

    try:
        yield
    finally:
        await database.disconnect()
        logger.info("Database connection closed", service=SERVICE_NAME)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    app = FastAPI(title="API Todo List", lifespan=lifespan)
    app.state.settings = settings

    # --- CORS (development: narrow allow_origins in production) ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware)
    app.middleware("http")(log_requests)

    register_error_handlers(app)

    # --- routers ---
    app.include_router(tasks.router)
    app.include_router(users.router)

    # liveness probe: touches neither the database nor the services
    @app.get("/ping", include_in_schema=False)
    async def ping():
        return {
            "ok": True,
            "service": SERVICE_NAME,
            "ts": datetime.now(timezone.utc).isoformat(),
            "uptime_sec": round(time.time() - STARTED_AT, 2),
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=Settings.from_env().port)
