import logging
import sys
import time
import uuid
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import make_asgi_app

from leadsheet.api import leads
from leadsheet.config import Settings, get_settings
from leadsheet.core.logging import request_id_var, setup_logging
from leadsheet.services.google_sheets import SheetsCredentialsError
from leadsheet.services.lead_store import LeadStore, SheetsLeadStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, lead_store: Optional[LeadStore] = None) -> FastAPI:
    """Build the API.

    When no store is given, a Sheets-backed store is created on startup; a
    credential file that cannot be loaded stops the process.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Lead Sheet API",
        description="API for tracking calls, follow-ups and remarks on leads kept in Google Sheets",
        version="1.0.0"
    )
    app.state.settings = settings
    app.state.lead_store = lead_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.mount("/metrics", make_asgi_app())
    app.include_router(leads.router)

    @app.on_event("startup")
    async def startup_event():
        """Authenticate against Google Sheets once for the process."""
        if app.state.lead_store is not None:
            return
        configure_logging(settings)
        app.state.lead_store = build_lead_store(settings)
        logger.info("Application startup complete")

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    @app.get("/ready")
    async def readiness_check():
        store = app.state.lead_store
        if store is None or not await store.is_healthy():
            logger.warning("Lead store not ready")
            raise HTTPException(status_code=503, detail="Lead store not ready")
        return {"status": "ready"}

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True, extra={"request_id": request_id_var.get()})
        return PlainTextResponse("Internal server error", status_code=500)

    @app.middleware("http")
    async def add_request_context(request: Request, call_next):
        token = request_id_var.set(request.headers.get("X-Request-ID") or str(uuid.uuid4()))
        start_time = time.time()
        response = await call_next(request)
        # Left set on failure so the exception handler can log the id.
        request_id_var.reset(token)
        response.headers["X-Process-Time"] = str(time.time() - start_time)
        return response

    return app


def configure_logging(settings: Settings) -> None:
    setup_logging(settings.LOG_LEVEL)
    settings.validate_optional_settings()
    settings.log_configuration()


def build_lead_store(settings: Settings) -> LeadStore:
    """Sheets-backed store; exits the process when credentials cannot be loaded."""
    try:
        return SheetsLeadStore(settings)
    except SheetsCredentialsError as e:
        logger.critical("Cannot load Google credentials: %s", e)
        sys.exit(1)


def run() -> None:
    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    lead_store = build_lead_store(settings)

    uvicorn.run(create_app(settings, lead_store), host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
