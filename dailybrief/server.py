"""
HTTP trigger for DailyBrief.

A scheduler calls POST /run once a day; GET / is a liveness check.
"""

import logging
import os

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse, PlainTextResponse

from .config import load_settings
from .errors import ConfigurationError, RunInProgressError
from .logging_setup import configure_logging
from .pipeline import RunLock, run_with_google

logger = logging.getLogger(__name__)

LIVENESS_MESSAGE = (
    "Aplikacja Podsumowująca API jest aktywna. "
    "Użyj endpointu /run, aby uruchomić zadania."
)


def create_app(settings=None, runner=run_with_google) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Settings to use; loaded from the environment when omitted.
            A configuration error does not stop the server from starting, it
            is reported by every POST /run instead.
        runner: Callable taking settings and returning a RunResult

    Returns:
        Configured FastAPI app
    """
    config_error = None
    if settings is None:
        try:
            settings = load_settings()
        except ConfigurationError as e:
            logger.error("Configuration error: %s", e)
            config_error = e

    app = FastAPI(title="DailyBrief")
    app.state.settings = settings
    app.state.run_lock = RunLock()

    @app.get("/", response_class=PlainTextResponse)
    def root():
        """Liveness check."""
        return LIVENESS_MESSAGE

    @app.post("/run")
    def run():
        """Run the daily job once."""
        logger.info("Received run request")

        if config_error is not None:
            return JSONResponse(
                status_code=500,
                content={"status": "error", "message": str(config_error)},
            )

        try:
            with app.state.run_lock.hold():
                result = runner(app.state.settings)
        except RunInProgressError as e:
            logger.warning("Rejected run request: %s", e)
            return JSONResponse(
                status_code=409,
                content={"status": "error", "message": str(e)},
            )
        except Exception as e:
            logger.exception("Run failed")
            return JSONResponse(
                status_code=500,
                content={"status": "error", "message": str(e)},
            )

        logger.info("Run finished: %s", result.status)
        return {"status": "success", "message": result.message}

    return app


def serve(host: str = "0.0.0.0", port: int | None = None) -> None:
    """Start the HTTP server with uvicorn."""
    configure_logging(os.getenv("LOG_LEVEL", "INFO").upper())
    app = create_app()

    if port is None:
        settings = app.state.settings
        port = settings.port if settings else int(os.getenv("PORT", "8080"))

    logger.info("Listening on port %d", port)
    uvicorn.run(app, host=host, port=port)
