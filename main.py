import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from controllers.analyze_controller import error_response
from routes.analyze_route import router as analyze_router
from services.analysis.errors import MissingInputError
from services.vision.client import VisionProvider
from services.vision.provider_factory import build_provider
from utils.settings import Settings

LOGGER = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Optional[Settings] = None, provider: Optional[VisionProvider] = None) -> FastAPI:
    """
    Create and configure the FastAPI application instance.

    `settings` and `provider` may be injected (tests do this); otherwise they
    are built from the environment once, when the app starts.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan manager to initialize:
          - the process-wide settings
          - the vision provider client
        and attach them to `app.state`.
        """
        app_settings = settings
        vision_provider = provider
        owns_provider = provider is None

        if owns_provider:
            if app_settings is None:
                app_settings = Settings.from_env()
            configure_logging(app_settings.log_level)
            try:
                vision_provider = build_provider(app_settings)
            except Exception as exc:
                raise RuntimeError("Failed to initialize vision provider") from exc

        app.state.settings = app_settings
        app.state.vision_provider = vision_provider
        LOGGER.info("Vision provider ready: %s", vision_provider.name)

        try:
            yield
        finally:
            # An injected provider belongs to the caller.
            if owns_provider:
                try:
                    await vision_provider.aclose()
                except Exception as exc:
                    LOGGER.warning("Error closing vision provider: %s", exc)

    app = FastAPI(title="Health Checkup Analyzer", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        """A request the endpoint cannot read carries no usable image."""
        LOGGER.info("Rejected request to %s: %s", request.url.path, exc.errors())
        return error_response(MissingInputError())

    @app.get("/health")
    async def health(request: Request):
        """Simple health check reporting the configured vision provider."""
        vision_provider = getattr(request.app.state, "vision_provider", None)
        return {"ok": True, "provider": vision_provider.name if vision_provider else None}

    app.include_router(analyze_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
