"""FastAPI application factory for PayRelay."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from payrelay.common.config import get_settings
from payrelay.common.logging import setup_logging
from payrelay.common.schemas import HealthResponse


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(version=settings.api_version)

    # Mount routers
    from payrelay.payments.router import router as stripe_router
    from payrelay.paypal.router import router as paypal_router

    prefix = settings.api_prefix
    app.include_router(stripe_router, prefix=prefix, tags=["stripe"])
    app.include_router(paypal_router, prefix=prefix, tags=["paypal"])

    return app
