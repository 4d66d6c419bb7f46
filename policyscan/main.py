"""
FastAPI application initialization for the PolicyScan insurance portfolio service.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from policyscan.core.config import get_settings
from policyscan.routes.portfolio import router as portfolio_router


def create_app() -> FastAPI:
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    application = FastAPI(
        title="PolicyScan Insurance Portfolio API",
        description="Rule-based assessment of a personal insurance portfolio",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(portfolio_router)

    @application.get("/health")
    def health():
        """
        Application health check endpoint.
        """
        return {"status": "healthy", "service": "policyscan"}

    return application


app = create_app()
