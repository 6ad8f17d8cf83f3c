"""Helpdesk SLA Engine — FastAPI application factory."""

import logging

from fastapi import FastAPI

from helpdesk_sla.config import settings
from helpdesk_sla.infrastructure.api.routes_analysis import router as analysis_router
from helpdesk_sla.infrastructure.api.routes_health import router as health_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    app = FastAPI(
        title="Helpdesk SLA Engine",
        description="Business-hours SLA verdicts and risk triage for helpdesk tickets",
        version="0.1.0",
        debug=settings.debug,
    )

    app.include_router(health_router, prefix="/api")
    app.include_router(analysis_router, prefix="/api")

    return app


app = create_app()
