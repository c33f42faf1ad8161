"""
Application factory.

    uvicorn --factory quizzical.main:create_app

The database engine is not built here: it is created lazily by the first
request that needs a session, so a missing database URL surfaces as a
ConfigurationError at that point rather than at import time.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quizzical.api.v1 import router as v1_router
from quizzical.api.v1.error_handlers import register_exception_handlers
from quizzical.config import Settings, get_settings
from quizzical.core.logging import RequestIDMiddleware, setup_logging
from quizzical.utils.logging import get_project_name, get_project_version


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(title=get_project_name(), version=get_project_version())

    # Responses are readable from any origin
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)
    app.include_router(v1_router)
    return app
