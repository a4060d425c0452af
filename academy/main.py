from academy.core.config import get_settings
from academy.core.errors import register_error_handlers
from academy.core.logging import configure_logging
from academy.core.middleware import RequestIdMiddleware
from academy.api.router import api_router

from fastapi import FastAPI


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
    )
    # Middleware: correlation id
    app.add_middleware(RequestIdMiddleware, header_name=settings.request_id_header)

    register_error_handlers(app)

    app.include_router(api_router, prefix=settings.api_prefix)

    return app


app = create_app()
