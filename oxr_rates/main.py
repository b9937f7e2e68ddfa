from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .routers import rates
from .services.rates.exceptions import DataAcquisitionFailure, UnsupportedCurrency
from .services.rates.store import RatesStore, build_rates_store


def create_app(
    settings_override: Settings | None = None,
    store_override: RatesStore | None = None,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., temp cache path). Falls back to cached
    get_settings().
    store_override: pre-built RatesStore (e.g. with a fake document source).
    """
    settings = settings_override or get_settings()
    # Initialize logging early
    init_logging(debug=settings.debug)

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )
    app.state.settings = settings
    app.state.rates_store = store_override or build_rates_store(settings)

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(UnsupportedCurrency, errors.unsupported_currency_handler)
    app.add_exception_handler(DataAcquisitionFailure, errors.data_acquisition_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(rates.router)

    @app.get("/")
    async def root():
        return {
            "message": settings.app_name,
            "version": settings.version,
            "base": settings.source,
        }

    return app


app = create_app()
