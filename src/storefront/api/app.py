from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.config import Settings, settings
from storefront.logging_config import configure_logging, log
from storefront.protocols import CacheStore, ConnectionProvider

from .dependencies import lifespan
from .error_handlers import register_error_handlers
from .middleware import RequestLoggingMiddleware
from .routes import customers_router, products_router, system_router


def create_app(
    config: Settings | None = None,
    cache_store: CacheStore | None = None,
    connection_provider: ConnectionProvider | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Settings to run with. Defaults to the global settings.
        cache_store: Cache backend to use instead of the one named by CACHE_BACKEND.
        connection_provider: Connection provider to use instead of one built from settings.

    Returns:
        The configured application; services are created in its lifespan.
    """
    config = config or settings
    configure_logging(config.log_level, config.log_format)

    app = FastAPI(
        title="Storefront API",
        description="CRUD API for products and customers with a read-through response cache",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.overrides = {
        "cache_store": cache_store,
        "connection_provider": connection_provider,
    }

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(system_router)
    app.include_router(products_router)
    app.include_router(customers_router)

    return app


app = create_app()


def main() -> None:
    import uvicorn

    log("info", f"Servidor rodando na porta {settings.api_port}")
    uvicorn.run(
        "storefront.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )


if __name__ == "__main__":
    main()
