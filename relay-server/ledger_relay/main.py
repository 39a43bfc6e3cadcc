from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from ledger_relay import __version__
from ledger_relay.core.config import Settings, get_settings
from ledger_relay.core.container import ApplicationContainer, build_container
from ledger_relay.core.log import configure_logging
from ledger_relay.infrastructure.database.session import init_db
from ledger_relay.interfaces.http import create_api_router
from ledger_relay.interfaces.http.responses import request_validation_error


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: Optional[ApplicationContainer] = getattr(app.state, "container", None)
    owns_container = container is None
    if container is None:
        container = build_container(app.state.settings)
        app.state.container = container
    if container.settings.database.auto_create and container.engine is not None:
        await init_db(container.engine)
    yield
    if owns_container:
        await container.dispose()


def create_app(settings: Optional[Settings] = None, container: Optional[ApplicationContainer] = None) -> FastAPI:
    if container is not None:
        settings = container.settings
    settings = settings or get_settings()
    configure_logging(settings.logging)

    app = FastAPI(
        title=settings.project_name,
        description="Relays wallet-signed payloads to the ledger contract",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    if container is not None:
        app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, request_validation_error)
    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/", response_class=PlainTextResponse)
    async def homepage():
        return "Hello, Blockchain API is running!"

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "ledger_relay.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
    )


if __name__ == "__main__":
    run()
