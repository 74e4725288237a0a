from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from nollyspot import __version__
from nollyspot.api.router import api_router
from nollyspot.core.config import Settings, get_settings
from nollyspot.core.logging import configure_logging
from nollyspot.db.base import Base
from nollyspot.db.session import create_db_engine, create_session_factory
import nollyspot.models  # noqa: F401  (register tables on Base.metadata)


def _validation_message(errors) -> str:
    if not errors:
        return "Invalid request body"

    err = errors[0]
    if err.get("type") == "json_invalid":
        return "Invalid request body"
    fields = [str(part) for part in err.get("loc", ()) if part not in ("body", "query")]
    field = ".".join(fields)
    if not field:
        return "Invalid request body"
    if err.get("type") == "missing":
        return f"Missing required field: {field}"
    return f"Invalid {field}: {err.get('msg')}"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed requests as 400 with the first offending field."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": _validation_message(exc.errors())},
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.opt(exception=exc).error(f"Database error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": {"error": "Database error", "reason": str(exc)}},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    engine = create_db_engine(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.create_tables:
            Base.metadata.create_all(bind=engine)
        logger.info(f"NollySpot API starting on port {settings.port}")
        yield
        engine.dispose()
        logger.info("NollySpot API stopped")

    app = FastAPI(title="NollySpot API", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.include_router(api_router)
    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
