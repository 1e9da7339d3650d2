"""
Brokerage Back-Office - FastAPI Application Entrypoint

This module initializes the FastAPI application with:
- CORS and security middleware
- Authentication, admin and content routes
- Database lifecycle management
- Mapping of domain errors to HTTP responses

Run locally with:
    uvicorn brokerage.app:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from brokerage import __version__
from brokerage.admin.routes import router as admin_router
from brokerage.auth.routes import router as auth_router
from brokerage.config import configure_logging, settings
from brokerage.content.routes import routers as content_routers
from brokerage.database import get_engine, get_session_factory, init_db
from brokerage.errors import BrokerageError
from brokerage.gateway.middleware import SecurityMiddleware


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
        - Configure logging
        - Create the engine and tables, unless a session factory was
          already installed (tests inject an in-memory database)

    Shutdown:
        - Dispose the engine created here
    """
    configure_logging()

    engine = None
    if getattr(app.state, "db_session_factory", None) is None:
        engine = get_engine(settings.DATABASE_URL)
        init_db(engine)
        app.state.db_engine = engine
        app.state.db_session_factory = get_session_factory(engine)
        logger.info("Database initialized")

    yield

    if engine is not None:
        engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    description="Marketing site and admin back-office API for a real-estate brokerage",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "PUT", "PATCH"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
)

app.add_middleware(SecurityMiddleware)


@app.exception_handler(BrokerageError)
async def brokerage_error_handler(request: Request, exc: BrokerageError):
    """Render domain errors in the same shape as HTTPException."""
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


app.include_router(auth_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")
for content_router in content_routers:
    app.include_router(content_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": __version__}


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.APP_NAME,
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }
