from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.trustedhost import TrustedHostMiddleware

from kakeibo import __version__
from kakeibo.core.config import settings
from kakeibo.core.database import init_db
from kakeibo.core.logging_config import setup_logging
from kakeibo.core.middleware import RequestContextMiddleware
from kakeibo.domain import models  # noqa: F401
from kakeibo.web.routes import api, health

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize app on startup."""
    # Create tables for local runs; production schemas come from alembic.
    await init_db()
    yield


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Household income and expense tracker",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    TrustedHostMiddleware,
    allowed_hosts=settings.ALLOWED_HOSTS,
)
app.add_middleware(RequestContextMiddleware)

# Include routers
app.include_router(api.router, prefix="/api")
app.include_router(health.router, tags=["health"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
