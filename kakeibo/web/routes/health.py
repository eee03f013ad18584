import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo import __version__
from kakeibo.core.database import get_db

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health", summary="Health check")
async def health(db: AsyncSession = Depends(get_db)) -> dict[str, str]:
    """Liveness plus a ``SELECT 1`` round trip to the database."""
    try:
        await db.execute(text("SELECT 1"))
    except Exception:  # noqa: BLE001
        logger.exception("Database health probe failed")
        return {"status": "degraded", "database": "error", "version": __version__}

    return {"status": "ok", "database": "ok", "version": __version__}
