"""
Admin endpoints. Only usable when the process runs with PLATFORM=dev.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from chirpy.core import config
from chirpy.core.database import get_db
from chirpy.core.logging import get_logger
from chirpy.core.store import SqlAccountStore

router = APIRouter()

logger = get_logger(__name__)


@router.post("/reset")
async def reset(db: AsyncSession = Depends(get_db)):
    """Delete every account and refresh token."""
    if config.PLATFORM != "dev":
        logger.warning("Reset refused on platform %r", config.PLATFORM)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="must be in dev platform",
        )

    await SqlAccountStore(db).delete_all()
    logger.warning("All accounts deleted")
    return {"message": "reset complete"}
