from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_session

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health(session: AsyncSession = Depends(get_session)):
    """Health check endpoint; also round-trips the database."""
    await session.execute(text("SELECT 1"))
    return {"status": "ok", "database": "ok"}
