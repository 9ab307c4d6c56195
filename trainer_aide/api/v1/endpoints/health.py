"""Health check endpoint for load balancers and monitoring."""

import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from trainer_aide.core.config import get_settings
from trainer_aide.db.session import get_db
from trainer_aide.services.anthropic_client import validate_api_key

router = APIRouter()


@router.get("")
async def health():
    """Liveness check. Includes built_at if BACKEND_BUILT_AT is set and whether AI generation is configured."""
    ai_ready, _ = validate_api_key(get_settings().anthropic_api_key)
    payload: dict = {"status": "ok", "ai_configured": ai_ready}
    built_at = os.environ.get("BACKEND_BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Readiness: app + DB connectivity."""
    try:
        await db.execute(text("SELECT 1"))
        return {"status": "ok", "database": "connected"}
    except SQLAlchemyError as e:
        return JSONResponse(
            status_code=500,
            content={"status": "error", "database": str(e)},
        )
