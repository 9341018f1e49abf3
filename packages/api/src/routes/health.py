# This project was developed with assistance from AI tools.
"""Liveness and database readiness check."""

from db import DatabaseService, get_db_service
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

router = APIRouter()


@router.get("/")
async def health(db_service: DatabaseService = Depends(get_db_service)) -> JSONResponse:
    """200 with ``database: ok`` when the database answers, 503 otherwise."""
    db_ok = await db_service.health_check()
    return JSONResponse(
        status_code=200 if db_ok else 503,
        content={
            "status": "ok" if db_ok else "degraded",
            "database": "ok" if db_ok else "unavailable",
        },
    )
