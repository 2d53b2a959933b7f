import time
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from inkwell.db.base import get_db
from inkwell.core.logger import Logger

logger = Logger.get_logger()
router = APIRouter()

@router.get("/healthz")
def healthz(db: Session = Depends(get_db)):
    """
    DBに SELECT 1 を投げて応答時間を返す(外部のcronからの死活監視用)
    """
    started = time.perf_counter()
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={
                "ok": False,
                "message": "Database is not responsive",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )
    response_time_ms = round((time.perf_counter() - started) * 1000, 2)
    return {
        "ok": True,
        "response_time_ms": response_time_ms,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
