import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from user_crud.db.session import get_db

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

@router.get("")
def healthcheck(db: Session = Depends(get_db)):
    # An unreachable database degrades the report but the process stays healthy.
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as exc:
        logger.warning("health.database_unreachable", exc_type=type(exc).__name__)
        database = "disconnected"
    return {"status": "ok", "database": database}
