from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.mailadmin.core.context import get_trace_id
from app.mailadmin.core.error_catalog import ErrorCatalog
from app.mailadmin.core.errors import error_response
from app.mailadmin.db.session import get_db

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    return {"status": "ok", "trace_id": get_trace_id(request)}


@router.get("/ready")
async def ready(request: Request, db=Depends(get_db)):
    trace_id = get_trace_id(request)
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        return error_response(
            code=ErrorCatalog.DB_UNAVAILABLE.code,
            message=ErrorCatalog.DB_UNAVAILABLE.message,
            details=str(exc),
            trace_id=trace_id,
            status_code=ErrorCatalog.DB_UNAVAILABLE.status_code,
        )
    return {"status": "ready", "trace_id": trace_id}
