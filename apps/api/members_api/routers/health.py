from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from members_api.core.db import Database, get_database

router = APIRouter(tags=["health"])


@router.get("/health")
def health(database: Database = Depends(get_database)):
    if database.check_connection():
        return {"status": "ok", "database": "ok"}
    return JSONResponse(status_code=503, content={"status": "degraded", "database": "unavailable"})
