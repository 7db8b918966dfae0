from fastapi import APIRouter
from sqlalchemy import text

from ..logging_setup import get_logger
from ..store import get_session

logger = get_logger("concentribe.routes.health")

router = APIRouter()


@router.get("/health")
def health():
    logger.debug("Health check invoked")
    with get_session() as s:
        s.execute(text("SELECT 1"))
    return {"status": "ok"}


@router.get("/")
def read_root():
    logger.debug("Root hit")
    return {"status": "ok", "message": "Welcome to the ConcenTribe API"}
