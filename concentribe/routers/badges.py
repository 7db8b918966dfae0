from typing import List

from fastapi import APIRouter, HTTPException, Request

from ..accounts import current_user_id
from ..badges import all_badges, award_badge, user_badges
from ..logging_setup import get_logger
from ..schema import BadgeAwardIn, BadgeOut
from ..store import get_session

logger = get_logger("concentribe.routes.badges")

router = APIRouter(prefix="/api/badges")


@router.get("", response_model=List[BadgeOut])
def badges():
    with get_session() as s:
        return all_badges(s)


@router.get("/user", response_model=List[BadgeOut])
def earned(request: Request):
    with get_session() as s:
        return user_badges(s, current_user_id(request))


@router.post("/award", response_model=List[BadgeOut])
def award(body: BadgeAwardIn, request: Request):
    """Award a badge to the caller (no-op if already held); returns their badges."""
    if not body.badge_id:
        raise HTTPException(status_code=400, detail="Badge ID is required")
    user_id = current_user_id(request)
    with get_session() as s:
        try:
            award_badge(s, user_id, body.badge_id)
        except KeyError:
            raise HTTPException(status_code=404, detail="Badge not found")
        s.commit()
        return user_badges(s, user_id)
