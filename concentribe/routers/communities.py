from typing import List

from fastapi import APIRouter, HTTPException, Request

from ..accounts import current_user_id
from ..communities import (
    CommunityNotFound,
    community_feed,
    community_posts,
    create_post,
    join_community,
    joined_communities,
    leave_community,
    list_communities,
)
from ..logging_setup import get_logger
from ..schema import CommunityOut, CommunityPostOut, PostIn
from ..store import get_session

logger = get_logger("concentribe.routes.communities")

router = APIRouter(prefix="/api/communities")


def _community_id(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid community ID")
    if value < 1:
        raise HTTPException(status_code=400, detail="Invalid community ID")
    return value


@router.get("", response_model=List[CommunityOut])
def communities(request: Request):
    with get_session() as s:
        return list_communities(s, current_user_id(request))


@router.get("/joined", response_model=List[CommunityOut])
def joined(request: Request):
    with get_session() as s:
        return joined_communities(s, current_user_id(request))


@router.get("/feed", response_model=List[CommunityPostOut])
def feed(request: Request):
    with get_session() as s:
        return community_feed(s, current_user_id(request))


@router.get("/{community_id}/posts", response_model=List[CommunityPostOut])
def posts(community_id: str):
    cid = _community_id(community_id)
    with get_session() as s:
        try:
            return community_posts(s, cid)
        except CommunityNotFound:
            raise HTTPException(status_code=404, detail="Community not found")


@router.post("/{community_id}/posts", response_model=CommunityPostOut, status_code=201)
def new_post(community_id: str, body: PostIn, request: Request):
    cid = _community_id(community_id)
    with get_session() as s:
        try:
            post = create_post(s, current_user_id(request), cid, body.title, body.content)
        except CommunityNotFound:
            raise HTTPException(status_code=404, detail="Community not found")
        s.commit()
    return post


@router.post("/{community_id}/join")
def join(community_id: str, request: Request):
    cid = _community_id(community_id)
    with get_session() as s:
        try:
            join_community(s, current_user_id(request), cid)
        except CommunityNotFound:
            raise HTTPException(status_code=404, detail="Community not found")
        s.commit()
    return {"joined": True, "communityId": str(cid)}


@router.post("/{community_id}/leave")
def leave(community_id: str, request: Request):
    cid = _community_id(community_id)
    with get_session() as s:
        try:
            leave_community(s, current_user_id(request), cid)
        except CommunityNotFound:
            raise HTTPException(status_code=404, detail="Community not found")
        s.commit()
    return {"joined": False, "communityId": str(cid)}
