# concentribe/communities.py
from __future__ import annotations

from typing import Dict, List, Optional
from urllib.parse import quote

from sqlalchemy import func
from sqlmodel import Session, col, select

from .logging_setup import get_logger
from .models import Community, CommunityMember, CommunityPost, User, as_utc
from .schema import CommunityOut, CommunityPostOut, PostAuthor

logger = get_logger("concentribe.communities")

FEED_LIMIT = 50


class CommunityNotFound(LookupError):
    pass


def community_image(name: str) -> str:
    return f"https://api.dicebear.com/7.x/identicon/svg?seed={quote(name)}"


def author_avatar(username: str) -> str:
    return f"https://api.dicebear.com/7.x/avataaars/svg?seed={quote(username)}"


def _member_counts(session: Session) -> Dict[int, int]:
    rows = session.exec(
        select(CommunityMember.community_id, func.count()).group_by(CommunityMember.community_id)
    ).all()
    return {cid: n for cid, n in rows}


def _joined_ids(session: Session, user_id: Optional[int]) -> set:
    if user_id is None:
        return set()
    return set(session.exec(
        select(CommunityMember.community_id).where(CommunityMember.user_id == user_id)
    ).all())


def _out(c: Community, counts: Dict[int, int], joined: set) -> CommunityOut:
    return CommunityOut(
        id=str(c.id),
        name=c.name,
        description=c.description,
        member_count=counts.get(c.id, 0),
        topics=list(c.topics or []),
        image=c.image_url or community_image(c.name),
        joined=c.id in joined,
    )


def _require(session: Session, community_id: int) -> Community:
    community = session.get(Community, community_id)
    if community is None:
        raise CommunityNotFound(community_id)
    return community


def list_communities(session: Session, user_id: Optional[int]) -> List[CommunityOut]:
    counts = _member_counts(session)
    joined = _joined_ids(session, user_id)
    return [_out(c, counts, joined) for c in session.exec(select(Community).order_by(Community.id)).all()]


def joined_communities(session: Session, user_id: int) -> List[CommunityOut]:
    return [c for c in list_communities(session, user_id) if c.joined]


def join_community(session: Session, user_id: int, community_id: int) -> bool:
    """Returns False if the user was already a member. Caller commits."""
    _require(session, community_id)
    existing = session.exec(
        select(CommunityMember).where(
            CommunityMember.community_id == community_id, CommunityMember.user_id == user_id
        )
    ).first()
    if existing:
        return False
    session.add(CommunityMember(community_id=community_id, user_id=user_id))
    logger.info("COMMUNITY_JOINED", extra={"community_id": community_id, "user_id": user_id})
    return True


def leave_community(session: Session, user_id: int, community_id: int) -> bool:
    """Drop the membership only; the user's posts stay. Caller commits."""
    _require(session, community_id)
    membership = session.exec(
        select(CommunityMember).where(
            CommunityMember.community_id == community_id, CommunityMember.user_id == user_id
        )
    ).first()
    if membership is None:
        return False
    session.delete(membership)
    logger.info("COMMUNITY_LEFT", extra={"community_id": community_id, "user_id": user_id})
    return True


def _post_out(post: CommunityPost, author: Optional[User]) -> CommunityPostOut:
    username = author.username if author else "anonymous"
    return CommunityPostOut(
        id=str(post.id),
        community_id=str(post.community_id),
        title=post.title,
        content=post.content,
        author=PostAuthor(
            name=(author.name or author.username) if author else "Anonymous",
            avatar=(author.avatar if author and author.avatar else author_avatar(username)),
        ),
        created_at=as_utc(post.created_at).isoformat(),
    )


def _posts(session: Session, stmt) -> List[CommunityPostOut]:
    rows = session.exec(stmt.order_by(col(CommunityPost.created_at).desc(), col(CommunityPost.id).desc())).all()
    authors = {u.id: u for u in session.exec(
        select(User).where(col(User.id).in_({p.user_id for p in rows}))
    ).all()} if rows else {}
    return [_post_out(p, authors.get(p.user_id)) for p in rows]


def community_feed(session: Session, user_id: int, limit: int = FEED_LIMIT) -> List[CommunityPostOut]:
    """Posts from every community the user belongs to, newest first."""
    joined = _joined_ids(session, user_id)
    if not joined:
        return []
    stmt = select(CommunityPost).where(col(CommunityPost.community_id).in_(joined)).limit(limit)
    return _posts(session, stmt)


def community_posts(session: Session, community_id: int) -> List[CommunityPostOut]:
    _require(session, community_id)
    return _posts(session, select(CommunityPost).where(CommunityPost.community_id == community_id))


def create_post(session: Session, user_id: int, community_id: int, title: str, content: str) -> CommunityPostOut:
    """Caller commits."""
    _require(session, community_id)
    post = CommunityPost(community_id=community_id, user_id=user_id, title=title.strip(), content=content.strip())
    session.add(post)
    session.flush()
    return _post_out(post, session.get(User, user_id))
