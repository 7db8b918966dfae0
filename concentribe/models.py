from typing import Optional, List
from sqlmodel import SQLModel, Field, Column, JSON, UniqueConstraint
from datetime import date, datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """SQLite hands timestamps back naive; they were stored as UTC."""
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt.astimezone(timezone.utc)


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(index=True, unique=True)
    email: Optional[str] = Field(default=None, unique=True)
    password: str  # werkzeug hash ("scrypt:...$salt$hash")
    name: Optional[str] = None
    avatar: Optional[str] = ""
    bio: Optional[str] = ""
    preferences_json: str = "{}"  # UserPreferences, serialized (see accounts.load_preferences)
    streaks: int = 0
    last_visit: Optional[date] = None
    google_id: Optional[str] = Field(default=None, unique=True)

class Article(SQLModel, table=True):
    """Cached news article; api_id is the URL-derived public identifier."""
    id: Optional[int] = Field(default=None, primary_key=True)
    api_id: str = Field(index=True, unique=True)
    title: str
    description: Optional[str] = ""
    content: Optional[str] = ""
    url: str
    image_url: Optional[str] = ""
    published_at: datetime
    source_id: Optional[str] = None
    source_name: str = ""
    category: str = Field(default="home", index=True)
    estimated_reading_time: int = 3
    created_at: datetime = Field(default_factory=utcnow)

class Bookmark(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("user_id", "article_id"),)
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    article_id: int = Field(foreign_key="article.id")
    created_at: datetime = Field(default_factory=utcnow)

class Badge(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    badge_id: str = Field(unique=True)
    title: str
    icon: str
    background_color: str
    description: str

class UserBadge(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("user_id", "badge_id"),)
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    badge_id: int = Field(foreign_key="badge.id")
    awarded_at: datetime = Field(default_factory=utcnow)

class Game(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    kind: str = Field(index=True)  # riddle | tongue-twister | sudoku | crossword
    data: dict = Field(default_factory=dict, sa_column=Column(JSON))  # decoded by puzzles.decode_game_data
    difficulty: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)

class GameProgress(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    game_id: int = Field(foreign_key="game.id")
    completed: bool = False
    score: Optional[int] = None
    started_at: datetime = Field(default_factory=utcnow)
    completed_at: Optional[datetime] = None

class Community(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    description: str
    image_url: Optional[str] = ""
    topics: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=utcnow)

class CommunityMember(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("community_id", "user_id"),)
    id: Optional[int] = Field(default=None, primary_key=True)
    community_id: int = Field(foreign_key="community.id", index=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    joined_at: datetime = Field(default_factory=utcnow)

class CommunityPost(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    community_id: int = Field(foreign_key="community.id", index=True)
    user_id: int = Field(foreign_key="user.id")
    title: str
    content: str
    created_at: datetime = Field(default_factory=utcnow)
