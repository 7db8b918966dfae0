from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Literal, Optional, Union
from datetime import date

# The web client speaks camelCase; Python code uses snake_case field names.
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------- Fixed enumerations ----------

Category = Literal[
    "home", "india", "world", "health", "technology",
    "business", "entertainment", "sports", "science",
]
Interest = Literal[
    "education", "lifestyle", "technology", "politics",
    "sports", "health", "business", "entertainment",
]
NewsSource = Literal[
    "bbc", "cnn", "reuters", "aljazeera", "toi", "guardian", "foxnews",
    "techcrunch", "wired", "bloomberg", "forbes", "wsj", "espn", "skysports",
]
ContentFormat = Literal["text", "video", "podcast", "social"]
InsightType = Literal["trend", "factCheck", "analysis"]
Sentiment = Literal["positive", "negative", "neutral"]


# ---------- News ----------

class SourceRef(CamelModel):
    id: Optional[str] = None
    name: str = ""

class NewsArticle(CamelModel):
    id: str                 # url-derived, see news.article_id_from_url
    title: str
    description: str = ""
    content: str = ""
    url: str
    image: str = ""
    published_at: str       # ISO 8601
    source: SourceRef
    category: str
    estimated_reading_time: int = 1

class ArticlePage(CamelModel):
    articles: List[NewsArticle] = Field(default_factory=list)
    has_more: bool = False


# ---------- AI ----------

class Insight(CamelModel):
    id: str
    type: InsightType
    title: str
    content: str
    sentiment: Sentiment = "neutral"
    confidence: int = Field(default=70, ge=0, le=100)
    category: Optional[str] = None
    related_articles: List[str] = Field(default_factory=list)

class AnalyzeIn(CamelModel):
    content: Optional[str] = None

class SummarizeIn(CamelModel):
    text: Optional[str] = None
    max_length: int = Field(default=200, ge=20, le=2000)

class FactCheckIn(CamelModel):
    claim: Optional[str] = None

class AnalysisOut(CamelModel):
    sentiment: Sentiment
    topics: List[str]
    summary: str

class FactCheckOut(CamelModel):
    is_reliable: bool
    confidence: int
    explanation: str

class SummaryOut(CamelModel):
    summary: str


# ---------- Games ----------

class RiddleOut(CamelModel):
    id: str
    question: str
    answer: str
    difficulty: str = "medium"

class TongueTwisterOut(CamelModel):
    id: str
    text: str
    difficulty: str = "medium"

class SudokuCheckIn(CamelModel):
    # Left loose: the validator answers malformed grids with "all invalid"
    grid: Optional[Any] = None
    puzzle_id: Optional[Union[int, str]] = None

class SudokuResultOut(CamelModel):
    is_correct: bool
    valid_cells: List[List[bool]]

class CrosswordCheckIn(CamelModel):
    puzzle_id: Optional[Union[int, str]] = None
    user_answers: Optional[Dict[str, List[str]]] = None

class CrosswordResultOut(CamelModel):
    is_correct: bool
    correct_count: int
    total_count: int


# ---------- Bookmarks & badges ----------

class BookmarkIn(CamelModel):
    article_id: Optional[str] = None

class BookmarkToggleOut(CamelModel):
    bookmarked: bool

class BadgeOut(CamelModel):
    id: str
    title: str
    icon: str
    background_color: str
    description: str
    date_earned: Optional[str] = None

class BadgeAwardIn(CamelModel):
    badge_id: Optional[str] = None


# ---------- Users ----------

class UserPreferences(CamelModel):
    interests: List[Interest] = Field(default_factory=list)
    sources: List[NewsSource] = Field(default_factory=list)
    formats: List[ContentFormat] = Field(default_factory=list)
    focus_duration: int = Field(default=20, ge=1, le=180)  # minutes

class PreferencesIn(CamelModel):
    interests: Optional[List[Interest]] = None
    sources: Optional[List[NewsSource]] = None
    formats: Optional[List[ContentFormat]] = None
    focus_duration: Optional[int] = Field(default=None, ge=1, le=180)

class RegisterIn(CamelModel):
    username: str = Field(min_length=3, max_length=64)
    email: Optional[str] = None
    password: str = Field(min_length=6)
    name: Optional[str] = None

class LoginIn(CamelModel):
    username: str
    password: str

class UserOut(CamelModel):
    id: int
    username: str
    email: Optional[str] = None
    name: Optional[str] = None
    avatar: Optional[str] = ""
    bio: Optional[str] = ""
    preferences: UserPreferences
    streaks: int = 0
    last_visit: Optional[date] = None
    google_id: Optional[str] = None

class VisitOut(CamelModel):
    streaks: int
    last_visit: date
    badges_awarded: List[str] = Field(default_factory=list)


# ---------- Focus mode & videos ----------

class FocusSessionIn(CamelModel):
    duration_minutes: int = Field(default=20, ge=1, le=180)
    completed: bool = False

class FocusSessionOut(CamelModel):
    completed: bool
    badges_awarded: List[str] = Field(default_factory=list)

class Video(CamelModel):
    id: str
    title: str
    description: str = ""
    channel_title: str = ""
    published_at: str = ""
    thumbnail_url: str = ""
    tags: List[str] = Field(default_factory=list)


# ---------- Communities ----------

class CommunityOut(CamelModel):
    id: str
    name: str
    description: str
    member_count: int
    topics: List[str]
    image: str
    joined: bool

class PostAuthor(CamelModel):
    name: str
    avatar: str

class CommunityPostOut(CamelModel):
    id: str
    community_id: str
    title: str
    content: str
    author: PostAuthor
    created_at: str

class PostIn(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
