# concentribe/seed.py
"""
Demo data loaded into a fresh database: badge catalog, communities, the demo
user with memberships and posts, a starter article cache and the default games.
"""
from __future__ import annotations

from sqlmodel import Session, select

from .accounts import hash_password, save_preferences
from .badges import seed_badges
from .communities import community_image
from .games import default_games, store_game
from .logging_setup import get_logger
from .models import Badge, Community, CommunityMember, CommunityPost, User
from .news import article_id_from_url, estimate_reading_time, upsert_articles
from .schema import NewsArticle, SourceRef, UserPreferences

logger = get_logger("concentribe.seed")

COMMUNITIES = [
    ("Tech Enthusiasts", "Discuss the latest in technology and innovation", ["Technology", "Innovation", "Gadgets"]),
    ("Health & Wellness", "Share tips and news about living a healthy lifestyle", ["Health", "Fitness", "Nutrition"]),
    ("Business Minds", "Exchange ideas about business, entrepreneurship and finance",
     ["Business", "Finance", "Entrepreneurship"]),
    ("Science Explorers", "Discuss fascinating discoveries and scientific breakthroughs", ["Science", "Research", "Space"]),
    ("World Affairs", "Discuss global news, politics and international relations",
     ["Politics", "International", "Current Events"]),
    ("Sports Fans", "Discuss sports news, events, and favorite teams", ["Sports", "Athletics", "Teams"]),
    ("Entertainment Buzz", "Chat about the latest in movies, TV shows, and celebrity news",
     ["Entertainment", "Movies", "TV Shows"]),
    ("Travel Adventures", "Share travel experiences, tips, and news from around the world",
     ["Travel", "Adventure", "Culture"]),
    ("Food Lovers", "Discuss recipes, restaurant reviews, and culinary news", ["Food", "Cooking", "Restaurants"]),
    ("Education Hub", "Discuss educational trends, learning resources, and academic news",
     ["Education", "Learning", "Academic"]),
]

DEMO_MEMBERSHIPS = [1, 2, 3, 4, 6]

# (community position, title, content)
DEMO_POSTS = [
    (1, "Latest advancements in AI",
     "I've been following recent developments in artificial intelligence. The pace of innovation is incredible! "
     "What are your thoughts on the future of AI?"),
    (1, "New smartphone releases this year",
     "Several major smartphone manufacturers are releasing new models this year. Which ones are you most excited about?"),
    (1, "Concerns about AI ethics",
     "With the rapid advancement of AI, ethical concerns are becoming more important. How should we approach AI "
     "governance and regulation?"),
    (2, "Best practices for mental health",
     "In today's fast-paced world, maintaining mental health is crucial. What practices have you found most effective?"),
    (2, "Nutrition tips for busy professionals",
     "Finding time to eat healthily can be challenging with a busy schedule. What are your go-to healthy meals that "
     "don't take much time to prepare?"),
    (3, "Emerging market trends",
     "Several emerging markets are showing interesting growth patterns. What sectors do you think will perform best "
     "in the next quarter?"),
    (3, "Remote work productivity strategies",
     "As remote work becomes more permanent for many companies, what strategies have you found effective for "
     "maintaining high productivity?"),
    (4, "Recent space discoveries",
     "NASA and other space agencies have made several fascinating discoveries recently. Which ones do you find most "
     "exciting?"),
    (6, "Olympic Games predictions",
     "With the Olympics approaching, which countries do you think will lead the medal count? Any underdog athletes "
     "we should watch for?"),
    (6, "Evolution of sports technology",
     "Technology is changing how we play and watch sports. What recent sports technology innovations do you find "
     "most interesting?"),
    (7, "Must-watch streaming shows",
     "With so many streaming platforms, it's hard to keep up with all the great content. What shows have you been "
     "enjoying lately?"),
    (8, "Hidden travel gems",
     "Beyond the typical tourist spots, what are some lesser-known destinations you've visited that deserve more "
     "attention?"),
]

# (category, title, description, url, image, published, source id, source name)
SAMPLE_ARTICLES = [
    ("technology", "AI Breakthrough Promises to Transform Healthcare",
     "New AI models are showing remarkable accuracy in diagnosing rare diseases from medical images.",
     "https://tech-news-example.com/ai-healthcare-breakthrough",
     "https://images.unsplash.com/photo-1581093588401-fdd3d9997628", "2023-03-15T09:00:00Z",
     "tech-news", "Tech Chronicle"),
    ("technology", "Quantum Computing Reaches New Milestone",
     "Researchers achieve quantum supremacy with a processor handling complex calculations in minutes.",
     "https://tech-insider.com/quantum-computing-milestone",
     "https://images.unsplash.com/photo-1635070041078-e363dbe005cb", "2023-02-22T09:00:00Z",
     "tech-insider", "Tech Insider"),
    ("health", "New Study Reveals Benefits of Intermittent Fasting",
     "Research shows intermittent fasting may improve metabolic health and extend lifespan.",
     "https://health-journal.com/intermittent-fasting-benefits",
     "https://images.unsplash.com/photo-1505576399279-565b52d4ac71", "2023-03-05T09:00:00Z",
     "health-journal", "Health & Wellness Journal"),
    ("health", "Breakthrough in Alzheimer's Treatment Shows Promise",
     "Early-stage clinical trial demonstrates significant reduction in brain plaque buildup.",
     "https://medical-news.org/alzheimers-breakthrough",
     "https://images.unsplash.com/photo-1579684288903-39fad29257a4", "2023-02-18T09:00:00Z",
     "medical-news", "Medical News Today"),
    ("business", "Global Supply Chain Disruptions Ease as Shipping Rates Decline",
     "Experts predict more stable conditions for international trade in coming months.",
     "https://business-observer.com/supply-chain-recovery",
     "https://images.unsplash.com/photo-1494412651409-8963ce7935a7", "2023-03-10T09:00:00Z",
     "business-observer", "Business Observer"),
    ("business", "Central Bank Raises Interest Rates to Combat Inflation",
     "Economists divided on whether more aggressive measures will be needed.",
     "https://financial-times.com/central-bank-rate-hike",
     "https://images.unsplash.com/photo-1611974789855-9c2a0a7236a3", "2023-03-01T09:00:00Z",
     "financial-times", "Financial Times"),
    ("world", "Historic Climate Agreement Reached at International Summit",
     "Over 190 countries commit to more ambitious emissions reduction targets.",
     "https://global-news-network.com/climate-agreement",
     "https://images.unsplash.com/photo-1532408840957-031d8034aeef", "2023-03-12T09:00:00Z",
     "gnn", "Global News Network"),
    ("world", "Peace Negotiations Begin After Regional Conflict",
     "International mediators facilitate talks between opposing factions.",
     "https://international-herald.com/peace-talks-begin",
     "https://images.unsplash.com/photo-1517245386807-bb43f82c33c4", "2023-02-28T09:00:00Z",
     "international-herald", "International Herald"),
    ("sports", "Underdog Team Clinches Championship in Overtime Thriller",
     "Historic victory comes after remarkable playoff run that defied expectations.",
     "https://sports-network.com/underdog-champions",
     "https://images.unsplash.com/photo-1461896836934-ffe607ba8211", "2023-03-14T09:00:00Z",
     "sports-network", "Sports Network"),
    ("sports", "Star Athlete Signs Record-Breaking Contract Extension",
     "Five-year deal makes player the highest-paid in the sport's history.",
     "https://sports-today.com/record-contract-signed",
     "https://images.unsplash.com/photo-1486128105845-91daff43f404", "2023-03-08T09:00:00Z",
     "sports-today", "Sports Today"),
    ("entertainment", "Surprise Album Release Breaks Streaming Records",
     "Artist's unannounced new work reaches 50 million streams in 24 hours.",
     "https://entertainment-weekly.com/surprise-album-record",
     "https://images.unsplash.com/photo-1501527460-aaaaa1e579d8", "2023-03-10T09:00:00Z",
     "entertainment-weekly", "Entertainment Weekly"),
    ("entertainment", "Film Festival Announces Diverse Lineup for Annual Event",
     "Independent productions from 45 countries will compete for prestigious awards.",
     "https://cinema-gazette.com/film-festival-lineup",
     "https://images.unsplash.com/photo-1485846234645-a62644f84728", "2023-03-05T09:00:00Z",
     "cinema-gazette", "Cinema Gazette"),
    ("science", "Astronomers Discover Earth-like Planet in Habitable Zone",
     "New exoplanet shows potential for liquid water and Earth-similar conditions.",
     "https://astronomy-today.com/earthlike-exoplanet",
     "https://images.unsplash.com/photo-1614728263952-84ea256f9679", "2023-03-15T09:00:00Z",
     "astronomy-today", "Astronomy Today"),
    ("science", "Researchers Achieve Breakthrough in Nuclear Fusion Energy",
     "Experiment produces net energy gain, bringing clean fusion power closer to reality.",
     "https://scientific-american.com/fusion-breakthrough",
     "https://images.unsplash.com/photo-1462331940025-496dfbfc7564", "2023-02-22T09:00:00Z",
     "scientific-american", "Scientific American"),
]


def sample_articles():
    return [
        NewsArticle(
            id=article_id_from_url(url),
            title=title,
            description=description,
            content=description,
            url=url,
            image=image,
            published_at=published,
            source=SourceRef(id=source_id, name=source_name),
            category=category,
            estimated_reading_time=estimate_reading_time(description),
        )
        for category, title, description, url, image, published, source_id, source_name in SAMPLE_ARTICLES
    ]


def _seed_demo_user(session: Session, communities) -> User:
    demo = User(
        username="demo",
        email="demo@concentribe.com",
        password=hash_password("password"),
        name="Demo User",
        avatar="https://api.dicebear.com/7.x/avataaars/svg?seed=demo",
        bio="I love staying updated with the latest news across various categories.",
    )
    save_preferences(demo, UserPreferences(
        interests=["technology", "health", "business"],
        sources=["bbc", "cnn", "reuters"],
        formats=["text", "video"],
        focus_duration=20,
    ))
    session.add(demo)
    session.flush()

    for position in DEMO_MEMBERSHIPS:
        session.add(CommunityMember(community_id=communities[position - 1].id, user_id=demo.id))
    for position, title, content in DEMO_POSTS:
        session.add(CommunityPost(community_id=communities[position - 1].id, user_id=demo.id, title=title, content=content))
    return demo


def seed_demo_data(session: Session) -> bool:
    """Load demo data once; returns False when the database was already seeded."""
    if session.exec(select(Badge)).first() is not None:
        return False

    seed_badges(session)

    communities = [
        Community(name=name, description=description, topics=topics, image_url=community_image(name))
        for name, description, topics in COMMUNITIES
    ]
    session.add_all(communities)
    session.flush()

    _seed_demo_user(session, communities)
    upsert_articles(session, sample_articles())
    for payload in default_games():
        store_game(session, payload)

    session.commit()
    logger.info("DEMO_DATA_SEEDED", extra={"communities": len(communities), "articles": len(SAMPLE_ARTICLES)})
    return True
