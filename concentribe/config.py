import os
from dotenv import load_dotenv
from pathlib import Path
from openai import OpenAI

# Go up one level from concentribe/ to root/
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Get API key from environment
api_key = os.getenv("OPENAI_API_KEY", "")

# Reusable OpenAI client; None when no key is configured (callers fall back)
client = OpenAI(api_key=api_key) if api_key else None
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")


# Other configuration variables
NEWS_API_KEY = os.getenv("NEWS_API_KEY", "")
NEWS_API_URL = os.getenv("NEWS_API_URL", "https://newsapi.org/v2")
YOUTUBE_API_KEY = os.getenv("YOUTUBE_API_KEY", "")
YOUTUBE_API_URL = os.getenv("YOUTUBE_API_URL", "https://www.googleapis.com/youtube/v3")
REQUESTS_TIMEOUT = float(os.getenv("REQUESTS_TIMEOUT", "15"))

GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID", "")
GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET", "")
GOOGLE_REDIRECT_URI = os.getenv("GOOGLE_REDIRECT_URI", "http://localhost:8000/auth/google/callback")
SESSION_SECRET = os.getenv("SESSION_SECRET", "concentribe_secret_key")
SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", str(7 * 24 * 60 * 60)))  # 1 week

# "sqlite://" is an in-memory database: demo data lives as long as the process
DB_URL = os.getenv("DB_URL", "sqlite://")
DEMO_USER_ID = int(os.getenv("DEMO_USER_ID", "1"))

TIMEZONE = os.getenv("TIMEZONE", "America/New_York")
ENABLE_SCHEDULER = os.getenv("ENABLE_SCHEDULER", "true").lower() in ("1", "true", "yes")
CACHE_REFRESH_MINUTES = int(os.getenv("CACHE_REFRESH_MINUTES", "60"))
