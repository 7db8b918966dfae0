# concentribe/main.py
from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from .config import SESSION_MAX_AGE, SESSION_SECRET, TIMEZONE
from .context import build_context
from .exception_handling import register_exception_handlers
from .lifespan import lifespan
from .logging_setup import setup_logging, get_logger
from .middleware import RequestContextMiddleware
from .routers import ai, auth, badges, bookmarks, communities, focus, games, health, news

setup_logging()  # <-- set up logging ASAP
logger = get_logger("concentribe.main")


def create_app() -> FastAPI:
    app = FastAPI(title="ConcenTribe", version="0.1.0", lifespan=lifespan)

    # Built here rather than in lifespan so a bare TestClient gets it too
    app.state.ctx = build_context(TIMEZONE)

    app.add_middleware(SessionMiddleware, secret_key=SESSION_SECRET, max_age=SESSION_MAX_AGE, same_site="lax")
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(news.router)
    app.include_router(focus.router)
    app.include_router(ai.router)
    app.include_router(games.router)
    app.include_router(bookmarks.router)
    app.include_router(badges.router)
    app.include_router(communities.router)
    app.include_router(auth.router)
    return app


app = create_app()
