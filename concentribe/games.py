# concentribe/games.py
"""
Mind games: riddles, tongue twisters, sudoku and crossword puzzles.

Stored games are decoded from their JSON payload on the way out of the
database. When storage is empty or unreadable the built-in defaults are
served, so the games page always has something to show.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from .logging_setup import get_logger
from .models import Game, GameProgress, utcnow
from .puzzles import (
    CrosswordData,
    CrosswordPuzzle,
    GameData,
    RiddleData,
    SudokuData,
    TwisterData,
    decode_game_data,
    default_crossword,
    default_sudoku,
    encode_game_data,
)
from .schema import RiddleOut, TongueTwisterOut
from .store import get_session

logger = get_logger("concentribe.games")

DEFAULT_PUZZLE_ID = "default"

DEFAULT_RIDDLES = [
    RiddleData(
        question="I speak without a mouth and hear without ears. I have no body, but I come alive with wind. What am I?",
        answer="Echo",
        difficulty="medium",
    ),
    RiddleData(question="The more you take, the more you leave behind. What am I?", answer="Footsteps", difficulty="easy"),
    RiddleData(
        question="What has keys but no locks, space but no room, and you can enter but not go in?",
        answer="Keyboard",
        difficulty="medium",
    ),
]

DEFAULT_TWISTERS = [
    TwisterData(
        text="Peter Piper picked a peck of pickled peppers. How many pickled peppers did Peter Piper pick?",
        difficulty="medium",
    ),
    TwisterData(text="She sells seashells by the seashore. The shells she sells are surely seashells.", difficulty="easy"),
    TwisterData(text="How much wood would a woodchuck chuck if a woodchuck could chuck wood?", difficulty="medium"),
]


def default_games() -> List[GameData]:
    return [
        *DEFAULT_RIDDLES,
        *DEFAULT_TWISTERS,
        SudokuData(grid=default_sudoku(), difficulty="medium"),
        CrosswordData(puzzle=default_crossword(), difficulty="medium"),
    ]


def store_game(session: Session, payload: GameData) -> Game:
    game = Game(kind=payload.kind, data=encode_game_data(payload), difficulty=payload.difficulty)
    session.add(game)
    return game


def _stored(kind: str, limit: Optional[int] = None, difficulty: Optional[str] = None) -> List[Tuple[int, GameData]]:
    """Decoded (id, payload) pairs of one kind; undecodable rows are logged and skipped."""
    with get_session() as s:
        stmt = select(Game).where(Game.kind == kind)
        if difficulty:
            stmt = stmt.where(Game.difficulty == difficulty)
        stmt = stmt.order_by(Game.id)
        if limit:
            stmt = stmt.limit(limit)
        rows = s.exec(stmt).all()

    out: List[Tuple[int, GameData]] = []
    for g in rows:
        try:
            out.append((g.id, decode_game_data(g.data)))
        except ValueError as e:
            logger.warning(f"GAME_DECODE_FAILED: {e}", extra={"game_id": g.id, "kind": kind})
    return out


def _stored_or_empty(kind: str, **kwargs) -> List[Tuple[int, GameData]]:
    try:
        return _stored(kind, **kwargs)
    except SQLAlchemyError:
        logger.exception("GAME_STORAGE_FAILED", extra={"kind": kind})
        return []


def get_riddles(limit: int = 10) -> List[RiddleOut]:
    stored = _stored_or_empty("riddle", limit=limit)
    if not stored:
        stored = [(i + 1, r) for i, r in enumerate(DEFAULT_RIDDLES[:limit])]
    return [RiddleOut(id=str(gid), question=r.question, answer=r.answer, difficulty=r.difficulty) for gid, r in stored]


def get_tongue_twisters(limit: int = 10) -> List[TongueTwisterOut]:
    stored = _stored_or_empty("tongue-twister", limit=limit)
    if not stored:
        stored = [(i + 1, t) for i, t in enumerate(DEFAULT_TWISTERS[:limit])]
    return [TongueTwisterOut(id=str(gid), text=t.text, difficulty=t.difficulty) for gid, t in stored]


def get_sudoku_puzzle() -> Dict:
    stored = _stored_or_empty("sudoku", limit=1)
    if stored:
        gid, data = stored[0]
    else:
        gid, data = DEFAULT_PUZZLE_ID, SudokuData(grid=default_sudoku())
    return {
        "id": str(gid),
        "difficulty": data.difficulty,
        "grid": data.grid.model_dump(mode="json", by_alias=True),
    }


def get_crossword_puzzle(difficulty: str = "medium") -> Dict:
    """A crossword of the given difficulty, any stored one otherwise, else the built-in puzzle."""
    stored = _stored_or_empty("crossword", limit=1, difficulty=difficulty) or _stored_or_empty("crossword", limit=1)
    if stored:
        gid, data = stored[0]
    else:
        gid, data = DEFAULT_PUZZLE_ID, CrosswordData(puzzle=default_crossword())
    return {
        "id": str(gid),
        "difficulty": data.difficulty,
        "puzzle": data.puzzle.for_player().model_dump(mode="json", by_alias=True),
    }


def _game_id(puzzle_id: Union[int, str, None]) -> Optional[int]:
    try:
        return int(puzzle_id)
    except (TypeError, ValueError):
        return None


def find_crossword(puzzle_id: Union[int, str, None]) -> Optional[CrosswordPuzzle]:
    if str(puzzle_id) == DEFAULT_PUZZLE_ID:
        return default_crossword()
    gid = _game_id(puzzle_id)
    if gid is None:
        return None
    with get_session() as s:
        game = s.get(Game, gid)
    if game is None or game.kind != "crossword":
        return None
    try:
        data = decode_game_data(game.data)
    except ValueError as e:
        logger.warning(f"GAME_DECODE_FAILED: {e}", extra={"game_id": gid})
        return None
    return data.puzzle


def find_game(session: Session, puzzle_id: Union[int, str, None], kind: str) -> Optional[Game]:
    gid = _game_id(puzzle_id)
    if gid is None:
        return None
    game = session.get(Game, gid)
    return game if game is not None and game.kind == kind else None


def record_completion(session: Session, user_id: int, game_id: int, score: Optional[int] = None) -> GameProgress:
    """Log a finished game for the user. Caller commits."""
    progress = GameProgress(
        user_id=user_id,
        game_id=game_id,
        completed=True,
        score=score,
        completed_at=utcnow(),
    )
    session.add(progress)
    return progress
