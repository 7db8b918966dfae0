from typing import List, Union

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from ..accounts import current_user_id
from ..badges import dispatch_awards
from ..context import get_event_bus
from ..events import EventBus, PuzzleSolved
from ..games import (
    find_crossword,
    find_game,
    get_crossword_puzzle,
    get_riddles,
    get_sudoku_puzzle,
    get_tongue_twisters,
    record_completion,
)
from ..logging_setup import get_logger
from ..schema import (
    CrosswordCheckIn,
    CrosswordResultOut,
    RiddleOut,
    SudokuCheckIn,
    SudokuResultOut,
    TongueTwisterOut,
)
from ..store import get_session
from ..validator import check_crossword_answers, check_sudoku_solution

logger = get_logger("concentribe.routes.games")

router = APIRouter(prefix="/api/games")


def _record_solve(events: EventBus, user_id: int, puzzle_id: Union[int, str, None], kind: str) -> None:
    """Log a solved stored puzzle and let badge handlers react. Built-in puzzles aren't tracked."""
    with get_session() as s:
        game = find_game(s, puzzle_id, kind)
        if game is None:
            return
        game_id = game.id
        record_completion(s, user_id, game_id)
        s.commit()
    events.emit(PuzzleSolved(user_id=user_id, game_id=game_id, kind=kind))
    awarded = dispatch_awards(events, user_id)
    if awarded:
        logger.info(f"PUZZLE_BADGES {awarded}", extra={"user_id": user_id})


@router.get("/riddles", response_model=List[RiddleOut])
def riddles(limit: int = Query(10, ge=1, le=50)):
    return get_riddles(limit)


@router.get("/tongue-twisters", response_model=List[TongueTwisterOut])
def tongue_twisters(limit: int = Query(10, ge=1, le=50)):
    return get_tongue_twisters(limit)


@router.get("/sudoku")
def sudoku():
    return get_sudoku_puzzle()


@router.post("/sudoku/check", response_model=SudokuResultOut)
def sudoku_check(body: SudokuCheckIn, request: Request, events: EventBus = Depends(get_event_bus)):
    if body.grid is None:
        raise HTTPException(status_code=400, detail="Grid is required")
    result = check_sudoku_solution(body.grid)
    if result.is_correct and body.puzzle_id is not None:
        _record_solve(events, current_user_id(request), body.puzzle_id, "sudoku")
    return SudokuResultOut(is_correct=result.is_correct, valid_cells=result.valid_cells)


@router.get("/crossword")
def crossword(difficulty: str = "medium"):
    return get_crossword_puzzle(difficulty)


@router.post("/crossword/check", response_model=CrosswordResultOut)
def crossword_check(body: CrosswordCheckIn, request: Request, events: EventBus = Depends(get_event_bus)):
    if body.puzzle_id is None or body.user_answers is None:
        raise HTTPException(status_code=400, detail="Puzzle ID and user answers are required")
    puzzle = find_crossword(body.puzzle_id)
    if puzzle is None:
        raise HTTPException(status_code=404, detail="Puzzle not found")
    result = check_crossword_answers(puzzle, body.user_answers)
    if result.is_correct:
        _record_solve(events, current_user_id(request), body.puzzle_id, "crossword")
    return CrosswordResultOut(
        is_correct=result.is_correct,
        correct_count=result.correct_count,
        total_count=result.total_count,
    )
