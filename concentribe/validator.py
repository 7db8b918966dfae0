# concentribe/validator.py
"""
Answer checking for the sudoku and crossword games.

Both checkers are pure and total: malformed input produces a negative result,
never an exception, so routes can pass request bodies straight through.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .puzzles import BOX_SIZE, GRID_SIZE, CrosswordPuzzle, SudokuCell, SudokuGrid, clue_id


@dataclass
class SudokuResult:
    is_correct: bool
    valid_cells: List[List[bool]] = field(default_factory=list)


@dataclass
class CrosswordResult:
    is_correct: bool
    correct_count: int
    total_count: int


def _all_invalid() -> SudokuResult:
    return SudokuResult(False, [[False] * GRID_SIZE for _ in range(GRID_SIZE)])


def _cell_value(cell: Any) -> Any:
    """Value of a cell-like entry; raises TypeError for anything that isn't a cell."""
    if isinstance(cell, SudokuCell):
        return cell.value
    if isinstance(cell, Mapping):
        return cell.get("value")
    raise TypeError(f"not a sudoku cell: {type(cell).__name__}")


def _read_values(grid: Any) -> Optional[List[List[Any]]]:
    if isinstance(grid, SudokuGrid):
        return grid.values()
    if not isinstance(grid, Sequence) or isinstance(grid, (str, bytes)) or len(grid) != GRID_SIZE:
        return None
    rows: List[List[Any]] = []
    for row in grid:
        if not isinstance(row, Sequence) or isinstance(row, (str, bytes)) or len(row) != GRID_SIZE:
            return None
        try:
            rows.append([_cell_value(c) for c in row])
        except TypeError:
            return None
    return rows


def _in_range(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool) and 1 <= v <= GRID_SIZE


def _groups():
    for r in range(GRID_SIZE):
        yield [(r, c) for c in range(GRID_SIZE)]
    for c in range(GRID_SIZE):
        yield [(r, c) for r in range(GRID_SIZE)]
    for br in range(0, GRID_SIZE, BOX_SIZE):
        for bc in range(0, GRID_SIZE, BOX_SIZE):
            yield [(br + i, bc + j) for i in range(BOX_SIZE) for j in range(BOX_SIZE)]


def check_sudoku_solution(grid: Any) -> SudokuResult:
    """
    Validate a filled-in sudoku grid.

    Every row, column and 3x3 box is scanned. All cells holding a value that
    appears more than once in a group are marked invalid, as are empty and
    out-of-range cells. A cell marked invalid by one group stays invalid.
    """
    values = _read_values(grid)
    if values is None:
        return _all_invalid()

    valid = [[_in_range(values[r][c]) for c in range(GRID_SIZE)] for r in range(GRID_SIZE)]

    for group in _groups():
        seen: Dict[int, List[tuple]] = {}
        for r, c in group:
            v = values[r][c]
            if _in_range(v):
                seen.setdefault(v, []).append((r, c))
        for cells in seen.values():
            if len(cells) > 1:
                for r, c in cells:
                    valid[r][c] = False

    is_correct = all(all(row) for row in valid)
    return SudokuResult(is_correct, valid)


def _normalize_letters(letters: Any) -> str:
    if isinstance(letters, str):
        return letters.strip().upper()
    if not isinstance(letters, Sequence):
        return ""
    return "".join(str(ch) for ch in letters if ch is not None).strip().upper()


def check_crossword_answers(
    puzzle: Optional[CrosswordPuzzle],
    user_answers: Optional[Mapping[str, Any]],
) -> CrosswordResult:
    """Count clues whose letters spell the stored answer; keys are clue ids like 'across-1'."""
    if puzzle is None:
        return CrosswordResult(False, 0, 0)

    answers = user_answers or {}
    total = len(puzzle.clues)
    correct = 0
    for clue in puzzle.clues:
        given = answers.get(clue_id(clue))
        if given is None:
            continue
        if _normalize_letters(given) == clue.answer.strip().upper():
            correct += 1

    return CrosswordResult(total > 0 and correct == total, correct, total)
