"""
Puzzle grid model and the game payloads stored in the Game table.

Grids are immutable: edits go through SudokuGrid.with_value, which returns a
new grid and refuses to touch the puzzle's given (original) cells. Game
payloads are a tagged union discriminated by `kind` and are decoded when they
leave the database (decode_game_data) and encoded when they enter it.
"""
from __future__ import annotations

from typing import Annotated, Dict, Iterable, List, Literal, Optional, Sequence, Tuple, Union

from pydantic import ConfigDict, Field, RootModel, TypeAdapter, ValidationError, model_validator

from .schema import CamelModel

GRID_SIZE = 9
BOX_SIZE = 3

Orientation = Literal["across", "down"]


class FrozenModel(CamelModel):
    model_config = ConfigDict(frozen=True)


# ---------- Sudoku ----------

class SudokuCell(FrozenModel):
    value: Optional[int] = Field(default=None, ge=1, le=9)
    is_original: bool = False
    is_valid: Optional[bool] = None  # only set after a check


class SudokuGrid(RootModel[Tuple[Tuple[SudokuCell, ...], ...]]):
    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_shape(self) -> "SudokuGrid":
        if len(self.root) != GRID_SIZE or any(len(row) != GRID_SIZE for row in self.root):
            raise ValueError(f"sudoku grid must be {GRID_SIZE}x{GRID_SIZE}")
        return self

    @classmethod
    def empty(cls) -> "SudokuGrid":
        return cls(tuple(tuple(SudokuCell() for _ in range(GRID_SIZE)) for _ in range(GRID_SIZE)))

    @classmethod
    def from_solution(cls, solution: Sequence[Sequence[int]], givens: Iterable[Tuple[int, int]]) -> "SudokuGrid":
        """Puzzle showing only the `givens` cells of a solved grid, as originals."""
        shown = set(givens)
        return cls(tuple(
            tuple(
                SudokuCell(value=solution[r][c], is_original=True) if (r, c) in shown else SudokuCell()
                for c in range(GRID_SIZE)
            )
            for r in range(GRID_SIZE)
        ))

    def cell(self, row: int, col: int) -> SudokuCell:
        return self.root[row][col]

    def with_value(self, row: int, col: int, value: Optional[int]) -> "SudokuGrid":
        current = self.cell(row, col)
        if current.is_original:
            raise ValueError(f"cell ({row}, {col}) is part of the puzzle and cannot change")
        rows = [list(r) for r in self.root]
        rows[row][col] = SudokuCell(value=value)
        return SudokuGrid(tuple(tuple(r) for r in rows))

    def with_validity(self, valid_cells: Sequence[Sequence[bool]]) -> "SudokuGrid":
        return SudokuGrid(tuple(
            tuple(
                self.root[r][c].model_copy(update={"is_valid": bool(valid_cells[r][c])})
                for c in range(GRID_SIZE)
            )
            for r in range(GRID_SIZE)
        ))

    def values(self) -> List[List[Optional[int]]]:
        return [[cell.value for cell in row] for row in self.root]


def sudoku_solution() -> List[List[int]]:
    # Shifted-row pattern: every row, column and box holds 1..9 exactly once
    return [
        [(BOX_SIZE * (r % BOX_SIZE) + r // BOX_SIZE + c) % GRID_SIZE + 1 for c in range(GRID_SIZE)]
        for r in range(GRID_SIZE)
    ]


# Three givens per row and per column
DEFAULT_GIVENS = [(r, c) for r in range(GRID_SIZE) for c in range(GRID_SIZE) if (4 * r + 7 * c) % GRID_SIZE < 3]


def default_sudoku() -> SudokuGrid:
    return SudokuGrid.from_solution(sudoku_solution(), DEFAULT_GIVENS)


# ---------- Crossword ----------

class CrosswordCell(FrozenModel):
    letter: str = ""
    is_black: bool = True
    clue_number: Optional[int] = None


class CrosswordClue(FrozenModel):
    number: int
    orientation: Orientation
    text: str
    answer: str
    row: int = 0
    col: int = 0
    related_article_id: Optional[str] = None

    @property
    def id(self) -> str:
        return clue_id(self)

    def cells(self) -> List[Tuple[int, int]]:
        dr, dc = (0, 1) if self.orientation == "across" else (1, 0)
        return [(self.row + dr * i, self.col + dc * i) for i in range(len(self.answer))]


def clue_id(clue: CrosswordClue) -> str:
    return f"{clue.orientation}-{clue.number}"


class CrosswordPuzzle(FrozenModel):
    size: int
    grid: Tuple[Tuple[CrosswordCell, ...], ...]
    clues: Tuple[CrosswordClue, ...]

    @classmethod
    def build(cls, size: int, clues: Sequence[CrosswordClue]) -> "CrosswordPuzzle":
        """
        Lay the answers onto a size x size grid.

        Cells covered by an answer are white and hold its letter, the rest are
        black. Answers that leave the grid or disagree at an intersection raise
        ValueError.
        """
        letters: Dict[Tuple[int, int], str] = {}
        numbers: Dict[Tuple[int, int], int] = {}
        for clue in clues:
            answer = clue.answer.upper()
            for (r, c), ch in zip(clue.cells(), answer):
                if not (0 <= r < size and 0 <= c < size):
                    raise ValueError(f"clue {clue_id(clue)} runs off the {size}x{size} grid")
                existing = letters.get((r, c))
                if existing is not None and existing != ch:
                    raise ValueError(
                        f"clue {clue_id(clue)} puts '{ch}' at ({r}, {c}) where another answer has '{existing}'"
                    )
                letters[(r, c)] = ch
            start = (clue.row, clue.col)
            if numbers.get(start, clue.number) != clue.number:
                raise ValueError(f"two clue numbers start at {start}")
            numbers[start] = clue.number

        grid = tuple(
            tuple(
                CrosswordCell(letter=letters[(r, c)], is_black=False, clue_number=numbers.get((r, c)))
                if (r, c) in letters else CrosswordCell()
                for c in range(size)
            )
            for r in range(size)
        )
        return cls(size=size, grid=grid, clues=tuple(clues))

    def clue(self, cid: str) -> Optional[CrosswordClue]:
        return next((c for c in self.clues if clue_id(c) == cid), None)

    def for_player(self) -> "CrosswordPuzzle":
        """Same puzzle with the grid letters cleared."""
        blank = tuple(tuple(cell.model_copy(update={"letter": ""}) for cell in row) for row in self.grid)
        return self.model_copy(update={"grid": blank})


def default_crossword() -> CrosswordPuzzle:
    return CrosswordPuzzle.build(10, [
        CrosswordClue(number=1, orientation="across", row=0, col=0, answer="TESLA",
                      text="Company led by Elon Musk that builds electric vehicles", related_article_id="1"),
        CrosswordClue(number=2, orientation="down", row=2, col=5, answer="CHATGPT",
                      text="Artificial intelligence chatbot developed by OpenAI", related_article_id="2"),
        CrosswordClue(number=3, orientation="across", row=5, col=3, answer="BITCOIN",
                      text="Digital currency based on blockchain technology", related_article_id="3"),
    ])


# ---------- Stored game payloads ----------

class RiddleData(FrozenModel):
    kind: Literal["riddle"] = "riddle"
    question: str
    answer: str
    difficulty: str = "medium"


class TwisterData(FrozenModel):
    kind: Literal["tongue-twister"] = "tongue-twister"
    text: str
    difficulty: str = "medium"


class SudokuData(FrozenModel):
    kind: Literal["sudoku"] = "sudoku"
    grid: SudokuGrid
    difficulty: str = "medium"


class CrosswordData(FrozenModel):
    kind: Literal["crossword"] = "crossword"
    puzzle: CrosswordPuzzle
    difficulty: str = "medium"


GameData = Annotated[
    Union[RiddleData, TwisterData, SudokuData, CrosswordData],
    Field(discriminator="kind"),
]
_game_data = TypeAdapter(GameData)


def decode_game_data(raw: dict) -> GameData:
    try:
        return _game_data.validate_python(raw)
    except ValidationError as e:
        raise ValueError(f"undecodable game payload: {e.errors()[0].get('msg', 'invalid')}") from e


def encode_game_data(payload: GameData) -> dict:
    return payload.model_dump(mode="json", by_alias=True)
