# tests/test_puzzles.py
import pytest
from concentribe.puzzles import (
    GRID_SIZE, CrosswordClue, CrosswordPuzzle, RiddleData, SudokuData, SudokuGrid,
    clue_id, decode_game_data, default_crossword, default_sudoku, encode_game_data, sudoku_solution,
)

def test_solution_is_a_valid_sudoku():
    sol = sudoku_solution()
    digits = set(range(1, 10))
    assert all(set(row) == digits for row in sol)
    assert all({sol[r][c] for r in range(9)} == digits for c in range(9))
    for br in (0, 3, 6):
        for bc in (0, 3, 6):
            assert {sol[br + i][bc + j] for i in range(3) for j in range(3)} == digits

def test_default_sudoku_givens_are_originals():
    grid = default_sudoku()
    sol = sudoku_solution()
    givens = [(r, c) for r in range(GRID_SIZE) for c in range(GRID_SIZE) if grid.cell(r, c).is_original]
    assert 20 <= len(givens) <= 40
    for r, c in givens:
        assert grid.cell(r, c).value == sol[r][c]

def test_with_value_returns_new_grid_and_protects_originals():
    grid = default_sudoku()
    r, c = next((r, c) for r in range(9) for c in range(9) if not grid.cell(r, c).is_original)
    updated = grid.with_value(r, c, 5)
    assert updated.cell(r, c).value == 5
    assert grid.cell(r, c).value is None

    orow, ocol = next((r, c) for r in range(9) for c in range(9) if grid.cell(r, c).is_original)
    with pytest.raises(ValueError):
        grid.with_value(orow, ocol, 1)

def test_grid_shape_is_enforced():
    with pytest.raises(ValueError):
        SudokuGrid.model_validate([[{"value": 1}] * 9] * 8)

def test_crossword_layout():
    puzzle = default_crossword()
    assert puzzle.size == 10
    # TESLA across at row 0, CHATGPT down at column 5, BITCOIN crosses it on 'T'
    assert "".join(puzzle.grid[0][c].letter for c in range(5)) == "TESLA"
    assert "".join(puzzle.grid[r][5].letter for r in range(2, 9)) == "CHATGPT"
    assert puzzle.grid[5][5].letter == "T"
    assert puzzle.grid[0][0].clue_number == 1
    assert puzzle.grid[9][0].is_black
    assert puzzle.clue("down-2").answer == "CHATGPT"

def test_crossword_rejects_conflicts_and_overflow():
    clues = [
        CrosswordClue(number=1, orientation="across", row=0, col=0, answer="CAT", text="pet"),
        CrosswordClue(number=2, orientation="down", row=0, col=0, answer="DOG", text="pet"),
    ]
    with pytest.raises(ValueError):
        CrosswordPuzzle.build(5, clues)
    with pytest.raises(ValueError):
        CrosswordPuzzle.build(3, [CrosswordClue(number=1, orientation="across", answer="LONGER", text="x")])

def test_for_player_hides_letters():
    blank = default_crossword().for_player()
    assert all(cell.letter == "" for row in blank.grid for cell in row)
    assert not blank.grid[0][0].is_black

def test_clue_id():
    assert clue_id(CrosswordClue(number=3, orientation="across", answer="X", text="x")) == "across-3"

def test_game_payloads_decode_by_kind():
    raw = encode_game_data(SudokuData(grid=default_sudoku()))
    assert raw["kind"] == "sudoku"
    decoded = decode_game_data(raw)
    assert isinstance(decoded, SudokuData)
    assert decoded.grid == default_sudoku()

    riddle = decode_game_data({"kind": "riddle", "question": "q?", "answer": "a"})
    assert isinstance(riddle, RiddleData) and riddle.difficulty == "medium"

def test_unknown_game_kind_raises():
    with pytest.raises(ValueError):
        decode_game_data({"kind": "chess", "board": []})
