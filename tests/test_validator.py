# tests/test_validator.py
from concentribe.puzzles import default_crossword, sudoku_solution
from concentribe.validator import check_crossword_answers, check_sudoku_solution

def _cells(values):
    return [[{"value": v} for v in row] for row in values]

def test_solved_grid_is_correct():
    result = check_sudoku_solution(_cells(sudoku_solution()))
    assert result.is_correct
    assert all(all(row) for row in result.valid_cells)

def test_duplicates_mark_every_copy_invalid():
    values = sudoku_solution()
    values[0][0] = values[0][1]
    result = check_sudoku_solution(_cells(values))
    assert not result.is_correct
    assert result.valid_cells[0][0] is False
    assert result.valid_cells[0][1] is False
    assert result.valid_cells[8][8] is True

def test_empty_and_out_of_range_cells_are_invalid():
    values = sudoku_solution()
    values[4][4] = None
    values[2][7] = 12
    result = check_sudoku_solution(_cells(values))
    assert not result.is_correct
    assert result.valid_cells[4][4] is False
    assert result.valid_cells[2][7] is False

def test_malformed_grid_is_all_invalid():
    for bad in (None, "grid", [[1, 2, 3]], [[{"value": 1}] * 9] * 8):
        result = check_sudoku_solution(bad)
        assert not result.is_correct
        assert len(result.valid_cells) == 9
        assert not any(any(row) for row in result.valid_cells)

def test_crossword_all_correct_ignores_case_and_padding():
    answers = {
        "across-1": list("tesla"),
        "down-2": list("CHATGPT"),
        "across-3": [" B", "I", "T", "C", "O", "I", "N "],
    }
    result = check_crossword_answers(default_crossword(), answers)
    assert result.is_correct
    assert (result.correct_count, result.total_count) == (3, 3)

def test_crossword_partial():
    result = check_crossword_answers(default_crossword(), {"across-1": list("TESLA"), "down-2": list("CHATGTP")})
    assert not result.is_correct
    assert (result.correct_count, result.total_count) == (1, 3)

def test_crossword_without_puzzle():
    result = check_crossword_answers(None, {"across-1": ["T"]})
    assert (result.is_correct, result.correct_count, result.total_count) == (False, 0, 0)
