from collections import namedtuple

# rows, then columns, then diagonals
WIN_LINES = [
    (0,1,2),(3,4,5),(6,7,8),
    (0,3,6),(1,4,7),(2,5,8),
    (0,4,8),(2,4,6)
]

EMPTY_BOARD = (None,) * 9
DRAW = "D"

GameResult = namedtuple("GameResult", ["winner", "line"])


def other(mark):
    return "O" if mark == "X" else "X"


def empty_cells(board):
    return [i for i, cell in enumerate(board) if cell is None]


def place(board, cell, mark):
    new_board = list(board)
    new_board[cell] = mark
    return tuple(new_board)


def evaluate(board):
    for a,b,c in WIN_LINES:
        if board[a] and board[a] == board[b] == board[c]:
            return GameResult(board[a], (a, b, c))
    if all(board):
        return GameResult(DRAW, ())
    return None


def is_win_for(board, mark):
    result = evaluate(board)
    return result is not None and result.winner == mark
