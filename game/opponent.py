from game.logic import empty_cells, place, is_win_for

CENTER = 4
CORNERS = (0, 2, 6, 8)


def completing_cell(board, mark):
    """First empty cell that would complete a line for ``mark``."""
    for i in empty_cells(board):
        if is_win_for(place(board, i, mark), mark):
            return i
    return None


def select_move(board, own_mark, opponent_mark):
    """Pick the computer's cell: win, block, center, corner, then anything.

    Returns None only when the board is full.
    """
    move = completing_cell(board, own_mark)
    if move is not None:
        return move
    move = completing_cell(board, opponent_mark)
    if move is not None:
        return move
    if board[CENTER] is None:
        return CENTER
    for idx in CORNERS:
        if board[idx] is None:
            return idx
    free = empty_cells(board)
    return free[0] if free else None
