import itertools
import logging
import threading
from collections import namedtuple

from game.logic import EMPTY_BOARD, DRAW, evaluate, place
from game.opponent import select_move

logger = logging.getLogger(__name__)

PVP = "PVP"
AI = "AI"
MODES = (PVP, AI)

HUMAN_MARK = "X"
COMPUTER_MARK = "O"


class GameState(namedtuple("GameState", ["board", "x_is_next", "mode", "result"])):
    __slots__ = ()

    @property
    def active(self):
        return self.result is None

    @property
    def player(self):
        return "X" if self.x_is_next else "O"

    @property
    def computer_to_move(self):
        return self.mode == AI and self.active and self.player == COMPUTER_MARK

    @property
    def mode_locked(self):
        # a finished game with a highlighted line keeps its mode until restart
        return not self.active and bool(self.result.line)

    def to_dict(self):
        return {
            "board": list(self.board),
            "player": self.player,
            "mode": self.mode,
            "active": self.active,
            "winner": self.result.winner if self.result else None,
            "line": list(self.result.line) if self.result else [],
            "status": status_text(self),
            "mode_locked": self.mode_locked,
            "thinking": self.computer_to_move,
        }


def new_game(mode=PVP):
    return GameState(EMPTY_BOARD, True, mode, None)


def apply_move(state, cell):
    """Return the state after the side to move plays ``cell``.

    Illegal moves (game over, occupied or out-of-range cell) hand back the
    same state object, so callers can compare with ``is``.
    """
    if not state.active or not 0 <= cell < 9 or state.board[cell] is not None:
        return state
    board = place(state.board, cell, state.player)
    return state._replace(board=board, x_is_next=not state.x_is_next, result=evaluate(board))


def status_text(state):
    result = state.result
    if result:
        if result.winner == DRAW:
            return "It's a draw!"
        if result.winner == "X":
            return "Winner: Player 1"
        return "Winner: Player 2" if state.mode == PVP else "Winner: AI"
    if state.mode == AI:
        return "Your turn (X)" if state.x_is_next else "AI thinking..."
    return "Turn: Player 1 (X)" if state.x_is_next else "Turn: Player 2 (O)"


class Session:
    """One browser's game, plus the computer turn it may be waiting on.

    Socket handlers and the background computer turn run on different
    threads, so every read-modify-write of ``state``/``pending`` holds
    ``_lock``.
    """

    def __init__(self, mode=PVP):
        self.state = new_game(mode)
        self.pending = None
        self._tokens = itertools.count(1)
        self._lock = threading.Lock()

    def play(self, cell):
        with self._lock:
            if self.state.computer_to_move:
                return False
            return self._advance(cell)

    def restart(self):
        with self._lock:
            self.pending = None
            self.state = new_game(self.state.mode)

    def change_mode(self, mode):
        with self._lock:
            if mode not in MODES or self.state.mode_locked:
                return False
            self.pending = None
            self.state = new_game(mode)
            return True

    def begin_computer_turn(self):
        with self._lock:
            if not self.state.computer_to_move:
                return None
            self.pending = next(self._tokens)
            return self.pending

    def finish_computer_turn(self, token):
        with self._lock:
            if token is None or token != self.pending:
                return False
            state = self.state
        move = select_move(state.board, COMPUTER_MARK, HUMAN_MARK)
        with self._lock:
            # a restart or mode change while choosing leaves this move stale
            if token != self.pending or self.state is not state:
                return False
            self.pending = None
            if move is None:
                return False
            return self._advance(move)

    def _advance(self, cell):
        state = apply_move(self.state, cell)
        if state is self.state:
            return False
        self.state = state
        if state.result:
            logger.info("game over: %s", status_text(state))
        return True
