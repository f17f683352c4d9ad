from __future__ import annotations

from typing import Callable, Iterable, Optional, Tuple

from .ai import take_computer_turn
from .board import SEATS, Seat
from .dice import DiceSource, make_rng
from .rules import (
    PHASE_BLOCKED,
    end_turn,
    get_valid_moves,
    move_token,
    roll_dice,
    turn_phase,
)
from .state import LOG_LIMIT, GameState, create_initial_state

LogListener = Callable[[str], None]
FinishListener = Callable[[Seat], None]


def new_log_entries(before: GameState, after: GameState) -> Tuple[str, ...]:
    """Entries appended between two states, limited to what the bounded log still holds."""
    added = after.log_count - before.log_count
    if added <= 0:
        return tuple()
    return after.log[-min(added, LOG_LIMIT):]


class GameSession:
    """
    Owns the current GameState for a driver (CLI, server, simulation).
    Every change goes through the engine; listeners see new log entries and
    the winner exactly once.
    """

    def __init__(
        self,
        computer_seats: Iterable[Seat] = (),
        rng: Optional[DiceSource] = None,
        state: Optional[GameState] = None,
        on_log: Optional[LogListener] = None,
        on_finish: Optional[FinishListener] = None,
    ) -> None:
        seats = frozenset(computer_seats)
        unknown = seats - set(SEATS)
        if unknown:
            raise ValueError(f"unknown seats: {', '.join(sorted(unknown))}")
        self.computer_seats = seats
        self.rng = rng or make_rng()
        self._state = state or create_initial_state()
        self._on_log = on_log
        self._on_finish = on_finish
        self._finish_reported = self._state.is_finished()
        self.steps = 0

    @property
    def state(self) -> GameState:
        return self._state

    def _commit(self, nxt: GameState) -> GameState:
        prev = self._state
        if nxt is prev:
            return nxt
        self._state = nxt
        self.steps += 1
        if self._on_log is not None:
            for entry in new_log_entries(prev, nxt):
                self._on_log(entry)
        if nxt.is_finished() and not self._finish_reported:
            self._finish_reported = True
            if self._on_finish is not None and nxt.winner is not None:
                self._on_finish(nxt.winner)
        return nxt

    def phase(self) -> str:
        return turn_phase(self._state)

    def valid_moves(self) -> Tuple[int, ...]:
        return get_valid_moves(self._state)

    def is_computer_turn(self) -> bool:
        return not self._state.is_finished() and self._state.active_seat in self.computer_seats

    def roll(self) -> GameState:
        return self._commit(roll_dice(self._state, self.rng))

    def move(self, token_index: int) -> GameState:
        return self._commit(move_token(self._state, token_index))

    def end_turn(self) -> GameState:
        return self._commit(end_turn(self._state))

    def resolve_blocked(self) -> bool:
        """Ends the turn if the active seat rolled and has nothing to move."""
        if self.phase() != PHASE_BLOCKED:
            return False
        self.end_turn()
        return True

    def step_computer(self) -> GameState:
        nxt = take_computer_turn(self._state, self.rng)
        if nxt is self._state:
            return self.end_turn()
        return self._commit(nxt)

    def play_computer_turns(self, max_steps: int = 1000) -> GameState:
        """Runs computer seats until a human must act or the game ends."""
        for _ in range(max_steps):
            if not self.is_computer_turn():
                return self._state
            self.step_computer()
        if self.is_computer_turn():
            raise RuntimeError(f'computer turns did not finish within {max_steps} steps')
        return self._state

    def play_to_end(self, max_steps: int = 100000) -> GameState:
        """Plays every seat as a computer until somebody wins."""
        for _ in range(max_steps):
            if self._state.is_finished():
                return self._state
            self.step_computer()
        if not self._state.is_finished():
            raise RuntimeError(f'game did not finish within {max_steps} steps')
        return self._state
