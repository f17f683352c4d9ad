from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from .board import AT_HOME, AT_START, SEATS, Position, Seat, is_track_offset

TOKENS_PER_SEAT = 4
LOG_LIMIT = 10

STATUS_PLAYING = 'playing'
STATUS_FINISHED = 'finished'


@dataclass(frozen=True)
class GameState:
    """Represents the full game: whose turn it is, the dice, every token and the recent log."""
    active_seat_index: int
    dice_value: Optional[int]
    dice_rolled: bool
    token_moved: bool
    bonus_turn: bool
    token_positions: Tuple[Tuple[Position, ...], ...]  # one tuple per seat, in SEATS order
    status: str
    winner: Optional[Seat]
    log: Tuple[str, ...]  # most recent LOG_LIMIT entries
    log_count: int  # entries ever appended

    @property
    def active_seat(self) -> Seat:
        return SEATS[self.active_seat_index]

    def tokens_of(self, seat: Seat) -> Tuple[Position, ...]:
        return self.token_positions[seat_index(seat)]

    def active_tokens(self) -> Tuple[Position, ...]:
        return self.token_positions[self.active_seat_index]

    def is_finished(self) -> bool:
        return self.status == STATUS_FINISHED

    def with_tokens(self, seat: Seat, positions: Sequence[Position]) -> 'GameState':
        idx = seat_index(seat)
        updated = tuple(
            tuple(positions) if i == idx else tokens
            for i, tokens in enumerate(self.token_positions)
        )
        return replace(self, token_positions=updated)

    def append_log(self, *entries: str) -> 'GameState':
        if not entries:
            return self
        log = (self.log + tuple(entries))[-LOG_LIMIT:]
        return replace(self, log=log, log_count=self.log_count + len(entries))


def seat_index(seat: Seat) -> int:
    return SEATS.index(seat)


def create_initial_state() -> GameState:
    """All tokens waiting at start, first seat to roll."""
    return GameState(
        active_seat_index=0,
        dice_value=None,
        dice_rolled=False,
        token_moved=False,
        bonus_turn=False,
        token_positions=tuple((AT_START,) * TOKENS_PER_SEAT for _ in SEATS),
        status=STATUS_PLAYING,
        winner=None,
        log=tuple(),
        log_count=0,
    )


def _valid_position(position: Position) -> bool:
    return position in (AT_START, AT_HOME) or is_track_offset(position)


def validate_state(state: GameState) -> GameState:
    """Checks the data-model invariants; raises ValueError on the first violation."""
    if not 0 <= state.active_seat_index < len(SEATS):
        raise ValueError(f'active seat index out of range: {state.active_seat_index}')
    if len(state.token_positions) != len(SEATS):
        raise ValueError('expected token positions for 4 seats')
    for seat, tokens in zip(SEATS, state.token_positions):
        if len(tokens) != TOKENS_PER_SEAT:
            raise ValueError(f'{seat} must have {TOKENS_PER_SEAT} tokens')
        for pos in tokens:
            if not _valid_position(pos):
                raise ValueError(f'invalid position for {seat}: {pos!r}')
    if state.dice_rolled != (state.dice_value is not None):
        raise ValueError('dice value must be set iff the dice was rolled')
    if state.dice_value is not None and not 1 <= state.dice_value <= 6:
        raise ValueError(f'dice value out of range: {state.dice_value}')
    if state.bonus_turn and state.dice_value != 6:
        raise ValueError('bonus turn requires a rolled 6')
    if state.status not in (STATUS_PLAYING, STATUS_FINISHED):
        raise ValueError(f'unknown status: {state.status!r}')
    if (state.winner is not None) != state.is_finished():
        raise ValueError('winner must be set iff the game is finished')
    if state.winner is not None:
        if state.winner not in SEATS:
            raise ValueError(f'unknown winner: {state.winner!r}')
        if any(pos != AT_HOME for pos in state.tokens_of(state.winner)):
            raise ValueError('winner must have every token home')
    for seat, tokens in zip(SEATS, state.token_positions):
        if all(pos == AT_HOME for pos in tokens) and seat != state.winner:
            raise ValueError(f'{seat} has every token home but is not the winner')
    if len(state.log) > LOG_LIMIT:
        raise ValueError(f'log holds more than {LOG_LIMIT} entries')
    return state
