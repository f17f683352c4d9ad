from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Tuple

from .board import (
    AT_HOME,
    AT_START,
    LAST_OFFSET,
    RING_SIZE,
    SEATS,
    Position,
    Seat,
    project_to_board_cell,
)
from .dice import DiceSource, make_rng, roll_face
from .state import STATUS_FINISHED, GameState

Capture = Tuple[Seat, int]  # (owning seat, token index)

PHASE_AWAITING_ROLL = 'awaiting_roll'
PHASE_AWAITING_MOVE = 'awaiting_move'
PHASE_BLOCKED = 'blocked'  # rolled, nothing to move, no bonus: caller must end the turn
PHASE_FINISHED = 'finished'


def _title(seat: Seat) -> str:
    return seat.capitalize()


def destination(position: Position, dice_value: int) -> Optional[Position]:
    """Where a token would land with the given roll, or None if it cannot move."""
    if position == AT_START:
        return 0 if dice_value == 6 else None
    if position == AT_HOME or not isinstance(position, int):
        return None
    target = position + dice_value
    if target > LAST_OFFSET:
        return None
    # The last home-stretch cell is home itself.
    return AT_HOME if target == LAST_OFFSET else target


def can_roll(state: GameState) -> bool:
    if state.is_finished():
        return False
    return not (state.dice_rolled and not state.bonus_turn)


def roll_dice(state: GameState, rng: Optional[DiceSource] = None) -> GameState:
    """Rolls for the active seat. Returns the state unchanged if a roll is not allowed."""
    if not can_roll(state):
        return state
    rng = rng or make_rng()
    value = roll_face(rng)
    bonus = value == 6
    suffix = ' and gets an extra turn!' if bonus else '.'
    rolled = replace(
        state,
        dice_value=value,
        dice_rolled=True,
        bonus_turn=bonus,
        token_moved=False,
    )
    return rolled.append_log(f"{_title(state.active_seat)} rolled a {value}{suffix}")


def get_valid_moves(state: GameState) -> Tuple[int, ...]:
    """Indices of the active seat's tokens that may move with the current roll."""
    if state.is_finished() or not state.dice_rolled or state.dice_value is None:
        return tuple()
    if state.token_moved and not state.bonus_turn:
        return tuple()
    return tuple(
        idx for idx, pos in enumerate(state.active_tokens())
        if destination(pos, state.dice_value) is not None
    )


def check_for_captures(state: GameState, seat: Seat, offset: int) -> Tuple[Capture, ...]:
    """
    Opponent tokens sharing the board cell that `seat` reaches at `offset`.
    Offsets are seat-relative, so the comparison is made on projected board
    coordinates. Home stretches and start areas never hold captures.
    """
    if not isinstance(offset, int) or not 0 <= offset < RING_SIZE:
        return tuple()
    target = project_to_board_cell(seat, offset)
    captures: List[Capture] = []
    for other in SEATS:
        if other == seat:
            continue
        for idx, pos in enumerate(state.tokens_of(other)):
            if isinstance(pos, int) and 0 <= pos < RING_SIZE:
                if project_to_board_cell(other, pos) == target:
                    captures.append((other, idx))
    return tuple(captures)


def move_token(state: GameState, token_index: int) -> GameState:
    """
    Moves one of the active seat's tokens by the rolled value.
    An index outside get_valid_moves(state) leaves the state unchanged.
    """
    if isinstance(token_index, bool) or not isinstance(token_index, int):
        return state
    if token_index not in get_valid_moves(state):
        return state
    seat = state.active_seat
    tokens = list(state.active_tokens())
    new_pos = destination(tokens[token_index], state.dice_value or 0)
    tokens[token_index] = new_pos
    nxt = state.with_tokens(seat, tokens)

    entries: List[str] = []
    if isinstance(new_pos, int) and new_pos < RING_SIZE:
        for other, idx in check_for_captures(nxt, seat, new_pos):
            captured = list(nxt.tokens_of(other))
            captured[idx] = AT_START
            nxt = nxt.with_tokens(other, captured)
            entries.append(f"{_title(seat)} captured {other}'s token!")

    suffix = ' to home!' if new_pos == AT_HOME else '.'
    entries.append(f"{_title(seat)} moved token {token_index + 1}{suffix}")
    nxt = replace(nxt, token_moved=True).append_log(*entries)

    if all(pos == AT_HOME for pos in nxt.tokens_of(seat)):
        won = replace(nxt, status=STATUS_FINISHED, winner=seat)
        return won.append_log(f"{_title(seat)} has won the game!")

    # A 6 keeps the seat for another roll; a second move on the same 6 ends it.
    if not state.bonus_turn or state.token_moved:
        return end_turn(nxt)
    return nxt


def end_turn(state: GameState) -> GameState:
    """Passes play to the next seat and clears the dice."""
    if state.is_finished():
        return state
    next_index = (state.active_seat_index + 1) % len(SEATS)
    passed = replace(
        state,
        active_seat_index=next_index,
        dice_value=None,
        dice_rolled=False,
        token_moved=False,
        bonus_turn=False,
    )
    return passed.append_log(f"It's {_title(SEATS[next_index])}'s turn.")


def turn_phase(state: GameState) -> str:
    """Where the active seat is in its turn: awaiting_roll, awaiting_move, blocked or finished."""
    if state.is_finished():
        return PHASE_FINISHED
    if not state.dice_rolled:
        return PHASE_AWAITING_ROLL
    moves = get_valid_moves(state)
    if moves and not state.token_moved:
        return PHASE_AWAITING_MOVE
    if state.bonus_turn:
        return PHASE_AWAITING_ROLL
    return PHASE_BLOCKED
