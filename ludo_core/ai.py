from __future__ import annotations

from typing import List, Optional, Sequence

from .board import RING_SIZE
from .dice import DiceSource, make_rng
from .rules import (
    check_for_captures,
    destination,
    get_valid_moves,
    move_token,
    roll_dice,
)
from .state import GameState


def capturing_moves(state: GameState, valid_moves: Sequence[int]) -> List[int]:
    """Valid token indices whose landing cell holds at least one opponent token."""
    if state.dice_value is None:
        return []
    seat = state.active_seat
    tokens = state.active_tokens()
    out: List[int] = []
    for idx in valid_moves:
        dest = destination(tokens[idx], state.dice_value)
        if isinstance(dest, int) and dest < RING_SIZE and check_for_captures(state, seat, dest):
            out.append(idx)
    return out


def choose_move(
    state: GameState,
    valid_moves: Sequence[int],
    rng: Optional[DiceSource] = None,
) -> Optional[int]:
    """
    Picks a token for the active seat.
    Preference: the only move; a capture (random among captures); the token
    furthest along the track (first index on ties); a random entry from start.
    """
    moves = list(valid_moves)
    if not moves:
        return None
    if len(moves) == 1:
        return moves[0]
    rng = rng or make_rng()

    captures = capturing_moves(state, moves)
    if captures:
        return rng.choice(captures)

    tokens = state.active_tokens()
    on_track = [idx for idx in moves if isinstance(tokens[idx], int)]
    if on_track:
        best = on_track[0]
        for idx in on_track[1:]:
            if tokens[idx] > tokens[best]:
                best = idx
        return best

    return rng.choice(moves)


def take_computer_turn(state: GameState, rng: Optional[DiceSource] = None) -> GameState:
    """
    Advances a computer seat by one step: roll, move, or bonus roll.
    Returns the state unchanged when the turn is complete; the caller ends it.
    """
    if state.is_finished():
        return state
    rng = rng or make_rng()
    if not state.dice_rolled:
        return roll_dice(state, rng)
    moves = get_valid_moves(state)
    if moves and not state.token_moved:
        choice = choose_move(state, moves, rng)
        return move_token(state, choice)
    if state.bonus_turn:
        return roll_dice(state, rng)
    return state
