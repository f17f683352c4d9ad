from __future__ import annotations

import argparse
from typing import Callable, List, Optional, Sequence

from .board import AT_HOME, AT_START, SEATS, project_to_board_cell
from .dice import LoadedDice, parse_rolls
from .rules import PHASE_AWAITING_MOVE, PHASE_AWAITING_ROLL
from .session import GameSession
from .state import GameState


def describe_position(seat: str, pos) -> str:
    if pos == AT_START:
        return 'start'
    if pos == AT_HOME:
        return 'home'
    cell = project_to_board_cell(seat, pos)
    return f"{pos}@{cell[0]},{cell[1]}" if cell else str(pos)


def format_tokens(state: GameState) -> str:
    lines: List[str] = []
    for seat in SEATS:
        marker = '>' if seat == state.active_seat and not state.is_finished() else ' '
        cells = [describe_position(seat, p) for p in state.tokens_of(seat)]
        lines.append(f"{marker} {seat:<6} " + '  '.join(f"{i + 1}:{c}" for i, c in enumerate(cells)))
    return '\n'.join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Four-seat Ludo against heuristic computer players')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for dice and tie-breaks')
    parser.add_argument('--human', action='append', choices=list(SEATS), default=None,
                        help='Seat played from the keyboard (repeatable, default: red)')
    parser.add_argument('--watch', action='store_true', help='Computer plays every seat')
    parser.add_argument('--rolls', default='', help='Scripted die faces to use first, e.g. 6,3,5')
    parser.add_argument('--max-steps', type=int, default=100000, help='Abort after this many state changes')
    return parser


def human_seats(args: argparse.Namespace) -> List[str]:
    if args.watch:
        return []
    return list(dict.fromkeys(args.human or ['red']))


def prompt_human_action(session: GameSession, read: Callable[[str], str]) -> bool:
    """Handles one keyboard action. Returns False when the player quits."""
    state = session.state
    phase = session.phase()
    seat = state.active_seat.capitalize()
    if phase == PHASE_AWAITING_ROLL:
        prompt = f"{seat}: press Enter or 'r' to roll ('q' quits): "
    else:
        moves = [m + 1 for m in session.valid_moves()]
        prompt = f"{seat} rolled {state.dice_value}. Move token {moves} ('q' quits): "
    while True:
        text = read(prompt).strip().lower()
        if text == 'q':
            return False
        if phase == PHASE_AWAITING_ROLL:
            if text in ('', 'r'):
                session.roll()
                return True
            print('Type r to roll.')
            continue
        try:
            token = int(text) - 1
        except ValueError:
            print('Could not parse. Try again.')
            continue
        if token in session.valid_moves():
            session.move(token)
            return True
        print('Illegal move. Try again.')


def run(argv: Optional[Sequence[str]] = None, read: Callable[[str], str] = input) -> int:
    args = build_parser().parse_args(argv)
    try:
        rolls = parse_rolls(args.rolls)
    except ValueError as e:
        print(f"error: {e}")
        return 2
    humans = human_seats(args)
    computers = [s for s in SEATS if s not in humans]

    def on_finish(winner: str) -> None:
        print(f"{winner.capitalize()} wins!")

    session = GameSession(
        computer_seats=computers,
        rng=LoadedDice(rolls, seed=args.seed),
        on_log=print,
        on_finish=on_finish,
    )
    print(f"Humans: {', '.join(humans) or 'none'}. Computers: {', '.join(computers) or 'none'}.")
    print(format_tokens(session.state))

    while not session.state.is_finished():
        if session.steps >= args.max_steps:
            print(f"error: no winner after {args.max_steps} steps")
            return 1
        if session.resolve_blocked():
            continue
        if session.is_computer_turn():
            session.step_computer()
        elif session.phase() in (PHASE_AWAITING_ROLL, PHASE_AWAITING_MOVE):
            if not prompt_human_action(session, read):
                print('Bye.')
                return 0
            print(format_tokens(session.state))
    print(format_tokens(session.state))
    return 0


def main() -> None:
    raise SystemExit(run())
