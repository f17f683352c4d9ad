from __future__ import annotations

# Facade module that re-exports the Ludo core for the Flask app, tools and tests.
# Single-responsibility modules live under ludo_core/*.

from ludo_core.board import (  # noqa: F401
    AT_HOME,
    AT_START,
    ENTRY_INDEX,
    HOME_CELL,
    HOME_STRETCH,
    RING,
    SEATS,
    Coord,
    Position,
    Seat,
    project_to_board_cell,
    ring_index,
)
from ludo_core.state import (  # noqa: F401
    LOG_LIMIT,
    STATUS_FINISHED,
    STATUS_PLAYING,
    TOKENS_PER_SEAT,
    GameState,
    create_initial_state,
    validate_state,
)
from ludo_core.dice import DiceSource, LoadedDice, make_rng, parse_rolls  # noqa: F401
from ludo_core.rules import (  # noqa: F401
    PHASE_AWAITING_MOVE,
    PHASE_AWAITING_ROLL,
    PHASE_BLOCKED,
    PHASE_FINISHED,
    can_roll,
    check_for_captures,
    destination,
    end_turn,
    get_valid_moves,
    move_token,
    roll_dice,
    turn_phase,
)
from ludo_core.ai import capturing_moves, choose_move, take_computer_turn  # noqa: F401
from ludo_core.session import GameSession, new_log_entries  # noqa: F401


def main() -> None:
    # CLI driver delegated to ludo_core.cli
    from ludo_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
