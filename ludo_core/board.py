from __future__ import annotations

from typing import Dict, Optional, Tuple, Union

Coord = Tuple[int, int]
Seat = str  # 'red', 'green', 'yellow', 'blue'
Position = Union[int, str]  # 'start', 0..57, 'home'

SEATS: Tuple[Seat, ...] = ('red', 'green', 'yellow', 'blue')
AT_START = 'start'
AT_HOME = 'home'

GRID_SIZE = 15
RING_SIZE = 52
HOME_STRETCH_SIZE = 6
LAST_OFFSET = RING_SIZE + HOME_STRETCH_SIZE - 1  # 57

# Shared track, clockwise, starting at red's entry cell.
RING: Tuple[Coord, ...] = (
    (6, 1), (6, 2), (6, 3), (6, 4), (6, 5),
    (5, 6), (4, 6), (3, 6), (2, 6), (1, 6), (0, 6),
    (0, 7),
    (0, 8), (1, 8), (2, 8), (3, 8), (4, 8), (5, 8),
    (6, 9), (6, 10), (6, 11), (6, 12), (6, 13), (6, 14),
    (7, 14),
    (8, 14), (8, 13), (8, 12), (8, 11), (8, 10), (8, 9),
    (9, 8), (10, 8), (11, 8), (12, 8), (13, 8), (14, 8),
    (14, 7),
    (14, 6), (13, 6), (12, 6), (11, 6), (10, 6), (9, 6),
    (8, 5), (8, 4), (8, 3), (8, 2), (8, 1), (8, 0),
    (7, 0),
    (6, 0),
)

# Seats sit a quarter of the ring apart.
ENTRY_INDEX: Dict[Seat, int] = {'red': 0, 'green': 13, 'yellow': 26, 'blue': 39}

HOME_STRETCH: Dict[Seat, Tuple[Coord, ...]] = {
    'red': ((7, 1), (7, 2), (7, 3), (7, 4), (7, 5), (7, 6)),
    'green': ((1, 7), (2, 7), (3, 7), (4, 7), (5, 7), (6, 7)),
    'yellow': ((7, 13), (7, 12), (7, 11), (7, 10), (7, 9), (7, 8)),
    'blue': ((13, 7), (12, 7), (11, 7), (10, 7), (9, 7), (8, 7)),
}

# Finished tokens share one cell inside their corner cluster.
HOME_CELL: Dict[Seat, Coord] = {
    'red': (2, 2),
    'green': (2, 12),
    'yellow': (12, 12),
    'blue': (12, 2),
}


def is_track_offset(position: Position) -> bool:
    """True for an integer position on the shared ring or the home stretch."""
    return isinstance(position, int) and not isinstance(position, bool) and 0 <= position <= LAST_OFFSET


def ring_index(seat: Seat, offset: int) -> int:
    """Index into RING for a seat-relative offset on the shared ring."""
    return (ENTRY_INDEX[seat] + offset) % RING_SIZE


def entry_cell(seat: Seat) -> Coord:
    return RING[ENTRY_INDEX[seat]]


def project_to_board_cell(seat: Seat, position: Position) -> Optional[Coord]:
    """
    Maps a seat-relative token position onto the shared 15x15 board.
    Returns None for unknown seats or positions outside the track.
    """
    if seat not in ENTRY_INDEX:
        return None
    if position == AT_START:
        return entry_cell(seat)
    if position == AT_HOME:
        return HOME_CELL[seat]
    if not is_track_offset(position):
        return None
    if position >= RING_SIZE:
        return HOME_STRETCH[seat][position - RING_SIZE]
    return RING[ring_index(seat, position)]
