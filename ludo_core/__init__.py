"""
Ludo core Python package.

Pure rules engine for four-seat Ludo plus a heuristic computer player.
Modules:
- board.py: shared ring, home stretches, coordinate projection
- state.py: GameState and position sentinels
- dice.py: injectable random sources
- rules.py: rolling, legal moves, movement, capture, win, turn rotation
- ai.py: heuristic move selection and computer turns
- session.py: driver holding the current state for UIs
"""
