from __future__ import annotations

import random
from collections import deque
from typing import Any, Iterable, List, Optional, Protocol, Sequence, TypeVar

DIE_FACES = 6

T = TypeVar('T')


class DiceSource(Protocol):
    """What the engine draws from: random.Random and LoadedDice both fit."""

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, seq: Sequence[T]) -> T: ...


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Creates an independent random source; seeded sources replay identically."""
    return random.Random(seed)


class LoadedDice:
    """
    Random source that returns a scripted sequence of die faces from randint,
    then falls back to ordinary seeded draws. Every other call (choice, shuffle)
    goes to the seeded generator.
    """

    def __init__(self, rolls: Iterable[int] = (), seed: Optional[int] = None) -> None:
        faces = [int(r) for r in rolls]
        for face in faces:
            if not 1 <= face <= DIE_FACES:
                raise ValueError(f'die face out of range: {face}')
        self._rolls = deque(faces)
        self._rng = random.Random(seed)

    @property
    def remaining(self) -> int:
        return len(self._rolls)

    def randint(self, a: int, b: int) -> int:
        if self._rolls:
            return self._rolls.popleft()
        return self._rng.randint(a, b)

    def choice(self, seq: Sequence[T]) -> T:
        return self._rng.choice(seq)

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            raise AttributeError(name)
        return getattr(self._rng, name)


def roll_face(rng: DiceSource) -> int:
    return rng.randint(1, DIE_FACES)


def parse_rolls(text: str) -> List[int]:
    """Parses '6,3 1' style input into die faces."""
    faces: List[int] = []
    for token in text.replace(',', ' ').split():
        try:
            face = int(token)
        except ValueError:
            raise ValueError(f'not a die face: {token!r}') from None
        if not 1 <= face <= DIE_FACES:
            raise ValueError(f'die face out of range: {face}')
        faces.append(face)
    return faces
