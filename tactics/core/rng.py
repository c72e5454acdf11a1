"""
Deterministyczny generator liczb losowych (RNG).

Jedynym losowym elementem bitwy jest wybór umiejętności przez AI.
Sesja z tym samym seedem i tymi samymi komendami gracza
zawsze daje ten sam przebieg walki. To pozwala na:
- Replay/odtwarzanie walk
- Debugowanie
- Testy jednostkowe

Zasady:
    - Każda sesja powinna mieć WŁASNĄ instancję GameRNG
    - Bez globalnego modułu random (stan współdzielony)

Przykład użycia:
    >>> rng = GameRNG(seed=12345)
    >>> rng.choice(["attack", "bolt"])  # zawsze to samo dla seed=12345
"""

from __future__ import annotations
import random
from typing import Optional, Sequence, TypeVar

T = TypeVar('T')


class GameRNG:
    """
    Generator losowości sesji, odtwarzalny z seeda.

    Attributes:
        seed (int): Ziarno (zapisywane w replay)

    Example:
        >>> a, b = GameRNG(42), GameRNG(42)
        >>> a.choice("xyz") == b.choice("xyz")
        True
    """

    def __init__(self, seed: Optional[int] = None):
        # None -> losowe ziarno, ale zapamiętane żeby dało się odtworzyć walkę
        if seed is None:
            seed = random.randint(1, 999999)
        self.seed = seed
        self._rng = random.Random(seed)

    def reset(self) -> None:
        """Wraca do stanu zaraz po utworzeniu (nowa gra z tym samym seedem)."""
        self._rng.seed(self.seed)

    def choice(self, seq: Sequence[T]) -> T:
        """
        Raises:
            IndexError: Pusta sekwencja
        """
        return self._rng.choice(seq)

    def __repr__(self) -> str:
        return f"GameRNG(seed={self.seed})"
