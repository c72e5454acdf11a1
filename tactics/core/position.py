"""
Pozycje na siatce i przynależność drużynowa.

Siatka ma układ prostokątny (rows x cols). Kolumny dzielone są
na dwie połowy - lewa należy do drużyny gracza, prawa do wroga:

    col:    0     1   |   2     3
    row 0  [P]   [P]  |  [E]   [E]
    row 1  [P]   [P]  |  [E]   [E]
    row 2  [P]   [P]  |  [E]   [E]
    row 3  [P]   [P]  |  [E]   [E]
                 ^        ^
            front gracza  front wroga

Front to kolumna najbliższa linii środkowej.

Przykład użycia:
    >>> pos = GridPosition(1, 2)
    >>> pos.to_list()
    [1, 2]
    >>> Team.PLAYER.opponent
    <Team.ENEMY: 'enemy'>
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence


class Team(Enum):
    """Drużyna jednostki."""

    PLAYER = "player"
    ENEMY = "enemy"

    @property
    def opponent(self) -> "Team":
        """Drużyna przeciwna."""
        return Team.ENEMY if self is Team.PLAYER else Team.PLAYER


@dataclass(frozen=True)
class GridPosition:
    """
    Pozycja komórki na siatce.

    Klasa jest niemutowalna - może być kluczem w słowniku.

    Attributes:
        row (int): Wiersz (0 = góra)
        col (int): Kolumna (0 = lewa krawędź)
    """
    row: int
    col: int

    def to_list(self) -> List[int]:
        """Serializuje pozycję do [row, col]."""
        return [self.row, self.col]

    @classmethod
    def from_sequence(cls, data: Sequence[int]) -> "GridPosition":
        """Tworzy pozycję z [row, col]."""
        if len(data) != 2:
            raise ValueError(f"Position must have exactly 2 elements, got {list(data)}")
        return cls(int(data[0]), int(data[1]))

    def __repr__(self) -> str:
        return f"GridPosition({self.row}, {self.col})"


def home_team_for_column(col: int, cols: int) -> Team:
    """
    Zwraca drużynę, do której należy kolumna.

    Args:
        col: Indeks kolumny
        cols: Liczba kolumn siatki

    Returns:
        Team: PLAYER dla lewej połowy, ENEMY dla prawej
    """
    return Team.PLAYER if col < cols // 2 else Team.ENEMY


def home_columns(team: Team, cols: int) -> List[int]:
    """Kolumny należące do drużyny (od tylnej do frontowej)."""
    half = cols // 2
    if team is Team.PLAYER:
        return list(range(0, half))
    return list(range(cols - 1, half - 1, -1))


def distance_to_center(team: Team, col: int, cols: int) -> int:
    """
    Odległość kolumny od linii frontu danej drużyny.

    0 oznacza kolumnę frontową (najbliższą środka planszy).
    """
    half = cols // 2
    if team is Team.PLAYER:
        return (half - 1) - col
    return col - half
