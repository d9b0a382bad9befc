"""Card rank definitions and utilities.

Rank order (high to low): A > K > Q > J > 10 > 9 > 8 > 7 > 6 > 5 > 4 > 3 > 2

The ace is stored as the lowest value (1) and promoted to 14 whenever it
plays as a high card. Only the wheel straight (A-2-3-4-5) uses it low.

This module provides:
- Rank and suit constants
- Card representation and parsing
- Rank histogram, sorting and ace promotion helpers
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable, List


class Rank(IntEnum):
    """Card ranks by stored value. The ace is stored low (1)."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13


class Suit(IntEnum):
    """Card suits. Only compared for equality (flush detection)."""

    HEART = 0
    DIAMOND = 1
    CLUB = 2
    SPADE = 3


# Value an ace takes when it plays high
ACE_HIGH = 14

MIN_RANK = int(Rank.ACE)
MAX_RANK = int(Rank.KING)

# Rank symbols for display
RANK_SYMBOLS = {
    Rank.ACE: "A",
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
}

# Suit symbols for display
SUIT_SYMBOLS = {
    Suit.HEART: "♥",
    Suit.DIAMOND: "♦",
    Suit.CLUB: "♣",
    Suit.SPADE: "♠",
}

# Symbol to rank mapping (for parsing); "T" is the common one-letter ten
SYMBOL_TO_RANK = {v: k for k, v in RANK_SYMBOLS.items()}
SYMBOL_TO_RANK["T"] = Rank.TEN


@dataclass(frozen=True, order=True)
class Card:
    """A playing card with rank and suit.

    Immutable and hashable. Two cards are equal when rank and suit match;
    nothing checks that a set of cards could come from a single deck.
    """

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{RANK_SYMBOLS[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    def __repr__(self) -> str:
        return f"Card({RANK_SYMBOLS[self.rank]}{SUIT_SYMBOLS[self.suit]})"

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse a card from string like 'A♠', '10h' or 'TD'.

        Args:
            s: Card string in format "RANK+SUIT"

        Returns:
            Card object

        Raises:
            ValueError: If string cannot be parsed
        """
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s!r}")

        suit_char = s[-1]
        rank_str = s[:-1].upper()

        suit_map = {v: k for k, v in SUIT_SYMBOLS.items()}
        suit_map.update({"H": Suit.HEART, "D": Suit.DIAMOND, "C": Suit.CLUB, "S": Suit.SPADE})
        suit_map.update({"h": Suit.HEART, "d": Suit.DIAMOND, "c": Suit.CLUB, "s": Suit.SPADE})

        if suit_char not in suit_map:
            raise ValueError(f"Invalid suit character: {suit_char}")
        suit = suit_map[suit_char]

        if rank_str not in SYMBOL_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_str}")
        rank = SYMBOL_TO_RANK[rank_str]

        return cls(rank=rank, suit=suit)


def is_valid_rank(value: int) -> bool:
    """Check if a stored rank value lies in 1-13."""
    return MIN_RANK <= value <= MAX_RANK


def get_rank_counts(values: Iterable[int]) -> Dict[int, int]:
    """Count occurrences of each rank value.

    Args:
        values: Rank values (aces either low or promoted, not mixed)

    Returns:
        Dict mapping rank value to count
    """
    counts: Dict[int, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1
    return counts


def sort_values(values: Iterable[int]) -> List[int]:
    """Return rank values sorted ascending as a new list."""
    return sorted(int(v) for v in values)


def promote_aces(values: Iterable[int]) -> List[int]:
    """Replace every low ace (1) with 14 and re-sort ascending.

    Args:
        values: Rank values with aces stored low

    Returns:
        New sorted list with aces valued high
    """
    return sort_values(ACE_HIGH if v == Rank.ACE else v for v in values)


def create_standard_deck() -> List[Card]:
    """Create a standard 52-card deck.

    Returns:
        List of 52 Card objects (13 ranks × 4 suits)
    """
    deck = []
    for rank in Rank:
        for suit in Suit:
            deck.append(Card(rank=rank, suit=suit))
    return deck


def sort_cards(cards: List[Card]) -> List[Card]:
    """Sort cards by rank (ascending, ace low), then by suit.

    Args:
        cards: List of Card objects

    Returns:
        New sorted list of cards
    """
    return sorted(cards)
