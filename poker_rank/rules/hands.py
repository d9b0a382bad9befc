"""Five-card hand classification and comparison.

Categories (low to high):
- High card, one pair, two pair, three of a kind
- Straight, flush, full house, four of a kind
- Straight flush, royal flush

Comparison rules:
- A higher category always wins
- Same category: compare category-specific rank values (aces high) from
  most to least significant, e.g. quad rank then kicker
- Straights compare by their top card only; the wheel (A-2-3-4-5) tops at 5
- Royal flushes always tie
"""

from dataclasses import dataclass
from enum import IntEnum, auto
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .ranks import (
    ACE_HIGH,
    Card,
    Rank,
    Suit,
    get_rank_counts,
    is_valid_rank,
    promote_aces,
    sort_values,
)

HAND_SIZE = 5


class Category(IntEnum):
    """Hand categories ordered by strength."""

    HIGH_CARD = auto()
    ONE_PAIR = auto()
    TWO_PAIR = auto()
    THREE_OF_A_KIND = auto()
    STRAIGHT = auto()
    FLUSH = auto()
    FULL_HOUSE = auto()
    FOUR_OF_A_KIND = auto()
    STRAIGHT_FLUSH = auto()
    ROYAL_FLUSH = auto()


class Ordering(IntEnum):
    """Result of comparing two hands, with the sign of a classic cmp."""

    LESS = -1
    EQUAL = 0
    GREATER = 1

    def reversed(self) -> "Ordering":
        """The result of the same comparison with the arguments swapped."""
        return Ordering(-self.value)


class HandError(ValueError):
    """Raised when cards cannot be evaluated as a poker hand."""

    pass


class InvalidHandSize(HandError):
    """Raised when a hand does not hold exactly five cards."""

    def __init__(self, size: int):
        super().__init__(f"A hand needs exactly {HAND_SIZE} cards, got {size}")
        self.size = size


class InvalidRank(HandError):
    """Raised when a card's rank lies outside 1-13."""

    def __init__(self, value):
        super().__init__(f"Rank must be between 1 and 13, got {value!r}")
        self.value = value


@dataclass(frozen=True, order=True)
class HandValue:
    """Strength of a five-card hand.

    Attributes:
        category: The hand category
        tiebreak: Ace-high rank values compared within the category, most
            significant first (empty for a royal flush)

    Ordering of HandValue objects is the hand ordering.
    """

    category: Category
    tiebreak: Tuple[int, ...] = ()

    def __str__(self) -> str:
        values = " ".join(str(v) for v in self.tiebreak)
        return f"{self.category.name}({values})"


def _validated_values(cards: Sequence[Card]) -> List[int]:
    """Return the stored rank values of a hand, checking size and ranges."""
    if len(cards) != HAND_SIZE:
        raise InvalidHandSize(len(cards))

    values = []
    for card in cards:
        value = int(card.rank)
        if not is_valid_rank(value):
            raise InvalidRank(card.rank)
        values.append(value)
    return values


def _is_flush(cards: Sequence[Card]) -> bool:
    first = cards[0].suit
    return all(card.suit == first for card in cards[1:])


def straight_high_card(values: Sequence[int]) -> Optional[int]:
    """Return the top card of a straight, or None if values are not one.

    Values are stored rank values (aces low). The wheel (A-2-3-4-5) is
    tested with the ace low and tops at 5. The ace-high straight
    (10-J-Q-K-A) is re-tested after promoting the ace and tops at 14.

    Args:
        values: Five rank values

    Returns:
        High card value of the straight, or None
    """
    low = sort_values(values)
    if len(set(low)) != len(low):
        return None

    if low[-1] - low[0] == HAND_SIZE - 1:
        return low[-1]

    if low[0] == Rank.ACE:
        high = promote_aces(low)
        if high[-1] - high[0] == HAND_SIZE - 1:
            return ACE_HIGH

    return None


def _categorize(cards: Sequence[Card], values: List[int]) -> Category:
    counts = sort_values(get_rank_counts(values).values())
    largest = counts[-1]
    second = counts[-2] if len(counts) > 1 else 0

    if largest == 4:
        return Category.FOUR_OF_A_KIND
    if largest == 3:
        return Category.FULL_HOUSE if second == 2 else Category.THREE_OF_A_KIND
    if largest == 2:
        return Category.TWO_PAIR if second == 2 else Category.ONE_PAIR

    # Five distinct ranks from here on
    flush = _is_flush(cards)
    top = straight_high_card(values)

    if top == ACE_HIGH:
        return Category.ROYAL_FLUSH if flush else Category.STRAIGHT
    if top is not None:
        return Category.STRAIGHT_FLUSH if flush else Category.STRAIGHT
    if flush:
        return Category.FLUSH
    return Category.HIGH_CARD


def classify(cards: Sequence[Card]) -> Category:
    """Classify a five-card hand into its category.

    Args:
        cards: Exactly five cards, in any order

    Returns:
        The hand's Category

    Raises:
        InvalidHandSize: If the hand does not hold five cards
        InvalidRank: If a card's rank lies outside 1-13
    """
    return _categorize(cards, _validated_values(cards))


# Tie-break extraction. Each function receives the ace-promoted values sorted
# ascending and returns the values to compare, most significant first.


def _ranks_with_count(counts: Dict[int, int], count: int) -> List[int]:
    """Ranks appearing exactly `count` times, highest first."""
    return sorted((v for v, c in counts.items() if c == count), reverse=True)


def _descending(high: List[int]) -> Tuple[int, ...]:
    return tuple(reversed(high))


def _straight_tiebreak(values: List[int]) -> Tuple[int, ...]:
    top = straight_high_card(values)
    if top is None:
        raise AssertionError(f"Not a straight: {values}")
    return (top,)


def _four_of_a_kind_tiebreak(high: List[int]) -> Tuple[int, ...]:
    counts = get_rank_counts(high)
    quad = _ranks_with_count(counts, 4)[0]
    kicker = _ranks_with_count(counts, 1)[0]
    return (quad, kicker)


def _full_house_tiebreak(high: List[int]) -> Tuple[int, ...]:
    counts = get_rank_counts(high)
    triple = _ranks_with_count(counts, 3)[0]
    full_of = _ranks_with_count(counts, 2)[0]
    return (triple, full_of)


def _three_of_a_kind_tiebreak(high: List[int]) -> Tuple[int, ...]:
    counts = get_rank_counts(high)
    triple = _ranks_with_count(counts, 3)[0]
    kickers = _ranks_with_count(counts, 1)
    return (triple, *kickers)


def _two_pair_tiebreak(high: List[int]) -> Tuple[int, ...]:
    counts = get_rank_counts(high)
    first_pair, second_pair = _ranks_with_count(counts, 2)
    kicker = _ranks_with_count(counts, 1)[0]
    return (first_pair, second_pair, kicker)


def _one_pair_tiebreak(high: List[int]) -> Tuple[int, ...]:
    counts = get_rank_counts(high)
    pair = _ranks_with_count(counts, 2)[0]
    kickers = _ranks_with_count(counts, 1)
    return (pair, *kickers)


_TIEBREAKERS: Dict[Category, Callable[[List[int]], Tuple[int, ...]]] = {
    Category.HIGH_CARD: _descending,
    Category.ONE_PAIR: _one_pair_tiebreak,
    Category.TWO_PAIR: _two_pair_tiebreak,
    Category.THREE_OF_A_KIND: _three_of_a_kind_tiebreak,
    Category.FLUSH: _descending,
    Category.FULL_HOUSE: _full_house_tiebreak,
    Category.FOUR_OF_A_KIND: _four_of_a_kind_tiebreak,
}


def evaluate(cards: Sequence[Card]) -> HandValue:
    """Classify a hand and extract the rank values that break ties.

    Args:
        cards: Exactly five cards, in any order

    Returns:
        HandValue whose ordering matches hand strength

    Raises:
        InvalidHandSize: If the hand does not hold five cards
        InvalidRank: If a card's rank lies outside 1-13
    """
    values = _validated_values(cards)
    category = _categorize(cards, values)

    if category == Category.ROYAL_FLUSH:
        return HandValue(category=category)
    if category in (Category.STRAIGHT, Category.STRAIGHT_FLUSH):
        # Aces are resolved high or low by the straight itself
        return HandValue(category=category, tiebreak=_straight_tiebreak(values))

    return HandValue(category=category, tiebreak=_TIEBREAKERS[category](promote_aces(values)))


def compare(hand1: Sequence[Card], hand2: Sequence[Card]) -> Ordering:
    """Compare two five-card hands.

    Args:
        hand1: First hand
        hand2: Second hand

    Returns:
        GREATER if hand1 wins, LESS if hand2 wins, EQUAL on a tie

    Note:
        Ties are real results (e.g. the same ranks in different suits)
        and are never broken by suit.
    """
    value1 = evaluate(hand1)
    value2 = evaluate(hand2)

    if value1.category != value2.category:
        return Ordering.GREATER if value1.category > value2.category else Ordering.LESS

    # Both tuples have the same length within a category
    for v1, v2 in zip(value1.tiebreak, value2.tiebreak):
        if v1 != v2:
            return Ordering.GREATER if v1 > v2 else Ordering.LESS
    return Ordering.EQUAL


def can_beat(hand1: Sequence[Card], hand2: Sequence[Card]) -> bool:
    """Check if hand1 strictly beats hand2."""
    return compare(hand1, hand2) is Ordering.GREATER


def hand_key(cards: Sequence[Card]) -> HandValue:
    """Sort key ordering hands from weakest to strongest.

    Example:
        >>> strongest = max(hands, key=hand_key)
    """
    return evaluate(cards)


# Helper functions for creating hands for testing


def make_cards_from_ranks(ranks: List[Rank], suits: Optional[List[Suit]] = None) -> List[Card]:
    """Create cards from a list of ranks and optional suits.

    If suits not provided, cycles through suits so that five cards never
    form a flush.

    Args:
        ranks: List of Rank values
        suits: Optional list of Suit values (must match length of ranks if provided)

    Returns:
        List of Card objects
    """
    if suits is None:
        suits = [Suit(i % 4) for i in range(len(ranks))]

    if len(ranks) != len(suits):
        raise ValueError("ranks and suits must have same length")

    return [Card(rank=r, suit=s) for r, s in zip(ranks, suits)]


def make_cards_from_string(s: str) -> List[Card]:
    """Parse cards from a string like "AS KS QS JS 10S".

    Args:
        s: Space-separated card strings

    Returns:
        List of Card objects
    """
    return [Card.from_string(cs) for cs in s.split()]
