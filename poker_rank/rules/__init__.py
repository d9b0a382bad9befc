"""Poker rules implementations.

This module provides:
- Card and rank definitions (ranks.py)
- Hand classification and comparison (hands.py)
- Batched tensor evaluation (gpu_hands.py, imported on demand)
"""

from .ranks import (
    Rank,
    Suit,
    Card,
    ACE_HIGH,
    RANK_SYMBOLS,
    SUIT_SYMBOLS,
    is_valid_rank,
    get_rank_counts,
    sort_values,
    promote_aces,
    create_standard_deck,
    sort_cards,
)

from .hands import (
    HAND_SIZE,
    Category,
    Ordering,
    HandValue,
    HandError,
    InvalidHandSize,
    InvalidRank,
    classify,
    evaluate,
    compare,
    can_beat,
    hand_key,
    straight_high_card,
    make_cards_from_ranks,
    make_cards_from_string,
)

__all__ = [
    # Ranks
    "Rank",
    "Suit",
    "Card",
    "ACE_HIGH",
    "RANK_SYMBOLS",
    "SUIT_SYMBOLS",
    "is_valid_rank",
    "get_rank_counts",
    "sort_values",
    "promote_aces",
    "create_standard_deck",
    "sort_cards",
    # Hands
    "HAND_SIZE",
    "Category",
    "Ordering",
    "HandValue",
    "HandError",
    "InvalidHandSize",
    "InvalidRank",
    "classify",
    "evaluate",
    "compare",
    "can_beat",
    "hand_key",
    "straight_high_card",
    "make_cards_from_ranks",
    "make_cards_from_string",
]
