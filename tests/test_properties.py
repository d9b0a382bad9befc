"""Property tests for classification and comparison.

Randomly dealt hands are seeded for reproducibility. Properties:
- Totality: every hand maps to exactly one category
- Reflexivity: a hand ties with itself
- Antisymmetry: swapping arguments reverses the result
- Category dominance: a higher category wins regardless of ranks
"""

import random
from itertools import combinations
from typing import List, Tuple

from poker_rank import set_seed
from poker_rank.rules import (
    Rank,
    Suit,
    Card,
    Category,
    Ordering,
    classify,
    evaluate,
    compare,
    hand_key,
    create_standard_deck,
    make_cards_from_string,
)

NUM_SAMPLES = 500

# One hand per category, weakest first
CATEGORY_EXAMPLES = [
    ("2S 5H 9D JC KS", Category.HIGH_CARD),
    ("9S 9H 2D 5C KS", Category.ONE_PAIR),
    ("9S 9H 5D 5C KS", Category.TWO_PAIR),
    ("9S 9H 9D 5C KS", Category.THREE_OF_A_KIND),
    ("AS 2H 3D 4C 5S", Category.STRAIGHT),
    ("2H 5H 9H JH KH", Category.FLUSH),
    ("9S 9H 9D 5C 5S", Category.FULL_HOUSE),
    ("9S 9H 9D 9C 5S", Category.FOUR_OF_A_KIND),
    ("AH 2H 3H 4H 5H", Category.STRAIGHT_FLUSH),
    ("10D JD QD KD AD", Category.ROYAL_FLUSH),
]


def _deal_pairs(seed: int, count: int) -> List[Tuple[List[Card], List[Card]]]:
    """Deal `count` pairs of disjoint five-card hands."""
    set_seed(seed)
    deck = create_standard_deck()
    pairs = []
    for _ in range(count):
        cards = random.sample(deck, 10)
        pairs.append((cards[:5], cards[5:]))
    return pairs


class TestTotality:
    """Every hand gets exactly one category."""

    def test_random_hands_classify(self):
        for hand, _ in _deal_pairs(seed=7, count=NUM_SAMPLES):
            assert classify(hand) in set(Category)

    def test_category_examples(self):
        for text, expected in CATEGORY_EXAMPLES:
            assert classify(make_cards_from_string(text)) == expected

    def test_classification_ignores_card_order(self):
        for hand, _ in _deal_pairs(seed=11, count=100):
            assert classify(list(reversed(hand))) == classify(hand)
            assert evaluate(sorted(hand)) == evaluate(hand)


class TestComparisonLaws:
    """Reflexivity, antisymmetry and consistency with hand_key."""

    def test_reflexive(self):
        for hand, _ in _deal_pairs(seed=13, count=NUM_SAMPLES):
            assert compare(hand, hand) == Ordering.EQUAL

    def test_antisymmetric(self):
        for hand1, hand2 in _deal_pairs(seed=17, count=NUM_SAMPLES):
            assert compare(hand2, hand1) == compare(hand1, hand2).reversed()

    def test_consistent_with_hand_key(self):
        for hand1, hand2 in _deal_pairs(seed=19, count=NUM_SAMPLES):
            key1, key2 = hand_key(hand1), hand_key(hand2)
            if key1 > key2:
                expected = Ordering.GREATER
            elif key1 < key2:
                expected = Ordering.LESS
            else:
                expected = Ordering.EQUAL
            assert compare(hand1, hand2) == expected

    def test_different_categories_decided_by_category(self):
        for hand1, hand2 in _deal_pairs(seed=23, count=NUM_SAMPLES):
            cat1, cat2 = classify(hand1), classify(hand2)
            if cat1 > cat2:
                assert compare(hand1, hand2) == Ordering.GREATER
            elif cat1 < cat2:
                assert compare(hand1, hand2) == Ordering.LESS

    def test_seed_is_reproducible(self):
        assert _deal_pairs(seed=29, count=5) == _deal_pairs(seed=29, count=5)


class TestCategoryDominance:
    """Category order beats any tie-break."""

    def test_examples_ordered_by_category(self):
        hands = [make_cards_from_string(text) for text, _ in CATEGORY_EXAMPLES]
        for (i, weaker), (j, stronger) in combinations(enumerate(hands), 2):
            assert compare(stronger, weaker) == Ordering.GREATER, (i, j)
            assert compare(weaker, stronger) == Ordering.LESS, (i, j)

    def test_any_straight_flush_beats_any_four_of_a_kind(self):
        straight_flushes = []
        for low in range(int(Rank.ACE), int(Rank.NINE) + 1):
            straight_flushes.append(
                [Card(rank=Rank(low + i), suit=Suit.HEART) for i in range(5)]
            )

        quads = []
        for quad in Rank:
            kicker = Rank.KING if quad != Rank.KING else Rank.QUEEN
            cards = [Card(rank=quad, suit=s) for s in Suit]
            quads.append(cards + [Card(rank=kicker, suit=Suit.SPADE)])

        for sf in straight_flushes:
            assert classify(sf) == Category.STRAIGHT_FLUSH
            for quad in quads:
                assert compare(sf, quad) == Ordering.GREATER

    def test_wheel_is_weakest_straight(self):
        wheel = make_cards_from_string("AS 2H 3D 4C 5S")
        for low in range(int(Rank.TWO), int(Rank.NINE) + 1):
            straight = [Card(rank=Rank(low + i), suit=Suit(i % 4)) for i in range(5)]
            assert compare(wheel, straight) == Ordering.LESS
