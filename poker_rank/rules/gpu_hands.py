"""GPU-accelerated batched hand evaluation.

This module provides:
- Card index encoding (0-51) and NumPy hand encoding
- Batched classification of five-card hands using PyTorch
- A single integer score per hand so whole batches compare with one subtraction

Key insight: every rule of the scalar evaluator (hands.py) reduces to rank
histograms, sorts and spreads, all of which vectorize over a [batch, 5]
tensor. The scalar evaluator stays the reference; results must match it.

Score layout (base 15, every rank value is 0-14):
    score = category * 15^5 + t0 * 15^4 + t1 * 15^3 + t2 * 15^2 + t3 * 15 + t4
where t0..t4 is the tie-break tuple padded with zeros.
"""

import logging
from typing import List, Sequence, Tuple, Union

import numpy as np
import torch

from .hands import HAND_SIZE, Category, InvalidHandSize, InvalidRank
from .ranks import ACE_HIGH, MAX_RANK, MIN_RANK, Card, Rank, Suit

logger = logging.getLogger(__name__)

TensorLike = Union[torch.Tensor, np.ndarray, Sequence[Sequence[int]]]

SCORE_BASE = ACE_HIGH + 1
NUM_CARDS = 52


# ============================================================================
# Card Encoding
# ============================================================================


# Card encoding: 0-51 for standard deck (4 suits × 13 ranks)
# card_idx = suit * 13 + (rank - 1)
def card_to_idx(card: Card) -> int:
    """Convert Card to index 0-51."""
    return int(card.suit) * 13 + int(card.rank) - 1


def idx_to_card(idx: int) -> Card:
    """Convert index 0-51 to Card."""
    return Card(rank=Rank(idx % 13 + 1), suit=Suit(idx // 13))


def decode_indices(indices: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Split card indices of shape [batch, 5] into rank and suit arrays."""
    indices = np.asarray(indices, dtype=np.int64)
    return indices % 13 + 1, indices // 13


def encode_hands(hands: Sequence[Sequence[Card]]) -> Tuple[np.ndarray, np.ndarray]:
    """Encode hands as rank and suit arrays of shape [batch, 5].

    Args:
        hands: Sequence of five-card hands

    Returns:
        (ranks, suits) int64 arrays; ranks keep aces low (1)

    Raises:
        InvalidHandSize: If any hand does not hold five cards
    """
    ranks = np.zeros((len(hands), HAND_SIZE), dtype=np.int64)
    suits = np.zeros((len(hands), HAND_SIZE), dtype=np.int64)
    for i, hand in enumerate(hands):
        if len(hand) != HAND_SIZE:
            raise InvalidHandSize(len(hand))
        ranks[i] = [int(card.rank) for card in hand]
        suits[i] = [int(card.suit) for card in hand]
    return ranks, suits


def resolve_device(device: Union[torch.device, str, None] = None) -> torch.device:
    """Pick the evaluation device; None means CUDA when available."""
    if device is None:
        return torch.device("cuda" if torch.cuda.is_available() else "cpu")
    return torch.device(device)


# ============================================================================
# Batched Evaluation
# ============================================================================


class GPUHandEvaluator:
    """Batched five-card hand evaluator.

    Keeps its constant tensors on one device; inputs are moved there.
    Each call builds its own working tensors, so one evaluator can serve
    several threads.
    """

    def __init__(self, device: Union[torch.device, str, None] = None):
        self.device = resolve_device(device)
        self._build_tensors()
        logger.debug("Built GPUHandEvaluator on %s", self.device)

    def _build_tensors(self):
        """Build pre-computed tensors used by every batch."""
        # Histogram bucket index, 0-14 (promoted ranks use 2-14)
        self.bucket_values = torch.arange(SCORE_BASE, device=self.device, dtype=torch.long)

        # Positional weights of the tie-break digits, most significant first
        self.tiebreak_weights = torch.tensor(
            [SCORE_BASE ** (HAND_SIZE - 1 - i) for i in range(HAND_SIZE)],
            device=self.device,
            dtype=torch.long,
        )
        self.category_weight = SCORE_BASE**HAND_SIZE

    def _prepare(self, ranks: TensorLike, suits: TensorLike) -> Tuple[torch.Tensor, torch.Tensor]:
        """Move inputs to the device as [batch, 5] long tensors and validate."""
        if not torch.is_tensor(ranks):
            ranks = torch.as_tensor(np.asarray(ranks, dtype=np.int64))
        if not torch.is_tensor(suits):
            suits = torch.as_tensor(np.asarray(suits, dtype=np.int64))
        ranks = ranks.to(device=self.device, dtype=torch.long)
        suits = suits.to(device=self.device, dtype=torch.long)

        if ranks.dim() == 1:
            ranks = ranks.unsqueeze(0)
            suits = suits.unsqueeze(0)

        if ranks.dim() != 2 or ranks.shape[1] != HAND_SIZE:
            raise InvalidHandSize(ranks.shape[-1] if ranks.dim() else 0)
        if suits.shape != ranks.shape:
            raise ValueError(
                f"ranks and suits must have same shape, got {tuple(ranks.shape)} "
                f"and {tuple(suits.shape)}"
            )

        bad = (ranks < MIN_RANK) | (ranks > MAX_RANK)
        if bool(bad.any()):
            raise InvalidRank(int(ranks[bad][0].item()))

        return ranks, suits

    def _features(self, ranks: torch.Tensor, suits: torch.Tensor) -> dict:
        """Compute the per-hand quantities both classification and scoring use."""
        batch = ranks.shape[0]

        low = ranks.sort(dim=1).values
        promoted = torch.where(ranks == int(Rank.ACE), torch.full_like(ranks, ACE_HIGH), ranks)
        high = promoted.sort(dim=1).values

        # Counts are the same whether aces are bucketed low or high
        hist = torch.zeros(batch, SCORE_BASE, device=self.device, dtype=torch.long)
        hist.scatter_add_(1, promoted, torch.ones_like(promoted))
        counts = hist.sort(dim=1, descending=True).values

        largest = counts[:, 0]
        second = counts[:, 1]
        distinct = largest == 1
        flush = (suits == suits[:, :1]).all(dim=1)

        # Wheel included: the ace sits at 1 in `low`
        low_straight = distinct & (low[:, -1] - low[:, 0] == HAND_SIZE - 1)
        ace_high_straight = (
            distinct
            & (low[:, 0] == int(Rank.ACE))
            & (high[:, -1] - high[:, 0] == HAND_SIZE - 1)
        )

        return {
            "low": low,
            "high": high,
            "hist": hist,
            "largest": largest,
            "second": second,
            "flush": flush,
            "low_straight": low_straight,
            "ace_high_straight": ace_high_straight,
        }

    def _categories(self, f: dict) -> torch.Tensor:
        """Category per hand, highest-priority rule applied last."""

        def fill(cond: torch.Tensor, category: Category, current: torch.Tensor) -> torch.Tensor:
            return torch.where(cond, torch.full_like(current, int(category)), current)

        flush = f["flush"]
        cat = torch.full_like(f["largest"], int(Category.HIGH_CARD))
        cat = fill(flush, Category.FLUSH, cat)
        cat = fill(f["low_straight"] & ~flush, Category.STRAIGHT, cat)
        cat = fill(f["low_straight"] & flush, Category.STRAIGHT_FLUSH, cat)
        cat = fill(f["ace_high_straight"] & ~flush, Category.STRAIGHT, cat)
        cat = fill(f["ace_high_straight"] & flush, Category.ROYAL_FLUSH, cat)

        pair = f["largest"] == 2
        triple = f["largest"] == 3
        second_pair = f["second"] == 2
        cat = fill(pair & ~second_pair, Category.ONE_PAIR, cat)
        cat = fill(pair & second_pair, Category.TWO_PAIR, cat)
        cat = fill(triple & ~second_pair, Category.THREE_OF_A_KIND, cat)
        cat = fill(triple & second_pair, Category.FULL_HOUSE, cat)
        cat = fill(f["largest"] == 4, Category.FOUR_OF_A_KIND, cat)
        return cat

    def _tiebreaks(self, f: dict, cat: torch.Tensor) -> torch.Tensor:
        """Tie-break digits per hand, shape [batch, 5], zero padded."""
        hist = f["hist"]

        # Ranks grouped by (count, value) descending: quad/triple/pairs first,
        # then kickers high to low
        keys = hist * SCORE_BASE + self.bucket_values
        keys = torch.where(hist > 0, keys, torch.full_like(keys, -1))
        top = keys.topk(HAND_SIZE, dim=1).values
        grouped = torch.where(top >= 0, top % SCORE_BASE, torch.zeros_like(top))

        descending = f["high"].flip(dims=[1])

        straight_top = torch.where(
            f["ace_high_straight"], torch.full_like(cat, ACE_HIGH), f["low"][:, -1]
        )
        straight = torch.zeros_like(grouped)
        straight[:, 0] = straight_top

        is_straight = (cat == int(Category.STRAIGHT)) | (cat == int(Category.STRAIGHT_FLUSH))
        is_unpaired = (cat == int(Category.FLUSH)) | (cat == int(Category.HIGH_CARD))
        is_royal = cat == int(Category.ROYAL_FLUSH)

        tiebreak = grouped
        tiebreak = torch.where(is_unpaired.unsqueeze(1), descending, tiebreak)
        tiebreak = torch.where(is_straight.unsqueeze(1), straight, tiebreak)
        tiebreak = torch.where(is_royal.unsqueeze(1), torch.zeros_like(tiebreak), tiebreak)
        return tiebreak

    def classify(self, ranks: TensorLike, suits: TensorLike) -> torch.Tensor:
        """Classify a batch of hands.

        Args:
            ranks: [batch, 5] rank values, aces stored as 1
            suits: [batch, 5] suit values (compared for equality only)

        Returns:
            [batch] long tensor of Category values

        Raises:
            InvalidHandSize: If the last dimension is not 5
            InvalidRank: If any rank lies outside 1-13
        """
        ranks, suits = self._prepare(ranks, suits)
        return self._categories(self._features(ranks, suits))

    def score(self, ranks: TensorLike, suits: TensorLike) -> torch.Tensor:
        """Score a batch of hands; higher score means a stronger hand.

        Returns:
            [batch] long tensor; equal scores are tied hands
        """
        ranks, suits = self._prepare(ranks, suits)
        f = self._features(ranks, suits)
        cat = self._categories(f)
        tiebreak = self._tiebreaks(f, cat)
        return cat * self.category_weight + (tiebreak * self.tiebreak_weights).sum(dim=1)

    def compare(
        self,
        ranks_a: TensorLike,
        suits_a: TensorLike,
        ranks_b: TensorLike,
        suits_b: TensorLike,
    ) -> torch.Tensor:
        """Compare two batches of hands row by row.

        Returns:
            [batch] long tensor: 1 where hand a wins, -1 where b wins, 0 on ties
        """
        return torch.sign(self.score(ranks_a, suits_a) - self.score(ranks_b, suits_b))

    def classify_hands(self, hands: Sequence[Sequence[Card]]) -> List[Category]:
        """Classify Card hands, returning Category members."""
        ranks, suits = encode_hands(hands)
        return [Category(int(c)) for c in self.classify(ranks, suits).cpu().tolist()]

