"""Poker Rank - five-card poker hand ranking.

Classifies five-card hands into categories and compares hands with the
full set of poker tie-break rules (kickers, ace-high promotion, the wheel).
"""

__version__ = "0.1.0"
__author__ = "Poker Rank Team"

from poker_rank.utils.seeding import set_seed

__all__ = ["__version__", "set_seed"]
