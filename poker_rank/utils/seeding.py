"""Deterministic seeding for randomized hand sampling.

The evaluators themselves are deterministic; randomness only enters when
hands are sampled (property tests, parity checks against the batched
evaluator). Seeding every generator makes those samples reproducible.
"""

import random
from typing import Optional

import numpy as np
import torch


def set_seed(seed: Optional[int] = None) -> int:
    """Seed Python's random, NumPy and PyTorch (CPU and CUDA).

    Args:
        seed: The seed value to use. If None, one is drawn and returned so
              the run can be repeated.

    Returns:
        The seed value that was used.

    Example:
        >>> from poker_rank import set_seed
        >>> set_seed(42)
        42
    """
    if seed is None:
        seed = random.randint(0, 2**32 - 1)

    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)

    if torch.cuda.is_available():
        torch.cuda.manual_seed_all(seed)

    return seed
