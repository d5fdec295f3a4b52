"""
Seeding for reproducible analysis runs.

The library itself never reads ambient randomness when given a seed:
train_codebook / VectorQuantizer take a seed or torch.Generator, and
white_noise takes a seed. set_seed covers code that does not thread one
through (third-party calls, ad hoc experiments).
"""

import random

import numpy as np
import torch


def set_seed(seed: int, deterministic: bool = False) -> torch.Generator:
    """
    Seed the global python, numpy and torch RNGs.

    Returns a fresh torch.Generator with the same seed, suitable for
    passing to train_codebook(generator=...).
    """
    seed = int(seed)
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)

    if deterministic:
        torch.use_deterministic_algorithms(True, warn_only=True)

    return torch.Generator().manual_seed(seed)
