import random
from typing import Optional

import numpy as np


def set_seed(seed: int) -> np.random.Generator:
    """Seed ``random`` and numpy's global state; return a fresh Generator."""
    random.seed(seed)
    np.random.seed(seed)
    return np.random.default_rng(seed)


def get_seed_from_config(config: dict) -> Optional[int]:
    if not isinstance(config, dict):
        return None
    seed = config.get('seed', None)
    if seed is not None:
        return int(seed)
    benchmark = config.get('benchmark', {})
    if isinstance(benchmark, dict) and benchmark.get('seed', None) is not None:
        return int(benchmark['seed'])
    return None
