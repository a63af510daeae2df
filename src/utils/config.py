"""
Benchmark configuration loaded from YAML.
"""

from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Dict, List, Union

import yaml

from .seed import get_seed_from_config


def load_config(config_path: Union[str, Path]) -> Dict:
    """Load configuration."""
    with open(config_path, 'r') as f:
        return yaml.safe_load(f) or {}


@dataclass
class BenchmarkConfig:
    """Settings for scripts/benchmark_realfft.py."""

    sizes: List[int] = field(default_factory=lambda: [64, 256, 1024, 4096, 16384])
    iterations: int = 200
    seed: int = 42
    tolerance: float = 1e-9
    output_dir: str = 'results/benchmark'
    log_level: str = 'INFO'

    def __post_init__(self):
        self.sizes = [int(n) for n in self.sizes]
        for n in self.sizes:
            if n < 2 or n & (n - 1) != 0:
                raise ValueError(f"Benchmark sizes must be powers of two >= 2, got {n}")
        if self.iterations < 1:
            raise ValueError(f"iterations must be positive, got {self.iterations}")
        if self.tolerance <= 0:
            raise ValueError(f"tolerance must be positive, got {self.tolerance}")

    @classmethod
    def from_dict(cls, config: Dict) -> 'BenchmarkConfig':
        """Build from a parsed YAML mapping; unknown keys are ignored."""
        section = config.get('benchmark') or config
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in section.items() if k in known}
        seed = get_seed_from_config(config)
        if seed is not None:
            kwargs['seed'] = seed
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, config_path: Union[str, Path]) -> 'BenchmarkConfig':
        return cls.from_dict(load_config(config_path))

    def to_dict(self) -> Dict:
        return asdict(self)
