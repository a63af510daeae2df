#!/usr/bin/env python3
"""
Benchmark and self-check for the real FFT.

For every configured size this script measures:
  1. Max relative error of the packed forward transform vs numpy.fft.rfft
  2. Max relative error of a FORWARD -> INVERSE round trip
  3. Time per in-place transform (ms), ours vs numpy

Usage:
    python scripts/benchmark_realfft.py [--config CONFIG_PATH] [--output OUTPUT_DIR]
    python scripts/benchmark_realfft.py --sizes 1024 4096
"""

import sys
import json
import argparse
import time
from pathlib import Path
from datetime import datetime
from typing import Dict, List
from dataclasses import dataclass, asdict

import numpy as np

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from src.realfft import Operation, PackedSpectrum, make_plan, transform
from src.utils import BenchmarkConfig, BenchmarkLogger, set_seed

console = Console()


@dataclass
class SizeResult:
    """Measurements for a single transform size."""
    size: int
    forward_error: float
    roundtrip_error: float
    ours_ms: float
    numpy_ms: float
    passed: bool

    def to_dict(self) -> Dict:
        return asdict(self)


def relative_error(actual: np.ndarray, expected: np.ndarray) -> float:
    scale = max(np.abs(expected).max(), 1.0)
    return float(np.abs(actual - expected).max() / scale)


def measure_size(size: int, iterations: int, tolerance: float, rng: np.random.Generator) -> SizeResult:
    x = rng.standard_normal(size)
    forward = make_plan(Operation.FORWARD, size)
    inverse = make_plan(Operation.INVERSE, size)

    buffer = x.copy()
    transform(buffer, forward)
    forward_error = relative_error(PackedSpectrum(buffer).one_sided(), np.fft.rfft(x))

    transform(buffer, inverse)
    roundtrip_error = relative_error(buffer, x)

    # Warm up JIT before timing
    work = x.copy()
    transform(work, forward)

    start = time.perf_counter()
    for _ in range(iterations):
        work[:] = x
        transform(work, forward)
    ours_ms = (time.perf_counter() - start) / iterations * 1000

    start = time.perf_counter()
    for _ in range(iterations):
        np.fft.rfft(x)
    numpy_ms = (time.perf_counter() - start) / iterations * 1000

    return SizeResult(
        size=size,
        forward_error=forward_error,
        roundtrip_error=roundtrip_error,
        ours_ms=ours_ms,
        numpy_ms=numpy_ms,
        passed=forward_error < tolerance and roundtrip_error < tolerance,
    )


def display_results_table(results: List[SizeResult]):
    """Display benchmark results."""
    table = Table(title="Real FFT Benchmark", box=box.ROUNDED)
    table.add_column("N", justify="right", style="bold")
    table.add_column("Forward err", justify="right")
    table.add_column("Round-trip err", justify="right")
    table.add_column("Ours (ms)", justify="right")
    table.add_column("numpy (ms)", justify="right")
    table.add_column("Ratio", justify="right")
    table.add_column("Status", justify="center")

    for r in results:
        table.add_row(
            str(r.size),
            f"{r.forward_error:.2e}",
            f"{r.roundtrip_error:.2e}",
            f"{r.ours_ms:.4f}",
            f"{r.numpy_ms:.4f}",
            f"{r.ours_ms / r.numpy_ms:.2f}x" if r.numpy_ms > 0 else "-",
            "[green]✓[/green]" if r.passed else "[red]✗[/red]",
        )

    console.print(table)


def run_benchmark(config: BenchmarkConfig, output_dir: Path) -> List[SizeResult]:
    """Run the benchmark for every configured size."""
    output_dir.mkdir(parents=True, exist_ok=True)
    logger = BenchmarkLogger('benchmark_realfft', log_dir=str(output_dir), level=config.log_level)
    logger.log_config(config.to_dict())

    console.print(Panel.fit(
        "[bold blue]Real FFT Benchmark[/bold blue]\n"
        f"Sizes: {config.sizes}  Iterations: {config.iterations}",
        border_style="blue"
    ))

    rng = set_seed(config.seed)
    results = []
    for size in config.sizes:
        result = measure_size(size, config.iterations, config.tolerance, rng)
        logger.log_size(size, result.to_dict())
        if not result.passed:
            logger.warning(f"Size {size} exceeds tolerance {config.tolerance:.1e}")
        results.append(result)

    console.print()
    display_results_table(results)

    results_dict = {
        'timestamp': datetime.now().isoformat(),
        'config': config.to_dict(),
        'sizes': [r.to_dict() for r in results],
    }
    with open(output_dir / 'results.json', 'w') as f:
        json.dump(results_dict, f, indent=2)

    console.print(f"\n[green]✓[/green] Results saved to {output_dir}")
    return results


def main():
    parser = argparse.ArgumentParser(description="Real FFT benchmark and self-check")
    parser.add_argument(
        '--config',
        type=str,
        default=str(PROJECT_ROOT / 'configs' / 'benchmark.yaml'),
        help='Path to configuration file'
    )
    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help='Output directory'
    )
    parser.add_argument(
        '--sizes',
        type=int,
        nargs='+',
        default=None,
        help='Override the configured transform sizes'
    )
    args = parser.parse_args()

    config = BenchmarkConfig.from_yaml(args.config)
    if args.sizes:
        config = BenchmarkConfig(**{**config.to_dict(), 'sizes': args.sizes})

    if args.output:
        output_dir = Path(args.output)
    else:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        output_dir = PROJECT_ROOT / config.output_dir / timestamp

    try:
        results = run_benchmark(config, output_dir)
    except Exception as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise

    if all(r.passed for r in results):
        console.print(Panel.fit("[bold green]All sizes within tolerance[/bold green]", border_style="green"))
    else:
        console.print(Panel.fit("[bold red]Some sizes exceed tolerance[/bold red]", border_style="red"))
        sys.exit(1)


if __name__ == '__main__':
    main()
