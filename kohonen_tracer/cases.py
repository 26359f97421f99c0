"""
Demo runs: generate a point cloud, fit a chain to it and dump the data, the
initial weights and the trained weights as CSV files for plotting, e.g. in
gnuplot:

    set datafile separator ','
    plot "circle.csv" title "data", "circle_w1.csv" title "w1", "circle_w2.csv" title "w2"
"""
import logging
import os
from dataclasses import dataclass
from typing import Callable

import torch

from . import shapes
from .config import CIRCLE_CASE, LEMNISCATE_CASE, TracerConfig
from .export import save_2d_data
from .som import mean_nearest_sample_distance, train

logger = logging.getLogger(__name__)


@dataclass
class CaseResult:
    data: torch.Tensor
    initial_weights: torch.Tensor
    trained_weights: torch.Tensor
    data_path: str
    initial_weights_path: str
    trained_weights_path: str
    distance_before: float  # Mean node to nearest sample distance
    distance_after: float


def run_case(config: TracerConfig,
             generate: Callable[..., torch.Tensor],
             prefix: str,
             out_dir=".") -> CaseResult:
    """
    Runs one demo case.

    Args:
        config (TracerConfig): Sizes, stopping threshold and seed.
        generate (Callable): Called as generate(num_samples, generator=...) and
            must return a (num_samples, num_features) tensor.
        prefix (str): File name prefix for the CSV dumps.
        out_dir: Directory receiving the CSV dumps, created if missing.
    """
    config.validate()
    if config.num_threads is None:
        return _run_case(config, generate, prefix, out_dir)

    previous_threads = torch.get_num_threads()
    torch.set_num_threads(config.num_threads)
    try:
        return _run_case(config, generate, prefix, out_dir)
    finally:
        torch.set_num_threads(previous_threads)


def _run_case(config: TracerConfig, generate, prefix: str, out_dir) -> CaseResult:
    generator = torch.Generator()
    if config.random_seed is not None:
        generator.manual_seed(config.random_seed)
    else:
        generator.seed()

    data = generate(config.num_samples, generator=generator)
    if data.shape != (config.num_samples, config.num_features):
        raise ValueError(f"Generator returned shape {tuple(data.shape)}, "
                         f"expected ({config.num_samples}, {config.num_features})")
    weights = shapes.random_weights(config.num_nodes, config.num_features,
                                    config.init_low, config.init_high, generator)

    os.makedirs(out_dir, exist_ok=True)
    data_path = save_2d_data(os.path.join(out_dir, f"{prefix}.csv"), data, config.precision)
    initial_path = save_2d_data(os.path.join(out_dir, f"{prefix}_w1.csv"), weights, config.precision)
    initial_weights = weights.clone()

    train(data, weights, config.alpha_min)
    trained_path = save_2d_data(os.path.join(out_dir, f"{prefix}_w2.csv"), weights, config.precision)

    result = CaseResult(
        data=data,
        initial_weights=initial_weights,
        trained_weights=weights,
        data_path=data_path,
        initial_weights_path=initial_path,
        trained_weights_path=trained_path,
        distance_before=mean_nearest_sample_distance(initial_weights, data),
        distance_after=mean_nearest_sample_distance(weights, data),
    )
    logger.info(f"Case '{prefix}': mean node to sample distance "
                f"{result.distance_before:.4f} -> {result.distance_after:.4f}")
    return result


def run_circle_case(out_dir=".", random_seed: int | None = None) -> CaseResult:
    """50 nodes fitted to 500 points around a circle of radius 0.75 +- 0.3."""
    return run_case(CIRCLE_CASE.with_seed(random_seed), shapes.circle, "circle", out_dir)


def run_lemniscate_case(out_dir=".", random_seed: int | None = None) -> CaseResult:
    """20 nodes fitted to 500 points around the upper-half Lemniscate of Gerono."""
    return run_case(LEMNISCATE_CASE.with_seed(random_seed), shapes.lemniscate, "lemniscate", out_dir)
