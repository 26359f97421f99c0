import time

import torch

from kohonen_tracer import annealing_schedule, train
from kohonen_tracer.config import CIRCLE_CASE
from kohonen_tracer.shapes import circle, random_weights

# --- Benchmarking Parameters ---
WARMUP_ITER = 1
BENCH_ITER = 3
ALPHA_MIN = CIRCLE_CASE.alpha_min


def count_passes(alpha_min: float) -> int:
    return sum(1 for _ in annealing_schedule(1, alpha_min))


def benchmark_train(num_samples: int, num_nodes: int, num_features: int = 2):
    """
    Times a full training run and reports the effective FLOP rate.
    """
    print(f"\n--- Benchmarking {num_nodes} nodes x {num_samples} samples ---")
    generator = torch.Generator().manual_seed(0)
    data = circle(num_samples, generator=generator)
    initial_weights = random_weights(num_nodes, num_features, generator=generator)

    for _ in range(WARMUP_ITER):
        train(data, initial_weights.clone(), ALPHA_MIN)

    start = time.perf_counter()
    for _ in range(BENCH_ITER):
        train(data, initial_weights.clone(), ALPHA_MIN)
    avg_latency_s = (time.perf_counter() - start) / BENCH_ITER

    # Distance search dominates: 1 sub, 1 mul, 1 add per feature per node per sample.
    flops = 3 * count_passes(ALPHA_MIN) * num_samples * num_nodes * num_features
    gflops = flops / avg_latency_s / 1e9

    print(f"  > Average Training Latency: {avg_latency_s * 1000:.1f} ms")
    print(f"  > Effective GFLOPS: {gflops:.4f}")
    return avg_latency_s, gflops


def main():
    """Main execution function."""
    print("--- Setting up Chain SOM Benchmark ---")
    print(f"Threads: {torch.get_num_threads()}")
    print(f"Passes per run: {count_passes(ALPHA_MIN)} (alpha_min={ALPHA_MIN})")

    for num_nodes in (20, 50, 200):
        benchmark_train(CIRCLE_CASE.num_samples, num_nodes)


if __name__ == "__main__":
    main()
