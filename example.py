import logging

from kohonen_tracer.cases import run_circle_case, run_lemniscate_case


def print_case(name, result):
    print(f"\n{name}:")
    print(f"  Samples: {tuple(result.data.shape)}, Nodes: {result.trained_weights.shape[0]}")
    print(f"  Mean node to nearest sample distance: {result.distance_before:.4f} (initial) "
          f"-> {result.distance_after:.4f} (trained)")
    print(f"  Data:            {result.data_path}")
    print(f"  Initial weights: {result.initial_weights_path}")
    print(f"  Trained weights: {result.trained_weights_path}")


def run_tracer_example():
    """
    Fits a chain to a noisy circle and to a noisy lemniscate and writes
    the CSV dumps to the current directory.
    """
    print("--- Running Kohonen Tracer Example ---")

    # Circle: 50 nodes, 500 samples, train until alpha reaches 0.1
    print_case("Circle", run_circle_case(".", random_seed=42))

    # Lemniscate of Gerono: 20 nodes, 500 samples, train until alpha reaches 0.01
    print_case("Lemniscate", run_lemniscate_case(".", random_seed=42))

    print("\nPlot with gnuplot:")
    print("  set datafile separator ','")
    print('  plot "circle.csv" title "data", "circle_w1.csv" title "w1", "circle_w2.csv" title "w2"')

    print("\n--- Kohonen Tracer Example Finished ---")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    run_tracer_example()
