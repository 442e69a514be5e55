import sys
import gc
import time
import pprint
import numpy as np
from tabinterp.interp import create_interpolator


def benchmark_evaluate(evaluator, queries):
    """Benchmark scalar evaluation of a configured evaluator."""
    gc.collect()  # Clear garbage collector to avoid interference
    start_time = time.time_ns()
    for q in queries:
        evaluator.evaluate(q)
    return time.time_ns() - start_time


def benchmark_predict(evaluator, queries):
    """Benchmark vectorized evaluation of a configured evaluator."""
    gc.collect()
    start_time = time.time_ns()
    y_new = evaluator.predict(queries)
    elapsed_time = time.time_ns() - start_time
    del y_new  # Free memory
    return elapsed_time


if __name__ == "__main__":
    n = int(1e4)
    rng = np.random.default_rng(42)
    x = np.cumsum(0.5 + rng.random(n))
    y = np.sin(0.01 * x)
    sweep = np.linspace(x[0], x[-1], n * 2)
    query_sets = {"sweep": sweep.tolist(), "random": rng.permutation(sweep).tolist()}
    methods = ["linear", "spline"]

    print("Python Information:\n", sys.version)
    np.show_config()

    num_replications = 30
    run_times = dict()
    for method in methods:
        evaluator = create_interpolator(method).configure_from_arrays(x, y)
        for name, queries in query_sets.items():
            run_times[(method, name)] = [benchmark_evaluate(evaluator, queries) for _ in range(num_replications)]
        run_times[(method, "predict")] = [benchmark_predict(evaluator, sweep) for _ in range(num_replications)]

    for (method, name), run_time in run_times.items():
        # remove fastest and slowest
        run_times_remove = np.sort(run_time)[1:-1]
        print(
            f"Average time (remove fastest and slowest) for {num_replications} replications with table size {n} on " +
            f"{method} evaluator with {name} queries: {np.mean(run_times_remove) / 1e9:.6f} seconds"
        )
        print(f"Standard deviation of run times: {np.std(run_times_remove) / 1e9:.6f} seconds")

    for key, run_time in run_times.items():
        print(f"{key[0]} - {key[1]}, run_time:")
        pprint.pprint(np.array(run_time) / 1e9)
