import os
import sys

from benchmark.comparator import AlgorithmComparator
from customers.generator import generate_customers, load_customers_csv
from dispatch.config import configure_logging, load_settings


def run_benchmark(filepath="customers_generated.csv", runs=None, output_file="benchmark_results.csv"):
    settings = load_settings()
    configure_logging(settings.log_level)
    runs = runs or settings.benchmark_runs

    print("=== SORT STRATEGY BENCHMARK ===")

    # 1. Load data (or generate it on the fly)
    if os.path.exists(filepath):
        customers = load_customers_csv(filepath)
        print(f"Loaded {len(customers)} customers from '{filepath}'.\n")
    else:
        customers = generate_customers(1000)
        print(f"'{filepath}' not found. Generated {len(customers)} customers instead.\n")

    if not customers:
        print("No customers to compare.")
        return None

    # 2. Run every strategy over the same snapshot
    report = AlgorithmComparator().compare_repeated(customers, runs)
    print(report.recommendation)

    if not report.all_correct:
        print("[FAILED] At least one strategy produced an out-of-order result.")

    # 3. Save results
    report.to_frame().to_csv(output_file, index=False)
    print(f"\nResults written to '{output_file}'.")
    return report


if __name__ == "__main__":
    path = sys.argv[1] if len(sys.argv) > 1 else "customers_generated.csv"
    rounds = int(sys.argv[2]) if len(sys.argv) > 2 else None
    run_benchmark(path, runs=rounds)
