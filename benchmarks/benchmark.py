import random

from pyinstrument import Profiler
from vecmap import KeyRange, OrderedMap, float_total_order


def build_workload(n, seed=42):
    rng = random.Random(seed)
    return [rng.uniform(-1e6, 1e6) for _ in range(n)]


def run(keys, cmp=None):
    m = OrderedMap(cmp=cmp)
    for i, key in enumerate(keys):
        m.insert(key, i)
    hits = 0
    for key in keys[::7]:
        if m.get(key) is not None:
            hits += 1
    total = 0
    for lo in range(-1_000_000, 1_000_000, 50_000):
        total += sum(1 for _ in m.range(KeyRange.half_open(float(lo), lo + 25_000.0)))
    m.retain(lambda k, ref: k > 0)
    return hits, total, len(m)


def benchmark_large():
    keys = build_workload(50_000)
    print(f"Loaded {len(keys)} keys")

    profiler = Profiler()
    profiler.start()

    N = 3
    print(f"Starting computation ({N} iterations per ordering)...")
    for _ in range(N):
        run(keys)
        run(keys, cmp=float_total_order)
    print("Computation finished.")

    profiler.stop()
    print(profiler.output_text(unicode=True, color=False))


if __name__ == "__main__":
    benchmark_large()
