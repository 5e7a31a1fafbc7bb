"""
Microbenchmark: time per tick vs number of particles.
The force pass is O(N²), so expect roughly 4x per doubling of N.
Run:
  python benchmarks/bench_steps.py
"""
import time
from charge_sim import Simulation
from charge_sim.profiler import Profiler

def run(n: int, steps: int = 200):
    prof = Profiler()
    sim = Simulation(width=1600, height=1200, seed=12345, profiler=prof)
    sim.initialize(n)

    # warmup
    for _ in range(10):
        sim.step(1/60)
    prof.reset()

    t0 = time.perf_counter()
    for _ in range(steps):
        sim.step(1/60)
    t1 = time.perf_counter()

    per_step = (t1 - t0) / steps
    return per_step, prof.stats.summary()

if __name__ == "__main__":
    for n in [10, 50, 100, 200, 400]:
        per_step, summary = run(n)
        print(f"N={n:4d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
        for k in ["forces", "integrate", "boundary", "statistics"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
