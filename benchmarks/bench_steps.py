"""
Microbenchmark: time per step vs number of particles.
Run:
  python benchmarks/bench_steps.py
"""
import time
from molsim.io import synthesize_records
from molsim.profiler import Profiler
from molsim.recorder import NullRecorder
from molsim.universe import Universe

def run(n: int, steps: int = 50, numerical: bool = False):
    prof = Profiler()
    universe = Universe.from_records(
        synthesize_records(n, element="Ar"),
        c_time=1e-15,
        numerical=numerical,
    )
    universe.profiler = prof
    recorder = NullRecorder()

    # warmup
    for _ in range(5):
        universe.step()

    t0 = time.perf_counter()
    universe.simulate(universe.time + steps * universe.dt, recorder)
    t1 = time.perf_counter()

    per_step = (t1 - t0) / max(1, universe.iterations - 5)
    return per_step, prof.stats.summary()

if __name__ == "__main__":
    for numerical in (False, True):
        print("numerical LJ" if numerical else "analytical LJ")
        for n in [8, 27, 64, 125]:
            per_step, summary = run(n, numerical=numerical)
            print(f"N={n:4d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
            for k in ["forces", "acceleration", "velocity", "position"]:
                if k in summary:
                    print(" ", k, summary[k])
            print()
