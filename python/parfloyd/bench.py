import collections
import copy
import time
from . import matrix
from .engines import check_staged_capacity, direct, resolve_options, staged
from .options import Backend, Options
from .sequential import sequential
from .types import I32
from .verify import check_results

BenchResult = collections.namedtuple("BenchResult", ["name", "backend", "ms"])

def time_engine(fn, m, opts):
    """
    Runs the engine to completion on the given matrix and returns the elapsed
    wall-clock time in milliseconds.
    """
    if opts.backend == Backend.Cuda:
        from .runtime import sync
        sync()
    start = time.perf_counter()
    fn(m, opts)
    if opts.backend == Backend.Cuda:
        sync()
    end = time.perf_counter()
    return (end - start) * 1000.0

def run(n, workers, opts=None, seed=None, bound=100, dtype=I32):
    """
    Runs the three engines on copies of one random matrix, in the order
    sequential, direct and staged. Returns the timings and a list of
    mismatches between the results.

    The capacity of the staged engine is checked before any engine runs.
    """
    # The options of the caller are left untouched.
    opts = copy.copy(opts) if opts is not None else Options()
    opts.workers = workers
    opts = resolve_options(opts)
    m = matrix.random(n, bound, seed, dtype)
    check_staged_capacity(m, opts)

    seq_m, direct_m, staged_m = m.copy(), m.copy(), m.copy()
    engines = [
        ("sequential", lambda x, o: sequential(x, o.repeat), seq_m),
        ("direct", direct, direct_m),
        ("staged", staged, staged_m),
    ]
    timings = [BenchResult(name, opts.backend, time_engine(fn, x, opts)) for name, fn, x in engines]
    mismatches = check_results(seq_m, {"direct": direct_m, "staged": staged_m})
    return timings, mismatches
