import math
from .options import Backend
from .validate import check_matrix, check_options
from .workgroup import check_capacity

def resolve_options(opts):
    from .backend import resolve
    return resolve(check_options(opts))

def _check_workers(opts):
    if opts.backend == Backend.Cuda:
        from .runtime import max_threads_per_block
        limit = max_threads_per_block()
        if opts.workers > limit:
            raise RuntimeError(f"Cannot launch a work-group of {opts.workers} workers "
                               f"(the device supports at most {limit} threads per block)")

def capacity(opts=None):
    """
    Returns the number of bytes of fast memory available to one work-group.
    """
    opts = resolve_options(opts)
    if opts.shared_mem_bytes is not None:
        return opts.shared_mem_bytes
    elif opts.backend == Backend.Cuda:
        from .runtime import max_shared_mem_per_block
        return max_shared_mem_per_block()
    else:
        from .state import get_shared_mem_bytes
        return get_shared_mem_bytes()

def max_staged_size(dtype, opts=None):
    """
    Returns the largest n such that an n x n matrix of the given element type
    fits in the fast memory of a work-group.
    """
    return math.isqrt(capacity(opts) // dtype.size())

def check_staged_capacity(m, opts=None):
    check_capacity(m.size(), capacity(opts))

def _launch(kind, m, opts):
    if opts.debug_print:
        print(f"Running {kind} engine on {opts.backend}: n={m.n}, "
              f"workers={opts.workers}, repeat={opts.repeat}")
    if opts.backend == Backend.Cuda:
        from .runtime import launch
        launch(kind, m, opts.workers, opts.repeat, opts.cache)
    else:
        from .kernels import direct_kernel, staged_kernel
        from .workgroup import launch
        kernel = direct_kernel if kind == "direct" else staged_kernel
        launch(kernel, opts.workers, capacity(opts), m.buf, m.n, opts.repeat)

def direct(m, opts=None):
    """
    Runs Floyd-Warshall with one work-group operating directly on the shared
    distance matrix, which is updated in place.
    """
    m = check_matrix(m)
    opts = resolve_options(opts)
    _check_workers(opts)
    _launch("direct", m, opts)

def staged(m, opts=None):
    """
    Runs Floyd-Warshall with one work-group that stages the distance matrix
    into its fast memory, computes there and writes the result back. Raises a
    CapacityError before launching if the matrix does not fit.
    """
    m = check_matrix(m)
    opts = resolve_options(opts)
    check_staged_capacity(m, opts)
    _check_workers(opts)
    _launch("staged", m, opts)
