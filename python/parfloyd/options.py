import enum

class Backend(enum.Enum):
    Auto = "auto"
    Threads = "threads"
    Cuda = "cuda"

    def __str__(self):
        return f"Backend.{self.name}"

class Options:
    """
    Options controlling how an engine runs. An options object is passed to the
    engines via the 'opts' keyword argument.

    backend
        The backend to run on. 'Backend.Auto' resolves to an enabled backend
        when the engine is invoked.
    workers
        The number of workers in the single work-group (W).
    repeat
        Number of times the full pass over all intermediate vertices is
        repeated. Extra passes never change the result, only the runtime.
    shared_mem_bytes
        Fast memory available to one work-group. When None, the configured
        default is used for the CPU backend and the device limit for CUDA.
    cache
        Keep compiled runtime libraries between processes.
    debug_print
        Print what the engines do to standard output.
    verbose_backend_resolution
        Report why backends are disabled when resolving 'Backend.Auto'.
    """
    def __init__(self, backend=None, workers=1, repeat=1, shared_mem_bytes=None,
                 cache=True, debug_print=False, verbose_backend_resolution=False):
        if backend is None:
            from .state import get_backend_name
            backend = Backend(get_backend_name())
        self.backend = backend
        self.workers = workers
        self.repeat = repeat
        self.shared_mem_bytes = shared_mem_bytes
        self.cache = cache
        self.debug_print = debug_print
        self.verbose_backend_resolution = verbose_backend_resolution

    def __repr__(self):
        return (f"Options(backend={self.backend}, workers={self.workers}, "
                f"repeat={self.repeat}, shared_mem_bytes={self.shared_mem_bytes})")

def par(workers, **kwargs):
    """
    Constructs options running the parallel engines with one work-group of
    'workers' workers.
    """
    return Options(workers=workers, **kwargs)

def seq(**kwargs):
    """
    Constructs options running a parallel engine with a single worker.
    """
    return Options(workers=1, **kwargs)
